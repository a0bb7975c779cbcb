# runtime/registries.py
from collections.abc import Callable
from typing import Any

from map_route.config.models import (
    BuilderModel,
    SearchDiscoveryModel,
    SearchOptimalModel,
    SearchUnion,
)
from map_route.domain.mechanics.mechanics_geodesy import METRICS
from map_route.domain.mechanics.mechanics_graph_builder import HashNodeLookup, LinearNodeLookup
from map_route.search.engine import SearchEngine

EngineFactory = Callable[[SearchUnion, dict], SearchEngine]
LookupFactory = Callable[[BuilderModel], Any]

_engine_registry: dict[str, EngineFactory] = {}
_lookup_registry: dict[str, LookupFactory] = {}


# ------------------- Search engines ---------------------------


def register_engine(kind: str):
    def deco(fn: EngineFactory):
        _engine_registry[kind] = fn
        return fn

    return deco


def make_engine(cfg: SearchUnion, *, deps: dict | None = None) -> SearchEngine:
    try:
        factory = _engine_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown search kind {cfg.kind!r}")
    return factory(cfg, deps or {})


@register_engine("discovery")
def _make_discovery(cfg: SearchDiscoveryModel, deps):
    return SearchEngine(deps.get("hooks"), metric=METRICS[cfg.metric])


@register_engine("optimal")
def _make_optimal(cfg: SearchOptimalModel, deps):
    return SearchEngine(deps.get("hooks"), metric=METRICS[cfg.metric], reopen=True)


# ------------------- Vertex lookups ---------------------------


def register_lookup(kind: str):
    def deco(fn: LookupFactory):
        _lookup_registry[kind] = fn
        return fn

    return deco


def make_lookup(cfg: BuilderModel):
    try:
        return _lookup_registry[cfg.lookup](cfg)
    except KeyError:
        raise ValueError(f"Unknown lookup {cfg.lookup!r}")


@register_lookup("hash")
def _make_hash(cfg: BuilderModel):
    return HashNodeLookup()


@register_lookup("linear")
def _make_linear(cfg: BuilderModel):
    return LinearNodeLookup()
