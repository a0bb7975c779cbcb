# map_route/domain/mechanics/mechanics_factory.py
import logging

from map_route.config.models import AppModel, BuilderModel, SearchUnion, SnapshotModel, SourceModel
from map_route.domain.entities.geography import Graph
from map_route.domain.mechanics.mechanics_graph_builder import build_graph
from map_route.domain.mechanics.mechanics_routers import NetworkRouter
from map_route.io.geojson import load_features
from map_route.io.snapshot import save_graph
from map_route.runtime.registries import make_engine, make_lookup
from map_route.runtime.resources import load_graph_from_path

log = logging.getLogger(__name__)


def graph_from_source(src: SourceModel, builder: BuilderModel) -> Graph:
    feats = load_features(src.file, oneway_key=src.oneway_key)
    return build_graph(feats, lookup=make_lookup(builder), keep_edges=builder.keep_edges)


def resolve_graph(cfg: AppModel) -> Graph:
    """
    Snapshot first, source second:
      - an existing snapshot file is loaded as is
      - otherwise the source is built, and written out when a snapshot is configured
    """
    snap: SnapshotModel | None = cfg.snapshot
    if snap is not None:
        g = load_graph_from_path(snap.file, snap.fmt)
        if g is not None:
            log.info("snapshot_loaded", extra={"extra": {"path": snap.file, "nodes": len(g)}})
            return g
        if snap.must_exist:
            raise FileNotFoundError(snap.file)
    if cfg.source is None:
        raise ValueError("No graph provided: configure a source or an existing snapshot")

    g = graph_from_source(cfg.source, cfg.builder)
    if snap is not None:
        save_graph(g, snap.file, fmt=snap.fmt, layout=snap.layout)
    return g


def build_router(cfg: SearchUnion, graph: Graph, *, hooks=None) -> NetworkRouter:
    return NetworkRouter(graph, make_engine(cfg, deps={"hooks": hooks}))
