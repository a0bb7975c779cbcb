# map_route/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from map_route.config.models import AppModel
from map_route.domain.entities.geography import Graph
from map_route.domain.mechanics.mechanics_factory import build_router, resolve_graph
from map_route.domain.mechanics.mechanics_routers import NetworkRouter
from map_route.io.search_logging import SearchLogging
from map_route.search.hooks import NoopHooks


@dataclass
class App:
    config: AppModel
    graph: Graph
    router: NetworkRouter


def build(cfg: AppModel | Mapping, *, graph: Graph | None = None, use_logging: bool = True) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, AppModel) else AppModel.model_validate(cfg)

    # 1) Hooks
    hooks = (
        SearchLogging(
            run_id=model.run_id,
            level="DEBUG" if model.log.debug else model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
        )
        if use_logging
        else NoopHooks()
    )

    # 2) Graph: injected, snapshot, or built from source
    G = graph if graph is not None else resolve_graph(model)

    # 3) Router
    router = build_router(model.search, G, hooks=hooks)
    return App(model, G, router)
