# map_route/search/hooks.py
from typing import Protocol


class SearchHooks(Protocol):
    def search_start(self, *, start, end, nodes, kind): ...
    def search_end(self, *, start, end, status, distance_m, edges_relaxed, wall_ms): ...
    def discover(self, *, node, previous, g, h, qsize): ...
    def error(self, *, reason: str, **kw): ...


class NoopHooks:
    def search_start(self, **_):
        pass

    def search_end(self, **_):
        pass

    def discover(self, **_):
        pass

    def error(self, **_):
        pass
