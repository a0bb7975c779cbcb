# map_route/search/engine.py
"""
Best-first (A*) search over a `Graph`.

The default variant marks a node visited when it is first discovered, not when
it is popped, and stops as soon as the goal is discovered. A node can therefore
be settled through the first path that reached it even if a cheaper one exists.
`SearchEngine(reopen=True)` runs textbook A* instead: a node is re-queued
whenever a cheaper `g` reaches it, and the search ends when the goal is popped.
"""

import heapq
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from map_route.domain.entities.geography import Graph, RawSegment
from map_route.domain.errors import InvalidIndexError, NoPathFoundError
from map_route.domain.mechanics.mechanics_geodesy import spheroid_distance_m

from .hooks import NoopHooks, SearchHooks

Metric = Callable[[float, float, float, float], float]


class SearchStatus(Enum):
    FOUND = "found"
    NO_PATH_FOUND = "no_path_found"


@dataclass
class SearchResult:
    start: int
    end: int
    status: SearchStatus
    trace: list[RawSegment] = field(default_factory=list)  # discovery order
    path: list[RawSegment] = field(default_factory=list)  # goal -> start
    distance_m: float = 0.0
    edges_relaxed: int = 0
    nodes: list[int] = field(default_factory=list)  # start -> goal

    @property
    def ok(self) -> bool:
        return self.status is SearchStatus.FOUND

    def raise_for_status(self) -> "SearchResult":
        if not self.ok:
            raise NoPathFoundError(self.start, self.end)
        return self

    def to_dict(self) -> dict:
        return {
            "start": self.start,
            "end": self.end,
            "status": self.status.value,
            "distance_m": self.distance_m,
            "edges_relaxed": self.edges_relaxed,
            "nodes": self.nodes,
            "path": self.path,
            "trace": self.trace,
        }


class SearchEngine:
    def __init__(
        self,
        hooks: SearchHooks | None = None,
        *,
        metric: Metric = spheroid_distance_m,
        reopen: bool = False,
    ):
        self._hooks = hooks or NoopHooks()
        self._metric = metric
        self.reopen = reopen

    @property
    def metric(self) -> Metric:
        return self._metric

    @property
    def kind(self) -> str:
        return "optimal" if self.reopen else "discovery"

    def _dist(self, G: Graph, a: int, b: int) -> float:
        na, nb = G.nodes[a], G.nodes[b]
        return self._metric(na.x, na.y, nb.x, nb.y)

    def find_path(self, G: Graph, start: int, end: int) -> SearchResult:
        try:
            start, end = G.check_index(start), G.check_index(end)
        except InvalidIndexError as exc:
            self._hooks.error(reason="invalid_index", index=exc.index, nodes=exc.size)
            raise

        t0 = time.perf_counter()
        self._hooks.search_start(start=start, end=end, nodes=len(G), kind=self.kind)
        if start == end:
            res = SearchResult(start, end, SearchStatus.FOUND, nodes=[start])
        elif self.reopen:
            res = self._run_reopening(G, start, end)
        else:
            res = self._run_discovery(G, start, end)
        self._hooks.search_end(
            start=start,
            end=end,
            status=res.status.value,
            distance_m=res.distance_m,
            edges_relaxed=res.edges_relaxed,
            wall_ms=(time.perf_counter() - t0) * 1000,
        )
        return res

    # ------------------ variants ---------------------------

    def _run_discovery(self, G: Graph, start: int, end: int) -> SearchResult:
        previous: dict[int, int] = {}
        visited = {start}
        trace: list[RawSegment] = []
        q: list[tuple[float, int, int, float]] = []
        seq = 0
        heapq.heappush(q, (self._dist(G, start, end), seq, start, 0.0))

        while q:
            _, _, u, g = heapq.heappop(q)
            for v in G.nodes[u].connections:
                if v in visited:
                    continue
                visited.add(v)
                previous[v] = u
                trace.append(G.segment(v, u))
                gv = g + self._dist(G, u, v)
                hv = self._dist(G, v, end)
                self._hooks.discover(node=v, previous=u, g=gv, h=hv, qsize=len(q))
                if v == end:
                    return self._found(G, start, end, previous, trace, gv + hv)
                seq += 1
                heapq.heappush(q, (gv + hv, seq, v, gv))

        return SearchResult(start, end, SearchStatus.NO_PATH_FOUND)

    def _run_reopening(self, G: Graph, start: int, end: int) -> SearchResult:
        previous: dict[int, int] = {}
        best_g = {start: 0.0}
        trace: list[RawSegment] = []
        q: list[tuple[float, int, int, float]] = []
        seq = 0
        heapq.heappush(q, (self._dist(G, start, end), seq, start, 0.0))

        while q:
            _, _, u, g = heapq.heappop(q)
            if g > best_g[u]:
                continue  # stale entry
            if u == end:
                return self._found(G, start, end, previous, trace, g)
            for v in G.nodes[u].connections:
                gv = g + self._dist(G, u, v)
                if gv >= best_g.get(v, float("inf")):
                    continue
                best_g[v] = gv
                previous[v] = u
                trace.append(G.segment(v, u))
                hv = self._dist(G, v, end)
                self._hooks.discover(node=v, previous=u, g=gv, h=hv, qsize=len(q))
                seq += 1
                heapq.heappush(q, (gv + hv, seq, v, gv))

        return SearchResult(start, end, SearchStatus.NO_PATH_FOUND)

    @staticmethod
    def _found(G, start, end, previous, trace, distance_m) -> SearchResult:
        path: list[RawSegment] = []
        nodes = [end]
        cur = end
        while cur != start:
            prev = previous[cur]
            path.append(G.segment(cur, prev))
            nodes.append(prev)
            cur = prev
        nodes.reverse()
        return SearchResult(
            start,
            end,
            SearchStatus.FOUND,
            trace=trace,
            path=path,
            distance_m=distance_m,
            edges_relaxed=len(trace),
            nodes=nodes,
        )


def find_path(G: Graph, start: int, end: int, *, reopen: bool = False) -> SearchResult:
    return SearchEngine(reopen=reopen).find_path(G, start, end)
