# map_route/domain/mechanics/mechanics_graph_builder.py
"""
Turn raw polylines into an indexed graph.

Vertices merge only when their coordinates are exactly equal, so features join
where the source data shares a vertex verbatim and nowhere else.
"""

import logging
import math
from collections.abc import Iterable
from numbers import Real

from map_route.domain.entities.features import GeometryKind, RawFeature
from map_route.domain.entities.geography import Graph

log = logging.getLogger(__name__)


# ---------------- Vertex lookups -----------------------------


class HashNodeLookup:
    def __init__(self):
        self._index: dict[tuple[float, float], int] = {}

    def find(self, graph: Graph, x: float, y: float) -> int | None:
        return self._index.get((x, y))

    def add(self, x: float, y: float, index: int) -> None:
        self._index[(x, y)] = index


class LinearNodeLookup:
    """Scan every node; quadratic overall, kept as the reference behaviour."""

    def find(self, graph: Graph, x: float, y: float) -> int | None:
        for i, n in enumerate(graph.nodes):
            if n.x == x and n.y == y:
                return i
        return None

    def add(self, x: float, y: float, index: int) -> None:
        pass


# ---------------- Builder ------------------------------------


def _ring(feature: RawFeature) -> list | None:
    """Coordinate sequence the builder walks, or None when the feature is unusable."""
    coords = feature.coordinates
    if feature.kind == GeometryKind.LINESTRING.value:
        pass
    elif feature.kind == GeometryKind.POLYGON.value:
        if not isinstance(coords, (list, tuple)) or not coords:
            return None
        coords = coords[0]
    else:
        return None

    if not isinstance(coords, (list, tuple)) or not coords:
        return None
    out = []
    for c in coords:
        if not isinstance(c, (list, tuple)) or len(c) < 2:
            return None
        x, y = c[0], c[1]
        if isinstance(x, bool) or isinstance(y, bool):
            return None
        if not (isinstance(x, Real) and isinstance(y, Real)):
            return None
        if not (math.isfinite(x) and math.isfinite(y)):
            return None
        out.append((float(x), float(y)))
    return out


class GraphBuilder:
    def __init__(self, *, lookup: HashNodeLookup | LinearNodeLookup | None = None, keep_edges: bool = True):
        self.graph = Graph(edges=[] if keep_edges else None)
        self.lookup = lookup or HashNodeLookup()
        self.added = 0
        self.skipped = 0

    def add(self, feature: RawFeature) -> bool:
        """Merge one feature into the graph. Unusable features are skipped and reported as False."""
        coords = _ring(feature)
        if coords is None:
            self.skipped += 1
            log.debug("skip_feature", extra={"extra": {"kind": feature.kind}})
            return False

        G, edges = self.graph, self.graph.edges
        prev: int | None = None
        prev_xy = None
        own_start: int | None = None  # first node, when this feature created it
        for x, y in coords:
            idx = self.lookup.find(G, x, y)
            if idx is None:
                idx = G.add_node(x, y)
                self.lookup.add(x, y, idx)
                if prev is None:
                    own_start = idx
            elif idx != prev and idx != own_start:
                # closing a ring on its own first vertex is not an intersection
                G.nodes[idx].required = True

            # consecutive repeats of a vertex never link it to itself
            if prev is not None and prev != idx:
                G.connect(prev, idx)
                if not feature.oneway:
                    G.connect(idx, prev)
            if edges is not None and prev_xy is not None and prev_xy != (x, y):
                edges.append([prev_xy[0], prev_xy[1], x, y])

            prev, prev_xy = idx, (x, y)

        self.added += 1
        return True

    def build(self, features: Iterable[RawFeature]) -> Graph:
        for f in features:
            self.add(f)
        log.info(
            "graph_built",
            extra={
                "extra": {
                    "features": self.added,
                    "skipped": self.skipped,
                    "nodes": len(self.graph),
                    "edges": self.graph.edge_count,
                }
            },
        )
        return self.graph


def build_graph(features: Iterable[RawFeature], *, lookup=None, keep_edges: bool = True) -> Graph:
    return GraphBuilder(lookup=lookup, keep_edges=keep_edges).build(features)
