# map_route/domain/entities/geography.py
from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np

from map_route.domain.errors import InvalidIndexError

# [x1, y1, x2, y2] in degrees
RawSegment = list[float]


# Core geometry types used by routers
@dataclass(frozen=True)
class Point:
    x: float  # longitude-like, degrees
    y: float  # latitude-like, degrees


@dataclass(frozen=True)
class Segment:
    start: Point
    end: Point
    length_m: float
    edge_id: tuple[int, int] | None = None  # (from, to) node indices; None => off-network

    def as_raw(self) -> RawSegment:
        return [self.start.x, self.start.y, self.end.x, self.end.y]


@dataclass
class Path:
    segments: list[Segment]
    total_length_m: float


@dataclass
class Node:
    x: float
    y: float
    connections: list[int] = field(default_factory=list)
    required: bool = False

    def connect(self, other: int) -> bool:
        if other in self.connections:
            return False
        self.connections.append(other)
        return True


class Graph:
    """
    Indexed road network. A node's position in `nodes` is its identity.

    `edges` optionally carries the flat list of raw coordinate segments the
    graph was built from, for drawing the whole network without touching the
    index structure.
    """

    def __init__(self, nodes: list[Node] | None = None, edges: list[RawSegment] | None = None):
        self.nodes: list[Node] = nodes if nodes is not None else []
        self.edges: list[RawSegment] | None = edges
        self._coords: np.ndarray | None = None

    def __len__(self) -> int:
        return len(self.nodes)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return self.nodes == other.nodes and self.edges == other.edges

    # ---------------- construction -----------------------

    def add_node(self, x: float, y: float) -> int:
        self.nodes.append(Node(x, y))
        self._coords = None
        return len(self.nodes) - 1

    def connect(self, a: int, b: int) -> bool:
        """Record a traversable a -> b relation. Returns False if already present."""
        return self.nodes[a].connect(b)

    # ---------------- queries -----------------------------

    def check_index(self, i) -> int:
        if isinstance(i, bool) or not isinstance(i, (int, np.integer)):
            raise InvalidIndexError(i, len(self.nodes))
        if not 0 <= i < len(self.nodes):
            raise InvalidIndexError(i, len(self.nodes))
        return int(i)

    def node_point(self, i: int) -> Point:
        n = self.nodes[i]
        return Point(n.x, n.y)

    def neighbors(self, i: int) -> list[int]:
        return self.nodes[i].connections

    def has_edge(self, a: int, b: int) -> bool:
        return b in self.nodes[a].connections

    def segment(self, a: int, b: int) -> RawSegment:
        na, nb = self.nodes[a], self.nodes[b]
        return [na.x, na.y, nb.x, nb.y]

    def iter_edges(self) -> Iterator[tuple[int, int]]:
        for i, n in enumerate(self.nodes):
            for j in n.connections:
                yield i, j

    @property
    def edge_count(self) -> int:
        return sum(len(n.connections) for n in self.nodes)

    def nearest_node(self, x: float, y: float) -> int:
        """Closest node by squared planar distance in coordinate space; first wins on ties."""
        if not self.nodes:
            raise InvalidIndexError(0, 0)
        if self._coords is None:
            self._coords = np.array([(n.x, n.y) for n in self.nodes], dtype=float)
        d2 = (self._coords[:, 0] - x) ** 2 + (self._coords[:, 1] - y) ** 2
        return int(np.argmin(d2))
