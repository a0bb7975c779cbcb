from map_route.domain.entities.geography import Graph, Path, Point, Segment
from map_route.search.engine import SearchEngine, SearchResult


class NetworkRouter:
    """Snap free points to the nearest graph nodes and route between them."""

    def __init__(self, graph: Graph, engine: SearchEngine | None = None):
        self.G = graph
        self.engine = engine or SearchEngine()

    def nearest_node(self, p: Point) -> int:
        return self.G.nearest_node(p.x, p.y)

    def find_path(self, start: int, end: int) -> SearchResult:
        return self.engine.find_path(self.G, start, end)

    def search(self, a: Point, b: Point) -> SearchResult:
        return self.find_path(self.nearest_node(a), self.nearest_node(b))

    def route(self, a: Point, b: Point) -> Path:
        res = self.search(a, b).raise_for_status()
        return self.path_of(res)

    def path_of(self, res: SearchResult) -> Path:
        """Travel-order Path for a successful search result."""
        segs, L = [], 0.0
        for u, v in zip(res.nodes, res.nodes[1:]):
            pu, pv = self.G.node_point(u), self.G.node_point(v)
            d = self.engine.metric(pu.x, pu.y, pv.x, pv.y)
            L += d
            segs.append(Segment(pu, pv, d, edge_id=(u, v)))
        return Path(segs, L)

    def distance_m(self, a: Point, b: Point) -> float:
        return self.route(a, b).total_length_m
