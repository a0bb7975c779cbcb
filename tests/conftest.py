# tests/conftest.py
import json

import pytest

from map_route.domain.entities.features import RawFeature
from map_route.domain.entities.geography import Graph
from map_route.domain.mechanics.mechanics_graph_builder import build_graph


def make_graph(coords, edges, *, oneway: bool = False) -> Graph:
    G = Graph()
    for x, y in coords:
        G.add_node(x, y)
    for a, b in edges:
        G.connect(a, b)
        if not oneway:
            G.connect(b, a)
    return G


@pytest.fixture
def ring_graph() -> Graph:
    # A(0,0) B(1,0) C(1,1) D(0,1), closed as A-B-C-D-A
    return build_graph([RawFeature.line([(0, 0), (1, 0), (1, 1), (0, 1), (0, 0)])])


@pytest.fixture
def detour_graph() -> Graph:
    # S-U-X-T is found first by discovery order; S-V-X-T is shorter
    coords = [(0.0, 0.0), (1.0, 1.0), (1.0, -3.0), (2.0, -4.0), (10.0, 0.0)]
    S, U, V, X, T = range(5)
    return make_graph(coords, [(S, U), (S, V), (U, X), (V, X), (X, T)])


@pytest.fixture
def geojson_file(tmp_path):
    data = {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"highway": "residential"},
                "geometry": {"type": "LineString", "coordinates": [[0, 0], [1, 0], [1, 1]]},
            },
            {
                "type": "Feature",
                "properties": {"highway": "residential"},
                "geometry": {"type": "LineString", "coordinates": [[1, 1], [0, 1], [0, 0]]},
            },
            {
                "type": "Feature",
                "properties": {"oneway": "yes"},
                "geometry": {"type": "LineString", "coordinates": [[5, 5], [6, 5]]},
            },
            {
                "type": "Feature",
                "properties": {"name": "bus stop"},
                "geometry": {"type": "Point", "coordinates": [0.5, 0.5]},
            },
        ],
    }
    p = tmp_path / "roads.geojson"
    p.write_text(json.dumps(data), encoding="utf-8")
    return p
