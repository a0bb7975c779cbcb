# map_route/io/snapshot.py
"""
Graph snapshots.

Two layouts are written and read:
  * "nodes":   [{"x": .., "y": .., "connections": [..]}, ...]
  * "network": {"nodes": [...same...], "edges": [[x1, y1, x2, y2], ...]}
The "edges" key is left out when the graph carries no flat edge list.
`decode_graph` accepts either and rebuilds the graph exactly.
"""

import json
import logging
import pickle
from typing import Literal

from map_route.domain.entities.geography import Graph, Node
from map_route.domain.errors import SnapshotError

log = logging.getLogger(__name__)

Layout = Literal["nodes", "network"]


def _encode_node(n: Node) -> dict:
    d = {"x": n.x, "y": n.y, "connections": list(n.connections)}
    if n.required:
        d["required"] = True
    return d


def encode_graph(G: Graph, layout: Layout = "network"):
    nodes = [_encode_node(n) for n in G.nodes]
    if layout == "nodes":
        return nodes
    if layout == "network":
        data = {"nodes": nodes}
        if G.edges is not None:
            data["edges"] = [list(e) for e in G.edges]
        return data
    raise ValueError(f"Unsupported snapshot layout {layout!r}")


def _decode_index(c) -> int:
    if isinstance(c, bool) or not isinstance(c, int):
        raise ValueError(f"connection {c!r} is not an integer index")
    return c


def _decode_node(raw, i: int) -> Node:
    try:
        return Node(
            x=float(raw["x"]),
            y=float(raw["y"]),
            connections=[_decode_index(c) for c in raw.get("connections", [])],
            required=bool(raw.get("required", False)),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise SnapshotError(f"node {i}: {exc}") from exc


def decode_graph(data) -> Graph:
    if isinstance(data, list):
        raw_nodes, edges = data, None
    elif isinstance(data, dict) and "nodes" in data:
        raw_nodes = data["nodes"]
        raw_edges = data.get("edges")
        try:
            edges = None if raw_edges is None else [[float(v) for v in e] for e in raw_edges]
        except (TypeError, ValueError) as exc:
            raise SnapshotError(f"edges: {exc}") from exc
    else:
        raise SnapshotError("snapshot must be a node list or a {nodes, edges} object")

    nodes = [_decode_node(raw, i) for i, raw in enumerate(raw_nodes)]
    n = len(nodes)
    for i, node in enumerate(nodes):
        for c in node.connections:
            if not 0 <= c < n:
                raise SnapshotError(f"node {i}: connection {c} out of range")
    return Graph(nodes, edges)


# -------------------- files ----------------------------


def save_graph(G: Graph, path: str, *, fmt: str = "json", layout: Layout = "network") -> None:
    data = encode_graph(G, layout)
    if fmt == "json":
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f)
    elif fmt == "pickle":
        with open(path, "wb") as f:
            pickle.dump(data, f)
    else:
        raise ValueError(f"Unsupported graph fmt {fmt!r}")
    log.info("snapshot_saved", extra={"extra": {"path": path, "fmt": fmt, "layout": layout, "nodes": len(G)}})


def read_graph(path: str, fmt: str = "json") -> Graph:
    if fmt == "json":
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    elif fmt == "pickle":
        with open(path, "rb") as f:
            data = pickle.load(f)
    else:
        raise ValueError(f"Unsupported graph fmt {fmt!r}")
    return decode_graph(data)
