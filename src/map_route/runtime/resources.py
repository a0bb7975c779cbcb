# map_route/runtime/resources.py
import os
from functools import lru_cache

from map_route.domain.entities.geography import Graph
from map_route.io.snapshot import read_graph


@lru_cache(maxsize=8)
def _cached(file: str, fmt: str, mtime: float) -> Graph:
    return read_graph(file, fmt)


def load_graph_from_path(file: str, fmt: str = "json") -> Graph | None:
    """Load a snapshot, cached per (file, fmt, mtime). None if the file does not exist."""
    if not os.path.exists(file):
        return None
    return _cached(file, fmt, os.path.getmtime(file))
