# map_route/domain/errors.py


class RoutingError(Exception):
    """Base class for graph and search failures."""


class InvalidIndexError(RoutingError, IndexError):
    def __init__(self, index, size: int):
        super().__init__(f"node index {index!r} out of range for graph of {size} nodes")
        self.index, self.size = index, size


class NoPathFoundError(RoutingError):
    def __init__(self, start: int, end: int):
        super().__init__(f"no path from node {start} to node {end}")
        self.start, self.end = start, end


class SnapshotError(RoutingError, ValueError):
    pass
