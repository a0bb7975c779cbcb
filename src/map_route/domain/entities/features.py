# map_route/domain/entities/features.py
from dataclasses import dataclass, field
from enum import Enum


class GeometryKind(Enum):
    LINESTRING = "LineString"
    POLYGON = "Polygon"


@dataclass(frozen=True)
class RawFeature:
    """
    One polyline handed over by a geometry source.
    `kind` is the raw geometry type string; anything other than LineString or
    Polygon is ignored by the builder. For polygons `coordinates` holds the
    rings, and only the first (outer) ring is used.
    """

    kind: str | None
    coordinates: list = field(default_factory=list)
    oneway: bool = False

    @classmethod
    def line(cls, coords, *, oneway: bool = False) -> "RawFeature":
        return cls(GeometryKind.LINESTRING.value, [tuple(c) for c in coords], oneway)

    @classmethod
    def polygon(cls, outer, *holes, oneway: bool = False) -> "RawFeature":
        rings = [[tuple(c) for c in ring] for ring in (outer, *holes)]
        return cls(GeometryKind.POLYGON.value, rings, oneway)
