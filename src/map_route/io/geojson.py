# map_route/io/geojson.py
"""Read GeoJSON features into `RawFeature`s for the graph builder."""

import json
from collections.abc import Iterable, Iterator

from map_route.domain.entities.features import GeometryKind, RawFeature

FORWARD = {"yes", "true", "1"}
REVERSE = {"-1", "reverse"}


def oneway_direction(value) -> int:
    """1 for forward one-way, -1 for one-way against the drawing order, 0 otherwise."""
    if value is True:
        return 1
    if value is None or value is False:
        return 0
    s = str(value).strip().lower()
    if s in FORWARD:
        return 1
    if s in REVERSE:
        return -1
    return 0


def _reverse(kind, coords):
    if kind == GeometryKind.POLYGON.value:
        return [list(reversed(coords[0])), *coords[1:]] if coords else coords
    return list(reversed(coords))


def to_raw_feature(feature: dict, *, oneway_key: str = "oneway") -> RawFeature:
    geom = feature.get("geometry") or {}
    kind = geom.get("type") if isinstance(geom, dict) else None
    coords = geom.get("coordinates") if isinstance(geom, dict) else None
    props = feature.get("properties") or {}
    direction = oneway_direction(props.get(oneway_key)) if isinstance(props, dict) else 0
    if not isinstance(coords, list):
        coords = []
    if direction < 0:
        coords = _reverse(kind, coords)
    return RawFeature(kind, coords, oneway=direction != 0)


def read_features(collection: dict | list, *, oneway_key: str = "oneway") -> Iterator[RawFeature]:
    """
    Yield one RawFeature per entry of a FeatureCollection. A bare Feature or a
    plain list of features is accepted too.
    """
    if isinstance(collection, list):
        feats: Iterable = collection
    elif not isinstance(collection, dict):
        raise ValueError(f"expected a GeoJSON object or a list of features, got {type(collection).__name__}")
    elif collection.get("type") == "Feature":
        feats = [collection]
    else:
        feats = collection.get("features") or []
    for feat in feats:
        if isinstance(feat, dict):
            yield to_raw_feature(feat, oneway_key=oneway_key)


def load_features(path: str, *, oneway_key: str = "oneway") -> list[RawFeature]:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return list(read_features(data, oneway_key=oneway_key))
