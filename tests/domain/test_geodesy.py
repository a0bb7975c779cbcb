import math

import pytest

from map_route.domain.entities.geography import Point
from map_route.domain.mechanics.mechanics_geodesy import (
    METRICS,
    parametric_spheroid_distance_m,
    point_distance_m,
    spheroid_distance_m,
)


def test_same_point_is_zero():
    assert spheroid_distance_m(16.6, 47.2, 16.6, 47.2) == 0.0
    assert spheroid_distance_m(0.0, 0.0, 0.0, 0.0) == 0.0


@pytest.mark.parametrize(
    "a, b",
    [
        ((0.0, 0.0), (1.0, 0.0)),
        ((16.55, 47.125), (16.75, 47.325)),
        ((-73.98, 40.75), (2.35, 48.85)),
        ((10.0, -33.0), (10.0, 33.0)),
    ],
)
def test_symmetric(a, b):
    assert spheroid_distance_m(*a, *b) == spheroid_distance_m(*b, *a)


def test_one_degree_longitude_at_equator():
    d = spheroid_distance_m(0.0, 0.0, 1.0, 0.0)
    assert d == pytest.approx(111_320.0, rel=0.005)


def test_one_degree_latitude_is_shorter_than_longitude_at_equator():
    # polar flattening shortens meridian arcs near the equator
    assert spheroid_distance_m(0.0, 0.0, 0.0, 1.0) < spheroid_distance_m(0.0, 0.0, 1.0, 0.0)


def test_regional_distance_is_plausible():
    # ~0.2 degrees of latitude in western Hungary
    d = spheroid_distance_m(16.6, 47.2, 16.6, 47.4)
    assert 22_000 < d < 22_500


def test_point_helper_matches():
    a, b = Point(16.6, 47.2), Point(16.7, 47.25)
    assert point_distance_m(a, b) == spheroid_distance_m(a.x, a.y, b.x, b.y)


# ---------- reduced-latitude variants


def _lambert_tan_reduced(x1, y1, x2, y2):
    # written out term by term: (1 - f) * tan(lat) feeds P and Q directly
    f, r = 1 / 298.25, 6378137.0
    lat1, lat2 = math.radians(y1), math.radians(y2)
    lon1, lon2 = math.radians(x1), math.radians(x2)
    rl1, rl2 = (1 - f) * math.tan(lat1), (1 - f) * math.tan(lat2)
    P, Q = (rl1 + rl2) / 2, (rl2 - rl1) / 2
    angle = 2 * math.asin(
        math.sqrt(
            math.sin((lat1 - lat2) / 2) ** 2
            + math.cos(lat1) * math.cos(lat2) * math.sin((lon1 - lon2) / 2) ** 2
        )
    )
    X = (angle - math.sin(angle)) * (math.sin(P) ** 2 * math.cos(Q) ** 2) / math.cos(angle / 2) ** 2
    Y = (angle + math.sin(angle)) * (math.sin(Q) ** 2 * math.cos(P) ** 2) / math.sin(angle / 2) ** 2
    return r * (angle - (f / 2) * (X + Y))


def test_mid_latitude_north_south_leg_is_pinned():
    d = spheroid_distance_m(16.6, 47.2, 16.6, 47.4)
    assert d == pytest.approx(_lambert_tan_reduced(16.6, 47.2, 16.6, 47.4), rel=1e-12)
    assert d == pytest.approx(22_186.04, abs=0.01)


@pytest.mark.parametrize(
    "a, b",
    [
        ((16.55, 47.125), (16.75, 47.325)),
        ((16.6, 47.2), (16.7, 47.2)),
        ((0.0, 0.0), (0.0, 1.0)),
        ((-73.98, 40.75), (-73.5, 41.0)),
    ],
)
def test_default_metric_matches_tan_reduced_formula(a, b):
    assert spheroid_distance_m(*a, *b) == pytest.approx(_lambert_tan_reduced(*a, *b), rel=1e-12)


def test_parametric_variant_differs_on_north_south_legs():
    ref = spheroid_distance_m(16.6, 47.2, 16.6, 47.4)
    par = parametric_spheroid_distance_m(16.6, 47.2, 16.6, 47.4)
    assert par == pytest.approx(22_229.42, abs=0.01)
    assert abs(par - ref) / ref == pytest.approx(0.00196, abs=0.0001)
    assert parametric_spheroid_distance_m(0.0, 0.0, 1.0, 0.0) == spheroid_distance_m(0.0, 0.0, 1.0, 0.0)
    assert parametric_spheroid_distance_m(3.0, 3.0, 3.0, 3.0) == 0.0


def test_metrics_registry():
    assert METRICS["reference"] is spheroid_distance_m
    assert METRICS["parametric"] is parametric_spheroid_distance_m
