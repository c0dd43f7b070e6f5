"""
Tests for great-circle distance and the radius search.
"""

import math
import uuid
from types import SimpleNamespace

import pytest

from services.store_locator import EARTH_RADIUS_KM, StoreWithDistance, find_nearby, haversine_km


def make_store(name, latitude, longitude, store_id=None):
    return SimpleNamespace(id=store_id or uuid.uuid4(), name=name, latitude=latitude, longitude=longitude)


ONE_DEGREE_KM = EARTH_RADIUS_KM * math.pi / 180


def test_haversine_identity():
    assert haversine_km(52.52, 13.405, 52.52, 13.405) == 0.0
    assert haversine_km(-33.86, 151.2, -33.86, 151.2) == 0.0


@pytest.mark.parametrize(
    "a, b",
    [
        ((0.0, 0.0), (0.0, 1.0)),
        ((52.52, 13.405), (48.8566, 2.3522)),
        ((-33.86, 151.2), (40.71, -74.0)),
        ((89.9, 0.0), (-89.9, 180.0)),
    ],
)
def test_haversine_symmetry(a, b):
    assert haversine_km(*a, *b) == haversine_km(*b, *a)


def test_haversine_known_distances():
    assert haversine_km(0, 0, 0, 1) == pytest.approx(ONE_DEGREE_KM)
    assert haversine_km(0, 0, 0, 90) == pytest.approx(EARTH_RADIUS_KM * math.pi / 2)
    # Antipodal points stay finite
    assert haversine_km(0, 0, 0, 180) == pytest.approx(EARTH_RADIUS_KM * math.pi)
    # Berlin to Paris is roughly 878 km
    assert haversine_km(52.52, 13.405, 48.8566, 2.3522) == pytest.approx(878, abs=5)


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_haversine_rejects_non_finite(bad):
    with pytest.raises(ValueError):
        haversine_km(bad, 0, 0, 0)
    with pytest.raises(ValueError):
        haversine_km(0, 0, 0, bad)


def test_find_nearby_scenario():
    """
    Stores at (0,0), (0,1) and (0,90) around the origin with a 200 km
    radius: (0,0) at distance 0, then (0,1) at about 111.19 km; (0,90) is
    about 10,007 km away and excluded.
    """
    origin = make_store("Origin", 0.0, 0.0)
    east = make_store("East", 0.0, 1.0)
    far = make_store("Far", 0.0, 90.0)

    results = find_nearby([far, east, origin], 0.0, 0.0, 200)

    assert [r.store for r in results] == [origin, east]
    assert results[0].distance == 0.0
    assert results[1].distance == pytest.approx(111.19, abs=0.01)
    assert isinstance(results[0], StoreWithDistance)
    assert results[1].name == "East"
    assert results[1].id == east.id


def test_find_nearby_radius_is_inclusive():
    east = make_store("East", 0.0, 1.0)
    exact = haversine_km(0.0, 0.0, 0.0, 1.0)

    assert [r.store for r in find_nearby([east], 0.0, 0.0, exact)] == [east]
    assert find_nearby([east], 0.0, 0.0, exact - 1e-6) == []


def test_find_nearby_skips_stores_without_coordinates():
    stores = [make_store("No lat", None, 1.0), make_store("No lon", 1.0, None)]

    assert find_nearby(stores, 0.0, 0.0, 20000) == []


def test_find_nearby_breaks_ties_by_store_id():
    ids = sorted((uuid.uuid4() for _ in range(3)), key=str)
    north = make_store("North", 1.0, 0.0, ids[2])
    south = make_store("South", -1.0, 0.0, ids[0])
    east = make_store("East", 0.0, 1.0, ids[1])

    forward = find_nearby([north, south, east], 0.0, 0.0, 500)
    backward = find_nearby([east, south, north], 0.0, 0.0, 500)

    assert [r.store.id for r in forward] == ids
    assert [r.store.id for r in backward] == ids


def test_find_nearby_rejects_non_finite_origin():
    with pytest.raises(ValueError):
        find_nearby([], math.nan, 0.0, 10)
    with pytest.raises(ValueError):
        find_nearby([], 0.0, 0.0, math.inf)
