"""
Great-circle distance and radius search over stores.
"""

import math
from dataclasses import dataclass
from typing import Any, Iterable, List

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class StoreWithDistance:
    """A store paired with its distance in kilometers from the search origin"""

    store: Any
    distance: float

    @property
    def id(self):
        return self.store.id

    @property
    def name(self) -> str:
        return self.store.name


def _check_coordinate(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number, got {value!r}")
    return value


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance in kilometers between two points given in degrees.

    Exactly 0.0 for identical points and symmetric in its two points.
    """
    lat1 = _check_coordinate("lat1", lat1)
    lon1 = _check_coordinate("lon1", lon1)
    lat2 = _check_coordinate("lat2", lat2)
    lon2 = _check_coordinate("lon2", lon2)

    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push `a` slightly past 1 near antipodal points
    a = min(1.0, max(0.0, a))
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def find_nearby(stores: Iterable[Any], latitude: float, longitude: float, radius_km: float) -> List[StoreWithDistance]:
    """Stores within ``radius_km`` (inclusive) of the origin, nearest first.

    Stores missing either coordinate are skipped. Equal distances are
    ordered by store id so the result does not depend on row order.
    """
    latitude = _check_coordinate("latitude", latitude)
    longitude = _check_coordinate("longitude", longitude)
    radius_km = _check_coordinate("radius_km", radius_km)

    results = []
    for store in stores:
        if store.latitude is None or store.longitude is None:
            continue
        distance = haversine_km(latitude, longitude, store.latitude, store.longitude)
        if distance <= radius_km:
            results.append(StoreWithDistance(store=store, distance=distance))

    results.sort(key=lambda hit: (hit.distance, str(hit.store.id)))
    return results
