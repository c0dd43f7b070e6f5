"""Services package - Domain logic on top of the data access layer"""

from services.store_locator import EARTH_RADIUS_KM, StoreWithDistance, haversine_km, find_nearby
from services.category_classifier import find_best_match

# Note: services.access and services.transaction build on the repositories,
# which themselves import this package; import those two by module path.

__all__ = [
    "EARTH_RADIUS_KM",
    "StoreWithDistance",
    "haversine_km",
    "find_nearby",
    "find_best_match",
]
