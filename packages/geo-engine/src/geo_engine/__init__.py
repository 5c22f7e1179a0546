"""Geo engine core package."""

from geo_engine.distance import haversine_distance_meters
from geo_engine.formatting import PLACEHOLDER, format_distance, format_duration
from geo_engine.models import GeoPoint, Locatable
from geo_engine.nearest import NearestResult, find_nearest, rank_by_distance
from geo_engine.routing import (
    LatestRouteQuery,
    OsrmRouteClient,
    Route,
    RoutePlan,
    RouteUnavailableError,
    build_directions_url,
    plan_route,
)
from geo_engine.travel import TRAVEL_SPEED_MPS, TravelMode, estimate_duration_seconds

__all__ = [
    "GeoPoint",
    "Locatable",
    "haversine_distance_meters",
    "NearestResult",
    "find_nearest",
    "rank_by_distance",
    "TravelMode",
    "TRAVEL_SPEED_MPS",
    "estimate_duration_seconds",
    "PLACEHOLDER",
    "format_distance",
    "format_duration",
    "Route",
    "RoutePlan",
    "RouteUnavailableError",
    "OsrmRouteClient",
    "LatestRouteQuery",
    "plan_route",
    "build_directions_url",
]
