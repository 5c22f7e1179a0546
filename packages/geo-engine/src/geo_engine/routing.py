from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

import httpx
from shared.cancellation import CancellationToken, LatestRequestGuard, QueryCancelledError

from geo_engine.distance import haversine_distance_meters
from geo_engine.models import GeoPoint
from geo_engine.travel import TravelMode, estimate_duration_seconds

logger = logging.getLogger(__name__)

DEFAULT_OSRM_BASE_URL = "https://router.project-osrm.org/route/v1"
DIRECTIONS_BASE_URL = "https://www.google.com/maps/dir/"

_OSRM_PROFILES: dict[TravelMode, str] = {
    TravelMode.WALK: "foot",
    TravelMode.DRIVE: "driving",
}
_DIRECTIONS_TRAVEL_MODES: dict[TravelMode, str] = {
    TravelMode.WALK: "walking",
    TravelMode.DRIVE: "driving",
}


class RouteUnavailableError(Exception):
    """Raised when the routing service returned no usable route."""


@dataclass(frozen=True)
class Route:
    coordinates: tuple[GeoPoint, ...]
    distance_meters: float
    duration_seconds: float


@dataclass(frozen=True)
class RoutePlan:
    mode: TravelMode
    distance_meters: float
    duration_seconds: float
    coordinates: tuple[GeoPoint, ...]
    estimated: bool
    reason: str | None = None


class OsrmRouteClient:
    def __init__(
        self,
        base_url: str = DEFAULT_OSRM_BASE_URL,
        timeout_seconds: float = 10.0,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._client_factory = client_factory

    async def fetch_route(
        self,
        origin: GeoPoint,
        destination: GeoPoint,
        mode: TravelMode,
        token: CancellationToken | None = None,
    ) -> Route:
        mode = TravelMode(mode)
        url = (
            f"{self._base_url}/{_OSRM_PROFILES[mode]}/"
            f"{origin.lng},{origin.lat};{destination.lng},{destination.lat}"
        )
        params = {"overview": "full", "geometries": "geojson", "steps": "false"}
        factory = self._client_factory or (lambda: httpx.AsyncClient(timeout=self._timeout_seconds))
        try:
            async with factory() as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise RouteUnavailableError(f"routing request failed: {exc.__class__.__name__}") from exc

        if token is not None:
            token.raise_if_cancelled()
        if not response.is_success:
            raise RouteUnavailableError(f"routing service returned status={response.status_code}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise RouteUnavailableError("routing response is not json") from exc
        return self._to_route(payload)

    def _to_route(self, payload: Any) -> Route:
        if not isinstance(payload, dict):
            raise RouteUnavailableError("routing response is not a json object")
        routes = payload.get("routes")
        if not routes:
            raise RouteUnavailableError(str(payload.get("message") or "no route found"))
        first = routes[0]
        try:
            coordinates = tuple(
                GeoPoint(lat=float(lat), lng=float(lng)) for lng, lat in first["geometry"]["coordinates"]
            )
            return Route(
                coordinates=coordinates,
                distance_meters=float(first["distance"]),
                duration_seconds=float(first["duration"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise RouteUnavailableError("routing response has unexpected shape") from exc


async def plan_route(
    client: OsrmRouteClient,
    origin: GeoPoint,
    destination: GeoPoint,
    mode: TravelMode,
    token: CancellationToken | None = None,
) -> RoutePlan:
    """Ask the routing service for a route and fall back to a straight-line estimate.

    Cancellation is not a fallback case: ``QueryCancelledError`` propagates so
    the caller can drop the stale result.
    """
    mode = TravelMode(mode)
    try:
        route = await client.fetch_route(origin, destination, mode, token=token)
    except RouteUnavailableError as exc:
        logger.warning("route_unavailable", extra={"mode": mode.value, "reason": str(exc)})
        distance_meters = haversine_distance_meters(origin, destination)
        return RoutePlan(
            mode=mode,
            distance_meters=distance_meters,
            duration_seconds=estimate_duration_seconds(distance_meters, mode),
            coordinates=(origin, destination),
            estimated=True,
            reason=str(exc),
        )
    return RoutePlan(
        mode=mode,
        distance_meters=route.distance_meters,
        duration_seconds=route.duration_seconds,
        coordinates=route.coordinates,
        estimated=False,
    )


class LatestRouteQuery:
    def __init__(self, client: OsrmRouteClient) -> None:
        self._client = client
        self._guard = LatestRequestGuard()

    async def request(self, origin: GeoPoint, destination: GeoPoint, mode: TravelMode) -> RoutePlan | None:
        token = self._guard.issue()
        try:
            plan = await plan_route(self._client, origin, destination, mode, token=token)
        except QueryCancelledError:
            return None
        if token.cancelled:
            return None
        return plan

    def cancel(self) -> None:
        self._guard.cancel_all()


def build_directions_url(destination: GeoPoint, mode: TravelMode) -> str:
    query = urlencode(
        {
            "api": "1",
            "destination": f"{destination.lat},{destination.lng}",
            "travelmode": _DIRECTIONS_TRAVEL_MODES[TravelMode(mode)],
        }
    )
    return f"{DIRECTIONS_BASE_URL}?{query}"
