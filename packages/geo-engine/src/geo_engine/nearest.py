from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

from geo_engine.distance import haversine_distance_meters
from geo_engine.models import GeoPoint, Locatable

T = TypeVar("T", bound=Locatable)


@dataclass(frozen=True)
class NearestResult(Generic[T]):
    record: T
    distance_meters: int


def find_nearest(records: Iterable[T], point: GeoPoint) -> NearestResult[T] | None:
    best: NearestResult[T] | None = None
    for record in records:
        distance_meters = haversine_distance_meters(point, record.location)
        # strict comparison keeps the first record on ties
        if best is None or distance_meters < best.distance_meters:
            best = NearestResult(record=record, distance_meters=distance_meters)
    return best


def rank_by_distance(
    records: Iterable[T],
    point: GeoPoint,
    tie_breaker: Callable[[T], str] | None = None,
    limit: int | None = None,
) -> list[NearestResult[T]]:
    if limit is not None and limit <= 0:
        raise ValueError("limit must be > 0")
    ranked = [
        NearestResult(record=record, distance_meters=haversine_distance_meters(point, record.location))
        for record in records
    ]
    if tie_breaker is None:
        ranked.sort(key=lambda item: item.distance_meters)
    else:
        ranked.sort(key=lambda item: (item.distance_meters, tie_breaker(item.record)))
    return ranked if limit is None else ranked[:limit]
