from __future__ import annotations

from pydantic import BaseModel


class DailyWindowItem(BaseModel):
    day_label: str
    open_time: str | None = None
    close_time: str | None = None
    label: str | None = None


class ShelterItem(BaseModel):
    shelter_id: str
    municipality_code: str | None = None
    municipality_name: str
    name: str
    address: str
    latitude: float
    longitude: float
    openings: list[DailyWindowItem]
    special_notes: str | None = None
    capacity: float | None = None
    manager: str | None = None
    email: str | None = None
    phone: str | None = None
    url: str | None = None
    designation_date: str | None = None
    facility_type_category: str | None = None
    facility_ownership: str | None = None


class ShelterDistanceItem(BaseModel):
    shelter: ShelterItem
    distance_meters: int
    distance_label: str
    walk_duration_label: str


class ShelterRankingResult(BaseModel):
    items: list[ShelterDistanceItem]


class RoutePlanResult(BaseModel):
    shelter_id: str
    mode: str
    estimated: bool
    distance_meters: float
    distance_label: str
    duration_seconds: float
    duration_label: str
    coordinates: list[tuple[float, float]]
    directions_url: str
    reason: str | None = None


class RefreshResultItem(BaseModel):
    status: str
    source: str | None = None
    count: int
    dropped_rows: int
