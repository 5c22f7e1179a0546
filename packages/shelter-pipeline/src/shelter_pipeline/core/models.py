from __future__ import annotations

from dataclasses import dataclass

from geo_engine.models import GeoPoint


@dataclass(frozen=True)
class DailyWindow:
    day_label: str
    open_time: str | None = None
    close_time: str | None = None

    def describe(self) -> str | None:
        if self.open_time is None and self.close_time is None:
            return None
        return f"{self.open_time or ''}-{self.close_time or ''}"


@dataclass(frozen=True)
class CoolingShelter:
    shelter_id: str
    municipality_name: str
    name: str
    address: str
    latitude: float
    longitude: float
    openings: tuple[DailyWindow, ...]
    municipality_code: str | None = None
    special_notes: str | None = None
    capacity: float | None = None
    manager: str | None = None
    email: str | None = None
    phone: str | None = None
    url: str | None = None
    designation_date: str | None = None
    facility_type_category: str | None = None
    facility_ownership: str | None = None

    @property
    def location(self) -> GeoPoint:
        return GeoPoint(lat=self.latitude, lng=self.longitude)


@dataclass(frozen=True)
class SourceFailure:
    source: str
    reason: str


@dataclass(frozen=True)
class FetchResult:
    text: str
    source: str
    encoding: str
    lossy: bool = False


@dataclass(frozen=True)
class IngestionResult:
    shelters: tuple[CoolingShelter, ...]
    source: str
    dropped_rows: int = 0
