from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from shelter_pipeline.core.cleaning import clean_value, parse_number
from shelter_pipeline.core.headers import normalize_header
from shelter_pipeline.core.models import CoolingShelter
from shelter_pipeline.core.resolver import resolve_daily_windows, resolve_field

DEFAULT_MUNICIPALITY_NAME = "埼玉県"


def normalize_row(raw_row: Mapping[Any, Any]) -> dict[str, str | None]:
    return {
        normalize_header(key): clean_value(value)
        for key, value in raw_row.items()
        if isinstance(key, str)
    }


def build_shelter(
    raw_row: Mapping[Any, Any],
    default_municipality_name: str = DEFAULT_MUNICIPALITY_NAME,
) -> CoolingShelter | None:
    row = normalize_row(raw_row)
    if not row:
        return None

    shelter_id = resolve_field(row, "shelter_id")
    name = resolve_field(row, "name")
    latitude = parse_number(resolve_field(row, "latitude"))
    longitude = parse_number(resolve_field(row, "longitude"))
    if not shelter_id or not name or latitude is None or longitude is None:
        return None

    capacity = parse_number(resolve_field(row, "capacity"))
    if capacity is not None and capacity < 0:
        capacity = None

    return CoolingShelter(
        shelter_id=shelter_id,
        municipality_code=resolve_field(row, "municipality_code"),
        municipality_name=resolve_field(row, "municipality_name") or default_municipality_name,
        name=name,
        address=resolve_field(row, "address") or "",
        latitude=latitude,
        longitude=longitude,
        openings=resolve_daily_windows(row),
        special_notes=resolve_field(row, "special_notes"),
        capacity=capacity,
        manager=resolve_field(row, "manager"),
        email=resolve_field(row, "email"),
        phone=resolve_field(row, "phone"),
        url=resolve_field(row, "url"),
        designation_date=resolve_field(row, "designation_date"),
        facility_type_category=resolve_field(row, "facility_type_category"),
        facility_ownership=resolve_field(row, "facility_ownership"),
    )


def assemble_shelters(
    rows: Iterable[Mapping[Any, Any]],
    default_municipality_name: str = DEFAULT_MUNICIPALITY_NAME,
) -> list[CoolingShelter]:
    """Build shelters in source row order, silently skipping rows without id, name or coordinates."""
    shelters: list[CoolingShelter] = []
    for raw_row in rows:
        shelter = build_shelter(raw_row, default_municipality_name=default_municipality_name)
        if shelter is not None:
            shelters.append(shelter)
    return shelters
