from __future__ import annotations

from enum import Enum


class TravelMode(str, Enum):
    WALK = "walk"
    DRIVE = "drive"


# meters per second; about 4.3 km/h on foot and 36 km/h by car
TRAVEL_SPEED_MPS: dict[TravelMode, float] = {
    TravelMode.WALK: 1.2,
    TravelMode.DRIVE: 10.0,
}


def estimate_duration_seconds(distance_meters: float, mode: TravelMode) -> float:
    if distance_meters < 0:
        raise ValueError("distance_meters must be >= 0")
    return distance_meters / TRAVEL_SPEED_MPS[TravelMode(mode)]
