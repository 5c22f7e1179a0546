from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float


class Locatable(Protocol):
    @property
    def location(self) -> GeoPoint: ...
