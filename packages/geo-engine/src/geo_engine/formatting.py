"""Human-readable rendering of distances and durations.

Both formatters accept ``None``, NaN or infinity and return ``PLACEHOLDER``
instead of raising, so callers can render missing values without guarding.
"""

from __future__ import annotations

import math

PLACEHOLDER = "-"


def _is_missing(value: float | None) -> bool:
    return value is None or not math.isfinite(value)


def format_distance(meters: float | None) -> str:
    if _is_missing(meters):
        return PLACEHOLDER
    rounded = round(meters)
    if rounded < 1000:
        return f"{rounded:,} m"
    km = meters / 1000
    if km >= 10:
        return f"{km:,.0f} km"
    return f"{km:.1f} km"


def format_duration(seconds: float | None) -> str:
    if _is_missing(seconds) or not seconds:
        return PLACEHOLDER
    minutes = round(seconds / 60)
    if minutes < 60:
        return f"{minutes}分"
    hours, rest_minutes = divmod(minutes, 60)
    return f"{hours}時間{rest_minutes}分"
