from __future__ import annotations

import math
import re
from typing import Any

NULL_SENTINELS = frozenset({"―", "ｰ", "-", "ー", "－", "無し", "なし"})

_NUMBER_NOISE_RE = re.compile(r"[^0-9.+-]")
_TIME_RE = re.compile(r"(\d{1,2})(?::|：)?(\d{2})?", re.ASCII)


def clean_value(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    if not trimmed or trimmed in NULL_SENTINELS:
        return None
    return trimmed


def parse_number(value: str | None) -> float | None:
    if not value:
        return None
    sanitized = _NUMBER_NOISE_RE.sub("", value)
    if not sanitized:
        return None
    try:
        parsed = float(sanitized)
    except ValueError:
        return None
    if not math.isfinite(parsed):
        return None
    return parsed


def normalize_time(value: str | None) -> str | None:
    if not value:
        return None
    match = _TIME_RE.search(value)
    if match is None:
        return None
    hour, minute = match.groups()
    return f"{hour.zfill(2)}:{minute or '00'}"
