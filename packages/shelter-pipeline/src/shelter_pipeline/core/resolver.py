"""Resolution of semantic shelter fields from normalized dataset rows.

Dataset revisions name the same column differently, so each field is looked up
through an ordered tuple of candidate labels: current names first, deprecated
ones after. Weekday opening hours are spread across columns whose headers only
share a weekday token and an opening/closing marker, so those are resolved by
``DayMatcher`` instead.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum

from shelter_pipeline.core.cleaning import normalize_time
from shelter_pipeline.core.headers import normalize_header
from shelter_pipeline.core.models import DailyWindow

Row = Mapping[str, str | None]


def _labels(*labels: str) -> tuple[str, ...]:
    return tuple(dict.fromkeys(normalize_header(label) for label in labels))


FIELD_CANDIDATES: dict[str, tuple[str, ...]] = {
    "shelter_id": _labels("ID", "ＩＤ", "Id"),
    "municipality_name": _labels("地方公共団体名", "市区町村名", "地方自治体名", "自治体名"),
    "name": _labels("指定暑熱避難施設の名称", "施設名", "名称", "避難施設名"),
    "address": _labels("所在地", "住所", "所在地住所", "所在地等"),
    "latitude": _labels("緯度", "Latitude"),
    "longitude": _labels("経度", "Longitude"),
    "municipality_code": _labels("市区町村コード", "自治体コード", "地方公共団体コード", "全国地方公共団体コード"),
    "special_notes": _labels(
        "指定暑熱避難施設を開放することができる日及び時間帯特記事項",
        "特記事項",
        "開放特記事項",
    ),
    "capacity": _labels(
        "指定暑熱避難施設の開放により受け入れることが可能であると見込まれる人数",
        "受入可能人数",
        "収容可能人数",
    ),
    "manager": _labels("施設管理者名", "管理者名", "管理者"),
    "email": _labels("連絡先メールアドレス", "メールアドレス", "連絡先Mail"),
    "phone": _labels("電話番号", "連絡先電話番号", "TEL"),
    "url": _labels("URL", "ＵＲＬ", "ホームページ"),
    "designation_date": _labels("指定日", "指定年月日"),
    "facility_ownership": _labels("公共施設", "施設区分", "施設分類"),
    "facility_type_category": _labels("施設の種類", "施設の種類　", "施設種類", "施設分類詳細"),
}


def pick_first(row: Row, candidates: Iterable[str]) -> str | None:
    for candidate in candidates:
        value = row.get(normalize_header(candidate))
        if value:
            return value
    return None


def resolve_field(row: Row, field: str) -> str | None:
    return pick_first(row, FIELD_CANDIDATES[field])


class WindowRole(str, Enum):
    OPEN = "open"
    CLOSE = "close"


# (native markers, latin marker matched case-insensitively)
_ROLE_MARKERS: dict[WindowRole, tuple[tuple[str, ...], str]] = {
    WindowRole.OPEN: (("開始",), "start"),
    WindowRole.CLOSE: (("終了", "閉"), "end"),
}


@dataclass(frozen=True)
class DayMatcher:
    key: str
    label: str
    variants: tuple[tuple[str, ...], ...]

    def matches_day(self, column: str) -> bool:
        return any(all(token in column for token in variant) for variant in self.variants)


def _day(key: str, label: str, *variants: str) -> DayMatcher:
    return DayMatcher(key=key, label=label, variants=tuple((variant,) for variant in variants))


# Sunday first
DAY_MATCHERS: tuple[DayMatcher, ...] = (
    _day("sun", "日", "日曜", "日曜日", "Sun", "SUN"),
    _day("mon", "月", "月曜", "月曜日", "Mon", "MON"),
    _day("tue", "火", "火曜", "火曜日", "Tue", "TUE"),
    _day("wed", "水", "水曜", "水曜日", "Wed", "WED"),
    _day("thu", "木", "木曜", "木曜日", "Thu", "THU"),
    _day("fri", "金", "金曜", "金曜日", "Fri", "FRI"),
    _day("sat", "土", "土曜", "土曜日", "Sat", "SAT"),
)


def _has_role_marker(column: str, role: WindowRole) -> bool:
    native_markers, latin_marker = _ROLE_MARKERS[role]
    return any(marker in column for marker in native_markers) or latin_marker in column.lower()


def find_time_column(columns: Iterable[str], matcher: DayMatcher, role: WindowRole) -> str | None:
    # first match in column order wins, even when several columns qualify
    for column in columns:
        if matcher.matches_day(column) and _has_role_marker(column, role):
            return column
    return None


def resolve_daily_windows(row: Row) -> tuple[DailyWindow, ...]:
    columns = list(row.keys())
    windows: list[DailyWindow] = []
    for matcher in DAY_MATCHERS:
        open_column = find_time_column(columns, matcher, WindowRole.OPEN)
        close_column = find_time_column(columns, matcher, WindowRole.CLOSE)
        windows.append(
            DailyWindow(
                day_label=matcher.label,
                open_time=normalize_time(row[open_column]) if open_column else None,
                close_time=normalize_time(row[close_column]) if close_column else None,
            )
        )
    return tuple(windows)
