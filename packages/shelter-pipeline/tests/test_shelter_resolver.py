from shelter_pipeline.core.resolver import (
    DAY_MATCHERS,
    WindowRole,
    find_time_column,
    pick_first,
    resolve_daily_windows,
    resolve_field,
)


def test_pick_first_honors_candidate_order() -> None:
    row = {"施設名": "旧名称", "名称": "新名称"}

    assert pick_first(row, ("名称", "施設名")) == "新名称"
    assert pick_first(row, ("施設名", "名称")) == "旧名称"


def test_pick_first_skips_absent_values_and_normalizes_candidates() -> None:
    row = {"名称": None, "施設名": "図書館", "ID": "A-1"}

    assert pick_first(row, ("名称", "施設名")) == "図書館"
    assert pick_first(row, ("ＩＤ",)) == "A-1"
    assert pick_first(row, ("住所",)) is None


def test_resolve_field_uses_known_labels() -> None:
    row = {"指定暑熱避難施設の名称": "市役所", "緯度": "35.1"}

    assert resolve_field(row, "name") == "市役所"
    assert resolve_field(row, "latitude") == "35.1"
    assert resolve_field(row, "address") is None


def test_resolve_daily_windows_matches_native_and_latin_headers() -> None:
    row = {
        "日曜日開始時間": "9:00",
        "日曜日終了時間": "17:00",
        "Mon_start": "8:30",
        "MON_END": "17:15",
        "火曜閉館時刻": "20:00",
    }

    windows = resolve_daily_windows(row)

    assert [window.day_label for window in windows] == ["日", "月", "火", "水", "木", "金", "土"]
    assert (windows[0].open_time, windows[0].close_time) == ("09:00", "17:00")
    assert (windows[1].open_time, windows[1].close_time) == ("08:30", "17:15")
    assert (windows[2].open_time, windows[2].close_time) == (None, "20:00")


def test_resolve_daily_windows_always_returns_seven_absent_days() -> None:
    windows = resolve_daily_windows({"名称": "公民館"})

    assert len(windows) == 7
    assert all(window.open_time is None and window.close_time is None for window in windows)
    assert all(window.describe() is None for window in windows)


def test_find_time_column_first_match_wins() -> None:
    columns = ["水曜日開始時間", "水曜開始", "水曜日終了時間"]
    wednesday = next(matcher for matcher in DAY_MATCHERS if matcher.key == "wed")

    assert find_time_column(columns, wednesday, WindowRole.OPEN) == "水曜日開始時間"
    assert find_time_column(columns, wednesday, WindowRole.CLOSE) == "水曜日終了時間"


def test_find_time_column_does_not_confuse_weekdays() -> None:
    sunday = next(matcher for matcher in DAY_MATCHERS if matcher.key == "sun")

    assert find_time_column(["月曜日開始時間", "土曜日開始時間"], sunday, WindowRole.OPEN) is None
