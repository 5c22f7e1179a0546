from shelter_pipeline.core.headers import normalize_header


def test_normalize_header_converts_full_width_alphanumerics() -> None:
    assert normalize_header("ＩＤ") == "ID"
    assert normalize_header("ＵＲＬ１２") == "URL12"


def test_normalize_header_strips_all_whitespace() -> None:
    assert normalize_header(" 日曜日　開始 時間\t") == "日曜日開始時間"


def test_normalize_header_unifies_parentheses_and_colon() -> None:
    assert normalize_header("受入人数（人）") == "受入人数(人)"
    assert normalize_header("時間：開始") == "時間:開始"


def test_normalize_header_removes_middle_dot_and_bom() -> None:
    assert normalize_header("\ufeff施設・名称") == "施設名称"


def test_normalize_header_is_idempotent() -> None:
    labels = ["ＩＤ", "受入人数（人）", "日曜日　開始時間", "施設・名称", "Latitude"]
    for label in labels:
        once = normalize_header(label)
        assert normalize_header(once) == once
