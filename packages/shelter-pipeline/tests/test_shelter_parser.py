from shelter_pipeline.core.parser import parse_delimited_rows, sniff_delimiter


def test_parse_delimited_rows_keeps_raw_headers() -> None:
    rows = parse_delimited_rows("ＩＤ,名称\nA-1,市役所\n", delimiter=",")

    assert rows == [{"ＩＤ": "A-1", "名称": "市役所"}]


def test_parse_delimited_rows_skips_blank_lines_and_overflow_cells() -> None:
    text = "ID,名称\nA-1,市役所,余分\n , \nA-2\n"

    rows = parse_delimited_rows(text, delimiter=",")

    assert rows == [{"ID": "A-1", "名称": "市役所"}, {"ID": "A-2", "名称": None}]


def test_parse_delimited_rows_handles_quoted_newlines() -> None:
    rows = parse_delimited_rows('ID,特記事項\nA-1,"平日のみ\n開放"\n', delimiter=",")

    assert rows[0]["特記事項"] == "平日のみ\n開放"


def test_sniff_delimiter_detects_tabs() -> None:
    text = "ID\t名称\t緯度\nA-1\t市役所\t35.8\nA-2\t図書館\t35.9\n"

    assert sniff_delimiter(text) == "\t"
    assert parse_delimited_rows(text)[1]["名称"] == "図書館"


def test_sniff_delimiter_falls_back_to_comma() -> None:
    assert sniff_delimiter("") == ","


def test_parse_delimited_rows_keeps_rows_before_malformed_record() -> None:
    text = 'ID,名称,緯度,経度\nA-1,市役所,35.8,139.6\nA-2,"unterminated' + "x" * 200_000

    rows = parse_delimited_rows(text, delimiter=",")

    assert rows == [{"ID": "A-1", "名称": "市役所", "緯度": "35.8", "経度": "139.6"}]
