from shelter_pipeline.core.assembler import DEFAULT_MUNICIPALITY_NAME, assemble_shelters, build_shelter, normalize_row
from shelter_pipeline.core.parser import parse_delimited_rows


def _row(overrides: dict | None = None) -> dict:
    row = {
        "ＩＤ": "111007-001",
        "地方公共団体名": "さいたま市",
        "名称": "市役所",
        "所在地": "さいたま市浦和区",
        "緯度": "35.86",
        "経度": "139.64",
        "受入可能人数": "50人",
    }
    row.update(overrides or {})
    return row


def test_normalize_row_normalizes_keys_and_cleans_values() -> None:
    row = normalize_row({"ＩＤ ": " A-1 ", "名称": "―", None: ["overflow"]})

    assert row == {"ID": "A-1", "名称": None}


def test_build_shelter_maps_required_and_optional_fields() -> None:
    shelter = build_shelter(_row())

    assert shelter is not None
    assert shelter.shelter_id == "111007-001"
    assert shelter.municipality_name == "さいたま市"
    assert shelter.latitude == 35.86
    assert shelter.longitude == 139.64
    assert shelter.capacity == 50.0
    assert shelter.phone is None
    assert len(shelter.openings) == 7


def test_build_shelter_defaults_municipality_name() -> None:
    shelter = build_shelter(_row({"地方公共団体名": ""}))

    assert shelter is not None
    assert shelter.municipality_name == DEFAULT_MUNICIPALITY_NAME


def test_build_shelter_keeps_capacity_absent_instead_of_zero() -> None:
    assert build_shelter(_row({"受入可能人数": "なし"})).capacity is None
    assert build_shelter(_row({"受入可能人数": ""})).capacity is None
    assert build_shelter(_row({"受入可能人数": "0"})).capacity == 0.0
    assert build_shelter(_row({"受入可能人数": "-5"})).capacity is None


def test_build_shelter_drops_rows_missing_required_values() -> None:
    assert build_shelter(_row({"ＩＤ": ""})) is None
    assert build_shelter(_row({"名称": "―"})) is None
    assert build_shelter(_row({"緯度": ""})) is None
    assert build_shelter(_row({"経度": "不明"})) is None
    assert build_shelter({}) is None


def test_assemble_shelters_skips_row_without_latitude() -> None:
    rows = [_row({"ＩＤ": "A"}), _row({"ＩＤ": "B", "緯度": ""}), _row({"ＩＤ": "C"})]

    shelters = assemble_shelters(rows)

    assert [shelter.shelter_id for shelter in shelters] == ["A", "C"]


def test_assemble_shelters_reads_bundled_sample(sample_text) -> None:
    rows = parse_delimited_rows(sample_text)

    shelters = assemble_shelters(rows)

    assert len(rows) == 7
    assert len(shelters) == 6
    by_id = {shelter.shelter_id: shelter for shelter in shelters}
    assert "112089-002" not in by_id

    city_hall = by_id["111007-001"]
    assert city_hall.url == "https://www.city.saitama.lg.jp/"
    assert city_hall.special_notes == "閉庁日は開放しません"
    assert city_hall.facility_type_category == "庁舎"
    assert city_hall.openings[0].describe() is None
    assert city_hall.openings[1].describe() == "08:30-17:15"

    assert by_id["112011-001"].capacity == 60.0
    assert by_id["112089-001"].capacity is None
    assert by_id["112089-001"].openings[3].close_time is None

    kazo = by_id["112101-001"]
    assert kazo.municipality_name == DEFAULT_MUNICIPALITY_NAME
    assert kazo.openings[6].open_time == "09:00"
    assert kazo.openings[6].close_time == "17:00"
