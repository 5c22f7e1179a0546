import pytest

from geo_engine.distance import haversine_distance_meters
from geo_engine.models import GeoPoint

TOKYO = GeoPoint(lat=35.6895, lng=139.6917)
OSAKA = GeoPoint(lat=34.6937, lng=135.5023)


def test_haversine_distance_is_zero_for_same_point() -> None:
    point = GeoPoint(lat=35.8617, lng=139.6455)
    distance = haversine_distance_meters(point, point)
    assert distance == 0


def test_haversine_distance_is_rounded_to_whole_meters() -> None:
    saitama = GeoPoint(lat=35.8617, lng=139.6455)
    urawa = GeoPoint(lat=35.8585, lng=139.6570)
    distance = haversine_distance_meters(saitama, urawa)
    assert isinstance(distance, int)
    assert 0 < distance < 2_000


def test_haversine_distance_is_symmetric() -> None:
    assert haversine_distance_meters(TOKYO, OSAKA) == haversine_distance_meters(OSAKA, TOKYO)


def test_haversine_distance_tokyo_to_osaka() -> None:
    distance = haversine_distance_meters(TOKYO, OSAKA)
    assert distance == pytest.approx(402_000, rel=0.02)


@pytest.mark.parametrize(
    ("start", "end"),
    [
        (GeoPoint(lat=0.0, lng=0.0), GeoPoint(lat=0.0, lng=180.0)),
        (GeoPoint(lat=90.0, lng=0.0), GeoPoint(lat=-90.0, lng=0.0)),
        (GeoPoint(lat=-33.86, lng=151.21), GeoPoint(lat=51.5, lng=-0.12)),
    ],
)
def test_haversine_distance_is_non_negative(start: GeoPoint, end: GeoPoint) -> None:
    assert haversine_distance_meters(start, end) >= 0
