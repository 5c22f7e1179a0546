import pytest

from geo_engine.travel import TravelMode, estimate_duration_seconds


def test_estimate_walking_duration() -> None:
    seconds = estimate_duration_seconds(distance_meters=1200, mode=TravelMode.WALK)
    assert seconds == pytest.approx(1000.0)


def test_estimate_driving_duration() -> None:
    seconds = estimate_duration_seconds(distance_meters=10_000, mode=TravelMode.DRIVE)
    assert seconds == pytest.approx(1000.0)


def test_estimate_duration_accepts_mode_value() -> None:
    assert estimate_duration_seconds(distance_meters=120, mode="walk") == pytest.approx(100.0)


def test_estimate_duration_rejects_negative_distance() -> None:
    with pytest.raises(ValueError):
        estimate_duration_seconds(distance_meters=-1, mode=TravelMode.WALK)
