from datetime import datetime, timedelta

import pytest
from pytz import utc

from seatscape.models import Airport, NamedPlace, Sample, SunPosition


def fixed_sun(azimuth_deg: float, altitude_deg: float):
    """Sun model that ignores time and place."""

    def model(when, lat, lon):
        return SunPosition(azimuth_deg=azimuth_deg, altitude_deg=altitude_deg)

    return model


def timed_sun(start: datetime, schedule: list[tuple[float, float]], azimuth_deg: float = 180.0):
    """Sun model whose altitude follows (from_minute, altitude) steps after start."""

    def model(when, lat, lon):
        elapsed = (when - start).total_seconds() / 60
        alt = schedule[0][1]
        for from_minute, altitude in schedule:
            if elapsed >= from_minute:
                alt = altitude
        return SunPosition(azimuth_deg=azimuth_deg, altitude_deg=alt)

    return model


def equator_samples(lons, course_deg: float = 90.0) -> list[Sample]:
    start = datetime(2025, 1, 1, tzinfo=utc)
    return [
        Sample(
            lat=0.0,
            lon=float(lon),
            utc=start + timedelta(minutes=5 * i),
            azimuth_deg=180.0,
            altitude_deg=30.0,
            course_deg=course_deg,
            side="F",
        )
        for i, lon in enumerate(lons)
    ]


@pytest.fixture
def west_end() -> Airport:
    return Airport(iata="AAA", name="Alpha", lat=0.0, lon=0.0, tz="UTC")


@pytest.fixture
def east_end() -> Airport:
    # 10 degrees of equator east of west_end: ~1112 km, 78 minutes at cruise
    return Airport(iata="BBB", name="Bravo", lat=0.0, lon=10.0, tz="UTC")


@pytest.fixture
def delhi() -> Airport:
    return Airport(
        iata="DEL", name="Indira Gandhi International", lat=28.5562, lon=77.1, tz="Asia/Kolkata"
    )


@pytest.fixture
def dubai() -> Airport:
    return Airport(
        iata="DXB", name="Dubai International", lat=25.2532, lon=55.3657, tz="Asia/Dubai"
    )


@pytest.fixture
def two_cities() -> tuple[NamedPlace, ...]:
    return (
        NamedPlace(name="Delhi", lat=28.6139, lon=77.2090, tz="Asia/Kolkata"),
        NamedPlace(name="Dubai", lat=25.2048, lon=55.2708, tz="Asia/Dubai"),
    )
