from dataclasses import replace
from datetime import datetime

import pytest
from pytz import utc

from conftest import fixed_sun, timed_sun
from seatscape.compute import compute_recommendation
from seatscape.export import pass_by_to_dict, recommendation_to_dict, sample_to_dict
from seatscape.models import Airport, NamedPlace, PassBy
from seatscape.summary import headline, rationale, share_text, sun_share_pct

DEPART_UTC = utc.localize(datetime(2025, 1, 15, 6, 0))


@pytest.fixture
def kolkata_end() -> Airport:
    return Airport(iata="AAA", name="Alpha", lat=0.0, lon=0.0, tz="Asia/Kolkata")


@pytest.fixture
def dubai_end() -> Airport:
    return Airport(iata="BBB", name="Bravo", lat=0.0, lon=10.0, tz="Asia/Dubai")


@pytest.fixture
def sunny(west_end, east_end):
    return compute_recommendation(west_end, east_end, "2025-01-15T06:00", "see", sun_model=fixed_sun(180, 30))


def test_share_pct(sunny):
    assert sun_share_pct(sunny) == 100
    assert sun_share_pct(replace(sunny, left_minutes=30, right_minutes=90)) == 75
    assert sun_share_pct(replace(sunny, left_minutes=0, right_minutes=0)) == 0


def test_headline(sunny):
    assert headline(sunny) == "Pick F (right)"
    assert headline(replace(sunny, side="A (left)")) == "Pick A (left)"


def test_rationale_by_preference(sunny):
    mixed = replace(sunny, left_minutes=30, right_minutes=90)
    assert "75%" in rationale(mixed, "see")
    assert "25%" in rationale(mixed, "avoid")


def test_share_text_events_in_airport_zones(kolkata_end, dubai_end):
    # up for elapsed 10..19 and 40..49 minutes after 06:00 IST (00:30Z)
    depart_utc = utc.localize(datetime(2025, 1, 15, 0, 30))
    sun = timed_sun(depart_utc, [(0, -10), (10, 20), (20, -10), (40, 20), (50, -10)])
    places = (NamedPlace(name="Midway", lat=0.0, lon=5.0),)
    rec = compute_recommendation(
        kolkata_end, dubai_end, "2025-01-15T06:00", "see", places=places, sun_model=sun
    )
    text = share_text(rec, kolkata_end, dubai_end, "see")
    # sunrise at elapsed 40 in IST, sunset at elapsed 45 in Dubai time
    assert "Sunrise ~06:40 on F (right) near Midway (AAA time, Asia/Kolkata)" in text
    assert "Sunset ~05:15 on F (right) near Midway (BBB time, Asia/Dubai)" in text
    assert "stays low" not in text


def test_share_text_night_flight(west_end, east_end):
    rec = compute_recommendation(west_end, east_end, "2025-01-15T06:00", "see", sun_model=fixed_sun(180, -30))
    text = share_text(rec, west_end, east_end, "see")
    assert text.startswith("Pick A (left)")
    assert "stays low or below the horizon" in text
    assert "Sunrise" not in text


def test_recommendation_dict(sunny):
    out = recommendation_to_dict(sunny)
    assert out["side"] == "F (right)"
    assert out["rightMinutes"] == 78
    assert out["peakAltitudeDeg"] == 30.0
    assert out["sunrise"] is None
    assert len(out["samples"]) == len(sunny.samples)
    assert out["samples"][0]["utc"] == "2025-01-15T06:00:00.000Z"
    assert "samples" not in recommendation_to_dict(sunny, include_samples=False)


def test_sample_dict_keys(sunny):
    assert set(sample_to_dict(sunny.samples[0])) == {"lat", "lon", "utc", "az", "alt", "course", "side"}


def test_pass_by_dict():
    p = PassBy(
        name="Delhi",
        lat=28.6,
        lon=77.2,
        side="A",
        distance_km=12,
        sample_index=1,
        time_utc=DEPART_UTC,
        relevance=0.97,
    )
    out = pass_by_to_dict(p)
    assert out["distanceKm"] == 12
    assert out["timeUTC"] == "2025-01-15T06:00:00.000Z"
    assert pass_by_to_dict(replace(p, time_utc=None))["timeUTC"] is None
