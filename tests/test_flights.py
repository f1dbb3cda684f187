from datetime import datetime

import pytest
from pytz import utc

from seatscape import flights
from seatscape.flights import (
    ScheduleError,
    fetch_flight_schedule,
    fetch_route_flights,
    normalize_flight,
    schedule_local_times,
)

EK511 = {
    "flight": {"iata": "EK511", "number": "511"},
    "airline": {"name": "Emirates", "iata": "EK", "icao": "UAE"},
    "departure": {
        "iata": "del",
        "scheduled": "2025-01-10T10:00:00+05:30",
        "timezone": "Asia/Kolkata",
    },
    "arrival": {
        "iata": "DXB",
        "scheduled": "2025-01-10T12:30:00+04:00",
        "timezone": "Asia/Dubai",
    },
}


class FakeResponse:
    def __init__(self, payload):
        self._payload = payload

    def raise_for_status(self):
        pass

    def json(self):
        return self._payload


def _serve(monkeypatch, payload):
    seen = {}

    def fake_get(url, params=None, timeout=None):
        seen.update(params)
        return FakeResponse(payload)

    monkeypatch.setattr(flights.httpx, "get", fake_get)
    return seen


def test_normalize_flight():
    schedule = normalize_flight(EK511)
    assert schedule.flight_number == "EK511"
    assert schedule.airline == "Emirates (EK/UAE)"
    assert (schedule.dep_iata, schedule.arr_iata) == ("DEL", "DXB")
    assert schedule.depart_utc == utc.localize(datetime(2025, 1, 10, 4, 30))
    assert schedule.arrive_utc == utc.localize(datetime(2025, 1, 10, 8, 30))
    assert schedule.dep_tz == "Asia/Kolkata"


def test_normalize_without_flight_code():
    assert normalize_flight({"flight": {}, "departure": {}}) is None


def test_normalize_z_suffix_and_bad_times():
    raw = {
        "flight": {"iata": "XX1"},
        "departure": {"scheduled": "2025-01-10T04:30:00Z"},
        "arrival": {"scheduled": "soon"},
    }
    schedule = normalize_flight(raw)
    assert schedule.depart_utc == utc.localize(datetime(2025, 1, 10, 4, 30))
    assert schedule.arrive_utc is None
    assert schedule.airline == ""


def test_local_times_for_the_simulator():
    assert schedule_local_times(normalize_flight(EK511), "UTC", "UTC") == (
        "2025-01-10T10:00",
        "2025-01-10T12:30",
    )


def test_local_times_need_a_complete_schedule():
    incomplete = normalize_flight({**EK511, "arrival": {}})
    with pytest.raises(ScheduleError):
        schedule_local_times(incomplete, "Asia/Kolkata", "Asia/Dubai")


def test_fetch_flight_schedule(monkeypatch):
    seen = _serve(monkeypatch, {"data": [EK511]})
    schedule = fetch_flight_schedule("ek511", api_key="secret")
    assert schedule.flight_number == "EK511"
    assert seen == {"access_key": "secret", "flight_iata": "EK511"}


def test_fetch_requires_api_key(monkeypatch):
    monkeypatch.delenv("AVIATIONSTACK_API_KEY", raising=False)
    with pytest.raises(ScheduleError):
        fetch_flight_schedule("EK511")


def test_fetch_rejects_malformed_flight_number():
    with pytest.raises(ValueError):
        fetch_flight_schedule("EK 511!", api_key="secret")


def test_fetch_provider_error(monkeypatch):
    _serve(monkeypatch, {"error": {"code": "invalid_access_key"}})
    with pytest.raises(ScheduleError):
        fetch_flight_schedule("EK511", api_key="bad")


def test_fetch_no_matching_schedule(monkeypatch):
    _serve(monkeypatch, {"data": []})
    with pytest.raises(ScheduleError):
        fetch_flight_schedule("EK511", api_key="secret")


def test_fetch_transport_error(monkeypatch):
    def fake_get(*args, **kwargs):
        raise flights.httpx.ConnectError("offline")

    monkeypatch.setattr(flights.httpx, "get", fake_get)
    with pytest.raises(ScheduleError):
        fetch_flight_schedule("EK511", api_key="secret")


def test_route_flights_drop_incomplete(monkeypatch):
    no_zone = {**EK511, "flight": {"iata": "EK513"}, "arrival": {**EK511["arrival"], "timezone": None}}
    seen = _serve(monkeypatch, {"data": [EK511, no_zone, {"flight": {}}]})
    found = fetch_route_flights("del", "dxb", api_key="secret")
    assert [s.flight_number for s in found] == ["EK511"]
    assert seen["dep_iata"] == "DEL"


def test_route_flights_validate_codes():
    with pytest.raises(ValueError):
        fetch_route_flights("DELHI", "DXB", api_key="secret")
