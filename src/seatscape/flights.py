"""Schedule lookup — scheduled departure/arrival instants from Aviationstack."""

import logging
import os
import re
from datetime import datetime

import httpx
from pytz import utc

from seatscape.airports import is_iata
from seatscape.models import FlightSchedule
from seatscape.timeutils import utc_to_local_iso

log = logging.getLogger(__name__)

_AVIATIONSTACK_URL = "https://api.aviationstack.com/v1/flights"
FLIGHT_IATA_PATTERN = re.compile(r"^[A-Za-z0-9]{2,10}$")


class ScheduleError(Exception):
    """Schedule provider unavailable, misconfigured, or returned nothing usable."""


def _parse_instant(value: object) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        log.warning("Unparseable schedule time: %r", value)
        return None
    if dt.tzinfo is None:
        dt = utc.localize(dt)
    return dt.astimezone(utc)


def _airline_label(airline: dict) -> str:
    name = airline.get("name") or ""
    codes = [c for c in (airline.get("iata"), airline.get("icao")) if c]
    return f"{name} ({'/'.join(codes)})" if codes and name else name


def normalize_flight(raw: dict) -> FlightSchedule | None:
    """Convert one Aviationstack flight record to a FlightSchedule.

    Returns None when the record has no flight code.
    """
    flight = raw.get("flight") or {}
    departure = raw.get("departure") or {}
    arrival = raw.get("arrival") or {}
    code = flight.get("iata") or flight.get("number") or ""
    if not code:
        return None
    return FlightSchedule(
        flight_number=code,
        airline=_airline_label(raw.get("airline") or {}),
        dep_iata=(departure.get("iata") or "").upper(),
        arr_iata=(arrival.get("iata") or "").upper(),
        depart_utc=_parse_instant(departure.get("scheduled")),
        arrive_utc=_parse_instant(arrival.get("scheduled")),
        dep_tz=departure.get("timezone") or None,
        arr_tz=arrival.get("timezone") or None,
    )


def _get_flights(params: dict, api_key: str | None) -> list[dict]:
    key = api_key or os.environ.get("AVIATIONSTACK_API_KEY")
    if not key:
        raise ScheduleError("AVIATIONSTACK_API_KEY is not set")
    try:
        resp = httpx.get(
            _AVIATIONSTACK_URL, params={"access_key": key, **params}, timeout=10
        )
        resp.raise_for_status()
        payload = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        raise ScheduleError(f"Schedule request failed: {e}") from e
    if "error" in payload:
        raise ScheduleError(f"Aviationstack error: {payload['error']}")
    return payload.get("data") or []


def fetch_flight_schedule(flight_iata: str, api_key: str | None = None) -> FlightSchedule:
    """Look up a flight by IATA flight number ("EK511").

    Raises:
        ValueError: Malformed flight number.
        ScheduleError: Provider failure or no complete schedule.
    """
    if not FLIGHT_IATA_PATTERN.match(flight_iata or ""):
        raise ValueError(f"Not a flight number: {flight_iata!r}")
    for raw in _get_flights({"flight_iata": flight_iata.upper()}, api_key):
        schedule = normalize_flight(raw)
        if schedule and schedule.depart_utc and schedule.arrive_utc:
            return schedule
    raise ScheduleError(f"No schedule found for {flight_iata.upper()}")


def fetch_route_flights(
    dep_iata: str, arr_iata: str, api_key: str | None = None
) -> tuple[FlightSchedule, ...]:
    """Scheduled flights between two airports. Incomplete records are dropped."""
    if not (is_iata(dep_iata) and is_iata(arr_iata)):
        raise ValueError(f"Invalid IATA codes: {dep_iata!r}, {arr_iata!r}")
    params = {"dep_iata": dep_iata.upper(), "arr_iata": arr_iata.upper()}
    schedules = (normalize_flight(raw) for raw in _get_flights(params, api_key))
    return tuple(
        s
        for s in schedules
        if s and s.airline and s.depart_utc and s.arrive_utc and s.dep_tz and s.arr_tz
    )


def schedule_local_times(
    schedule: FlightSchedule, origin_tz: str, dest_tz: str
) -> tuple[str, str]:
    """(depart_local, arrive_local) strings to feed the simulator's arrival override.

    Each instant is expressed in its airport's zone; the provider's zone wins
    when present.
    """
    if schedule.depart_utc is None or schedule.arrive_utc is None:
        raise ScheduleError(f"{schedule.flight_number} has no complete schedule")
    return (
        utc_to_local_iso(schedule.depart_utc, schedule.dep_tz or origin_tz),
        utc_to_local_iso(schedule.arrive_utc, schedule.arr_tz or dest_tz),
    )
