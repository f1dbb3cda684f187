"""Flight sun-path simulation — time-stepped sampling along the great circle."""

import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from seatscape.airports import AirportResolver, is_iata
from seatscape.cities import load_city_catalog
from seatscape.geo import (
    LatLon,
    distance_km,
    intermediate_point,
    track_at,
    wrap_to_180,
)
from seatscape.models import (
    Airport,
    CabinSide,
    FlightContext,
    NamedPlace,
    QueryInput,
    Recommendation,
    Sample,
    SampleSide,
    SeatChoice,
    SunEvent,
)
from seatscape.sun import SunModel, is_sun_effective, sun_position
from seatscape.timeutils import (
    TimeInputError,
    add_minutes,
    diff_minutes,
    get_zone,
    local_iso_to_utc,
)

log = logging.getLogger(__name__)

CRUISE_SPEED_KMH = 850.0
MIN_FLIGHT_MINUTES = 40
MAX_FLIGHT_MINUTES = 18 * 60
DEFAULT_SAMPLE_MINUTES = 5
PREFERENCES = ("see", "avoid")


class InputError(ValueError):
    """Caller input rejected before any sampling starts."""


class SimulationCancelled(Exception):
    """The caller's cancellation check fired mid-simulation."""


def _check_point(label: str, p: LatLon) -> None:
    if not (math.isfinite(p.lat) and math.isfinite(p.lon)):
        raise InputError(f"{label} has non-finite coordinates: {p.lat}, {p.lon}")
    if not -90.0 <= p.lat <= 90.0:
        raise InputError(f"{label} latitude out of range: {p.lat}")


def estimate_duration_minutes(origin: LatLon, dest: LatLon) -> int:
    """Flight time from distance at a fixed cruise speed, clamped to 40 min .. 18 h."""
    hours = distance_km(origin, dest) / CRUISE_SPEED_KMH
    minutes = hours * 60
    return round(max(MIN_FLIGHT_MINUTES, min(MAX_FLIGHT_MINUTES, minutes)))


def nearest_place(point: LatLon, places: Sequence[NamedPlace]) -> NamedPlace | None:
    """Catalog entry closest to point, by linear scan. None for an empty catalog."""
    best: NamedPlace | None = None
    best_d = math.inf
    for place in places:
        d = distance_km(point, place)
        if d < best_d:
            best, best_d = place, d
    return best


def prepare_flight(
    origin: Airport,
    dest: Airport,
    depart_local: str,
    arrive_local: str | None = None,
) -> FlightContext:
    """Validate endpoints and resolve departure time and duration.

    Args:
        origin: Departure airport.
        dest: Arrival airport.
        depart_local: "YYYY-MM-DDTHH:MM" in the origin's timezone.
        arrive_local: Optional "YYYY-MM-DDTHH:MM" in the destination's timezone.
            When given, the duration comes from the arrival-departure delta
            instead of the cruise-speed estimate.

    Returns:
        FlightContext with the UTC departure and the total minutes.

    Raises:
        InputError: Bad coordinates, timezone, local time, or arrival not after departure.
    """
    _check_point(origin.iata, origin)
    _check_point(dest.iata, dest)
    try:
        get_zone(dest.tz)
        depart_utc = local_iso_to_utc(depart_local, origin.tz)
        arrive_utc = (
            local_iso_to_utc(arrive_local, dest.tz) if arrive_local is not None else None
        )
    except TimeInputError as e:
        raise InputError(str(e)) from e

    dist = distance_km(origin, dest)
    if arrive_utc is not None:
        total = diff_minutes(depart_utc, arrive_utc)
        if total <= 0:
            raise InputError(
                f"Arrival {arrive_local} ({dest.tz}) is not after departure "
                f"{depart_local} ({origin.tz})"
            )
    else:
        total = estimate_duration_minutes(origin, dest)

    return FlightContext(
        origin=origin,
        dest=dest,
        depart_utc=depart_utc,
        total_minutes=total,
        distance_km=dist,
    )


@dataclass(frozen=True)
class _NoSun:
    pass


@dataclass(frozen=True)
class _SunVisible:
    side: CabinSide
    sample_index: int


_SunState = _NoSun | _SunVisible


def _event(
    sample: Sample, side: CabinSide, index: int, places: Sequence[NamedPlace]
) -> SunEvent:
    place = nearest_place(sample, places)
    return SunEvent(
        utc=sample.utc,
        side=side,
        sample_index=index,
        place=place.name if place else None,
    )


def _classify(azimuth_deg: float, altitude_deg: float, course_deg: float) -> SampleSide:
    if not is_sun_effective(altitude_deg):
        return "none"
    return "F" if wrap_to_180(azimuth_deg - course_deg) > 0 else "A"


def _choose_side(
    preference: str, left: int, right: int, peak: float | None
) -> SeatChoice:
    sunny_peak = peak is not None and peak >= 0
    if preference == "see":
        if left != right:
            return "A (left)" if left > right else "F (right)"
        return "F (right)" if sunny_peak else "A (left)"
    if left != right:
        return "A (left)" if left < right else "F (right)"
    return "A (left)" if sunny_peak else "F (right)"


def simulate(
    context: FlightContext,
    preference: str,
    sample_minutes: int = DEFAULT_SAMPLE_MINUTES,
    places: Sequence[NamedPlace] = (),
    sun_model: SunModel = sun_position,
    should_cancel: Callable[[], bool] | None = None,
) -> Recommendation:
    """Sample the flight at a fixed step and recommend a cabin side.

    Each sample stands for the interval [elapsed, elapsed + step) clipped to
    the flight, so sunlit minutes never exceed the flight duration. A sample
    at the arrival instant covers no time, so the sides add up to the full
    duration exactly when every sample before arrival is lit. A sunrise
    is a no-sun → sun transition (never at departure), a sunset a sun →
    no-sun transition attributed to the outgoing sample: the last light, not
    the first darkness. The latest of each is kept.

    Args:
        context: Prepared flight.
        preference: "see" to face the sun, "avoid" to stay out of it.
        sample_minutes: Time step in minutes.
        places: Catalog used to name the sunrise/sunset location.
        sun_model: Solar position callable.
        should_cancel: Polled before every sample; returning True aborts.

    Returns:
        Recommendation with the full sample sequence.

    Raises:
        InputError: Unknown preference or non-positive step.
        SimulationCancelled: should_cancel returned True.
    """
    if preference not in PREFERENCES:
        raise InputError(f"Preference must be one of {PREFERENCES}, got {preference!r}")
    if isinstance(sample_minutes, bool) or not isinstance(sample_minutes, int):
        raise InputError(f"Sample step must be whole minutes, got {sample_minutes!r}")
    if sample_minutes <= 0:
        raise InputError(f"Sample step must be positive, got {sample_minutes}")

    origin, dest = context.origin, context.dest
    total = context.total_minutes

    samples: list[Sample] = []
    left = right = 0
    peak: float | None = None
    sunrise: SunEvent | None = None
    sunset: SunEvent | None = None
    state: _SunState = _NoSun()

    for i in range(total // sample_minutes + 1):
        if should_cancel is not None and should_cancel():
            raise SimulationCancelled(f"Cancelled at sample {i}")

        elapsed = i * sample_minutes
        frac = elapsed / total
        pos = intermediate_point(origin, dest, frac)
        course = track_at(origin, dest, frac)
        when = add_minutes(context.depart_utc, elapsed)
        sun = sun_model(when, pos.lat, pos.lon)
        side = _classify(sun.azimuth_deg, sun.altitude_deg, course)

        sample = Sample(
            lat=pos.lat,
            lon=pos.lon,
            utc=when,
            azimuth_deg=sun.azimuth_deg,
            altitude_deg=sun.altitude_deg,
            course_deg=course,
            side=side,
        )
        samples.append(sample)

        if side != "none":
            weight = min(sample_minutes, total - elapsed)
            if side == "A":
                left += weight
            else:
                right += weight
            if peak is None or sun.altitude_deg > peak:
                peak = sun.altitude_deg

        if side != "none":
            # already up at departure is not a sunrise
            if isinstance(state, _NoSun) and i > 0:
                sunrise = _event(sample, side, i, places)
            state = _SunVisible(side=side, sample_index=i)
        elif isinstance(state, _SunVisible):
            last = state.sample_index
            sunset = _event(samples[last], state.side, last, places)
            state = _NoSun()

    sunlit = left + right
    confidence = max(left, right) / sunlit if sunlit > 0 else 0.0
    rec = Recommendation(
        side=_choose_side(preference, left, right, peak),
        left_minutes=left,
        right_minutes=right,
        peak_altitude_deg=round(peak, 1) if peak is not None else None,
        sunrise=sunrise,
        sunset=sunset,
        confidence=round(confidence, 2),
        samples=tuple(samples),
        total_minutes=total,
        sample_minutes=sample_minutes,
    )
    log.debug(
        "%s→%s: %d samples, left=%d right=%d, side=%s",
        origin.iata,
        dest.iata,
        len(samples),
        left,
        right,
        rec.side,
    )
    return rec


def compute_recommendation(
    origin: Airport,
    dest: Airport,
    depart_local: str,
    preference: str,
    arrive_local: str | None = None,
    sample_minutes: int = DEFAULT_SAMPLE_MINUTES,
    places: Sequence[NamedPlace] = (),
    sun_model: SunModel = sun_position,
    should_cancel: Callable[[], bool] | None = None,
) -> Recommendation:
    """Prepare and simulate in one call. See :func:`prepare_flight` and :func:`simulate`."""
    context = prepare_flight(origin, dest, depart_local, arrive_local)
    return simulate(
        context,
        preference,
        sample_minutes=sample_minutes,
        places=places,
        sun_model=sun_model,
        should_cancel=should_cancel,
    )


def run(
    query: QueryInput,
    resolver: AirportResolver | None = None,
    places: Sequence[NamedPlace] | None = None,
    sun_model: SunModel = sun_position,
) -> tuple[FlightContext, Recommendation]:
    """Top-level entry point: takes a QueryInput and returns the flight and its recommendation.

    Args:
        query: User input (IATA codes, local time strings, preference).
        resolver: Airport resolver. A default one over the bundled table if None.
        places: Named-place catalog. The bundled catalog if None.
        sun_model: Solar position callable.

    Returns:
        (FlightContext, Recommendation)

    Raises:
        InputError: Malformed IATA code or any other invalid input.
        AirportNotFoundError: A code that no source can resolve.
        AirportLookupError: The remote airport service failed.
    """
    for code in (query.origin, query.dest):
        if not is_iata(code):
            raise InputError(f"Not an IATA airport code: {code!r}")
    resolver = resolver or AirportResolver()
    origin = resolver.resolve(query.origin)
    dest = resolver.resolve(query.dest)
    catalog = load_city_catalog() if places is None else places

    context = prepare_flight(origin, dest, query.depart, query.arrive)
    rec = simulate(
        context,
        query.preference,
        sample_minutes=query.sample_minutes,
        places=catalog,
        sun_model=sun_model,
    )
    return context, rec
