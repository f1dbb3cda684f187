"""Data model definitions — explicit boundaries between input, compute, and render layers."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

CabinSide = Literal["A", "F"]
SampleSide = Literal["A", "F", "none"]
SeatChoice = Literal["A (left)", "F (right)"]
Preference = Literal["see", "avoid"]


@dataclass(frozen=True)
class QueryInput:
    """Raw user input. Not yet validated."""

    origin: str  # IATA code ("DEL")
    dest: str  # IATA code ("DXB")
    depart: str  # "YYYY-MM-DDTHH:MM", local to origin
    preference: Preference = "see"
    arrive: str | None = None  # "YYYY-MM-DDTHH:MM", local to dest
    sample_minutes: int = 5


@dataclass(frozen=True)
class GeoPoint:
    lat: float  # Latitude (decimal degrees)
    lon: float  # Longitude (decimal degrees)


@dataclass(frozen=True)
class Airport:
    """Immutable airport reference data."""

    iata: str
    name: str
    lat: float
    lon: float
    tz: str  # IANA timezone ("Asia/Kolkata")


@dataclass(frozen=True)
class NamedPlace:
    """A single points-catalog entry."""

    name: str
    lat: float
    lon: float
    tz: str | None = None


@dataclass(frozen=True)
class SunPosition:
    azimuth_deg: float  # Compass bearing, 0=N, 90=E
    altitude_deg: float  # Degrees above the horizon


@dataclass(frozen=True)
class Sample:
    """One time-stepped point along the route."""

    lat: float
    lon: float
    utc: datetime  # tz-aware UTC
    azimuth_deg: float  # Sun azimuth (0..360 from North, clockwise)
    altitude_deg: float  # Sun altitude
    course_deg: float  # Instantaneous great-circle course (0..360)
    side: SampleSide  # Cabin side lit by the sun, "none" when not effective


@dataclass(frozen=True)
class SunEvent:
    """Sunrise or sunset as seen from the cabin."""

    utc: datetime
    side: CabinSide
    sample_index: int
    place: str | None  # Nearest catalog place, if a catalog was supplied


@dataclass(frozen=True)
class FlightContext:
    """Result of airport resolution + timezone conversion. Input to the simulation."""

    origin: Airport
    dest: Airport
    depart_utc: datetime  # UTC datetime (with tzinfo=utc)
    total_minutes: int
    distance_km: float


@dataclass(frozen=True)
class Recommendation:
    """The sole output of a simulation run. Fully computed state."""

    side: SeatChoice
    left_minutes: int
    right_minutes: int
    peak_altitude_deg: float | None  # None when the sun is never effective
    sunrise: SunEvent | None  # None if the sun was already up (or never rose)
    sunset: SunEvent | None
    confidence: float  # 0..1
    samples: tuple[Sample, ...]
    total_minutes: int
    sample_minutes: int


@dataclass(frozen=True)
class PassBy:
    """A catalog place the route passes near."""

    name: str
    lat: float
    lon: float
    side: CabinSide
    distance_km: int  # Rounded
    sample_index: int  # Nearest sample
    time_utc: datetime | None
    relevance: float  # 0..1, UI ranking only


@dataclass(frozen=True)
class SunPlaneRelation:
    relative_az_deg: float  # Sun bearing relative to the nose, (-180, 180]
    side: SampleSide
    intensity: float  # 0..1 from altitude


@dataclass(frozen=True)
class ExtendedSample:
    """Sample plus glare attributes for display."""

    sample: Sample
    relative_az_deg: float
    glare: float  # 0..1
    effective: bool  # Sun above threshold and outside the nose/tail dead band


@dataclass(frozen=True)
class FlightSchedule:
    """Scheduled departure/arrival as returned by the schedule provider."""

    flight_number: str  # "EK511"
    airline: str
    dep_iata: str
    arr_iata: str
    depart_utc: datetime | None
    arrive_utc: datetime | None
    dep_tz: str | None = None
    arr_tz: str | None = None
