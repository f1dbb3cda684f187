"""Solar position — low-precision NOAA model (astral) with an optional skyfield ephemeris."""

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from astral import Observer
from astral.sun import azimuth, elevation

from seatscape.geo import wrap_to_360
from seatscape.models import SunPosition

ALTITUDE_THRESHOLD_DEG = 5.0

_ROOT = Path(__file__).parent.parent.parent

SunModel = Callable[[datetime, float, float], SunPosition]


def sun_position(when: datetime, lat: float, lon: float) -> SunPosition:
    """Sun azimuth/altitude for a UTC instant at a point on the surface.

    Uses astral's NOAA solar equations without atmospheric refraction.
    Accurate to a fraction of a degree, which is plenty for a seat side.

    Args:
        when: tz-aware datetime.
        lat: Latitude (decimal degrees).
        lon: Longitude (decimal degrees).

    Returns:
        SunPosition with azimuth as a compass bearing in [0, 360).
    """
    if when.tzinfo is None:
        raise ValueError("sun_position requires a tz-aware datetime")
    observer = Observer(latitude=lat, longitude=lon, elevation=0.0)
    az = azimuth(observer, when)
    alt = elevation(observer, when, with_refraction=False)
    return SunPosition(azimuth_deg=wrap_to_360(az), altitude_deg=alt)


def is_sun_effective(altitude_deg: float) -> bool:
    """Sun high enough to matter for glare/scenery (>= 5° above the horizon)."""
    return altitude_deg >= ALTITUDE_THRESHOLD_DEG


class EphemerisSunModel:
    """High-precision sun model backed by skyfield and the JPL DE421 ephemeris.

    The ephemeris is opened on first use from ``resources/`` (downloaded
    there by skyfield if missing). Instances are callables with the same
    signature as :func:`sun_position`.
    """

    def __init__(self, directory: Path | None = None, filename: str = "de421.bsp"):
        self.directory = directory or _ROOT / "resources"
        self.filename = filename
        self._loader = None
        self._eph = None

    def _load(self):
        if self._eph is None:
            from skyfield.api import Loader

            self._loader = Loader(str(self.directory))
            self._eph = self._loader(self.filename)
        return self._loader, self._eph

    def __call__(self, when: datetime, lat: float, lon: float) -> SunPosition:
        from skyfield.api import wgs84

        loader, eph = self._load()
        t = loader.timescale().from_datetime(when)
        ground = eph["earth"] + wgs84.latlon(latitude_degrees=lat, longitude_degrees=lon)
        # altaz() without temperature/pressure: geometric altitude, no refraction
        alt, az, _ = ground.at(t).observe(eph["sun"]).apparent().altaz()
        return SunPosition(
            azimuth_deg=wrap_to_360(float(az.degrees)),
            altitude_deg=float(alt.degrees),
        )
