"""Local-time <-> UTC helpers. Local times are "YYYY-MM-DDTHH:MM" strings without a zone suffix."""

from datetime import datetime, timedelta

from pytz import timezone, utc
from pytz.exceptions import AmbiguousTimeError, NonExistentTimeError, UnknownTimeZoneError

LOCAL_ISO_FORMAT = "%Y-%m-%dT%H:%M"


class TimeInputError(ValueError):
    """Unparseable local time, unknown timezone, or a local time that does not exist."""


def get_zone(tz_name: str):
    """Return the pytz zone for an IANA name, raising TimeInputError when unknown."""
    try:
        return timezone(tz_name)
    except UnknownTimeZoneError as e:
        raise TimeInputError(f"Unknown timezone: {tz_name!r}") from e


def parse_local_iso(local_iso: str) -> datetime:
    """Parse "YYYY-MM-DDTHH:MM" into a naive datetime."""
    try:
        return datetime.strptime(local_iso.strip(), LOCAL_ISO_FORMAT)
    except (AttributeError, ValueError) as e:
        raise TimeInputError(
            f"Local time must look like YYYY-MM-DDTHH:MM, got {local_iso!r}"
        ) from e


def local_iso_to_utc(local_iso: str, tz_name: str) -> datetime:
    """Convert a local ISO string in tz_name to a UTC datetime (tzinfo=utc).

    DST gaps and overlaps are rejected rather than guessed.
    """
    dt = parse_local_iso(local_iso)
    local_tz = get_zone(tz_name)
    try:
        local_dt = local_tz.localize(dt, is_dst=None)
    except (NonExistentTimeError, AmbiguousTimeError) as e:
        raise TimeInputError(
            f"{local_iso} is not a unique local time in {tz_name}"
        ) from e
    return local_dt.astimezone(utc)


def format_local(when: datetime, tz_name: str, fmt: str = "%Y-%m-%d %H:%M") -> str:
    """Format a tz-aware instant in another zone."""
    return when.astimezone(get_zone(tz_name)).strftime(fmt)


def convert_local_iso(local_iso: str, from_tz: str, to_tz: str) -> str:
    """Re-express a local ISO time from one zone as a local ISO time in another."""
    return format_local(local_iso_to_utc(local_iso, from_tz), to_tz, LOCAL_ISO_FORMAT)


def utc_to_local_iso(when: datetime, tz_name: str) -> str:
    return format_local(when, tz_name, LOCAL_ISO_FORMAT)


def add_minutes(when: datetime, minutes: float) -> datetime:
    return when + timedelta(minutes=minutes)


def diff_minutes(a: datetime, b: datetime) -> int:
    """Whole minutes from a to b (b - a), rounded."""
    return round((b - a).total_seconds() / 60)


def format_utc(when: datetime) -> str:
    """Serialize an instant as UTC with millisecond resolution ("...T04:30:00.000Z")."""
    u = when.astimezone(utc)
    return u.strftime("%Y-%m-%dT%H:%M:%S.") + f"{u.microsecond // 1000:03d}Z"
