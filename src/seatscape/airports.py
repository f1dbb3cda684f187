"""Airport resolution — bundled table, local extras file, then the Aviationstack API."""

import json
import logging
import os
import re
from pathlib import Path

import httpx
from timezonefinder import TimezoneFinder

from seatscape.models import Airport

log = logging.getLogger(__name__)

_ROOT = Path(__file__).parent.parent.parent
_AVIATIONSTACK_URL = "https://api.aviationstack.com/v1/airports"
IATA_CODE_PATTERN = re.compile(r"^[A-Za-z]{3}$")

_tf: TimezoneFinder | None = None


class AirportNotFoundError(Exception):
    """No source could resolve the airport code."""


class AirportLookupError(Exception):
    """The remote airport service failed or returned an error."""


def is_iata(code: object) -> bool:
    return isinstance(code, str) and bool(IATA_CODE_PATTERN.match(code))


def _timezone_at(lat: float, lon: float) -> str | None:
    global _tf
    if _tf is None:
        _tf = TimezoneFinder()
    return _tf.timezone_at(lat=lat, lng=lon)


def _load_table(path: Path) -> dict[str, Airport]:
    with path.open(encoding="utf-8") as f:
        raw = json.load(f)
    return {
        a["iata"].upper(): Airport(
            iata=a["iata"].upper(),
            name=a["name"],
            lat=float(a["lat"]),
            lon=float(a["lon"]),
            tz=a["tz"],
        )
        for a in raw
    }


def _to_float(value: object) -> float | None:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


def parse_aviationstack_airport(code: str, payload: dict) -> Airport | None:
    """Build an Airport from an Aviationstack /airports response. None if unusable.

    Coordinates are mandatory. A missing timezone is looked up from the
    coordinates.
    """
    rows = payload.get("data") or []
    row = next(
        (r for r in rows if str(r.get("iata_code", "")).upper() == code), None
    )
    if row is None:
        return None
    lat = _to_float(row.get("latitude"))
    lon = _to_float(row.get("longitude"))
    if lat is None or lon is None:
        log.warning("Missing coordinates for %s from Aviationstack", code)
        return None
    tz = row.get("timezone") or _timezone_at(lat, lon)
    if tz is None:
        log.warning("No timezone for %s at %s, %s", code, lat, lon)
        return None
    name = row.get("airport_name")
    if not name:
        log.warning("Missing name for %s from Aviationstack", code)
    return Airport(iata=code, name=name or code, lat=lat, lon=lon, tz=tz)


class AirportResolver:
    """Resolve IATA codes to Airport records.

    Lookup order: per-instance cache, bundled table, extras file, remote API.
    Airports fetched remotely are appended to the extras file so later
    runs resolve them offline.
    """

    def __init__(
        self,
        table_path: Path | None = None,
        extra_path: Path | None = None,
        api_key: str | None = None,
    ):
        self.table_path = table_path or _ROOT / "resources" / "airports.json"
        self.extra_path = extra_path or _ROOT / "resources" / "airports-extra.json"
        self.api_key = api_key
        self._cache: dict[str, Airport] = {}
        self._table: dict[str, Airport] | None = None
        self._extra: dict[str, Airport] | None = None

    def _base(self) -> dict[str, Airport]:
        if self._table is None:
            self._table = _load_table(self.table_path)
        return self._table

    def _extras(self) -> dict[str, Airport]:
        if self._extra is None:
            self._extra = (
                _load_table(self.extra_path) if self.extra_path.exists() else {}
            )
        return self._extra

    def _save_extras(self) -> None:
        rows = [
            {"iata": a.iata, "name": a.name, "lat": a.lat, "lon": a.lon, "tz": a.tz}
            for a in self._extras().values()
        ]
        self.extra_path.parent.mkdir(parents=True, exist_ok=True)
        self.extra_path.write_text(json.dumps(rows, indent=2) + "\n", encoding="utf-8")

    def _fetch_remote(self, code: str) -> Airport | None:
        key = self.api_key or os.environ.get("AVIATIONSTACK_API_KEY")
        if not key:
            log.info("AVIATIONSTACK_API_KEY not set; skipping remote lookup for %s", code)
            return None
        try:
            resp = httpx.get(
                _AVIATIONSTACK_URL,
                params={"access_key": key, "iata_code": code},
                timeout=10,
            )
            resp.raise_for_status()
            payload = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise AirportLookupError(f"Airport lookup for {code} failed: {e}") from e
        if "error" in payload:
            raise AirportLookupError(f"Aviationstack error: {payload['error']}")
        return parse_aviationstack_airport(code, payload)

    def lookup(self, code: str) -> Airport | None:
        """Resolve code, or None if no source knows it.

        Raises AirportLookupError when the remote service fails.
        """
        if not is_iata(code):
            raise ValueError(f"Not an IATA airport code: {code!r}")
        code = code.upper()
        cached = self._cache.get(code)
        if cached is not None:
            return cached

        airport = self._base().get(code) or self._extras().get(code)
        if airport is None:
            airport = self._fetch_remote(code)
            if airport is not None:
                self._extras()[code] = airport
                self._save_extras()
        if airport is not None:
            self._cache[code] = airport
        return airport

    def resolve(self, code: str) -> Airport:
        """Resolve code to an Airport.

        Raises:
            ValueError: code is not three letters.
            AirportNotFoundError: No source knows the code.
            AirportLookupError: The remote service failed.
        """
        airport = self.lookup(code)
        if airport is None:
            raise AirportNotFoundError(f"Airport not found: {code.upper()}")
        return airport
