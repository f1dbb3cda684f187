"""City pass-by detection — named places the route flies near, by cabin side."""

import json
import math
from collections import defaultdict
from collections.abc import Sequence
from pathlib import Path

from seatscape.geo import (
    along_track_km,
    cross_track_km,
    distance_km,
    initial_bearing,
    wrap_to_180,
)
from seatscape.models import CabinSide, NamedPlace, PassBy, Sample

_ROOT = Path(__file__).parent.parent.parent

DEFAULT_THRESHOLD_KM = 75.0
DEDUPE_WINDOW_SAMPLES = 2
STRATEGIES = ("nearest-sample", "cross-track")


def relevance(dist_km: float, threshold_km: float) -> float:
    """Score 1 on the path falling to 0 at the threshold. Advisory only."""
    x = min(1.0, max(0.0, dist_km / max(1.0, threshold_km)))
    return round(1 - x * x, 3)


def _nearest_sample(samples: Sequence[Sample], place: NamedPlace) -> tuple[int, float]:
    best_idx, best_d = -1, math.inf
    for i, s in enumerate(samples):
        d = distance_km(s, place)
        if d < best_d:
            best_idx, best_d = i, d
    return best_idx, best_d


def _side_from_bearing(sample: Sample, place: NamedPlace) -> CabinSide:
    rel = wrap_to_180(initial_bearing(sample, place) - sample.course_deg)
    return "F" if rel > 0 else "A"


def _pass_by(
    place: NamedPlace,
    side: CabinSide,
    dist: float,
    index: int,
    samples: Sequence[Sample],
    threshold_km: float,
) -> PassBy:
    return PassBy(
        name=place.name,
        lat=place.lat,
        lon=place.lon,
        side=side,
        distance_km=round(dist),
        sample_index=index,
        time_utc=samples[index].utc,
        relevance=relevance(dist, threshold_km),
    )


def dedupe_adjacent(
    events: Sequence[PassBy], window: int = DEDUPE_WINDOW_SAMPLES
) -> tuple[PassBy, ...]:
    """Collapse runs of same-name detections into the closest one.

    A run continues while consecutive detections are at most `window`
    samples apart, so no two kept entries for a name are within `window`.

    Returns events in time order.
    """
    by_name: dict[str, list[PassBy]] = defaultdict(list)
    for e in events:
        by_name[e.name].append(e)

    result: list[PassBy] = []
    for group in by_name.values():
        group.sort(key=lambda e: e.sample_index)
        i = 0
        while i < len(group):
            best = group[i]
            j = i + 1
            while j < len(group) and group[j].sample_index - group[j - 1].sample_index <= window:
                if group[j].distance_km < best.distance_km:
                    best = group[j]
                j += 1
            result.append(best)
            i = j
    return tuple(sorted(result, key=lambda e: e.sample_index))


def detect_city_pass_bys(
    samples: Sequence[Sample],
    catalog: Sequence[NamedPlace],
    threshold_km: float = DEFAULT_THRESHOLD_KM,
    strategy: str = "nearest-sample",
    window: int = DEDUPE_WINDOW_SAMPLES,
) -> tuple[PassBy, ...]:
    """Find catalog places within threshold_km of the route.

    Strategies:
        ``nearest-sample``: distance to the closest sample; side from the
        bearing to the place relative to that sample's course.
        ``cross-track``: signed perpendicular distance to the great circle
        from the first to the last sample; places whose foot point falls
        outside the route are ignored. Side from the sign.

    Args:
        samples: Simulation samples, in time order.
        catalog: Named places. Order does not matter.
        threshold_km: Inclusion distance.
        strategy: One of STRATEGIES.
        window: Same-name detections at most this many samples apart are merged.

    Returns:
        PassBy tuple ordered by sample index.
    """
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown pass-by strategy: {strategy!r}")
    if not samples:
        return ()

    events: list[PassBy] = []
    if strategy == "nearest-sample":
        for place in catalog:
            idx, dist = _nearest_sample(samples, place)
            if idx < 0 or dist > threshold_km:
                continue
            side = _side_from_bearing(samples[idx], place)
            events.append(_pass_by(place, side, dist, idx, samples, threshold_km))
    else:
        start, end = samples[0], samples[-1]
        route_km = distance_km(start, end)
        for place in catalog:
            xtd = cross_track_km(place, start, end)
            if abs(xtd) > threshold_km:
                continue
            atd = along_track_km(place, start, end)
            if atd < 0 or atd > route_km:
                continue
            idx, _ = _nearest_sample(samples, place)
            side: CabinSide = "F" if xtd > 0 else "A"
            events.append(_pass_by(place, side, abs(xtd), idx, samples, threshold_km))

    return dedupe_adjacent(events, window)


def sort_pass_bys(items: Sequence[PassBy], mode: str = "time") -> list[PassBy]:
    """Display ordering: "time" (sample index, then distance) or "distance"."""
    if mode == "time":
        return sorted(items, key=lambda p: (p.sample_index, p.distance_km))
    if mode == "distance":
        return sorted(items, key=lambda p: (p.distance_km, p.sample_index))
    raise ValueError(f"Unknown sort mode: {mode!r}")


def load_city_catalog(path: Path | None = None) -> tuple[NamedPlace, ...]:
    """Parse resources/cities.json and return the named-place catalog.

    File format: a JSON list of ``{"name", "lat", "lon", "tz"?}`` objects.
    """
    catalog_path = path or _ROOT / "resources" / "cities.json"
    with catalog_path.open(encoding="utf-8") as f:
        raw = json.load(f)
    return tuple(
        NamedPlace(
            name=entry["name"],
            lat=float(entry["lat"]),
            lon=float(entry["lon"]),
            tz=entry.get("tz"),
        )
        for entry in raw
    )
