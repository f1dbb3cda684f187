"""JSON-ready dictionaries. Instants are UTC strings with millisecond resolution."""

from seatscape.models import PassBy, Recommendation, Sample, SunEvent
from seatscape.timeutils import format_utc


def _event_to_dict(event: SunEvent | None) -> dict | None:
    if event is None:
        return None
    return {
        "utc": format_utc(event.utc),
        "side": event.side,
        "sampleIndex": event.sample_index,
        "place": event.place,
    }


def sample_to_dict(s: Sample) -> dict:
    return {
        "lat": s.lat,
        "lon": s.lon,
        "utc": format_utc(s.utc),
        "az": s.azimuth_deg,
        "alt": s.altitude_deg,
        "course": s.course_deg,
        "side": s.side,
    }


def recommendation_to_dict(rec: Recommendation, include_samples: bool = True) -> dict:
    out = {
        "side": rec.side,
        "leftMinutes": rec.left_minutes,
        "rightMinutes": rec.right_minutes,
        "totalMinutes": rec.total_minutes,
        "sampleMinutes": rec.sample_minutes,
        "peakAltitudeDeg": rec.peak_altitude_deg,
        "confidence": rec.confidence,
        "sunrise": _event_to_dict(rec.sunrise),
        "sunset": _event_to_dict(rec.sunset),
    }
    if include_samples:
        out["samples"] = [sample_to_dict(s) for s in rec.samples]
    return out


def pass_by_to_dict(p: PassBy) -> dict:
    return {
        "name": p.name,
        "lat": p.lat,
        "lon": p.lon,
        "side": p.side,
        "distanceKm": p.distance_km,
        "sampleIndex": p.sample_index,
        "timeUTC": format_utc(p.time_utc) if p.time_utc else None,
        "relevance": p.relevance,
    }
