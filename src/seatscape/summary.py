"""Plain-text recommendation summary, for the result card and the share/copy action."""

from seatscape.models import Airport, Recommendation
from seatscape.timeutils import format_local

_SIDE_LABEL = {"A": "A (left)", "F": "F (right)"}


def sun_share_pct(rec: Recommendation) -> int:
    """Share of sunlit minutes on the sunnier side, as a whole percent."""
    total = rec.left_minutes + rec.right_minutes
    if total == 0:
        return 0
    return round(max(rec.left_minutes, rec.right_minutes) / total * 100)


def headline(rec: Recommendation) -> str:
    letter = rec.side[0]
    return f"Pick {letter} ({'left' if letter == 'A' else 'right'})"


def rationale(rec: Recommendation, preference: str) -> str:
    pct = sun_share_pct(rec)
    if preference == "avoid":
        return f"keeps direct sun away for about {100 - pct}% of the flight"
    return f"sun graces that side for roughly {pct}% of the flight"


def share_text(
    rec: Recommendation, origin: Airport, dest: Airport, preference: str
) -> str:
    """One-paragraph summary. Sunrise is shown in the origin's zone, sunset in the destination's."""
    parts = [f"{headline(rec)} — {rationale(rec, preference)}."]
    if rec.sunrise is not None:
        t = format_local(rec.sunrise.utc, origin.tz, "%H:%M")
        near = f" near {rec.sunrise.place}" if rec.sunrise.place else ""
        parts.append(
            f"Sunrise ~{t} on {_SIDE_LABEL[rec.sunrise.side]}{near} "
            f"({origin.iata} time, {origin.tz})."
        )
    if rec.sunset is not None:
        t = format_local(rec.sunset.utc, dest.tz, "%H:%M")
        near = f" near {rec.sunset.place}" if rec.sunset.place else ""
        parts.append(
            f"Sunset ~{t} on {_SIDE_LABEL[rec.sunset.side]}{near} "
            f"({dest.iata} time, {dest.tz})."
        )
    if rec.peak_altitude_deg is None:
        parts.append("The sun stays low or below the horizon for the whole flight.")
    return " ".join(parts)
