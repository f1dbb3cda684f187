"""Sun position relative to the aircraft nose, for glare display."""

import math
from collections.abc import Sequence

from seatscape.geo import wrap_to_180
from seatscape.models import ExtendedSample, Sample, SampleSide, SunPlaneRelation
from seatscape.sun import ALTITUDE_THRESHOLD_DEG, is_sun_effective

# Sun within this many degrees of the nose or tail lights neither window.
WINDOW_DEAD_BAND_DEG = 20.0
# Narrower band used for the per-sample glare flag.
GLARE_DEAD_BAND_DEG = 10.0


def sun_plane_relation(
    azimuth_deg: float, course_deg: float, altitude_deg: float
) -> SunPlaneRelation:
    """Which window the sun shines through, and how strongly.

    Args:
        azimuth_deg: Sun azimuth (0..360 from North).
        course_deg: Aircraft course (0..360 from North).
        altitude_deg: Sun altitude.

    Returns:
        SunPlaneRelation. Side is "none" below the altitude threshold or
        when the sun is straight ahead/behind.
    """
    rel = wrap_to_180(azimuth_deg - course_deg)
    intensity = max(0.0, min(1.0, altitude_deg / 90.0))
    side: SampleSide = "none"
    if is_sun_effective(altitude_deg):
        if WINDOW_DEAD_BAND_DEG <= abs(rel) <= 180.0 - WINDOW_DEAD_BAND_DEG:
            side = "F" if rel > 0 else "A"
    return SunPlaneRelation(relative_az_deg=rel, side=side, intensity=intensity)


def extend_samples(samples: Sequence[Sample]) -> tuple[ExtendedSample, ...]:
    """Attach relative azimuth and a cosine glare factor to each sample."""
    out: list[ExtendedSample] = []
    for s in samples:
        rel = wrap_to_180(s.azimuth_deg - s.course_deg)
        above = s.altitude_deg >= ALTITUDE_THRESHOLD_DEG
        glare = max(0.0, math.cos(math.radians(abs(rel)))) if above else 0.0
        out.append(
            ExtendedSample(
                sample=s,
                relative_az_deg=rel,
                glare=glare,
                effective=above and abs(rel) > GLARE_DEAD_BAND_DEG,
            )
        )
    return tuple(out)
