"""SVG top-down aircraft view with the sun's direction and window glare.

Produces a self-contained SVG string for embedding via st.markdown() or
st.components.v1.html(). viewBox="0 0 200 100": the aircraft points up
(nose at the top), so a relative azimuth of +90° puts the sun on the
right edge (F side) and -90° on the left edge (A side).
"""

from __future__ import annotations

import math

from seatscape.models import Sample
from seatscape.plane import sun_plane_relation

_PLANE_COLOR = "#c9d1d9"
_SUN_COLOR = "#fbbf24"
_GLARE_COLOR = "#fde68a"

# Silhouette: fuselage, wings and tail as cubic beziers, nose at (100, 5).
_PLANE_PATH = (
    "M100 5 C112 12 122 24 122 38 C155 40 175 55 175 60 C175 65 155 80 122 82 "
    "C132 86 142 90 150 95 C140 98 120 100 100 99 C80 100 60 98 50 95 "
    "C58 90 68 86 78 82 C45 80 25 65 25 60 C25 55 45 40 78 38 "
    "C78 24 88 12 100 5 Z"
)

_CENTER = (100.0, 50.0)
_SUN_ORBIT = 42.0
_SUN_RADIUS = 6.0


def _sun_xy(relative_az_deg: float) -> tuple[float, float]:
    """Sun centre on a ring around the aircraft. SVG y grows downward."""
    a = math.radians(relative_az_deg)
    cx, cy = _CENTER
    return cx + math.sin(a) * _SUN_ORBIT * 2, cy - math.cos(a) * _SUN_ORBIT


def render_plane_svg(sample: Sample, width: int = 320) -> str:
    """Return an SVG of the aircraft with the sun placed at its relative bearing.

    The glare overlay on the lit half is scaled by sun altitude. Below the
    effective altitude the sun is drawn hollow and no glare is shown.

    Args:
        sample: Simulation sample to depict.
        width: Rendered pixel width; height is half of it.

    Returns:
        SVG markup string.
    """
    rel = sun_plane_relation(sample.azimuth_deg, sample.course_deg, sample.altitude_deg)
    left_opacity = rel.intensity if rel.side == "A" else 0.0
    right_opacity = rel.intensity if rel.side == "F" else 0.0
    sx, sy = _sun_xy(rel.relative_az_deg)
    sun_fill = _SUN_COLOR if rel.side != "none" else "none"

    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 200 100"'
        f' width="{width}" height="{width // 2}" role="img"'
        f' aria-label="Sun relative to the aircraft">',
        # glare halves behind the silhouette
        f'<rect x="20" y="26" width="80" height="48" fill="{_GLARE_COLOR}"'
        f' fill-opacity="{left_opacity:.3f}"/>',
        f'<rect x="100" y="26" width="80" height="48" fill="{_GLARE_COLOR}"'
        f' fill-opacity="{right_opacity:.3f}"/>',
        f'<path d="{_PLANE_PATH}" fill="{_PLANE_COLOR}"/>',
        f'<circle cx="{sx:.2f}" cy="{sy:.2f}" r="{_SUN_RADIUS}" fill="{sun_fill}"'
        f' stroke="{_SUN_COLOR}" stroke-width="1"/>',
        f'<text x="4" y="96" font-size="7" fill="{_PLANE_COLOR}">A</text>',
        f'<text x="190" y="96" font-size="7" fill="{_PLANE_COLOR}">F</text>',
        "</svg>",
    ]
    return "".join(parts)
