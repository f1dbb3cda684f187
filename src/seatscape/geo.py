"""Great-circle geometry on a mean-radius sphere.

All angles are in degrees and all distances in kilometres. Point arguments
are anything exposing ``lat``/``lon`` attributes (GeoPoint, Airport,
NamedPlace, Sample).
"""

import math
from collections.abc import Sequence
from typing import Protocol

from seatscape.models import GeoPoint

R_EARTH_KM = 6371.0088
WEB_MERCATOR_MAX_LAT = 85.05112878
TRACK_EPSILON = 1e-6


class LatLon(Protocol):
    @property
    def lat(self) -> float: ...

    @property
    def lon(self) -> float: ...


def wrap_to_180(x: float) -> float:
    """Normalize an angle to (-180, 180]. Positive means clockwise (to the right)."""
    a = (x + 180.0) % 360.0 - 180.0
    if a <= -180.0:
        a += 360.0
    return a


def wrap_to_360(x: float) -> float:
    """Normalize an angle to [0, 360)."""
    a = x % 360.0
    # float modulo of a tiny negative number rounds up to 360.0
    return 0.0 if a >= 360.0 else a


def normalize_lon(lon: float) -> float:
    """Normalize a longitude to (-180, 180]."""
    return wrap_to_180(lon)


def clamp_web_mercator_lat(lat: float) -> float:
    return max(-WEB_MERCATOR_MAX_LAT, min(WEB_MERCATOR_MAX_LAT, lat))


def _central_angle(a: LatLon, b: LatLon) -> float:
    """Haversine central angle in radians, with the square-root argument clamped."""
    phi1, phi2 = math.radians(a.lat), math.radians(b.lat)
    d_phi = math.radians(b.lat - a.lat)
    d_lambda = math.radians(b.lon - a.lon)
    s = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    s = min(1.0, max(0.0, s))
    return 2 * math.atan2(math.sqrt(s), math.sqrt(1 - s))


def distance_km(a: LatLon, b: LatLon) -> float:
    """Haversine great-circle distance in km."""
    return R_EARTH_KM * _central_angle(a, b)


def initial_bearing(a: LatLon, b: LatLon) -> float:
    """Initial bearing from a to b (0..360 from North, clockwise)."""
    phi1, phi2 = math.radians(a.lat), math.radians(b.lat)
    d_lambda = math.radians(b.lon - a.lon)
    y = math.sin(d_lambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(
        phi2
    ) * math.cos(d_lambda)
    return wrap_to_360(math.degrees(math.atan2(y, x)))


def intermediate_point(a: LatLon, b: LatLon, f: float) -> GeoPoint:
    """Point at fraction f of the great circle from a to b (spherical slerp).

    Args:
        a: Start point.
        b: End point.
        f: Fraction along the path; 0 returns a, 1 returns b.

    Returns:
        GeoPoint on the great circle. When a and b coincide, a itself.
    """
    delta = _central_angle(a, b)
    if delta < 1e-12:
        return GeoPoint(a.lat, a.lon)

    phi1, lambda1 = math.radians(a.lat), math.radians(a.lon)
    phi2, lambda2 = math.radians(b.lat), math.radians(b.lon)

    sin_delta = math.sin(delta)
    k_a = math.sin((1 - f) * delta) / sin_delta
    k_b = math.sin(f * delta) / sin_delta

    x = k_a * math.cos(phi1) * math.cos(lambda1) + k_b * math.cos(phi2) * math.cos(
        lambda2
    )
    y = k_a * math.cos(phi1) * math.sin(lambda1) + k_b * math.cos(phi2) * math.sin(
        lambda2
    )
    z = k_a * math.sin(phi1) + k_b * math.sin(phi2)

    phi = math.atan2(z, math.sqrt(x * x + y * y))
    lam = math.atan2(y, x)
    return GeoPoint(math.degrees(phi), math.degrees(lam))


def track_at(a: LatLon, b: LatLon, f: float) -> float:
    """Instantaneous course at fraction f, as the bearing across p(f-ε) → p(f+ε)."""
    f1 = max(0.0, min(1.0, f - TRACK_EPSILON))
    f2 = max(0.0, min(1.0, f + TRACK_EPSILON))
    return initial_bearing(intermediate_point(a, b, f1), intermediate_point(a, b, f2))


def cross_track_km(p: LatLon, a: LatLon, b: LatLon) -> float:
    """Signed distance of p from the great circle through a → b.

    Positive when p lies to the right of the course, negative to the left.
    """
    delta13 = _central_angle(a, p)
    theta13 = math.radians(initial_bearing(a, p))
    theta12 = math.radians(initial_bearing(a, b))
    s = math.sin(delta13) * math.sin(theta13 - theta12)
    return R_EARTH_KM * math.asin(max(-1.0, min(1.0, s)))


def along_track_km(p: LatLon, a: LatLon, b: LatLon) -> float:
    """Distance from a, along a → b, to the point closest to p. Negative when behind a."""
    delta13 = _central_angle(a, p)
    delta_xt = cross_track_km(p, a, b) / R_EARTH_KM
    cos_xt = math.cos(delta_xt)
    if cos_xt == 0.0:
        return 0.0
    ratio = max(-1.0, min(1.0, math.cos(delta13) / cos_xt))
    delta_at = math.acos(ratio)
    theta13 = math.radians(initial_bearing(a, p))
    theta12 = math.radians(initial_bearing(a, b))
    sign = 1.0 if math.cos(theta12 - theta13) >= 0 else -1.0
    return sign * delta_at * R_EARTH_KM


def split_at_antimeridian(
    points: Sequence[tuple[float, float]], clamp_lat: bool = True
) -> list[list[tuple[float, float]]]:
    """Split a route of (lon, lat) pairs into polylines that never jump across ±180°.

    Where consecutive points straddle the antimeridian, the exact crossing
    latitude is interpolated; the current polyline ends on the boundary and
    the next one starts from the mirrored boundary.

    Args:
        points: Ordered (lon, lat) pairs along the route.
        clamp_lat: Clamp latitudes to the web-mercator limit (planar maps).
            Pass False to keep the unclamped geometry.

    Returns:
        List of polylines, each a list of (lon, lat). Input is not modified.
    """

    def _norm(lon: float, lat: float) -> tuple[float, float]:
        return normalize_lon(lon), clamp_web_mercator_lat(lat) if clamp_lat else lat

    if len(points) < 2:
        return [[_norm(lon, lat) for lon, lat in points]]

    out: list[list[tuple[float, float]]] = []
    seg: list[tuple[float, float]] = [_norm(*points[0])]

    for raw_lon, raw_lat in points[1:]:
        lon0, lat0 = seg[-1]
        lon1, lat1 = _norm(raw_lon, raw_lat)

        if abs(lon1 - lon0) > 180.0:
            target = 180.0 if lon0 >= 0 else -180.0
            # continue lon1 past the boundary so the interpolation is monotone
            lon1_unwrapped = lon1 + 360.0 if target > 0 else lon1 - 360.0
            t = (target - lon0) / (lon1_unwrapped - lon0)
            lat_cut = lat0 + t * (lat1 - lat0)
            seg.append((target, lat_cut))
            out.append(seg)
            seg = [(-target, lat_cut), (lon1, lat1)]
        else:
            seg.append((lon1, lat1))

    out.append(seg)
    return out
