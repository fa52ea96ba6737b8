"""Route geometry around the International Date Line (lon +/-180).

Points are (lon, lat) pairs, the order map layers expect. The seam
crossing is found by planar interpolation in unwrapped longitude, which
is close enough for drawing routes on a flat projection but is not a
great-circle intersection.
"""
from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Sequence

from .errors import InvalidGeometryError

Point = tuple[float, float]


@dataclass(frozen=True)
class RouteSplit:
    line1: list[Point]
    line2: list[Point]
    idl_point_east: Point
    idl_point_west: Point


def _finite(*vals: float) -> None:
    for v in vals:
        if isinstance(v, bool) or not isinstance(v, (int, float)) or not math.isfinite(v):
            raise InvalidGeometryError(f"Expected a finite number, got {v!r}")


def _point(p: Sequence[float]) -> Point:
    if len(p) < 2:
        raise InvalidGeometryError(f"Expected a (lon, lat) pair, got {p!r}")
    lon, lat = p[0], p[1]
    _finite(lon, lat)
    return (lon, lat)


def crosses_idl(lon_a: float, lon_b: float) -> bool:
    """True when the shorter path between two longitudes crosses the seam."""
    _finite(lon_a, lon_b)
    return abs(lon_a - lon_b) > 180


def split_at_idl(a: Sequence[float], b: Sequence[float]) -> RouteSplit:
    """Split the route a-b into east->seam and seam->west segments.

    The point with the larger raw longitude is labelled east. The caller is
    expected to have checked crosses_idl() first; non-crossing input still
    yields a (degenerate) split.
    """
    pa = _point(a)
    pb = _point(b)
    east, west = (pa, pb) if pa[0] > pb[0] else (pb, pa)

    lon1, lat1 = east
    lon2, lat2 = west
    if abs(lon1 - lon2) > 180:
        lon2 += 360

    if lon2 == lon1:
        lat_at_idl = lat1
    else:
        lat_at_idl = lat1 + (lat2 - lat1) * (180 - lon1) / (lon2 - lon1)

    idl_point_east = (180.0, lat_at_idl)
    idl_point_west = (-180.0, lat_at_idl)
    return RouteSplit(
        line1=[east, idl_point_east],
        line2=[idl_point_west, west],
        idl_point_east=idl_point_east,
        idl_point_west=idl_point_west,
    )


def route_segments(a: Sequence[float], b: Sequence[float]) -> list[list[Point]]:
    """Return the polyline(s) to draw for a route, split at the seam if needed."""
    pa = _point(a)
    pb = _point(b)
    if crosses_idl(pa[0], pb[0]):
        split = split_at_idl(pa, pb)
        return [split.line1, split.line2]
    return [[pa, pb]]
