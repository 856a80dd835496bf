"""Polygon plane math and brute-force ray/mesh intersection."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from .config import HIT_EPSILON
from .linalg import Vec3

logger = logging.getLogger(__name__)

ZERO = Vec3(0.0, 0.0, 0.0)


@dataclass(frozen=True, slots=True)
class Polygon:
    """Planar, consistently wound polygon with an optional cached unit normal."""

    vertices: Tuple[Vec3, ...]
    normal: Optional[Vec3] = None

    def with_normal(self) -> "Polygon":
        return replace(self, normal=plane_normal(self.vertices))

    def plane_normal(self) -> Vec3:
        if self.normal is not None:
            return self.normal
        return plane_normal(self.vertices)


@dataclass(frozen=True, slots=True)
class Hit:
    point: Vec3
    polygon: Polygon
    distance: float


Mesh = List[Polygon]


def plane_normal(vertices: Sequence[Vec3]) -> Vec3:
    """Unit normal of the plane through the first three vertices.

    Returns the zero vector when those vertices are collinear or coincident.
    """
    v0, v1, v2 = vertices[0], vertices[1], vertices[2]
    return (v1 - v0).cross(v2 - v0).normalized()


def annotate_normals(polygons: Sequence[Polygon]) -> Mesh:
    """Return the polygons with freshly computed normals, dropping degenerate ones."""
    annotated: Mesh = []
    dropped = 0
    for polygon in polygons:
        if len(polygon.vertices) < 3:
            dropped += 1
            continue
        polygon = polygon.with_normal()
        if polygon.normal == ZERO:
            dropped += 1
            continue
        annotated.append(polygon)

    if dropped:
        logger.warning("Dropped %d degenerate polygon(s) out of %d", dropped, len(polygons))
    return annotated


def intersect_plane(
    origin: Vec3, direction: Vec3, plane_point: Vec3, normal: Vec3
) -> Optional[Vec3]:
    """Point where the ray meets the plane, or ``None`` if parallel or behind."""
    denominator = direction.dot(normal)
    if denominator == 0.0:
        return None

    d = -normal.dot(plane_point)
    t = -(normal.dot(origin) + d) / denominator
    if t <= 0.0:
        return None
    return origin + direction * t


def _dropped_axis(normal: Vec3) -> int:
    ax, ay, az = abs(normal.x), abs(normal.y), abs(normal.z)
    if az >= ax and az >= ay:
        return 2
    if ay >= ax:
        return 1
    return 0


def _project(point: Vec3, dropped: int) -> Tuple[float, float]:
    if dropped == 2:
        return point.x, point.y
    if dropped == 1:
        return point.x, point.z
    return point.y, point.z


def point_in_polygon(point: Vec3, polygon: Polygon) -> bool:
    """Crossing-number containment test for a point on the polygon's plane.

    Point and vertices are projected to 2D by dropping the axis along which
    the normal is largest, then a horizontal ray is cast towards +X and the
    edge crossings are counted. Points exactly on an edge may land either way.
    """
    dropped = _dropped_axis(polygon.plane_normal())
    px, py = _project(point, dropped)
    projected = [_project(vertex, dropped) for vertex in polygon.vertices]

    crossings = 0
    count = len(projected)
    for index in range(count):
        a = projected[index]
        b = projected[(index + 1) % count]
        if a[1] > b[1]:
            a, b = b, a
        ax, ay = a
        bx, by = b

        if py < ay or py > by:
            continue
        if px >= max(ax, bx):
            continue
        if px < min(ax, bx):
            crossings += 1
            continue

        edge_slope = (by - ay) / (bx - ax) if bx != ax else math.inf
        point_slope = (py - ay) / (px - ax) if px != ax else math.inf
        if edge_slope < point_slope:
            crossings += 1

    return crossings % 2 == 1


def nearest_hit(
    origin: Vec3,
    direction: Vec3,
    mesh: Sequence[Polygon],
    *,
    epsilon: float = HIT_EPSILON,
) -> Optional[Hit]:
    """Closest polygon hit along the ray, ignoring hits within ``epsilon``."""
    closest: Optional[Hit] = None

    for polygon in mesh:
        normal = polygon.plane_normal()
        point = intersect_plane(origin, direction, polygon.vertices[0], normal)
        if point is None:
            continue

        distance = (point - origin).length()
        if distance < epsilon:
            continue
        if closest is not None and distance >= closest.distance:
            continue
        if not point_in_polygon(point, polygon):
            continue

        closest = Hit(point, polygon, distance)

    return closest
