"""Predefined mesh helpers."""

from __future__ import annotations

from typing import List, Tuple

from .geometry import Mesh, Polygon, annotate_normals
from .linalg import Vec3


def cube_mesh(size: float = 2.0) -> Mesh:
    """Return a cube of six outward-facing quads centred at the origin."""

    half = size / 2.0

    vertices = {
        "lbf": Vec3(-half, -half, half),  # left-bottom-front
        "rbf": Vec3(half, -half, half),
        "rtf": Vec3(half, half, half),
        "ltf": Vec3(-half, half, half),
        "lbb": Vec3(-half, -half, -half),  # left-bottom-back
        "rbb": Vec3(half, -half, -half),
        "rtb": Vec3(half, half, -half),
        "ltb": Vec3(-half, half, -half),
    }

    faces: Tuple[Tuple[str, str, str, str], ...] = (
        ("lbf", "rbf", "rtf", "ltf"),  # front (+Z, towards the default camera)
        ("rbb", "lbb", "ltb", "rtb"),  # back
        ("lbb", "lbf", "ltf", "ltb"),  # left
        ("rbf", "rbb", "rtb", "rtf"),  # right
        ("ltf", "rtf", "rtb", "ltb"),  # top
        ("lbb", "rbb", "rbf", "lbf"),  # bottom
    )

    return annotate_normals(
        [Polygon(tuple(vertices[name] for name in face)) for face in faces]
    )


def floor_mesh(size: float = 12.0, *, tiles: int = 1, height: float = 0.0) -> Mesh:
    """Return a square floor of quads on the plane Y = ``height``, facing +Y."""

    tiles = max(1, tiles)
    half = size / 2.0
    step = size / tiles

    polygons: List[Polygon] = []
    for ix in range(tiles):
        for iz in range(tiles):
            x0 = -half + ix * step
            x1 = x0 + step
            z0 = -half + iz * step
            z1 = z0 + step

            polygons.append(
                Polygon(
                    (
                        Vec3(x0, height, z0),
                        Vec3(x0, height, z1),
                        Vec3(x1, height, z1),
                        Vec3(x1, height, z0),
                    )
                )
            )

    return annotate_normals(polygons)
