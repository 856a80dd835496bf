"""Pinhole camera producing world-space primary rays."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, Tuple

from .linalg import Mat4, Vec3, Vec4

_CAMERA_ORIGIN = Vec4(0.0, 0.0, 0.0, 1.0)


@dataclass(frozen=True)
class Camera:
    """Camera looking down -Z in its own space.

    ``fov`` is the vertical field of view in radians. ``pixel_aspect`` scales
    the horizontal extent to compensate for non-square pixels (terminal cells
    are about half as wide as they are tall).
    """

    width: int
    height: int
    fov: float
    pixel_aspect: float = 1.0
    camera_to_world: Mat4 = field(default_factory=Mat4.identity)

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError("Camera requires width and height >= 1")
        if not 0.0 < self.fov < math.pi:
            raise ValueError("Camera field of view must be between 0 and pi radians")

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    @property
    def tan_half_fov(self) -> float:
        return math.tan(self.fov / 2.0)

    def origin(self) -> Vec3:
        return self.camera_to_world.transform(_CAMERA_ORIGIN).xyz()

    def ray_direction(self, pixel_x: int, pixel_y: int) -> Vec3:
        tan_half_fov = self.tan_half_fov
        ndc_x = ((pixel_x + 0.5) / self.width) * 2.0 - 1.0
        ndc_y = 1.0 - ((pixel_y + 0.5) / self.height) * 2.0

        px = ndc_x * self.aspect_ratio * self.pixel_aspect * tan_half_fov
        py = ndc_y * tan_half_fov

        target = self.camera_to_world.transform(Vec4(px, py, -1.0, 1.0))
        origin = self.camera_to_world.transform(_CAMERA_ORIGIN)
        return (target - origin).xyz().normalized()

    def rays(self) -> Iterator[Tuple[int, int, Vec3]]:
        """Yield ``(x, y, direction)`` for every pixel in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y, self.ray_direction(x, y)
