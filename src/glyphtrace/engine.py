"""Shading and raster loop turning a polygon mesh into a glyph frame."""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Sequence, TextIO

from .camera import Camera
from .config import DEFAULT_PALETTE, DEFAULT_PIXEL_ASPECT, HIT_EPSILON
from .geometry import Polygon, nearest_hit
from .linalg import Mat4, Vec3

logger = logging.getLogger(__name__)


def write_frame(stream: TextIO, frame: str) -> None:
    stream.write(frame)
    stream.write("\n")
    stream.flush()


def glyph_index(intensity: float, palette_length: int) -> int:
    """Palette slot for a lit surface.

    Slot 0 is reserved for background and slot 1 for shadow; lit intensities
    in [0, 1] map onto slots 1 through ``palette_length - 1``. The result is
    clamped to the palette bounds.
    """
    index = 1 + int(round(intensity * (palette_length - 2)))
    return max(0, min(palette_length - 1, index))


class RenderEngine:
    """Brute-force ray tracer producing character frames.

    Every pixel casts a primary ray against every polygon. On a hit a shadow
    ray is cast from the hit point towards the point light; an occluded point
    gets the second-darkest glyph, otherwise the glyph is chosen from the
    absolute cosine between the polygon normal and the light direction.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        fov: float,
        pixel_aspect: float = DEFAULT_PIXEL_ASPECT,
        camera_to_world: Optional[Mat4] = None,
        palette: Sequence[str] = DEFAULT_PALETTE,
        epsilon: float = HIT_EPSILON,
    ) -> None:
        if not palette:
            raise ValueError("RenderEngine requires a non-empty palette")
        if camera_to_world is None:
            camera_to_world = Mat4.identity()
        self.camera = Camera(width, height, fov, pixel_aspect, camera_to_world)
        self.palette = tuple(palette)
        self.epsilon = epsilon

    @property
    def width(self) -> int:
        return self.camera.width

    @property
    def height(self) -> int:
        return self.camera.height

    def shade(
        self, origin: Vec3, direction: Vec3, mesh: Sequence[Polygon], light: Vec3
    ) -> str:
        """Glyph seen along a single primary ray."""
        palette = self.palette
        hit = nearest_hit(origin, direction, mesh, epsilon=self.epsilon)
        if hit is None:
            return palette[0]

        light_direction = (light - hit.point).normalized()
        if nearest_hit(hit.point, light_direction, mesh, epsilon=self.epsilon) is not None:
            return palette[min(1, len(palette) - 1)]

        intensity = abs(hit.polygon.plane_normal().dot(light_direction))
        return palette[glyph_index(intensity, len(palette))]

    def render_rows(self, mesh: Sequence[Polygon], light: Vec3) -> Iterator[str]:
        camera = self.camera
        origin = camera.origin()
        last_column = camera.width - 1
        shade = self.shade

        row: List[str] = []
        for x, _, direction in camera.rays():
            row.append(shade(origin, direction, mesh, light))
            if x == last_column:
                yield "".join(row)
                row = []

    def render(self, mesh: Sequence[Polygon], light: Vec3) -> str:
        logger.debug(
            "Rendering %dx%d frame against %d polygons", self.width, self.height, len(mesh)
        )
        rows: List[str] = list(self.render_rows(mesh, light))
        return "\n".join(rows)

    def render_to(self, stream: TextIO, mesh: Sequence[Polygon], light: Vec3) -> None:
        write_frame(stream, self.render(mesh, light))


def render(
    mesh: Sequence[Polygon],
    light: Vec3,
    palette: Sequence[str],
    camera_to_world: Mat4,
    width: int,
    height: int,
    pixel_aspect: float,
    fov: float,
    stream: Optional[TextIO] = None,
) -> str:
    """Render ``mesh`` and return the frame, also writing it to ``stream`` if given."""
    engine = RenderEngine(
        width,
        height,
        fov=fov,
        pixel_aspect=pixel_aspect,
        camera_to_world=camera_to_world,
        palette=palette,
    )
    frame = engine.render(mesh, light)
    if stream is not None:
        write_frame(stream, frame)
    return frame
