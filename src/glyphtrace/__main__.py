"""Command-line entry point: render a PLY mesh or a demo scene to stdout."""

from __future__ import annotations

import argparse
import logging
import math
import sys
import time
from typing import Callable, Optional, Sequence

from .config import (
    DEFAULT_CAMERA_DISTANCE,
    DEFAULT_FOV_DEGREES,
    DEFAULT_HEIGHT,
    DEFAULT_LIGHT,
    DEFAULT_PALETTE,
    DEFAULT_PIXEL_ASPECT,
    DEFAULT_WIDTH,
)
from .engine import RenderEngine
from .geometry import Mesh
from .linalg import Mat4, Vec3
from .logging_config import setup_logging
from .objects import cube_mesh, floor_mesh
from .ply import load_mesh

logger = logging.getLogger("glyphtrace.cli")


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="glyphtrace", description="Ray trace a polygon mesh into ASCII art"
    )
    parser.add_argument(
        "mesh",
        nargs="?",
        default=None,
        help="ASCII PLY file to render (default: a demo scene)",
    )
    parser.add_argument(
        "--object",
        type=str,
        default="cube",
        choices=["cube", "cube-on-floor"],
        help="Demo scene rendered when no mesh file is given",
    )
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="Frame width in characters")
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="Frame height in characters")
    parser.add_argument(
        "--fov",
        type=float,
        default=DEFAULT_FOV_DEGREES,
        help=f"Vertical field of view in degrees (default: {DEFAULT_FOV_DEGREES:g})",
    )
    parser.add_argument(
        "--pixel-aspect",
        type=float,
        default=DEFAULT_PIXEL_ASPECT,
        help=f"Character width divided by height (default: {DEFAULT_PIXEL_ASPECT:g})",
    )
    parser.add_argument(
        "--light",
        type=float,
        nargs=3,
        metavar=("X", "Y", "Z"),
        default=DEFAULT_LIGHT,
        help="Point light position in world space",
    )
    parser.add_argument(
        "--palette",
        type=str,
        default=DEFAULT_PALETTE,
        help="Glyphs ordered from darkest to brightest",
    )
    parser.add_argument(
        "--distance",
        type=float,
        default=DEFAULT_CAMERA_DISTANCE,
        help="Distance from the camera to the world origin",
    )
    parser.add_argument("--yaw", type=float, default=0.6, help="Camera yaw in radians")
    parser.add_argument("--pitch", type=float, default=-0.35, help="Camera pitch in radians")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    parser.add_argument("--log-file", type=str, default=None, help="Also write logs to this file")
    return parser.parse_args(argv)


def camera_transform(distance: float, yaw: float, pitch: float) -> Mat4:
    """Camera orbiting the origin: pulled back along +Z, then pitched, then yawed."""
    return Mat4.rotation_y(yaw) @ Mat4.rotation_x(pitch) @ Mat4.translation(0.0, 0.0, distance)


def _demo_scene(name: str) -> Mesh:
    factories: dict[str, Callable[[], Mesh]] = {
        "cube": lambda: cube_mesh(2.0),
        "cube-on-floor": lambda: cube_mesh(2.0) + floor_mesh(8.0, tiles=2, height=-1.0),
    }
    try:
        factory = factories[name]
    except KeyError as exc:  # pragma: no cover - safeguarded by argparse choices
        raise ValueError(f"Unknown scene '{name}'") from exc
    return factory()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_arguments(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)

    if args.mesh is not None:
        try:
            mesh = load_mesh(args.mesh)
        except OSError as exc:
            logger.error("Could not read mesh '%s': %s", args.mesh, exc)
            return 1
    else:
        mesh = _demo_scene(args.object)

    try:
        engine = RenderEngine(
            args.width,
            args.height,
            fov=math.radians(args.fov),
            pixel_aspect=args.pixel_aspect,
            camera_to_world=camera_transform(args.distance, args.yaw, args.pitch),
            palette=args.palette,
        )
    except ValueError as exc:
        logger.error("Invalid render settings: %s", exc)
        return 1

    started = time.perf_counter()
    engine.render_to(sys.stdout, mesh, Vec3.from_sequence(args.light))
    logger.info(
        "Rendered %dx%d frame with %d polygons in %.3fs",
        engine.width,
        engine.height,
        len(mesh),
        time.perf_counter() - started,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
