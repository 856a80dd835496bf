"""Brute-force ASCII ray tracer for polygon meshes."""

from .camera import Camera
from .engine import RenderEngine, glyph_index, render
from .geometry import (
    Hit,
    Mesh,
    Polygon,
    annotate_normals,
    intersect_plane,
    nearest_hit,
    plane_normal,
    point_in_polygon,
)
from .linalg import Mat4, Vec3, Vec4
from .objects import cube_mesh, floor_mesh
from .ply import load_mesh, load_ply, parse_ply, parse_ply_text

__all__ = [
    "Camera",
    "Hit",
    "Mat4",
    "Mesh",
    "Polygon",
    "RenderEngine",
    "Vec3",
    "Vec4",
    "annotate_normals",
    "cube_mesh",
    "floor_mesh",
    "glyph_index",
    "intersect_plane",
    "load_mesh",
    "load_ply",
    "nearest_hit",
    "parse_ply",
    "parse_ply_text",
    "plane_normal",
    "point_in_polygon",
    "render",
]
