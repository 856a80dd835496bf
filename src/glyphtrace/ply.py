"""Loader for ASCII PLY meshes.

Only the parts of the format the renderer needs are understood: the vertex
and face element counts from the header, then one ``x y z`` line per vertex
and one ``k i0 i1 ... i(k-1)`` line per face. Malformed content never raises;
offending lines are logged and skipped, and truncated files yield whatever was
read before the end.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple, Union

from .geometry import Mesh, Polygon, annotate_normals
from .linalg import Vec3

logger = logging.getLogger(__name__)


class ParserState(Enum):
    HEADER = "header"
    DATA = "data"


# Line records -------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class BlankLine:
    pass


@dataclass(frozen=True, slots=True)
class MagicLine:
    pass


@dataclass(frozen=True, slots=True)
class FormatLine:
    encoding: str
    version: str


@dataclass(frozen=True, slots=True)
class CommentLine:
    text: str


@dataclass(frozen=True, slots=True)
class ElementLine:
    name: str
    count: int


@dataclass(frozen=True, slots=True)
class PropertyLine:
    definition: str


@dataclass(frozen=True, slots=True)
class EndHeaderLine:
    pass


@dataclass(frozen=True, slots=True)
class NumbersLine:
    values: Tuple[float, ...]


@dataclass(frozen=True, slots=True)
class UnknownLine:
    text: str


HeaderRecord = Union[
    BlankLine,
    MagicLine,
    FormatLine,
    CommentLine,
    ElementLine,
    PropertyLine,
    EndHeaderLine,
    UnknownLine,
]
DataRecord = Union[BlankLine, NumbersLine, UnknownLine]


def classify_header_line(line: str) -> HeaderRecord:
    tokens = line.split()
    if not tokens:
        return BlankLine()

    keyword = tokens[0]
    if keyword == "ply" and len(tokens) == 1:
        return MagicLine()
    if keyword == "end_header":
        return EndHeaderLine()
    if keyword in ("comment", "obj_info"):
        return CommentLine(line.strip()[len(keyword):].strip())
    if keyword == "format" and len(tokens) == 3:
        return FormatLine(tokens[1], tokens[2])
    if keyword == "element" and len(tokens) == 3:
        try:
            return ElementLine(tokens[1], int(tokens[2]))
        except ValueError:
            return UnknownLine(line.rstrip("\n"))
    if keyword == "property":
        return PropertyLine(" ".join(tokens[1:]))
    return UnknownLine(line.rstrip("\n"))


def classify_data_line(line: str) -> DataRecord:
    tokens = line.split()
    if not tokens:
        return BlankLine()
    try:
        return NumbersLine(tuple(float(token) for token in tokens))
    except ValueError:
        return UnknownLine(line.rstrip("\n"))


# Parser -------------------------------------------------------------------


def _face_indices(values: Tuple[float, ...]) -> Optional[List[int]]:
    if any(not value.is_integer() for value in values):
        return None
    count = int(values[0])
    indices = [int(value) for value in values[1:]]
    if count < 3 or len(indices) < count:
        return None
    return indices[:count]


def parse_ply(lines: Iterable[str]) -> List[Polygon]:
    """Parse ASCII PLY lines into polygons without normals.

    Vertex Y and Z are swapped on load so that Y is vertical and Z is depth.
    Faces share the vertex objects they reference.
    """
    state = ParserState.HEADER
    vertex_count = 0
    face_count = 0
    vertices: List[Optional[Vec3]] = []
    polygons: List[Polygon] = []
    data_index = 0

    for line_number, line in enumerate(lines, start=1):
        if state is ParserState.HEADER:
            record = classify_header_line(line)
            if isinstance(record, EndHeaderLine):
                state = ParserState.DATA
            elif isinstance(record, FormatLine):
                if record.encoding != "ascii":
                    logger.warning(
                        "Unsupported PLY format '%s'; only ascii is read", record.encoding
                    )
                    return []
            elif isinstance(record, ElementLine):
                if record.name == "vertex":
                    vertex_count = max(0, record.count)
                elif record.name == "face":
                    face_count = max(0, record.count)
                else:
                    logger.warning(
                        "Ignoring element '%s' declared on line %d", record.name, line_number
                    )
            elif isinstance(record, UnknownLine):
                logger.debug("Unrecognised header line %d: %r", line_number, record.text)
            continue

        if data_index >= vertex_count + face_count:
            logger.debug("Ignoring trailing data from line %d", line_number)
            break

        record = classify_data_line(line)
        if isinstance(record, BlankLine):
            continue
        data_index += 1
        is_vertex = data_index <= vertex_count

        if isinstance(record, UnknownLine):
            logger.warning("Skipping non-numeric data on line %d: %r", line_number, record.text)
            if is_vertex:
                vertices.append(None)
            continue

        values = record.values
        if is_vertex:
            if len(values) < 3:
                logger.warning("Vertex on line %d has fewer than 3 coordinates", line_number)
                vertices.append(None)
            else:
                vertices.append(Vec3(values[0], values[2], values[1]))
            continue

        indices = _face_indices(values)
        if indices is None:
            logger.warning("Skipping malformed face on line %d", line_number)
            continue
        if any(not 0 <= index < len(vertices) or vertices[index] is None for index in indices):
            logger.warning("Skipping face on line %d with invalid vertex index", line_number)
            continue
        polygons.append(Polygon(tuple(vertices[index] for index in indices)))  # type: ignore[misc]

    if state is ParserState.HEADER:
        logger.warning("PLY input ended before end_header")
    elif data_index < vertex_count + face_count:
        logger.warning(
            "PLY input truncated: read %d of %d data lines",
            data_index,
            vertex_count + face_count,
        )

    logger.debug("Parsed %d vertices and %d polygons", len(vertices), len(polygons))
    return polygons


def parse_ply_text(text: str) -> List[Polygon]:
    return parse_ply(text.splitlines())


def load_ply(path: Union[str, os.PathLike]) -> List[Polygon]:
    with open(path, "r", encoding="utf-8") as handle:
        polygons = parse_ply(handle)
    logger.info("Loaded %d polygons from %s", len(polygons), path)
    return polygons


def load_mesh(path: Union[str, os.PathLike]) -> Mesh:
    """Load a PLY file and annotate every polygon with its plane normal."""
    return annotate_normals(load_ply(path))
