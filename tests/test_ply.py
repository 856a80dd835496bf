import os
import tempfile
import unittest

from glyphtrace.linalg import Vec3
from glyphtrace.ply import (
    BlankLine,
    CommentLine,
    ElementLine,
    EndHeaderLine,
    FormatLine,
    MagicLine,
    NumbersLine,
    PropertyLine,
    UnknownLine,
    classify_data_line,
    classify_header_line,
    load_mesh,
    load_ply,
    parse_ply_text,
)

SQUARE_PLY = """ply
format ascii 1.0
comment unit square split into two triangles
element vertex 4
property float x
property float y
property float z
element face 2
property list uchar int vertex_indices
end_header
0 0 0
1 0 0
1 0 1
0 0 1
3 0 1 2
3 0 2 3
"""


class LineClassifierTests(unittest.TestCase):
    def test_header_lines(self) -> None:
        self.assertEqual(classify_header_line("ply\n"), MagicLine())
        self.assertEqual(classify_header_line("format ascii 1.0"), FormatLine("ascii", "1.0"))
        self.assertEqual(classify_header_line("comment made by hand"), CommentLine("made by hand"))
        self.assertEqual(classify_header_line("element vertex 8"), ElementLine("vertex", 8))
        self.assertEqual(classify_header_line("property float x"), PropertyLine("float x"))
        self.assertEqual(classify_header_line("end_header\n"), EndHeaderLine())
        self.assertEqual(classify_header_line("   \n"), BlankLine())
        self.assertIsInstance(classify_header_line("element vertex many"), UnknownLine)
        self.assertIsInstance(classify_header_line("nonsense"), UnknownLine)

    def test_data_lines(self) -> None:
        self.assertEqual(classify_data_line("1 2.5 -3\n"), NumbersLine((1.0, 2.5, -3.0)))
        self.assertEqual(classify_data_line("\n"), BlankLine())
        self.assertIsInstance(classify_data_line("1 two 3"), UnknownLine)


class ParsePlyTests(unittest.TestCase):
    def test_parses_vertices_and_faces(self) -> None:
        polygons = parse_ply_text(SQUARE_PLY)
        self.assertEqual(len(polygons), 2)
        self.assertEqual(len(polygons[0].vertices), 3)
        self.assertIsNone(polygons[0].normal)

    def test_swaps_y_and_z(self) -> None:
        polygons = parse_ply_text(SQUARE_PLY)
        self.assertEqual(polygons[0].vertices[2], Vec3(1.0, 1.0, 0.0))
        self.assertEqual(polygons[1].vertices[2], Vec3(0.0, 1.0, 0.0))

    def test_faces_share_vertex_objects(self) -> None:
        first, second = parse_ply_text(SQUARE_PLY)
        self.assertIs(first.vertices[0], second.vertices[0])
        self.assertIs(first.vertices[2], second.vertices[1])

    def test_polygon_faces(self) -> None:
        text = "\n".join(
            [
                "ply",
                "format ascii 1.0",
                "element vertex 4",
                "element face 1",
                "end_header",
                "0 0 0",
                "1 0 0",
                "1 1 0",
                "0 1 0",
                "4 0 1 2 3",
            ]
        )
        (quad,) = parse_ply_text(text)
        self.assertEqual(len(quad.vertices), 4)

    def test_header_only_lines_without_magic(self) -> None:
        text = "element vertex 3\nelement face 1\nend_header\n0 0 0\n1 0 0\n0 1 0\n3 0 1 2\n"
        self.assertEqual(len(parse_ply_text(text)), 1)

    def test_missing_end_header_yields_nothing(self) -> None:
        text = "ply\nformat ascii 1.0\nelement vertex 3\nelement face 1\n0 0 0\n"
        with self.assertLogs("glyphtrace.ply", level="WARNING"):
            self.assertEqual(parse_ply_text(text), [])

    def test_truncated_input_keeps_complete_faces(self) -> None:
        truncated = SQUARE_PLY.rsplit("\n", 2)[0]
        with self.assertLogs("glyphtrace.ply", level="WARNING"):
            polygons = parse_ply_text(truncated)
        self.assertEqual(len(polygons), 1)

    def test_binary_format_is_rejected(self) -> None:
        text = SQUARE_PLY.replace("format ascii 1.0", "format binary_little_endian 1.0")
        with self.assertLogs("glyphtrace.ply", level="WARNING"):
            self.assertEqual(parse_ply_text(text), [])

    def test_bad_faces_are_skipped(self) -> None:
        text = "\n".join(
            [
                "ply",
                "format ascii 1.0",
                "element vertex 3",
                "element face 5",
                "end_header",
                "0 0 0",
                "1 0 0",
                "0 1 0",
                "3 0 1 7",
                "2 0 1",
                "3 0 1",
                "3 0 one 2",
                "3 0 1 2",
            ]
        )
        with self.assertLogs("glyphtrace.ply", level="WARNING") as logs:
            polygons = parse_ply_text(text)
        self.assertEqual(len(polygons), 1)
        self.assertEqual(len(logs.records), 4)

    def test_bad_vertex_invalidates_faces_using_it(self) -> None:
        text = "\n".join(
            [
                "ply",
                "format ascii 1.0",
                "element vertex 4",
                "element face 2",
                "end_header",
                "0 0 0",
                "1 0 0",
                "oops",
                "0 1 0",
                "3 0 1 2",
                "3 0 1 3",
            ]
        )
        with self.assertLogs("glyphtrace.ply", level="WARNING"):
            polygons = parse_ply_text(text)
        self.assertEqual(len(polygons), 1)
        self.assertEqual(polygons[0].vertices[2], Vec3(0.0, 0.0, 1.0))

    def test_extra_vertex_columns_are_ignored(self) -> None:
        text = "\n".join(
            [
                "ply",
                "format ascii 1.0",
                "element vertex 3",
                "property float x",
                "property float y",
                "property float z",
                "property float nx",
                "property float ny",
                "property float nz",
                "element face 1",
                "property list uchar int vertex_indices",
                "end_header",
                "0 0 0 0 1 0",
                "1 0 0 0 1 0",
                "0 1 0 0 1 0",
                "3 0 1 2",
            ]
        )
        (triangle,) = parse_ply_text(text)
        self.assertEqual(triangle.vertices[1], Vec3(1.0, 0.0, 0.0))
        self.assertEqual(triangle.vertices[2], Vec3(0.0, 0.0, 1.0))

    def test_empty_input(self) -> None:
        with self.assertLogs("glyphtrace.ply", level="WARNING"):
            self.assertEqual(parse_ply_text(""), [])


class LoadPlyTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self._tmp.name, "square.ply")
        with open(self.path, "w", encoding="utf-8") as handle:
            handle.write(SQUARE_PLY)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_load_ply_reads_file(self) -> None:
        self.assertEqual(len(load_ply(self.path)), 2)

    def test_load_mesh_annotates_normals(self) -> None:
        mesh = load_mesh(self.path)
        self.assertEqual(len(mesh), 2)
        for polygon in mesh:
            self.assertIsNotNone(polygon.normal)
            self.assertAlmostEqual(abs(polygon.normal.z), 1.0)  # type: ignore[union-attr]

    def test_missing_file_raises(self) -> None:
        with self.assertRaises(OSError):
            load_ply(os.path.join(self._tmp.name, "missing.ply"))


if __name__ == "__main__":
    unittest.main()
