"""
Tests for OBJ parsing/writing and VTP export.
"""

import io
import os
import xml.etree.ElementTree as ET

import numpy as np
import pytest

from meshparts import Mesh, WriteOptions, data_path, parse_obj, read_obj, write_obj, write_vtp
from meshparts.objio import dump_obj, dump_vtp, parse_float, parse_int, tokenize


def _dumps(mesh, options=None):
    buf = io.StringIO()
    dump_obj(mesh, buf, options)
    return buf.getvalue()


class TestTokenizing:
    """Test the low-level token helpers."""

    def test_single_space_split(self):
        assert tokenize("v 1 2 3") == ["v", "1", "2", "3"]
        assert tokenize("v  1") == ["v", "", "1"]

    def test_trailing_separator_dropped(self):
        assert tokenize("f 1 2 3 ") == ["f", "1", "2", "3"]
        assert tokenize("") == []

    def test_slash_fields(self):
        assert tokenize("3/1/2", "/") == ["3", "1", "2"]
        assert tokenize("3//2", "/") == ["3", "", "2"]

    def test_parse_float(self):
        assert parse_float("1.5") == 1.5
        assert parse_float("-2e-3") == -0.002
        assert parse_float(".25") == 0.25
        assert parse_float("7abc") == 7.0
        assert parse_float("abc") == 0.0
        assert parse_float("") == 0.0

    def test_parse_int(self):
        assert parse_int("12") == 12
        assert parse_int("12.9") == 12
        assert parse_int("x") == 0


class TestParseObj:
    """Test OBJ parsing."""

    def test_basic_triangle(self):
        mesh = parse_obj(["v 0 0 0", "v 1 0 0", "v 0 1 0", "f 1 2 3"])
        assert mesh.num_vertices == 3
        assert mesh.num_faces == 1
        assert mesh.faces == [(0, 1, 2)]

    def test_comments_blank_and_unknown_lines(self):
        lines = [
            "# header\n",
            "\n",
            "o object\n",
            "vt 0.5 0.5\n",
            "v 1 2 3\n",
            "usemtl red\n",
            "vn 0 0 1\r\n",
        ]
        mesh = parse_obj(lines)
        assert mesh.num_vertices == 1
        assert mesh.num_normals == 1
        np.testing.assert_allclose(mesh.vertices[0], [1, 2, 3])
        np.testing.assert_allclose(mesh.normals[0], [0, 0, 1])

    def test_face_sub_fields(self):
        mesh = parse_obj(["v 0 0 0"] * 4 + ["f 1/1/1 2//2 3/3 4"])
        assert mesh.faces == [(0, 1, 2, 3)]

    def test_malformed_numbers_become_zero(self):
        mesh = parse_obj(["v 1 nan? 3", "v 4", "f x 1"])
        np.testing.assert_allclose(mesh.vertices, [[1, 0, 3], [4, 0, 0]])
        assert mesh.faces == [(-1, 0)]
        with pytest.raises(IndexError):
            mesh.check_face_indices()

    def test_empty_input(self):
        assert parse_obj([]) == Mesh()

    def test_read_data_file(self):
        mesh = read_obj(str(data_path(os.path.join("mesh", "quads_and_point.obj"))))
        assert mesh.num_vertices == 11
        assert mesh.num_normals == 0
        assert mesh.faces == [(0, 1, 2, 3), (1, 4, 5, 2), (6, 7, 8, 9)]

    def test_undecodable_bytes_in_comment(self, tmp_path):
        path = tmp_path / "latin1.obj"
        path.write_bytes(b"# cr\xe9\xe9 par outil\nv 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n")
        mesh = read_obj(str(path))
        assert mesh.num_vertices == 3
        assert mesh.faces == [(0, 1, 2)]

    def test_undecodable_bytes_in_record(self, tmp_path):
        path = tmp_path / "garbage.obj"
        path.write_bytes(b"v 1 2 \xff\nv\xfe 4 5 6\nf 1 1\n")
        mesh = read_obj(str(path))
        np.testing.assert_allclose(mesh.vertices, [[1, 2, 0]])
        assert mesh.faces == [(0, 0)]

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            read_obj(str(tmp_path / "missing.obj"))


class TestWriteObj:
    """Test OBJ writing."""

    def test_triangle_scenario(self):
        mesh = parse_obj(["v 0 0 0", "v 1 0 0", "v 0 1 0", "f 1 2 3"])
        text = _dumps(mesh)
        lines = text.splitlines()
        assert lines[0] == "# Vertices: 3, Normals: 0 Faces: 1"
        assert lines[1] == "v 0.000000000000000000 0.000000000000000000 0.000000000000000000"
        assert lines[-1] == "f 1//1 2//2 3//3"

    def test_options(self, two_triangles):
        text = _dumps(two_triangles, WriteOptions(precision=2, header=False, normal_refs=False))
        lines = text.splitlines()
        assert lines[0] == "v 5.00 0.00 0.00"
        assert lines[6] == "vn 0.00 0.00 1.00"
        assert lines[-2:] == ["f 1 2 3", "f 4 5 6"]

    def test_round_trip(self, tmp_path):
        rng = np.random.default_rng(0)
        mesh = Mesh(
            rng.uniform(-10, 10, size=(20, 3)),
            rng.normal(size=(20, 3)),
            [tuple(rng.integers(0, 20, size=k).tolist()) for k in (3, 4, 5, 3)],
        )
        path = tmp_path / "random.obj"
        write_obj(mesh, str(path))
        loaded = read_obj(str(path))
        assert loaded.num_vertices == mesh.num_vertices
        assert loaded.num_normals == mesh.num_normals
        assert loaded.faces == mesh.faces
        np.testing.assert_allclose(loaded.vertices, mesh.vertices, rtol=0, atol=1e-12)
        np.testing.assert_allclose(loaded.normals, mesh.normals, rtol=0, atol=1e-12)

    def test_data_file_round_trip(self, tmp_path):
        original = read_obj(str(data_path(os.path.join("mesh", "two_triangles.obj"))))
        path = tmp_path / "copy.obj"
        write_obj(original, str(path))
        assert read_obj(str(path)) == original


class TestWriteVtp:
    """Test VTK XML PolyData export."""

    def test_structure(self, quad_strip, tmp_path):
        path = tmp_path / "strip.vtp"
        write_vtp(quad_strip, str(path))
        root = ET.parse(str(path)).getroot()
        assert root.tag == "VTKFile"
        assert root.get("type") == "PolyData"

        piece = root.find("PolyData/Piece")
        assert piece.get("NumberOfPoints") == "7"
        assert piece.get("NumberOfPolys") == "2"

        points = piece.find("Points/DataArray").text.split()
        np.testing.assert_allclose(np.array(points, dtype=float).reshape(-1, 3), quad_strip.vertices)

        arrays = {a.get("Name"): a.text.split() for a in piece.findall("Polys/DataArray")}
        assert arrays["connectivity"] == ["0", "1", "2", "3", "1", "4", "5", "2"]
        assert arrays["offsets"] == ["4", "8"]

    def test_normals_block(self, two_triangles):
        buf = io.StringIO()
        dump_vtp(two_triangles, buf, WriteOptions(precision=1))
        root = ET.fromstring(buf.getvalue())
        normals = root.find("PolyData/Piece/PointData/DataArray")
        assert normals.get("Name") == "Normals"
        assert normals.text.split()[:3] == ["0.0", "0.0", "1.0"]

    def test_connectivity_lines(self, two_triangles):
        buf = io.StringIO()
        dump_vtp(two_triangles, buf)
        text = buf.getvalue()
        assert "\n 0 1 2\n 3 4 5\n" in text
        assert "\n3 6 \n" in text
