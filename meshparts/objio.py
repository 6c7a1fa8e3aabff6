"""
Reading and writing meshes.

Wavefront OBJ (subset)
----------------------
- `# ...` comment lines and blank lines are skipped
- `v x y z` vertex position
- `vn x y z` vertex normal
- `f i1 i2 ...` polygon; each token may be `v`, `v/vt`, `v//vn` or `v/vt/vn`
  and only the leading vertex field is used (1-based in the file)
- any other line kind is ignored

Parsing is best-effort and never raises on content: tokens that do not start
with a number read as 0. Faces are written as `v//v` references, matching the
index of the per-vertex normal.

VTK XML PolyData (.vtp)
-----------------------
Write-only ASCII export with normals as point data, point positions and
polygon connectivity/offsets arrays.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import IO, Iterable, List, Optional

from .mesh import Mesh

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

_FLOAT_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"[+-]?\d+")


@dataclass
class WriteOptions:
    precision: int = 18  # fixed-point digits for coordinates
    header: bool = True  # leading "# Vertices: ..." comment in OBJ output
    normal_refs: bool = True  # write faces as "v//v" instead of "v"


# ---------------------------------------------------------------------------
# Tokenizing helpers
# ---------------------------------------------------------------------------
def tokenize(s: str, sep: str = " ") -> List[str]:
    """
    Split on every occurrence of `sep`; a trailing empty field is dropped.

    Consecutive separators produce empty tokens ("a  b" -> ["a", "", "b"]).
    """
    parts = s.split(sep)
    if parts and parts[-1] == "":
        parts.pop()
    return parts


def parse_float(token: str, default: float = 0.0) -> float:
    """Read the leading decimal number of `token`, or `default` if there is none."""
    m = _FLOAT_PREFIX.match(token)
    return float(m.group(0)) if m else default


def parse_int(token: str, default: int = 0) -> int:
    """Read the leading integer of `token`, or `default` if there is none."""
    m = _INT_PREFIX.match(token)
    return int(m.group(0)) if m else default


def _field(tokens: List[str], i: int) -> str:
    return tokens[i] if i < len(tokens) else ""


# ---------------------------------------------------------------------------
# OBJ
# ---------------------------------------------------------------------------
def parse_obj(lines: Iterable[str]) -> Mesh:
    """Build a Mesh from OBJ text lines."""
    vertices: List[List[float]] = []
    normals: List[List[float]] = []
    faces: List[List[int]] = []

    for line in lines:
        line = line.rstrip("\r\n")
        if not line or line[0] == "#":
            continue
        tokens = tokenize(line)
        if not tokens:
            continue

        kind = tokens[0]
        if kind == "v":
            vertices.append([parse_float(_field(tokens, i)) for i in (1, 2, 3)])
        elif kind == "vn":
            normals.append([parse_float(_field(tokens, i)) for i in (1, 2, 3)])
        elif kind == "f":
            faces.append([parse_int(tokenize(t, "/")[0] if t else "") - 1 for t in tokens[1:]])

    logger.debug(
        "Parsed OBJ: %d vertices, %d normals, %d faces",
        len(vertices),
        len(normals),
        len(faces),
    )
    return Mesh(vertices, normals, faces)


def read_obj(path: str) -> Mesh:
    """Load an OBJ file. File errors propagate as OSError; undecodable bytes are replaced."""
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        mesh = parse_obj(f)
    logger.info("Loaded %s: %r", path, mesh)
    return mesh


def dump_obj(mesh: Mesh, f: IO[str], options: Optional[WriteOptions] = None) -> None:
    """Write `mesh` as OBJ text to an open text stream."""
    opts = options or WriteOptions()
    p = opts.precision
    if opts.header:
        f.write(
            f"# Vertices: {mesh.num_vertices}, Normals: {mesh.num_normals} "
            f"Faces: {mesh.num_faces}\n"
        )
    for x, y, z in mesh.vertices:
        f.write(f"v {x:.{p}f} {y:.{p}f} {z:.{p}f}\n")
    for x, y, z in mesh.normals:
        f.write(f"vn {x:.{p}f} {y:.{p}f} {z:.{p}f}\n")
    for face in mesh.faces:
        if opts.normal_refs:
            refs = " ".join(f"{v + 1}//{v + 1}" for v in face)
        else:
            refs = " ".join(str(v + 1) for v in face)
        f.write(f"f {refs}\n" if refs else "f\n")


def write_obj(mesh: Mesh, path: str, options: Optional[WriteOptions] = None) -> None:
    with open(path, "w", encoding="utf-8") as f:
        dump_obj(mesh, f, options)
    logger.info("Wrote %s: %r", path, mesh)


# ---------------------------------------------------------------------------
# VTP
# ---------------------------------------------------------------------------
def dump_vtp(mesh: Mesh, f: IO[str], options: Optional[WriteOptions] = None) -> None:
    """Write `mesh` as an ASCII VTK XML PolyData document."""
    p = (options or WriteOptions()).precision
    f.write('<?xml version="1.0"?>\n')
    f.write(
        '<VTKFile type="PolyData" version="0.1" byte_order="LittleEndian" '
        'compressor="vtkZLibDataCompressor">\n'
    )
    f.write("<PolyData>\n")
    f.write(
        f'<Piece NumberOfPoints="{mesh.num_vertices}" NumberOfVerts="0" '
        f'NumberOfLines="0" NumberOfStrips="0" NumberOfPolys="{mesh.num_faces}">\n'
    )

    f.write('<PointData Normals="Normals">\n')
    f.write('<DataArray type="Float32" Name="Normals" NumberOfComponents="3" format="ascii">\n')
    for x, y, z in mesh.normals:
        f.write(f"{x:.{p}f} {y:.{p}f} {z:.{p}f}\n")
    f.write("</DataArray>\n")
    f.write("</PointData>\n")

    f.write("<Points>\n")
    f.write('<DataArray type="Float32" Name="Points" NumberOfComponents="3" format="ascii">\n')
    for x, y, z in mesh.vertices:
        f.write(f"{x:.{p}f} {y:.{p}f} {z:.{p}f}\n")
    f.write("</DataArray>\n")
    f.write("</Points>\n")

    f.write("<Polys>\n")
    f.write('<DataArray type="Int32" Name="connectivity" format="ascii">\n')
    for face in mesh.faces:
        f.write("".join(f" {v}" for v in face) + "\n")
    f.write("</DataArray>\n")
    f.write('<DataArray type="Int32" Name="offsets" format="ascii">\n')
    offset = 0
    for face in mesh.faces:
        offset += len(face)
        f.write(f"{offset} ")
    f.write("\n")
    f.write("</DataArray>\n")
    f.write("</Polys>\n")

    f.write("</Piece>\n")
    f.write("</PolyData>\n")
    f.write("</VTKFile>\n")


def write_vtp(mesh: Mesh, path: str, options: Optional[WriteOptions] = None) -> None:
    with open(path, "w", encoding="utf-8") as f:
        dump_vtp(mesh, f, options)
    logger.info("Wrote %s: %r", path, mesh)
