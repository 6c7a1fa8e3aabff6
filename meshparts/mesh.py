"""
Polygonal surface mesh container.

Provides the `Mesh` value type holding three parallel sequences:
- vertices: (N, 3) float64 array of point positions
- normals: (M, 3) float64 array of per-vertex normals (M may differ from N)
- faces: list of tuples of vertex indices (polygons of any size)

A `Mesh` is never modified after construction. Every operation (slice, fuse,
connected components) returns a new `Mesh`; the coordinate arrays are stored
read-only so accidental in-place edits fail loudly.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import trimesh

if TYPE_CHECKING:  # pragma: no cover
    from .objio import WriteOptions

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

Face = Tuple[int, ...]


def _as_points(values: Optional[Iterable[Sequence[float]]], name: str) -> np.ndarray:
    """Copy `values` into a read-only (N, 3) float64 array."""
    if values is None:
        arr = np.zeros((0, 3), dtype=float)
    else:
        if not isinstance(values, np.ndarray):
            values = list(values)
        arr = np.array(values, dtype=float)
        if arr.size == 0:
            arr = np.zeros((0, 3), dtype=float)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"{name} must be an (N,3) array, got shape {arr.shape}")
    arr.setflags(write=False)
    return arr


class Mesh:
    """
    Vertices, normals and polygonal faces of a surface mesh.

    Normals are parallel to vertices by convention only: the two arrays may
    have different lengths (files in the wild often omit or duplicate normals),
    and nothing here enforces equality. Use `has_normals` to check alignment.

    Face indices are 0-based and are not validated at construction; call
    `check_face_indices()` before relying on them.
    """

    def __init__(
        self,
        vertices: Optional[Iterable[Sequence[float]]] = None,
        normals: Optional[Iterable[Sequence[float]]] = None,
        faces: Optional[Iterable[Iterable[int]]] = None,
    ) -> None:
        self.vertices: np.ndarray = _as_points(vertices, "vertices")
        self.normals: np.ndarray = _as_points(normals, "normals")
        self.faces: List[Face] = []
        if faces is not None:
            self.faces = [tuple(int(i) for i in f) for f in faces]

    # ---------------------------------------------------------------------
    # Basic properties
    # ---------------------------------------------------------------------
    @property
    def num_vertices(self) -> int:
        return int(self.vertices.shape[0])

    @property
    def num_normals(self) -> int:
        return int(self.normals.shape[0])

    @property
    def num_faces(self) -> int:
        return len(self.faces)

    @property
    def has_normals(self) -> bool:
        """True when there is exactly one normal per vertex."""
        return self.num_normals > 0 and self.num_normals == self.num_vertices

    def copy(self) -> "Mesh":
        return Mesh(self.vertices, self.normals, self.faces)

    def bounds(self) -> Optional[np.ndarray]:
        """Return a (2, 3) array of [min, max] corners, or None if empty."""
        if self.num_vertices == 0:
            return None
        return np.vstack([self.vertices.min(axis=0), self.vertices.max(axis=0)])

    def check_face_indices(self) -> None:
        """Raise IndexError if any face references a vertex that does not exist."""
        n = self.num_vertices
        for face_no, face in enumerate(self.faces):
            for v in face:
                if v < 0 or v >= n:
                    raise IndexError(
                        f"Face {face_no} references vertex {v}, mesh has {n} vertices"
                    )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mesh):
            return NotImplemented
        return (
            np.array_equal(self.vertices, other.vertices)
            and np.array_equal(self.normals, other.normals)
            and self.faces == other.faces
        )

    def __repr__(self) -> str:
        return (
            f"Mesh(vertices={self.num_vertices}, normals={self.num_normals}, "
            f"faces={self.num_faces})"
        )

    # ---------------------------------------------------------------------
    # IO
    # ---------------------------------------------------------------------
    @staticmethod
    def from_file(path: str) -> "Mesh":
        from .objio import read_obj

        return read_obj(path)

    def to_file(self, path: str, options: Optional["WriteOptions"] = None) -> None:
        from .objio import write_obj

        write_obj(self, path, options)

    def to_vtp_file(self, path: str, options: Optional["WriteOptions"] = None) -> None:
        from .objio import write_vtp

        write_vtp(self, path, options)

    # ---------------------------------------------------------------------
    # Operations (all return new values)
    # ---------------------------------------------------------------------
    def slice(self, vertex_subset: Sequence[int], on_missing: str = "raise") -> "Mesh":
        from .ops import slice_mesh

        return slice_mesh(self, vertex_subset, on_missing=on_missing)

    def centroid(self, vertex_subset: Optional[Sequence[int]] = None) -> np.ndarray:
        from .ops import centroid

        if vertex_subset is None:
            vertex_subset = range(self.num_vertices)
        return centroid(self, vertex_subset)

    def fuse(self, other: "Mesh") -> "Mesh":
        from .ops import fuse

        return fuse(self, other)

    def connected_components(self, sorting_dimension: int = 0) -> List["Mesh"]:
        from .ops import connected_components

        return connected_components(self, sorting_dimension)

    # ---------------------------------------------------------------------
    # trimesh interop
    # ---------------------------------------------------------------------
    @staticmethod
    def from_trimesh(tm: trimesh.Trimesh, include_normals: bool = True) -> "Mesh":
        """Build a Mesh from a trimesh object (triangles, optional vertex normals)."""
        vertices = np.asarray(tm.vertices, dtype=float)
        normals = np.asarray(tm.vertex_normals, dtype=float) if include_normals else None
        faces = np.asarray(tm.faces, dtype=int).tolist()
        return Mesh(vertices, normals, faces)

    def to_trimesh(self) -> trimesh.Trimesh:
        """
        Convert to a `trimesh.Trimesh` without merging or reordering vertices.

        Polygons with more than three corners are fan-triangulated around
        their first vertex. Faces with fewer than three vertices cannot be
        represented and are dropped with a warning.
        """
        self.check_face_indices()
        tris: List[Tuple[int, int, int]] = []
        dropped = 0
        for face in self.faces:
            if len(face) < 3:
                dropped += 1
                continue
            for k in range(1, len(face) - 1):
                tris.append((face[0], face[k], face[k + 1]))
        if dropped:
            logger.warning("Dropped %d face(s) with fewer than 3 vertices", dropped)

        faces = np.array(tris, dtype=np.int64).reshape(-1, 3)
        kwargs = {}
        if self.has_normals:
            kwargs["vertex_normals"] = np.array(self.normals)
        return trimesh.Trimesh(
            vertices=np.array(self.vertices), faces=faces, process=False, **kwargs
        )
