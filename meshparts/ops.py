"""
Mesh operations: centroid, slicing, fusing and connected-component splitting.

All functions are pure. They read their input meshes and return new values.

Slicing policy
--------------
`slice_mesh` keeps a face whenever *any* of its vertices is selected, and
remaps every vertex of that face. A face that straddles the selection
therefore refers to vertices that were not selected. By default this raises
(`on_missing="raise"`); `on_missing="keep"` leaves such indices untouched,
which yields mixed old/new numbering. Subsets that are closed under face
connectivity, such as the components produced by `connected_components`,
never hit this case.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

from .graph import AdjacencyGraph
from .mesh import Face, Mesh

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

ON_MISSING_MODES = ("raise", "keep")


def _index_array(mesh: Mesh, vertex_subset: Sequence[int]) -> np.ndarray:
    idx = np.asarray(list(vertex_subset), dtype=np.int64).reshape(-1)
    if idx.size and (idx.min() < 0 or idx.max() >= mesh.num_vertices):
        bad = int(idx[(idx < 0) | (idx >= mesh.num_vertices)][0])
        raise IndexError(
            f"Vertex index {bad} out of range for mesh with {mesh.num_vertices} vertices"
        )
    return idx


def centroid(mesh: Mesh, vertex_subset: Sequence[int]) -> np.ndarray:
    """Mean position of the given vertices as a (3,) array."""
    idx = _index_array(mesh, vertex_subset)
    if idx.size == 0:
        raise ValueError("Cannot compute the centroid of an empty vertex subset")
    return mesh.vertices[idx].sum(axis=0) / idx.size


def slice_mesh(
    mesh: Mesh, vertex_subset: Sequence[int], on_missing: str = "raise"
) -> Mesh:
    """
    Extract the sub-mesh spanned by `vertex_subset`.

    The i-th entry of `vertex_subset` becomes vertex i of the result, and its
    normal (when the source has normals) becomes normal i. Faces are selected
    with the any-vertex-present rule described in the module docstring.

    Args:
        mesh: Source mesh (not modified).
        vertex_subset: Distinct vertex indices, in the desired output order.
        on_missing: What to do with face vertices outside the subset:
            "raise" (ValueError) or "keep" (leave the old index as is).

    Returns:
        New Mesh with contiguous 0-based numbering.
    """
    if on_missing not in ON_MISSING_MODES:
        raise ValueError(f"on_missing must be one of {ON_MISSING_MODES}, got {on_missing!r}")

    idx = _index_array(mesh, vertex_subset)
    old_to_new: Dict[int, int] = {}
    for new, old in enumerate(idx.tolist()):
        if old in old_to_new:
            raise ValueError(f"Vertex {old} appears more than once in the subset")
        old_to_new[old] = new

    return _build_slice(mesh, idx, old_to_new, enumerate(mesh.faces), on_missing)


def _build_slice(
    mesh: Mesh,
    idx: np.ndarray,
    old_to_new: Dict[int, int],
    numbered_faces: Iterable[Tuple[int, Face]],
    on_missing: str,
) -> Mesh:
    """Assemble a sliced Mesh from validated indices and candidate faces."""
    if mesh.num_normals == 0:
        normals = None
    elif idx.size and int(idx.max()) >= mesh.num_normals:
        logger.warning(
            "Dropping normals: vertex %d has no normal (mesh has %d normals)",
            int(idx.max()),
            mesh.num_normals,
        )
        normals = None
    else:
        normals = mesh.normals[idx]

    faces = _remap_faces(numbered_faces, old_to_new, on_missing)
    logger.debug(
        "Sliced %d of %d vertices, kept %d of %d faces",
        idx.size,
        mesh.num_vertices,
        len(faces),
        mesh.num_faces,
    )
    return Mesh(mesh.vertices[idx], normals, faces)


def _remap_faces(
    numbered_faces: Iterable[Tuple[int, Face]],
    old_to_new: Dict[int, int],
    on_missing: str,
) -> List[Face]:
    """Renumber every face that touches `old_to_new`; drop the others."""
    faces: List[Face] = []
    for face_no, face in numbered_faces:
        if not any(v in old_to_new for v in face):
            continue
        remapped = []
        for v in face:
            if v in old_to_new:
                remapped.append(old_to_new[v])
            elif on_missing == "keep":
                remapped.append(v)
            else:
                raise ValueError(
                    f"Face {face_no} is partially selected: vertex {v} is not in the subset"
                )
        faces.append(tuple(remapped))
    return faces


def fuse(mesh1: Mesh, mesh2: Mesh) -> Mesh:
    """
    Concatenate two meshes; `mesh2` follows `mesh1`.

    Face indices of `mesh2` are shifted by `mesh1.num_vertices`.
    """
    offset = mesh1.num_vertices
    vertices = np.vstack([mesh1.vertices, mesh2.vertices])
    normals = np.vstack([mesh1.normals, mesh2.normals])
    faces = list(mesh1.faces) + [tuple(v + offset for v in f) for f in mesh2.faces]

    if mesh2.num_normals and mesh1.num_normals != mesh1.num_vertices:
        logger.warning(
            "Fused normals are not parallel to vertices (%d normals for %d vertices in first mesh)",
            mesh1.num_normals,
            mesh1.num_vertices,
        )
    return Mesh(vertices, normals, faces)


def connected_components(mesh: Mesh, sorting_dimension: int = 0) -> List[Mesh]:
    """
    Split a mesh into its topologically disconnected pieces.

    Pieces are ordered by the `sorting_dimension` coordinate (0=x, 1=y, 2=z)
    of their centroid. Ties keep discovery order. Each piece is an
    independent Mesh with its own 0-based numbering.
    """
    if sorting_dimension not in (0, 1, 2):
        raise ValueError(f"sorting_dimension must be 0, 1 or 2, got {sorting_dimension!r}")

    components = AdjacencyGraph(mesh).get_connected_components()

    # Components are closed under face connectivity: every face belongs to
    # the component of its first vertex.
    labels = np.empty(mesh.num_vertices, dtype=np.int64)
    for label, component in enumerate(components):
        labels[component] = label
    buckets: List[List[Tuple[int, Face]]] = [[] for _ in components]
    for face_no, face in enumerate(mesh.faces):
        if face:
            buckets[labels[face[0]]].append((face_no, face))

    order = sorted(
        range(len(components)),
        key=lambda k: centroid(mesh, components[k])[sorting_dimension],
    )
    pieces = []
    for k in order:
        idx = np.asarray(components[k], dtype=np.int64)
        old_to_new = {old: new for new, old in enumerate(components[k])}
        pieces.append(_build_slice(mesh, idx, old_to_new, buckets[k], "raise"))
    logger.info("Split mesh into %d connected component(s)", len(pieces))
    return pieces
