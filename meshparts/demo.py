"""
Demo mesh generation functions for meshparts.

Provides small example meshes with several disconnected pieces for tutorials,
tests and demonstrations. Boxes are built with trimesh and converted to `Mesh`.
"""

import logging
import os
from functools import reduce
from typing import Dict, Optional, Tuple

import numpy as np
import trimesh

from .mesh import Mesh
from .ops import fuse

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

_AXES = {"x": 0, "y": 1, "z": 2}


def create_box_mesh(
    extents: Tuple[float, float, float] = (1.0, 1.0, 1.0),
    center: Tuple[float, float, float] = (0.0, 0.0, 0.0),
) -> Mesh:
    """
    Create a closed triangulated box with per-vertex normals.

    Args:
        extents: Box edge lengths along x, y, z
        center: Center position (x, y, z)

    Returns:
        Mesh with 8 vertices, 8 normals and 12 triangles
    """
    box = trimesh.creation.box(extents=extents)
    if tuple(center) != (0.0, 0.0, 0.0):
        box.apply_translation(center)
    return Mesh.from_trimesh(box)


def create_two_triangles_mesh(gap: float = 5.0) -> Mesh:
    """Two unit right triangles in the z=0 plane, offset by `gap` along x."""
    tri = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
    vertices = np.vstack([tri, tri + [gap, 0.0, 0.0]])
    normals = np.tile([0.0, 0.0, 1.0], (6, 1))
    return Mesh(vertices, normals, [(0, 1, 2), (3, 4, 5)])


def create_scattered_boxes_mesh(
    n_boxes: int = 4,
    spacing: float = 3.0,
    axis: str = "x",
    seed: Optional[int] = 0,
) -> Mesh:
    """
    Fuse `n_boxes` unit boxes placed along `axis` into one mesh.

    Boxes are fused in a shuffled order so the vertex numbering does not
    follow their spatial order; splitting along `axis` recovers it.

    Args:
        n_boxes: Number of boxes (>= 1)
        spacing: Distance between neighbouring box centers
        axis: 'x', 'y' or 'z'
        seed: Seed for the shuffle (None for nondeterministic)

    Returns:
        Mesh with `n_boxes` connected components
    """
    if n_boxes < 1:
        raise ValueError("n_boxes must be >= 1")
    axis = axis.lower()
    if axis not in _AXES:
        raise ValueError("axis must be 'x', 'y' or 'z'")

    positions = np.arange(n_boxes, dtype=float) * spacing
    order = np.random.default_rng(seed).permutation(n_boxes)

    boxes = []
    for i in order:
        center = [0.0, 0.0, 0.0]
        center[_AXES[axis]] = float(positions[i])
        boxes.append(create_box_mesh(center=tuple(center)))
    return reduce(fuse, boxes)


def save_demo_meshes(output_dir: str = "demo_meshes") -> Dict[str, str]:
    """
    Generate and save example meshes as OBJ and VTP files.

    Args:
        output_dir: Directory to save mesh files

    Returns:
        Dictionary mapping file stem (e.g. "box", "box_vtp") to file path
    """
    os.makedirs(output_dir, exist_ok=True)

    meshes = {
        "box": create_box_mesh(),
        "two_triangles": create_two_triangles_mesh(),
        "scattered_boxes": create_scattered_boxes_mesh(),
    }

    paths: Dict[str, str] = {}
    for name, mesh in meshes.items():
        obj_path = os.path.join(output_dir, f"{name}.obj")
        vtp_path = os.path.join(output_dir, f"{name}.vtp")
        mesh.to_file(obj_path)
        mesh.to_vtp_file(vtp_path)
        paths[name] = obj_path
        paths[f"{name}_vtp"] = vtp_path

    logger.info("Demo meshes saved to %s", output_dir)
    return paths
