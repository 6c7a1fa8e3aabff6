"""
meshparts: connected-component decomposition of polygonal surface meshes.

A small toolkit around a `Mesh` value type (vertices, normals, polygonal
faces): OBJ reading/writing, VTK PolyData export, sub-mesh extraction by vertex
selection, fusing meshes and splitting a mesh into its disconnected pieces.
"""

__version__ = "0.1.0"

# Mesh container
from .mesh import Mesh

# Graph and operations
from .graph import AdjacencyGraph
from .ops import centroid, connected_components, fuse, slice_mesh

# Input/output
from .objio import WriteOptions, parse_obj, read_obj, write_obj, write_vtp

# Demo mesh functions
from .demo import (
    create_box_mesh,
    create_scattered_boxes_mesh,
    create_two_triangles_mesh,
    save_demo_meshes,
)

# Utility functions
from .path import data_path, sample_meshes

__all__ = [
    # Mesh container
    "Mesh",
    # Operations
    "AdjacencyGraph",
    "centroid",
    "slice_mesh",
    "fuse",
    "connected_components",
    # Input/output
    "WriteOptions",
    "parse_obj",
    "read_obj",
    "write_obj",
    "write_vtp",
    # Demo mesh functions
    "create_box_mesh",
    "create_two_triangles_mesh",
    "create_scattered_boxes_mesh",
    "save_demo_meshes",
    # Path functions
    "data_path",
    "sample_meshes",
]
