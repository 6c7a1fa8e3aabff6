"""
Matplotlib rendering of meshes and their connected components.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np
from mpl_toolkits.mplot3d.art3d import Line3DCollection, Poly3DCollection

from .mesh import Mesh

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def plot_mesh_components(
    meshes: Sequence[Mesh],
    ax: Any = None,
    figsize: Optional[Tuple[float, float]] = None,
    cmap: str = "tab10",
    alpha: float = 0.5,
    edge_color: str = "0.2",
    show_vertices: bool = True,
) -> Any:
    """Draw each mesh in its own colour on a 3D axes.

    Typically called with the output of `connected_components`, so the
    colour order follows the sorting axis.

    Args:
        meshes: Meshes to draw.
        ax: Optional 3D matplotlib Axes. If None, a new figure/axes is created.
        figsize: Optional (width, height) in inches when creating a new figure.
        cmap: Name of a matplotlib colormap used to colour the meshes.
        alpha: Face transparency.
        edge_color: Colour of polygon outlines and 2-vertex faces.
        show_vertices: Scatter vertices too (makes isolated vertices visible).

    Returns:
        The matplotlib Axes used for drawing.
    """
    if ax is None:
        fig = plt.figure(figsize=figsize)
        ax = fig.add_subplot(projection="3d")

    colormap = plt.get_cmap(cmap)
    all_points = []
    for i, mesh in enumerate(meshes):
        mesh.check_face_indices()
        color = colormap(i % colormap.N)
        V = mesh.vertices
        polys = [V[list(f)] for f in mesh.faces if len(f) >= 3]
        lines = [V[list(f)] for f in mesh.faces if len(f) == 2]
        if polys:
            ax.add_collection3d(
                Poly3DCollection(polys, facecolors=color, edgecolors=edge_color, alpha=alpha)
            )
        if lines:
            ax.add_collection3d(Line3DCollection(lines, colors=edge_color))
        if show_vertices and mesh.num_vertices:
            ax.scatter(V[:, 0], V[:, 1], V[:, 2], color=color, s=8)
        if mesh.num_vertices:
            all_points.append(V)

    if all_points:
        P = np.vstack(all_points)
        lo, hi = P.min(axis=0), P.max(axis=0)
        pad = np.maximum(0.05 * (hi - lo), 1e-6)
        ax.set_xlim(lo[0] - pad[0], hi[0] + pad[0])
        ax.set_ylim(lo[1] - pad[1], hi[1] + pad[1])
        ax.set_zlim(lo[2] - pad[2], hi[2] + pad[2])
    else:
        logger.info("No vertices to plot")

    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_zlabel("z")
    return ax
