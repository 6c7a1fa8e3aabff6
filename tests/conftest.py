"""
Test configuration for meshparts.
"""

import sys
from pathlib import Path

import pytest

# Add the package to the path for testing
package_dir = Path(__file__).parent.parent
sys.path.insert(0, str(package_dir))

from meshparts import Mesh  # noqa: E402


@pytest.fixture
def two_triangles():
    """Two disconnected triangles; the right one is listed first."""
    vertices = [
        [5.0, 0.0, 0.0],
        [6.0, 0.0, 0.0],
        [5.0, 1.0, 0.0],
        [0.0, 0.0, 0.0],
        [1.0, 0.0, 0.0],
        [0.0, 1.0, 0.0],
    ]
    normals = [[0.0, 0.0, 1.0]] * 6
    return Mesh(vertices, normals, [(0, 1, 2), (3, 4, 5)])


@pytest.fixture
def quad_strip():
    """Two quads sharing an edge, plus an isolated vertex."""
    vertices = [
        [0.0, 0.0, 0.0],
        [1.0, 0.0, 0.0],
        [1.0, 1.0, 0.0],
        [0.0, 1.0, 0.0],
        [2.0, 0.0, 0.0],
        [2.0, 1.0, 0.0],
        [-4.0, 0.0, 0.0],
    ]
    faces = [(0, 1, 2, 3), (1, 4, 5, 2)]
    return Mesh(vertices, None, faces)
