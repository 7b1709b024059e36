"""
Pytest configuration and shared fixtures.
"""

import numpy as np
import pytest

from polygeom.geometry.mesh import PolyMesh, QuadMesh, TriMesh


@pytest.fixture
def square_vertices():
    """Unit square in the XY plane, counter-clockwise from the origin."""
    return np.array(
        [
            [0.0, 0.0, 0.0],
            [1.0, 0.0, 0.0],
            [0.0, 1.0, 0.0],
            [1.0, 1.0, 0.0],
        ]
    )


@pytest.fixture
def coplanar_pair(square_vertices):
    """Two triangles sharing edge (1, 2), all four corners in z=0."""
    return TriMesh(square_vertices, [0, 1, 2, 1, 2, 3])


@pytest.fixture
def folded_pair(square_vertices):
    """Same topology as coplanar_pair with vertex 3 lifted out of the plane."""
    vertices = square_vertices.copy()
    vertices[3] = [1.0, 1.0, 1.0]
    return TriMesh(vertices, [0, 1, 2, 1, 2, 3])


@pytest.fixture
def cube_quads():
    """Unit cube as six quads."""
    vertices = [
        [0, 0, 0],
        [1, 0, 0],
        [1, 1, 0],
        [0, 1, 0],
        [0, 0, 1],
        [1, 0, 1],
        [1, 1, 1],
        [0, 1, 1],
    ]
    faces = [
        0, 3, 2, 1,  # bottom
        4, 5, 6, 7,  # top
        0, 1, 5, 4,  # front
        2, 3, 7, 6,  # back
        0, 4, 7, 3,  # left
        1, 2, 6, 5,  # right
    ]
    return QuadMesh(vertices, faces)


@pytest.fixture
def mixed_poly():
    """A triangle, a quad and a pentagon over eight vertices."""
    vertices = [[float(i), float(i % 3), 0.0] for i in range(8)]
    indices = [0, 1, 2, 2, 3, 4, 5, 0, 5, 6, 7, 1]
    return PolyMesh(vertices, indices, [0, 3, 7])
