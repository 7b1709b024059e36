"""
Tests for COMPAS and trimesh conversion.
"""

import numpy as np
import pytest
import trimesh
from compas.datastructures import Mesh as CompasMesh

from polygeom.core.exceptions import ArityError
from polygeom.geometry.interop import GeometryConverter
from polygeom.geometry.mesh import LineSet, PolyMesh, TriMesh


class TestCompasConversion:
    """Tests for COMPAS Mesh conversion."""

    def test_to_compas(self, cube_quads):
        """Test vertices and faces carry over."""
        compas_mesh = GeometryConverter.to_compas(cube_quads)

        assert isinstance(compas_mesh, CompasMesh)
        assert compas_mesh.number_of_vertices() == 8
        assert compas_mesh.number_of_faces() == 6

    def test_roundtrip(self, mixed_poly):
        """Test a polygon mesh survives a COMPAS roundtrip."""
        back = GeometryConverter.from_compas(GeometryConverter.to_compas(mixed_poly))

        assert isinstance(back, PolyMesh)
        assert back.face_counts.tolist() == [3, 4, 5]
        np.testing.assert_allclose(back.vertices, mixed_poly.vertices)


class TestTrimeshConversion:
    """Tests for trimesh conversion."""

    def test_to_trimesh_fans_polygons(self, cube_quads):
        """Test quads become two triangles each."""
        tmesh = GeometryConverter.to_trimesh(cube_quads)

        assert isinstance(tmesh, trimesh.Trimesh)
        assert len(tmesh.vertices) == 8
        assert len(tmesh.faces) == 12
        assert tmesh.is_watertight

    def test_from_trimesh(self):
        """Test a trimesh box becomes a TriMesh."""
        box = trimesh.creation.box(extents=[2.0, 2.0, 2.0])
        mesh = GeometryConverter.from_trimesh(box)

        assert isinstance(mesh, TriMesh)
        assert mesh.face_count() == len(box.faces)
        assert len(mesh.vertices) == len(box.vertices)

    def test_lines_cannot_be_triangulated(self):
        """Test elements under three vertices are rejected."""
        lines = LineSet([[0, 0, 0], [1, 0, 0]], [0, 1])
        with pytest.raises(ArityError):
            GeometryConverter.to_trimesh(lines)
