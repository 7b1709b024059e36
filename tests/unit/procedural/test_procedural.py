"""
Tests for procedural fields, surfaces and curves.
"""

import math

import numpy as np
import pytest

from polygeom.core.exceptions import GeometryError
from polygeom.geometry.mesh import LineSet, TriMesh
from polygeom.procedural import (
    CircleCurve,
    Curve,
    Field,
    FunctionCurve,
    FunctionField,
    FunctionSurface,
    LineCurve,
    PlaneSurface,
    SphereSurface,
    Surface,
    UniformField,
    sample_curve,
    sample_field,
    tessellate,
)


class TestContracts:
    """Tests for the abstract procedural contracts."""

    def test_cannot_instantiate_abstract(self):
        """Test the bases require evaluate."""
        with pytest.raises(TypeError):
            Surface()

    def test_function_wrappers(self):
        """Test callables become procedural objects."""
        field = FunctionField(lambda p: -p)
        surface = FunctionSurface(lambda u, v: (u, v, u * v))
        curve = FunctionCurve(lambda t: (t, 2 * t, 0))

        assert isinstance(field, Field)
        assert isinstance(surface, Surface)
        assert isinstance(curve, Curve)
        assert field((1, 2, 3)).tolist() == [-1, -2, -3]
        assert surface((0.5, 2.0)).tolist() == [0.5, 2.0, 1.0]
        assert curve(0.25).tolist() == [0.25, 0.5, 0.0]


class TestShapes:
    """Tests for concrete shapes."""

    def test_plane(self):
        """Test the plane spans its two axes."""
        plane = PlaneSurface(origin=(1, 1, 1), u_axis=(2, 0, 0), v_axis=(0, 0, 3))
        np.testing.assert_allclose(plane.evaluate((0.5, 1.0)), [2.0, 1.0, 4.0])

    def test_sphere_radius(self):
        """Test every sample lies on the sphere."""
        sphere = SphereSurface(center=(1, 2, 3), radius=2.0)
        for uv in [(0, 0), (0.3, 0.5), (0.9, 1.0)]:
            distance = np.linalg.norm(sphere.evaluate(uv) - [1, 2, 3])
            assert distance == pytest.approx(2.0)

    def test_line_curve(self):
        """Test interpolation between endpoints."""
        line = LineCurve((0, 0, 0), (4, 0, 0))
        np.testing.assert_allclose(line(0.25), [1.0, 0.0, 0.0])

    def test_circle_curve(self):
        """Test the quarter-turn position."""
        circle = CircleCurve(radius=2.0)
        np.testing.assert_allclose(circle(0.25), [0.0, 2.0, 0.0], atol=1e-12)

    def test_uniform_field(self):
        """Test the same vector is returned everywhere."""
        field = UniformField((0, 0, -9.81))
        assert field((5, 5, 5)).tolist() == [0, 0, -9.81]

    def test_bad_vector(self):
        """Test vectors must have three components."""
        with pytest.raises(GeometryError):
            UniformField((1, 2))


class TestSampling:
    """Tests for tessellation and sampling helpers."""

    def test_tessellate_counts(self):
        """Test grid sizes for vertices and triangles."""
        mesh = tessellate(PlaneSurface(), rows=2, cols=3)

        assert isinstance(mesh, TriMesh)
        assert len(mesh.vertices) == 3 * 4
        assert mesh.face_count() == 2 * 2 * 3

    def test_tessellate_cell_triangles_share_diagonal(self):
        """Test each cell's triangles are consecutive and share a diagonal."""
        mesh = tessellate(PlaneSurface(), rows=1, cols=1)
        assert [list(e) for e in mesh.elements] == [[0, 1, 3], [0, 3, 2]]

    def test_tessellate_rejects_empty_grid(self):
        """Test rows and cols must be positive."""
        with pytest.raises(GeometryError):
            tessellate(PlaneSurface(), rows=0, cols=2)

    def test_sample_open_curve(self):
        """Test an open curve keeps both endpoints."""
        lines = sample_curve(LineCurve((0, 0, 0), (3, 0, 0)), segments=3)

        assert isinstance(lines, LineSet)
        assert len(lines.vertices) == 4
        assert [list(e) for e in lines.elements] == [[0, 1], [1, 2], [2, 3]]

    def test_sample_closed_curve(self):
        """Test a closed curve wraps back to its first vertex."""
        lines = sample_curve(CircleCurve(), segments=4, closed=True)

        assert len(lines.vertices) == 4
        assert list(lines.elements[-1]) == [3, 0]
        total = sum(np.linalg.norm(e.points[1] - e.points[0]) for e in lines.elements)
        assert total == pytest.approx(4 * math.sqrt(2))

    def test_sample_field(self):
        """Test a field evaluated at every vertex."""
        mesh = tessellate(PlaneSurface(), rows=1, cols=1)
        values = sample_field(FunctionField(lambda p: p * 2), mesh)
        np.testing.assert_allclose(values, mesh.vertices * 2)
