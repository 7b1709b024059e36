"""
Concrete procedural shapes and samplers that turn them into meshes.

Surfaces and curves are parameterised over ``[0, 1]``; sampling walks that
range on a regular grid.
"""

import math
from typing import Sequence

import numpy as np

from polygeom.core.exceptions import GeometryError
from polygeom.geometry.builder import TriMeshBuilder
from polygeom.geometry.mesh import LineSet, PolyMesh, TriMesh
from polygeom.procedural.base import Curve, Field, Surface


def _vec3(values: Sequence[float]) -> np.ndarray:
    vector = np.asarray(values, dtype=np.float64)
    if vector.shape != (3,):
        raise GeometryError("Expected 3 components", details={"shape": vector.shape})
    return vector


class UniformField(Field):
    """Field with the same vector everywhere."""

    def __init__(self, vector: Sequence[float]) -> None:
        self.vector = _vec3(vector)

    def evaluate(self, point: Sequence[float]) -> np.ndarray:
        return self.vector.copy()


class PlaneSurface(Surface):
    """
    Parallelogram ``origin + u * u_axis + v * v_axis``.

    Args:
        origin: Corner at ``(u, v) = (0, 0)``
        u_axis: Edge vector along ``u``
        v_axis: Edge vector along ``v``
    """

    def __init__(
        self,
        origin: Sequence[float] = (0.0, 0.0, 0.0),
        u_axis: Sequence[float] = (1.0, 0.0, 0.0),
        v_axis: Sequence[float] = (0.0, 1.0, 0.0),
    ) -> None:
        self.origin = _vec3(origin)
        self.u_axis = _vec3(u_axis)
        self.v_axis = _vec3(v_axis)

    def evaluate(self, uv: Sequence[float]) -> np.ndarray:
        u, v = uv
        return self.origin + u * self.u_axis + v * self.v_axis


class SphereSurface(Surface):
    """Sphere; ``u`` runs around the equator, ``v`` from south to north pole."""

    def __init__(self, center: Sequence[float] = (0.0, 0.0, 0.0), radius: float = 1.0) -> None:
        self.center = _vec3(center)
        self.radius = float(radius)

    def evaluate(self, uv: Sequence[float]) -> np.ndarray:
        u, v = uv
        theta = 2.0 * math.pi * u
        phi = math.pi * (v - 0.5)
        return self.center + self.radius * np.array(
            [math.cos(phi) * math.cos(theta), math.cos(phi) * math.sin(theta), math.sin(phi)]
        )


class LineCurve(Curve):
    """Straight segment from ``start`` (t=0) to ``end`` (t=1)."""

    def __init__(self, start: Sequence[float], end: Sequence[float]) -> None:
        self.start = _vec3(start)
        self.end = _vec3(end)

    def evaluate(self, t: float) -> np.ndarray:
        return self.start + t * (self.end - self.start)


class CircleCurve(Curve):
    """Circle of ``radius`` around ``center`` in the XY plane."""

    def __init__(self, center: Sequence[float] = (0.0, 0.0, 0.0), radius: float = 1.0) -> None:
        self.center = _vec3(center)
        self.radius = float(radius)

    def evaluate(self, t: float) -> np.ndarray:
        angle = 2.0 * math.pi * t
        return self.center + self.radius * np.array([math.cos(angle), math.sin(angle), 0.0])


def tessellate(surface: Surface, rows: int, cols: int) -> TriMesh:
    """
    Sample a surface on a ``rows x cols`` grid of cells.

    Each cell ``(a, b, c, d)`` (corners at ``(u, v)``, ``(u+1, v)``,
    ``(u, v+1)``, ``(u+1, v+1)``) becomes the consecutive triangles
    ``(a, b, d)`` and ``(a, d, c)``, which share the diagonal ``a-d``.

    Raises:
        GeometryError: If ``rows`` or ``cols`` is not positive
    """
    if rows < 1 or cols < 1:
        raise GeometryError(
            "Tessellation needs at least one row and one column",
            details={"rows": rows, "cols": cols},
        )

    builder = TriMeshBuilder()
    for r in range(rows + 1):
        for c in range(cols + 1):
            builder.add(surface.evaluate((c / cols, r / rows)))

    stride = cols + 1
    for r in range(rows):
        for c in range(cols):
            a = r * stride + c
            b, c_, d = a + 1, a + stride, a + stride + 1
            builder.add_face(a, b, d).add_face(a, d, c_)
    return builder.freeze()


def sample_curve(curve: Curve, segments: int, closed: bool = False) -> LineSet:
    """
    Sample a curve into ``segments`` line segments.

    An open curve gets ``segments + 1`` vertices including both ends; a
    closed curve gets ``segments`` vertices and a last segment back to the
    first one.
    """
    if segments < 1:
        raise GeometryError("Curve sampling needs at least one segment")

    count = segments if closed else segments + 1
    points = [curve.evaluate(k / segments) for k in range(count)]
    starts = np.arange(segments)
    ends = (starts + 1) % count
    return LineSet(np.array(points), np.column_stack((starts, ends)))


def sample_field(field: Field, mesh: PolyMesh) -> np.ndarray:
    """Evaluate a field at every vertex of a mesh; returns an ``(n, 3)`` array."""
    return np.array([field.evaluate(p) for p in mesh.vertices]).reshape(-1, 3)
