"""
Derived geometric algorithms over elements and indexed meshes.

Provides:
- Index flattening, edge extraction and vertex extraction
- Per-element midpoint, tangent, binormal and normal
- Coplanarity test and triangle merge eligibility
- Coplanar triangle merging into a variable-arity mesh

Functions taking a whole geometry publish their result through the
geometry's memoization cache, so each runs at most once per mesh; results are
returned as read-only arrays or tuples. Per-element functions are uncached.
"""

from itertools import chain
from typing import TYPE_CHECKING, Iterable, Sequence

import numpy as np

from polygeom.core.exceptions import ArityError
from polygeom.core.logging import get_logger
from polygeom.geometry.elements import Edge, Element, Vertex

if TYPE_CHECKING:
    from polygeom.geometry.mesh import PolyMesh

_logger = get_logger(__name__)


def _read_only(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


# ---------------------------------------------------------------------------
# Offsets
# ---------------------------------------------------------------------------

def partial_sums(values: Iterable[int]) -> np.ndarray:
    """Running totals of ``values`` (inclusive prefix sums)."""
    return np.cumsum(np.fromiter(values, dtype=np.intp))


def face_starts_from_counts(counts: Sequence[int]) -> np.ndarray:
    """
    Convert per-face arities into face-start offsets.

    The first face starts at 0 and every later face starts where the
    previous one ends, e.g. ``[3, 4, 3] -> [0, 3, 7]``.
    """
    if len(counts) == 0:
        return np.empty(0, dtype=np.intp)
    return np.concatenate(([0], partial_sums(counts)[:-1])).astype(np.intp)


# ---------------------------------------------------------------------------
# Whole-geometry queries (memoized)
# ---------------------------------------------------------------------------

def indices(geometry: "PolyMesh") -> np.ndarray:
    """
    Every element's local indices, in element order then local order.

    Returns:
        Read-only 1-D intp array; the identical object on every call.
    """
    def compute() -> np.ndarray:
        flat = chain.from_iterable(element.indices for element in geometry.elements)
        return _read_only(
            np.fromiter(flat, dtype=np.intp, count=len(geometry.index_buffer))
        )

    return geometry.cache.get_or_compute("indices", compute)


def geometry_edges(geometry: "PolyMesh") -> tuple[tuple[Edge, ...], ...]:
    """Edges of every element, grouped per element."""
    return geometry.cache.get_or_compute(
        "edges",
        lambda: tuple(edges(element) for element in geometry.elements),
    )


def face_midpoints(geometry: "PolyMesh") -> np.ndarray:
    """``(m, 3)`` array holding the midpoint of every element."""
    def compute() -> np.ndarray:
        if geometry.face_count() == 0:
            return _read_only(np.empty((0, 3)))
        corners = geometry.vertices[geometry.index_buffer]
        sums = np.add.reduceat(corners, geometry.face_starts, axis=0)
        return _read_only(sums / geometry.face_counts[:, np.newaxis])

    return geometry.cache.get_or_compute("face_midpoints", compute)


def face_normals(geometry: "PolyMesh") -> np.ndarray:
    """
    ``(m, 3)`` array of unit normals, one per element.

    Raises:
        ArityError: If any element has fewer than 3 vertices
    """
    def compute() -> np.ndarray:
        normals = np.array([normal(element) for element in geometry.elements])
        return _read_only(normals.reshape(-1, 3))

    return geometry.cache.get_or_compute("face_normals", compute)


def used_vertices(geometry: "PolyMesh") -> tuple[Vertex, ...]:
    """Vertices referenced by at least one element, in ascending index order."""
    return geometry.cache.get_or_compute(
        "used_vertices",
        lambda: tuple(Vertex(geometry, int(i)) for i in np.unique(indices(geometry))),
    )


# ---------------------------------------------------------------------------
# Per-element queries
# ---------------------------------------------------------------------------

def edges(element: Element) -> tuple[Edge, ...]:
    """The ``count`` edges of an element; the last one wraps to vertex 0."""
    return tuple(Edge(element, i) for i in range(element.count))


def midpoint(element: Element) -> np.ndarray:
    """Arithmetic mean of the element's vertex positions."""
    return element.points.mean(axis=0)


def _require_arity(element: Element, minimum: int) -> None:
    if element.count < minimum:
        raise ArityError(
            f"Element {element.index} has {element.count} vertices, "
            f"at least {minimum} required",
            arity=element.count,
        )


def tangent(element: Element) -> np.ndarray:
    """``P1 - P0`` for an element of arity 3 or more."""
    _require_arity(element, 3)
    vertices = element.geometry.vertices
    return vertices[element[1]] - vertices[element[0]]


def binormal(element: Element) -> np.ndarray:
    """``P2 - P0`` for an element of arity 3 or more."""
    _require_arity(element, 3)
    vertices = element.geometry.vertices
    return vertices[element[2]] - vertices[element[0]]


def _normalize(vector: np.ndarray) -> np.ndarray:
    length = np.linalg.norm(vector)
    if length == 0.0:
        return np.zeros(3)
    return vector / length


def normal(element: Element) -> np.ndarray:
    """
    Unit normal ``normalize(binormal x tangent)``.

    The operand order fixes the winding convention: a counter-clockwise
    triangle seen from +Z has a normal pointing to -Z. Degenerate elements
    yield the zero vector.
    """
    return _normalize(np.cross(binormal(element), tangent(element)))


# ---------------------------------------------------------------------------
# Coplanarity
# ---------------------------------------------------------------------------

def coplanar(
    v1: Sequence[float],
    v2: Sequence[float],
    v3: Sequence[float],
    v4: Sequence[float],
    tolerance: float,
) -> bool:
    """
    Test whether four points lie in one plane.

    The points are coplanar when the scalar triple product
    ``dot(v3 - v1, cross(v2 - v1, v4 - v1))`` (six times the volume of their
    tetrahedron) is smaller than ``tolerance`` in magnitude. The tolerance
    therefore scales with the cube of the coordinate magnitude; see
    :func:`scaled_tolerance`.
    """
    p1 = np.asarray(v1, dtype=np.float64)
    a = np.asarray(v2, dtype=np.float64) - p1
    b = np.asarray(v3, dtype=np.float64) - p1
    c = np.asarray(v4, dtype=np.float64) - p1
    return bool(abs(np.dot(b, np.cross(a, c))) < tolerance)


def scaled_tolerance(vertices: np.ndarray, relative: float) -> float:
    """
    Calibrate a coplanarity tolerance to the size of a vertex buffer.

    Returns ``relative * d**3`` where ``d`` is the diagonal of the vertices'
    bounding box. Empty or single-point buffers return ``relative`` unscaled.
    """
    if len(vertices) == 0:
        return relative
    diagonal = float(np.linalg.norm(vertices.max(axis=0) - vertices.min(axis=0)))
    if diagonal == 0.0:
        return relative
    return relative * diagonal ** 3


def can_merge_tris(a: Element, b: Element, tolerance: float) -> bool:
    """
    Whether two triangles form a planar quad across a shared edge.

    True only when both elements are triangles of the same geometry, their
    six indices name exactly four distinct vertices, and those four vertices
    are coplanar. Never raises.
    """
    if a.count != 3 or b.count != 3 or a.geometry is not b.geometry:
        return False
    distinct = list(dict.fromkeys(chain(a, b)))
    if len(distinct) != 4:
        return False
    return coplanar(*a.geometry.vertices[distinct], tolerance)


# ---------------------------------------------------------------------------
# Mesh construction and merging
# ---------------------------------------------------------------------------

def to_poly_mesh(geometry: "PolyMesh", face_lists: Iterable[Sequence[int]]) -> "PolyMesh":
    """
    Build a variable-arity mesh over ``geometry``'s vertex buffer.

    Args:
        geometry: Mesh whose vertex buffer is shared (not copied)
        face_lists: One sequence of vertex indices per face; elements are
            accepted too. Empty lists contribute neither indices nor a face.

    Returns:
        New PolyMesh
    """
    from polygeom.geometry.mesh import PolyMesh

    faces = [[int(i) for i in face] for face in face_lists]
    faces = [face for face in faces if face]
    counts = [len(face) for face in faces]
    flat = np.fromiter(chain.from_iterable(faces), dtype=np.intp, count=sum(counts))
    return PolyMesh(geometry.vertices, flat, face_starts_from_counts(counts))


def _splice(polygon: list[int], representative: Element, triangle: Element) -> bool:
    """
    Insert ``triangle``'s far vertex into ``polygon`` across the shared edge.

    Returns False, leaving ``polygon`` untouched, when the two triangles do
    not share exactly one edge and one far vertex (repeated-vertex triangles
    can pass the distinct-index count on a single shared vertex), when the
    shared edge is no longer a side of the polygon, or when the far vertex is
    already in it.
    """
    shared = set(representative) & set(triangle)
    far_vertices = set(triangle) - shared
    if len(shared) != 2 or len(far_vertices) != 1:
        return False
    far = far_vertices.pop()
    if far in polygon:
        return False
    n = len(polygon)
    for k in range(n):
        if {polygon[k], polygon[(k + 1) % n]} == shared:
            polygon.insert(k + 1, far)
            return True
    return False


def merge_coplanar(geometry: "PolyMesh", tolerance: float) -> "PolyMesh":
    """
    Merge runs of coplanar, edge-adjacent triangles into polygons.

    Elements are scanned once in order. Each group is started by a
    representative element; the following elements join it for as long as
    they pass :func:`can_merge_tris` against that representative (not against
    the latest member). A joining triangle is spliced into the group's
    polygon across the shared edge, keeping the representative's winding.
    A triangle that passes :func:`can_merge_tris` but cannot be spliced (its
    shared edge is already taken, its far vertex is already in the polygon,
    or it shares a single repeated vertex) starts a new group instead.
    This is a single forward pass, not a global clustering.

    Args:
        geometry: Source mesh; its vertex buffer is shared by the result
        tolerance: Absolute coplanarity tolerance

    Returns:
        PolyMesh with one element per group (memoized per tolerance)
    """
    def compute() -> "PolyMesh":
        groups: list[list[int]] = []
        representative = None
        polygon: list[int] = []
        for element in geometry.elements:
            if (
                representative is not None
                and can_merge_tris(representative, element, tolerance)
                and _splice(polygon, representative, element)
            ):
                continue
            representative = element
            polygon = list(element)
            groups.append(polygon)

        merged = to_poly_mesh(geometry, groups)
        _logger.info(
            "coplanar_merge_complete",
            faces_before=geometry.face_count(),
            faces_after=merged.face_count(),
            tolerance=tolerance,
        )
        return merged

    return geometry.cache.get_or_compute(("merge_coplanar", float(tolerance)), compute)
