"""
Indexed mesh types.

Every mesh owns a read-only vertex buffer and a flat index buffer. Variable
arity meshes (:class:`PolyMesh`) add a face-start buffer holding the position
of each element's first index; the element's arity is the gap to the next
start, with the index count acting as the closing sentinel. Fixed-arity meshes
derive their face starts from the arity instead of storing them.

Elements are never stored. ``mesh.elements`` is a view that builds element
handles on demand, and every derived quantity (flattened indices, edges,
midpoints, normals, merged meshes) is computed once and kept in ``mesh.cache``.
"""

from typing import Any, ClassVar, Iterable, Optional, Sequence

import numpy as np

from polygeom.core.exceptions import ArityError, GeometryError
from polygeom.core.memo import Memoizer, memoized
from polygeom.geometry import operations
from polygeom.geometry.elements import Edge, ElementList, Vertex


def _is_frozen(array: np.ndarray) -> bool:
    """True when neither ``array`` nor any array it is a view of can be written."""
    while isinstance(array, np.ndarray):
        if array.flags.writeable:
            return False
        array = array.base
    return array is None


def _vertex_buffer(vertices: Any) -> np.ndarray:
    """Adopt a frozen float64 ``(n, 3)`` array as-is, otherwise copy once."""
    if (
        isinstance(vertices, np.ndarray)
        and vertices.dtype == np.float64
        and vertices.ndim == 2
        and vertices.shape[1] == 3
        and _is_frozen(vertices)
    ):
        return vertices

    try:
        buffer = np.array(vertices, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise GeometryError(f"Invalid vertex buffer: {e}") from e

    if buffer.size == 0:
        buffer = np.empty((0, 3), dtype=np.float64)
    if buffer.ndim != 2 or buffer.shape[1] != 3:
        raise GeometryError(
            "Vertex buffer must have shape (n, 3)",
            details={"shape": buffer.shape},
        )
    buffer.flags.writeable = False
    return buffer


def _index_buffer(values: Any, name: str) -> np.ndarray:
    """Adopt a frozen 1-D intp array as-is, otherwise copy once."""
    if (
        isinstance(values, np.ndarray)
        and values.dtype == np.intp
        and values.ndim == 1
        and _is_frozen(values)
    ):
        return values

    buffer = np.array(values)
    if buffer.size == 0:
        buffer = np.empty(0, dtype=np.intp)
    elif buffer.dtype.kind not in "iu":
        raise GeometryError(
            f"{name} must contain integers",
            details={"dtype": str(buffer.dtype)},
        )
    # (m, k) face arrays are accepted and flattened row by row
    buffer = buffer.reshape(-1).astype(np.intp)
    buffer.flags.writeable = False
    return buffer


def _check_face_starts(face_starts: np.ndarray, index_count: int) -> None:
    if len(face_starts) == 0:
        if index_count:
            raise GeometryError(
                "Index buffer is not empty but no face starts were given",
                details={"index_count": index_count},
            )
        return
    if face_starts[0] != 0:
        raise GeometryError(
            "Face starts must begin at 0",
            details={"first": int(face_starts[0])},
        )
    if np.any(np.diff(face_starts) <= 0):
        raise GeometryError("Face starts must be strictly increasing")
    if face_starts[-1] >= index_count:
        raise GeometryError(
            "Last face start lies beyond the index buffer",
            details={"last": int(face_starts[-1]), "index_count": index_count},
        )


class PolyMesh:
    """
    Mesh of variable-arity elements over a shared vertex buffer.

    Args:
        vertices: ``(n, 3)`` array-like of positions
        indices: Flat sequence of vertex indices, element after element
        face_starts: Position in ``indices`` where each element begins

    Raises:
        GeometryError: If a buffer has the wrong shape or dtype, or the face
            starts do not begin at 0 and strictly increase
    """

    arity: ClassVar[Optional[int]] = None

    def __init__(self, vertices: Any, indices: Any, face_starts: Any) -> None:
        self._vertices = _vertex_buffer(vertices)
        self._index_buffer = _index_buffer(indices, "indices")
        self._face_starts = _index_buffer(face_starts, "face_starts")
        _check_face_starts(self._face_starts, len(self._index_buffer))
        self.cache = Memoizer()

    @classmethod
    def from_face_lists(cls, vertices: Any, face_lists: Iterable[Sequence[int]]) -> "PolyMesh":
        """Build a mesh from one index list per face; empty lists are skipped."""
        faces = [list(face) for face in face_lists if len(face)]
        counts = [len(face) for face in faces]
        flat = [i for face in faces for i in face]
        return PolyMesh(vertices, flat, operations.face_starts_from_counts(counts))

    # ------------------------------------------------------------------
    # Buffers
    # ------------------------------------------------------------------

    @property
    def vertices(self) -> np.ndarray:
        """Read-only ``(n, 3)`` vertex buffer."""
        return self._vertices

    @property
    def index_buffer(self) -> np.ndarray:
        """Read-only flat index buffer as given at construction."""
        return self._index_buffer

    @property
    def face_starts(self) -> np.ndarray:
        return self._face_starts

    @property
    @memoized
    def face_counts(self) -> np.ndarray:
        """Arity of every element: adjacent differences of the face starts."""
        counts = np.diff(np.append(self._face_starts, len(self._index_buffer)))
        counts.flags.writeable = False
        return counts

    def element_start(self, index: int) -> int:
        return int(self._face_starts[index])

    def element_count(self, index: int) -> int:
        return int(self.face_counts[index])

    # ------------------------------------------------------------------
    # Views and queries
    # ------------------------------------------------------------------

    @property
    def elements(self) -> ElementList:
        return ElementList(self)

    def face_count(self) -> int:
        return len(self._face_starts)

    def vertex(self, index: int) -> Vertex:
        return Vertex(self, index)

    def indices(self) -> np.ndarray:
        return operations.indices(self)

    def edges(self) -> tuple[tuple[Edge, ...], ...]:
        return operations.geometry_edges(self)

    def face_midpoints(self) -> np.ndarray:
        return operations.face_midpoints(self)

    def face_normals(self) -> np.ndarray:
        return operations.face_normals(self)

    def used_vertices(self) -> tuple[Vertex, ...]:
        return operations.used_vertices(self)

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def to_poly_mesh(self, face_lists: Iterable[Sequence[int]]) -> "PolyMesh":
        return operations.to_poly_mesh(self, face_lists)

    def merge_coplanar(self, tolerance: float) -> "PolyMesh":
        return operations.merge_coplanar(self, tolerance)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(vertices={len(self._vertices)}, "
            f"elements={self.face_count()})"
        )


class FixedArityMesh(PolyMesh):
    """
    Mesh whose elements all have ``arity`` vertices.

    The index buffer must hold a whole number of elements; a trailing partial
    element is rejected rather than dropped.

    Raises:
        ArityError: If ``len(indices)`` is not a multiple of ``arity``
    """

    arity: ClassVar[int]

    def __init__(self, vertices: Any, indices: Any) -> None:
        index_buffer = _index_buffer(indices, "indices")
        if len(index_buffer) % self.arity:
            raise ArityError(
                f"{type(self).__name__} needs a multiple of {self.arity} indices, "
                f"got {len(index_buffer)}",
                arity=self.arity,
                details={"index_count": len(index_buffer)},
            )
        super().__init__(
            vertices,
            index_buffer,
            np.arange(0, len(index_buffer), self.arity, dtype=np.intp),
        )

    @property
    def faces(self) -> np.ndarray:
        """Read-only ``(m, arity)`` view of the index buffer."""
        return self.index_buffer.reshape(-1, self.arity)

    def element_start(self, index: int) -> int:
        return index * self.arity

    def element_count(self, index: int) -> int:
        return self.arity


class TriMesh(FixedArityMesh):
    """Triangle mesh."""

    arity = 3


class QuadMesh(FixedArityMesh):
    """Quad mesh."""

    arity = 4


class LineSet(FixedArityMesh):
    """Set of line segments, two indices each."""

    arity = 2


class PointCloud(FixedArityMesh):
    """Set of point elements; by default one element per vertex."""

    arity = 1

    def __init__(self, vertices: Any, indices: Any = None) -> None:
        vertex_buffer = _vertex_buffer(vertices)
        if indices is None:
            indices = np.arange(len(vertex_buffer), dtype=np.intp)
        super().__init__(vertex_buffer, indices)


class Polygon(PolyMesh):
    """A single polygon visiting every vertex in order."""

    def __init__(self, vertices: Any) -> None:
        vertex_buffer = _vertex_buffer(vertices)
        count = len(vertex_buffer)
        super().__init__(
            vertex_buffer,
            np.arange(count, dtype=np.intp),
            [0] if count else [],
        )
