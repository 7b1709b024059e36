"""
Incremental construction of triangle meshes.

:class:`TriMeshBuilder` is the only mutable stage of a mesh's life. It
accumulates vertices and triangles, then :meth:`TriMeshBuilder.freeze` hands
both buffers to an immutable :class:`~polygeom.geometry.mesh.TriMesh`. A
builder cannot be reused afterwards.
"""

from typing import Iterable, Optional

import numpy as np

from polygeom.core.exceptions import BuilderFrozenError, GeometryError
from polygeom.core.logging import get_logger
from polygeom.geometry.mesh import TriMesh

_logger = get_logger(__name__)


class TriMeshBuilder:
    """
    Append-only triangle mesh builder.

    Not thread-safe: use one writer per builder.

    Example:
        >>> mesh = (
        ...     TriMeshBuilder()
        ...     .add((0, 0, 0)).add((1, 0, 0)).add((0, 1, 0))
        ...     .add_face(0, 1, 2)
        ...     .freeze()
        ... )
        >>> len(mesh.elements)
        1
    """

    def __init__(self) -> None:
        self._vertices: Optional[list[tuple[float, float, float]]] = []
        self._indices: Optional[list[int]] = []

    @property
    def frozen(self) -> bool:
        return self._vertices is None

    @property
    def vertex_count(self) -> int:
        self._ensure_open("count vertices")
        return len(self._vertices)

    @property
    def face_count(self) -> int:
        self._ensure_open("count faces")
        return len(self._indices) // 3

    def _ensure_open(self, action: str) -> None:
        if self.frozen:
            raise BuilderFrozenError(f"Builder already frozen, cannot {action}")

    def add(self, vertex: Iterable[float]) -> "TriMeshBuilder":
        """
        Append a vertex.

        Args:
            vertex: Three coordinates (tuple, list, array or COMPAS Point)

        Returns:
            This builder

        Raises:
            BuilderFrozenError: If the builder has been frozen
            GeometryError: If the vertex does not have three coordinates
        """
        self._ensure_open("add a vertex")
        coords = tuple(float(c) for c in vertex)
        if len(coords) != 3:
            raise GeometryError(
                "Vertex must have 3 coordinates",
                details={"coordinates": len(coords)},
            )
        self._vertices.append(coords)
        return self

    def add_face(self, a: int, b: int, c: int) -> "TriMeshBuilder":
        """Append a triangle by vertex indices; indices are not validated."""
        self._ensure_open("add a face")
        self._indices.extend((int(a), int(b), int(c)))
        return self

    def freeze(self) -> TriMesh:
        """
        Move the accumulated buffers into a new TriMesh.

        Raises:
            BuilderFrozenError: If called more than once
        """
        self._ensure_open("freeze again")
        # Filled in place so the mesh can adopt the array without a copy
        vertices = np.empty((len(self._vertices), 3), dtype=np.float64)
        if self._vertices:
            vertices[:] = self._vertices
        indices = np.array(self._indices, dtype=np.intp)
        vertices.flags.writeable = False
        indices.flags.writeable = False
        self._vertices = None
        self._indices = None

        mesh = TriMesh(vertices, indices)
        _logger.debug(
            "builder_frozen",
            vertices=len(mesh.vertices),
            faces=mesh.face_count(),
        )
        return mesh
