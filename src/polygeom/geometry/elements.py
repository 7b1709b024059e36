"""
Non-owning views over an indexed geometry.

An :class:`Element` is one topological primitive (point, line, triangle, quad
or polygon). It is only a handle, the owning geometry plus an ordinal, and
reads its vertex indices straight out of the geometry's index buffer. The same
class serves every arity; algorithms only need ``len()`` and ``element[i]``.
"""

import operator
from collections.abc import Sequence
from typing import TYPE_CHECKING, Iterator, Union, overload

import numpy as np

from polygeom.core.exceptions import ElementIndexError

if TYPE_CHECKING:
    from polygeom.geometry.mesh import PolyMesh


class Element:
    """
    One element of a geometry, identified by ``(geometry, index)``.

    Attributes:
        geometry: Owning geometry
        index: Ordinal of the element within ``geometry.elements``
    """

    __slots__ = ("geometry", "index")

    def __init__(self, geometry: "PolyMesh", index: int) -> None:
        self.geometry = geometry
        self.index = index

    @property
    def count(self) -> int:
        """Number of vertices (arity) of this element."""
        return self.geometry.element_count(self.index)

    @property
    def indices(self) -> np.ndarray:
        """Read-only view of this element's slice of the index buffer."""
        start = self.geometry.element_start(self.index)
        return self.geometry.index_buffer[start:start + self.count]

    @property
    def points(self) -> np.ndarray:
        """``(count, 3)`` array of this element's vertex positions."""
        return self.geometry.vertices[self.indices]

    def __len__(self) -> int:
        return self.count

    def __getitem__(self, n: int) -> int:
        n = operator.index(n)
        count = self.count
        if not 0 <= n < count:
            raise ElementIndexError(n, count)
        return int(self.geometry.index_buffer[self.geometry.element_start(self.index) + n])

    def __iter__(self) -> Iterator[int]:
        return (int(i) for i in self.indices)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        return self.geometry is other.geometry and self.index == other.index

    def __hash__(self) -> int:
        return hash((id(self.geometry), self.index))

    def __repr__(self) -> str:
        return f"Element(index={self.index}, vertices={list(self)})"


class Edge:
    """
    The edge leaving local vertex ``index`` of an element.

    ``first`` is ``element[index]`` and ``second`` is the next vertex in
    cyclic order, so the last edge of an element closes back on its first
    vertex.
    """

    __slots__ = ("element", "index")

    def __init__(self, element: Element, index: int) -> None:
        self.element = element
        self.index = index

    @property
    def first(self) -> int:
        return self.element[self.index]

    @property
    def second(self) -> int:
        return self.element[(self.index + 1) % self.element.count]

    @property
    def key(self) -> tuple[int, int]:
        """Orientation-free identity of the edge: the sorted vertex pair."""
        a, b = self.first, self.second
        return (a, b) if a <= b else (b, a)

    @property
    def points(self) -> np.ndarray:
        """``(2, 3)`` array with the positions of both endpoints."""
        return self.element.geometry.vertices[[self.first, self.second]]

    def __iter__(self) -> Iterator[int]:
        yield self.first
        yield self.second

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return self.element == other.element and self.index == other.index

    def __hash__(self) -> int:
        return hash((self.element, self.index))

    def __repr__(self) -> str:
        return f"Edge({self.first}, {self.second})"


class Vertex:
    """A vertex of a geometry, identified by its position in the vertex buffer."""

    __slots__ = ("geometry", "index")

    def __init__(self, geometry: "PolyMesh", index: int) -> None:
        self.geometry = geometry
        self.index = index

    @property
    def position(self) -> np.ndarray:
        return self.geometry.vertices[self.index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.geometry is other.geometry and self.index == other.index

    def __hash__(self) -> int:
        return hash((id(self.geometry), self.index))

    def __repr__(self) -> str:
        return f"Vertex(index={self.index}, position={self.position.tolist()})"


class ElementList(Sequence):
    """
    Lazily materialised sequence of a geometry's elements.

    Nothing is stored: ``elements[i]`` builds a fresh :class:`Element` handle
    in O(1) from the geometry's index and face-start buffers.
    """

    __slots__ = ("_geometry",)

    def __init__(self, geometry: "PolyMesh") -> None:
        self._geometry = geometry

    def __len__(self) -> int:
        return self._geometry.face_count()

    @overload
    def __getitem__(self, i: int) -> Element: ...

    @overload
    def __getitem__(self, i: slice) -> list[Element]: ...

    def __getitem__(self, i: Union[int, slice]) -> Union[Element, list[Element]]:
        if isinstance(i, slice):
            return [Element(self._geometry, j) for j in range(*i.indices(len(self)))]
        i = operator.index(i)
        n = len(self)
        if i < 0:
            i += n
        if not 0 <= i < n:
            raise IndexError(f"Element index out of range: {i} (count {n})")
        return Element(self._geometry, i)

    def __iter__(self) -> Iterator[Element]:
        for i in range(len(self)):
            yield Element(self._geometry, i)

    def __repr__(self) -> str:
        return f"ElementList(count={len(self)})"
