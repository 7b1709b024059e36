"""
Geometry module — indexed meshes, element views, derived queries and builders.
"""

from polygeom.geometry.builder import TriMeshBuilder
from polygeom.geometry.elements import Edge, Element, ElementList, Vertex
from polygeom.geometry.mesh import (
    FixedArityMesh,
    LineSet,
    PointCloud,
    Polygon,
    PolyMesh,
    QuadMesh,
    TriMesh,
)
from polygeom.geometry.operations import (
    binormal,
    can_merge_tris,
    coplanar,
    edges,
    merge_coplanar,
    midpoint,
    normal,
    scaled_tolerance,
    tangent,
    to_poly_mesh,
)

__all__ = [
    "Element",
    "Edge",
    "Vertex",
    "ElementList",
    "PolyMesh",
    "FixedArityMesh",
    "TriMesh",
    "QuadMesh",
    "LineSet",
    "PointCloud",
    "Polygon",
    "TriMeshBuilder",
    "edges",
    "midpoint",
    "tangent",
    "binormal",
    "normal",
    "coplanar",
    "scaled_tolerance",
    "can_merge_tris",
    "merge_coplanar",
    "to_poly_mesh",
]
