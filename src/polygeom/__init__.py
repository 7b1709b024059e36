"""
polygeom - Indexed polygon meshes with cached geometric queries.

Points, lines, triangles, quads and variable-arity polygons stored as index
buffers over a shared vertex buffer, with lazily computed and memoized derived
data (edges, midpoints, normals, coplanar face merging).
"""

__version__ = "0.1.0"
__author__ = "polygeom Contributors"

from polygeom.geometry import PolyMesh, QuadMesh, TriMesh, TriMeshBuilder

__all__ = [
    "__version__",
    "PolyMesh",
    "TriMesh",
    "QuadMesh",
    "TriMeshBuilder",
]
