"""
Conversion between polygeom meshes and COMPAS / trimesh meshes.

polygeom keeps its own indexed representation; these converters only move
buffers across the boundary. Third-party failures are re-raised as
GeometryError.
"""

import logging

import numpy as np
import trimesh
from compas.datastructures import Mesh as CompasMesh

from polygeom.core.exceptions import ArityError, GeometryError
from polygeom.geometry.mesh import PolyMesh, TriMesh

logger = logging.getLogger(__name__)


class GeometryConverter:
    """
    Converter between polygeom meshes and other geometry libraries.

    COMPAS meshes keep arbitrary polygon faces; trimesh only stores
    triangles, so polygons are fan-triangulated on the way out.
    """

    @staticmethod
    def to_compas(mesh: PolyMesh) -> CompasMesh:
        """
        Convert a polygeom mesh to a COMPAS Mesh.

        Args:
            mesh: Any polygeom mesh

        Returns:
            COMPAS Mesh with the same vertices and faces

        Raises:
            GeometryError: If conversion fails
        """
        try:
            faces = [list(element) for element in mesh.elements]
            return CompasMesh.from_vertices_and_faces(mesh.vertices.tolist(), faces)
        except Exception as e:
            raise GeometryError(f"Failed to convert mesh to COMPAS: {e}") from e

    @staticmethod
    def from_compas(mesh: CompasMesh) -> PolyMesh:
        """
        Convert a COMPAS Mesh to a PolyMesh.

        Vertex keys are renumbered consecutively in COMPAS iteration order.

        Raises:
            GeometryError: If conversion fails
        """
        try:
            vertices, faces = mesh.to_vertices_and_faces()
        except Exception as e:
            raise GeometryError(f"Failed to convert COMPAS mesh: {e}") from e
        return PolyMesh.from_face_lists(vertices, faces)

    @staticmethod
    def to_trimesh(mesh: PolyMesh) -> trimesh.Trimesh:
        """
        Convert a polygeom mesh to a trimesh.Trimesh.

        Every element is fan-triangulated around its first vertex. Vertex
        order is preserved (no merging or cleanup).

        Raises:
            ArityError: If an element has fewer than 3 vertices
            GeometryError: If conversion fails
        """
        triangles = []
        for element in mesh.elements:
            if element.count < 3:
                raise ArityError(
                    f"Cannot triangulate element {element.index} "
                    f"with {element.count} vertices",
                    arity=element.count,
                )
            for k in range(1, element.count - 1):
                triangles.append((element[0], element[k], element[k + 1]))

        faces = np.array(triangles, dtype=np.int64).reshape(-1, 3)
        logger.debug(
            "Triangulated %d elements into %d triangles",
            mesh.face_count(), len(faces),
        )
        try:
            return trimesh.Trimesh(
                vertices=np.array(mesh.vertices), faces=faces, process=False
            )
        except Exception as e:
            raise GeometryError(f"Failed to convert mesh to trimesh: {e}") from e

    @staticmethod
    def from_trimesh(mesh: trimesh.Trimesh) -> TriMesh:
        """Convert a trimesh.Trimesh to a TriMesh."""
        return TriMesh(np.asarray(mesh.vertices), np.asarray(mesh.faces))
