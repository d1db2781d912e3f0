from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from ..backend_tensor import BackendTensor


class Triangle(NamedTuple):
    """Three corner positions in world space"""
    p0: np.ndarray
    p1: np.ndarray
    p2: np.ndarray


class IndexedTriangle(NamedTuple):
    """Three indices into the vertex array"""
    i0: int
    i1: int
    i2: int


@dataclass(eq=False)
class IsosurfaceMesh:
    vertices: np.ndarray  #: (n, 3) world coordinates, each position stored once
    normals: np.ndarray  #: (n, 3) unit normals, parallel to vertices
    triangles: np.ndarray  #: (m, 3) indices into vertices. Winding comes from the triangle table

    @classmethod
    def empty(cls) -> "IsosurfaceMesh":
        return cls(
            vertices=np.zeros((0, 3), dtype=BackendTensor.dtype_obj),
            normals=np.zeros((0, 3), dtype=BackendTensor.dtype_obj),
            triangles=np.zeros((0, 3), dtype=np.int64)
        )

    @property
    def n_vertices(self) -> int:
        return self.vertices.shape[0]

    @property
    def n_triangles(self) -> int:
        return self.triangles.shape[0]

    @property
    def is_empty(self) -> bool:
        return self.n_triangles == 0

    @property
    def vtk_faces(self) -> np.ndarray:
        """Faces in the flat ``[3, i0, i1, i2, 3, ...]`` layout VTK style consumers expect"""
        return np.insert(self.triangles, 0, 3, axis=1).ravel()

    def __repr__(self):
        return f"IsosurfaceMesh({self.n_vertices} vertices, {self.n_triangles} triangles)"

    def _repr_html_(self):
        return f"<b>IsosurfaceMesh:</b> {self.n_vertices} vertices, {self.n_triangles} triangles"
