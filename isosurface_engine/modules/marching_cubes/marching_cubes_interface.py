from typing import Optional

import numpy as np

from ._lookup_tables import CUBE_EDGE_FLAGS, CUBE_OFFSETS
from ._triangulate import triangulate_cell
from ._vertex_welding import VertexWelder
from ...core.data.cell import Cell
from ...core.data.isosurface_mesh import IndexedTriangle
from ...core.data.options.isosurface_options import EdgeInterpolation
from ...core.data.voxel_grid import VoxelGrid


def classify_cells(scalar_field_3d: np.ndarray, target_value: float) -> np.ndarray:
    """Corner classification bitmask of every cube.

    ``scalar_field_3d`` holds the corner values indexed ``[x, y, z]``. Bit i of the result is set when corner i
    (CUBE_OFFSETS order) is not above ``target_value``.
    """
    nx, ny, nz = (np.array(scalar_field_3d.shape) - 1).tolist()
    below = scalar_field_3d <= target_value

    flag_index = np.zeros((nx, ny, nz), dtype=np.int64)
    for i, (ox, oy, oz) in enumerate(CUBE_OFFSETS):
        flag_index |= below[ox:ox + nx, oy:oy + ny, oz:oz + nz].astype(np.int64) << i

    return flag_index


def cell_at(grid: VoxelGrid, scalar_field: np.ndarray, x: int, y: int, z: int, target_value: float) -> Cell:
    corner_x, corner_y, corner_z = (np.array([x, y, z]) + CUBE_OFFSETS).T

    p = grid.corner_position(corner_x, corner_y, corner_z)
    val = scalar_field[grid.map_index(corner_x, corner_y, corner_z)]
    return Cell.from_corners(p, val, target_value)


def march_cubes(grid: VoxelGrid, scalar_field: np.ndarray, target_value: float,
                edge_interpolation: EdgeInterpolation = EdgeInterpolation.RATIO,
                welder: Optional[VertexWelder] = None) -> tuple[np.ndarray, np.ndarray]:
    """Polygonises the level set ``scalar_field == target_value`` over every cube of ``grid``.

    Cubes are visited z outermost, x innermost. Cubes without crossed edges are skipped before any per cube work.
    Returns the de-duplicated vertices (n, 3) and the triangle indices (m, 3).
    """
    welder = VertexWelder() if welder is None else welder

    flag_index = classify_cells(grid.reshape_to_3d(scalar_field), target_value)
    active = CUBE_EDGE_FLAGS[flag_index] != 0
    active_zyx = np.argwhere(active.transpose(2, 1, 0))

    triangles = []
    for z, y, x in active_zyx.tolist():
        cell = cell_at(grid, scalar_field, x, y, z, target_value)
        for triangle in triangulate_cell(cell, target_value, edge_interpolation):
            triangles.append(IndexedTriangle(*(welder.add(corner) for corner in triangle)))

    triangles = np.array(triangles, dtype=np.int64).reshape(-1, 3)
    return welder.to_array(), triangles
