from typing import List

import numpy as np

from ._lookup_tables import CUBE_EDGE_FLAGS, EDGE_CONNECTION, EDGE_DIRECTION, TRIANGLE_CONNECTION_TABLE
from ...core.data.cell import Cell
from ...core.data.isosurface_mesh import Triangle
from ...core.data.options.isosurface_options import EdgeInterpolation

MAX_TRIANGLES_PER_CELL = 5


def _canonical_edge_connection() -> np.ndarray:
    """EDGE_CONNECTION with every edge running from its lower to its higher grid corner"""
    connection = EDGE_CONNECTION.copy()
    descending = EDGE_DIRECTION.sum(axis=1) < 0
    connection[descending] = connection[descending, ::-1]
    return connection


CANONICAL_EDGE_CONNECTION = _canonical_edge_connection()
CANONICAL_EDGE_CONNECTION.flags.writeable = False


def interpolation_weight(val_1: np.ndarray, val_2: np.ndarray, target_value: float,
                         edge_interpolation: EdgeInterpolation) -> np.ndarray:
    """Position of the crossing along the edge from corner 1 (t=0) to corner 2 (t=1).

    Both rules give the same point when the edge is walked in the opposite direction.
    """
    match edge_interpolation:
        case EdgeInterpolation.RATIO:
            return val_1 / (val_1 + val_2)
        case EdgeInterpolation.LINEAR:
            return (target_value - val_1) / (val_2 - val_1)
        case _:
            raise ValueError(f"Unknown edge interpolation {edge_interpolation}")


def crossed_edges(edge_flags: int) -> np.ndarray:
    return np.flatnonzero((edge_flags >> np.arange(12)) & 1)


def compute_edge_vertices(cell: Cell, target_value: float, edge_interpolation: EdgeInterpolation) -> np.ndarray:
    """(12, 3) crossing points of the cell. Rows of edges that are not crossed are NaN."""
    edge_vertex = np.full((12, 3), np.nan, dtype=cell.p.dtype)

    edges = crossed_edges(cell.edge_flags)
    low, high = CANONICAL_EDGE_CONNECTION[edges].T

    t = interpolation_weight(cell.val[low], cell.val[high], target_value, edge_interpolation)
    edge_vertex[edges] = cell.p[low] + t[:, None] * (cell.p[high] - cell.p[low])
    return edge_vertex


def triangulate_cell(cell: Cell, target_value: float,
                     edge_interpolation: EdgeInterpolation = EdgeInterpolation.RATIO) -> List[Triangle]:
    """Triangles of the surface inside one cube, at most five.

    ``cell.flag_index`` has to be set. ``cell.edge_flags`` is looked up here.
    """
    cell.edge_flags = int(CUBE_EDGE_FLAGS[cell.flag_index])

    # If the cube is entirely inside or outside of the surface, then there will be no intersections
    if cell.edge_flags == 0:
        return []

    edge_vertex = compute_edge_vertices(cell, target_value, edge_interpolation)

    connection = TRIANGLE_CONNECTION_TABLE[cell.flag_index]
    triangles = []
    for i_triangle in range(MAX_TRIANGLES_PER_CELL):
        corners = connection[3 * i_triangle: 3 * i_triangle + 3]
        if corners[0] < 0:
            break
        triangles.append(Triangle(*edge_vertex[corners]))

    return triangles
