from typing import Sequence

import numpy as np

from ...core.backend_tensor import BackendTensor
from ...core.data.blending_function import BlendingFunction
from ...core.data.skeleton_nodes import SkeletonNode, skeleton_bounds
from ...core.data.voxel_grid import VoxelGrid
from ..scalar_field.scalar_field_interface import iso_value


def voxel_grid_from_skeleton(skeleton: Sequence[SkeletonNode], cube_size: float) -> VoxelGrid:
    extends_from, extends_to = skeleton_bounds(skeleton)
    return VoxelGrid(extends_from, extends_to, cube_size)


def fill_scalar_field(grid: VoxelGrid, skeleton: Sequence[SkeletonNode], blend: BlendingFunction,
                      chunk_size: int = 500_000, debug: bool = False) -> np.ndarray:
    """Evaluates the field on every corner of ``grid``.

    Returns a flat array of ``(nx+1)(ny+1)(nz+1)`` values in ``grid.map_index`` order. Corners are evaluated in
    chunks of at most ``chunk_size`` points to bound the memory of the intermediate coordinates.

    With ``debug`` a bitmap of written slots checks that every corner is computed exactly once.
    """
    n_corners = grid.n_corners
    scalar_field = np.empty(n_corners, dtype=BackendTensor.dtype_obj)
    written = np.zeros(n_corners, dtype=bool) if debug else None

    for start in range(0, n_corners, chunk_size):
        stop = min(start + chunk_size, n_corners)
        xyz = grid.corner_positions_slice(start, stop)

        if written is not None:
            assert not written[start:stop].any(), "Scalar field slot computed twice"
            written[start:stop] = True

        scalar_field[start:stop] = iso_value(xyz, skeleton, blend)

    if written is not None:
        assert written.all(), "Scalar field slot not computed"

    return scalar_field
