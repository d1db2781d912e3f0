from dataclasses import dataclass, field
from typing import Union, List

import numpy as np

from ..backend_tensor import BackendTensor
from ..utils import _check_and_convert_list_to_array


@dataclass(eq=False)
class VoxelGrid:
    """Uniform grid of cubes covering ``[extends_from, extends_to]``.

    There are ``resolution = floor(bbox / cube_size) + 1`` cubes per axis, so the grid may overshoot
    ``extends_to`` by up to one cube. Corners are numbered ``(x, y, z)`` in ``[0, nx] x [0, ny] x [0, nz]`` and
    stored flat with x running fastest (see ``map_index``).
    """
    extends_from: Union[np.ndarray, List]
    extends_to: Union[np.ndarray, List]
    cube_size: float

    resolution: np.ndarray = field(init=False)  # Shape(3)

    def __post_init__(self):
        self.extends_from = _check_and_convert_list_to_array(self.extends_from, dtype=BackendTensor.dtype_obj)
        self.extends_to = _check_and_convert_list_to_array(self.extends_to, dtype=BackendTensor.dtype_obj)
        self.cube_size = float(self.cube_size)

        if self.is_degenerate:
            self.resolution = np.zeros(3, dtype=np.int64)
        else:
            self.resolution = (np.floor(self.bounding_box / self.cube_size) + 1).astype(np.int64)

    @property
    def bounding_box(self) -> np.ndarray:
        return self.extends_to - self.extends_from

    @property
    def is_degenerate(self) -> bool:
        """True when the box is not longer than one cube along some axis (or empty). No mesh is generated then."""
        bounding_box = self.bounding_box
        if not np.all(np.isfinite(bounding_box)):
            return True
        return not bool(np.all(bounding_box > self.cube_size))

    @property
    def corners_shape(self) -> tuple[int, int, int]:
        nx, ny, nz = self.resolution
        return int(nx) + 1, int(ny) + 1, int(nz) + 1

    @property
    def n_cells(self) -> int:
        return int(np.prod(self.resolution))

    @property
    def n_corners(self) -> int:
        if self.is_degenerate:
            return 0
        return int(np.prod(self.corners_shape))

    def map_index(self, x, y, z):
        """Flat index of corner (x, y, z): ``z * (nx+1) * (ny+1) + y * (nx+1) + x``"""
        width, height, _ = self.corners_shape
        return z * width * height + y * width + x

    def unravel_index(self, index):
        width, height, _ = self.corners_shape
        index = np.asarray(index)
        return index % width, (index // width) % height, index // (width * height)

    def corner_position(self, x, y, z) -> np.ndarray:
        """World coordinates of corner(s) (x, y, z). Every corner coordinate in the engine comes from here."""
        xyz = np.stack(np.broadcast_arrays(x, y, z), axis=-1).astype(BackendTensor.dtype_obj)
        return self.extends_from + self.cube_size * xyz

    def corner_positions_slice(self, start: int, stop: int) -> np.ndarray:
        """World coordinates of the flat corner indices ``[start, stop)`` in ``map_index`` order"""
        return self.corner_position(*self.unravel_index(np.arange(start, stop)))

    def reshape_to_3d(self, flat_corners_values: np.ndarray) -> np.ndarray:
        """Flat ``map_index`` ordered corner array to an ``[x, y, z]`` indexable view"""
        width, height, depth = self.corners_shape
        return flat_corners_values.reshape(depth, height, width).transpose(2, 1, 0)

    def __repr__(self):
        return f"VoxelGrid(resolution={self.resolution.tolist()}, cube_size={self.cube_size})"
