from dataclasses import dataclass, field

import numpy as np


@dataclass(eq=False)
class Cell:
    """Local copy of one cube of the voxel grid"""
    p: np.ndarray  #: (8, 3) absolute corner positions in CUBE_OFFSETS order
    val: np.ndarray  #: (8,) scalar value at each corner
    flag_index: int = 0  #: Bit i set iff val[i] <= target value
    edge_flags: int = field(default=0)  #: Bit e set iff edge e is crossed by the surface

    @classmethod
    def from_corners(cls, p: np.ndarray, val: np.ndarray, target_value: float) -> "Cell":
        below = np.asarray(val) <= target_value
        flag_index = int(np.dot(below, 1 << np.arange(8)))
        return cls(p=p, val=val, flag_index=flag_index)
