import enum
from dataclasses import dataclass
from typing import Callable

import numpy as np

STIFFNESS_FACTOR = 10.


def spore_function(r: np.ndarray, radius: float) -> np.ndarray:
    """Wyvill "soft objects" falloff clamped to the node radius.

    ``r`` is the distance to the node divided by its radius. The stiffness ``d`` grows with the node radius.
    """
    d = STIFFNESS_FACTOR * radius
    r2 = r * r
    potential = (r2 * r2 - 2 * r2 + 1) / (1 + d * r2)
    return np.where(r <= 1, potential, 0.)


@dataclass(frozen=True)
class BlendingKernel:
    base_function: Callable[[np.ndarray, float], np.ndarray]
    support_radius: float  #: Normalised distance beyond which the kernel contributes nothing


class BlendingFunction(enum.IntEnum):
    SPORE = 0
    NONE = 1  #: Sentinel upper bound. Not a usable blending function

    @property
    def kernel(self) -> BlendingKernel:
        if not self.is_valid(self):
            raise ValueError(f"{self.name} has no blending kernel")
        return _BLENDING_KERNELS[self]

    @classmethod
    def is_valid(cls, blend) -> bool:
        return 0 <= int(blend) < cls.NONE


_BLENDING_KERNELS = {
        BlendingFunction.SPORE: BlendingKernel(spore_function, support_radius=1.),
}
