from typing import Sequence, Union

import numpy as np

from ...core.backend_tensor import BackendTensor
from ...core.data.blending_function import BlendingFunction
from ...core.data.skeleton_nodes import SkeletonNode
from ...core.utils import normalize


def iso_value(xyz: np.ndarray, skeleton: Sequence[SkeletonNode],
              blend: BlendingFunction = BlendingFunction.SPORE) -> Union[float, np.ndarray]:
    """Scalar value of the field at ``xyz`` (shape (3,) or (n, 3)).

    The potential is the sum of the blending kernel over every skeleton node, so it lies in [0, inf).
    """
    xyz = np.asarray(xyz, dtype=BackendTensor.dtype_obj)
    kernel = blend.kernel

    potential = np.zeros(xyz.shape[:-1], dtype=BackendTensor.dtype_obj)
    for node in skeleton:
        r = node.distance_to(xyz) / node.radius
        potential += kernel.base_function(r, node.radius)

    return float(potential) if potential.ndim == 0 else potential


def iso_value_gradient(xyz: np.ndarray, skeleton: Sequence[SkeletonNode], blend: BlendingFunction,
                       step: float) -> np.ndarray:
    """Negated central difference gradient of the field along x, y and z with spacing ``step``"""
    xyz = np.atleast_2d(np.asarray(xyz, dtype=BackendTensor.dtype_obj))

    gradient = np.empty_like(xyz)
    for axis in range(3):
        offset = np.zeros(3, dtype=xyz.dtype)
        offset[axis] = step
        gradient[:, axis] = iso_value(xyz - offset, skeleton, blend) - iso_value(xyz + offset, skeleton, blend)

    return gradient


def compute_normals(vertices: np.ndarray, skeleton: Sequence[SkeletonNode], blend: BlendingFunction,
                    cube_size: float, degenerate_normal: Sequence[float] = (0., 1., 0.)) -> np.ndarray:
    """Unit surface normals at ``vertices``, pointing towards decreasing potential (outwards).

    Vertices where the sampled gradient vanishes get ``degenerate_normal``.
    """
    if len(vertices) == 0:
        return np.zeros((0, 3), dtype=BackendTensor.dtype_obj)

    gradient = iso_value_gradient(vertices, skeleton, blend, step=cube_size)
    return normalize(gradient, fallback=degenerate_normal)
