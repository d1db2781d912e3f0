import abc
from dataclasses import dataclass, field
from typing import Sequence, Union

import numpy as np

from ..backend_tensor import BackendTensor
from ..utils import _check_and_convert_list_to_array


class SkeletonNode(abc.ABC):
    """Primitive shape contributing to the scalar field.

    ``radius`` is the influence radius of the node. ``extends_from`` and ``extends_to`` are the corners of the
    axis aligned box that bounds the region where ``distance_to(p) <= radius``. Every variant has to keep that
    box tight from the outside: anything left out of it is silently cut from the mesh.
    """
    radius: float
    extends_from: np.ndarray
    extends_to: np.ndarray

    def __post_init__(self):
        if not self.radius > 0:
            raise ValueError(f"radius must be positive, got {self.radius}")
        self.radius = float(self.radius)
        self.extends_from, self.extends_to = self._compute_extends()

    @abc.abstractmethod
    def distance_to(self, xyz: np.ndarray) -> Union[float, np.ndarray]:
        """Euclidean distance from ``xyz`` (shape (3,) or (n, 3)) to the reference point or axis of the node."""

    @abc.abstractmethod
    def _compute_extends(self) -> tuple[np.ndarray, np.ndarray]:
        pass


@dataclass(eq=False)
class SphereNode(SkeletonNode):
    center: Union[np.ndarray, Sequence[float]]
    radius: float

    extends_from: np.ndarray = field(init=False, repr=False)
    extends_to: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        self.center = _check_and_convert_list_to_array(self.center, dtype=BackendTensor.dtype_obj)
        super().__post_init__()

    def distance_to(self, xyz):
        xyz = np.asarray(xyz, dtype=BackendTensor.dtype_obj)
        return np.linalg.norm(xyz - self.center, axis=-1)

    def _compute_extends(self):
        return self.center - self.radius, self.center + self.radius


@dataclass(eq=False)
class CapsuleNode(SkeletonNode):
    """Line segment skeleton. The influence region is the capsule of ``radius`` around the segment."""
    start: Union[np.ndarray, Sequence[float]]
    end: Union[np.ndarray, Sequence[float]]
    radius: float

    extends_from: np.ndarray = field(init=False, repr=False)
    extends_to: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        self.start = _check_and_convert_list_to_array(self.start, dtype=BackendTensor.dtype_obj)
        self.end = _check_and_convert_list_to_array(self.end, dtype=BackendTensor.dtype_obj)
        super().__post_init__()

    @property
    def axis(self) -> np.ndarray:
        return self.end - self.start

    def distance_to(self, xyz):
        xyz = np.asarray(xyz, dtype=BackendTensor.dtype_obj)
        axis = self.axis
        length_sq = float(axis @ axis)

        if length_sq == 0:  # * Degenerates into a sphere
            return np.linalg.norm(xyz - self.start, axis=-1)

        t = np.clip(((xyz - self.start) @ axis) / length_sq, 0., 1.)
        closest = self.start + np.multiply.outer(t, axis)
        return np.linalg.norm(xyz - closest, axis=-1)

    def _compute_extends(self):
        return np.minimum(self.start, self.end) - self.radius, np.maximum(self.start, self.end) + self.radius


def skeleton_bounds(skeleton: Sequence[SkeletonNode]) -> tuple[np.ndarray, np.ndarray]:
    """Union of the axis aligned extents of all nodes. An empty skeleton gives an inverted (+inf, -inf) box."""
    extends_from = np.full(3, np.inf, dtype=BackendTensor.dtype_obj)
    extends_to = np.full(3, -np.inf, dtype=BackendTensor.dtype_obj)

    for node in skeleton:
        extends_from = np.minimum(extends_from, node.extends_from)
        extends_to = np.maximum(extends_to, node.extends_to)

    return extends_from, extends_to


def min_radius(skeleton: Sequence[SkeletonNode]) -> float:
    return min((node.radius for node in skeleton), default=np.inf)
