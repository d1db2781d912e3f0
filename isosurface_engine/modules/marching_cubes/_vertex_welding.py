from dataclasses import dataclass, field
from typing import Dict, List

import numpy as np

from ...core.backend_tensor import BackendTensor


@dataclass(frozen=True)
class VertexKey:
    """Bitwise identity of a vertex position.

    Edge crossings are a deterministic function of the two grid corners of the edge, so neighbouring cubes that
    share an edge produce the same bits.
    """
    bits: bytes

    @classmethod
    def from_position(cls, position: np.ndarray) -> "VertexKey":
        return cls(np.ascontiguousarray(position, dtype=BackendTensor.dtype_obj).tobytes())


@dataclass
class VertexWelder:
    """Hands out one index per distinct vertex position"""
    vertices: List[np.ndarray] = field(default_factory=list)
    vertex_hash: Dict[VertexKey, int] = field(default_factory=dict)

    def add(self, position: np.ndarray) -> int:
        key = VertexKey.from_position(position)
        index = self.vertex_hash.get(key)
        if index is None:
            index = len(self.vertices)
            self.vertex_hash[key] = index
            self.vertices.append(position)
        return index

    def clear(self):
        self.vertices.clear()
        self.vertex_hash.clear()

    def __len__(self):
        return len(self.vertices)

    def to_array(self) -> np.ndarray:
        if not self.vertices:
            return np.zeros((0, 3), dtype=BackendTensor.dtype_obj)
        return np.asarray(self.vertices, dtype=BackendTensor.dtype_obj)
