from typing import Sequence

import numpy as np

import isosurface_engine.config
from ..core.backend_tensor import BackendTensor


def engine_profiler_decorator(func):
    """Decorator to profile a function"""
    if isosurface_engine.config.LINE_PROFILER_ENABLED:
        try:
            from line_profiler_pycharm import profile
            return profile(func)
        except ImportError:
            return func
    else:
        return func


def _check_and_convert_list_to_array(field, dtype=None):
    if isinstance(field, (list, tuple)):
        field = np.array(field, dtype=dtype)
    elif dtype is not None:
        field = np.asarray(field, dtype=dtype)
    return field


def normalize(vectors: np.ndarray, fallback: Sequence[float] = (0., 1., 0.)) -> np.ndarray:
    """L2-normalises the rows of ``vectors``.

    Rows with zero length (or a non finite norm) are replaced by ``fallback``, which is assumed to be unit length.
    Accepts a single vector of shape (3,) or a stack of shape (n, 3).
    """
    vectors = np.asarray(vectors, dtype=BackendTensor.dtype_obj)
    single = vectors.ndim == 1
    vectors = np.atleast_2d(vectors)

    norm = np.linalg.norm(vectors, axis=1)
    degenerate = ~np.isfinite(norm) | (norm == 0)

    normalized = np.empty_like(vectors)
    normalized[~degenerate] = vectors[~degenerate] / norm[~degenerate, None]
    normalized[degenerate] = np.asarray(fallback, dtype=vectors.dtype)

    return normalized[0] if single else normalized
