import logging
from typing import Optional

import numpy

from isosurface_engine.config import is_numpy_installed, DEFAULT_BACKEND, AvailableBackends, DEFAULT_TENSOR_DTYPE

logger = logging.getLogger(__name__)

SUPPORTED_DTYPES = ("float32", "float64")


class BackendTensor:
    engine_backend: AvailableBackends

    dtype: str = DEFAULT_TENSOR_DTYPE
    dtype_obj: numpy.dtype = numpy.dtype(DEFAULT_TENSOR_DTYPE)

    tensor_backend_pointer: dict = dict()
    tfnp: numpy  # Alias for the tensor backend pointer
    t: numpy  # Alias for the tensor backend pointer

    @classmethod
    def change_backend(cls, engine_backend: AvailableBackends = AvailableBackends.numpy, dtype: Optional[str] = None):
        cls._change_backend(engine_backend, dtype=dtype)

    @classmethod
    def _change_backend(cls, engine_backend: AvailableBackends, dtype: Optional[str] = None):
        dtype = DEFAULT_TENSOR_DTYPE if dtype is None else dtype
        if dtype not in SUPPORTED_DTYPES:
            raise AttributeError(f"dtype {dtype} is not supported. Use one of {SUPPORTED_DTYPES}")

        cls.dtype = dtype
        cls.dtype_obj = numpy.dtype(dtype)

        match engine_backend:
            case AvailableBackends.numpy:
                if is_numpy_installed is False:
                    raise AttributeError(
                        f"Engine Backend: {engine_backend} cannot be used because the correspondent library is not installed: numpy")
                cls._set_active_backend_pointers(engine_backend, numpy)
            case _:
                raise AttributeError(f"Engine Backend: {engine_backend} is not supported")

    @classmethod
    def _set_active_backend_pointers(cls, engine_backend, tfnp):
        cls.engine_backend = engine_backend
        cls.tensor_backend_pointer['active_backend'] = tfnp
        # Add any alias here
        cls.tfnp = cls.tensor_backend_pointer['active_backend']
        cls.t = cls.tensor_backend_pointer['active_backend']

        logger.debug(f"Setting Backend To: {engine_backend} ({cls.dtype})")

    @classmethod
    def describe_conf(cls):
        print(f"\n Using {cls.engine_backend} backend with dtype {cls.dtype}. \n")


BackendTensor._change_backend(DEFAULT_BACKEND)
