import enum

from isosurface_engine.config import AvailableBackends
from isosurface_engine.core.backend_tensor import BackendTensor

# ! Do not delete the fixtures imports
# Import fixtures
from tests.fixtures.skeletons import *

backend = AvailableBackends.numpy
dtype = "float64"
plot_pyvista = False  # ! Set here if you want to plot the results

BackendTensor.change_backend(engine_backend=backend, dtype=dtype)

try:
    import pyvista as pv
except ImportError:
    plot_pyvista = False


class TestSpeed(enum.Enum):
    MILLISECONDS = 0
    SECONDS = 1
    MINUTES = 2


TEST_SPEED = TestSpeed.SECONDS  # * Use milliseconds while developing and seconds before pushing
