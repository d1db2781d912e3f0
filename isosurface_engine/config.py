from importlib.util import find_spec
from enum import Flag, auto
import os
from dotenv import load_dotenv


class AvailableBackends(Flag):
    numpy = auto()


# Define the paths for the .env files

script_dir = os.path.dirname(os.path.abspath(__file__))

dotenv_path = os.path.join(script_dir, '../.env')
dotenv_isosurface_engine_path = os.path.expanduser('~/.env_isosurface_engine')

# Check if the .env files exist and prioritize the local .env file
if os.path.exists(dotenv_path):
    load_dotenv(dotenv_path)
elif os.path.exists(dotenv_isosurface_engine_path):
    load_dotenv(dotenv_isosurface_engine_path)
else:
    load_dotenv()

DEBUG_MODE = os.getenv('DEBUG_MODE', 'True') == 'True'  # Note the handling of Boolean values
DEFAULT_BACKEND = AvailableBackends[os.getenv('DEFAULT_BACKEND', 'numpy')]
DEFAULT_TENSOR_DTYPE = os.getenv('DEFAULT_TENSOR_DTYPE', 'float64')
LINE_PROFILER_ENABLED = os.getenv('LINE_PROFILER_ENABLED', 'False') == 'True'
EVALUATION_CHUNK_SIZE = int(os.getenv('EVALUATION_CHUNK_SIZE', '500000'))

is_numpy_installed = find_spec("numpy") is not None
is_pyvista_installed = find_spec("pyvista") is not None
