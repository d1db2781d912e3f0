from isosurface_engine.API.isosurface.isosurface_api import build_isosurface, Isosurface
from isosurface_engine.core.data import (BlendingFunction, EdgeInterpolation, IsosurfaceMesh, IsosurfaceOptions,
                                         SphereNode, CapsuleNode)
from datetime import datetime
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("isosurface_engine")  # Use package name
except PackageNotFoundError:
    # If it was not installed, then we don't know the version. This case *should* be rare.
    __version__ = 'unknown-'+datetime.today().strftime('%Y%m%d')
