from .blending_function import BlendingFunction
from .cell import Cell
from .isosurface_mesh import IsosurfaceMesh, Triangle, IndexedTriangle
from .options.isosurface_options import IsosurfaceOptions, EdgeInterpolation
from .skeleton_nodes import SkeletonNode, SphereNode, CapsuleNode
from .voxel_grid import VoxelGrid
