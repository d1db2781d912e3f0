import logging
import warnings
from typing import Optional, Sequence

import numpy as np

from ...core.data.blending_function import BlendingFunction
from ...core.data.isosurface_mesh import IsosurfaceMesh
from ...core.data.options.isosurface_options import IsosurfaceOptions
from ...core.data.skeleton_nodes import SkeletonNode, min_radius
from ...core.data.voxel_grid import VoxelGrid
from ...core.utils import engine_profiler_decorator
from ...modules.marching_cubes._lookup_tables import check_lookup_tables
from ...modules.marching_cubes._vertex_welding import VertexWelder
from ...modules.marching_cubes.marching_cubes_interface import march_cubes
from ...modules.scalar_field.scalar_field_interface import compute_normals
from ...modules.voxel_grid.voxel_grid_interface import voxel_grid_from_skeleton, fill_scalar_field

logger = logging.getLogger(__name__)


@engine_profiler_decorator
def build_isosurface(skeleton: Sequence[SkeletonNode], options: IsosurfaceOptions,
                     welder: Optional[VertexWelder] = None) -> IsosurfaceMesh:
    """Extracts the mesh of ``{p : f(p) = options.target_value}`` for the field blended from ``skeleton``.

    An empty skeleton, or one whose bounding box is not longer than one cube along every axis, gives an empty mesh.
    """
    skeleton = tuple(skeleton)
    if options.debug:
        check_lookup_tables()

    if len(skeleton) == 0:
        logger.debug("Empty skeleton. Nothing to mesh")
        return IsosurfaceMesh.empty()

    if options.cube_size >= min_radius(skeleton):
        warnings.warn(
            f"cube_size ({options.cube_size}) is not smaller than the smallest skeleton radius "
            f"({min_radius(skeleton)}). The geometry may not be recognizable."
        )

    grid: VoxelGrid = voxel_grid_from_skeleton(skeleton, options.cube_size)
    if grid.is_degenerate:
        logger.debug(f"Bounding box {grid.bounding_box} is not larger than one cube. Nothing to mesh")
        return IsosurfaceMesh.empty()

    logger.debug(f"Sampling {grid.n_corners} corners of {grid}")
    scalar_field = fill_scalar_field(
        grid=grid,
        skeleton=skeleton,
        blend=options.blend,
        chunk_size=options.evaluation_chunk_size,
        debug=options.debug
    )

    vertices, triangles = march_cubes(
        grid=grid,
        scalar_field=scalar_field,
        target_value=options.target_value,
        edge_interpolation=options.edge_interpolation,
        welder=welder
    )

    normals = compute_normals(
        vertices=vertices,
        skeleton=skeleton,
        blend=options.blend,
        cube_size=options.cube_size,
        degenerate_normal=options.degenerate_normal
    )

    mesh = IsosurfaceMesh(vertices=vertices, normals=normals, triangles=triangles)
    logger.debug(f"Extracted {mesh}")
    if options.verbose:
        print(f"Vertices: {mesh.n_vertices}")

    return mesh


class Isosurface:
    """Stateful mesher. Keeps the options of the last ``calculate`` so the mesh can be rebuilt for a new skeleton.

    The mesh arrays are plain numpy arrays meant to be uploaded by the host as they are.
    The skeleton is stored as a tuple and never modified.
    """

    def __init__(self):
        self.options: Optional[IsosurfaceOptions] = None
        self.skeleton: tuple[SkeletonNode, ...] = ()
        self.mesh: IsosurfaceMesh = IsosurfaceMesh.empty()
        self._vertex_hash = VertexWelder()

    def calculate(self, skeleton: Sequence[SkeletonNode], cube_size: float,
                  blend: BlendingFunction = BlendingFunction.SPORE, target_value: float = 0.5,
                  **kwargs) -> IsosurfaceMesh:
        """Configures the mesher and builds the mesh of ``skeleton``.

        Args:
            skeleton: Nodes the surface should represent. An empty skeleton yields an empty mesh.
            cube_size: Size of a single cube. Should be smaller than the smallest node radius. Small sizes are expensive.
            blend: Blending function used to compute the scalar field.
            target_value: Threshold separating inside (above) from outside (at or below).
            **kwargs: Any other field of :class:`IsosurfaceOptions`.

        Raises:
            pydantic.ValidationError: If the configuration is invalid (e.g. ``cube_size <= 0``).
        """
        self.options = IsosurfaceOptions.from_args(
            cube_size=cube_size,
            blend=blend,
            target_value=target_value,
            **kwargs
        )
        return self._generate(skeleton)

    build = calculate

    def update(self, skeleton: Sequence[SkeletonNode]) -> IsosurfaceMesh:
        """Rebuilds the whole mesh for ``skeleton`` with the options of the last ``calculate``"""
        if self.options is None:
            raise RuntimeError("update() requires a previous call to calculate()")
        return self._generate(skeleton)

    def _generate(self, skeleton: Sequence[SkeletonNode]) -> IsosurfaceMesh:
        self.skeleton = tuple(skeleton)

        # clear all old data
        self._vertex_hash.clear()
        self.mesh = IsosurfaceMesh.empty()

        self.mesh = build_isosurface(self.skeleton, self.options, welder=self._vertex_hash)
        return self.mesh

    @property
    def vertices(self) -> np.ndarray:
        return self.mesh.vertices

    @property
    def normals(self) -> np.ndarray:
        return self.mesh.normals

    @property
    def triangles(self) -> np.ndarray:
        return self.mesh.triangles
