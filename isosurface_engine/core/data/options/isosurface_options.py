import enum
import math

from pydantic import BaseModel, ConfigDict, Field, field_validator

import isosurface_engine.config
from ..blending_function import BlendingFunction


class EdgeInterpolation(enum.Enum):
    """How the crossing point of the surface is placed on a cube edge"""
    RATIO = enum.auto()  #: t = val[p1] / (val[p1] + val[p2]). Reference behaviour of the mesher
    LINEAR = enum.auto()  #: t = (target - val[p1]) / (val[p2] - val[p1]). Classic marching cubes


class IsosurfaceOptions(BaseModel):
    model_config = ConfigDict(
        arbitrary_types_allowed=False,
        use_enum_values=False,
        validate_assignment=True,
    )

    # @off
    cube_size: float = Field(gt=0)  #: Edge length of a voxel. Should be smaller than the smallest skeleton radius
    blend: BlendingFunction = BlendingFunction.SPORE
    target_value: float = Field(allow_inf_nan=False)  #: Threshold tau. Scalar values <= tau are outside the object
    edge_interpolation: EdgeInterpolation = EdgeInterpolation.RATIO
    degenerate_normal: tuple[float, float, float] = (0., 1., 0.)  #: Normal used where the field gradient vanishes

    evaluation_chunk_size: int = Field(default_factory=lambda: isosurface_engine.config.EVALUATION_CHUNK_SIZE, gt=0)
    debug: bool = Field(default_factory=lambda: isosurface_engine.config.DEBUG_MODE)
    verbose: bool = False
    # @on

    @field_validator("cube_size")
    @classmethod
    def _finite_cube_size(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("cube_size must be finite")
        return value

    @field_validator("blend")
    @classmethod
    def _valid_blend(cls, value: BlendingFunction) -> BlendingFunction:
        if not BlendingFunction.is_valid(value):
            raise ValueError(f"blend must be smaller than {BlendingFunction.NONE.name}, got {value.name}")
        return value

    @field_validator("degenerate_normal")
    @classmethod
    def _unit_degenerate_normal(cls, value: tuple[float, float, float]) -> tuple[float, float, float]:
        norm = math.sqrt(sum(v * v for v in value))
        if norm == 0 or not math.isfinite(norm):
            raise ValueError("degenerate_normal must be a finite non zero vector")
        return tuple(v / norm for v in value)

    @classmethod
    def from_args(
            cls,
            cube_size: float,
            blend: BlendingFunction = BlendingFunction.SPORE,
            target_value: float = 0.5,
            edge_interpolation: EdgeInterpolation = EdgeInterpolation.RATIO,
            **kwargs
    ) -> "IsosurfaceOptions":
        return IsosurfaceOptions(
            cube_size=cube_size,
            blend=blend,
            target_value=target_value,
            edge_interpolation=edge_interpolation,
            **kwargs
        )
