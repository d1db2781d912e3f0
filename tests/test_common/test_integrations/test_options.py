import pytest
from pydantic import ValidationError

from isosurface_engine import IsosurfaceOptions, EdgeInterpolation, BlendingFunction
import isosurface_engine.config


def test_default_options():
    options = IsosurfaceOptions.from_args(cube_size=.1)

    assert options.blend == BlendingFunction.SPORE
    assert options.target_value == .5
    assert options.edge_interpolation == EdgeInterpolation.RATIO
    assert options.degenerate_normal == (0., 1., 0.)
    assert options.evaluation_chunk_size == isosurface_engine.config.EVALUATION_CHUNK_SIZE
    assert options.debug == isosurface_engine.config.DEBUG_MODE
    assert options.verbose is False
    print(options)


@pytest.mark.parametrize("cube_size", [0., -.1, float("inf"), float("nan")])
def test_cube_size_must_be_positive_and_finite(cube_size):
    with pytest.raises(ValidationError):
        IsosurfaceOptions.from_args(cube_size=cube_size)


def test_blend_must_be_valid():
    with pytest.raises(ValidationError):
        IsosurfaceOptions.from_args(cube_size=.1, blend=BlendingFunction.NONE)


def test_target_value_must_be_finite():
    with pytest.raises(ValidationError):
        IsosurfaceOptions.from_args(cube_size=.1, target_value=float("nan"))


def test_assignment_is_validated():
    options = IsosurfaceOptions.from_args(cube_size=.1)

    options.cube_size = .2
    assert options.cube_size == .2

    with pytest.raises(ValidationError):
        options.cube_size = -1.


def test_degenerate_normal_is_normalised():
    options = IsosurfaceOptions.from_args(cube_size=.1, degenerate_normal=(0., 0., 2.))
    assert options.degenerate_normal == (0., 0., 1.)

    with pytest.raises(ValidationError):
        IsosurfaceOptions.from_args(cube_size=.1, degenerate_normal=(0., 0., 0.))


def test_evaluation_chunk_size_must_be_positive():
    with pytest.raises(ValidationError):
        IsosurfaceOptions.from_args(cube_size=.1, evaluation_chunk_size=0)


def test_unknown_blend_index_is_rejected():
    with pytest.raises(ValidationError):
        IsosurfaceOptions.from_args(cube_size=.1, blend=7)
