import numpy as np
import pytest

from isosurface_engine.core.data.blending_function import BlendingFunction, spore_function
from isosurface_engine.core.data.skeleton_nodes import SphereNode
from isosurface_engine.modules.scalar_field.scalar_field_interface import iso_value, compute_normals, \
    iso_value_gradient
from tests.helper_functions import spore_iso_radius


def test_spore_kernel_values():
    r = np.array([0., .5, 1., 1.5])
    # d = 10 for a unit radius: (r^4 - 2r^2 + 1) / (1 + 10 r^2)
    np.testing.assert_allclose(spore_function(r, 1.), [1., 0.5625 / 3.5, 0., 0.])


def test_spore_kernel_stiffness_grows_with_radius():
    assert spore_function(np.array(.5), 10.) == pytest.approx(0.5625 / 26.)


def test_iso_value_of_single_sphere(unit_sphere):
    assert iso_value(np.array([0., 0., 0.]), unit_sphere) == pytest.approx(1.)
    assert iso_value(np.array([0., .5, 0.]), unit_sphere) == pytest.approx(0.5625 / 3.5)
    assert iso_value(np.array([0., 0., 1.]), unit_sphere) == pytest.approx(0.)
    assert iso_value(np.array([2., 0., 0.]), unit_sphere) == 0.


def test_iso_value_on_level_set(unit_sphere):
    radius = spore_iso_radius(1., 0.05)
    assert iso_value(np.array([radius, 0., 0.]), unit_sphere) == pytest.approx(0.05)


def test_iso_value_sums_every_node():
    first = SphereNode(center=(0., 0., 0.), radius=1.)
    second = SphereNode(center=(.5, 0., 0.), radius=1.)
    xyz = np.array([[.25, 0., 0.], [.1, .2, .3], [3., 3., 3.]])

    np.testing.assert_allclose(
        iso_value(xyz, [first, second]),
        iso_value(xyz, [first]) + iso_value(xyz, [second])
    )


def test_coincident_nodes_double_the_potential(unit_sphere, coincident_spheres):
    xyz = np.random.default_rng(0).uniform(-1.5, 1.5, size=(500, 3))
    np.testing.assert_array_equal(iso_value(xyz, coincident_spheres), 2 * iso_value(xyz, unit_sphere))


def test_iso_value_is_non_negative(blob_skeleton):
    xyz = np.random.default_rng(42).uniform(-3, 3, size=(5_000, 3))
    assert np.all(iso_value(xyz, blob_skeleton) >= 0)


def test_iso_value_of_empty_skeleton_is_zero():
    np.testing.assert_array_equal(iso_value(np.ones((4, 3)), []), 0.)


def test_none_blend_has_no_kernel(unit_sphere):
    with pytest.raises(ValueError):
        iso_value(np.zeros(3), unit_sphere, BlendingFunction.NONE)


def test_blending_function_validity():
    assert BlendingFunction.is_valid(BlendingFunction.SPORE)
    assert not BlendingFunction.is_valid(BlendingFunction.NONE)


def test_normals_point_outwards(unit_sphere):
    rng = np.random.default_rng(7)
    directions = rng.normal(size=(200, 3))
    directions /= np.linalg.norm(directions, axis=1)[:, None]
    vertices = directions * spore_iso_radius(1., 0.05)

    normals = compute_normals(vertices, unit_sphere, BlendingFunction.SPORE, cube_size=.05)

    np.testing.assert_allclose(np.linalg.norm(normals, axis=1), 1.)
    assert np.all(np.einsum("ij,ij->i", normals, directions) > .99)


def test_normal_z_component_samples_along_z(unit_sphere):
    # Off the diagonal y != z, so sampling the wrong axis would tilt the normal
    vertex = np.array([[0., .5, .3]])
    normal = compute_normals(vertex, unit_sphere, BlendingFunction.SPORE, cube_size=.05)[0]

    np.testing.assert_allclose(normal, vertex[0] / np.linalg.norm(vertex[0]), atol=1e-2)


def test_gradient_is_negated_central_difference(unit_sphere):
    vertex = np.array([.3, .2, .1])
    h = .1
    gradient = iso_value_gradient(vertex, unit_sphere, BlendingFunction.SPORE, step=h)[0]

    expected_x = iso_value(vertex - [h, 0, 0], unit_sphere) - iso_value(vertex + [h, 0, 0], unit_sphere)
    expected_z = iso_value(vertex - [0, 0, h], unit_sphere) - iso_value(vertex + [0, 0, h], unit_sphere)
    assert gradient[0] == pytest.approx(expected_x)
    assert gradient[2] == pytest.approx(expected_z)


def test_vanishing_gradient_uses_fallback(unit_sphere):
    far_away = np.array([[5., 5., 5.], [0., 0., 0.]])  # outside the influence region and at the centre

    normals = compute_normals(far_away, unit_sphere, BlendingFunction.SPORE, cube_size=.1)
    np.testing.assert_array_equal(normals, [[0., 1., 0.], [0., 1., 0.]])

    normals = compute_normals(far_away, unit_sphere, BlendingFunction.SPORE, cube_size=.1,
                              degenerate_normal=(0., 0., 1.))
    np.testing.assert_array_equal(normals[0], [0., 0., 1.])


def test_normals_of_no_vertices(unit_sphere):
    assert compute_normals(np.zeros((0, 3)), unit_sphere, BlendingFunction.SPORE, cube_size=.1).shape == (0, 3)
