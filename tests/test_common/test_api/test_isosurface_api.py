import numpy as np
import pytest
from pydantic import ValidationError

from isosurface_engine import build_isosurface, Isosurface, IsosurfaceOptions, EdgeInterpolation, BlendingFunction, \
    SphereNode
from isosurface_engine.modules.voxel_grid.voxel_grid_interface import voxel_grid_from_skeleton
from tests.conftest import TEST_SPEED, TestSpeed, plot_pyvista
from tests.helper_functions import spore_iso_radius, match_vertices, check_mesh_invariants


def _plot(mesh, skeleton):
    if plot_pyvista:
        from isosurface_engine.plugins.plotting.helper_functions_pyvista import plot_pyvista as plot
        plot(mesh, skeleton, normals=True)


def _radii(mesh, center=(0., 0., 0.)):
    return np.linalg.norm(mesh.vertices - np.asarray(center), axis=1)


def test_empty_skeleton_gives_empty_mesh():
    mesh = Isosurface().calculate([], cube_size=.1)

    assert mesh.is_empty
    assert mesh.vertices.shape == (0, 3)
    assert mesh.normals.shape == (0, 3)
    assert mesh.triangles.shape == (0, 3)


def test_sub_voxel_object_gives_empty_mesh(sub_voxel_sphere):
    with pytest.warns(UserWarning, match="cube_size"):
        mesh = Isosurface().calculate(sub_voxel_sphere, cube_size=.2)

    assert mesh.is_empty
    assert mesh.n_vertices == 0


@pytest.mark.parametrize("edge_interpolation", list(EdgeInterpolation))
def test_single_sphere(unit_sphere, edge_interpolation):
    cube_size = .1
    mesh = Isosurface().calculate(unit_sphere, cube_size=cube_size, target_value=.5,
                                  edge_interpolation=edge_interpolation)
    print(mesh)

    # Every vertex lies on a grid edge whose corners straddle the level set
    r_iso = spore_iso_radius(1., .5)
    radii = _radii(mesh)
    assert mesh.n_vertices > 50
    assert radii.min() >= r_iso - cube_size
    assert radii.max() <= r_iso + cube_size
    check_mesh_invariants(mesh, voxel_grid_from_skeleton(unit_sphere, cube_size).n_cells)

    _plot(mesh, unit_sphere)


@pytest.mark.skipif(TEST_SPEED.value < TestSpeed.SECONDS.value, reason="global test speed below this test value.")
def test_refined_sphere(unit_sphere):
    target_value = .05
    r_iso = spore_iso_radius(1., target_value)

    mesh = Isosurface().calculate(unit_sphere, cube_size=.05, target_value=target_value,
                                  edge_interpolation=EdgeInterpolation.LINEAR)

    assert 2_500 < mesh.n_vertices < 5_000
    assert _radii(mesh).mean() == pytest.approx(r_iso, rel=.02)

    radial = mesh.vertices / _radii(mesh)[:, None]
    alignment = np.einsum("ij,ij->i", mesh.normals, radial)
    assert np.mean(alignment > .9) >= .95


def test_ratio_interpolation_is_the_default(unit_sphere):
    iso = Isosurface()
    iso.calculate(unit_sphere, cube_size=.1)

    assert iso.options.edge_interpolation == EdgeInterpolation.RATIO
    assert iso.options.blend == BlendingFunction.SPORE
    assert iso.options.target_value == .5


@pytest.mark.skipif(TEST_SPEED.value < TestSpeed.SECONDS.value, reason="global test speed below this test value.")
def test_demo_skeleton(demo_skeleton):
    cube_size = .2
    mesh = Isosurface().calculate(demo_skeleton, cube_size=cube_size, blend=BlendingFunction.SPORE,
                                  target_value=.8)

    assert not mesh.is_empty
    assert np.all(np.abs(mesh.vertices) <= 10.5)

    r_iso = spore_iso_radius(10., .8)
    radii = _radii(mesh)
    assert radii.min() >= r_iso - cube_size
    assert radii.max() <= r_iso + cube_size


def test_coincident_nodes_add_up(unit_sphere, coincident_spheres):
    options = IsosurfaceOptions.from_args(cube_size=.1, target_value=.5,
                                          edge_interpolation=EdgeInterpolation.LINEAR)
    coincident = build_isosurface(coincident_spheres, options)
    single = build_isosurface(unit_sphere, options)
    single_half = build_isosurface(unit_sphere, options.model_copy(update={"target_value": .25}))

    # Doubling the field is the same as halving the threshold
    np.testing.assert_array_equal(coincident.triangles, single_half.triangles)
    np.testing.assert_allclose(coincident.vertices, single_half.vertices)
    np.testing.assert_allclose(coincident.normals, single_half.normals, atol=1e-12)

    assert _radii(coincident).mean() > _radii(single).mean() + .05


def test_translation_equivariance(unit_sphere):
    delta = np.array([1., -2., .5])
    moved = [SphereNode(center=node.center + delta, radius=node.radius) for node in unit_sphere]

    options = IsosurfaceOptions.from_args(cube_size=.125, target_value=.5)
    mesh = build_isosurface(unit_sphere, options)
    moved_mesh = build_isosurface(moved, options)

    np.testing.assert_array_equal(moved_mesh.triangles, mesh.triangles)
    np.testing.assert_allclose(moved_mesh.vertices, mesh.vertices + delta, atol=1e-4)
    np.testing.assert_allclose(moved_mesh.normals, mesh.normals, atol=1e-6)


def test_rotation_equivariance():
    pivot = np.array([.5, .25, 0.])
    rotation = np.array([
            [0., -1., 0.],
            [1., 0., 0.],
            [0., 0., 1.]
    ])  # 90 degrees about z

    def rotate(xyz):
        return (np.asarray(xyz) - pivot) @ rotation.T + pivot

    skeleton = [SphereNode(center=(0., 0., 0.), radius=1.)]
    rotated = [SphereNode(center=rotate(node.center), radius=node.radius) for node in skeleton]

    options = IsosurfaceOptions.from_args(cube_size=.125, target_value=.05)
    mesh = build_isosurface(skeleton, options)
    rotated_mesh = build_isosurface(rotated, options)

    assert rotated_mesh.n_vertices == mesh.n_vertices
    assert rotated_mesh.n_triangles == mesh.n_triangles

    closest, distance = match_vertices(rotate(mesh.vertices), rotated_mesh.vertices)
    assert np.all(distance < 1e-9)
    np.testing.assert_allclose(rotated_mesh.normals[closest], mesh.normals @ rotation.T, atol=1e-6)


def test_refinement_increases_vertex_count(unit_sphere):
    n_vertices = [
            Isosurface().calculate(unit_sphere, cube_size=cube_size, target_value=.05).n_vertices
            for cube_size in (.2, .1, .05)
    ]
    assert n_vertices[0] < n_vertices[1] < n_vertices[2]


@pytest.mark.parametrize("skeleton_name", ["unit_sphere", "coincident_spheres", "blob_skeleton"])
@pytest.mark.parametrize("cube_size", [.2, .1])
def test_mesh_invariants(request, skeleton_name, cube_size):
    skeleton = request.getfixturevalue(skeleton_name)
    mesh = Isosurface().calculate(skeleton, cube_size=cube_size, target_value=.1)

    assert not mesh.is_empty
    check_mesh_invariants(mesh, voxel_grid_from_skeleton(skeleton, cube_size).n_cells)


def test_update_rebuilds_whole_mesh(unit_sphere):
    iso = Isosurface()
    first = iso.calculate(unit_sphere, cube_size=.1, target_value=.05)
    options = iso.options

    moved = [SphereNode(center=(5., 0., 0.), radius=1.)]
    second = iso.update(moved)

    assert iso.options is options
    assert iso.skeleton == tuple(moved)
    assert np.all(second.vertices[:, 0] > 3.)

    again = iso.update(unit_sphere)
    np.testing.assert_array_equal(again.vertices, first.vertices)
    np.testing.assert_array_equal(again.triangles, first.triangles)
    assert iso.vertices is again.vertices
    assert iso.triangles is again.triangles
    assert iso.normals is again.normals

    assert iso.update([]).is_empty


def test_update_before_calculate_raises(unit_sphere):
    with pytest.raises(RuntimeError):
        Isosurface().update(unit_sphere)


@pytest.mark.parametrize("cube_size", [0., -1., float("nan")])
def test_invalid_cube_size_is_rejected(unit_sphere, cube_size):
    with pytest.raises(ValidationError):
        Isosurface().calculate(unit_sphere, cube_size=cube_size)


def test_none_blend_is_rejected(unit_sphere):
    with pytest.raises(ValidationError):
        Isosurface().calculate(unit_sphere, cube_size=.1, blend=BlendingFunction.NONE)


def test_build_is_an_alias_of_calculate(unit_sphere):
    mesh = Isosurface().build(unit_sphere, cube_size=.2, target_value=.1)
    reference = build_isosurface(unit_sphere, IsosurfaceOptions.from_args(cube_size=.2, target_value=.1))

    np.testing.assert_array_equal(mesh.vertices, reference.vertices)
    np.testing.assert_array_equal(mesh.triangles, reference.triangles)


def test_verbose_prints_vertex_count(unit_sphere, capsys):
    mesh = Isosurface().calculate(unit_sphere, cube_size=.2, target_value=.1, verbose=True)
    assert capsys.readouterr().out.strip() == f"Vertices: {mesh.n_vertices}"
