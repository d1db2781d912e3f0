import numpy as np
import pytest

from isosurface_engine import Isosurface, CapsuleNode, SphereNode

pv = pytest.importorskip("pyvista")


@pytest.fixture(scope="module")
def small_mesh():
    skeleton = [SphereNode(center=(0., 0., 0.), radius=1.), CapsuleNode(start=(0., 0., 0.), end=(1., 0., 0.), radius=.6)]
    return skeleton, Isosurface().calculate(skeleton, cube_size=.2, target_value=.1)


def test_mesh_to_polydata(small_mesh):
    from isosurface_engine.plugins.plotting.helper_functions_pyvista import to_pyvista_polydata

    _, mesh = small_mesh
    poly = to_pyvista_polydata(mesh)

    assert poly.n_points == mesh.n_vertices
    assert poly.n_cells == mesh.n_triangles
    np.testing.assert_array_equal(poly.point_data["Normals"], mesh.normals)


def test_plot_off_screen(small_mesh):
    from isosurface_engine.plugins.plotting.helper_functions_pyvista import plot_pyvista

    skeleton, mesh = small_mesh
    try:
        image = plot_pyvista(mesh, skeleton, normals=True, image=True)
    except Exception as e:  # No render window available
        pytest.skip(f"Off screen rendering not available: {e}")

    assert image.ndim == 3
