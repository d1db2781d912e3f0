import pytest

from isosurface_engine.core.data.skeleton_nodes import SphereNode, CapsuleNode


@pytest.fixture(scope="session")
def unit_sphere():
    return [SphereNode(center=(0., 0., 0.), radius=1.)]


@pytest.fixture(scope="session")
def demo_skeleton():
    return [SphereNode(center=(0., 0., 0.), radius=10.)]


@pytest.fixture(scope="session")
def coincident_spheres():
    return [SphereNode(center=(0., 0., 0.), radius=1.), SphereNode(center=(0., 0., 0.), radius=1.)]


@pytest.fixture(scope="session")
def sub_voxel_sphere():
    return [SphereNode(center=(0., 0., 0.), radius=0.05)]


@pytest.fixture(scope="session")
def blob_skeleton():
    return [
            SphereNode(center=(0., 0., 0.), radius=1.),
            SphereNode(center=(0.75, 0.5, 0.), radius=.75),
            CapsuleNode(start=(-1., 0., 0.), end=(-1., 0., 1.5), radius=.5),
    ]
