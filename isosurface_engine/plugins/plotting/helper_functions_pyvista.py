from typing import Sequence

import numpy as np

from isosurface_engine.core.data.isosurface_mesh import IsosurfaceMesh
from isosurface_engine.core.data.skeleton_nodes import SkeletonNode, SphereNode, CapsuleNode

try:
    # noinspection PyUnresolvedReferences
    import pyvista as pv
except ImportError:
    pv = None


def to_pyvista_polydata(mesh: IsosurfaceMesh) -> "pv.PolyData":
    poly = pv.PolyData(mesh.vertices, mesh.vtk_faces)
    poly.point_data["Normals"] = mesh.normals
    return poly


def plot_isosurface_mesh(p: "pv.Plotter", mesh: IsosurfaceMesh, plot_labels=False, color="white", show_edges=False):
    p.add_mesh(to_pyvista_polydata(mesh), opacity=1, silhouette=False, color=color, show_edges=show_edges)

    if plot_labels:
        p.add_point_labels(mesh.vertices, list(range(mesh.n_vertices)), point_size=20, font_size=36)


def plot_normals(p: "pv.Plotter", mesh: IsosurfaceMesh, factor: float = .05):
    poly = pv.PolyData(mesh.vertices)
    poly['vectors'] = mesh.normals

    arrows = poly.glyph(orient='vectors', scale=False, factor=factor)
    p.add_mesh(arrows, color="green", point_size=10.0, render_points_as_spheres=False)


def plot_skeleton(p: "pv.Plotter", skeleton: Sequence[SkeletonNode], opacity: float = .2):
    for node in skeleton:
        match node:
            case SphereNode():
                shape = pv.Sphere(radius=node.radius, center=node.center)
            case CapsuleNode():
                shape = pv.Tube(pointa=node.start, pointb=node.end, radius=node.radius)
            case _:
                shape = pv.Box(bounds=np.stack((node.extends_from, node.extends_to), axis=1).ravel())
        p.add_mesh(shape, opacity=opacity, color="red")


def plot_pyvista(mesh: IsosurfaceMesh = None, skeleton: Sequence[SkeletonNode] = None, normals: bool = False,
                 plot_labels=False, image=False):
    p = pv.Plotter(off_screen=image)

    if mesh is not None:
        plot_isosurface_mesh(p, mesh, plot_labels=plot_labels)
        if normals:
            plot_normals(p, mesh)

    if skeleton is not None:
        plot_skeleton(p, skeleton)

    p.add_axes()

    if image:
        p.show(screenshot=True)
        return p.last_image

    p.show()
    return p
