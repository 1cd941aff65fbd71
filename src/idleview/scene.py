from __future__ import annotations
import numpy as np
from scipy.spatial.transform import Rotation as R


def _vec3(value) -> np.ndarray:
    if np.isscalar(value):
        return np.full(3, float(value))
    v = np.asarray(value, dtype=np.float64).reshape(3)
    return v.copy()


class Node:
    """
    A transform in the scene graph.

    The local matrix is translation @ rotation @ scale, with `rotation` an
    intrinsic XYZ Euler triple in radians (X applied first in the node's own
    frame). A node may carry one trimesh geometry.
    """

    def __init__(self, name: str = "", geometry=None):
        self.name = name
        self.geometry = geometry
        self.position = np.zeros(3)
        self.rotation = np.zeros(3)
        self.scale = np.ones(3)
        self.parent: Node | None = None
        self.children: list[Node] = []

    def __repr__(self):
        return f"Node({self.name!r}, children={len(self.children)})"

    def set_transform(self, position=None, rotation=None, scale=None):
        if position is not None:
            self.position = _vec3(position)
        if rotation is not None:
            self.rotation = _vec3(rotation)
        if scale is not None:
            self.scale = _vec3(scale)

    def add(self, child: Node) -> Node:
        # a node has one parent; adding elsewhere detaches it first
        if child.parent is not None:
            child.parent.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def remove(self, child: Node):
        if child in self.children:
            self.children.remove(child)
            child.parent = None

    def local_matrix(self) -> np.ndarray:
        m = np.eye(4)
        m[:3, :3] = R.from_euler("XYZ", self.rotation).as_matrix() * self.scale
        m[:3, 3] = self.position
        return m

    def world_matrix(self) -> np.ndarray:
        m = self.local_matrix()
        node = self.parent
        while node is not None:
            m = node.local_matrix() @ m
            node = node.parent
        return m

    def traverse(self):
        yield self
        for child in self.children:
            yield from child.traverse()


class Scene:
    """Root of the scene graph; the renderer reads it every frame."""

    def __init__(self):
        self.root = Node("scene")

    def add_child(self, parent: Node | None, node: Node) -> Node:
        return (parent or self.root).add(node)

    def remove_child(self, parent: Node | None, node: Node):
        (parent or self.root).remove(node)

    def set_transform(self, node: Node, position=None, rotation=None, scale=None):
        node.set_transform(position, rotation, scale)

    def mesh_nodes(self):
        return [n for n in self.root.traverse() if n.geometry is not None]
