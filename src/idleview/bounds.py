from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from .scene import Node


@dataclass(frozen=True)
class BoundingBox:
    """World-space axis-aligned box. Size and center are derived, not stored."""

    min: np.ndarray
    max: np.ndarray

    @property
    def size(self) -> np.ndarray:
        return self.max - self.min

    @property
    def center(self) -> np.ndarray:
        return (self.min + self.max) * 0.5

    @property
    def max_dim(self) -> float:
        return float(np.max(self.size))


def compute_bounds(node: Node) -> BoundingBox:
    """
    Measure the world-space AABB of every mesh under `node`.

    Vertices are pushed through the current world matrix of the node that owns
    them, so the result tracks whatever scale, rotation and parenting the
    subtree has at the time of the call. A subtree without vertices yields a
    degenerate box collapsed onto the node's world origin.
    """
    lo = np.full(3, np.inf)
    hi = np.full(3, -np.inf)
    for n in node.traverse():
        if n.geometry is None:
            continue
        verts = np.asarray(n.geometry.vertices, dtype=np.float64).reshape(-1, 3)
        if len(verts) == 0:
            continue
        m = n.world_matrix()
        pts = verts @ m[:3, :3].T + m[:3, 3]
        lo = np.minimum(lo, pts.min(axis=0))
        hi = np.maximum(hi, pts.max(axis=0))

    if not np.all(np.isfinite(lo)):
        origin = node.world_matrix()[:3, 3]
        return BoundingBox(origin.copy(), origin.copy())
    return BoundingBox(lo, hi)
