from __future__ import annotations
import math
from dataclasses import dataclass

import numpy as np

from .bounds import compute_bounds
from .config import AppConfig
from .errors import DegenerateGeometry, InvalidCameraConfig
from .logging import get_logger
from .scene import Node

logger = get_logger(__name__)


@dataclass
class FramingResult:
    scale: float
    rotation: np.ndarray  # XYZ Euler, radians
    pivot_offset: np.ndarray


def fmt_vec(v) -> str:
    return f"{v[0]:.2f}, {v[1]:.2f}, {v[2]:.2f}"


def compute_pivot_offset(center, size, viewport_height: float, shift_ratio: float = 0.4) -> np.ndarray:
    """Offset that recenters the box on X/Z and drops it by `shift_ratio` of the viewport."""
    shift = viewport_height * shift_ratio
    return np.array([-center[0], size[1] / 2.0 - shift, -center[2]], dtype=np.float64)


def frame(mesh: Node, viewport_height: float, cfg: AppConfig | None = None):
    """
    Scale, reorient and recenter `mesh` so it fills `cfg.fill_ratio` of the viewport.

    The order is significant: the size used for scaling is measured with the
    mesh at rest, while the offset comes from a second measurement taken after
    scale and rotation, since the rotation changes which axis is up.

    The mesh's own transform keeps the scale and rotation; the returned pivot
    node carries the offset and becomes the mesh's parent.

    Returns:
        (FramingResult, pivot)

    Raises:
        DegenerateGeometry: the mesh has zero extent. No pivot is created.
        InvalidCameraConfig: `viewport_height` is not finite and positive.
    """
    cfg = cfg or AppConfig()
    if not math.isfinite(viewport_height) or viewport_height <= 0.0:
        raise InvalidCameraConfig(f"viewport height must be finite and > 0, got {viewport_height}")

    # measured at rest: identity rotation and unit scale
    mesh.set_transform(position=(0.0, 0.0, 0.0), rotation=(0.0, 0.0, 0.0), scale=1.0)

    b0 = compute_bounds(mesh)
    max_dim = b0.max_dim
    logger.info(f"Original size: {fmt_vec(b0.size)}")
    logger.info(f"Original center: {fmt_vec(b0.center)}")
    if not math.isfinite(max_dim) or max_dim <= 0.0:
        raise DegenerateGeometry(f"mesh '{mesh.name}' has no extent (size {fmt_vec(b0.size)})")

    target_size = viewport_height * cfg.fill_ratio
    scale = target_size / max_dim
    mesh.set_transform(scale=scale)

    rotation = np.radians(np.asarray(cfg.reorientation_deg, dtype=np.float64))
    mesh.set_transform(rotation=rotation)

    b1 = compute_bounds(mesh)
    offset = compute_pivot_offset(b1.center, b1.size, viewport_height, cfg.shift_ratio)

    pivot = Node("pivot")
    pivot.set_transform(position=offset)
    pivot.add(mesh)

    logger.info(f"Final size: {fmt_vec(compute_bounds(mesh).size)}")
    return FramingResult(scale=scale, rotation=rotation, pivot_offset=offset), pivot
