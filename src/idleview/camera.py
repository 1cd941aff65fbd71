from __future__ import annotations
import math

import numpy as np

from .config import AppConfig
from .errors import InvalidCameraConfig


def compute_viewport_height(vertical_fov_radians: float, camera_distance: float) -> float:
    """
    World-space height visible on the plane through the origin.

    height = 2 * tan(fov / 2) * distance

    Raises InvalidCameraConfig when the result could not be a finite positive
    number: non-finite inputs, distance <= 0, or a FOV outside (0, pi).
    """
    fov = float(vertical_fov_radians)
    dist = float(camera_distance)
    if not math.isfinite(fov) or not 0.0 < fov < math.pi:
        raise InvalidCameraConfig(f"vertical FOV must be finite and in (0, pi), got {fov}")
    if not math.isfinite(dist) or dist <= 0.0:
        raise InvalidCameraConfig(f"camera distance must be finite and > 0, got {dist}")
    return 2.0 * math.tan(fov / 2.0) * dist


def look_at(eye, target, up=(0.0, 1.0, 0.0)) -> np.ndarray:
    eye = np.asarray(eye, dtype=np.float64)
    f = np.asarray(target, dtype=np.float64) - eye
    f /= np.linalg.norm(f)
    s = np.cross(f, up)
    n = np.linalg.norm(s)
    if n < 1e-9:
        # looking straight along `up`; any perpendicular will do
        s = np.cross(f, (0.0, 0.0, 1.0))
        n = np.linalg.norm(s)
    s /= n
    u = np.cross(s, f)
    m = np.eye(4)
    m[0, :3], m[1, :3], m[2, :3] = s, u, -f
    m[:3, 3] = -m[:3, :3] @ eye
    return m


def perspective(fov_deg: float, aspect: float, near: float, far: float) -> np.ndarray:
    f = 1.0 / math.tan(math.radians(fov_deg) / 2.0)
    m = np.zeros((4, 4))
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = (far + near) / (near - far)
    m[2, 3] = 2.0 * far * near / (near - far)
    m[3, 2] = -1.0
    return m


class Camera:
    """Fixed perspective camera looking at the world origin."""

    def __init__(
        self,
        fov: float = 18.0,
        aspect: float = 1.0,
        near: float = 0.1,
        far: float = 1000.0,
        position=(2.0, 0.0, 0.0),
        target=(0.0, 0.0, 0.0),
    ):
        self.fov = fov  # vertical, degrees
        self.aspect = aspect
        self.near = near
        self.far = far
        self.position = np.asarray(position, dtype=np.float64)
        self.target = np.asarray(target, dtype=np.float64)

    @classmethod
    def from_config(cls, cfg: AppConfig) -> "Camera":
        return cls(
            fov=cfg.fov,
            aspect=cfg.width / max(1, cfg.height),
            near=cfg.near,
            far=cfg.far,
            position=cfg.camera_position,
        )

    @property
    def vertical_fov_radians(self) -> float:
        return math.radians(self.fov)

    @property
    def distance(self) -> float:
        return float(np.linalg.norm(self.position))

    def viewport_height(self) -> float:
        return compute_viewport_height(self.vertical_fov_radians, self.distance)

    def set_aspect(self, width: int, height: int):
        if width > 0 and height > 0:
            self.aspect = width / height

    def view_matrix(self) -> np.ndarray:
        return look_at(self.position, self.target)

    def projection_matrix(self) -> np.ndarray:
        return perspective(self.fov, self.aspect, self.near, self.far)
