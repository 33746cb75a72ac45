from __future__ import annotations

import math

import numpy as np

from . import config


def focal_length_px(render_w: int, fov: float = config.FOV) -> float:
    # True horizontal FOV in degrees -> focal length in pixels.
    half_angle = math.radians(float(fov) * 0.5)
    return render_w * 0.5 / max(1e-6, math.tan(half_angle))


def world_to_camera(points: np.ndarray, eye, yaw: float, pitch: float) -> np.ndarray:
    """Transform ``(N, 3)`` world points into camera space (+Z is forward).

    At ``yaw == 0`` the camera faces world +Z; positive pitch looks up.
    """
    rel = np.asarray(points, dtype=np.float64) - np.asarray(eye, dtype=np.float64)
    x = rel[:, 0]
    y = rel[:, 1]
    z = rel[:, 2]

    cos_y = math.cos(yaw)
    sin_y = math.sin(yaw)
    x1 = x * cos_y - z * sin_y
    z1 = x * sin_y + z * cos_y

    cos_p = math.cos(pitch)
    sin_p = math.sin(pitch)
    y1 = y * cos_p - z1 * sin_p
    z2 = y * sin_p + z1 * cos_p
    return np.stack((x1, y1, z2), axis=1)


def project(cam: np.ndarray, render_w: int, render_h: int, fov: float = config.FOV):
    """Perspective-project camera-space points.

    Returns ``(sx, sy, factor, visible)``; entries where ``visible`` is False
    lie behind the near plane and carry garbage coordinates.
    """
    z = cam[:, 2]
    visible = z > 0.1
    safe_z = np.where(visible, z, 1.0)
    factor = focal_length_px(render_w, fov) / safe_z
    sx = cam[:, 0] * factor + render_w / 2
    sy = -cam[:, 1] * factor + render_h / 2
    return sx, sy, factor, visible


def scale_color(color, brightness: float):
    return tuple(max(0, min(255, int(c * brightness))) for c in color)


def add_color_offset(base: tuple[int, int, int], offset: tuple[int, int, int]):
    return tuple(max(0, min(255, base[i] + offset[i])) for i in range(3))
