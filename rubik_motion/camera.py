"""Orbit camera math for the viewer."""

from __future__ import annotations

import math

import numpy as np


def _normalize(v: np.ndarray) -> np.ndarray:
    n = float(np.linalg.norm(v))
    if n == 0.0:
        raise ValueError("Cannot normalize a zero vector")
    return v / n


def _quat_mul(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    w1, x1, y1, z1 = a
    w2, x2, y2, z2 = b
    return np.array(
        [
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        ],
        dtype=np.float64,
    )


def rotate_around_axis(vector, axis, angle: float) -> np.ndarray:
    """Rotate a vector around an axis by angle radians (right-handed)."""
    v = np.asarray(vector, dtype=np.float64)
    u = _normalize(np.asarray(axis, dtype=np.float64))
    half = angle / 2.0
    q = np.concatenate(([math.cos(half)], math.sin(half) * u))
    q_conj = q * np.array([1.0, -1.0, -1.0, -1.0])
    p = np.concatenate(([0.0], v))
    return _quat_mul(_quat_mul(q, p), q_conj)[1:]


def orbit_speed(time: float) -> tuple[float, float]:
    """Idle drift in radians per millisecond for (theta, phi)."""
    return math.sin(time / 10000.0) / 2000.0, math.cos(time / 10000.0) / 8000.0


class OrbitCamera:
    def __init__(self, position=(5.0, 0.0, 5.0), target=(0.0, 0.0, 0.0), up=(0.0, 1.0, 0.0)):
        self.position = np.asarray(position, dtype=np.float64)
        self.target = np.asarray(target, dtype=np.float64)
        self.up = _normalize(np.asarray(up, dtype=np.float64))

    @property
    def distance(self) -> float:
        return float(np.linalg.norm(self.position - self.target))

    def set_distance(self, distance: float) -> None:
        offset = _normalize(self.position - self.target)
        self.position = self.target + offset * float(distance)

    def orbit(self, theta: float, phi: float) -> None:
        """Rotate around the target horizontally by theta and vertically by phi."""
        offset = self.position - self.target
        direction = _normalize(-offset)
        horizontal = _normalize(np.cross(direction, self.up))
        vertical = np.cross(horizontal, direction)

        offset = rotate_around_axis(offset, vertical, theta)
        offset = rotate_around_axis(offset, horizontal, phi)
        self.position = self.target + offset
        self.up = _normalize(vertical)

    def view_matrix(self) -> np.ndarray:
        f = _normalize(self.target - self.position)
        s = _normalize(np.cross(f, self.up))
        u = np.cross(s, f)
        out = np.eye(4, dtype=np.float64)
        out[0, :3] = s
        out[1, :3] = u
        out[2, :3] = -f
        out[0, 3] = -float(np.dot(s, self.position))
        out[1, 3] = -float(np.dot(u, self.position))
        out[2, 3] = float(np.dot(f, self.position))
        return out

    def to_view(self, point) -> np.ndarray:
        p = np.append(np.asarray(point, dtype=np.float64), 1.0)
        return (self.view_matrix() @ p)[:3]

    @staticmethod
    def project(point_view: np.ndarray, size: tuple[int, int], focal: float) -> tuple[int, int] | None:
        depth = -float(point_view[2])
        if depth <= 0.2:
            return None
        x = size[0] * 0.5 + focal * point_view[0] / depth
        y = size[1] * 0.5 - focal * point_view[1] / depth
        return int(x), int(y)
