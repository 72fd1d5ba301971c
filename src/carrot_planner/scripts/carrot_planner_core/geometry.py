from __future__ import annotations

import math

import numpy as np


def yaw_from_quaternion(qx: float, qy: float, qz: float, qw: float) -> float:
    siny = 2.0 * (qw * qz + qx * qy)
    cosy = 1.0 - 2.0 * (qy * qy + qz * qz)
    return math.atan2(siny, cosy)


def sign(value: float) -> float:
    if value > 0.0:
        return 1.0
    if value < 0.0:
        return -1.0
    return 0.0


def normalized_or_self(vec: np.ndarray, eps: float = 1e-6) -> np.ndarray:
    """Unit vector along ``vec``, or ``vec`` itself when it is (near) zero."""
    length = float(np.linalg.norm(vec))
    if length > eps:
        return vec / length
    return vec.copy()


def planar_norm(vec: np.ndarray) -> float:
    return math.hypot(float(vec[0]), float(vec[1]))
