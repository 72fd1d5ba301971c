from __future__ import annotations

import math

import numpy as np

from .geometry import normalized_or_self, planar_norm


class TranslationController:
    """Distance-based braking curve with an acceleration limit.

    Rotation does not go through here; it uses the trapezoidal reference
    generator in ``profile``.
    """

    def __init__(self, cfg) -> None:
        self.cfg = cfg

    def desired_speed(self, error_norm: float) -> float:
        if error_norm <= 0.0:
            return 0.0
        return min(
            self.cfg.max_vel_translation,
            self.cfg.gain * math.sqrt(2.0 * error_norm * self.cfg.max_acc_translation),
        )

    def desired_velocity(self, error: np.ndarray) -> np.ndarray:
        speed = self.desired_speed(float(np.linalg.norm(error)))
        return normalized_or_self(error) * speed

    def limit(
        self,
        desired: np.ndarray,
        previous: np.ndarray,
        dt: float,
        raw_error: np.ndarray,
    ) -> tuple[np.ndarray, str]:
        if dt <= 0.0:
            return (previous.copy(), "hold")

        vel_diff = desired - previous
        acc_desired = float(np.linalg.norm(vel_diff)) / dt
        if acc_desired > self.cfg.max_acc_translation:
            step = normalized_or_self(vel_diff) * self.cfg.max_acc_translation * dt
            return (previous + step, "acc_limited")
        if planar_norm(raw_error) < self.cfg.near_goal_distance:
            return (desired.copy(), "near_goal")
        return (desired.copy(), "direct")

    def compute(
        self,
        error: np.ndarray,
        previous: np.ndarray,
        dt: float,
        raw_error: np.ndarray,
    ) -> tuple[np.ndarray, str, float]:
        desired = self.desired_velocity(error)
        velocity, regime = self.limit(desired, previous, dt, raw_error)
        return (velocity, regime, float(np.linalg.norm(desired)))
