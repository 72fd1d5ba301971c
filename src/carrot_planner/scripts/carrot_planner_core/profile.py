"""Trapezoidal reference generator.

The phase is classified fresh on every call from ``(error, velocity)``; no
mode is carried between ticks. Feedback of the previous output is the
caller's job.
"""
from __future__ import annotations

from enum import Enum

from .geometry import sign


class ProfilePhase(str, Enum):
    STILL = "still"
    DECELERATE = "decelerate"
    CONSTANT = "constant"
    ACCELERATE = "accelerate"


def deceleration_distance(velocity: float, max_acc: float) -> float:
    return (velocity * velocity) / (2.0 * max_acc)


def classify_phase(
    error: float,
    velocity: float,
    max_vel: float,
    max_acc: float,
    dt: float,
) -> ProfilePhase:
    eps = 0.5 * max_acc * dt
    vel_mag = abs(velocity)
    delta = abs(error)

    if vel_mag == 0.0 and delta <= eps:
        return ProfilePhase.STILL

    if deceleration_distance(vel_mag, max_acc) >= delta:
        return ProfilePhase.DECELERATE
    if vel_mag != 0.0 and sign(velocity) != sign(error):
        # Setpoint is behind us.
        return ProfilePhase.DECELERATE
    if vel_mag >= max_vel:
        return ProfilePhase.CONSTANT
    return ProfilePhase.ACCELERATE


def reference_step(
    error: float,
    velocity: float,
    max_vel: float,
    max_acc: float,
    dt: float,
) -> float:
    """Next velocity reference towards ``error`` starting from ``velocity``."""
    if dt <= 0.0:
        return velocity

    phase = classify_phase(error, velocity, max_vel, max_acc, dt)
    if phase is ProfilePhase.STILL:
        return 0.0

    eps = 0.5 * max_acc * dt
    vel_mag = abs(velocity)

    if phase is ProfilePhase.ACCELERATE:
        vel_mag = min(vel_mag + max_acc * dt, max_vel)
    elif phase is ProfilePhase.DECELERATE:
        vel_mag = max(vel_mag - max_acc * dt, 0.0)
        if vel_mag < eps:
            vel_mag = 0.0

    # Zero error keeps ramping down along the current motion.
    direction = sign(error) if error != 0.0 else sign(velocity)

    return direction * vel_mag
