from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np


def _zero_vector() -> np.ndarray:
    return np.zeros(3)


@dataclass
class GoalPose:
    frame_id: str
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    qx: float = 0.0
    qy: float = 0.0
    qz: float = 0.0
    qw: float = 1.0


@dataclass
class Goal:
    position: np.ndarray = field(default_factory=_zero_vector)
    angle: float = 0.0


@dataclass
class RangeScan:
    ranges: Sequence[float]
    angle_increment: float
    angle_min: float = 0.0
    frame_id: str = ""


@dataclass
class VelocityCommand:
    linear: np.ndarray = field(default_factory=_zero_vector)
    angular_z: float = 0.0

    @property
    def angular(self) -> tuple[float, float, float]:
        return (0.0, 0.0, self.angular_z)


@dataclass
class ControllerState:
    last_time_sec: Optional[float] = None
    last_cmd: VelocityCommand = field(default_factory=VelocityCommand)
    goal: Goal = field(default_factory=Goal)


@dataclass
class CarrotLine:
    frame_id: str
    start: tuple[float, float, float]
    end: tuple[float, float, float]


@dataclass
class TickResult:
    cmd: VelocityCommand
    events: list[tuple[str, str]] = field(default_factory=list)
    diagnostics: dict = field(default_factory=dict)
