from __future__ import annotations

from typing import Callable, Optional

import numpy as np

from .geometry import yaw_from_quaternion
from .state import CarrotLine, Goal, GoalPose

CARROT_HEIGHT = 0.05


class GoalTracker:
    def __init__(self, cfg, carrot_sink: Optional[Callable[[CarrotLine], None]] = None) -> None:
        self.cfg = cfg
        self.carrot_sink = carrot_sink
        self.goal = Goal()
        self._events: list[tuple[str, str]] = []

    def drain_events(self) -> list[tuple[str, str]]:
        events, self._events = self._events, []
        return events

    def set_goal(self, pose: GoalPose, expected_frame: str) -> bool:
        if pose.frame_id != expected_frame:
            self._events.append(
                ("error", f"Expecting goal in frame {expected_frame}, no planning possible")
            )
            return False

        angle = yaw_from_quaternion(pose.qx, pose.qy, pose.qz, pose.qw)
        position = np.array([pose.x, pose.y, pose.z], dtype=float)
        if abs(angle) < self.cfg.min_angle:
            self._events.append(
                ("warn", f"Angle {angle:.3f} < {self.cfg.min_angle:.3f}: will be ignored")
            )
            angle = 0.0

        self.goal = Goal(position=position, angle=angle)
        self._events.append(
            ("info", f"Goal set: (x,y,th) = ({position[0]:.3f},{position[1]:.3f},{angle:.3f})")
        )

        if self.carrot_sink is not None:
            self.carrot_sink(self.carrot_line(expected_frame))
        return True

    def carrot_line(self, frame_id: str) -> CarrotLine:
        return CarrotLine(
            frame_id=frame_id,
            start=(0.0, 0.0, CARROT_HEIGHT),
            end=(float(self.goal.position[0]), float(self.goal.position[1]), CARROT_HEIGHT),
        )
