from __future__ import annotations

import math
import time
from typing import Callable, Optional

import numpy as np

from .controller import TranslationController
from .goal import GoalTracker
from .perception import RangeGate, ScanBuffer
from .profile import classify_phase, reference_step
from .state import CarrotLine, ControllerState, GoalPose, RangeScan, TickResult, VelocityCommand


class CarrotPlannerCoordinator:
    def __init__(
        self,
        cfg,
        clock: Callable[[], float] = time.monotonic,
        carrot_sink: Optional[Callable[[CarrotLine], None]] = None,
    ) -> None:
        self.cfg = cfg
        self.clock = clock
        self.goal_tracker = GoalTracker(cfg, carrot_sink=carrot_sink)
        self.scan_buffer = ScanBuffer(cfg.laser_frame)
        self.range_gate = RangeGate(cfg)
        self.translation = TranslationController(cfg)
        self.state = ControllerState(last_time_sec=clock())
        self.last_events: list[tuple[str, str]] = []

    def accept_scan(self, scan: RangeScan) -> bool:
        return self.scan_buffer.accept(scan)

    def reset(self) -> None:
        self.state.last_cmd = VelocityCommand()
        self.state.last_time_sec = self.clock()

    def _elapsed(self) -> float:
        now_sec = self.clock()
        dt = 0.0
        if self.state.last_time_sec is not None:
            dt = now_sec - self.state.last_time_sec
        self.state.last_time_sec = now_sec
        return dt

    def tick(self, goal_pose: GoalPose, scan: Optional[RangeScan] = None) -> Optional[TickResult]:
        if not self.goal_tracker.set_goal(goal_pose, self.cfg.tracking_frame):
            # Rejected goals leave the feedback state alone; caller keeps the last command.
            self.last_events = self.goal_tracker.drain_events()
            return None
        events = self.goal_tracker.drain_events()
        self.last_events = events

        dt = self._elapsed()
        if dt <= 0.0:
            events.append(("warn", f"Non-positive tick interval {dt:.6f}s: holding previous command"))

        if scan is not None:
            self.accept_scan(scan)

        goal = self.goal_tracker.goal
        raw_error = goal.position.copy()
        error = goal.position

        check = self.range_gate.check(
            self.scan_buffer.snapshot(),
            goal.angle,
            float(np.linalg.norm(raw_error)),
        )
        if not check.clear:
            if check.reason == "no_scan":
                events.append(("info", "No laser data available: path considered blocked"))
            elif check.reason == "degenerate_scan":
                events.append(("warn", "Malformed laser scan: path considered blocked"))
            elif check.reason == "virtual_wall":
                events.append((
                    "warn",
                    f"Object too close: {check.beam_range:.3f} [m] at beam {check.beam_index} "
                    f"({math.degrees(check.beam_angle):.1f} deg, dy = {check.lateral_offset:.3f})",
                ))
            events.append(("warn", "Path is not free: only consider rotation"))
            error = np.zeros(3)
            goal.position = error

        last_cmd = self.state.last_cmd
        linear, regime, desired_speed = self.translation.compute(
            error,
            last_cmd.linear,
            dt,
            raw_error,
        )

        phase = classify_phase(
            goal.angle,
            last_cmd.angular_z,
            self.cfg.max_vel_rotation,
            self.cfg.max_acc_rotation,
            dt,
        )
        angular_z = reference_step(
            goal.angle,
            last_cmd.angular_z,
            self.cfg.max_vel_rotation,
            self.cfg.max_acc_rotation,
            dt,
        )

        cmd = VelocityCommand(linear=linear, angular_z=float(angular_z))
        self.state.last_cmd = cmd
        self.state.goal = goal

        events.append((
            "info",
            f"Final velocity command: (x:{linear[0]:.3f}, y:{linear[1]:.3f}, th:{cmd.angular_z:.3f})",
        ))

        diag = {
            "dt": round(dt, 4),
            "path_clear": check.clear,
            "gate": check.reason,
            "goal": [round(float(raw_error[0]), 3), round(float(raw_error[1]), 3)],
            "goal_angle": round(goal.angle, 3),
            "v_desired": round(desired_speed, 3),
            "translation": regime,
            "rotation": phase.value,
        }
        return TickResult(cmd=cmd, events=events, diagnostics=diag)
