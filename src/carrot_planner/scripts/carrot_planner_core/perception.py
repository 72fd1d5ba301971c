from __future__ import annotations

import math
import threading
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .state import RangeScan

NO_RETURN_RANGE = 0.01


@dataclass
class PathCheck:
    clear: bool
    reason: str = "clear"
    beam_index: Optional[int] = None
    beam_range: Optional[float] = None
    beam_angle: Optional[float] = None
    lateral_offset: Optional[float] = None
    window: tuple[int, int] = (0, 0)


class ScanBuffer:
    """Latest accepted scan from the forward laser.

    Once a scan has been accepted the buffer reports data as available for
    the rest of its lifetime; there is no staleness timeout.
    """

    def __init__(self, laser_frame: str) -> None:
        self.laser_frame = laser_frame
        self._lock = threading.Lock()
        self._scan: Optional[RangeScan] = None
        self._available = False

    @property
    def available(self) -> bool:
        with self._lock:
            return self._available

    def accept(self, scan: RangeScan) -> bool:
        if scan.frame_id != self.laser_frame:
            return False
        with self._lock:
            self._scan = scan
            self._available = True
        return True

    def snapshot(self) -> Optional[RangeScan]:
        with self._lock:
            return self._scan if self._available else None


class RangeGate:
    def __init__(self, cfg) -> None:
        self.cfg = cfg

    def window(self, num_readings: int, angle_increment: float, goal_angle: float) -> tuple[int, int]:
        index_goal = num_readings // 2 + int(round(goal_angle / angle_increment))
        half_width = int(round(self.cfg.wall_half_angle / angle_increment))
        lo = max(0, index_goal - half_width)
        hi = min(num_readings, index_goal + half_width)
        return (lo, max(lo, hi))

    def check(self, scan: Optional[RangeScan], goal_angle: float, goal_distance: float) -> PathCheck:
        # goal_distance is accepted for interface parity; the virtual wall
        # is enforced regardless of how far away the goal lies.
        if scan is None:
            return PathCheck(clear=False, reason="no_scan")
        if (
            not math.isfinite(scan.angle_increment)
            or scan.angle_increment == 0.0
            or len(scan.ranges) == 0
        ):
            return PathCheck(clear=False, reason="degenerate_scan")
        if not (
            math.isfinite(goal_angle / scan.angle_increment)
            and math.isfinite(self.cfg.wall_half_angle / scan.angle_increment)
        ):
            return PathCheck(clear=False, reason="degenerate_scan")

        ranges = np.asarray(scan.ranges, dtype=float)
        lo, hi = self.window(len(ranges), scan.angle_increment, goal_angle)
        segment = ranges[lo:hi]

        with np.errstate(invalid="ignore"):
            hits = np.flatnonzero(
                np.isfinite(segment)
                & (segment > NO_RETURN_RANGE)
                & (segment < self.cfg.dist_vir_wall)
            )
        if hits.size == 0:
            return PathCheck(clear=True, window=(lo, hi))

        index = lo + int(hits[0])
        dist = float(ranges[index])
        angle = scan.angle_min + index * scan.angle_increment
        return PathCheck(
            clear=False,
            reason="virtual_wall",
            beam_index=index,
            beam_range=dist,
            beam_angle=angle,
            lateral_offset=math.sin(angle) * dist,
            window=(lo, hi),
        )

    def is_path_clear(self, scan: Optional[RangeScan], goal_angle: float, goal_distance: float) -> bool:
        return self.check(scan, goal_angle, goal_distance).clear
