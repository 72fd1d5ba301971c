import math

import pytest

from carrot_planner_core import CarrotPlannerConfig, GoalPose, RangeScan


class FakeClock:
    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, dt: float) -> None:
        self.now += dt


def yaw_pose(x=0.0, y=0.0, yaw=0.0, frame_id="/base_link", z=0.0) -> GoalPose:
    return GoalPose(
        frame_id=frame_id,
        x=x, y=y, z=z,
        qz=math.sin(yaw / 2.0),
        qw=math.cos(yaw / 2.0),
    )


def front_scan(ranges, angle_increment=0.01, frame_id="/front_laser") -> RangeScan:
    n = len(ranges)
    return RangeScan(
        ranges=list(ranges),
        angle_increment=angle_increment,
        angle_min=-(n // 2) * angle_increment,
        frame_id=frame_id,
    )


@pytest.fixture
def cfg():
    return CarrotPlannerConfig()


@pytest.fixture
def clock():
    return FakeClock()
