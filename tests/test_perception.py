import math

import pytest

from carrot_planner_core.perception import RangeGate, ScanBuffer

from conftest import front_scan

N = 181  # middle beam 90, 0.01 rad per beam
HALF = 46  # round(atan2(0.25, 0.50) / 0.01)


def clear_ranges():
    return [2.0] * N


def with_reading(index, value):
    ranges = clear_ranges()
    ranges[index] = value
    return front_scan(ranges)


def test_half_angle_from_footprint(cfg):
    assert cfg.wall_half_angle == pytest.approx(math.atan2(0.25, 0.50))
    gate = RangeGate(cfg)
    assert gate.window(N, 0.01, 0.0) == (90 - HALF, 90 + HALF)


def test_no_scan_is_blocked(cfg):
    gate = RangeGate(cfg)
    check = gate.check(None, 0.0, 2.0)
    assert not check.clear
    assert check.reason == "no_scan"
    assert gate.is_path_clear(None, 0.0, 2.0) is False


def test_clear_scan(cfg):
    assert RangeGate(cfg).is_path_clear(front_scan(clear_ranges()), 0.0, 2.0)


def test_obstacle_inside_standoff_blocks(cfg):
    check = RangeGate(cfg).check(with_reading(90, 0.3), 0.0, 2.0)
    assert not check.clear
    assert check.reason == "virtual_wall"
    assert check.beam_index == 90
    assert check.beam_range == pytest.approx(0.3)
    assert check.beam_angle == pytest.approx(0.0)
    assert check.lateral_offset == pytest.approx(0.0)


@pytest.mark.parametrize("value", [0.0, 0.005, 0.01, 0.5, 3.0, float("inf"), float("nan")])
def test_no_return_and_far_readings_do_not_block(cfg, value):
    assert RangeGate(cfg).is_path_clear(with_reading(90, value), 0.0, 2.0)


@pytest.mark.parametrize("index,clear", [
    (90 - HALF - 1, True),
    (90 - HALF, False),
    (90 + HALF - 1, False),
    (90 + HALF, True),
    (0, True),
    (N - 1, True),
])
def test_window_edges(cfg, index, clear):
    assert RangeGate(cfg).is_path_clear(with_reading(index, 0.2), 0.0, 2.0) is clear


def test_window_follows_goal_angle(cfg):
    gate = RangeGate(cfg)
    # goal 0.5 rad to the left: centre beam 140, window clamped to the array end
    assert gate.window(N, 0.01, 0.5) == (94, N)
    assert not gate.is_path_clear(with_reading(170, 0.3), 0.5, 2.0)
    assert gate.is_path_clear(with_reading(60, 0.3), 0.5, 2.0)


def test_window_clamped_at_array_start(cfg):
    gate = RangeGate(cfg)
    assert gate.window(N, 0.01, -1.0) == (0, 36)
    check = gate.check(with_reading(0, 0.3), -1.0, 2.0)
    assert not check.clear
    assert check.beam_angle == pytest.approx(-0.9)
    assert check.lateral_offset == pytest.approx(math.sin(-0.9) * 0.3)


def test_window_completely_outside_scan_is_clear(cfg):
    gate = RangeGate(cfg)
    lo, hi = gate.window(N, 0.01, 3.0)
    assert lo == hi
    assert gate.is_path_clear(front_scan([0.1] * N), 3.0, 2.0)


def test_buffer_ignores_other_frames(cfg):
    buf = ScanBuffer(cfg.laser_frame)
    assert buf.snapshot() is None
    assert not buf.accept(front_scan(clear_ranges(), frame_id="/rear_laser"))
    assert not buf.available
    assert buf.snapshot() is None


def test_buffer_keeps_latest_accepted_scan(cfg):
    buf = ScanBuffer(cfg.laser_frame)
    first = front_scan(clear_ranges())
    assert buf.accept(first)
    assert buf.available
    assert not buf.accept(front_scan([0.1] * N, frame_id="/rear_laser"))
    assert buf.snapshot() is first

    second = with_reading(90, 0.3)
    assert buf.accept(second)
    assert buf.snapshot() is second
    assert buf.available


@pytest.mark.parametrize("increment", [0.0, 1e-320, float("nan"), float("inf")])
def test_malformed_increment_is_blocked(cfg, increment):
    scan = front_scan(clear_ranges(), angle_increment=increment)
    check = RangeGate(cfg).check(scan, 0.3, 2.0)
    assert not check.clear
    assert check.reason == "degenerate_scan"


def test_non_finite_goal_angle_is_blocked(cfg):
    check = RangeGate(cfg).check(front_scan(clear_ranges()), float("nan"), 2.0)
    assert not check.clear
    assert check.reason == "degenerate_scan"
