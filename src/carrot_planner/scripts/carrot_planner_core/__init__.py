"""Core modules for the carrot planner."""

from .config import CarrotPlannerConfig
from .coordinator import CarrotPlannerCoordinator
from .perception import PathCheck, RangeGate, ScanBuffer
from .profile import ProfilePhase, classify_phase, reference_step
from .state import (
    CarrotLine,
    ControllerState,
    Goal,
    GoalPose,
    RangeScan,
    TickResult,
    VelocityCommand,
)

__all__ = [
    "CarrotLine",
    "CarrotPlannerConfig",
    "CarrotPlannerCoordinator",
    "ControllerState",
    "Goal",
    "GoalPose",
    "PathCheck",
    "ProfilePhase",
    "RangeGate",
    "RangeScan",
    "ScanBuffer",
    "TickResult",
    "VelocityCommand",
    "classify_phase",
    "reference_step",
]
