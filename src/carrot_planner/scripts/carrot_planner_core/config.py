from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass
class CarrotPlannerConfig:
    max_vel_translation: float = 0.5
    max_acc_translation: float = 0.15
    max_vel_rotation: float = 0.3
    max_acc_rotation: float = 0.25
    gain: float = 0.9
    min_angle: float = 3.14159 / 14
    dist_vir_wall: float = 0.50
    radius_robot: float = 0.25
    near_goal_distance: float = 1.5
    tracking_frame: str = "/base_link"
    laser_frame: str = "/front_laser"
    scan_topic: str = "/base_scan"
    goal_topic: str = "goal"
    cmd_vel_topic: str = "/cmd_vel"
    carrot_topic: str = "carrot"

    wall_half_angle: float = field(init=False)

    def __post_init__(self) -> None:
        # Non-breaking safety clamps.
        self.max_acc_translation = max(1e-6, float(self.max_acc_translation))
        self.max_acc_rotation = max(1e-6, float(self.max_acc_rotation))
        self.max_vel_translation = max(0.0, float(self.max_vel_translation))
        self.max_vel_rotation = max(0.0, float(self.max_vel_rotation))
        self.min_angle = abs(float(self.min_angle))
        self.dist_vir_wall = max(0.0, float(self.dist_vir_wall))
        self.radius_robot = max(0.0, float(self.radius_robot))

        self.wall_half_angle = math.atan2(self.radius_robot, self.dist_vir_wall)

    @classmethod
    def from_node(cls, node) -> "CarrotPlannerConfig":
        defaults = cls()
        param_defaults = {
            "max_vel_translation": defaults.max_vel_translation,
            "max_acc_translation": defaults.max_acc_translation,
            "max_vel_rotation": defaults.max_vel_rotation,
            "max_acc_rotation": defaults.max_acc_rotation,
            "gain": defaults.gain,
            "min_angle": defaults.min_angle,
            "dist_vir_wall": defaults.dist_vir_wall,
            "radius_robot": defaults.radius_robot,
            "near_goal_distance": defaults.near_goal_distance,
            "tracking_frame": defaults.tracking_frame,
            "laser_frame": defaults.laser_frame,
            "scan_topic": defaults.scan_topic,
            "goal_topic": defaults.goal_topic,
            "cmd_vel_topic": defaults.cmd_vel_topic,
            "carrot_topic": defaults.carrot_topic,
        }

        for key, value in param_defaults.items():
            node.declare_parameter(key, value)

        kwargs = {
            key: node.get_parameter(key).value
            for key in param_defaults
        }

        str_fields = {
            "tracking_frame",
            "laser_frame",
            "scan_topic",
            "goal_topic",
            "cmd_vel_topic",
            "carrot_topic",
        }

        for key in param_defaults:
            if key in str_fields:
                kwargs[key] = str(kwargs[key])
            else:
                kwargs[key] = float(kwargs[key])

        return cls(**kwargs)
