#!/usr/bin/env python3
"""
Carrot planner node.

Drives toward a single goal pose given in the robot frame (the "carrot").
Every goal message triggers one control tick:
  1. Check the goal frame
  2. Virtual-wall check on the latest /base_scan from the front laser
  3. Braking-curve translation + trapezoidal rotation reference
  4. Publish Twist to /cmd_vel and a carrot line marker for RViz
"""
from typing import Optional

import rclpy                                      # ROS 2 client library
from rclpy.duration import Duration
from rclpy.node import Node                       # base node class
from rclpy.qos import qos_profile_sensor_data
from geometry_msgs.msg import Point, PoseStamped, Twist  # message types
from sensor_msgs.msg import LaserScan             # laser scan message
from visualization_msgs.msg import Marker         # carrot marker

from carrot_planner_core import (
    CarrotLine,
    CarrotPlannerConfig,
    CarrotPlannerCoordinator,
    GoalPose,
    RangeScan,
    VelocityCommand,
)


def pose_from_msg(msg: PoseStamped) -> GoalPose:
    p = msg.pose.position
    q = msg.pose.orientation
    return GoalPose(
        frame_id=msg.header.frame_id,
        x=p.x, y=p.y, z=p.z,
        qx=q.x, qy=q.y, qz=q.z, qw=q.w,
    )


def scan_from_msg(msg: LaserScan) -> RangeScan:
    return RangeScan(
        ranges=list(msg.ranges),
        angle_increment=msg.angle_increment,
        angle_min=msg.angle_min,
        frame_id=msg.header.frame_id,
    )


def twist_from_command(cmd: VelocityCommand) -> Twist:
    msg = Twist()
    msg.linear.x = float(cmd.linear[0])
    msg.linear.y = float(cmd.linear[1])
    msg.linear.z = float(cmd.linear[2])
    msg.angular.x, msg.angular.y, msg.angular.z = (float(v) for v in cmd.angular)
    return msg


def marker_from_carrot(line: CarrotLine, stamp=None) -> Marker:
    marker = Marker()
    marker.header.frame_id = line.frame_id
    if stamp is not None:
        marker.header.stamp = stamp
    marker.ns = "carrot"
    marker.type = Marker.LINE_STRIP
    marker.action = Marker.ADD
    marker.scale.x = 0.05
    marker.color.r = 1.0
    marker.color.g = 0.5
    marker.color.b = 0.0
    marker.color.a = 1.0
    marker.pose.orientation.w = 1.0
    marker.lifetime = Duration(seconds=0.0).to_msg()
    marker.points = [
        Point(x=line.start[0], y=line.start[1], z=line.start[2]),
        Point(x=line.end[0], y=line.end[1], z=line.end[2]),
    ]
    return marker


class CarrotPlanner(Node):
    def __init__(self):
        super().__init__("carrot_planner")

        # --- parameters ---------------------------------------------------
        self.cfg = CarrotPlannerConfig.from_node(self)

        # --- core ----------------------------------------------------------
        self.core = CarrotPlannerCoordinator(
            self.cfg,
            clock=self._now_sec,
            carrot_sink=self._publish_carrot,
        )

        # --- publishers ----------------------------------------------------
        self.carrot_pub = self.create_publisher(Marker, self.cfg.carrot_topic, 1)
        self.cmd_pub = self.create_publisher(Twist, self.cfg.cmd_vel_topic, 1)

        # --- subscribers ---------------------------------------------------
        self.create_subscription(LaserScan, self.cfg.scan_topic, self.scan_cb, qos_profile_sensor_data)
        self.create_subscription(PoseStamped, self.cfg.goal_topic, self.goal_cb, 10)

        self.get_logger().info(
            f"Carrot planner started (tracking frame {self.cfg.tracking_frame}, "
            f"laser frame {self.cfg.laser_frame})"
        )

    # === callbacks =========================================================
    def scan_cb(self, msg: LaserScan):
        self.core.accept_scan(scan_from_msg(msg))   # other frames are dropped

    def goal_cb(self, msg: PoseStamped):
        self.move_to_goal(msg)

    # === control ===========================================================
    def move_to_goal(self, msg: PoseStamped) -> Optional[Twist]:
        result = self.core.tick(pose_from_msg(msg))
        if result is None:
            self._emit_events(self.core.last_events)
            return None

        self._emit_events(result.events)
        self.get_logger().debug(f"tick {result.diagnostics}")

        twist = twist_from_command(result.cmd)
        self.cmd_pub.publish(twist)
        return twist

    # === helpers ===========================================================
    def _now_sec(self) -> float:
        return self.get_clock().now().nanoseconds / 1e9

    def _publish_carrot(self, line: CarrotLine):
        self.carrot_pub.publish(marker_from_carrot(line, self.get_clock().now().to_msg()))

    def _emit_events(self, events):
        logger = self.get_logger()
        for level, text in events:
            if level == "error":
                logger.error(text)
            elif level == "warn":
                logger.warn(text)
            elif level == "debug":
                logger.debug(text)
            else:
                logger.info(text)


def main(args=None):
    rclpy.init(args=args)
    node = CarrotPlanner()
    try:
        rclpy.spin(node)
    except KeyboardInterrupt:
        pass
    node.destroy_node()
    rclpy.shutdown()


if __name__ == "__main__":
    main()
