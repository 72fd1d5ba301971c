#!/usr/bin/env python3
"""
Carrot Planner Launch - local carrot planner node only.
Goals arrive on goal (PoseStamped in /base_link); commands go to /cmd_vel.
"""
from launch import LaunchDescription
from launch.actions import DeclareLaunchArgument
from launch.substitutions import LaunchConfiguration
from launch_ros.actions import Node


def generate_launch_description():
    use_sim_time = LaunchConfiguration('use_sim_time')
    scan_topic = LaunchConfiguration('scan_topic')

    declare_use_sim_time = DeclareLaunchArgument('use_sim_time', default_value='false')
    declare_scan_topic = DeclareLaunchArgument('scan_topic', default_value='/base_scan')

    carrot_planner = Node(
        package='carrot_planner',
        executable='carrot_planner.py',
        name='carrot_planner',
        parameters=[{
            'use_sim_time': use_sim_time,
            'scan_topic': scan_topic,
            'max_vel_translation': 0.5,
            'max_acc_translation': 0.15,
            'max_vel_rotation': 0.3,
            'max_acc_rotation': 0.25,
            'gain': 0.9,
            'min_angle': 3.14159 / 14,
            'dist_vir_wall': 0.50,
            'radius_robot': 0.25,
        }],
        output='screen',
    )

    return LaunchDescription([
        declare_use_sim_time,
        declare_scan_topic,
        carrot_planner,
    ])
