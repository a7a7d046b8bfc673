"""Demo script that drives a simulated NAO-class robot through the motion facade."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.table import Table

from robot_motion.backends import SimulatedMotionBackend
from robot_motion.io import (
    configure_logging,
    console,
    load_motion_config,
    load_path_waypoints,
    log_info,
)
from robot_motion.io.pydantic_schemata import MotionConfig
from robot_motion.motion import MotionFacade
from robot_motion.spatial import Point3D, Pose3D, Space


def render_joint_table(backend: SimulatedMotionBackend) -> Table:
    """Render a table of the simulated robot's current joint angles."""
    table = Table(title=f"Joint Angles ({backend.body_variant})")
    table.add_column("Joint", style="bold")
    table.add_column("Angle (rad)", justify="right", style="cyan")

    for joint, angle in backend.joint_angles.items():
        table.add_row(joint, f"{angle:+.3f}")
    return table


def report(step: str, succeeded: bool, facade: MotionFacade) -> None:
    """Print the result of one step of the demo."""
    style = "green" if succeeded else "red"
    message = facade.last_outcome.message if facade.last_outcome is not None else ""
    console.print(f"[{style}]{step}: {'ok' if succeeded else 'failed'}[/] {message}")


@click.command()
@click.option("--config", "config_path", type=click.Path(exists=True, path_type=Path))
@click.option("--path", "path_yaml", type=click.Path(exists=True, path_type=Path))
@click.option("--obstacle", nargs=3, type=float, help="Center (x, y, radius) of an obstacle")
@click.option("--duration", default=0.2, show_default=True, help="Seconds taken by each motion")
@click.option("--verbose", is_flag=True, help="Log debug messages from the motion facade")
def simulated_motion_demo(
    config_path: Path | None,
    path_yaml: Path | None,
    obstacle: tuple[float, float, float] | None,
    duration: float,
    verbose: bool,
) -> None:
    """Stand up, look around, walk a path, and rest using a simulated robot."""
    configure_logging(logging.DEBUG if verbose else logging.INFO)
    config = load_motion_config(config_path) if config_path is not None else MotionConfig()

    backend = SimulatedMotionBackend(config.body_variant, motion_duration_s=duration)
    if obstacle:
        x, y, radius_m = obstacle
        backend.add_obstacle(Point3D(x, y, 0.0), radius_m)

    if path_yaml is not None:
        waypoints = load_path_waypoints(path_yaml)
    else:
        waypoints = [Pose3D.from_xyz_rpy(x=0.5 * i) for i in range(1, 5)]

    with MotionFacade(backend, config) as facade:
        report("StandInit", facade.take_predefined_posture("StandInit", 0.5), facade)
        report("Look left", facade.look_at_point(1.0, 1.0, 0.0), facade)
        report("Point right", facade.point_arm(1.0, -0.5, 0.5), facade)
        report("Shake head", facade.move_joint(["HeadYaw", "HeadYaw"], [0.4, -0.4]), facade)
        report("Walk path", facade.move_along_path(waypoints), facade)

        pose = facade.get_global_pose()
        log_info(f"Global pose after walking: {pose.pose}")
        console.print(f"Head in torso space: {facade.get_transform('Head', Space.TORSO)}")
        console.print(render_joint_table(backend))

        report("Rest", facade.rest("Crouch"), facade)


if __name__ == "__main__":
    simulated_motion_demo()
