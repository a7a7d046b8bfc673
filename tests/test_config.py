"""Unit tests for loading and validating motion configurations and paths from YAML."""

from __future__ import annotations

from pathlib import Path

import pytest

from robot_motion.io import export_yaml_data, load_motion_config, load_path_waypoints
from robot_motion.io.pydantic_schemata import MotionConfig
from robot_motion.spatial import DEFAULT_FRAME


def test_empty_config_file_yields_defaults(tmp_path: Path) -> None:
    """Verify that an empty configuration file produces the default configuration."""
    # Arrange - Create an empty YAML file
    yaml_path = tmp_path / "motion.yaml"
    yaml_path.write_text("")

    # Act - Load the configuration
    config = load_motion_config(yaml_path)

    # Assert - Expect the documented defaults (e.g., maximum joint speed)
    assert config == MotionConfig()
    assert config.default_joint_speed == 1.0
    assert config.body_variant == "H25"


def test_config_loads_overrides(tmp_path: Path) -> None:
    """Verify that values given in YAML override the defaults."""
    # Arrange - Export a configuration for an H21 robot without a blocking timeout
    yaml_path = tmp_path / "motion.yaml"
    export_yaml_data({"body_variant": "H21", "blocking_timeout_s": None}, yaml_path)

    # Act - Load the configuration
    config = load_motion_config(yaml_path)

    # Assert - Expect the overridden values
    assert config.body_variant == "H21"
    assert config.blocking_timeout_s is None


@pytest.mark.parametrize(
    "yaml_data",
    [
        {"default_joint_speed": 1.5},
        {"default_posture_speed": -0.1},
        {"path_velocity": 0.0},
        {"joint_speed": 0.5},
    ],
)
def test_config_rejects_invalid_values(tmp_path: Path, yaml_data: dict) -> None:
    """Verify that out-of-range speeds and unknown keys are rejected."""
    # Arrange - Export the invalid configuration
    yaml_path = tmp_path / "motion.yaml"
    export_yaml_data(yaml_data, yaml_path)

    # Act/Assert - Expect loading the configuration to fail
    with pytest.raises(ValueError):
        load_motion_config(yaml_path)


def test_load_path_waypoints(tmp_path: Path) -> None:
    """Verify that path waypoints given as lists or dictionaries are loaded in order."""
    # Arrange - Export a path mixing both supported waypoint formats
    path_data = {
        "waypoints": [
            [1.0, 0.0, 0.0, 0.0, 0.0, 0.0],
            {"xyz_rpy": [2.0, 1.0, 0.0, 0.0, 0.0, 1.57], "frame": "odom"},
        ],
    }
    yaml_path = tmp_path / "path.yaml"
    export_yaml_data(path_data, yaml_path)

    # Act - Load the waypoints
    waypoints = load_path_waypoints(yaml_path)

    # Assert - Expect stamped waypoints in the given order and frames
    assert [w.seq for w in waypoints] == [0, 1]
    assert waypoints[0].ref_frame == DEFAULT_FRAME
    assert waypoints[1].ref_frame == "odom"
    assert waypoints[1].pose.position.x == pytest.approx(2.0)


def test_load_path_rejects_empty_waypoints(tmp_path: Path) -> None:
    """Verify that a path without waypoints is rejected."""
    # Arrange - Export a path with an empty list of waypoints
    yaml_path = tmp_path / "path.yaml"
    export_yaml_data({"waypoints": []}, yaml_path)

    # Act/Assert - Expect loading the path to fail
    with pytest.raises(ValueError):
        load_path_waypoints(yaml_path)
