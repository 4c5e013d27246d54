"""
Tests for configuration management.
"""
import pytest
from pathlib import Path
from pydantic import ValidationError
from trilateration.utils.config import (
    load_config,
    TrilaterationConfig,
    SolverSettings,
    LoggingSettings,
    get_default_config
)
from trilateration.utils.exceptions import ConfigurationError

EXAMPLE_CONFIG = Path(__file__).resolve().parents[2] / "config" / "example.yaml"


def test_load_example_config():
    """Test loading the bundled example configuration."""
    config = load_config(EXAMPLE_CONFIG)

    assert config.solver.earth_radius_km == 6371.0
    assert config.solver.use_miles is False
    assert config.logging.level == "INFO"
    assert len(config.anchors) == 3
    assert config.anchors[0].longitude == 9.998
    assert config.anchors[2].latitude == 0.002


def test_load_partial_config(tmp_path):
    """Sections missing from the file fall back to defaults."""
    config_file = tmp_path / "partial.yaml"
    config_file.write_text("solver:\n  use_miles: true\n")

    config = load_config(config_file)

    assert config.solver.use_miles is True
    assert config.solver.earth_radius_km == 6371.0
    assert config.logging.level == "WARNING"
    assert config.anchors == []


def test_load_empty_config(tmp_path):
    """An empty file is the default configuration."""
    config_file = tmp_path / "empty.yaml"
    config_file.write_text("")

    assert load_config(config_file) == get_default_config()


def test_config_file_not_found():
    """Test error handling when config file doesn't exist."""
    with pytest.raises(FileNotFoundError):
        load_config(Path("config/nonexistent.yaml"))


def test_malformed_yaml(tmp_path):
    """Unparseable YAML raises ConfigurationError."""
    config_file = tmp_path / "bad.yaml"
    config_file.write_text("solver: [unclosed\n")

    with pytest.raises(ConfigurationError):
        load_config(config_file)


def test_non_mapping_config(tmp_path):
    """A top-level list is rejected."""
    config_file = tmp_path / "list.yaml"
    config_file.write_text("- 1\n- 2\n")

    with pytest.raises(ConfigurationError) as exc_info:
        load_config(config_file)

    assert "mapping" in str(exc_info.value)


def test_invalid_anchor_in_file(tmp_path):
    """Out-of-range anchors are reported as ConfigurationError."""
    config_file = tmp_path / "anchors.yaml"
    config_file.write_text(
        "anchors:\n"
        "  - {latitude: 91.0, longitude: 10.0, distance: 1.0}\n"
    )

    with pytest.raises(ConfigurationError):
        load_config(config_file)


def test_too_many_anchors():
    """At most three anchors can be configured."""
    anchor = {'latitude': 0.0, 'longitude': 10.0, 'distance': 1.0}
    with pytest.raises(ValidationError):
        TrilaterationConfig(anchors=[anchor] * 4)


def test_solver_settings_validation():
    """Test validation of solver settings."""
    settings = SolverSettings(earth_radius_km=3958.8, intersection_tolerance_km=0.01)
    assert settings.earth_radius_km == 3958.8

    # Invalid: non-positive radius
    with pytest.raises(ValidationError):
        SolverSettings(earth_radius_km=0.0)

    # Invalid: negative tolerance
    with pytest.raises(ValidationError):
        SolverSettings(intersection_tolerance_km=-0.1)


def test_logging_settings_validation():
    """Log levels are normalized to upper case and checked."""
    assert LoggingSettings(level="debug").level == "DEBUG"

    with pytest.raises(ValidationError):
        LoggingSettings(level="VERBOSE")


def test_get_default_config():
    """Test default configuration generation."""
    config = get_default_config()

    assert config.solver.earth_radius_km == 6371.0
    assert config.solver.use_miles is False
    assert config.solver.validate_coordinates is True
    assert config.solver.intersection_tolerance_km == 0.0
    assert config.logging.level == "WARNING"
    assert config.logging.log_file is None
    assert config.anchors == []
