"""
Configuration management using Pydantic for validation.

This module provides type-safe configuration loading and validation
for the trilateration solver and command-line runner.
"""
from pathlib import Path
from typing import Optional, List
from pydantic import BaseModel, Field, ValidationError, field_validator
import yaml

from trilateration.core.geometry import EARTH_RADIUS_KM
from trilateration.data.schemas import AnchorInput
from trilateration.utils.exceptions import ConfigurationError


LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class SolverSettings(BaseModel):
    """Parameters for the trilateration solve."""
    earth_radius_km: float = Field(EARTH_RADIUS_KM, gt=0.0, description="Sphere radius (km)")
    use_miles: bool = Field(False, description="Anchor distances are given in miles")
    validate_coordinates: bool = Field(True, description="Range-check anchors when they are set")
    intersection_tolerance_km: float = Field(
        0.0, ge=0.0,
        description="Clamp a slightly negative discriminant to zero within tol^2 (km^2)"
    )


class LoggingSettings(BaseModel):
    """Logging output options."""
    level: str = Field("WARNING", description="Log level")
    json_output: bool = Field(False, description="Emit JSON log lines")
    log_file: Optional[Path] = Field(None, description="Optional log file path")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize and check the log level name."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v} (expected one of {LOG_LEVELS})")
        return level


class TrilaterationConfig(BaseModel):
    """Complete configuration: solver settings, logging and up to three anchors."""
    solver: SolverSettings = Field(default_factory=SolverSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    anchors: List[AnchorInput] = Field(default_factory=list, max_length=3)


def load_config(config_path: Path) -> TrilaterationConfig:
    """
    Load and validate configuration from a YAML file.

    JSON files are accepted as well, being valid YAML.

    Args:
        config_path: Path to YAML config file

    Returns:
        Validated TrilaterationConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigurationError: If YAML is malformed or validation fails

    Example:
        >>> config = load_config(Path("config/example.yaml"))
        >>> print(config.solver.earth_radius_km, len(config.anchors))
        6371.0 3
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        try:
            config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Malformed config file {config_path}: {e}") from e

    if config_dict is None:
        config_dict = {}
    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Config file {config_path} must contain a mapping, got {type(config_dict).__name__}"
        )

    try:
        return TrilaterationConfig(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e


def get_default_config() -> TrilaterationConfig:
    """
    Get default configuration template.

    Returns:
        Default TrilaterationConfig with no anchors
    """
    return TrilaterationConfig(
        solver=SolverSettings(),
        logging=LoggingSettings(),
        anchors=[],
    )
