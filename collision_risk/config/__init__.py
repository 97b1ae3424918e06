"""Configuration management module."""

import yaml
from pathlib import Path
from typing import List, Mapping, Optional
from dataclasses import dataclass, asdict
from loguru import logger

from ..core.data_structures import PredictedObject
from ..cost.collision_probability import CalculateCollisionProbabilityFast, CULL_THRESHOLD
from ..prediction.gaussian_prediction import GaussianPredictionConfig


@dataclass
class CollisionCostConfig:
    """Configuration for the collision probability cost.

    Attributes:
        # Cost term
        name: Name recorded on evaluated trajectories
        weight: Cost weight
        cull_threshold: Squared exterior distance above which a step is skipped [m²]

        # Ego vehicle
        vehicle_length: Ego length [m]
        vehicle_width: Ego width [m]

        # Prediction uncertainty
        initial_std: Position standard deviation at zero horizon [m]
        std_growth_rate: Standard deviation growth [m/s]
        dt: Prediction time step [s]
    """
    # Cost term
    name: str = 'prob_collision'
    weight: float = 1.0
    cull_threshold: float = CULL_THRESHOLD

    # Ego vehicle
    vehicle_length: float = 4.5
    vehicle_width: float = 2.0

    # Prediction uncertainty
    initial_std: float = 0.2
    std_growth_rate: float = 0.3
    dt: float = 0.1

    # Internal: loaded from
    config_path: Optional[str] = None

    def prediction_config(self) -> GaussianPredictionConfig:
        """Uncertainty model described by this configuration."""
        return GaussianPredictionConfig(
            initial_std=self.initial_std,
            std_growth_rate=self.std_growth_rate,
            dt=self.dt,
        )


class ConfigValidationError(ValueError):
    """Raised when configuration validation fails."""
    pass


def validate_config(config: CollisionCostConfig) -> None:
    """Validate configuration values for consistency and correctness.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    errors: List[str] = []

    if not isinstance(config.name, str) or not config.name:
        errors.append(f"name must be a non-empty string, got {config.name!r}")
    if config.weight < 0:
        errors.append(f"weight must be non-negative, got {config.weight}")
    if config.cull_threshold < 0:
        errors.append(f"cull_threshold must be non-negative, got {config.cull_threshold}")

    # Ego vehicle
    if config.vehicle_length <= 0:
        errors.append(f"vehicle_length must be positive, got {config.vehicle_length}")
    if config.vehicle_width <= 0:
        errors.append(f"vehicle_width must be positive, got {config.vehicle_width}")

    # Prediction uncertainty
    if config.initial_std < 0:
        errors.append(f"initial_std must be non-negative, got {config.initial_std}")
    if config.std_growth_rate < 0:
        errors.append(f"std_growth_rate must be non-negative, got {config.std_growth_rate}")
    if config.dt <= 0:
        errors.append(f"dt must be positive, got {config.dt}")

    # The culling box ignores heading, so the threshold must at least cover
    # the footprint corners swinging out of it
    half_diagonal_sq = (config.vehicle_length ** 2 + config.vehicle_width ** 2) / 4.0
    if config.cull_threshold > 0 and config.cull_threshold < half_diagonal_sq:
        logger.warning(
            f"cull_threshold ({config.cull_threshold}) is below the squared half "
            f"diagonal of the vehicle ({half_diagonal_sq:.2f}); culling may skip "
            f"overlapping obstacles"
        )

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigValidationError(error_msg)


def load_config(config_path: str) -> CollisionCostConfig:
    """Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Loaded configuration
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, 'r') as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML file {config_path}: {e}") from e

    if config_dict is None:
        raise ValueError(f"YAML file {config_path} is empty or contains no valid content")
    if not isinstance(config_dict, dict):
        raise ValueError(f"Invalid configuration structure in {config_path}: expected a mapping")

    try:
        config = CollisionCostConfig(**config_dict)
    except TypeError as e:
        raise ValueError(f"Invalid configuration structure in {config_path}: {e}") from e

    config.config_path = str(config_path)

    try:
        validate_config(config)
    except ConfigValidationError:
        logger.error(f"Configuration validation failed for {config_path}")
        raise

    logger.info(f"Configuration loaded and validated from {config_path}")

    return config


def save_config(config: CollisionCostConfig, config_path: str):
    """Save configuration to YAML file.

    Args:
        config: Configuration to save
        config_path: Path to save YAML file
    """
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = asdict(config)
    config_dict.pop('config_path')

    with open(config_path, 'w') as f:
        yaml.safe_dump(config_dict, f, default_flow_style=False, indent=2)

    logger.info(f"Configuration saved to {config_path}")


def create_collision_strategy(
    config: CollisionCostConfig,
    predictions: Mapping[int, PredictedObject]
) -> CalculateCollisionProbabilityFast:
    """Build the collision probability cost described by ``config``."""
    return CalculateCollisionProbabilityFast(
        name=config.name,
        weight=config.weight,
        predictions=predictions,
        vehicle_length=config.vehicle_length,
        vehicle_width=config.vehicle_width,
        cull_threshold=config.cull_threshold,
    )
