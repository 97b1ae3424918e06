"""Gaussian uncertainty for deterministic obstacle predictions.

Trajectory predictors emit mean paths only. This module attaches an
isotropic covariance that grows linearly with the prediction horizon and
packs the result into the mapping consumed by the collision cost.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Sequence
import numpy as np
from loguru import logger

from ..core.data_structures import PredictedObject


@dataclass
class GaussianPredictionConfig:
    """Uncertainty model parameters.

    Attributes:
        initial_std: Position standard deviation at zero horizon [m]
        std_growth_rate: Standard deviation growth per second [m/s]
        dt: Time between prediction steps [s]
    """
    initial_std: float = 0.2
    std_growth_rate: float = 0.3
    dt: float = 0.1


def horizon_covariances(n_steps: int, config: GaussianPredictionConfig) -> np.ndarray:
    """Isotropic covariances [n_steps, 2, 2] for steps dt, 2*dt, ..."""
    horizon = np.arange(1, n_steps + 1) * config.dt
    std = config.initial_std + config.std_growth_rate * horizon
    return (std ** 2)[:, None, None] * np.eye(2)[None, :, :]


def predictions_from_trajectories(
    trajectories: np.ndarray,
    ids: Optional[Sequence[int]] = None,
    config: Optional[GaussianPredictionConfig] = None
) -> Dict[int, PredictedObject]:
    """Build predicted objects from mean trajectories.

    Args:
        trajectories: Predicted positions [n_obs, n_steps, 2], step 0 one dt ahead
        ids: Obstacle ids, defaults to 0..n_obs-1
        config: Uncertainty model

    Returns:
        Mapping of obstacle id to predicted object
    """
    config = config or GaussianPredictionConfig()
    trajectories = np.asarray(trajectories, dtype=float)

    if trajectories.size == 0:
        return {}
    if trajectories.ndim != 3 or trajectories.shape[2] != 2:
        raise ValueError(f"Expected trajectories of shape [n_obs, n_steps, 2], got {trajectories.shape}")

    n_obs, n_steps, _ = trajectories.shape
    if ids is None:
        ids = range(n_obs)
    ids = list(ids)
    if len(ids) != n_obs:
        raise ValueError(f"Got {len(ids)} ids for {n_obs} trajectories")

    covariances = horizon_covariances(n_steps, config)
    predictions = {
        int(obj_id): PredictedObject.from_arrays(obj_id, traj, covariances, dt=config.dt)
        for obj_id, traj in zip(ids, trajectories)
    }

    logger.debug(f"Built {len(predictions)} Gaussian predictions with {n_steps} steps")
    return predictions


def constant_velocity_predictions(
    positions: np.ndarray,
    velocities: np.ndarray,
    n_steps: int,
    ids: Optional[Sequence[int]] = None,
    config: Optional[GaussianPredictionConfig] = None
) -> Dict[int, PredictedObject]:
    """Constant velocity predictions with growing uncertainty.

    Args:
        positions: Current positions [n_obs, 2]
        velocities: Current velocities [n_obs, 2]
        n_steps: Number of predicted steps
        ids: Obstacle ids
        config: Uncertainty model

    Returns:
        Mapping of obstacle id to predicted object
    """
    config = config or GaussianPredictionConfig()
    positions = np.asarray(positions, dtype=float).reshape(-1, 2)
    velocities = np.asarray(velocities, dtype=float).reshape(-1, 2)
    if positions.shape != velocities.shape:
        raise ValueError(
            f"positions {positions.shape} and velocities {velocities.shape} must match"
        )
    if n_steps <= 0:
        raise ValueError(f"n_steps must be positive, got {n_steps}")

    horizon = np.arange(1, n_steps + 1) * config.dt
    # [n_obs, n_steps, 2]
    trajectories = positions[:, None, :] + velocities[:, None, :] * horizon[None, :, None]

    return predictions_from_trajectories(trajectories, ids=ids, config=config)
