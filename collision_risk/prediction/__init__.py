"""Obstacle prediction adapters."""

from .gaussian_prediction import (
    GaussianPredictionConfig,
    horizon_covariances,
    predictions_from_trajectories,
    constant_velocity_predictions,
)

__all__ = [
    'GaussianPredictionConfig',
    'horizon_covariances',
    'predictions_from_trajectories',
    'constant_velocity_predictions',
]
