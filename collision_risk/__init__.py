"""Collision probability cost for sampling-based motion planning."""

from .core import (
    PoseWithCovariance,
    PredictedObject,
    CartesianSample,
    CostEntry,
    TrajectorySample,
    bvn_prob,
)
from .cost import (
    CostStrategy,
    CalculateCollisionProbabilityFast,
    create_cost_strategy,
    evaluate_trajectories,
)

__version__ = "0.1.0"

__all__ = [
    'PoseWithCovariance',
    'PredictedObject',
    'CartesianSample',
    'CostEntry',
    'TrajectorySample',
    'bvn_prob',
    'CostStrategy',
    'CalculateCollisionProbabilityFast',
    'create_cost_strategy',
    'evaluate_trajectories',
]
