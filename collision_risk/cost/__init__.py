"""Cost strategies for trajectory ranking."""

from .base import (
    CostStrategy,
    register_cost_strategy,
    available_cost_strategies,
    create_cost_strategy,
    evaluate_trajectories,
)
from .collision_probability import CalculateCollisionProbabilityFast, CULL_THRESHOLD

__all__ = [
    'CostStrategy',
    'register_cost_strategy',
    'available_cost_strategies',
    'create_cost_strategy',
    'evaluate_trajectories',
    'CalculateCollisionProbabilityFast',
    'CULL_THRESHOLD',
]
