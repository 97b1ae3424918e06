"""Collision probability cost against probabilistic obstacle predictions.

For every ego state the probability that a predicted obstacle position lies
inside the oriented ego footprint is integrated from the obstacle's
bivariate normal distribution and summed over time steps and obstacles.
"""

from typing import Dict, Mapping
import numpy as np
from loguru import logger

from ..core.data_structures import PoseWithCovariance, PredictedObject, TrajectorySample
from ..core.geometry import AlignedBox2D, oriented_relative_box, rotate_covariance
from ..core.bivariate_normal import bvn_prob
from .base import CostStrategy, register_cost_strategy


# Squared exterior distance [m²] beyond which a time step is skipped (~7.07 m)
CULL_THRESHOLD = 50.0


@register_cost_strategy("collision_probability_fast")
class CalculateCollisionProbabilityFast(CostStrategy):
    """Collision probability cost with distance based culling.

    Prediction index ``k`` is paired with ego index ``k + 1``: predicted paths
    start one step after the planning instant, the ego trajectory starts at it.

    Args:
        name: Cost name recorded on the trajectory
        weight: Cost weight
        predictions: Obstacle id to predicted object
        vehicle_length: Ego length [m]
        vehicle_width: Ego width [m]
        cull_threshold: Squared exterior distance above which a step is skipped [m²]
    """

    def __init__(
        self,
        name: str,
        weight: float,
        predictions: Mapping[int, PredictedObject],
        vehicle_length: float,
        vehicle_width: float,
        cull_threshold: float = CULL_THRESHOLD
    ):
        if vehicle_length <= 0 or vehicle_width <= 0:
            raise ValueError(
                f"Vehicle dimensions must be positive, got "
                f"length={vehicle_length}, width={vehicle_width}"
            )
        if weight < 0:
            raise ValueError(f"weight must be non-negative, got {weight}")
        if cull_threshold < 0:
            raise ValueError(f"cull_threshold must be non-negative, got {cull_threshold}")

        super().__init__(name, weight)
        self.vehicle_length = float(vehicle_length)
        self.vehicle_width = float(vehicle_width)
        self.cull_threshold = float(cull_threshold)
        self._offset = np.array([self.vehicle_length / 2.0, self.vehicle_width / 2.0])
        self._predictions: Dict[int, PredictedObject] = {}
        self.set_predictions(predictions)

        logger.info(
            f"Collision probability cost '{name}' initialized with weight={weight}, "
            f"vehicle={vehicle_length}x{vehicle_width}m, "
            f"{len(self._predictions)} predicted obstacles"
        )

    @property
    def predictions(self) -> Dict[int, PredictedObject]:
        return self._predictions

    def set_predictions(self, predictions: Mapping[int, PredictedObject]) -> None:
        """Replace the prediction set, e.g. at the start of a planning cycle."""
        self._predictions = dict(predictions)

        for obstacle_id, prediction in self._predictions.items():
            invalid = [k for k, pose in enumerate(prediction.predicted_path) if not pose.is_valid()]
            if invalid:
                logger.warning(
                    f"Obstacle {obstacle_id} has {len(invalid)} poses with invalid "
                    f"covariance (first at index {invalid[0]})"
                )

    @staticmethod
    def integrate(
        pose: PoseWithCovariance,
        position: np.ndarray,
        offset: np.ndarray,
        orientation: float
    ) -> float:
        """Probability that the obstacle lies inside the oriented ego footprint.

        Args:
            pose: Predicted obstacle pose
            position: Ego position [x, y]
            offset: Ego half length and half width [m]
            orientation: Ego heading [rad]

        Returns:
            Collision probability for this time step
        """
        box, inv_rotation = oriented_relative_box(position, pose.position, offset, orientation)
        cov = rotate_covariance(pose.covariance, inv_rotation)

        return abs(bvn_prob(box, np.zeros(2), cov))

    def obstacle_costs(self, trajectory: TrajectorySample) -> Dict[int, float]:
        """Collision probability summed over time, per obstacle.

        Args:
            trajectory: Candidate trajectory (not modified)

        Returns:
            Mapping of obstacle id to its accumulated cost
        """
        sample = trajectory.cartesian_sample
        offset = self._offset
        costs = {}

        for obstacle_id, prediction in self._predictions.items():
            path = prediction.predicted_path
            obstacle_cost = 0.0

            # Index 0 is the current ego state
            for i in range(1, len(sample)):
                if i >= len(path):
                    break

                u = np.array([sample.x[i], sample.y[i]])
                box = AlignedBox2D.from_center(u, offset)

                pose = path[i - 1]

                # Coarse check against the heading-free footprint. The threshold
                # covers exterior vs center distance and the unrotated box.
                if box.squared_exterior_distance(pose.position) > self.cull_threshold:
                    continue

                obstacle_cost += self.integrate(pose, u, offset, sample.theta[i])

            costs[obstacle_id] = obstacle_cost

        return costs

    def evaluate(self, trajectory: TrajectorySample) -> None:
        """Append the collision probability cost to ``trajectory``."""
        cost = 0.0
        for obstacle_cost in self.obstacle_costs(trajectory).values():
            cost += obstacle_cost

        assert not np.isnan(cost), f"NaN collision cost for '{self.name}'"

        trajectory.add_cost_value_to_list(self.name, cost, cost * self.weight)
        logger.debug(f"{self.name}: cost={cost:.4f}, weighted={cost * self.weight:.4f}")
