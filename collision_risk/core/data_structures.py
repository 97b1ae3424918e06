"""Core data structures for collision risk evaluation.

This module defines the data exchanged between the prediction subsystem,
the trajectory sampler and the cost strategies.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence
import numpy as np


@dataclass
class PoseWithCovariance:
    """Predicted mean position of an obstacle and its positional uncertainty.

    Attributes:
        position: Mean position [x, y] in global frame [m]
        covariance: Positional covariance [2, 2] [m²]
        timestamp: Time stamp [s]
    """
    position: np.ndarray
    covariance: np.ndarray
    timestamp: float = 0.0

    def __post_init__(self):
        """Coerce to float arrays and keep the planar part only."""
        position = np.asarray(self.position, dtype=float).reshape(-1)
        covariance = np.asarray(self.covariance, dtype=float)
        assert position.shape[0] >= 2, "Position must have at least 2 components"
        assert covariance.ndim == 2 and covariance.shape[0] >= 2 and covariance.shape[1] >= 2, \
            "Covariance must be at least (2, 2)"

        # Prediction stacks commonly emit 3D poses with 6x6 covariances
        self.position = position[:2]
        self.covariance = covariance[:2, :2]

    def is_valid(self, tol: float = 1e-9) -> bool:
        """Check that the covariance is finite, symmetric and PSD."""
        if not (np.all(np.isfinite(self.position)) and np.all(np.isfinite(self.covariance))):
            return False
        if not np.allclose(self.covariance, self.covariance.T, atol=tol):
            return False
        return bool(np.min(np.linalg.eigvalsh(self.covariance)) >= -tol)


@dataclass
class PredictedObject:
    """Probabilistic future path of one obstacle.

    Index 0 of ``predicted_path`` is one time step after the planning instant.

    Attributes:
        object_id: Obstacle identifier
        predicted_path: Ordered poses with uncertainty
    """
    object_id: int
    predicted_path: List[PoseWithCovariance] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.predicted_path)

    def positions(self) -> np.ndarray:
        """Mean positions as array [n_steps, 2]."""
        if not self.predicted_path:
            return np.empty((0, 2))
        return np.stack([pose.position for pose in self.predicted_path])

    def covariances(self) -> np.ndarray:
        """Covariances as array [n_steps, 2, 2]."""
        if not self.predicted_path:
            return np.empty((0, 2, 2))
        return np.stack([pose.covariance for pose in self.predicted_path])

    @classmethod
    def from_arrays(
        cls,
        object_id: int,
        positions: np.ndarray,
        covariances: np.ndarray,
        dt: Optional[float] = None
    ) -> 'PredictedObject':
        """Create from arrays of positions [n, 2] and covariances [n, 2, 2]."""
        positions = np.asarray(positions, dtype=float)
        covariances = np.asarray(covariances, dtype=float)
        if positions.ndim != 2 or covariances.ndim != 3:
            raise ValueError(
                f"Expected positions [n, 2] and covariances [n, 2, 2], "
                f"got {positions.shape} and {covariances.shape}"
            )
        if positions.shape[0] != covariances.shape[0]:
            raise ValueError(
                f"Length mismatch: {positions.shape[0]} positions vs "
                f"{covariances.shape[0]} covariances"
            )

        path = [
            PoseWithCovariance(
                position=pos,
                covariance=cov,
                timestamp=(k + 1) * dt if dt is not None else 0.0
            )
            for k, (pos, cov) in enumerate(zip(positions, covariances))
        ]
        return cls(object_id=int(object_id), predicted_path=path)


@dataclass
class CartesianSample:
    """Ego trajectory in global Cartesian coordinates.

    Attributes:
        x, y: Positions [m]
        theta: Heading angles [rad]
    """
    x: List[float] = field(default_factory=list)
    y: List[float] = field(default_factory=list)
    theta: List[float] = field(default_factory=list)

    def __post_init__(self):
        """Validate lengths."""
        assert len(self.x) == len(self.y) == len(self.theta), \
            "x, y and theta must have the same length"

    def __len__(self) -> int:
        return len(self.x)


@dataclass(frozen=True)
class CostEntry:
    """One named cost contribution of a trajectory."""
    name: str
    cost: float
    weighted_cost: float


@dataclass
class TrajectorySample:
    """Candidate ego trajectory together with its accumulated costs.

    Attributes:
        cartesian_sample: Ego states along the trajectory
        cost_list: Cost contributions appended by cost strategies
        cost: Sum of all weighted cost contributions
    """
    cartesian_sample: CartesianSample
    cost_list: List[CostEntry] = field(default_factory=list)
    cost: float = 0.0

    def __len__(self) -> int:
        return len(self.cartesian_sample)

    def add_cost_value_to_list(self, name: str, cost: float, weighted_cost: float) -> None:
        """Append a cost contribution and accumulate the weighted total."""
        self.cost_list.append(CostEntry(name=name, cost=cost, weighted_cost=weighted_cost))
        self.cost += weighted_cost

    def cost_by_name(self, name: str) -> Optional[CostEntry]:
        """Return the first cost entry with the given name, if any."""
        for entry in self.cost_list:
            if entry.name == name:
                return entry
        return None

    def cost_summary(self) -> Dict[str, float]:
        """Weighted cost per strategy name."""
        return {entry.name: entry.weighted_cost for entry in self.cost_list}

    @classmethod
    def from_arrays(
        cls,
        x: Sequence[float],
        y: Sequence[float],
        theta: Sequence[float]
    ) -> 'TrajectorySample':
        """Create from coordinate sequences."""
        return cls(cartesian_sample=CartesianSample(
            x=[float(v) for v in x],
            y=[float(v) for v in y],
            theta=[float(v) for v in theta],
        ))
