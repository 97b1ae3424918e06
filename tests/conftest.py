"""Shared fixtures for collision risk tests."""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from collision_risk.core.data_structures import PoseWithCovariance, PredictedObject, TrajectorySample


def make_prediction(obstacle_id, positions, variance=0.01):
    """Predicted object with isotropic covariance at every step."""
    path = [
        PoseWithCovariance(position=np.array(pos, dtype=float), covariance=variance * np.eye(2))
        for pos in positions
    ]
    return PredictedObject(object_id=obstacle_id, predicted_path=path)


@pytest.fixture
def straight_trajectory():
    """Three steps along the x axis, heading 0."""
    return TrajectorySample.from_arrays(x=[0.0, 1.0, 2.0], y=[0.0, 0.0, 0.0], theta=[0.0, 0.0, 0.0])


@pytest.fixture
def prediction_factory():
    """Factory building isotropic predicted objects from positions."""
    return make_prediction
