"""Tests for Gaussian prediction adapters."""

import numpy as np
import pytest

from collision_risk.prediction import (
    GaussianPredictionConfig,
    constant_velocity_predictions,
    horizon_covariances,
    predictions_from_trajectories,
)


def test_horizon_covariances_grow():
    config = GaussianPredictionConfig(initial_std=0.2, std_growth_rate=0.5, dt=0.2)
    covs = horizon_covariances(3, config)

    assert covs.shape == (3, 2, 2)
    assert covs[0, 0, 0] == pytest.approx((0.2 + 0.5 * 0.2) ** 2)
    assert covs[2, 1, 1] == pytest.approx((0.2 + 0.5 * 0.6) ** 2)
    assert np.all(covs[:, 0, 1] == 0.0)


def test_predictions_from_trajectories():
    trajectories = np.zeros((2, 5, 2))
    trajectories[1, :, 0] = np.arange(5)

    predictions = predictions_from_trajectories(trajectories, ids=[10, 11])

    assert set(predictions) == {10, 11}
    assert len(predictions[11]) == 5
    assert np.allclose(predictions[11].positions()[:, 0], np.arange(5))
    assert all(pose.is_valid() for pose in predictions[10].predicted_path)


def test_predictions_from_trajectories_validation():
    assert predictions_from_trajectories(np.empty((0, 0, 2))) == {}
    with pytest.raises(ValueError):
        predictions_from_trajectories(np.zeros((5, 2)))
    with pytest.raises(ValueError):
        predictions_from_trajectories(np.zeros((2, 5, 2)), ids=[1])


def test_constant_velocity_starts_one_step_ahead():
    config = GaussianPredictionConfig(dt=0.5)
    predictions = constant_velocity_predictions(
        positions=[[0.0, 0.0]], velocities=[[2.0, -1.0]], n_steps=4, config=config
    )

    positions = predictions[0].positions()
    assert np.allclose(positions[0], [1.0, -0.5])
    assert np.allclose(positions[-1], [4.0, -2.0])
    assert predictions[0].predicted_path[0].timestamp == pytest.approx(0.5)


def test_constant_velocity_validation():
    with pytest.raises(ValueError):
        constant_velocity_predictions([[0.0, 0.0]], [[1.0, 0.0], [0.0, 1.0]], n_steps=3)
    with pytest.raises(ValueError):
        constant_velocity_predictions([[0.0, 0.0]], [[1.0, 0.0]], n_steps=0)
