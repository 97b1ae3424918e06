"""Tests for core data structures."""

import numpy as np
import pytest

from collision_risk.core.data_structures import (
    CartesianSample,
    CostEntry,
    PoseWithCovariance,
    PredictedObject,
    TrajectorySample,
)


def test_pose_truncates_to_planar_block():
    position = np.array([1.0, 2.0, 0.5])
    covariance = np.diag([0.1, 0.2, 0.3, 0.4, 0.5, 0.6])
    pose = PoseWithCovariance(position=position, covariance=covariance)

    assert pose.position.shape == (2,)
    assert pose.covariance.shape == (2, 2)
    assert np.allclose(pose.covariance, np.diag([0.1, 0.2]))


def test_pose_rejects_bad_shapes():
    with pytest.raises(AssertionError):
        PoseWithCovariance(position=np.array([1.0]), covariance=np.eye(2))
    with pytest.raises(AssertionError):
        PoseWithCovariance(position=np.zeros(2), covariance=np.zeros(2))


@pytest.mark.parametrize("covariance, valid", [
    (np.eye(2), True),
    (np.zeros((2, 2)), True),
    (np.array([[1.0, 0.5], [0.2, 1.0]]), False),
    (np.array([[1.0, 2.0], [2.0, 1.0]]), False),
    (np.array([[np.inf, 0.0], [0.0, 1.0]]), False),
])
def test_pose_validity(covariance, valid):
    assert PoseWithCovariance(np.zeros(2), covariance).is_valid() is valid


def test_predicted_object_from_arrays():
    positions = np.array([[0.0, 0.0], [1.0, 0.5], [2.0, 1.0]])
    covariances = np.stack([np.eye(2) * s for s in (0.1, 0.2, 0.3)])

    prediction = PredictedObject.from_arrays(4, positions, covariances, dt=0.1)

    assert prediction.object_id == 4
    assert len(prediction) == 3
    assert np.allclose(prediction.positions(), positions)
    assert np.allclose(prediction.covariances(), covariances)
    assert prediction.predicted_path[0].timestamp == pytest.approx(0.1)
    assert prediction.predicted_path[2].timestamp == pytest.approx(0.3)


def test_predicted_object_from_arrays_length_mismatch():
    with pytest.raises(ValueError):
        PredictedObject.from_arrays(1, np.zeros((3, 2)), np.zeros((2, 2, 2)))
    with pytest.raises(ValueError):
        PredictedObject.from_arrays(1, np.zeros(3), np.zeros((3, 2, 2)))


def test_empty_predicted_object():
    prediction = PredictedObject(object_id=0)
    assert len(prediction) == 0
    assert prediction.positions().shape == (0, 2)
    assert prediction.covariances().shape == (0, 2, 2)


def test_cartesian_sample_requires_equal_lengths():
    with pytest.raises(AssertionError):
        CartesianSample(x=[0.0, 1.0], y=[0.0], theta=[0.0, 0.0])


def test_trajectory_cost_accumulation():
    trajectory = TrajectorySample.from_arrays([0.0, 1.0], [0.0, 0.0], [0.0, 0.0])
    assert len(trajectory) == 2

    trajectory.add_cost_value_to_list("a", 0.5, 1.0)
    trajectory.add_cost_value_to_list("b", 2.0, 0.2)

    assert trajectory.cost_list == [CostEntry("a", 0.5, 1.0), CostEntry("b", 2.0, 0.2)]
    assert trajectory.cost == pytest.approx(1.2)
    assert trajectory.cost_by_name("b").cost == 2.0
    assert trajectory.cost_by_name("missing") is None
    assert trajectory.cost_summary() == {"a": 1.0, "b": 0.2}
