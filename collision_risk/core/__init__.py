"""Core module for fundamental data structures and numerics."""

from .data_structures import (
    PoseWithCovariance,
    PredictedObject,
    CartesianSample,
    CostEntry,
    TrajectorySample,
)
from .geometry import (
    AlignedBox2D,
    rotation_matrix,
    rotate_covariance,
    oriented_relative_box,
)
from .bivariate_normal import bvn_prob

__all__ = [
    'PoseWithCovariance',
    'PredictedObject',
    'CartesianSample',
    'CostEntry',
    'TrajectorySample',
    'AlignedBox2D',
    'rotation_matrix',
    'rotate_covariance',
    'oriented_relative_box',
    'bvn_prob',
]
