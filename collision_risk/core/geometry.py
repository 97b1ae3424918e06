"""Planar geometry utilities: rotations, axis-aligned boxes and frame changes.

Boxes are stored exactly as constructed. Integration over a box whose min
corner exceeds its max corner along an axis yields a sign flip, so corner
order is part of the numeric contract of the collision cost.
"""

from dataclasses import dataclass
from typing import Tuple
import numpy as np


def rotation_matrix(theta: float) -> np.ndarray:
    """Counter-clockwise 2D rotation by ``theta``. Its transpose is the inverse."""
    c = np.cos(theta)
    s = np.sin(theta)
    return np.array([[c, -s], [s, c]])


def rotate_covariance(covariance: np.ndarray, rotation: np.ndarray) -> np.ndarray:
    """Express a covariance in a rotated frame: R * C * R^T."""
    return rotation @ covariance @ rotation.T


@dataclass
class AlignedBox2D:
    """Axis-aligned box given by two corners.

    Attributes:
        min_corner: First corner [x, y]
        max_corner: Second corner [x, y]
    """
    min_corner: np.ndarray
    max_corner: np.ndarray

    def __post_init__(self):
        self.min_corner = np.asarray(self.min_corner, dtype=float).reshape(2)
        self.max_corner = np.asarray(self.max_corner, dtype=float).reshape(2)

    @classmethod
    def from_center(cls, center: np.ndarray, half_extents: np.ndarray) -> 'AlignedBox2D':
        """Box spanning ``center - half_extents`` to ``center + half_extents``."""
        center = np.asarray(center, dtype=float)
        half_extents = np.asarray(half_extents, dtype=float)
        return cls(center - half_extents, center + half_extents)

    @property
    def center(self) -> np.ndarray:
        return 0.5 * (self.min_corner + self.max_corner)

    @property
    def sizes(self) -> np.ndarray:
        """Edge lengths along x and y (always non-negative)."""
        return np.abs(self.max_corner - self.min_corner)

    def lower(self) -> np.ndarray:
        """Component-wise minimum of the two corners."""
        return np.minimum(self.min_corner, self.max_corner)

    def upper(self) -> np.ndarray:
        """Component-wise maximum of the two corners."""
        return np.maximum(self.min_corner, self.max_corner)

    def contains(self, point: np.ndarray) -> bool:
        point = np.asarray(point, dtype=float)
        return bool(np.all(point >= self.lower()) and np.all(point <= self.upper()))

    def squared_exterior_distance(self, point: np.ndarray) -> float:
        """Squared distance from ``point`` to the box, 0 if inside.

        Args:
            point: Query point [x, y]

        Returns:
            Squared Euclidean distance to the closest box point [m²]
        """
        point = np.asarray(point, dtype=float)
        below = np.maximum(self.lower() - point, 0.0)
        above = np.maximum(point - self.upper(), 0.0)
        gap = below + above
        return float(gap @ gap)


def oriented_relative_box(
    ego_position: np.ndarray,
    obstacle_position: np.ndarray,
    half_extents: np.ndarray,
    heading: float
) -> Tuple[AlignedBox2D, np.ndarray]:
    """Ego footprint as a box in the ego-aligned frame centered on the obstacle.

    The signed footprint offset is rotated into the world frame and applied
    to the ego-obstacle offset, then both corners are rotated back by the
    inverse heading. In the returned frame the ego is axis-aligned and the
    obstacle mean sits at the origin.

    Args:
        ego_position: Ego position [x, y]
        obstacle_position: Obstacle mean position [x, y]
        half_extents: Ego half length and half width [m]
        heading: Ego heading [rad]

    Returns:
        box: Footprint box in the relative frame, corners kept in
            ``(offset, -offset)`` order
        inv_rotation: Rotation from world frame into the relative frame
    """
    rotation = rotation_matrix(heading)
    inv_rotation = rotation.T

    relative = np.asarray(ego_position, dtype=float) - np.asarray(obstacle_position, dtype=float)
    rotated_offset = rotation @ np.asarray(half_extents, dtype=float)

    first = relative + rotated_offset
    second = relative - rotated_offset

    return AlignedBox2D(inv_rotation @ first, inv_rotation @ second), inv_rotation
