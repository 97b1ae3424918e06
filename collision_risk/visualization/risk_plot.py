"""Static plots of ego footprints against predicted obstacle uncertainty."""

import os
import numpy as np
import matplotlib

# Saving only, no display required
if os.environ.get("MPLBACKEND") is None:
    matplotlib.use("Agg")

import matplotlib.pyplot as plt
from matplotlib.patches import Ellipse, Polygon
from pathlib import Path
from typing import Mapping, Optional
from loguru import logger

from ..core.data_structures import PredictedObject, TrajectorySample
from ..core.geometry import rotation_matrix


def footprint_corners(x: float, y: float, theta: float, length: float, width: float) -> np.ndarray:
    """Corners [4, 2] of the oriented vehicle footprint."""
    half = np.array([
        [length / 2.0, width / 2.0],
        [-length / 2.0, width / 2.0],
        [-length / 2.0, -width / 2.0],
        [length / 2.0, -width / 2.0],
    ])
    return half @ rotation_matrix(theta).T + np.array([x, y])


def covariance_ellipse(mean: np.ndarray, covariance: np.ndarray, n_std: float = 2.0, **kwargs) -> Ellipse:
    """Ellipse patch enclosing ``n_std`` standard deviations."""
    eigvals, eigvecs = np.linalg.eigh(covariance)
    eigvals = np.clip(eigvals, 0.0, None)
    angle = np.degrees(np.arctan2(eigvecs[1, 1], eigvecs[0, 1]))
    width = 2.0 * n_std * np.sqrt(eigvals[1])
    height = 2.0 * n_std * np.sqrt(eigvals[0])
    return Ellipse(xy=mean, width=width, height=height, angle=angle, **kwargs)


def plot_collision_risk(
    trajectory: TrajectorySample,
    predictions: Mapping[int, PredictedObject],
    vehicle_length: float,
    vehicle_width: float,
    ax: Optional[plt.Axes] = None,
    n_std: float = 2.0,
    cost_name: str = 'prob_collision'
) -> plt.Axes:
    """Draw ego footprints, predicted means and uncertainty ellipses.

    Args:
        trajectory: Evaluated or unevaluated ego trajectory
        predictions: Obstacle id to predicted object
        vehicle_length: Ego length [m]
        vehicle_width: Ego width [m]
        ax: Axes to draw on, a new figure is created if None
        n_std: Ellipse size in standard deviations
        cost_name: Cost entry shown in the title if present

    Returns:
        The axes drawn on
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(10, 6))

    sample = trajectory.cartesian_sample
    ax.plot(sample.x, sample.y, '-', color='tab:blue', label='Ego trajectory')
    for x, y, theta in zip(sample.x, sample.y, sample.theta):
        corners = footprint_corners(x, y, theta, vehicle_length, vehicle_width)
        ax.add_patch(Polygon(corners, closed=True, fill=False, edgecolor='tab:blue', alpha=0.3))

    for obstacle_id, prediction in predictions.items():
        positions = prediction.positions()
        if len(positions) == 0:
            continue
        line, = ax.plot(positions[:, 0], positions[:, 1], '.--', label=f'Obstacle {obstacle_id}')
        for pose in prediction.predicted_path:
            ax.add_patch(covariance_ellipse(
                pose.position, pose.covariance, n_std=n_std,
                fill=False, edgecolor=line.get_color(), alpha=0.4
            ))

    entry = trajectory.cost_by_name(cost_name)
    title = "Collision risk"
    if entry is not None:
        title += f" (cost={entry.cost:.3f})"
    ax.set_title(title)
    ax.set_xlabel('x [m]')
    ax.set_ylabel('y [m]')
    ax.set_aspect('equal', adjustable='datalim')
    ax.grid(True, alpha=0.3)
    ax.legend(loc='upper right')
    ax.autoscale_view()

    return ax


def save_risk_plot(
    trajectory: TrajectorySample,
    predictions: Mapping[int, PredictedObject],
    vehicle_length: float,
    vehicle_width: float,
    output_path: str,
    n_std: float = 2.0,
    cost_name: str = 'prob_collision'
) -> Path:
    """Render :func:`plot_collision_risk` to an image file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(10, 6))
    try:
        plot_collision_risk(trajectory, predictions, vehicle_length, vehicle_width, ax=ax,
                            n_std=n_std, cost_name=cost_name)
        fig.savefig(output_path, dpi=100)
    finally:
        plt.close(fig)

    logger.info(f"Risk plot saved to {output_path}")
    return output_path
