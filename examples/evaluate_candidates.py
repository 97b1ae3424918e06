#!/usr/bin/env python3
"""Example script ranking candidate trajectories by collision probability.

A fan of constant-curvature candidates is evaluated against constant
velocity obstacle predictions with growing uncertainty.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np
from loguru import logger
from collision_risk.config import load_config, create_collision_strategy
from collision_risk.core import TrajectorySample
from collision_risk.cost import evaluate_trajectories
from collision_risk.prediction import constant_velocity_predictions
from collision_risk.visualization import save_risk_plot


def generate_candidates(speed: float, dt: float, n_steps: int, curvatures) -> list:
    """Constant speed, constant curvature rollouts from the origin."""
    candidates = []
    for kappa in curvatures:
        x, y, theta = [0.0], [0.0], [0.0]
        for _ in range(n_steps - 1):
            theta.append(theta[-1] + speed * kappa * dt)
            x.append(x[-1] + speed * np.cos(theta[-1]) * dt)
            y.append(y[-1] + speed * np.sin(theta[-1]) * dt)
        candidates.append(TrajectorySample.from_arrays(x, y, theta))
    return candidates


def main():
    """Main function."""
    parser = argparse.ArgumentParser(
        description='Rank candidate trajectories by collision probability'
    )
    parser.add_argument(
        '--config',
        type=str,
        default='scenarios/collision_cost.yaml',
        help='Path to cost configuration file'
    )
    parser.add_argument(
        '--steps',
        type=int,
        default=40,
        help='Number of trajectory steps'
    )
    parser.add_argument(
        '--speed',
        type=float,
        default=8.0,
        help='Ego speed [m/s]'
    )
    parser.add_argument(
        '--plot',
        type=str,
        default=None,
        help='Save a risk plot of the best candidate to this path'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level'
    )

    args = parser.parse_args()

    # Configure logging
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=args.log_level
    )

    logger.info(f"Loading configuration from {args.config}")
    config = load_config(args.config)

    # Two crossing obstacles
    predictions = constant_velocity_predictions(
        positions=np.array([[20.0, -6.0], [35.0, 4.0]]),
        velocities=np.array([[0.0, 1.5], [-1.0, -1.0]]),
        n_steps=args.steps,
        config=config.prediction_config(),
    )
    strategy = create_collision_strategy(config, predictions)

    candidates = generate_candidates(
        args.speed, config.dt, args.steps, np.linspace(-0.05, 0.05, 11)
    )
    evaluate_trajectories(candidates, [strategy])

    ranked = sorted(candidates, key=lambda t: t.cost)

    logger.info("=" * 60)
    logger.info("CANDIDATE RANKING")
    logger.info("=" * 60)
    for rank, trajectory in enumerate(ranked):
        entry = trajectory.cost_by_name(config.name)
        logger.info(
            f"#{rank:2d}: end=({trajectory.cartesian_sample.x[-1]:6.2f}, "
            f"{trajectory.cartesian_sample.y[-1]:6.2f}) "
            f"cost={entry.cost:.4f} weighted={entry.weighted_cost:.4f}"
        )

    if args.plot is not None:
        save_risk_plot(
            ranked[0], predictions, config.vehicle_length, config.vehicle_width,
            args.plot, cost_name=config.name
        )

    logger.success("Evaluation complete!")


if __name__ == '__main__':
    main()
