import time
import numpy as np
from collision_risk.core.data_structures import TrajectorySample
from collision_risk.cost import CalculateCollisionProbabilityFast
from collision_risk.prediction import constant_velocity_predictions


def benchmark_collision():
    # Setup: 5 seconds at 0.1s dt = 50 points
    n_steps = 50
    xs = np.linspace(0, 50, n_steps)
    trajectory = TrajectorySample.from_arrays(xs, np.zeros(n_steps), np.zeros(n_steps))

    # Many obstacles, most of them far from the ego trajectory
    n_obstacles = 50
    rng = np.random.default_rng(0)
    predictions = constant_velocity_predictions(
        positions=rng.random((n_obstacles, 2)) * 50 - np.array([0.0, 25.0]),
        velocities=rng.normal(scale=1.0, size=(n_obstacles, 2)),
        n_steps=n_steps,
    )

    culled = CalculateCollisionProbabilityFast("prob_collision", 1.0, predictions, 4.5, 2.0)
    exact = CalculateCollisionProbabilityFast(
        "prob_collision", 1.0, predictions, 4.5, 2.0, cull_threshold=float("inf")
    )

    n_iter = 20
    timings = {}
    for label, strategy in [("culled", culled), ("exact", exact)]:
        start_time = time.time()
        for _ in range(n_iter):
            sample = TrajectorySample(trajectory.cartesian_sample)
            strategy.evaluate(sample)
        end_time = time.time()
        timings[label] = (end_time - start_time) / n_iter * 1000  # ms
        print(f"Average {label} evaluation time: {timings[label]:.4f} ms per call")

    print(f"Load: {n_steps} trajectory points, {n_obstacles} obstacles (x{n_steps} steps)")

    # Culled mass grows with the prediction uncertainty at the horizon end
    a = TrajectorySample(trajectory.cartesian_sample)
    b = TrajectorySample(trajectory.cartesian_sample)
    culled.evaluate(a)
    exact.evaluate(b)
    print(f"Culling error: {abs(a.cost_list[0].cost - b.cost_list[0].cost):.2e}")


if __name__ == "__main__":
    benchmark_collision()
