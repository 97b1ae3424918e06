"""Bivariate normal probability mass over rectangular regions."""

import numpy as np
from scipy.stats import multivariate_normal, norm

from .geometry import AlignedBox2D

# Variances below this are treated as a point mass along that axis
MIN_VARIANCE = 1e-12
CORRELATION_EPS = 1e-12

# Error tolerances of the Genz bivariate CDF
CDF_ABSEPS = 1e-6
CDF_RELEPS = 1e-6
CDF_SEED = 0


def _axis_mass(lo: float, hi: float, mean: float, var: float) -> float:
    """Signed 1D mass between ``lo`` and ``hi``."""
    if var <= MIN_VARIANCE:
        inside = min(lo, hi) <= mean <= max(lo, hi)
        return float(np.sign(hi - lo)) if inside else 0.0
    std = np.sqrt(var)
    return float(norm.cdf(hi, loc=mean, scale=std) - norm.cdf(lo, loc=mean, scale=std))


def bvn_prob(box: AlignedBox2D, mean: np.ndarray, covariance: np.ndarray) -> float:
    """Probability mass of N(mean, covariance) inside ``box``.

    Uncorrelated distributions factorize into two 1D masses. Correlated
    ones use the Genz bivariate CDF with ``lower_limit``, which swaps
    reversed limits and flips the sign. The result is therefore signed: a
    box whose ``min_corner`` exceeds its ``max_corner`` along one axis
    returns the negated mass, and round-off can leave small negative
    values near zero.

    Args:
        box: Integration region
        mean: Distribution mean [2]
        covariance: Distribution covariance [2, 2]

    Returns:
        Signed probability mass, NaN for non-finite input
    """
    mean = np.asarray(mean, dtype=float).reshape(2)
    covariance = np.asarray(covariance, dtype=float).reshape(2, 2)

    if not (np.all(np.isfinite(covariance)) and np.all(np.isfinite(mean))
            and np.all(np.isfinite(box.min_corner)) and np.all(np.isfinite(box.max_corner))):
        return float('nan')

    lo = box.min_corner
    hi = box.max_corner
    var_x, var_y = covariance[0, 0], covariance[1, 1]
    cov_xy = 0.5 * (covariance[0, 1] + covariance[1, 0])

    # A degenerate axis collapses the density onto a line or a point
    uncorrelated = cov_xy ** 2 <= CORRELATION_EPS * abs(var_x * var_y)
    if var_x <= MIN_VARIANCE or var_y <= MIN_VARIANCE or uncorrelated:
        return (_axis_mass(lo[0], hi[0], mean[0], var_x)
                * _axis_mass(lo[1], hi[1], mean[1], var_y))

    symmetric = np.array([[var_x, cov_xy], [cov_xy, var_y]])
    # Fixed seed keeps repeated evaluations of the same box identical
    dist = multivariate_normal(
        mean=mean,
        cov=symmetric,
        allow_singular=True,
        seed=CDF_SEED,
        abseps=CDF_ABSEPS,
        releps=CDF_RELEPS,
    )
    return float(dist.cdf(hi, lower_limit=lo))
