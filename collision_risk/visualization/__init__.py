"""Visualization of collision risk."""

from .risk_plot import plot_collision_risk, save_risk_plot, covariance_ellipse, footprint_corners

__all__ = ['plot_collision_risk', 'save_risk_plot', 'covariance_ellipse', 'footprint_corners']
