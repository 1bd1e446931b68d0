"""
Plane Fitter

Fits a unit-normal plane to an ROI point cloud, either by total least squares
or robustly with RANSAC.
"""

import numpy as np
from typing import Optional
import logging

from sklearn.linear_model import RANSACRegressor

from ..data_models import Plane
from ..exceptions import DegenerateInputError
from ..utils.config_manager import ConfigManager


class PlaneFitter:
    """Fits planes a*x + b*y + c*z + d = 0 oriented so that d <= 0."""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        """
        Initialize plane fitter.

        Args:
            config_manager: Configuration manager instance
        """
        self.config = config_manager or ConfigManager()
        self.logger = logging.getLogger(__name__)

        fit_config = self.config.get_plane_fit_params()

        self.method = fit_config.get('method', 'lstsq')
        self.min_points = int(fit_config.get('min_points', 3))

        # RANSAC parameters
        self.residual_threshold = float(fit_config.get('residual_threshold', 0.01))  # meters
        self.max_trials = int(fit_config.get('max_trials', 1000))
        self.random_state = fit_config.get('random_state')

        self.last_inlier_ratio = None

        self.logger.info(f"Plane fitter initialized: method={self.method}, min_points={self.min_points}")

    def fit(self, points: np.ndarray) -> Plane:
        """
        Fit a plane to the point cloud with the configured method.

        Args:
            points: Nx3 array of points in meters

        Returns:
            Plane with unit normal and non-positive d

        Raises:
            DegenerateInputError: Too few points or no unique plane
        """
        points = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        if len(points) < self.min_points:
            raise DegenerateInputError(
                f"Need at least {self.min_points} points to fit a plane, got {len(points)}")

        if self.method == 'ransac':
            plane = self.fit_ransac(points)
        else:
            plane = self.fit_least_squares(points)

        self.logger.debug(f"Fitted plane: {plane.a:.4f}x + {plane.b:.4f}y + {plane.c:.4f}z + {plane.d:.4f} = 0")

        return plane

    def fit_least_squares(self, points: np.ndarray) -> Plane:
        """
        Total least squares fit through the centroid.

        The normal is the direction of least variance of the centred points.
        """
        centroid = points.mean(axis=0)
        _, singular_values, vh = np.linalg.svd(points - centroid, full_matrices=False)

        # A unique plane needs two independent in-plane directions
        if len(singular_values) < 2 or singular_values[1] <= 1e-12 * max(singular_values[0], 1.0):
            raise DegenerateInputError("Points are collinear or coincident; plane is undefined")

        normal = vh[-1]
        d = -float(np.dot(normal, centroid))

        self.last_inlier_ratio = 1.0
        return self._oriented_plane(normal, d)

    def fit_ransac(self, points: np.ndarray) -> Plane:
        """
        Robust fit of z = a*x + b*y + c, refined by least squares on the inliers.

        Planes parallel to the viewing axis cannot be expressed this way.
        """
        ransac = RANSACRegressor(residual_threshold=self.residual_threshold,
                                 max_trials=self.max_trials,
                                 random_state=self.random_state)
        try:
            ransac.fit(points[:, :2], points[:, 2])
        except ValueError as e:
            raise DegenerateInputError(f"RANSAC found no consensus plane: {e}")

        inlier_mask = ransac.inlier_mask_
        inliers = points[inlier_mask]
        if len(inliers) < self.min_points:
            raise DegenerateInputError(f"RANSAC kept only {len(inliers)} inliers")

        plane = self.fit_least_squares(inliers)
        self.last_inlier_ratio = float(np.count_nonzero(inlier_mask)) / len(points)

        self.logger.debug(f"RANSAC inlier ratio: {self.last_inlier_ratio:.3f}")

        return plane

    @staticmethod
    def _oriented_plane(normal: np.ndarray, d: float) -> Plane:
        """Normalize and orient so the camera origin lies on the negative side."""
        length = np.linalg.norm(normal)
        normal = normal / length
        d = d / length

        if d > 0 or (d == 0 and normal[2] < 0):
            normal = -normal
            d = -d

        return Plane(a=float(normal[0]), b=float(normal[1]), c=float(normal[2]), d=float(d))
