"""
Plane-Fit Metrics Engine

Computes per-frame depth quality metrics from an ROI point cloud and the plane
fitted to it, and publishes them to the metric time series.
"""

import logging
from typing import Dict, Optional

import numpy as np

from ..data_models import FrameMetrics, Plane, RegionOfInterest
from ..exceptions import DegenerateInputError
from .definitions import (
    AVERAGE_ERROR, STD_ERROR, SUBPIXEL_RMS, DISTANCE, ANGLE, FILL_RATE,
    PUBLISH_ORDER, create_standard_metrics
)
from .metric import Metric


# Percentage of points trimmed from each end of the sorted distances (5% in total)
OUTLIER_CROP_PERCENT = 2.5

METERS_TO_MM = 1000.0


def _as_point_array(points) -> np.ndarray:
    """Convert a point sequence to an (n, 3) float64 array."""
    array = np.asarray(points, dtype=np.float64)
    if array.size == 0:
        return array.reshape(0, 3)
    if array.ndim != 2 or array.shape[1] != 3:
        raise ValueError(f"Points must have shape (n, 3), got {array.shape}")
    if not np.isfinite(array).all():
        raise DegenerateInputError("Point cloud contains non-finite coordinates")
    return array


def _distance_and_disparity(points: np.ndarray,
                            plane: Plane,
                            baseline_mm: float,
                            focal_length_pixels: float):
    """
    Per-point absolute distance to the plane (mm) and disparity error.

    The disparity error is the difference between the disparity implied by the
    measured point and by its orthogonal projection onto the plane.
    """
    normal = plane.normal
    signed_distance = points @ normal + plane.d
    projected = points - signed_distance[:, np.newaxis] * normal

    point_lengths = np.linalg.norm(points, axis=1)
    projected_lengths = np.linalg.norm(projected, axis=1)
    if np.any(point_lengths == 0) or np.any(projected_lengths == 0):
        raise DegenerateInputError("Point or its plane projection lies at the camera origin")

    # also converts point units from meters to mm
    bf_factor = baseline_mm * focal_length_pixels * 0.001

    distances = np.abs(signed_distance) * METERS_TO_MM
    disparities = bf_factor / point_lengths - bf_factor / projected_lengths
    return distances, disparities


def outlier_count(point_count: int, outlier_crop_percent: float = OUTLIER_CROP_PERCENT) -> int:
    """Number of samples discarded from each end of the sorted distances."""
    return int((point_count * outlier_crop_percent) // 100)


def compute_frame_metrics(points,
                          plane: Plane,
                          roi: RegionOfInterest,
                          baseline_mm: float,
                          focal_length_pixels: float,
                          outlier_crop_percent: float = OUTLIER_CROP_PERCENT) -> FrameMetrics:
    """
    Compute the six plane-fit quality metrics of one frame.

    Args:
        points: (n, 3) ROI point cloud in meters
        plane: Fitted plane with unit normal
        roi: Pixel region the points were taken from
        baseline_mm: Stereo baseline in millimetres
        focal_length_pixels: Focal length in pixels
        outlier_crop_percent: Share of points trimmed from each end

    Returns:
        FrameMetrics for the frame

    Raises:
        DegenerateInputError: If no points survive trimming, a point lies at the
            origin, or the ROI has no area
    """
    points = _as_point_array(points)
    point_count = len(points)

    n_outliers = outlier_count(point_count, outlier_crop_percent)
    retained_count = point_count - 2 * n_outliers
    if retained_count <= 0:
        raise DegenerateInputError(
            f"No points left after trimming {n_outliers} outliers from each end of {point_count}")

    if roi.area <= 0:
        raise DegenerateInputError(f"ROI has no area: {roi}")

    distances, disparities = _distance_and_disparity(
        points, plane, baseline_mm, focal_length_pixels)

    # Sort by distance (ties by disparity) and drop the extremes on both ends
    order = np.lexsort((disparities, distances))
    retained = order[n_outliers:point_count - n_outliers]
    retained_distances = distances[retained]
    retained_disparities = disparities[retained]

    average_error = retained_distances.sum() / retained_count
    std_error = np.sqrt(np.sum((retained_distances - average_error) ** 2) / retained_count)
    subpixel_rms = np.sqrt(np.sum(retained_disparities ** 2) / retained_count)

    # Distance of the origin (the camera) from the plane is encoded in D
    distance = -plane.d
    angle = np.degrees(np.arccos(min(abs(plane.c), 1.0)))

    fill_rate = point_count / float(roi.area) * 100

    return FrameMetrics(
        average_error=float(average_error),
        std_error=float(std_error),
        subpixel_rms=float(subpixel_rms),
        distance=float(distance),
        angle=float(angle),
        fill_rate=float(fill_rate),
        point_count=point_count,
        retained_count=retained_count,
    )


class MetricsEngine:
    """Publishes per-frame plane-fit metrics to a fixed set of Metric series."""

    def __init__(self,
                 metrics: Optional[Dict[str, Metric]] = None,
                 outlier_crop_percent: float = OUTLIER_CROP_PERCENT):
        """
        Initialize metrics engine.

        Args:
            metrics: Metric sinks keyed by display name; the six standard
                metrics are created when omitted
            outlier_crop_percent: Share of points trimmed from each end
        """
        self.logger = logging.getLogger(__name__)
        self.metrics = metrics if metrics is not None else create_standard_metrics()
        self.outlier_crop_percent = outlier_crop_percent

        missing = [name for name in PUBLISH_ORDER if name not in self.metrics]
        if missing:
            raise ValueError(f"Missing metric sinks: {missing}")

        self.logger.info(f"Metrics engine initialized: outlier crop={self.outlier_crop_percent}%")

    def process_frame(self,
                      points,
                      plane: Plane,
                      roi: RegionOfInterest,
                      baseline_mm: float,
                      focal_length_pixels: float) -> FrameMetrics:
        """
        Compute the frame's metrics and append one sample to each series.

        Nothing is appended when the frame is degenerate.

        Raises:
            DegenerateInputError: See compute_frame_metrics
        """
        result = compute_frame_metrics(points, plane, roi, baseline_mm, focal_length_pixels,
                                       outlier_crop_percent=self.outlier_crop_percent)

        samples = {
            AVERAGE_ERROR: result.average_error,
            STD_ERROR: result.std_error,
            SUBPIXEL_RMS: result.subpixel_rms,
            DISTANCE: result.distance,
            ANGLE: result.angle,
            FILL_RATE: result.fill_rate,
        }
        for name in PUBLISH_ORDER:
            self.metrics[name].add_value(samples[name])

        self.logger.debug(f"Frame metrics: avg={result.average_error:.3f}mm, "
                          f"std={result.std_error:.3f}mm, rms={result.subpixel_rms:.4f}, "
                          f"fill={result.fill_rate:.1f}% "
                          f"({result.retained_count}/{result.point_count} points retained)")

        return result
