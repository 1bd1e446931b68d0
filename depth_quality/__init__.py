"""
Depth Quality Tool

Evaluates the quality of a depth camera stream by fitting a plane to a region
of interest of each frame's point cloud and deriving error metrics from the fit.

This package implements:
- Deprojection of depth frames to ROI point clouds
- Least-squares and RANSAC plane fitting
- Per-frame plane-fit metrics with robust outlier trimming: average error,
  standard deviation, subpixel RMS, distance, wall angle and fill rate
- Bounded metric time series with green/yellow/red severity bands
"""

__version__ = "1.0.0"
__author__ = "Depth Quality Team"

from .exceptions import DegenerateInputError
from .metrics import Metric, Band, ColorBands, MetricsEngine, compute_frame_metrics, create_standard_metrics
from .reconstruction import PointCloudGenerator, PlaneFitter
from .analyzer import DepthQualityAnalyzer
from .data_models import (
    Plane, RegionOfInterest, CameraIntrinsics, Calibration,
    FrameMetrics, FrameResult
)

__all__ = [
    'DegenerateInputError',
    # Metrics
    'Metric', 'Band', 'ColorBands', 'MetricsEngine', 'compute_frame_metrics', 'create_standard_metrics',
    # Reconstruction
    'PointCloudGenerator', 'PlaneFitter',
    # Pipeline
    'DepthQualityAnalyzer',
    # Data Models
    'Plane', 'RegionOfInterest', 'CameraIntrinsics', 'Calibration',
    'FrameMetrics', 'FrameResult'
]
