"""
Plane-Fit Metrics Module

Implements the per-frame quality metrics engine and the metric time series it publishes to.
"""

from .metric import Metric, Band, ColorBands
from .definitions import create_standard_metrics, METRIC_DEFINITIONS
from .metrics_engine import MetricsEngine, compute_frame_metrics, OUTLIER_CROP_PERCENT

__all__ = [
    'Metric', 'Band', 'ColorBands',
    'create_standard_metrics', 'METRIC_DEFINITIONS',
    'MetricsEngine', 'compute_frame_metrics', 'OUTLIER_CROP_PERCENT'
]
