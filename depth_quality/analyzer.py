"""
Depth Quality Analyzer

Per-frame pipeline: ROI selection, deprojection, plane fit and metric publishing.
"""

import logging
import time
from typing import Any, Dict, Optional

import numpy as np

from .data_models import Calibration, FrameResult, RegionOfInterest
from .exceptions import DegenerateInputError
from .metrics.definitions import create_standard_metrics
from .metrics.metric import Metric
from .metrics.metrics_engine import MetricsEngine, OUTLIER_CROP_PERCENT
from .reconstruction.plane_fitter import PlaneFitter
from .reconstruction.point_cloud_generator import PointCloudGenerator
from .utils.config_manager import ConfigManager


class DepthQualityAnalyzer:
    """Runs the plane-fit quality metrics over a stream of depth frames."""

    def __init__(self,
                 config_manager: Optional[ConfigManager] = None,
                 metrics: Optional[Dict[str, Metric]] = None):
        """
        Initialize analyzer.

        Args:
            config_manager: Configuration manager instance
            metrics: Metric sinks; the six standard metrics are created when omitted
        """
        self.config = config_manager or ConfigManager()
        self.logger = logging.getLogger(__name__)

        metrics_config = self.config.get_metrics_params()
        history_size = metrics_config.get('history_size', 100)
        outlier_crop = float(metrics_config.get('outlier_crop_percent', OUTLIER_CROP_PERCENT))

        self.metrics = metrics if metrics is not None else create_standard_metrics(history_size)
        self.engine = MetricsEngine(self.metrics, outlier_crop_percent=outlier_crop)
        self.point_cloud_generator = PointCloudGenerator(self.config)
        self.plane_fitter = PlaneFitter(self.config)

        camera_config = self.config.get_camera_params()
        self.calibration = Calibration(
            baseline_mm=float(camera_config.get('baseline_mm', 50.0)),
            focal_length_pixels=self.point_cloud_generator.intrinsics.fx,
        )
        self.roi_fraction = float(self.config.get('roi.fraction', 0.4))

        self.processed_frames = 0
        self.skipped_frames = 0

        self.logger.info(f"Depth quality analyzer initialized: baseline={self.calibration.baseline_mm}mm, "
                         f"focal={self.calibration.focal_length_pixels:.1f}px, roi={self.roi_fraction:.0%}")

    def select_roi(self, depth_frame: np.ndarray) -> RegionOfInterest:
        """Centred ROI for the frame's dimensions."""
        height, width = depth_frame.shape[:2]
        return PointCloudGenerator.centered_roi(width, height, self.roi_fraction)

    def process_depth_frame(self,
                            depth_frame: np.ndarray,
                            roi: Optional[RegionOfInterest] = None,
                            source: Optional[str] = None) -> Optional[FrameResult]:
        """
        Analyse one depth frame and publish its metrics.

        Args:
            depth_frame: HxW raw depth frame
            roi: Region to analyse; centred ROI when omitted
            source: Label for logging, e.g. the frame's file name

        Returns:
            FrameResult, or None if the frame was skipped as degenerate
        """
        start_time = time.time()
        roi = roi or self.select_roi(depth_frame)
        label = source or f"frame {self.processed_frames + self.skipped_frames}"

        try:
            points = self.point_cloud_generator.deproject_roi(depth_frame, roi)
            plane = self.plane_fitter.fit(points)
            frame_metrics = self.engine.process_frame(
                points, plane, roi,
                self.calibration.baseline_mm,
                self.calibration.focal_length_pixels)
        except DegenerateInputError as e:
            self.skipped_frames += 1
            self.logger.warning(f"Skipping {label}: {e}")
            return None

        self.processed_frames += 1
        processing_time = time.time() - start_time

        self.logger.debug(f"Processed {label} in {processing_time * 1000:.1f}ms: "
                          f"{len(points)} points, distance={frame_metrics.distance:.3f}m")

        return FrameResult(
            roi=roi,
            plane=plane,
            point_count=len(points),
            metrics=frame_metrics,
            processing_time=processing_time,
            source=source,
        )

    def summary(self) -> Dict[str, Dict[str, Any]]:
        """
        Summarize every metric series.

        Returns:
            Mapping of metric name to latest/mean/min/max and the latest band
        """
        summary = {}
        for name, metric in self.metrics.items():
            values = np.asarray(metric.values)
            if len(values) == 0:
                summary[name] = {'samples': 0, 'units': metric.units}
                continue

            band = metric.classify(metric.latest)
            summary[name] = {
                'samples': len(values),
                'units': metric.units,
                'latest': metric.latest,
                'mean': float(np.mean(values)),
                'min': float(np.min(values)),
                'max': float(np.max(values)),
                'band': band.value if band else None,
            }
        return summary
