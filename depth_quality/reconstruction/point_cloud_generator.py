"""
Point Cloud Generator

Loads depth frames and deprojects the region of interest to a 3D point cloud.
"""

import cv2
import numpy as np
from pathlib import Path
from typing import Optional, Union
import logging

from ..data_models import CameraIntrinsics, RegionOfInterest
from ..utils.config_manager import ConfigManager


class PointCloudGenerator:
    """Converts depth frames to camera-space point clouds using pinhole intrinsics."""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        """
        Initialize point cloud generator.

        Args:
            config_manager: Configuration manager instance
        """
        self.config = config_manager or ConfigManager()
        self.logger = logging.getLogger(__name__)

        camera_config = self.config.get_camera_params()

        self.intrinsics = CameraIntrinsics(
            width=int(camera_config.get('width', 1280)),
            height=int(camera_config.get('height', 720)),
            fx=float(camera_config.get('fx', 640.0)),
            fy=float(camera_config.get('fy', 640.0)),
            ppx=float(camera_config.get('ppx', 640.0)),
            ppy=float(camera_config.get('ppy', 360.0)),
        )
        # Meters per raw depth unit
        self.depth_scale = float(camera_config.get('depth_scale', 0.001))

        self.logger.info(f"Point cloud generator initialized: {self.intrinsics.width}x{self.intrinsics.height}, "
                         f"fx={self.intrinsics.fx:.1f}, depth_scale={self.depth_scale}")

    @staticmethod
    def centered_roi(width: int, height: int, fraction: float) -> RegionOfInterest:
        """
        Region covering the centred fraction of each image dimension.

        Args:
            width: Frame width in pixels
            height: Frame height in pixels
            fraction: Share of each dimension inside the ROI, in (0, 1]

        Returns:
            RegionOfInterest
        """
        if not 0 < fraction <= 1:
            raise ValueError("ROI fraction must be in (0, 1]")

        roi_width = max(1, int(round(width * fraction)))
        roi_height = max(1, int(round(height * fraction)))
        min_x = (width - roi_width) // 2
        min_y = (height - roi_height) // 2

        return RegionOfInterest(min_x=min_x, min_y=min_y,
                                max_x=min_x + roi_width, max_y=min_y + roi_height)

    def deproject_roi(self, depth_frame: np.ndarray, roi: RegionOfInterest) -> np.ndarray:
        """
        Deproject the valid pixels of an ROI to 3D.

        Args:
            depth_frame: HxW raw depth frame (0 marks missing depth)
            roi: Pixel region, max bounds exclusive

        Returns:
            Nx3 array of points in meters
        """
        if depth_frame.ndim != 2:
            raise ValueError(f"Depth frame must be 2-dimensional, got shape {depth_frame.shape}")

        height, width = depth_frame.shape
        if roi.min_x < 0 or roi.min_y < 0 or roi.max_x > width or roi.max_y > height:
            raise ValueError(f"ROI {roi} exceeds frame bounds {width}x{height}")

        window = depth_frame[roi.min_y:roi.max_y, roi.min_x:roi.max_x].astype(np.float64)
        z = window * self.depth_scale

        v_coords, u_coords = np.mgrid[roi.min_y:roi.max_y, roi.min_x:roi.max_x]

        valid_mask = np.isfinite(z) & (z > 0)
        z_valid = z[valid_mask]

        x = (u_coords[valid_mask] - self.intrinsics.ppx) / self.intrinsics.fx * z_valid
        y = (v_coords[valid_mask] - self.intrinsics.ppy) / self.intrinsics.fy * z_valid

        points = np.column_stack([x, y, z_valid])

        self.logger.debug(f"Deprojected {len(points)}/{roi.area} ROI pixels")

        return points

    def load_depth_frame(self, path: Union[str, Path]) -> np.ndarray:
        """
        Load a raw depth frame from a .npy array or a 16-bit image.

        Args:
            path: Frame file path

        Returns:
            HxW depth array in raw depth units
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Depth frame not found: {path}")

        if path.suffix.lower() == '.npy':
            frame = np.load(path)
        else:
            frame = cv2.imread(str(path), cv2.IMREAD_ANYDEPTH)
            if frame is None:
                raise ValueError(f"Could not read depth image: {path}")

        if frame.ndim != 2:
            raise ValueError(f"Depth frame must be single channel, got shape {frame.shape}")

        return frame
