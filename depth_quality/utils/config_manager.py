"""
Configuration Management System

Handles loading, validation, and management of depth quality parameters.
"""

import copy

import yaml
from typing import Dict, Any, Optional
from pathlib import Path


PLANE_FIT_METHODS = ('lstsq', 'ransac')
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigManager:
    """Manages configuration parameters for the depth quality tool."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to configuration file. If None, uses default config.
        """
        self.config_path = config_path or self._get_default_config_path()
        self.config = self._load_config()
        self._validate_config()

    def _get_default_config_path(self) -> str:
        """Get path to default configuration file."""
        current_dir = Path(__file__).parent.parent.parent
        return str(current_dir / "config" / "default_config.yaml")

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        try:
            with open(self.config_path, 'r') as file:
                config = yaml.safe_load(file)
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Error parsing configuration file: {e}")

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ValueError(f"Configuration root must be a mapping: {self.config_path}")
        return config

    def _validate_config(self) -> None:
        """Validate configuration parameters for consistency and feasibility."""
        # Validate camera geometry
        camera = self.config.get('camera', {})
        for key in ('fx', 'fy', 'baseline_mm', 'depth_scale'):
            if key in camera and float(camera[key]) <= 0:
                raise ValueError(f"camera.{key} must be positive")

        # Validate ROI
        roi = self.config.get('roi', {})
        fraction = float(roi.get('fraction', 0.4))
        if not 0 < fraction <= 1:
            raise ValueError("roi.fraction must be in (0, 1]")

        # Validate plane fitting
        plane_fit = self.config.get('plane_fit', {})
        method = plane_fit.get('method', 'lstsq')
        if method not in PLANE_FIT_METHODS:
            raise ValueError(f"plane_fit.method must be one of {PLANE_FIT_METHODS}, got {method!r}")
        if int(plane_fit.get('min_points', 3)) < 3:
            raise ValueError("plane_fit.min_points must be at least 3")

        # Validate metrics
        metrics = self.config.get('metrics', {})
        crop = float(metrics.get('outlier_crop_percent', 2.5))
        if not 0 <= crop < 50:
            raise ValueError("metrics.outlier_crop_percent must be in [0, 50)")
        history_size = metrics.get('history_size', 100)
        if history_size is not None and int(history_size) <= 0:
            raise ValueError("metrics.history_size must be positive")

        # Validate logging
        level = self.config.get('logging', {}).get('level', 'INFO')
        if str(level).upper() not in LOG_LEVELS:
            raise ValueError(f"logging.level must be one of {LOG_LEVELS}, got {level!r}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Configuration key (e.g., 'camera.fx')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value using dot notation.

        Args:
            key: Configuration key (e.g., 'roi.fraction')
            value: Value to set
        """
        previous = copy.deepcopy(self.config)
        keys = key.split('.')
        config_ref = self.config

        for k in keys[:-1]:
            if k not in config_ref:
                config_ref[k] = {}
            config_ref = config_ref[k]

        config_ref[keys[-1]] = value
        try:
            self._validate_config()
        except ValueError:
            self.config = previous
            raise

    def save(self, output_path: Optional[str] = None) -> None:
        """
        Save current configuration to file.

        Args:
            output_path: Path to save configuration. If None, overwrites current file.
        """
        save_path = output_path or self.config_path

        with open(save_path, 'w') as file:
            yaml.dump(self.config, file, default_flow_style=False, indent=2)

    def update_camera_parameters(self, baseline_mm: float, focal_length: float) -> None:
        """
        Update stereo calibration scalars.

        Args:
            baseline_mm: Camera baseline in millimetres
            focal_length: Focal length in pixels, applied to both axes
        """
        self.set('camera.baseline_mm', baseline_mm)
        self.set('camera.fx', focal_length)
        self.set('camera.fy', focal_length)

    def get_camera_params(self) -> Dict[str, Any]:
        """Get camera intrinsics and calibration as a dictionary."""
        return self.config.get('camera', {})

    def get_roi_params(self) -> Dict[str, Any]:
        """Get region of interest parameters as a dictionary."""
        return self.config.get('roi', {})

    def get_plane_fit_params(self) -> Dict[str, Any]:
        """Get plane fitting parameters as a dictionary."""
        return self.config.get('plane_fit', {})

    def get_metrics_params(self) -> Dict[str, Any]:
        """Get metrics engine parameters as a dictionary."""
        return self.config.get('metrics', {})

    def get_logging_params(self) -> Dict[str, Any]:
        """Get logging parameters as a dictionary."""
        return self.config.get('logging', {})
