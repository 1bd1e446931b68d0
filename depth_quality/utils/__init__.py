"""
Utility Functions and Helpers

Common utilities for the depth quality tool.
"""

from .config_manager import ConfigManager
from .visualization import MetricPlotter

__all__ = ['ConfigManager', 'MetricPlotter']
