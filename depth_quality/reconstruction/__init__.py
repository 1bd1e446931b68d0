"""
3D Reconstruction Module

Deprojects depth frames to ROI point clouds and fits planes to them.
"""

from .point_cloud_generator import PointCloudGenerator
from .plane_fitter import PlaneFitter

__all__ = ['PointCloudGenerator', 'PlaneFitter']
