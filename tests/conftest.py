"""
Pytest configuration and fixtures for depth quality tests.
"""

import matplotlib
matplotlib.use("Agg")

import pytest
import numpy as np

from depth_quality.data_models import Plane, RegionOfInterest
from depth_quality.utils.config_manager import ConfigManager


def pytest_configure(config):
    config.addinivalue_line("markers", "property: property-based tests")


def make_plane_points(plane: Plane, n_side: int = 30, extent: float = 0.5) -> np.ndarray:
    """Grid of n_side x n_side points lying exactly on the plane."""
    normal = plane.normal
    # Any vector not parallel to the normal spans the in-plane axes
    helper = np.array([1.0, 0.0, 0.0]) if abs(normal[0]) < 0.9 else np.array([0.0, 1.0, 0.0])
    u_axis = np.cross(normal, helper)
    u_axis /= np.linalg.norm(u_axis)
    v_axis = np.cross(normal, u_axis)

    centre = -plane.d * normal
    coords = np.linspace(-extent, extent, n_side)
    u, v = np.meshgrid(coords, coords)
    return centre + u.reshape(-1, 1) * u_axis + v.reshape(-1, 1) * v_axis


def render_plane_depth(normal, d, width=1280, height=720,
                       fx=640.0, fy=640.0, ppx=640.0, ppy=360.0,
                       depth_scale=0.001) -> np.ndarray:
    """Raw 16-bit depth frame of a plane seen through a pinhole camera."""
    normal = np.asarray(normal, dtype=np.float64)
    v_coords, u_coords = np.mgrid[0:height, 0:width]
    ray_x = (u_coords - ppx) / fx
    ray_y = (v_coords - ppy) / fy
    z = -d / (normal[0] * ray_x + normal[1] * ray_y + normal[2])
    return np.round(z / depth_scale).astype(np.uint16)


@pytest.fixture
def config_manager():
    """Fixture providing a configuration manager instance."""
    return ConfigManager()


@pytest.fixture
def wall_plane():
    """Fronto-parallel wall two meters in front of the camera."""
    return Plane(0.0, 0.0, 1.0, -2.0)


@pytest.fixture
def tilted_plane():
    """Wall two meters away, rotated 30 degrees about the vertical axis."""
    angle = np.radians(30.0)
    return Plane(float(np.sin(angle)), 0.0, float(np.cos(angle)), -2.0)


@pytest.fixture
def square_roi():
    """30x30 pixel region of interest."""
    return RegionOfInterest(min_x=0, min_y=0, max_x=30, max_y=30)


@pytest.fixture
def flat_depth_frame():
    """Depth frame of a wall at 1.5 m facing the camera."""
    return np.full((720, 1280), 1500, dtype=np.uint16)
