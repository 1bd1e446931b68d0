"""
Data Models for Depth Quality Analysis

Defines all data structures used throughout the system.
"""

from dataclasses import dataclass
from typing import Tuple, Optional
import numpy as np


@dataclass(frozen=True)
class Plane:
    """Implicit plane a*x + b*y + c*z + d = 0 with (a, b, c) of unit length."""
    a: float
    b: float
    c: float
    d: float

    @property
    def normal(self) -> np.ndarray:
        return np.array([self.a, self.b, self.c], dtype=np.float64)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.a, self.b, self.c, self.d)


@dataclass(frozen=True)
class RegionOfInterest:
    """
    Axis-aligned pixel rectangle with fields ordered (min_x, min_y, max_x, max_y).

    Max bounds are exclusive, so width is max_x - min_x. min < max on both
    axes is assumed.
    """
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y

    @property
    def area(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class CameraIntrinsics:
    """Pinhole intrinsics of the depth stream."""
    width: int
    height: int
    fx: float  # focal length in pixels
    fy: float
    ppx: float  # principal point
    ppy: float


@dataclass(frozen=True)
class Calibration:
    """Stereo scalars used to express errors as disparity."""
    baseline_mm: float
    focal_length_pixels: float


@dataclass
class FrameMetrics:
    """The six quality measurements of one frame."""
    average_error: float  # mm
    std_error: float  # mm
    subpixel_rms: float
    distance: float  # m
    angle: float  # degrees
    fill_rate: float  # percent
    point_count: int
    retained_count: int


@dataclass
class FrameResult:
    """Everything produced while analysing one depth frame."""
    roi: RegionOfInterest
    plane: Plane
    point_count: int
    metrics: FrameMetrics
    processing_time: float
    source: Optional[str] = None
