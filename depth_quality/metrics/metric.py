"""
Metric Time Series

Display configuration and bounded sample history for a single quality metric.
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np


class Band(Enum):
    """Severity bands used when rendering a metric."""
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


@dataclass
class ColorBands:
    """
    Inclusive-exclusive value intervals for each severity band.

    Bands may overlap or leave gaps; nothing here affects computation.
    """
    green_low: float = 0.0
    green_high: float = 0.0
    yellow_low: float = 0.0
    yellow_high: float = 0.0
    red_low: float = 0.0
    red_high: float = 0.0

    def range_for(self, band: Band) -> Tuple[float, float]:
        prefix = band.value
        return getattr(self, f"{prefix}_low"), getattr(self, f"{prefix}_high")


class Metric:
    """A named quality metric with display metadata and a sample series."""

    def __init__(self,
                 name: str,
                 min_value: float,
                 max_value: float,
                 units: str,
                 description: str,
                 bands: Optional[ColorBands] = None,
                 history_size: Optional[int] = None):
        """
        Initialize metric.

        Args:
            name: Display name
            min_value: Lower bound of the display range (expected < max_value)
            max_value: Upper bound of the display range
            units: Unit label, e.g. "(mm)"
            description: Free-text explanation shown to the user
            bands: Severity band configuration
            history_size: Number of samples kept; None keeps all of them
        """
        self.name = name
        self.min_value = min_value
        self.max_value = max_value
        self.units = units
        self.description = description
        self.bands = bands or ColorBands()
        self.history_size = history_size
        self._values = deque(maxlen=history_size)

    def set(self, band: Band, low: float, high: float) -> None:
        """Configure the [low, high) interval of a severity band."""
        setattr(self.bands, f"{band.value}_low", low)
        setattr(self.bands, f"{band.value}_high", high)

    def add_value(self, value: float) -> None:
        """Append a sample, stored in single precision."""
        self._values.append(float(np.float32(value)))

    @property
    def values(self) -> Tuple[float, ...]:
        """Samples in the order they were added (oldest first)."""
        return tuple(self._values)

    @property
    def latest(self) -> Optional[float]:
        return self._values[-1] if self._values else None

    def classify(self, value: float) -> Optional[Band]:
        """Return the first band (green, yellow, red) whose interval holds value."""
        for band in Band:
            low, high = self.bands.range_for(band)
            if low <= value < high:
                return band
        return None

    def clear(self) -> None:
        self._values.clear()

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Metric(name={self.name!r}, units={self.units!r}, samples={len(self._values)})"
