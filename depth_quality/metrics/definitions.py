"""
Standard Metric Definitions

The six plane-fit quality metrics, with their display ranges and severity bands.
"""

from dataclasses import dataclass, replace
from typing import Dict, List, Optional

from .metric import Metric, ColorBands


AVERAGE_ERROR = "Average Error"
STD_ERROR = "STD (Error)"
SUBPIXEL_RMS = "Subpixel RMS"
FILL_RATE = "Fill-Rate"
DISTANCE = "Distance"
ANGLE = "Angle"

# Order in which the engine publishes samples
PUBLISH_ORDER = (AVERAGE_ERROR, STD_ERROR, SUBPIXEL_RMS, DISTANCE, ANGLE, FILL_RATE)


@dataclass(frozen=True)
class MetricDefinition:
    name: str
    min_value: float
    max_value: float
    units: str
    description: str
    bands: ColorBands


METRIC_DEFINITIONS: List[MetricDefinition] = [
    MetricDefinition(
        AVERAGE_ERROR, 0, 10, "(mm)",
        "Average Distance from Plane Fit\n"
        "This metric approximates a plane within\n"
        "the ROI and calculates the average\n"
        "distance of points in the ROI\n"
        "from that plane, in mm",
        ColorBands(green_low=0, green_high=1,
                   yellow_low=1, yellow_high=7,
                   red_low=7, red_high=1000)),
    MetricDefinition(
        STD_ERROR, 0, 10, "(mm)",
        "Standard Deviation from Plane Fit\n"
        "This metric approximates a plane within\n"
        "the ROI and calculates the\n"
        "standard deviation of distances\n"
        "of points in the ROI from that plane",
        ColorBands(green_low=0, green_high=1,
                   yellow_low=1, yellow_high=7,
                   red_low=7, red_high=1000)),
    MetricDefinition(
        SUBPIXEL_RMS, 0.0, 1.0, "(mm)",
        "Normalized RMS from the Plane Fit.\n"
        "This metric provides the subpixel accuracy\n"
        "and is calculated as follows:\n"
        "Zi - depth of i-th pixel (mm)\n"
        "Zpi - depth Zi's projection onto plane fit (mm)\n"
        "BL - optical baseline (mm)\n"
        "FL - focal length, as a multiple of pixel width\n"
        "Di = BL*FL/Zi; Dpi = BL*FL/Zpi\n"
        "RMS = SQRT(SUM((Di-Dpi)^2)/n)",
        ColorBands(green_low=0, green_high=0.1,
                   yellow_low=0.1, yellow_high=0.5,
                   red_low=0.5, red_high=1.0)),
    MetricDefinition(
        FILL_RATE, 0, 100, "%",
        "Fill Rate\n"
        "Percentage of pixels with valid depth values\n"
        "out of all pixels within the ROI",
        ColorBands(green_low=90, green_high=100,
                   yellow_low=50, yellow_high=90,
                   red_low=0, red_high=50)),
    MetricDefinition(
        DISTANCE, 0, 5, "(m)",
        "Approximate Distance\n"
        "When facing a flat wall at right angle\n"
        "this metric estimates the distance\n"
        "in meters to that wall",
        ColorBands(green_low=0, green_high=2,
                   yellow_low=2, yellow_high=3,
                   red_low=3, red_high=7)),
    MetricDefinition(
        ANGLE, 0, 180, "(deg)",
        "Wall Angle\n"
        "When facing a flat wall this metric\n"
        "estimates the angle to the wall.",
        ColorBands(green_low=-5, green_high=5,
                   yellow_low=-10, yellow_high=10,
                   red_low=-100, red_high=100)),
]


def create_standard_metrics(history_size: Optional[int] = None) -> Dict[str, Metric]:
    """
    Create the six standard metrics, keyed by display name.

    Args:
        history_size: Samples kept per metric; None keeps every sample

    Returns:
        Dictionary of fresh Metric instances in definition order
    """
    metrics = {}
    for definition in METRIC_DEFINITIONS:
        bands = replace(definition.bands)
        metrics[definition.name] = Metric(
            definition.name,
            definition.min_value,
            definition.max_value,
            definition.units,
            definition.description,
            bands=bands,
            history_size=history_size,
        )
    return metrics
