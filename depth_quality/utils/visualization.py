"""
Metric Visualization

Renders metric time series with their severity bands using matplotlib.
"""

import logging
import math
from pathlib import Path
from typing import Iterable, Optional, Union

import matplotlib.pyplot as plt
import numpy as np

from ..metrics.metric import Metric, Band


BAND_COLORS = {
    Band.GREEN: '#2ca02c',
    Band.YELLOW: '#ffbf00',
    Band.RED: '#d62728',
}


class MetricPlotter:
    """Static plots of metric series for reports."""

    def __init__(self, columns: int = 3, band_alpha: float = 0.15):
        self.columns = columns
        self.band_alpha = band_alpha
        self.logger = logging.getLogger(__name__)

    def plot_metric(self, metric: Metric, ax) -> None:
        """
        Draw one metric's series on its display range.

        Args:
            metric: Metric to draw
            ax: Matplotlib axes
        """
        # Red first so the narrower bands stay visible on top
        for band in (Band.RED, Band.YELLOW, Band.GREEN):
            low, high = metric.bands.range_for(band)
            if high > low:
                ax.axhspan(low, high, color=BAND_COLORS[band], alpha=self.band_alpha, linewidth=0)

        values = np.asarray(metric.values)
        if len(values):
            ax.plot(np.arange(len(values)), values, color='black', linewidth=1.2)
            latest = metric.latest
            band = metric.classify(latest)
            color = BAND_COLORS[band] if band else 'gray'
            ax.set_title(f"{metric.name}: {latest:.3f} {metric.units}", color=color, fontsize=10)
        else:
            ax.set_title(f"{metric.name}: no data", fontsize=10)

        ax.set_ylim(metric.min_value, metric.max_value)
        ax.set_xlabel('Frame')
        ax.set_ylabel(metric.units)
        ax.grid(True, alpha=0.3)

    def save_dashboard(self,
                       metrics: Iterable[Metric],
                       output_path: Union[str, Path],
                       title: Optional[str] = None) -> Path:
        """
        Save a grid of all metric plots.

        Args:
            metrics: Metrics to render
            output_path: Image file to write
            title: Optional figure title

        Returns:
            Path of the written image
        """
        metrics = list(metrics)
        if not metrics:
            raise ValueError("No metrics to plot")

        columns = min(self.columns, len(metrics))
        rows = math.ceil(len(metrics) / columns)

        fig, axes = plt.subplots(rows, columns, figsize=(5 * columns, 3.5 * rows), squeeze=False)
        for ax, metric in zip(axes.flat, metrics):
            self.plot_metric(metric, ax)
        for ax in list(axes.flat)[len(metrics):]:
            ax.axis('off')

        if title:
            fig.suptitle(title, fontsize=14, fontweight='bold')

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        plt.tight_layout()
        plt.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

        self.logger.info(f"Metric dashboard saved to {output_path}")

        return output_path
