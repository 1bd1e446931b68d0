"""
Main entry point for the Depth Quality Tool

Analyses recorded depth frames of a flat target and reports plane-fit quality metrics.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from depth_quality.analyzer import DepthQualityAnalyzer
from depth_quality.utils.config_manager import ConfigManager, LOG_LEVELS
from depth_quality.utils.visualization import MetricPlotter


FRAME_SUFFIXES = ('.npy', '.png', '.tif', '.tiff')


def collect_frames(input_path: Path) -> List[Path]:
    """Return the frame file itself, or the sorted frame files of a directory."""
    if input_path.is_dir():
        return sorted(p for p in input_path.iterdir() if p.suffix.lower() in FRAME_SUFFIXES)
    return [input_path]


def main(argv=None):
    """Main entry point for the depth quality tool."""
    parser = argparse.ArgumentParser(
        description="Depth quality metrics from plane fits of a flat target"
    )

    parser.add_argument(
        "--input",
        type=str,
        required=True,
        help="Depth frame (.npy or 16-bit image) or directory of frames"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration file"
    )

    parser.add_argument(
        "--plot",
        type=str,
        help="Save a metric dashboard image to this path"
    )

    parser.add_argument(
        "--roi-fraction",
        type=float,
        help="Centred share of each image dimension to analyse"
    )

    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    args = parser.parse_args(argv)

    # Load configuration
    try:
        config = ConfigManager(args.config)
        if args.roi_fraction is not None:
            config.set('roi.fraction', args.roi_fraction)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading configuration: {e}")
        return 1

    logging_config = config.get_logging_params()
    logging.basicConfig(
        level=(args.log_level or logging_config.get('level', 'INFO')).upper(),
        format=logging_config.get('format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    )
    logger = logging.getLogger(__name__)
    logger.info(f"Loaded configuration from: {config.config_path}")

    # Validate input
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Input does not exist: {args.input}")
        return 1

    frames = collect_frames(input_path)
    if not frames:
        print(f"No depth frames found in: {args.input}")
        return 1

    analyzer = DepthQualityAnalyzer(config)

    for frame_path in frames:
        try:
            depth_frame = analyzer.point_cloud_generator.load_depth_frame(frame_path)
        except (FileNotFoundError, ValueError) as e:
            logger.error(f"Could not load {frame_path.name}: {e}")
            analyzer.skipped_frames += 1
            continue
        analyzer.process_depth_frame(depth_frame, source=frame_path.name)

    print("Depth Quality Metrics")
    print("=" * 50)
    print(f"Frames processed: {analyzer.processed_frames}")
    print(f"Frames skipped: {analyzer.skipped_frames}")

    for name, stats in analyzer.summary().items():
        if stats['samples'] == 0:
            print(f"  {name:<14} no data")
            continue
        print(f"  {name:<14} {stats['latest']:10.4f} {stats['units']:<6} "
              f"mean={stats['mean']:.4f} min={stats['min']:.4f} max={stats['max']:.4f} "
              f"[{stats['band'] or '-'}]")

    if args.plot and analyzer.processed_frames > 0:
        MetricPlotter().save_dashboard(analyzer.metrics.values(), args.plot,
                                       title="Depth Quality Metrics")
        print(f"Dashboard saved to: {args.plot}")

    return 0 if analyzer.processed_frames > 0 else 1


if __name__ == "__main__":
    sys.exit(main())
