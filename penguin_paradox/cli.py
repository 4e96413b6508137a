#!/usr/bin/env python3
"""
Command-line interface for the penguin Simpson's Paradox narrative.

Runs the document top to bottom: fits the trendlines, renders the three
figures and writes the Markdown report (and optionally a slide deck).
"""

import argparse
import logging
import sys

from .trend import TrendComputationError

# Setup logging
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Visualize Simpson's Paradox on the Palmer Penguins measurements"
    )

    parser.add_argument('--config', default=None,
                        help='Path to a YAML configuration (default: bundled paradox.yaml)')
    parser.add_argument('--output-dir', default=None,
                        help='Directory for figures and report (default: from config)')
    parser.add_argument('--slides', action='store_true',
                        help='Also write a PowerPoint deck')
    parser.add_argument('--fits-only', action='store_true',
                        help='Print the fitted lines and exit without rendering')
    parser.add_argument('--version', action='store_true',
                        help='Show version information')
    return parser


def _print_fits(config_path):
    from .config import get_analysis_columns, get_dataset_info, load_config
    from .dataset import load_penguins
    from .trend import analyze_paradox

    config = load_config(config_path)
    dataset_info = get_dataset_info(config)
    x, y = get_analysis_columns(config)
    df = load_penguins(dataset_info['path'], dataset_info['group_column'], dataset_info['categories'])
    result = analyze_paradox(df, x, y, dataset_info['group_column'], dataset_info['categories'])

    print(result.to_frame().to_string(float_format=lambda v: f"{v:.4f}"))
    print(f"\nPooled within-group slope: {result.pooled_within_slope:+.4f}")
    print(f"Reversal: {'yes' if result.is_reversal else 'no'}")


def main(argv=None):
    """
    CLI entry point.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.version:
        from . import __version__
        print(f"penguin_paradox version: {__version__}")
        return 0

    try:
        if args.fits_only:
            _print_fits(args.config)
            return 0

        from .pipeline import run_analysis
        artifacts = run_analysis(args.config, args.output_dir, make_slides=args.slides)
    except TrendComputationError as e:
        logger.error(f"Trend computation failed: {e}")
        return 1

    print(f"Report: {artifacts.report_path}")
    for key, path in artifacts.figure_paths.items():
        print(f"Figure ({key}): {path}")
    if artifacts.deck_path:
        print(f"Slides: {artifacts.deck_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
