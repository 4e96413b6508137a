"""
Simpson's Paradox narrative on the Palmer Penguins measurements.

This package loads a small bundled penguin dataset, fits ordinary-least-squares
trendlines overall and per species, and renders the figures, report and slides
that tell the story of the reversal.
"""

__version__ = "0.1.0"

# Import key functions from dataset
from .dataset import (
    SPECIES,
    get_dataset_path,
    load_penguins,
    measurement_pairs,
    split_by_group,
    summarize_groups
)

# Import key functions from trend
from .trend import (
    TrendComputationError,
    TrendDirection,
    LinearTrend,
    ParadoxResult,
    fit_linear_trend,
    fit_overall,
    fit_by_group,
    pooled_within_slope,
    analyze_paradox
)

# Import key functions from config
from .config import (
    load_config,
    get_dataset_info,
    get_analysis_columns,
    get_display_name,
    get_figure_info,
    get_style,
    get_output_info
)

from .visualization import ParadoxVisualizer
from .narrative import build_report, write_report, render_caption
from .slides import SlideDeck, build_deck
from .pipeline import AnalysisArtifacts, run_analysis

# Define what should be available in "from penguin_paradox import *"
__all__ = [
    '__version__',

    # Data
    'SPECIES',
    'get_dataset_path',
    'load_penguins',
    'measurement_pairs',
    'split_by_group',
    'summarize_groups',

    # Trend fitting
    'TrendComputationError',
    'TrendDirection',
    'LinearTrend',
    'ParadoxResult',
    'fit_linear_trend',
    'fit_overall',
    'fit_by_group',
    'pooled_within_slope',
    'analyze_paradox',

    # Configuration
    'load_config',
    'get_dataset_info',
    'get_analysis_columns',
    'get_display_name',
    'get_figure_info',
    'get_style',
    'get_output_info',

    # Output
    'ParadoxVisualizer',
    'build_report',
    'write_report',
    'render_caption',
    'SlideDeck',
    'build_deck',
    'AnalysisArtifacts',
    'run_analysis'
]
