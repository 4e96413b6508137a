"""
End-to-end run of the narrative: config -> data -> fits -> figures -> report (-> deck).
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

import pandas as pd

from .config import get_analysis_columns, get_dataset_info, get_output_info, load_config
from .dataset import load_penguins
from .narrative import build_report, write_report
from .slides import build_deck
from .trend import ParadoxResult, analyze_paradox
from .visualization import ParadoxVisualizer

logger = logging.getLogger(__name__)


@dataclass
class AnalysisArtifacts:
    """Everything a run produced."""
    data: pd.DataFrame
    result: ParadoxResult
    figure_paths: Dict[str, str] = field(default_factory=dict)
    report_path: Optional[str] = None
    deck_path: Optional[str] = None


def run_analysis(
    config_path: Optional[str] = None,
    output_dir: Optional[str] = None,
    make_slides: bool = False
) -> AnalysisArtifacts:
    """
    Run the whole narrative top to bottom.

    Args:
        config_path: YAML configuration (default: bundled paradox.yaml)
        output_dir: Where figures and the report go (default: config output.directory)
        make_slides: Also build the PowerPoint deck

    Returns:
        AnalysisArtifacts with the data, fits and written file paths

    Raises:
        TrendComputationError: If any group cannot be fitted
    """
    config = load_config(config_path)
    dataset_info = get_dataset_info(config)
    output_info = get_output_info(config)
    output_dir = output_dir or output_info['directory']
    x, y = get_analysis_columns(config)

    df = load_penguins(dataset_info['path'], dataset_info['group_column'], dataset_info['categories'])
    result = analyze_paradox(df, x, y, dataset_info['group_column'], dataset_info['categories'])

    visualizer = ParadoxVisualizer(config)
    figure_paths = visualizer.render_all(df, result, output_dir)

    report_path = os.path.join(output_dir, output_info['report_filename'])
    write_report(build_report(df, result, figure_paths, config, base_dir=output_dir), report_path)

    deck_path = None
    if make_slides:
        deck_path = build_deck(result, figure_paths, config).save(output_info['deck_filename'], output_dir)

    return AnalysisArtifacts(
        data=df,
        result=result,
        figure_paths=figure_paths,
        report_path=report_path,
        deck_path=deck_path,
    )
