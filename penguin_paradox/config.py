import yaml
import os
from typing import Dict, Any, Optional, Tuple

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'configs', 'paradox.yaml')

# Figure keys in rendering order
FIGURE_KEYS = ('overall', 'by_group', 'comparison')


def load_config(yaml_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load and parse the YAML configuration file.

    Args:
        yaml_path: Path to the YAML configuration file (default: bundled paradox.yaml)

    Returns:
        Dictionary containing the parsed configuration
    """
    yaml_path = yaml_path or DEFAULT_CONFIG_PATH
    try:
        with open(yaml_path, 'r') as file:
            config = yaml.safe_load(file)
        return config or {}
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found: {yaml_path}")
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Error parsing YAML configuration: {e}")


def get_dataset_info(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Get dataset settings with defaults filled in.

    Args:
        config: Loaded configuration dictionary

    Returns:
        Dictionary with 'path', 'group_column' and 'categories'
    """
    dataset = config.get('dataset', {}) or {}
    return {
        'path': dataset.get('path'),
        'group_column': dataset.get('group_column', 'species'),
        'categories': list(dataset.get('categories', ['Adelie', 'Chinstrap', 'Gentoo'])),
    }


def get_analysis_columns(config: Dict[str, Any]) -> Tuple[str, str]:
    """
    Get the (x, y) measurement columns the trendlines are fitted on.

    Args:
        config: Loaded configuration dictionary

    Returns:
        Tuple of (x column, y column)
    """
    analysis = config.get('analysis', {}) or {}
    return analysis.get('x', 'bill_length_mm'), analysis.get('y', 'bill_depth_mm')


def get_display_name(config: Dict[str, Any], column: str) -> str:
    """
    Get the display name for a column, falling back to the column name itself.

    Args:
        config: Loaded configuration dictionary
        column: Technical column name

    Returns:
        Display name for the column
    """
    column_info = (config.get('columns', {}) or {}).get(column, {}) or {}
    return column_info.get('display_name', column)


def get_figure_info(config: Dict[str, Any], figure_key: str) -> Dict[str, Any]:
    """
    Get title, filename and caption template for one of the figures.

    Args:
        config: Loaded configuration dictionary
        figure_key: One of 'overall', 'by_group' or 'comparison'

    Returns:
        Dictionary containing figure information
    """
    figures = config.get('figures', {}) or {}
    info = dict(figures.get(figure_key, {}) or {})
    info.setdefault('title', figure_key.replace('_', ' ').title())
    info.setdefault('filename', f"{figure_key}.png")
    info.setdefault('caption', '')
    return info


def get_style(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Get plot styling settings with defaults filled in.

    Args:
        config: Loaded configuration dictionary

    Returns:
        Dictionary of style settings
    """
    style = {
        'palette': {},
        'neutral_color': '#7F8C8D',
        'line_color': '#34495E',
        'point_size': 60,
        'alpha': 0.75,
        'figure_size': [8, 6],
        'comparison_size': [14, 6],
        'dpi': 150,
    }
    style.update(config.get('style', {}) or {})
    return style


def get_output_info(config: Dict[str, Any]) -> Dict[str, str]:
    output = {
        'directory': 'output',
        'report_filename': 'simpsons_paradox.md',
        'deck_filename': 'simpsons_paradox.pptx',
    }
    output.update(config.get('output', {}) or {})
    return output
