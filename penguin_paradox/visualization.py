import os
import logging
from typing import Any, Dict, Optional

import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns

from .config import get_display_name, get_figure_info, get_style, load_config
from .dataset import measurement_pairs
from .trend import ParadoxResult

# Setup logging
logger = logging.getLogger(__name__)


class ParadoxVisualizer:
    """Visualizer for the Simpson's Paradox figures.

    Scatter points are drawn with seaborn; the trendlines come from the
    LinearTrend objects in a ParadoxResult, so every line on screen is the
    one reported in the tables.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Create a reusable visualizer for all three figures.

        Args:
            config: Loaded configuration dictionary (default: bundled paradox.yaml)
        """
        self.config = config if config is not None else load_config()
        self.style = get_style(self.config)

        # Set default style
        self._set_style()

    def _set_style(self) -> None:
        """Set consistent style for all visualizations."""
        sns.set_style("whitegrid")

        plt.rcParams.update({
            "axes.titlesize": 14,
            "axes.labelsize": 12,
            "xtick.labelsize": 10,
            "ytick.labelsize": 10,
            "legend.fontsize": 10,
            "figure.titlesize": 16,
            "font.family": "sans-serif",
            "font.size": 10
        })

        self.colors = {
            'neutral': self.style['neutral_color'],
            'overall_line': self.style['line_color'],
            'groups': dict(self.style['palette']),
        }

    def _group_palette(self, labels) -> Dict[str, Any]:
        """Configured colors, topped up from the seaborn 'deep' palette for unknown groups."""
        fallback = sns.color_palette("deep", len(labels))
        return {
            label: self.colors['groups'].get(label, fallback[i])
            for i, label in enumerate(labels)
        }

    def _label_axes(self, ax: plt.Axes, result: ParadoxResult, title: str) -> None:
        ax.set_xlabel(get_display_name(self.config, result.x))
        ax.set_ylabel(get_display_name(self.config, result.y))
        ax.set_title(title)

    def plot_overall(self, ax: plt.Axes, df: pd.DataFrame, result: ParadoxResult,
                     title: Optional[str] = None) -> plt.Axes:
        """
        All points in one color with the single overall trendline.

        Args:
            ax: Matplotlib axes to plot on
            df: Penguin DataFrame
            result: Fitted trends
            title: Axes title (default: configured figure title)

        Returns:
            The modified axes
        """
        pairs = measurement_pairs(df, result.x, result.y)
        sns.scatterplot(
            data=pairs, x=result.x, y=result.y, ax=ax,
            color=self.colors['neutral'],
            s=self.style['point_size'], alpha=self.style['alpha'],
            edgecolor='white', linewidth=0.5
        )

        xs, ys = result.overall.line_points()
        ax.plot(xs, ys, '--', color=self.colors['overall_line'], linewidth=2.5,
                label=f"{result.overall.label}: slope {result.overall.slope:+.3f}")
        ax.legend(loc='best')

        self._label_axes(ax, result, title or get_figure_info(self.config, 'overall')['title'])
        return ax

    def plot_by_group(self, ax: plt.Axes, df: pd.DataFrame, result: ParadoxResult,
                      title: Optional[str] = None) -> plt.Axes:
        """
        Points colored by group with one trendline per group.

        Args:
            ax: Matplotlib axes to plot on
            df: Penguin DataFrame
            result: Fitted trends
            title: Axes title (default: configured figure title)

        Returns:
            The modified axes
        """
        pairs = measurement_pairs(df, result.x, result.y)
        labels = list(result.by_group.keys())
        palette = self._group_palette(labels)

        sns.scatterplot(
            data=pairs[pairs[result.group_column].isin(labels)],
            x=result.x, y=result.y, hue=result.group_column,
            hue_order=labels, palette=palette, ax=ax,
            s=self.style['point_size'], alpha=self.style['alpha'],
            edgecolor='white', linewidth=0.5, legend=False
        )

        for label, fit in result.by_group.items():
            xs, ys = fit.line_points()
            ax.plot(xs, ys, '-', color=palette[label], linewidth=2.5,
                    label=f"{label}: slope {fit.slope:+.3f}")
        ax.legend(loc='best', title=get_display_name(self.config, result.group_column))

        self._label_axes(ax, result, title or get_figure_info(self.config, 'by_group')['title'])
        return ax

    def create_overall_figure(self, df: pd.DataFrame, result: ParadoxResult) -> plt.Figure:
        fig, ax = plt.subplots(figsize=tuple(self.style['figure_size']))
        self.plot_overall(ax, df, result)
        fig.tight_layout()
        return fig

    def create_group_figure(self, df: pd.DataFrame, result: ParadoxResult) -> plt.Figure:
        fig, ax = plt.subplots(figsize=tuple(self.style['figure_size']))
        self.plot_by_group(ax, df, result)
        fig.tight_layout()
        return fig

    def create_comparison_figure(self, df: pd.DataFrame, result: ParadoxResult) -> plt.Figure:
        """Overall and per-group views side by side on shared axes."""
        fig, (left, right) = plt.subplots(
            1, 2, figsize=tuple(self.style['comparison_size']), sharex=True, sharey=True
        )
        self.plot_overall(left, df, result)
        self.plot_by_group(right, df, result)
        fig.suptitle(get_figure_info(self.config, 'comparison')['title'])
        fig.tight_layout()
        return fig

    def save_figure(self, fig: plt.Figure, path: str) -> str:
        """Save a figure to disk and close it."""
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        fig.savefig(path, dpi=self.style['dpi'], bbox_inches='tight')
        plt.close(fig)
        logger.info(f"Saved figure to {path}")
        return path

    def render_all(self, df: pd.DataFrame, result: ParadoxResult, output_dir: str) -> Dict[str, str]:
        """
        Render and save the three figures.

        Args:
            df: Penguin DataFrame
            result: Fitted trends
            output_dir: Directory for the image files

        Returns:
            Dictionary mapping figure key ('overall', 'by_group', 'comparison') to file path
        """
        builders = {
            'overall': self.create_overall_figure,
            'by_group': self.create_group_figure,
            'comparison': self.create_comparison_figure,
        }
        paths = {}
        for key, build in builders.items():
            filename = get_figure_info(self.config, key)['filename']
            paths[key] = self.save_figure(build(df, result), os.path.join(output_dir, filename))
        return paths
