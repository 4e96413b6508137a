#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Simpson's Paradox with the Palmer Penguins
Run top to bottom as a script, or cell by cell in Jupyter / VS Code.
"""

# %% [markdown]
# # Simpson's Paradox with the Palmer Penguins
#
# Do penguins with longer bills have shallower bills? This notebook answers
# the question twice, once for all birds at once and once per species, and
# gets two opposite answers:
# - **All penguins**: one trendline through every bird
# - **By species**: one trendline per species
# - **Side by side**: the same points, two stories

# %% [setup]
import os
import sys
import matplotlib.pyplot as plt
from pathlib import Path

# Auto-detect working directory and adjust paths accordingly
current_dir = Path.cwd()
if current_dir.name == 'notebooks':
    base_dir = current_dir.parent
    os.chdir(base_dir)
    print(f"Detected notebook execution. Changed working directory to: {base_dir}")
else:
    base_dir = current_dir
    print(f"Detected script execution from: {base_dir}")

sys.path.append(str(base_dir))

from penguin_paradox.config import load_config, get_analysis_columns, get_dataset_info, get_output_info
from penguin_paradox.dataset import load_penguins, summarize_groups
from penguin_paradox.trend import analyze_paradox
from penguin_paradox.visualization import ParadoxVisualizer
from penguin_paradox.narrative import build_report, render_caption, write_report

# Show figures inline only in interactive environments
if hasattr(sys, 'ps1') or 'ipykernel' in sys.modules or 'IPython' in sys.modules:
    SHOW_FIGURES = True
else:
    SHOW_FIGURES = False

print(f"Figure display mode: {'Enabled (interactive)' if SHOW_FIGURES else 'Disabled (script mode)'}")
print("=" * 65)

# %% [markdown]
# ## 1. The data
#
# A small bundled excerpt of the Palmer Penguins table: three species measured
# in the Palmer Archipelago, Antarctica. We only need bill length, bill depth
# and species.

# %% [data]
config = load_config()
dataset_info = get_dataset_info(config)
x, y = get_analysis_columns(config)
group = dataset_info['group_column']

df = load_penguins(dataset_info['path'], group, dataset_info['categories'])
print(df.head())
print()
print(summarize_groups(df, x, y, group, dataset_info['categories']).round(2))

# %% [markdown]
# ## 2. Fit the trendlines
#
# Ordinary least squares, once through every bird and once per species.

# %% [fit]
result = analyze_paradox(df, x, y, group, dataset_info['categories'])
print(result.to_frame().round(4))
print(f"\nPooled within-species slope: {result.pooled_within_slope:+.4f}")
print(f"Reversal: {result.is_reversal}")

# %% [markdown]
# ## 3. All penguins together
#
# Pooled together, longer bills seem to come with *shallower* bills.

# %% [overall]
visualizer = ParadoxVisualizer(config)
fig = visualizer.create_overall_figure(df, result)
print(render_caption(config, 'overall', result))
if SHOW_FIGURES:
    plt.show()
plt.close(fig)

# %% [markdown]
# ## 4. Split by species
#
# Colour the same points by species and fit one line each: inside every
# species, longer bills come with *deeper* bills.

# %% [by_group]
fig = visualizer.create_group_figure(df, result)
print(render_caption(config, 'by_group', result))
if SHOW_FIGURES:
    plt.show()
plt.close(fig)

# %% [markdown]
# ## 5. Side by side
#
# Species is the confounder. Gentoo penguins have long, shallow bills and
# Adelie penguins short, deep ones, so the differences *between* species
# drag the pooled line downwards.

# %% [comparison]
fig = visualizer.create_comparison_figure(df, result)
print(render_caption(config, 'comparison', result))
if SHOW_FIGURES:
    plt.show()
plt.close(fig)

# %% [markdown]
# ## 6. Write the report
#
# Saves the three figures and the Markdown narrative next to each other.

# %% [report]
output_dir = get_output_info(config)['directory']
figure_paths = visualizer.render_all(df, result, output_dir)
report_path = os.path.join(output_dir, get_output_info(config)['report_filename'])
write_report(build_report(df, result, figure_paths, config, base_dir=output_dir), report_path)
print(f"Report written to {report_path}")
