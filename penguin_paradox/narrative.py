"""
Narrative Module for the Simpson's Paradox Report

Renders the explanatory Markdown document around the three figures. All
numbers quoted in the prose are taken from the ParadoxResult; the wording
switches when the data does not actually reverse.
"""

import os
import logging
from typing import Any, Dict

import pandas as pd
from jinja2 import Template

from .config import FIGURE_KEYS, get_display_name, get_figure_info
from .dataset import summarize_groups
from .trend import ParadoxResult, TrendDirection

# Setup logging
logger = logging.getLogger(__name__)

REPORT_TEMPLATE = """# Simpson's Paradox in the Palmer Penguins

{{ question }} If we look at every bird at
once, the answer seems to be {{ overall_answer }}. Split the same birds by
{{ group_name | lower }} and the answer {{ split_answer }}. This is
**Simpson's Paradox**: {{ paradox_sentence }}

## The data

The table below holds {{ n_rows }} penguins of {{ n_groups }} species measured
in the Palmer Archipelago, Antarctica. We compare {{ x_name | lower }} (x) with
{{ y_name | lower }} (y).{% if n_dropped %} {{ n_dropped }} bird(s) without both
measurements are left out of every fit.{% endif %}

{{ summary_table }}

## 1. {{ figures.overall.title }}

![{{ figures.overall.title }}]({{ figures.overall.path }})

*{{ figures.overall.caption }}*

A single ordinary-least-squares line through all {{ overall.n_points }} points
has slope **{{ "%+.3f" | format(overall.slope) }}** ({{ overall.equation() }}).
Read naively, {{ naive_reading }}.

## 2. {{ figures.by_group.title }}

![{{ figures.by_group.title }}]({{ figures.by_group.path }})

*{{ figures.by_group.caption }}*

{% for label, fit in by_group.items() -%}
- **{{ label }}** ({{ fit.n_points }} birds): slope {{ "%+.3f" | format(fit.slope) }}, r = {{ "%.2f" | format(fit.r_value) }}
{% endfor %}
## 3. {{ figures.comparison.title }}

![{{ figures.comparison.title }}]({{ figures.comparison.path }})

*{{ figures.comparison.caption }}*

{{ fit_table }}

Averaging the within-species lines (weighting each by the spread of its
x values) gives a slope of **{{ "%+.3f" | format(pooled_slope) }}**, which
{{ pooled_sentence }}

## Why it happens

{{ group_name }} is a **confounding variable**. It is related to both
measurements: {{ confounder_sentence }} When the groups are pooled, the
differences *between* species dominate the line, hiding the relationship
that holds *within* each species.

## Glossary

- **Simpson's Paradox**: a trend present in aggregated data reverses or
  disappears when the data is split by a confounding grouping variable.
- **Confounding variable**: a variable correlated with both the independent
  and dependent variable that, when ignored, distorts the apparent
  relationship between them.
- **Ordinary least squares**: fitting a straight line by minimizing the sum of
  squared vertical distances from the points to the line.
"""

_VERBS = {
    TrendDirection.POSITIVE: 'increases',
    TrendDirection.NEGATIVE: 'decreases',
    TrendDirection.FLAT: 'does not change',
}


def _join_labels(labels) -> str:
    labels = list(labels)
    if len(labels) <= 1:
        return ''.join(labels)
    return ', '.join(labels[:-1]) + ' and ' + labels[-1]


def _describe_directions(result: ParadoxResult) -> str:
    """e.g. 'positive for Adelie, Chinstrap and Gentoo'."""
    by_direction: Dict[str, list] = {}
    for label, direction in result.group_directions.items():
        by_direction.setdefault(direction.value, []).append(label)
    return '; '.join(f"{direction} for {_join_labels(labels)}"
                     for direction, labels in by_direction.items())


def render_caption(config: Dict[str, Any], figure_key: str, result: ParadoxResult) -> str:
    """Render the configured caption template of one figure."""
    params = {
        'x_name': get_display_name(config, result.x),
        'y_name': get_display_name(config, result.y),
        'n_points': result.overall.n_points,
        'slope': result.overall.slope,
        'verb': _VERBS[result.overall.direction],
        'directions': _describe_directions(result),
        'is_reversal': result.is_reversal,
    }
    template = get_figure_info(config, figure_key)['caption']
    return ' '.join(Template(template).render(**params).split())


def _format_table(df: pd.DataFrame) -> str:
    return df.to_markdown(floatfmt='.3f')


def build_report(
    df: pd.DataFrame,
    result: ParadoxResult,
    figure_paths: Dict[str, str],
    config: Dict[str, Any],
    base_dir: str = '.'
) -> str:
    """
    Render the Markdown narrative.

    Args:
        df: Penguin DataFrame
        result: Fitted trends
        figure_paths: Figure key -> image path, as returned by ParadoxVisualizer.render_all
        config: Loaded configuration dictionary
        base_dir: Directory the report will be written to; image links are made relative to it

    Returns:
        The Markdown text
    """
    x_name = get_display_name(config, result.x)
    y_name = get_display_name(config, result.y)
    group_name = get_display_name(config, result.group_column)
    overall = result.overall
    group_labels = list(result.by_group.keys())

    figures = {}
    for key in FIGURE_KEYS:
        info = get_figure_info(config, key)
        path = figure_paths.get(key, info['filename'])
        figures[key] = {
            'title': info['title'],
            'caption': render_caption(config, key, result),
            'path': os.path.relpath(path, base_dir).replace(os.sep, '/'),
        }

    question = (f"Do penguins with a larger {x_name.lower()} have a smaller "
                f"{y_name.lower()}?")
    if overall.direction == TrendDirection.NEGATIVE:
        overall_answer = 'yes'
        naive_reading = f"a larger {x_name.lower()} goes with a smaller {y_name.lower()}"
    elif overall.direction == TrendDirection.POSITIVE:
        overall_answer = f"no: a larger {x_name.lower()} comes with a larger {y_name.lower()}"
        naive_reading = f"a larger {x_name.lower()} goes with a larger {y_name.lower()}"
    else:
        overall_answer = 'that there is no relationship'
        naive_reading = f"{y_name.lower()} does not depend on {x_name.lower()}"

    if result.is_reversal:
        split_answer = 'flips'
        paradox_sentence = (
            f"the overall trend is {overall.direction.value}, yet within every "
            f"{group_name.lower()} it is {_describe_directions(result)}."
        )
    else:
        split_answer = 'does not simply flip'
        paradox_sentence = (
            f"here the overall trend is {overall.direction.value} and the per-group "
            f"trends are {_describe_directions(result)}, so this sample does not show "
            f"a full reversal."
        )

    pooled_slope = result.pooled_within_slope
    if (pooled_slope > 0) != (overall.slope > 0):
        pooled_sentence = 'points the opposite way from the overall line.'
    else:
        pooled_sentence = 'points the same way as the overall line.'

    summary = summarize_groups(df, result.x, result.y, result.group_column, group_labels)
    means = summary.drop(index='All')
    x_col, y_col = f'mean_{result.x}', f'mean_{result.y}'
    confounder_sentence = (
        f"{means[x_col].idxmax()} has the longest average {x_name.lower()} "
        f"at {means[x_col].max():.1f}, while {means[y_col].idxmin()} has the smallest "
        f"average {y_name.lower()} at {means[y_col].min():.1f}."
    )

    summary_display = summary.rename(columns={
        'count': 'Birds', x_col: f"Mean {x_name.lower()}", y_col: f"Mean {y_name.lower()}"
    })
    fit_display = result.to_frame().rename(columns={
        'n': 'Birds', 'slope': 'Slope', 'intercept': 'Intercept', 'r': 'r', 'direction': 'Direction'
    })

    text = Template(REPORT_TEMPLATE).render(
        question=question,
        overall_answer=overall_answer,
        split_answer=split_answer,
        paradox_sentence=paradox_sentence,
        group_name=group_name,
        n_rows=len(df),
        n_groups=len(group_labels),
        n_dropped=len(df) - int(summary.loc['All', 'count']),
        x_name=x_name,
        y_name=y_name,
        summary_table=_format_table(summary_display),
        figures=figures,
        overall=overall,
        naive_reading=naive_reading,
        by_group=result.by_group,
        fit_table=_format_table(fit_display),
        pooled_slope=pooled_slope,
        pooled_sentence=pooled_sentence,
        confounder_sentence=confounder_sentence,
    )
    return text


def write_report(text: str, path: str) -> str:
    """Write the rendered report to disk."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(text)
    logger.info(f"Wrote report to {path}")
    return path
