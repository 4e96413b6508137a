"""
Linear Trend Fitting for Simpson's Paradox

Closed-form ordinary-least-squares trendlines fitted once over the whole table
and once per group. The paradox condition is read straight off the slope
signs: every within-group line points one way while the pooled line points
the other.

Key Functions:
    fit_linear_trend() - OLS slope/intercept for one set of (x, y) pairs
    fit_overall()      - Trend through every row of a DataFrame
    fit_by_group()     - One trend per grouping label
    analyze_paradox()  - Overall + per-group fits bundled as a ParadoxResult

Usage Example:

    from penguin_paradox.dataset import load_penguins
    from penguin_paradox.trend import analyze_paradox

    df = load_penguins()
    result = analyze_paradox(df, x="bill_length_mm", y="bill_depth_mm", group_column="species")
    result.overall.slope        # negative
    result.by_group["Gentoo"]   # LinearTrend with a positive slope
    result.is_reversal          # True

Degenerate input (fewer than two points, or all x values identical) raises
TrendComputationError instead of producing a misleading line.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Sequence

import numpy as np
import pandas as pd
import scipy.stats as stats

from .dataset import measurement_pairs, split_by_group

# Setup logging
logger = logging.getLogger(__name__)

OVERALL_LABEL = "All penguins"


class TrendComputationError(ValueError):
    """Raised when a trendline cannot be fitted to the given points."""


class TrendDirection(Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    FLAT = "flat"


@dataclass(frozen=True)
class LinearTrend:
    """Fitted OLS line y = intercept + slope * x for one set of points."""
    label: str
    slope: float
    intercept: float
    n_points: int
    r_value: float
    x_min: float
    x_max: float
    x_sum_squares: float  # Σ(x - x̄)², weight of this line when pooling slopes

    @property
    def direction(self) -> TrendDirection:
        if self.slope > 0:
            return TrendDirection.POSITIVE
        if self.slope < 0:
            return TrendDirection.NEGATIVE
        return TrendDirection.FLAT

    def predict(self, x):
        """Evaluate the line at x (scalar or array)."""
        return self.intercept + self.slope * np.asarray(x, dtype=float)

    def line_points(self, num: int = 100):
        """Points spanning the observed x range, for drawing the line."""
        xs = np.linspace(self.x_min, self.x_max, num)
        return xs, self.predict(xs)

    def equation(self, precision: int = 3) -> str:
        sign = '-' if self.slope < 0 else '+'
        return f"y = {self.intercept:.{precision}f} {sign} {abs(self.slope):.{precision}f}x"


def fit_linear_trend(x, y, label: Optional[str] = None) -> LinearTrend:
    """
    Fit an ordinary-least-squares line to paired observations.

    Args:
        x: Independent values (sequence or array)
        y: Dependent values, same length as x
        label: Name of the point set, used in error messages

    Returns:
        LinearTrend with slope, intercept and fit metadata

    Raises:
        TrendComputationError: If fewer than two points are given, values are not
            finite, or every x value is identical
    """
    label = label or "data"
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)

    if x.shape != y.shape or x.ndim != 1:
        raise TrendComputationError(
            f"Cannot fit trend for '{label}': x and y must be 1-D sequences of equal length, "
            f"got shapes {x.shape} and {y.shape}"
        )
    if len(x) < 2:
        raise TrendComputationError(
            f"Cannot fit trend for '{label}': need at least 2 points, got {len(x)}"
        )
    if not (np.isfinite(x).all() and np.isfinite(y).all()):
        raise TrendComputationError(f"Cannot fit trend for '{label}': x and y must be finite")

    # compare the range, not Σ(x - x̄)²: rounding in the mean leaves that sum above zero
    if x.max() == x.min():
        raise TrendComputationError(
            f"Cannot fit trend for '{label}': all {len(x)} x values are identical ({x[0]:g})"
        )
    x_sum_squares = float(np.sum((x - x.mean()) ** 2))

    fit = stats.linregress(x, y)
    trend = LinearTrend(
        label=label,
        slope=float(fit.slope),
        intercept=float(fit.intercept),
        n_points=int(len(x)),
        r_value=float(fit.rvalue),
        x_min=float(x.min()),
        x_max=float(x.max()),
        x_sum_squares=x_sum_squares,
    )
    logger.debug(f"Fitted {label}: {trend.equation()} (n={trend.n_points}, r={trend.r_value:.3f})")
    return trend


def fit_overall(
    df: pd.DataFrame,
    x: str,
    y: str,
    label: str = OVERALL_LABEL,
    group_column: Optional[str] = None
) -> LinearTrend:
    """
    Fit one trend through every row that has both measurements.

    When group_column is given, rows without a grouping label are left out too,
    so the overall line is fitted on the same rows as the per-group lines.
    """
    pairs = measurement_pairs(df, x, y)
    if group_column is not None:
        if group_column not in pairs.columns:
            raise ValueError(f"Column(s) not found in dataset: ['{group_column}']")
        pairs = pairs.dropna(subset=[group_column])
    return fit_linear_trend(pairs[x], pairs[y], label=label)


def fit_by_group(
    df: pd.DataFrame,
    x: str,
    y: str,
    group_column: str = 'species',
    categories: Optional[Sequence[str]] = None
) -> Dict[str, LinearTrend]:
    """
    Fit one trend per grouping label.

    Args:
        df: DataFrame with the measurement and grouping columns
        x: Independent measurement column
        y: Dependent measurement column
        group_column: Column holding the grouping label
        categories: Order of the groups; defaults to sorted labels present in df

    Returns:
        OrderedDict of label -> LinearTrend

    Raises:
        TrendComputationError: If any group is degenerate; the message names the group
    """
    pairs = measurement_pairs(df, x, y)
    fits = OrderedDict()
    for label, subset in split_by_group(pairs, group_column, categories).items():
        fits[label] = fit_linear_trend(subset[x], subset[y], label=label)
    if not fits:
        raise TrendComputationError(f"Cannot fit trends: no rows with a '{group_column}' label")
    return fits


def pooled_within_slope(fits: Dict[str, LinearTrend]) -> float:
    """
    Aggregate per-group lines into a single slope.

    Each group's slope is weighted by its Σ(x - x̄)², which equals the OLS slope
    of the data after removing each group's mean (the within-group estimator).
    """
    weights = np.array([fit.x_sum_squares for fit in fits.values()])
    slopes = np.array([fit.slope for fit in fits.values()])
    if weights.sum() == 0:
        raise TrendComputationError("Cannot pool slopes: groups have no x variance")
    return float(np.sum(weights * slopes) / weights.sum())


@dataclass
class ParadoxResult:
    """Overall and per-group trends for one pair of measurements."""
    x: str
    y: str
    group_column: str
    overall: LinearTrend
    by_group: Dict[str, LinearTrend] = field(default_factory=OrderedDict)

    @property
    def is_reversal(self) -> bool:
        """True when every group trend points against the overall trend."""
        if self.overall.direction == TrendDirection.FLAT or not self.by_group:
            return False
        return all(
            np.sign(fit.slope) == -np.sign(self.overall.slope)
            for fit in self.by_group.values()
        )

    @property
    def pooled_within_slope(self) -> float:
        return pooled_within_slope(self.by_group)

    @property
    def group_directions(self) -> Dict[str, TrendDirection]:
        return OrderedDict((label, fit.direction) for label, fit in self.by_group.items())

    def to_frame(self) -> pd.DataFrame:
        """Summary table of every fitted line, overall row last."""
        rows = []
        for fit in list(self.by_group.values()) + [self.overall]:
            rows.append({
                'group': fit.label,
                'n': fit.n_points,
                'slope': fit.slope,
                'intercept': fit.intercept,
                'r': fit.r_value,
                'direction': fit.direction.value,
            })
        return pd.DataFrame(rows).set_index('group')


def analyze_paradox(
    df: pd.DataFrame,
    x: str,
    y: str,
    group_column: str = 'species',
    categories: Optional[Sequence[str]] = None
) -> ParadoxResult:
    """
    Fit the overall trend and every per-group trend.

    Args:
        df: DataFrame with the measurement and grouping columns
        x: Independent measurement column
        y: Dependent measurement column
        group_column: Column holding the grouping label
        categories: Order of the groups

    Returns:
        ParadoxResult bundling the fits
    """
    overall = fit_overall(df, x, y, group_column=group_column)
    by_group = fit_by_group(df, x, y, group_column, categories)
    result = ParadoxResult(x=x, y=y, group_column=group_column, overall=overall, by_group=by_group)

    logger.info(
        f"Overall slope {overall.slope:+.4f}; "
        + ", ".join(f"{label} {fit.slope:+.4f}" for label, fit in by_group.items())
        + f"; reversal={result.is_reversal}"
    )
    return result
