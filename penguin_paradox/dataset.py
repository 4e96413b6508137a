"""
Dataset Module for the Palmer Penguins Measurements

This module loads the small penguin-measurement table bundled with the package
and provides the grouping helpers the trend fitter and the plots rely on.
The table is read once and handed around unmodified.
"""

import os
import logging
from collections import OrderedDict
from typing import Dict, Optional, Sequence

import pandas as pd

# Setup logging
logger = logging.getLogger(__name__)

SPECIES = ('Adelie', 'Chinstrap', 'Gentoo')

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data')


def get_dataset_path() -> str:
    """Path of the penguin CSV bundled with the package."""
    return os.path.join(DATA_DIR, 'penguins.csv')


def load_penguins(
    csv_path: Optional[str] = None,
    group_column: str = 'species',
    categories: Sequence[str] = SPECIES
) -> pd.DataFrame:
    """
    Load the penguin measurements.

    Args:
        csv_path: Path to a CSV with the Palmer Penguins columns (default: bundled copy)
        group_column: Column holding the grouping label
        categories: Allowed grouping labels

    Returns:
        DataFrame with one row per penguin; missing measurements are NaN

    Raises:
        FileNotFoundError: If the CSV does not exist
        ValueError: If the grouping column is missing or holds an unknown label
    """
    csv_path = csv_path or get_dataset_path()
    if not os.path.exists(csv_path):
        raise FileNotFoundError(f"Penguin dataset not found: {csv_path}")

    df = pd.read_csv(csv_path, na_values=['NA'])

    if group_column not in df.columns:
        raise ValueError(f"Grouping column '{group_column}' not found in {csv_path}")

    unknown = sorted(set(df[group_column].dropna().unique()) - set(categories))
    if unknown:
        raise ValueError(
            f"Unknown {group_column} label(s) {unknown}; expected one of {list(categories)}"
        )

    logger.info(f"Loaded {len(df)} rows from {csv_path}")
    return df


def _require_columns(df: pd.DataFrame, *columns: str) -> None:
    missing = [col for col in columns if col not in df.columns]
    if missing:
        raise ValueError(f"Column(s) not found in dataset: {missing}")


def measurement_pairs(df: pd.DataFrame, x: str, y: str) -> pd.DataFrame:
    """
    Rows where both measurements are present.

    Args:
        df: Penguin DataFrame
        x: Independent measurement column
        y: Dependent measurement column

    Returns:
        Filtered copy of df
    """
    _require_columns(df, x, y)
    pairs = df.dropna(subset=[x, y])
    dropped = len(df) - len(pairs)
    if dropped:
        logger.warning(f"Dropping {dropped} row(s) with missing {x} or {y}")
    return pairs


def split_by_group(
    df: pd.DataFrame,
    group_column: str = 'species',
    categories: Optional[Sequence[str]] = None
) -> Dict[str, pd.DataFrame]:
    """
    Partition rows by grouping label.

    Args:
        df: Penguin DataFrame
        group_column: Column holding the grouping label
        categories: Order of the groups; defaults to sorted labels present in df

    Returns:
        OrderedDict of label -> sub-frame; categories absent from df are skipped
    """
    _require_columns(df, group_column)
    if categories is None:
        categories = sorted(df[group_column].dropna().unique())

    groups = OrderedDict()
    for label in categories:
        subset = df[df[group_column] == label]
        if not subset.empty:
            groups[label] = subset
    return groups


def summarize_groups(
    df: pd.DataFrame,
    x: str,
    y: str,
    group_column: str = 'species',
    categories: Optional[Sequence[str]] = None
) -> pd.DataFrame:
    """
    Per-group counts and mean measurements, plus an 'All' row.

    Args:
        df: Penguin DataFrame
        x: Independent measurement column
        y: Dependent measurement column
        group_column: Column holding the grouping label
        categories: Order of the groups

    Returns:
        DataFrame indexed by group with columns count, mean x and mean y
    """
    pairs = measurement_pairs(df, x, y)
    rows = []
    for label, subset in split_by_group(pairs, group_column, categories).items():
        rows.append({group_column: label, 'count': len(subset),
                     f'mean_{x}': subset[x].mean(), f'mean_{y}': subset[y].mean()})
    rows.append({group_column: 'All', 'count': len(pairs),
                 f'mean_{x}': pairs[x].mean(), f'mean_{y}': pairs[y].mean()})
    return pd.DataFrame(rows).set_index(group_column)
