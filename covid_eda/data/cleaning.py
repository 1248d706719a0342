"""
Panel Cleaning for COVID-19 Policy EDA - STAGE 2

Three steps, always in this order:
1. Mean-impute `tests` (mean taken over the raw, pre-filter table)
2. Drop rows missing any outcome (confirmed, deaths, recovered)
3. Collapse the level-2 region column to its top-N labels + "Other"

Every function returns a new DataFrame; inputs are never modified.
"""
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np
import pandas as pd

from covid_eda.common.errors import AllRowsFiltered, require_columns
from covid_eda.data.schema import (
    DEFAULT_TOP_N,
    OTHER_LABEL,
    OUTCOME_COLS,
    REGION_COL,
    TESTS,
)


@dataclass
class CleaningReport:
    """What clean_panel did to the table."""
    rows_in: int
    rows_out: int
    fill_value: float
    n_imputed: int
    kept_labels: List[str] = field(default_factory=list)
    n_lumped: int = 0

    @property
    def rows_dropped(self) -> int:
        return self.rows_in - self.rows_out


def impute_mean(df: pd.DataFrame, col: str = TESTS) -> Tuple[pd.DataFrame, float]:
    """
    Replace nulls in `col` with the mean of its non-null values.

    The mean is computed once over the input table. Non-null values
    are kept as they are. Reapplying to the output is a no-op since no
    nulls are left to fill.

    Args:
        df: Input table
        col: Numeric column to impute

    Returns:
        (new DataFrame, fill value used)
    """
    require_columns(df, [col], where="impute_mean")

    out = df.copy()
    values = out[col].astype(float)
    fill_value = values.mean()
    if pd.isna(fill_value):
        raise AllRowsFiltered(f"Cannot impute '{col}': column has no non-null values")

    out[col] = values.fillna(fill_value)
    return out, float(fill_value)


def drop_incomplete(df: pd.DataFrame, cols: Sequence[str] = OUTCOME_COLS) -> pd.DataFrame:
    """Keep only rows where every column in `cols` is non-null."""
    require_columns(df, cols, where="drop_incomplete")
    return df.dropna(subset=list(cols)).copy()


def rank_levels(values: pd.Series) -> pd.DataFrame:
    """
    Rank the non-null labels of `values` by frequency.

    Ties are broken by first appearance so the ranking only depends on
    the row order of the input.

    Returns:
        DataFrame indexed by label with columns count, first_pos
    """
    non_null = values.dropna().astype(object)
    frame = pd.DataFrame({
        'label': non_null.values,
        'pos': np.arange(len(non_null)),
    })
    ranking = (
        frame.groupby('label', sort=False)
        .agg(count=('pos', 'size'), first_pos=('pos', 'min'))
        .sort_values(['count', 'first_pos'], ascending=[False, True], kind='mergesort')
    )
    return ranking


def lump_top_n(
    values: pd.Series,
    n: int = DEFAULT_TOP_N,
    other_label: str = OTHER_LABEL
) -> pd.Series:
    """
    Collapse a categorical column to its `n` most frequent labels.

    The top `n` labels keep their value; everything else, nulls
    included, becomes `other_label`.

    Args:
        values: Categorical or string column
        n: Number of labels to keep
        other_label: Label for the merged remainder

    Returns:
        Categorical Series (same index) with categories in rank order,
        `other_label` last when it is used
    """
    if n < 1:
        raise ValueError(f"n must be >= 1, got {n}")

    keep = list(rank_levels(values).index[:n])
    as_obj = values.astype(object)
    lumped = as_obj.where(as_obj.isin(keep), other_label)

    categories = list(keep)
    if (lumped == other_label).any() and other_label not in categories:
        categories.append(other_label)

    return pd.Series(
        pd.Categorical(lumped, categories=categories),
        index=values.index,
        name=values.name,
    )


def clean_panel(
    df: pd.DataFrame,
    impute_col: str = TESTS,
    outcome_cols: Sequence[str] = OUTCOME_COLS,
    region_col: str = REGION_COL,
    top_n: int = DEFAULT_TOP_N,
    other_label: str = OTHER_LABEL
) -> pd.DataFrame:
    """Run the three cleaning steps and return the clean table."""
    clean, _ = clean_panel_with_report(
        df,
        impute_col=impute_col,
        outcome_cols=outcome_cols,
        region_col=region_col,
        top_n=top_n,
        other_label=other_label,
    )
    return clean


def clean_panel_with_report(
    df: pd.DataFrame,
    impute_col: str = TESTS,
    outcome_cols: Sequence[str] = OUTCOME_COLS,
    region_col: str = REGION_COL,
    top_n: int = DEFAULT_TOP_N,
    other_label: str = OTHER_LABEL,
    verbose: bool = False
) -> Tuple[pd.DataFrame, CleaningReport]:
    """
    Impute, filter and collapse the raw panel.

    Args:
        df: Raw panel from the loader
        impute_col: Column to mean-impute (mean over the unfiltered table)
        outcome_cols: Rows missing any of these are dropped
        region_col: Categorical column to collapse
        top_n: Labels kept by the collapse (ranked after filtering)
        other_label: Label for the merged remainder
        verbose: Print progress

    Returns:
        (clean DataFrame with a fresh RangeIndex, CleaningReport)

    Raises:
        MissingColumn: a required column is absent
        AllRowsFiltered: no row survives the outcome filter
    """
    require_columns(
        df, [impute_col, *outcome_cols, region_col], where="clean_panel"
    )

    n_imputed = int(df[impute_col].isna().sum())
    imputed, fill_value = impute_mean(df, impute_col)
    if verbose:
        print(f"Imputing '{impute_col}' with mean {fill_value:,.2f}...")
        print(f"  → {n_imputed} values filled")

    filtered = drop_incomplete(imputed, outcome_cols)
    if filtered.empty:
        raise AllRowsFiltered(
            f"All {len(df)} rows have a null in one of {list(outcome_cols)}"
        )
    if verbose:
        print(f"Dropping rows with missing {', '.join(outcome_cols)}...")
        print(f"  → {len(filtered)}/{len(df)} rows kept")

    kept = list(rank_levels(filtered[region_col]).index[:top_n])
    n_lumped = int((~filtered[region_col].isin(kept)).sum())
    filtered[region_col] = lump_top_n(filtered[region_col], n=top_n, other_label=other_label)
    if verbose:
        print(f"Collapsing '{region_col}' to top {top_n} labels...")
        print(f"  → {filtered[region_col].nunique()} distinct labels, "
              f"{n_lumped} rows relabelled '{other_label}'")

    clean = filtered.reset_index(drop=True)
    report = CleaningReport(
        rows_in=len(df),
        rows_out=len(clean),
        fill_value=fill_value,
        n_imputed=n_imputed,
        kept_labels=kept,
        n_lumped=n_lumped,
    )
    return clean, report
