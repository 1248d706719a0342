"""Data quality report for the raw and cleaned panels.

Tables printed by the load and clean scripts: missing values per column,
a numeric summary (min / quartiles / mean / max / NA count), and the
distinct labels of a categorical column with their counts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import pandas as pd

from covid_eda.data.schema import DATE_COL, REGION_COL


@dataclass
class PanelStats:
    n_rows: int
    n_columns: int
    n_regions: int
    date_min: pd.Timestamp | None
    date_max: pd.Timestamp | None


def compute_panel_stats(
    df: pd.DataFrame,
    region_col: str = REGION_COL,
    date_col: str = DATE_COL,
) -> PanelStats:
    has_dates = date_col in df.columns and df[date_col].notna().any()
    return PanelStats(
        n_rows=int(len(df)),
        n_columns=int(df.shape[1]),
        n_regions=int(df[region_col].nunique()) if region_col in df.columns else 0,
        date_min=df[date_col].min() if has_dates else None,
        date_max=df[date_col].max() if has_dates else None,
    )


def missingness_table(df: pd.DataFrame, cols: Optional[List[str]] = None) -> pd.DataFrame:
    cols = list(df.columns) if cols is None else cols
    present = df[cols].notna().sum().rename("present_count")
    miss_count = df[cols].isna().sum().rename("missing_count")
    miss_pct = (df[cols].isna().mean() * 100).rename("missing_pct")
    return (
        pd.concat([present, miss_count, miss_pct], axis=1)
        .reset_index()
        .rename(columns={"index": "column"})
        .sort_values(["missing_pct", "column"], ascending=[False, True], kind="mergesort")
        .reset_index(drop=True)
    )


def numeric_summary(df: pd.DataFrame, cols: Optional[List[str]] = None) -> pd.DataFrame:
    """Per numeric column: min, q1, median, mean, q3, max and NA count."""
    if cols is None:
        cols = list(df.select_dtypes(include="number").columns)

    rows = []
    for col in cols:
        s = pd.to_numeric(df[col], errors="coerce")
        valid = s.dropna()
        rows.append(
            {
                "column": col,
                "min": valid.min() if len(valid) else float("nan"),
                "q1": valid.quantile(0.25) if len(valid) else float("nan"),
                "median": valid.median() if len(valid) else float("nan"),
                "mean": valid.mean() if len(valid) else float("nan"),
                "q3": valid.quantile(0.75) if len(valid) else float("nan"),
                "max": valid.max() if len(valid) else float("nan"),
                "n_missing": int(s.isna().sum()),
            }
        )

    return pd.DataFrame(rows, columns=["column", "min", "q1", "median", "mean", "q3", "max", "n_missing"])


def level_counts(values: pd.Series) -> pd.DataFrame:
    """Distinct labels of a categorical column with row counts, most frequent first."""
    counts = values.astype(object).value_counts(dropna=False)
    out = counts.rename_axis("label").reset_index(name="count")
    return out.sort_values(["count"], ascending=False, kind="mergesort").reset_index(drop=True)
