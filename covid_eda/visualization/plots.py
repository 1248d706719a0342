"""
Figures for COVID-19 Policy EDA - STAGE 4

Descriptive charts on the clean panel:
1. Confirmed cases by region (boxplot)
2. Confirmed cases over time, one line per region
3. Stringency index vs confirmed cases with a linear trendline

Residual diagnostics for the fitted regression:
4. Residual histogram
5. Residuals vs fitted values

Each plot function returns the Figure; saving is left to the caller
(see save_figure_with_description).
"""
import warnings
from pathlib import Path

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from matplotlib import cbook

from covid_eda.analysis.regression import RegressionResult, fit_trendline
from covid_eda.common.errors import AllRowsFiltered, require_columns
from covid_eda.data.schema import CONFIRMED, DATE_COL, REGION_COL, STRINGENCY


FIGSIZE = (12, 6)
DPI = 100

COLORS = {
    'points': '#2E86AB',
    'trend': 'blue',
    'reference': 'red',
    'bars': '#95A5A6',
}


def _require_rows(df: pd.DataFrame, what: str) -> None:
    if len(df) == 0:
        raise AllRowsFiltered(f"No rows left to plot for {what}")


def _drop_null_groups(df: pd.DataFrame, group_col: str) -> pd.DataFrame:
    return df[df[group_col].notna()]


def save_figure_with_description(
    fig: plt.Figure,
    filepath: Path,
    title: str,
    description: str,
    interpretation: str,
    caveats: str = "",
    dpi: int = 300
) -> Path:
    """
    Save figure as PNG and create accompanying .txt description file.

    Args:
        fig: Matplotlib figure
        filepath: Path to save PNG (extension is replaced)
        title: Figure title
        description: What is shown
        interpretation: How to interpret
        caveats: Any caveats (optional)
        dpi: Output resolution

    Returns:
        Path of the PNG written
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    png_path = filepath.with_suffix('.png')
    fig.savefig(png_path, dpi=dpi, bbox_inches='tight', facecolor='white')
    print(f"  ✓ {png_path.name}")

    txt_path = filepath.with_suffix('.txt')
    with open(txt_path, 'w') as f:
        f.write(f"FIGURE: {title}\n")
        f.write("=" * 60 + "\n\n")
        f.write(f"WHAT IS SHOWN:\n{description}\n\n")
        f.write(f"WHY IT MATTERS:\n{interpretation}\n\n")
        if caveats:
            f.write(f"CAVEATS:\n{caveats}\n")

    plt.close(fig)
    return png_path


def boxplot_summary(
    df: pd.DataFrame,
    group_col: str = REGION_COL,
    value_col: str = CONFIRMED
) -> pd.DataFrame:
    """
    Five-number summary per group, as drawn by the boxplot.

    Whiskers extend to the most extreme point within 1.5 IQR of the box;
    points beyond are outliers. Rows with a null group are skipped.

    Returns:
        DataFrame indexed by group with n, min, q1, median, q3, max,
        whisker_low, whisker_high, n_outliers
    """
    require_columns(df, [group_col, value_col], where="boxplot_summary")
    data = _drop_null_groups(df, group_col).dropna(subset=[value_col])

    rows = []
    for group, g in data.groupby(group_col, observed=True, sort=False):
        values = g[value_col].to_numpy(dtype=float)
        bxp = cbook.boxplot_stats(values, whis=1.5)[0]
        rows.append({
            'group': group,
            'n': len(values),
            'min': float(values.min()),
            'q1': float(bxp['q1']),
            'median': float(bxp['med']),
            'q3': float(bxp['q3']),
            'max': float(values.max()),
            'whisker_low': float(bxp['whislo']),
            'whisker_high': float(bxp['whishi']),
            'n_outliers': int(len(bxp['fliers'])),
        })

    return pd.DataFrame(rows).set_index('group') if rows else pd.DataFrame()


def plot_confirmed_boxplot(
    df: pd.DataFrame,
    group_col: str = REGION_COL,
    value_col: str = CONFIRMED
) -> plt.Figure:
    """Distribution of confirmed cases per region."""
    require_columns(df, [group_col, value_col], where="plot_confirmed_boxplot")
    data = _drop_null_groups(df, group_col).dropna(subset=[value_col])
    _require_rows(data, "the region boxplot")

    groups = [(str(k), g[value_col].to_numpy(dtype=float))
              for k, g in data.groupby(group_col, observed=True, sort=False)]

    fig, ax = plt.subplots(figsize=FIGSIZE, dpi=DPI)
    ax.boxplot([v for _, v in groups], whis=1.5)
    ax.set_xticks(range(1, len(groups) + 1))
    ax.set_xticklabels([k for k, _ in groups], rotation=45, ha='right')
    ax.set_title("Distribution of Confirmed Cases by Region")
    ax.set_xlabel("Region")
    ax.set_ylabel("Confirmed Cases")
    fig.tight_layout()
    return fig


def plot_confirmed_trends(
    df: pd.DataFrame,
    group_col: str = REGION_COL,
    date_col: str = DATE_COL,
    value_col: str = CONFIRMED
) -> plt.Figure:
    """Confirmed cases over time, one line per region (raw rows, date order)."""
    require_columns(df, [group_col, date_col, value_col], where="plot_confirmed_trends")
    data = _drop_null_groups(df, group_col)
    _require_rows(data, "the case trends chart")

    groups = list(data.groupby(group_col, observed=True, sort=False))
    cmap = plt.get_cmap('Paired')
    if len(groups) > cmap.N:
        warnings.warn(
            f"{len(groups)} regions but only {cmap.N} colours; line colours repeat"
        )

    fig, ax = plt.subplots(figsize=FIGSIZE, dpi=DPI)
    for i, (label, g) in enumerate(groups):
        g = g.sort_values(date_col, kind='mergesort')
        ax.plot(
            g[date_col],
            g[value_col],
            linewidth=0.8,
            alpha=0.7,
            color=cmap(i % cmap.N),
            label=str(label)
        )
    ax.set_title("COVID-19 Case Trends Over Time by Region")
    ax.set_xlabel("Date")
    ax.set_ylabel("Confirmed Cases")
    ax.legend(title="Region", loc='center left', bbox_to_anchor=(1.01, 0.5))
    plt.setp(ax.get_xticklabels(), rotation=45, ha='right')
    fig.tight_layout()
    return fig


def plot_stringency_scatter(
    df: pd.DataFrame,
    x_col: str = STRINGENCY,
    y_col: str = CONFIRMED
) -> plt.Figure:
    """Raw (stringency, confirmed) pairs with a simple OLS trendline."""
    require_columns(df, [x_col, y_col], where="plot_stringency_scatter")
    data = df[[x_col, y_col]].dropna()
    _require_rows(data, "the stringency scatter")

    intercept, slope = fit_trendline(data, x=x_col, y=y_col)
    x_line = np.linspace(data[x_col].min(), data[x_col].max(), 100)

    fig, ax = plt.subplots(figsize=(10, 6), dpi=DPI)
    ax.scatter(data[x_col], data[y_col], alpha=0.5, s=10, color=COLORS['points'])
    ax.plot(x_line, intercept + slope * x_line, color=COLORS['trend'], linewidth=2,
            label=f"OLS: y = {intercept:,.1f} + {slope:,.1f}x")
    ax.set_title("Relationship Between Stringency Index and Confirmed Cases")
    ax.set_xlabel("Stringency Index")
    ax.set_ylabel("Confirmed Cases")
    ax.legend(loc='upper left')
    fig.tight_layout()
    return fig


def plot_residual_histogram(result: RegressionResult, bins: int = 30) -> plt.Figure:
    _require_rows(result.residuals, "the residual histogram")

    fig, ax = plt.subplots(figsize=(10, 6), dpi=DPI)
    ax.hist(result.residuals, bins=bins, color=COLORS['bars'], edgecolor='black')
    ax.set_title("Residuals of the Regression Model")
    ax.set_xlabel("Residuals")
    ax.set_ylabel("Frequency")
    fig.tight_layout()
    return fig


def plot_residuals_vs_fitted(result: RegressionResult) -> plt.Figure:
    _require_rows(result.residuals, "the residual vs fitted plot")

    fig, ax = plt.subplots(figsize=(10, 6), dpi=DPI)
    ax.scatter(result.fitted, result.residuals, alpha=0.5, s=10, color=COLORS['points'])
    ax.axhline(0, color=COLORS['reference'], linewidth=1.5)
    ax.set_title("Residuals vs Fitted Values")
    ax.set_xlabel("Fitted values")
    ax.set_ylabel("Residuals")
    fig.tight_layout()
    return fig
