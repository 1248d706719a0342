"""Visualization module - descriptive charts and residual diagnostics."""

from covid_eda.visualization.plots import (
    save_figure_with_description,
    boxplot_summary,
    plot_confirmed_boxplot,
    plot_confirmed_trends,
    plot_stringency_scatter,
    plot_residual_histogram,
    plot_residuals_vs_fitted,
)

__all__ = [
    'save_figure_with_description',
    'boxplot_summary',
    'plot_confirmed_boxplot',
    'plot_confirmed_trends',
    'plot_stringency_scatter',
    'plot_residual_histogram',
    'plot_residuals_vs_fitted',
]
