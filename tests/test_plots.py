import warnings

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest

from covid_eda.analysis.regression import fit_ols
from covid_eda.common.errors import AllRowsFiltered
from covid_eda.visualization.plots import (
    boxplot_summary,
    plot_confirmed_boxplot,
    plot_confirmed_trends,
    plot_residual_histogram,
    plot_residuals_vs_fitted,
    plot_stringency_scatter,
    save_figure_with_description,
)

REGION = "administrative_area_level_2"


def test_boxplot_summary_five_numbers_and_outliers():
    df = pd.DataFrame({
        REGION: ["A"] * 5 + ["B"] * 3 + [None],
        "confirmed": [1, 2, 3, 4, 100, 10, 20, 30, 999],
    })
    summary = boxplot_summary(df)

    assert list(summary.index) == ["A", "B"]
    a = summary.loc["A"]
    assert (a["min"], a["q1"], a["median"], a["q3"], a["max"]) == (1, 2, 3, 4, 100)
    assert a["whisker_high"] == 4
    assert a["n_outliers"] == 1
    assert summary.loc["B", "median"] == 20
    assert summary.loc["B", "n_outliers"] == 0


def test_boxplot_has_one_box_per_region(linear_panel):
    fig = plot_confirmed_boxplot(linear_panel)
    labels = [t.get_text() for t in fig.axes[0].get_xticklabels()]
    assert sorted(labels) == ["A", "B", "C"]


def test_trends_one_line_per_region_in_date_order(linear_panel):
    shuffled = linear_panel.sample(frac=1, random_state=0)
    fig = plot_confirmed_trends(shuffled)
    lines = fig.axes[0].get_lines()
    assert len(lines) == 3
    for line in lines:
        x = pd.to_datetime(pd.Series(line.get_xdata()))
        assert x.is_monotonic_increasing


def test_trends_skip_null_regions(linear_panel):
    df = linear_panel.copy()
    df[REGION] = df[REGION].astype(object)
    df.loc[df.index[:5], REGION] = None
    fig = plot_confirmed_trends(df)
    assert len(fig.axes[0].get_lines()) == 3


def test_scatter_trendline_matches_simple_ols():
    df = pd.DataFrame({"stringency_index": np.linspace(0, 100, 21)})
    df["confirmed"] = 50.0 + 3.0 * df["stringency_index"]
    fig = plot_stringency_scatter(df)

    line = fig.axes[0].get_lines()[0]
    x, y = np.asarray(line.get_xdata()), np.asarray(line.get_ydata())
    np.testing.assert_allclose(y, 50.0 + 3.0 * x)


def test_residual_histogram_uses_requested_bins(noisy_panel):
    result = fit_ols(noisy_panel)
    fig = plot_residual_histogram(result, bins=30)
    assert len(fig.axes[0].patches) == 30


def test_residuals_vs_fitted_has_zero_line(noisy_panel):
    result = fit_ols(noisy_panel)
    fig = plot_residuals_vs_fitted(result)
    ax = fig.axes[0]
    assert list(ax.get_lines()[0].get_ydata()) == [0, 0]
    assert len(ax.collections[0].get_offsets()) == result.n_obs


def test_empty_input_raises():
    empty = pd.DataFrame({REGION: [], "date": [], "confirmed": [], "stringency_index": []})
    with pytest.raises(AllRowsFiltered):
        plot_confirmed_boxplot(empty)
    with pytest.raises(AllRowsFiltered):
        plot_confirmed_trends(empty)
    with pytest.raises(AllRowsFiltered):
        plot_stringency_scatter(empty)


def test_save_figure_with_description(tmp_path):
    fig, ax = plt.subplots()
    ax.plot([0, 1], [0, 1])
    png = save_figure_with_description(
        fig,
        tmp_path / "figs" / "example",
        title="Example",
        description="A line",
        interpretation="Goes up",
        dpi=50,
    )
    assert png == tmp_path / "figs" / "example.png"
    assert png.exists()
    text = (tmp_path / "figs" / "example.txt").read_text()
    assert text.startswith("FIGURE: Example")
    assert "CAVEATS" not in text


def test_trends_warn_when_colours_repeat():
    df = pd.DataFrame({
        REGION: [f"R{i:02d}" for i in range(13) for _ in range(2)],
        "date": list(pd.to_datetime(["2020-03-01", "2020-03-02"])) * 13,
        "confirmed": np.arange(26, dtype=float),
    })
    with pytest.warns(UserWarning, match="colours"):
        fig = plot_confirmed_trends(df)
    assert len(fig.axes[0].get_lines()) == 13


def test_trends_no_warning_for_few_regions(linear_panel):
    with warnings.catch_warnings():
        warnings.filterwarnings("error", message=".*colours")
        plot_confirmed_trends(linear_panel)
