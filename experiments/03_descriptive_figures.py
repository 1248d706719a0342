#!/usr/bin/env python3
"""
Experiment 03: Descriptive Figures

Renders the three descriptive charts from the clean panel:
1. Confirmed cases by region (boxplot)
2. Case trends over time by region
3. Stringency index vs confirmed cases with OLS trendline

Outputs:
  - results/figures/01_confirmed_by_region.{png,txt}
  - results/figures/02_case_trends_by_region.{png,txt}
  - results/figures/03_stringency_vs_confirmed.{png,txt}

Usage:
    python experiments/03_descriptive_figures.py
"""
import sys
import argparse
from pathlib import Path

import pandas as pd
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from covid_eda.config import load_config, get_project_root
from covid_eda.common.paths import output_dir, resolve_path
from covid_eda.visualization.plots import (
    boxplot_summary,
    plot_confirmed_boxplot,
    plot_confirmed_trends,
    plot_stringency_scatter,
    save_figure_with_description,
)


plt.style.use('seaborn-v0_8-darkgrid')


def load_clean_panel(cfg: dict) -> pd.DataFrame:
    path = resolve_path(cfg['data']['processed']['clean'])
    if not path.exists():
        raise FileNotFoundError(
            f'Missing {path}. Run experiments/02_clean_panel.py first.'
        )
    return pd.read_parquet(path)


def main():
    parser = argparse.ArgumentParser(description="Descriptive figures")
    parser.add_argument('--config', type=str, default='config/config_default.yaml',
                        help='Path to config file')
    args = parser.parse_args()

    cfg = load_config(str(get_project_root() / args.config))
    region_col = cfg['columns']['region']
    date_col = cfg['columns']['date']
    dpi = int(cfg['plots']['dpi'])
    fig_dir = output_dir(cfg, 'figures')

    print("=" * 60)
    print("COVID-19 POLICY EDA - DESCRIPTIVE FIGURES")
    print("=" * 60)

    clean = load_clean_panel(cfg)
    print(f"Loaded {len(clean)} clean rows")

    print("\nBoxplot summary (confirmed by region):")
    print(boxplot_summary(clean, group_col=region_col).to_string())

    print("\nGenerating figures...")
    save_figure_with_description(
        plot_confirmed_boxplot(clean, group_col=region_col),
        fig_dir / "01_confirmed_by_region",
        title="Distribution of Confirmed Cases by Region",
        description="Boxplot of cumulative confirmed cases per level-2 region "
                    "(top regions by row count, remainder grouped as Other).",
        interpretation="Shows how case counts are spread within and across regions; "
                       "points beyond the whiskers are outlying days.",
        caveats="Counts are cumulative, so each box mixes early and late dates.",
        dpi=dpi,
    )
    save_figure_with_description(
        plot_confirmed_trends(clean, group_col=region_col, date_col=date_col),
        fig_dir / "02_case_trends_by_region",
        title="COVID-19 Case Trends Over Time by Region",
        description="Cumulative confirmed cases by date, one line per region.",
        interpretation="Compares the timing and steepness of growth between regions.",
        caveats="The Other line joins many regions' rows in date order.",
        dpi=dpi,
    )
    save_figure_with_description(
        plot_stringency_scatter(clean),
        fig_dir / "03_stringency_vs_confirmed",
        title="Relationship Between Stringency Index and Confirmed Cases",
        description="Each point is one region-day; the line is a simple OLS fit.",
        interpretation="Indicates whether stricter policy coincides with higher "
                       "or lower cumulative case counts.",
        caveats="Association only; stringency often rises in response to cases.",
        dpi=dpi,
    )

    print("\n✓ Descriptive figures complete!")


if __name__ == "__main__":
    main()
