#!/usr/bin/env python3
"""
Experiment 02: Clean Panel

Applies the three cleaning steps to the cached raw panel:
1. Mean-impute `tests` (mean over the unfiltered table)
2. Drop rows missing confirmed / deaths / recovered
3. Collapse the level-2 region to its top-N labels + "Other"

Output: data/processed/panel_clean.parquet

Usage:
    python experiments/02_clean_panel.py
    python experiments/02_clean_panel.py --config config/config_default.yaml
"""
import sys
import argparse
import warnings
from pathlib import Path

import pandas as pd

# Add project root to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from covid_eda.config import load_config, get_project_root
from covid_eda.common.paths import resolve_path
from covid_eda.data.cleaning import clean_panel_with_report
from covid_eda.data.quality import level_counts, missingness_table


def main():
    parser = argparse.ArgumentParser(description="Clean COVID-19 panel")
    parser.add_argument('--config', type=str, default='config/config_default.yaml',
                        help='Path to config file')
    args = parser.parse_args()
    
    cfg = load_config(str(get_project_root() / args.config))
    proc = cfg['processing']
    region_col = cfg['columns']['region']
    
    raw_path = resolve_path(cfg['data']['cache'])
    if not raw_path.exists():
        raise FileNotFoundError(
            f'Missing {raw_path}. Run experiments/01_load_panel.py first.'
        )
    clean_path = resolve_path(cfg['data']['processed']['clean'])
    
    print("=" * 60)
    print("COVID-19 POLICY EDA - CLEAN PANEL")
    print("=" * 60)
    
    raw = pd.read_parquet(raw_path)
    print(f"Loaded {len(raw)} raw rows from {raw_path.name}")
    
    clean, report = clean_panel_with_report(
        raw,
        impute_col=proc['impute_mean'],
        outcome_cols=proc['required_outcomes'],
        region_col=region_col,
        top_n=int(proc['lump']['top_n']),
        other_label=proc['lump']['other_label'],
        verbose=True,
    )
    
    print("\n" + "=" * 60)
    print("CLEANING REPORT")
    print("=" * 60)
    print(f"Rows: {report.rows_in} → {report.rows_out} ({report.rows_dropped} dropped)")
    print(f"Imputed {report.n_imputed} '{proc['impute_mean']}' values with {report.fill_value:,.2f}")
    print(f"Kept labels: {report.kept_labels}")
    if len(report.kept_labels) < int(proc['lump']['top_n']):
        warnings.warn(
            f"Only {len(report.kept_labels)} distinct regions survived cleaning "
            f"(top_n={proc['lump']['top_n']}); no region was merged by frequency"
        )
    print(f"Rows relabelled '{proc['lump']['other_label']}': {report.n_lumped}")
    
    print("\nRegion levels after collapsing:")
    print(level_counts(clean[region_col]).to_string(index=False))
    
    print("\nRemaining missing data:")
    miss = missingness_table(clean)
    print(miss[miss['missing_count'] > 0].to_string(index=False))
    
    clean_path.parent.mkdir(parents=True, exist_ok=True)
    clean.to_parquet(clean_path, index=False)
    print(f"\n  → Saved to {clean_path}")
    print("\n✓ Cleaning complete!")
    return clean


if __name__ == "__main__":
    main()
