#!/usr/bin/env python3
"""
Experiment 01: Load Panel Dataset

Fetches the COVID-19 Data Hub table at administrative level 2 (or reads
the local cache) and prints a first look at it:
- preview of the first rows
- missing values per column
- numeric summary (min / quartiles / mean / max)

Output: data/raw/covid19_level2.parquet (cache of the raw download)

Usage:
    python experiments/01_load_panel.py
    python experiments/01_load_panel.py --refresh
    python experiments/01_load_panel.py --config config/config_default.yaml
"""
import sys
import argparse
from pathlib import Path

import pandas as pd

# Add project root to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from covid_eda.config import load_config, get_project_root
from covid_eda.common.paths import resolve_path
from covid_eda.data.loader import load_panel
from covid_eda.data.quality import compute_panel_stats, missingness_table, numeric_summary


def main():
    parser = argparse.ArgumentParser(description="Load COVID-19 panel dataset")
    parser.add_argument(
        "--config", 
        type=str, 
        default="config/config_default.yaml",
        help="Path to config file"
    )
    parser.add_argument(
        "--refresh",
        action="store_true",
        help="Ignore the local cache and fetch again"
    )
    args = parser.parse_args()
    
    cfg = load_config(str(get_project_root() / args.config))
    source = cfg['data']['source']
    cache_path = resolve_path(cfg['data']['cache'])
    
    print("=" * 60)
    print("COVID-19 POLICY EDA - LOAD PANEL")
    print("=" * 60)
    
    panel = load_panel(
        level=int(source['level']),
        cache_path=cache_path,
        refresh=args.refresh,
        raw=bool(source.get('raw', False)),
    )
    
    stats = compute_panel_stats(panel, region_col=cfg['columns']['region'])
    print("\n" + "=" * 60)
    print("PANEL SUMMARY")
    print("=" * 60)
    print(f"Total rows: {stats.n_rows}")
    print(f"Columns: {stats.n_columns}")
    print(f"Unique regions: {stats.n_regions}")
    print(f"Date range: {stats.date_min} - {stats.date_max}")
    
    with pd.option_context('display.max_columns', 20, 'display.width', 160):
        print("\nFirst rows:")
        print(panel.head())
        
        print("\nMissing data:")
        miss = missingness_table(panel)
        print(miss[miss['missing_count'] > 0].to_string(index=False))
        
        print("\nNumeric summary:")
        print(numeric_summary(panel).to_string(index=False))
    
    print("\n✓ Panel load complete!")
    return panel


if __name__ == "__main__":
    main()
