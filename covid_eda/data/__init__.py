"""Data module - loading, quality report, and cleaning."""

from covid_eda.data.loader import (
    fetch_covid19,
    load_panel,
    validate_source_frame,
)

from covid_eda.data.cleaning import (
    CleaningReport,
    impute_mean,
    drop_incomplete,
    lump_top_n,
    clean_panel,
    clean_panel_with_report,
)

from covid_eda.data.quality import (
    PanelStats,
    compute_panel_stats,
    missingness_table,
    numeric_summary,
    level_counts,
)

__all__ = [
    # Loader
    'fetch_covid19',
    'load_panel',
    'validate_source_frame',
    # Cleaning
    'CleaningReport',
    'impute_mean',
    'drop_incomplete',
    'lump_top_n',
    'clean_panel',
    'clean_panel_with_report',
    # Quality report
    'PanelStats',
    'compute_panel_stats',
    'missingness_table',
    'numeric_summary',
    'level_counts',
]
