"""
Data Loader for COVID-19 Policy EDA - STAGE 1: Data Acquisition

This module handles:
1. Fetching the COVID-19 Data Hub table at a given administrative level
2. Validating that the returned frame is usable
3. Caching the raw download as parquet so later steps can rerun offline

Source:
- COVID-19 Data Hub: https://covid19datahub.io/ (client: covid19dh)
"""
import pandas as pd
from pathlib import Path
from typing import Optional, Union

from covid19dh import covid19

from covid_eda.common.errors import SourceUnavailable
from covid_eda.data.schema import DATE_COL, SOURCE_KEY_COLS


def validate_source_frame(df) -> pd.DataFrame:
    """
    Check that the data source returned a usable table.

    Args:
        df: Object returned by the data source

    Returns:
        The same DataFrame with `date` parsed to datetime64

    Raises:
        SourceUnavailable: not a DataFrame, empty, or missing region/date
    """
    if not isinstance(df, pd.DataFrame):
        raise SourceUnavailable(
            f"Data source returned {type(df).__name__}, expected a DataFrame"
        )
    if df.empty:
        raise SourceUnavailable("Data source returned an empty table")

    missing = [c for c in SOURCE_KEY_COLS if c not in df.columns]
    if missing:
        raise SourceUnavailable(f"Data source table is missing columns: {missing}")

    df = df.copy()
    try:
        df[DATE_COL] = pd.to_datetime(df[DATE_COL])
    except (ValueError, TypeError) as exc:
        raise SourceUnavailable(f"Unparseable '{DATE_COL}' column: {exc}") from exc

    return df


def fetch_covid19(level: int = 2, raw: bool = False, verbose: bool = False) -> pd.DataFrame:
    """
    Fetch the full observation table for all regions and dates.

    No date range or region filter is applied here; filtering happens
    downstream. There is no retry policy.

    Args:
        level: Administrative area level (1 country, 2 state, 3 city)
        raw: If False, the Data Hub returns its cleaned cumulative counts
        verbose: Pass through to the client (prints data source references)

    Returns:
        DataFrame with one row per (region, date)

    Raises:
        SourceUnavailable: the service failed or returned malformed data
    """
    try:
        result = covid19(level=level, raw=raw, verbose=verbose)
    except Exception as exc:
        raise SourceUnavailable(f"COVID-19 Data Hub request failed: {exc}") from exc

    # The client returns (data, sources)
    if isinstance(result, tuple):
        result = result[0]

    return validate_source_frame(result)


def load_panel(
    level: int = 2,
    cache_path: Optional[Union[str, Path]] = None,
    refresh: bool = False,
    raw: bool = False
) -> pd.DataFrame:
    """
    Load the observation panel, reading a parquet cache when available.

    Args:
        level: Administrative area level
        cache_path: If provided, read from / write the raw download to this path
        refresh: Ignore an existing cache and fetch again
        raw: Passed to fetch_covid19

    Returns:
        Raw (uncleaned) panel DataFrame
    """
    if cache_path is not None:
        cache_path = Path(cache_path)
        if cache_path.exists() and not refresh:
            print(f"Loading cached panel from {cache_path}...")
            panel = validate_source_frame(pd.read_parquet(cache_path))
            print(f"  → {len(panel)} rows loaded")
            return panel

    print(f"Fetching COVID-19 Data Hub (level={level})...")
    panel = fetch_covid19(level=level, raw=raw)
    print(f"  → {len(panel)} rows loaded")

    if cache_path is not None:
        cache_path.parent.mkdir(parents=True, exist_ok=True)
        panel.to_parquet(cache_path, index=False)
        print(f"  → Saved to {cache_path}")

    return panel
