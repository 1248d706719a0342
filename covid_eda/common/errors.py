"""
Error types for the analysis pipeline.

Every failure is fatal to the run: nothing here is retried or
recovered from. Scripts let these propagate with their message.
"""
from typing import Iterable, Optional


class AnalysisError(Exception):
    """Base class for all pipeline failures."""


class SourceUnavailable(AnalysisError):
    """The data source could not be reached or returned malformed data."""


class MissingColumn(AnalysisError, KeyError):
    """One or more expected columns are absent from a table."""

    def __init__(self, columns: Iterable[str], where: Optional[str] = None):
        self.columns = sorted(set(columns))
        self.where = where
        msg = f"Missing required columns: {self.columns}"
        if where:
            msg = f"{where}: {msg}"
        super().__init__(msg)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class RankDeficient(AnalysisError):
    """Regression design matrix is not of full column rank."""

    def __init__(self, rank: int, n_params: int, columns: Iterable[str] = ()):
        self.rank = rank
        self.n_params = n_params
        self.columns = list(columns)
        super().__init__(
            f"Design matrix has rank {rank} < {n_params} parameters "
            f"({', '.join(self.columns)}); a predictor is constant or collinear"
        )


class AllRowsFiltered(AnalysisError):
    """Filtering left no usable rows for the next stage."""


def require_columns(df, columns: Iterable[str], where: Optional[str] = None) -> None:
    """Raise MissingColumn if any of `columns` is not in `df`."""
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise MissingColumn(missing, where=where)
