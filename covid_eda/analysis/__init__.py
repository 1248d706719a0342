"""Analysis module - OLS regression and residual diagnostics."""

from covid_eda.analysis.regression import (
    INTERCEPT,
    RegressionResult,
    design_matrix,
    check_full_rank,
    fit_ols,
    fit_trendline,
    residual_diagnostics,
)

__all__ = [
    'INTERCEPT',
    'RegressionResult',
    'design_matrix',
    'check_full_rank',
    'fit_ols',
    'fit_trendline',
    'residual_diagnostics',
]
