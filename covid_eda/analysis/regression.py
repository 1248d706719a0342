"""
OLS Regression for COVID-19 Policy EDA - STAGE 3

Fits confirmed cases on the government response indices and population:

    confirmed ~ stringency_index + government_response_index + population

Rows with a null in any model column are dropped for the fit only; the
clean table itself is left as is. The residual vector stays aligned with
the index of the rows actually used.

The least-squares numerics are statsmodels'; this module checks the
design matrix, packages the results, and renders an R-style summary.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

import numpy as np
import pandas as pd
import statsmodels.api as sm
from scipy import stats

from covid_eda.common.errors import AllRowsFiltered, RankDeficient, require_columns
from covid_eda.data.schema import REGRESSION_PREDICTORS, REGRESSION_TARGET


INTERCEPT = "Intercept"


@dataclass
class RegressionResult:
    """Everything `summary(lm(...))` reports, plus residuals and fitted values."""
    target: str
    predictors: List[str]
    coefficients: pd.DataFrame
    residual_std_error: float
    df_resid: int
    df_model: int
    r_squared: float
    adj_r_squared: float
    f_statistic: float
    f_pvalue: float
    n_obs: int
    n_dropped: int
    residuals: pd.Series = field(repr=False)
    fitted: pd.Series = field(repr=False)

    @property
    def formula(self) -> str:
        return f"{self.target} ~ {' + '.join(self.predictors)}"

    @property
    def params(self) -> pd.Series:
        return self.coefficients['estimate']

    def summary_text(self) -> str:
        """Render the fit as an R `summary.lm`-style text block."""
        q = self.residuals.quantile([0.0, 0.25, 0.5, 0.75, 1.0]).values
        resid_table = pd.DataFrame(
            [q], columns=['Min', '1Q', 'Median', '3Q', 'Max']
        ).to_string(index=False, float_format=lambda v: f"{v:.4g}")

        coef_table = self.coefficients.rename(columns={
            'estimate': 'Estimate',
            'std_error': 'Std. Error',
            't_value': 't value',
            'p_value': 'Pr(>|t|)',
        }).to_string(float_format=lambda v: f"{v:.4e}")

        lines = [
            "Call:",
            f"lm(formula = {self.formula})",
            "",
            "Residuals:",
            resid_table,
            "",
            "Coefficients:",
            coef_table,
            "",
            f"Residual standard error: {self.residual_std_error:.4g} "
            f"on {self.df_resid} degrees of freedom",
        ]
        if self.n_dropped:
            lines.append(f"  ({self.n_dropped} observations deleted due to missingness)")
        lines.extend([
            f"Multiple R-squared:  {self.r_squared:.4g},\t"
            f"Adjusted R-squared:  {self.adj_r_squared:.4g}",
            f"F-statistic: {self.f_statistic:.4g} on {self.df_model} and "
            f"{self.df_resid} DF,  p-value: {self.f_pvalue:.4g}",
        ])
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serialisable summary (no per-row vectors)."""
        return {
            'formula': self.formula,
            'n_obs': self.n_obs,
            'n_dropped': self.n_dropped,
            'coefficients': {
                name: {k: float(v) for k, v in row.items()}
                for name, row in self.coefficients.iterrows()
            },
            'residual_std_error': self.residual_std_error,
            'df_resid': self.df_resid,
            'df_model': self.df_model,
            'r_squared': self.r_squared,
            'adj_r_squared': self.adj_r_squared,
            'f_statistic': self.f_statistic,
            'f_pvalue': self.f_pvalue,
        }


def design_matrix(data: pd.DataFrame, predictors: Sequence[str]) -> pd.DataFrame:
    """Predictor columns as float with a leading intercept column."""
    X = data[list(predictors)].astype(float)
    X = sm.add_constant(X, has_constant='add')
    return X.rename(columns={'const': INTERCEPT})


def check_full_rank(X: pd.DataFrame) -> None:
    """
    Raise RankDeficient unless X has full column rank.

    Columns are scaled to unit norm first so that large-valued
    predictors (population) do not mask a collinear intercept.
    """
    values = X.to_numpy(dtype=float)
    norms = np.linalg.norm(values, axis=0)
    norms[norms == 0] = 1.0
    rank = int(np.linalg.matrix_rank(values / norms))
    if rank < X.shape[1]:
        raise RankDeficient(rank, X.shape[1], X.columns)


def fit_ols(
    df: pd.DataFrame,
    target: str = REGRESSION_TARGET,
    predictors: Sequence[str] = REGRESSION_PREDICTORS
) -> RegressionResult:
    """
    Fit `target ~ predictors` by ordinary least squares.

    Args:
        df: Clean panel
        target: Response column
        predictors: Predictor columns (an intercept is always added)

    Returns:
        RegressionResult

    Raises:
        MissingColumn: a model column is absent
        AllRowsFiltered: no complete rows, or no residual degrees of freedom
        RankDeficient: a predictor is constant or collinear
    """
    predictors = list(predictors)
    cols = [target, *predictors]
    require_columns(df, cols, where="fit_ols")

    data = df[cols].dropna()
    n_params = len(predictors) + 1
    if data.empty:
        raise AllRowsFiltered(
            f"No rows with non-null {cols}; nothing to fit"
        )
    if len(data) <= n_params:
        raise AllRowsFiltered(
            f"{len(data)} complete rows for {n_params} parameters; "
            f"need more rows than parameters"
        )

    X = design_matrix(data, predictors)
    check_full_rank(X)
    y = data[target].astype(float)

    fit = sm.OLS(y, X).fit()

    coefficients = pd.DataFrame({
        'estimate': fit.params,
        'std_error': fit.bse,
        't_value': fit.tvalues,
        'p_value': fit.pvalues,
    })

    return RegressionResult(
        target=target,
        predictors=predictors,
        coefficients=coefficients,
        residual_std_error=float(np.sqrt(fit.mse_resid)),
        df_resid=int(fit.df_resid),
        df_model=int(fit.df_model),
        r_squared=float(fit.rsquared),
        adj_r_squared=float(fit.rsquared_adj),
        f_statistic=float(fit.fvalue),
        f_pvalue=float(fit.f_pvalue),
        n_obs=int(fit.nobs),
        n_dropped=int(len(df) - len(data)),
        residuals=fit.resid.rename('residual'),
        fitted=fit.fittedvalues.rename('fitted'),
    )


def fit_trendline(df: pd.DataFrame, x: str, y: str) -> Tuple[float, float]:
    """Simple one-predictor OLS line; returns (intercept, slope)."""
    result = fit_ols(df, target=y, predictors=[x])
    return float(result.params[INTERCEPT]), float(result.params[x])


def residual_diagnostics(result: RegressionResult) -> Dict[str, float]:
    """
    Shape of the residual distribution.

    Returns mean, standard deviation, skewness, excess kurtosis and the
    Jarque-Bera normality test.
    """
    resid = result.residuals.to_numpy(dtype=float)
    jb = stats.jarque_bera(resid)
    return {
        'mean': float(np.mean(resid)),
        'std': float(np.std(resid, ddof=1)),
        'skewness': float(stats.skew(resid)),
        'kurtosis': float(stats.kurtosis(resid)),
        'jarque_bera': float(jb.statistic),
        'jarque_bera_pvalue': float(jb.pvalue),
    }
