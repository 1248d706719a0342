import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")


@pytest.fixture
def linear_panel():
    """Noise-free panel: confirmed = 5 + 2*si - 3*gri + 0.01*population."""
    rng = np.random.default_rng(42)
    n = 60
    df = pd.DataFrame({
        "administrative_area_level_2": rng.choice(["A", "B", "C"], size=n),
        "date": pd.date_range("2020-03-01", periods=n, freq="D"),
        "stringency_index": rng.uniform(0, 100, n),
        "government_response_index": rng.uniform(0, 100, n),
        "population": rng.integers(50_000, 5_000_000, n),
    })
    df["confirmed"] = (
        5
        + 2 * df["stringency_index"]
        - 3 * df["government_response_index"]
        + 0.01 * df["population"]
    )
    return df


@pytest.fixture
def noisy_panel(linear_panel):
    rng = np.random.default_rng(7)
    df = linear_panel.copy()
    df["confirmed"] = df["confirmed"] + rng.normal(0, 50, len(df))
    return df
