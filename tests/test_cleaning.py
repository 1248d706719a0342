import numpy as np
import pandas as pd
import pytest

from covid_eda.common.errors import AllRowsFiltered, MissingColumn
from covid_eda.data.cleaning import (
    clean_panel,
    clean_panel_with_report,
    drop_incomplete,
    impute_mean,
    lump_top_n,
    rank_levels,
)

REGION = "administrative_area_level_2"


def _panel(regions, confirmed, deaths, recovered, tests=None):
    n = len(regions)
    return pd.DataFrame({
        REGION: regions,
        "confirmed": confirmed,
        "deaths": deaths,
        "recovered": recovered,
        "tests": tests if tests is not None else [1.0] * n,
    })


def test_impute_mean_fills_nulls_with_input_mean():
    df = pd.DataFrame({"tests": [1.0, np.nan, 3.0, np.nan]})
    out, fill = impute_mean(df, "tests")
    assert fill == 2.0
    assert out["tests"].notna().all()
    assert list(out["tests"]) == [1.0, 2.0, 3.0, 2.0]


def test_impute_mean_keeps_existing_values_and_input():
    df = pd.DataFrame({"tests": [10, None, 40]}, dtype="Int64")
    out, _ = impute_mean(df, "tests")
    assert out.loc[0, "tests"] == 10
    assert out.loc[2, "tests"] == 40
    # input left untouched
    assert df["tests"].isna().sum() == 1


def test_impute_mean_reapplied_is_noop():
    df = pd.DataFrame({"tests": [1.0, np.nan, 5.0]})
    once, _ = impute_mean(df, "tests")
    twice, _ = impute_mean(once, "tests")
    pd.testing.assert_frame_equal(once, twice)


def test_impute_mean_all_null_raises():
    df = pd.DataFrame({"tests": [np.nan, np.nan]})
    with pytest.raises(AllRowsFiltered):
        impute_mean(df, "tests")


def test_drop_incomplete_requires_all_outcomes():
    df = _panel(
        ["A", "A", "A", "A"],
        confirmed=[1, np.nan, 3, 4],
        deaths=[1, 1, np.nan, 1],
        recovered=[1, 1, 1, np.nan],
    )
    out = drop_incomplete(df)
    assert list(out.index) == [0]
    assert out[["confirmed", "deaths", "recovered"]].notna().all().all()


def test_three_row_example():
    df = _panel(
        ["A", "A", "B"],
        confirmed=[10, 20, np.nan],
        deaths=[1, 2, 3],
        recovered=[5, 10, 15],
        tests=[100, np.nan, 300],
    )
    clean = clean_panel(df)

    assert len(clean) == 2
    assert list(clean[REGION]) == ["A", "A"]
    assert list(clean["confirmed"]) == [10, 20]
    # mean is taken before the null-confirmed row is dropped
    assert list(clean["tests"]) == [100.0, 200.0]


def test_lump_keeps_top_ten_and_merges_rest():
    labels = []
    for i in range(12):
        labels.extend([f"R{i:02d}"] * (20 - i))
    out = lump_top_n(pd.Series(labels), n=10)

    assert out.nunique() == 11
    kept = {f"R{i:02d}" for i in range(10)}
    assert kept.issubset(set(out))
    assert (out[pd.Series(labels).isin(["R10", "R11"])] == "Other").all()
    assert list(out.cat.categories)[-1] == "Other"


def test_lump_below_cardinality_is_unchanged():
    values = pd.Series(["A", "B", "A", "C"])
    out = lump_top_n(values, n=10)
    assert list(out) == ["A", "B", "A", "C"]
    assert "Other" not in out.cat.categories


def test_lump_ties_broken_by_first_appearance():
    values = pd.Series(["b", "a", "b", "a", "c"])
    out = lump_top_n(values, n=1)
    assert list(out) == ["b", "Other", "b", "Other", "Other"]


def test_lump_nulls_become_other():
    values = pd.Series(["A", None, "A", np.nan])
    out = lump_top_n(values, n=10)
    assert list(out) == ["A", "Other", "A", "Other"]


def test_lump_custom_label_and_index_preserved():
    values = pd.Series(["x", "y", "y"], index=[10, 20, 30])
    out = lump_top_n(values, n=1, other_label="rest")
    assert list(out.index) == [10, 20, 30]
    assert list(out) == ["rest", "y", "y"]


def test_rank_levels_counts():
    ranking = rank_levels(pd.Series(["a", "b", "b", None]))
    assert list(ranking.index) == ["b", "a"]
    assert list(ranking["count"]) == [2, 1]


def test_collapse_ranks_after_filtering():
    # X is the most frequent label overall but every X row is dropped
    regions = ["X"] * 5 + ["Y", "Y", "Z"]
    confirmed = [np.nan] * 5 + [1, 2, 3]
    df = _panel(regions, confirmed, [1] * 8, [1] * 8)

    clean = clean_panel(df, top_n=1)
    assert list(clean[REGION]) == ["Y", "Y", "Other"]


def test_clean_output_invariants():
    rng = np.random.default_rng(3)
    n = 400
    regions = rng.choice([f"R{i}" for i in range(25)], size=n)
    confirmed = rng.integers(0, 1000, n).astype(float)
    confirmed[rng.random(n) < 0.1] = np.nan
    deaths = rng.integers(0, 50, n).astype(float)
    deaths[rng.random(n) < 0.1] = np.nan
    tests = rng.integers(0, 5000, n).astype(float)
    tests[rng.random(n) < 0.3] = np.nan
    df = _panel(regions, confirmed, deaths, rng.integers(0, 500, n), tests)

    clean = clean_panel(df)

    assert clean[["confirmed", "deaths", "recovered"]].notna().all().all()
    assert clean["tests"].notna().all()
    assert clean[REGION].nunique() <= 11
    filtered = df.dropna(subset=["confirmed", "deaths", "recovered"])
    top10 = list(rank_levels(filtered[REGION]).index[:10])
    relabelled = ~filtered[REGION].isin(top10).to_numpy()
    assert (clean[REGION].astype(object).to_numpy()[relabelled] == "Other").all()
    assert (clean[REGION].astype(object).to_numpy()[~relabelled]
            == filtered[REGION].to_numpy()[~relabelled]).all()


def test_clean_is_deterministic_and_pure():
    df = _panel(
        ["A", "B", "C", "B", None],
        confirmed=[1, 2, 3, 4, 5],
        deaths=[0, 0, 0, 0, 0],
        recovered=[1, 1, 1, 1, 1],
        tests=[np.nan, 2, 3, 4, 5],
    )
    before = df.copy()
    first = clean_panel(df, top_n=2)
    second = clean_panel(df, top_n=2)

    pd.testing.assert_frame_equal(first, second)
    pd.testing.assert_frame_equal(df, before)
    # B leads; A and C tie on count, A appears first
    assert list(first[REGION]) == ["A", "B", "Other", "B", "Other"]


def test_clean_missing_column_raises():
    df = _panel(["A"], [1], [1], [1]).drop(columns=["recovered"])
    with pytest.raises(MissingColumn) as exc:
        clean_panel(df)
    assert exc.value.columns == ["recovered"]
    assert isinstance(exc.value, KeyError)


def test_clean_all_rows_filtered_raises():
    df = _panel(["A", "B"], [np.nan, np.nan], [1, 1], [1, 1])
    with pytest.raises(AllRowsFiltered):
        clean_panel(df)


def test_cleaning_report():
    df = _panel(
        ["A", "A", "B", "C"],
        confirmed=[1, 2, np.nan, 4],
        deaths=[1, 1, 1, 1],
        recovered=[1, 1, 1, 1],
        tests=[np.nan, 2.0, 4.0, np.nan],
    )
    clean, report = clean_panel_with_report(df, top_n=1)
    assert report.rows_in == 4
    assert report.rows_out == 3
    assert report.rows_dropped == 1
    assert report.n_imputed == 2
    assert report.fill_value == 3.0
    assert report.kept_labels == ["A"]
    assert report.n_lumped == 1
    assert list(clean.index) == [0, 1, 2]
