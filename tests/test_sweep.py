import numpy as np
import pytest

from conscalc.consensus import ConsensusEngine
from conscalc.consensus.sweep import (
    SWEEP_COLUMNS,
    disagreement_grid,
    feasible_grid,
    feasible_variance_range,
    is_feasible,
    pivot_index,
    summarize_grid,
)


def test_feasible_variance_range():
    assert feasible_variance_range(3.0) == (0.0, 4.0)
    assert feasible_variance_range(2.5) == (0.25, 3.75)
    assert feasible_variance_range(1.0) == (0.0, 0.0)
    assert feasible_variance_range(5.0) == (0.0, 0.0)
    with pytest.raises(ValueError):
        feasible_variance_range(0.5)


def test_is_feasible():
    assert is_feasible(3.0, 4.0)
    assert not is_feasible(3.0, 4.5)
    assert not is_feasible(2.5, 0.0)
    assert not is_feasible(6.0, 1.0)


def test_disagreement_grid_shape_and_values():
    df = disagreement_grid([1.0, 3.0, 5.0], [0.0, 1.0])
    assert list(df.columns) == SWEEP_COLUMNS
    assert len(df) == 6
    assert df["ok"].all()
    row = df[(df["mean"] == 3.0) & (df["variance"] == 1.0)].iloc[0]
    assert row["L"] == 0.125
    assert row["K"] == 0.875
    assert bool(row["feasible"])


def test_grid_marks_rejected_pairs():
    df = disagreement_grid([0.5, 3.0], [1.0])
    assert df["ok"].tolist() == [False, True]
    assert df["feasible"].tolist() == [False, True]
    assert df.loc[0, "error"].startswith("Invalid input.")
    assert np.isnan(df.loc[0, "L"])


def test_grid_uses_given_engine():
    df = disagreement_grid([3.0], [3.0, 5.0], engine=ConsensusEngine(max_variance=4.0))
    assert df["ok"].tolist() == [True, False]


def test_grid_requires_one_dimensional_axes():
    with pytest.raises(ValueError):
        disagreement_grid([[1.0, 2.0]], [0.0])


def test_feasible_grid_stays_in_unit_interval():
    df = feasible_grid(21, 11)
    assert len(df) == 21 * 11
    assert df["ok"].all() and df["feasible"].all()
    assert df["L"].min() >= -1e-9
    assert df["L"].max() <= 1 + 1e-9


def test_feasible_grid_needs_two_points():
    with pytest.raises(ValueError):
        feasible_grid(1, 5)


def test_pivot_masks_infeasible_cells():
    df = disagreement_grid([2.5, 3.0], [0.0, 1.0])
    wide = pivot_index(df)
    assert list(wide.columns) == [2.5, 3.0]
    assert np.isnan(wide.loc[0.0, 2.5])
    assert wide.loc[1.0, 3.0] == 0.125

    full = pivot_index(df, feasible_only=False)
    assert not np.isnan(full.loc[0.0, 2.5])


def test_summarize_grid():
    df = disagreement_grid([0.5, 3.0], [1.0])
    summary = summarize_grid(df)
    assert summary["n"] == 2
    assert summary["n_valid"] == 1
    assert summary["l_min"] == summary["l_max"] == 0.125

    empty = summarize_grid(disagreement_grid([9.0], [1.0]))
    assert empty["n_valid"] == 0
    assert np.isnan(empty["l_mean"])
