"""
Parameter sweep over (mean, variance).

Evaluates the engine on a grid and returns a tidy DataFrame, one row per
pair, used by the CLI exports and the heatmaps.
"""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np
import pandas as pd

from ..logutil import get_logger
from .engine import SCALE_MAX, SCALE_MIN, ConsensusEngine

logger = get_logger("conscalc.consensus.sweep")

# Slack for float grids landing a hair outside the feasible band
FEASIBLE_TOL = 1e-12

SWEEP_COLUMNS = [
    "mean", "variance", "ok", "feasible",
    "E", "F", "G", "H", "I", "J", "K", "L",
    "error",
]


def feasible_variance_range(mean: float) -> tuple[float, float]:
    """Smallest and largest population variance of 1..5 responses with this mean."""
    if mean < SCALE_MIN or mean > SCALE_MAX:
        raise ValueError(f"mean must lie in [{SCALE_MIN:g}, {SCALE_MAX:g}], got {mean}")
    low = (mean - math.floor(mean)) * (math.ceil(mean) - mean)
    high = (mean - SCALE_MIN) * (SCALE_MAX - mean)
    return low, high


def is_feasible(mean: float, variance: float) -> bool:
    if not (SCALE_MIN <= mean <= SCALE_MAX):
        return False
    low, high = feasible_variance_range(mean)
    return low - FEASIBLE_TOL <= variance <= high + FEASIBLE_TOL


def evaluate_pairs(
    pairs: Iterable[tuple[float, float]], engine: ConsensusEngine | None = None
) -> pd.DataFrame:
    engine = engine or ConsensusEngine()
    rows = []
    for mean, variance in pairs:
        result = engine.evaluate(mean, variance)
        row = {
            "mean": mean,
            "variance": variance,
            "ok": result.ok,
            "feasible": result.ok and is_feasible(mean, variance),
            "error": result.error,
        }
        letters = result.letters()
        row.update({k: letters[k] for k in ("E", "F", "G", "H", "I", "J", "K", "L")})
        rows.append(row)
    df = pd.DataFrame(rows, columns=SWEEP_COLUMNS)
    invalid = int((~df["ok"]).sum()) if len(df) else 0
    if invalid:
        logger.warning(f"{invalid} of {len(df)} pairs were rejected by validation")
    return df


def disagreement_grid(
    means: Iterable[float],
    variances: Iterable[float],
    engine: ConsensusEngine | None = None,
) -> pd.DataFrame:
    """Evaluate every combination of the given means and variances."""
    means = np.asarray(list(means), dtype=float)
    variances = np.asarray(list(variances), dtype=float)
    if means.ndim != 1 or variances.ndim != 1:
        raise ValueError("means and variances must be one-dimensional")
    pairs = [(float(m), float(v)) for m in means for v in variances]
    logger.info(f"Sweeping {len(means)} means x {len(variances)} variances")
    return evaluate_pairs(pairs, engine)


def feasible_grid(
    n_means: int = 41, n_variances: int = 41, engine: ConsensusEngine | None = None
) -> pd.DataFrame:
    """
    Sweep the means across the scale, and for each mean only the variances a
    discrete 1..5 response set can actually produce.
    """
    if n_means < 2 or n_variances < 2:
        raise ValueError("grid needs at least 2 points per axis")
    pairs = []
    for mean in np.linspace(SCALE_MIN, SCALE_MAX, n_means):
        low, high = feasible_variance_range(float(mean))
        for variance in np.linspace(low, high, n_variances):
            pairs.append((float(mean), float(variance)))
    logger.info(f"Sweeping feasible band: {n_means} means x {n_variances} variances")
    return evaluate_pairs(pairs, engine)


def pivot_index(df: pd.DataFrame, value: str = "L", feasible_only: bool = True) -> pd.DataFrame:
    """Wide table (rows: variance, columns: mean) of one result column.

    Cells a discrete response set cannot produce are left as NaN unless
    feasible_only is False.
    """
    mask = df["feasible"] if feasible_only else df["ok"]
    kept = df[mask.astype(bool)]
    return kept.pivot_table(index="variance", columns="mean", values=value, aggfunc="first")


def summarize_grid(df: pd.DataFrame) -> dict[str, float | int]:
    valid = df[df["ok"]]
    if valid.empty:
        return {"n": int(len(df)), "n_valid": 0, "l_min": np.nan, "l_max": np.nan, "l_mean": np.nan}
    return {
        "n": int(len(df)),
        "n_valid": int(len(valid)),
        "l_min": float(valid["L"].min()),
        "l_max": float(valid["L"].max()),
        "l_mean": float(valid["L"].mean()),
    }
