"""Labels, help text and number formatting for rendering a ConsensusResult."""
from __future__ import annotations

import math

from .consensus.engine import ConsensusResult

PLACEHOLDER = "---"
MISSING = "N/A"

FIELD_LABELS = {
    "C": "Mean (C)",
    "D": "Variance (D)",
    "E": "Transformed Mean (E)",
    "F": "Upper Bound (F)",
    "G": "Lower Bound (G)",
    "H": "Transformed Variance (H)",
    "I": "Normalization Factor (I)",
    "J": "Cumulative Disagreement (J)",
    "K": "Consensus Core (K)",
    "L": "Index of Disagreement (L)",
}

FIELD_DESCRIPTIONS = {
    "E": "Folds the mean onto the 1-3 range around the scale midpoint.",
    "F": "Half-width of the upper deviation band at this mean.",
    "G": "Half-width of the lower deviation band, clamped at 0.",
    "H": "The variance rescaled into the same band units as F and G.",
    "I": "Total feasible disagreement volume; scales J - K into [0, 1].",
    "J": "Cumulative disagreement up to the observed variance.",
    "K": "Consensus core: the part of J that any group at this mean must carry.",
    "L": "0 is maximum consensus, 1 is maximum disagreement.",
}

DETAIL_KEYS = ("E", "F", "G", "H", "I", "J", "K")


def format_value(value: float | None, precision: int = 6) -> str:
    if value is None or not math.isfinite(value):
        return MISSING
    return f"{value:.{precision}f}"


def headline(result: ConsensusResult | None, precision: int = 6) -> str:
    """The big number under the gauge; a placeholder unless the result is valid."""
    if result is None or not result.ok:
        return PLACEHOLDER
    return format_value(result.index_of_disagreement, precision)


def gauge_position(result: ConsensusResult | None) -> float:
    """
    Pointer position on a consensus gauge, 0 = high disagreement, 1 = high
    consensus. The gauge shows 1 - L, clamped so out-of-range ties stay on the bar.
    """
    if result is None or not result.ok:
        return 0.0
    return max(0.0, min(1.0, 1.0 - result.index_of_disagreement))


def detail_rows(result: ConsensusResult, precision: int = 4) -> list[dict[str, str]]:
    """One row per intermediate E..K for the detailed-steps panel."""
    if not result.ok:
        return []
    letters = result.letters()
    return [
        {
            "key": key,
            "label": FIELD_LABELS[key],
            "value": format_value(letters[key], precision),
            "help": FIELD_DESCRIPTIONS[key],
        }
        for key in DETAIL_KEYS
    ]
