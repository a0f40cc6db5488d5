"""
Consensus Engine - Index of Disagreement for a 1-5 Likert item

Maps a group's mean (C) and variance (D) onto the Index of Disagreement (L)
via the conditional distribution of the variance for a given mean
(Akiyama et al., 2016). The intermediates E..K are returned alongside L so
callers can show every step of the derivation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Any

from ..core.schemas import EvaluationPayload
from ..logutil import get_logger

logger = get_logger("conscalc.consensus.engine")

SCALE_MIN = 1.0
SCALE_MAX = 5.0
SCALE_MIDPOINT = 3.0
# Beyond this H**3 leaves the float range
VARIANCE_LIMIT = 1e100

# Field name -> letter used on the calculator page and in payloads
LETTERS = {
    "mean": "C",
    "variance": "D",
    "transformed_mean": "E",
    "upper_bound": "F",
    "lower_bound": "G",
    "transformed_variance": "H",
    "normalization_factor": "I",
    "cumulative_disagreement": "J",
    "consensus_core": "K",
    "index_of_disagreement": "L",
}
NUMERIC_FIELDS = tuple(LETTERS)


class InvalidInput(ValueError):
    """Raised when mean/variance cannot be evaluated."""

    def __init__(self, violations: list[str]):
        self.violations = list(violations)
        super().__init__("Invalid input. " + "; ".join(self.violations) + ".")


@dataclass(frozen=True)
class ConsensusResult:
    """Outcome of one evaluation: every numeric field, or only an error."""
    mean: float | None = None
    variance: float | None = None
    transformed_mean: float | None = None
    upper_bound: float | None = None
    lower_bound: float | None = None
    transformed_variance: float | None = None
    normalization_factor: float | None = None
    cumulative_disagreement: float | None = None
    consensus_core: float | None = None
    index_of_disagreement: float | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        values = [getattr(self, name) for name in NUMERIC_FIELDS]
        if self.error is None:
            if any(v is None for v in values):
                raise ValueError("valid ConsensusResult requires all numeric fields")
        elif any(v is not None for v in values):
            raise ValueError("invalid ConsensusResult must not carry numeric fields")

    @classmethod
    def invalid(cls, message: str) -> ConsensusResult:
        return cls(error=message)

    @property
    def ok(self) -> bool:
        return self.error is None

    def letters(self) -> dict[str, float | None]:
        """Numeric fields keyed by their calculator letter (C..L)."""
        return {LETTERS[name]: getattr(self, name) for name in NUMERIC_FIELDS}

    def to_dict(self) -> dict[str, Any]:
        if not self.ok:
            return {"ok": False, "error": self.error}
        letters = self.letters()
        out: dict[str, Any] = {"ok": True, "mean": self.mean, "variance": self.variance}
        out.update({k: v for k, v in letters.items() if k not in ("C", "D")})
        return out

    def to_payload(self) -> EvaluationPayload:
        return EvaluationPayload(**self.to_dict())


def _is_finite_real(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def validate_inputs(mean: Any, variance: Any, max_variance: float | None = None) -> None:
    """
    Check mean/variance before any derivation runs.

    Raises:
        InvalidInput: listing every violated constraint
    """
    violations = []
    mean_ok = _is_finite_real(mean)
    variance_ok = _is_finite_real(variance)

    if not mean_ok:
        violations.append(f"Mean (C) must be a finite number, got {mean!r}")
    elif mean < SCALE_MIN or mean > SCALE_MAX:
        violations.append(f"Mean (C) must be between {SCALE_MIN:g} and {SCALE_MAX:g}, got {float(mean):g}")

    if not variance_ok:
        violations.append(f"Variance (D) must be a finite number, got {variance!r}")
    elif variance < 0:
        violations.append(f"Variance (D) must be non-negative, got {float(variance):g}")
    elif variance > VARIANCE_LIMIT:
        violations.append(f"Variance (D) must not exceed {VARIANCE_LIMIT:g}, got {float(variance):g}")
    elif max_variance is not None and variance > max_variance:
        violations.append(f"Variance (D) must not exceed {max_variance:g}, got {float(variance):g}")

    if violations:
        raise InvalidInput(violations)


def _cumulative_disagreement(H: float, F: float) -> float:
    if H < F:
        return H ** 3 / 3
    if H < 2 * F:
        return H ** 3 / 3 - (H - F) ** 3
    return 2 * F ** 3 + (H - 3 * F) ** 3 / 3


def _consensus_core(H: float, G: float) -> float:
    if H < 1.5 * G:
        return H ** 3 / 3 - 2 * (H - G) ** 3
    if H < 2 * G:
        return G ** 3 + (H - 2 * G) ** 3
    return G ** 3


def derive(mean: float, variance: float) -> ConsensusResult:
    """Run the derivation on already-validated input."""
    C = float(mean)
    D = float(variance)

    # Fold 1..5 onto 1..3 around the scale midpoint
    E = 2 * SCALE_MIDPOINT - C if C > SCALE_MIDPOINT else C
    F = (E - 1) / 2
    G = max(0.0, E - 2)
    H = (D + E ** 2 - 3 * E + 2) / 2
    I = 2 * F ** 3 - G ** 3  # noqa: E741

    if I == 0:
        J = K = L = 0.0
    else:
        J = _cumulative_disagreement(H, F)
        K = _consensus_core(H, G)
        L = (J - K) / I
        if not math.isfinite(L):
            raise OverflowError(f"L is not finite for mean={C} variance={D}")

    return ConsensusResult(
        mean=C,
        variance=D,
        transformed_mean=E,
        upper_bound=F,
        lower_bound=G,
        transformed_variance=H,
        normalization_factor=I,
        cumulative_disagreement=J,
        consensus_core=K,
        index_of_disagreement=L,
    )


class ConsensusEngine:
    """Stateless evaluator for the Index of Disagreement."""

    def __init__(self, max_variance: float | None = None) -> None:
        if max_variance is not None and (math.isnan(max_variance) or max_variance < 0):
            raise ValueError(f"max_variance must be a non-negative number or None, got {max_variance}")
        self.max_variance = max_variance

    @classmethod
    def from_config(cls, cfg) -> ConsensusEngine:
        return cls(max_variance=cfg.settings.max_variance)

    def evaluate(self, mean: Any, variance: Any) -> ConsensusResult:
        try:
            validate_inputs(mean, variance, self.max_variance)
        except InvalidInput as e:
            logger.debug(f"Rejected input mean={mean!r} variance={variance!r}: {e}")
            return ConsensusResult.invalid(str(e))
        try:
            result = derive(mean, variance)
        except OverflowError as e:
            logger.warning(f"Overflow for mean={mean!r} variance={variance!r}: {e}")
            return ConsensusResult.invalid(
                f"Invalid input. Variance (D) is too large to evaluate at mean {float(mean):g}.")
        logger.debug(f"Evaluated mean={mean} variance={variance} -> L={result.index_of_disagreement}")
        return result


_default_engine = ConsensusEngine()


def evaluate(mean: Any, variance: Any) -> ConsensusResult:
    """Evaluate with the default (uncapped) engine."""
    return _default_engine.evaluate(mean, variance)
