"""
Calculator input boundary.

Raw form text is parsed into numbers here, before the engine sees anything.
An empty or non-numeric field leaves the calculator incomplete instead of
producing an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .engine import ConsensusEngine, ConsensusResult, evaluate


class FieldStatus(Enum):
    OK = "ok"
    EMPTY = "empty"
    UNPARSEABLE = "unparseable"


@dataclass(frozen=True)
class ParsedField:
    raw: str
    status: FieldStatus
    value: float | None = None

    @property
    def complete(self) -> bool:
        return self.status is FieldStatus.OK


def parse_field(raw: str | float | int | None) -> ParsedField:
    """Parse one free-text field into a float or an incomplete state."""
    if raw is None:
        return ParsedField(raw="", status=FieldStatus.EMPTY)
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return ParsedField(raw=str(raw), status=FieldStatus.OK, value=float(raw))

    text = str(raw).strip()
    if not text:
        return ParsedField(raw=text, status=FieldStatus.EMPTY)
    try:
        value = float(text)
    except ValueError:
        return ParsedField(raw=text, status=FieldStatus.UNPARSEABLE)
    return ParsedField(raw=text, status=FieldStatus.OK, value=value)


@dataclass
class CalculatorInputs:
    """View state of the calculator page: the two text fields as typed."""
    mean_text: str = ""
    variance_text: str = ""

    @classmethod
    def from_defaults(cls, mean: float, variance: float) -> CalculatorInputs:
        return cls(mean_text=f"{mean:g}", variance_text=f"{variance:g}")

    @property
    def mean(self) -> ParsedField:
        return parse_field(self.mean_text)

    @property
    def variance(self) -> ParsedField:
        return parse_field(self.variance_text)

    @property
    def complete(self) -> bool:
        return self.mean.complete and self.variance.complete

    def pending_fields(self) -> list[str]:
        """Labels of the fields still waiting for a number."""
        pending = []
        if not self.mean.complete:
            pending.append("Mean (C)")
        if not self.variance.complete:
            pending.append("Variance (D)")
        return pending

    def evaluate(self, engine: ConsensusEngine | None = None) -> ConsensusResult | None:
        """Evaluate once both fields hold numbers; None while incomplete."""
        if not self.complete:
            return None
        mean, variance = self.mean.value, self.variance.value
        if engine is None:
            return evaluate(mean, variance)
        return engine.evaluate(mean, variance)
