"""
Index of Disagreement for Likert items

The engine maps a group's mean and variance to the Index of Disagreement (L)
and its intermediates. The input boundary and the grid sweep sit on top of it.
"""

from .engine import ConsensusEngine, ConsensusResult, InvalidInput, evaluate, validate_inputs
from .inputs import CalculatorInputs, FieldStatus, ParsedField, parse_field
from .sweep import disagreement_grid, feasible_grid, feasible_variance_range

__all__ = [
    "ConsensusEngine",
    "ConsensusResult",
    "InvalidInput",
    "evaluate",
    "validate_inputs",
    "CalculatorInputs",
    "FieldStatus",
    "ParsedField",
    "parse_field",
    "disagreement_grid",
    "feasible_grid",
    "feasible_variance_range",
]
