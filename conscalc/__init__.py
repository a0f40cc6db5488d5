"""ConsCalc: Index of Disagreement calculator for Likert-scale summaries."""

from .config import load_config  # noqa: F401
from .consensus import ConsensusEngine, ConsensusResult, InvalidInput, evaluate  # noqa: F401

__version__ = "0.1.0"
