"""Shared schemas for ConsCalc."""

from .schemas import EvaluationPayload, Publication

__all__ = ['EvaluationPayload', 'Publication']
