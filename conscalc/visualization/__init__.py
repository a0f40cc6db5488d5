"""Plotly and Matplotlib renderings of ConsCalc results."""

from . import plots as plots  # noqa: F401
