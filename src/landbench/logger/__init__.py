"""Loggers of benchmarking runs.

The [`HistogramLogger`][landbench.logger.HistogramLogger] converts the stream
of observations of a run into a grid of counts, indexed by the bins of two
scales: one for the evaluation count and one for the objective value. The
scales are defined in the [`scales`][landbench.logger.scales] module.
"""

from ._histogram import HistogramLogger, RunHistogram
from .scales import (
    IntegerScale,
    LinearIntegerScale,
    LinearRealScale,
    Log2IntegerScale,
    Log2RealScale,
    Log10IntegerScale,
    Log10RealScale,
    RealScale,
    Scale,
)

__all__ = [
    "HistogramLogger",
    "IntegerScale",
    "LinearIntegerScale",
    "LinearRealScale",
    "Log2IntegerScale",
    "Log2RealScale",
    "Log10IntegerScale",
    "Log10RealScale",
    "RealScale",
    "RunHistogram",
    "Scale",
]
