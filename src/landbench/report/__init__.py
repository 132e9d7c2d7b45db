"""Reporting of histogram logger results.

The functions and classes in this module aggregate the histograms of completed
runs, as stored by a [`HistogramLogger`][landbench.logger.HistogramLogger]:

- [`attainment`][landbench.report.attainment] computes the empirical
  attainment surface of a set of runs, using `numpy`.
- [`HistogramDataFrame`][landbench.report.HistogramDataFrame] gathers the
  cells of the runs in a [`pandas`](https://pandas.pydata.org/) DataFrame, and
  [`HistogramTable`][landbench.report.HistogramTable] writes it to a text
  file.
- [`format_histogram`][landbench.report.format_histogram] renders a single
  grid as a text table.

The latter require the optional `pandas` and `tabulate` modules.
"""

from ._attainment import attainment
from ._data_frame import HistogramDataFrame
from ._table import HistogramTable, format_histogram

__all__ = [
    "HistogramDataFrame",
    "HistogramTable",
    "attainment",
    "format_histogram",
]
