"""Generate a histogram report in a `pandas` data frame."""

from __future__ import annotations

from importlib.util import find_spec
from typing import TYPE_CHECKING, Final

import numpy as np

if TYPE_CHECKING:
    from landbench.logger import HistogramLogger, RunHistogram, Scale

_HAVE_PANDAS: Final = find_spec("pandas") is not None

if _HAVE_PANDAS:
    import pandas as pd

_INDEX: Final = ["run_id", "x_bin", "y_bin"]
_COLUMNS: Final = [
    "problem_id",
    "instance",
    "dimension",
    "x_lower",
    "x_upper",
    "y_lower",
    "y_upper",
    "count",
]


class HistogramDataFrame:
    """Generate a histogram report in a `pandas` DataFrame.

    The class gathers the histograms of completed runs, as stored by a
    [`HistogramLogger`][landbench.logger.HistogramLogger], in a
    [`pandas`](https://pandas.pydata.org/) DataFrame. The frame has one row
    per non-empty cell of each run, indexed by the run number and the bin
    indices, with columns holding the problem, the bounds of the bins and the
    count.

    New histograms can be added as runs complete using the
    [`add_run`][landbench.report.HistogramDataFrame.add_run] method. The
    updated table can be retrieved at any time via the
    [`frame`][landbench.report.HistogramDataFrame.frame] property.
    """

    def __init__(self, x_scale: Scale, y_scale: Scale) -> None:
        """Initialize a HistogramDataFrame object.

        Args:
            x_scale: The scale of the time axis of the histograms.
            y_scale: The scale of the quality axis of the histograms.

        Raises:
            NotImplementedError: If the pandas module is not available.
        """
        if not _HAVE_PANDAS:
            msg = "HistogramDataFrame requires the `pandas` module"
            raise NotImplementedError(msg)

        self._x_scale = x_scale
        self._y_scale = y_scale
        self._frame = pd.DataFrame(columns=_INDEX + _COLUMNS).set_index(_INDEX)

    @classmethod
    def from_logger(cls, logger: HistogramLogger) -> HistogramDataFrame:
        """Create a report from the completed runs of a logger.

        Args:
            logger: The histogram logger.

        Returns:
            A new report, holding the runs stored by the logger.
        """
        report = cls(logger.x_scale, logger.y_scale)
        for histogram in logger.runs:
            report.add_run(histogram)
        return report

    def add_run(self, histogram: RunHistogram) -> bool:
        """Add the histogram of a run to the table.

        Args:
            histogram: The histogram to add.

        Returns:
            True if the histogram had non-empty cells, else False.

        Raises:
            ValueError: If the shape of the grid does not match the scales.
        """
        if histogram.grid.shape != (self._x_scale.size, self._y_scale.size):
            msg = "The histogram does not match the scales of the report."
            raise ValueError(msg)

        x_bins, y_bins = np.nonzero(histogram.grid)
        if x_bins.size == 0:
            return False

        x_bounds = np.array([self._x_scale.bounds(int(idx)) for idx in x_bins])
        y_bounds = np.array([self._y_scale.bounds(int(idx)) for idx in y_bins])
        frame = pd.DataFrame(
            {
                "run_id": histogram.run_id,
                "x_bin": x_bins,
                "y_bin": y_bins,
                "problem_id": histogram.problem_id,
                "instance": histogram.instance,
                "dimension": histogram.dimension,
                "x_lower": x_bounds[:, 0],
                "x_upper": x_bounds[:, 1],
                "y_lower": y_bounds[:, 0],
                "y_upper": y_bounds[:, 1],
                "count": histogram.grid[x_bins, y_bins],
            }
        ).set_index(_INDEX)
        self._frame = (
            frame if self._frame.empty else pd.concat([self._frame, frame])
        )
        return True

    @property
    def frame(self) -> pd.DataFrame:
        """Return the histogram cells gathered so far.

        Returns:
            A pandas data frame with the cells.
        """
        return self._frame
