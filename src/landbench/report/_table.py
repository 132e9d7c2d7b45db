"""Write histograms as text tables."""

from __future__ import annotations

from importlib.util import find_spec
from typing import TYPE_CHECKING, Final

import numpy as np

from ._data_frame import HistogramDataFrame

if TYPE_CHECKING:
    from pathlib import Path

    from numpy.typing import NDArray

    from landbench.logger import Scale

_HAVE_PANDAS: Final = find_spec("pandas") is not None
_HAVE_TABULATE: Final = find_spec("tabulate") is not None

if _HAVE_TABULATE:
    from tabulate import tabulate


def format_histogram(
    grid: NDArray[np.int64],
    x_scale: Scale,
    y_scale: Scale,
    *,
    tablefmt: str = "simple",
) -> str:
    """Render a histogram grid as a text table.

    The rows of the table are the time bins and the columns the quality bins,
    both labeled by the ranges of the bins.

    Args:
        grid:     The grid of counts.
        x_scale:  The scale of the time axis.
        y_scale:  The scale of the quality axis.
        tablefmt: The `tabulate` table format.

    Returns:
        The rendered table.

    Raises:
        NotImplementedError: If the tabulate module is not available.
        ValueError:          If the shape of the grid does not match the scales.
    """
    if not _HAVE_TABULATE:
        msg = "format_histogram requires the `tabulate` module"
        raise NotImplementedError(msg)
    grid = np.asarray(grid)
    if grid.shape != (x_scale.size, y_scale.size):
        msg = "The grid does not match the scales."
        raise ValueError(msg)

    headers = ["evaluations"] + [
        _label(*y_scale.bounds(idx)) for idx in range(y_scale.size)
    ]
    rows = [
        [_label(*x_scale.bounds(idx)), *(int(count) for count in grid[idx])]
        for idx in range(x_scale.size)
    ]
    return tabulate(rows, headers=headers, tablefmt=tablefmt)


def _label(lower: float, upper: float) -> str:
    return f"[{lower:g}, {upper:g})"


class HistogramTable(HistogramDataFrame):
    """Generate files containing tables of histogram cells.

    This class derives from the
    [`HistogramDataFrame`][landbench.report.HistogramDataFrame] class and
    writes the generated data frame in a tabular format to a text file.
    """

    def __init__(self, x_scale: Scale, y_scale: Scale, path: Path) -> None:
        """Initialize a histogram table.

        Args:
            x_scale: The scale of the time axis of the histograms.
            y_scale: The scale of the quality axis of the histograms.
            path:    Path of the table file.

        Raises:
            NotImplementedError: If the pandas or tabulate modules are not
                                 available.
            RuntimeError:        If the parent of the path is not a directory.
        """
        if not (_HAVE_TABULATE and _HAVE_PANDAS):
            msg = "HistogramTable requires the `tabulate` and `pandas` modules"
            raise NotImplementedError(msg)

        super().__init__(x_scale, y_scale)

        if path.parent.exists():
            if not path.parent.is_dir():
                msg = f"Cannot write table to: {path}"
                raise RuntimeError(msg)
        else:
            path.parent.mkdir(parents=True, exist_ok=True)

        self._path = path

    def save(self) -> None:
        """Write the table to a file."""
        frame = self._frame.reset_index()
        if not frame.empty:
            self._path.write_text(
                tabulate(
                    {str(column): frame[column] for column in frame},
                    headers="keys",
                    tablefmt="simple",
                    showindex=False,
                ),
            )
