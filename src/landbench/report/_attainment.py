"""Aggregation of histograms into attainment surfaces."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from landbench.logger import RunHistogram

if TYPE_CHECKING:
    from collections.abc import Iterable

    from numpy.typing import NDArray


def attainment(
    histograms: Iterable[RunHistogram | NDArray[np.int64]],
    *,
    maximize: bool = False,
) -> NDArray[np.float64]:
    """Compute an empirical attainment surface from run histograms.

    For each run, a cell `(i, j)` is attained if the run produced an
    observation in a time bin up to `i`, with a quality bin up to `j` (or from
    `j` upwards, when maximizing). The result holds, for every cell, the
    fraction of runs that attained it. The fractions never decrease with the
    time bin.

    Args:
        histograms: The histograms of the runs, or their grids.
        maximize:   Whether higher quality bins are better.

    Returns:
        An array with the shape of the grids.

    Raises:
        ValueError: If no histograms are given, or their shapes differ.
    """
    grids = [
        item.grid if isinstance(item, RunHistogram) else np.asarray(item)
        for item in histograms
    ]
    if not grids:
        msg = "At least one histogram is required."
        raise ValueError(msg)
    if any(grid.shape != grids[0].shape for grid in grids):
        msg = "All histograms must have the same shape."
        raise ValueError(msg)

    hits = np.stack(grids) > 0
    if maximize:
        hits = hits[..., ::-1]
    reached = np.logical_or.accumulate(np.logical_or.accumulate(hits, axis=1), axis=2)
    if maximize:
        reached = reached[..., ::-1]
    return reached.mean(axis=0)
