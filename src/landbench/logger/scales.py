"""Discretization scales for the histogram logger.

A scale divides a value range `[min, max]` into `size` contiguous bins. The
bins are given by `size + 1` increasing edges, computed once when the scale is
created: bin `i` covers the half-open range from `edges[i]` to `edges[i + 1]`.
Both [`bounds`][landbench.logger.scales.Scale.bounds] and
[`index`][landbench.logger.scales.Scale.index] read the same edges, so that
the lower bound of each bin is always mapped back to that bin.

Six scales are provided, crossing the value domain (real or integer) with the
growth of the bins (linear, or geometric in base 2 or 10). They can also be
created from a [`ScaleConfig`][landbench.config.ScaleConfig] object.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Final

import numpy as np

from landbench.enums import ScaleDomain, ScaleKind

if TYPE_CHECKING:
    from numpy.typing import NDArray


class Scale(ABC):
    """Abstract base class of the scales.

    Derived classes implement the
    [`_compute_edges`][landbench.logger.scales.Scale._compute_edges] method,
    returning the strictly increasing bin edges, where the first edge equals
    `min` and the last edge equals `max`.
    """

    def __init__(self, min: float, max: float, size: int) -> None:  # noqa: A002
        """Initialize the scale.

        Args:
            min:  The lower bound of the range.
            max:  The upper bound of the range.
            size: The number of bins.

        Raises:
            ValueError: If the range is empty, the size is not positive, or
                        the range is too narrow to separate the bin edges.
        """
        if min >= max:
            msg = f"The minimum of a scale must be smaller than its maximum: {min} >= {max}"
            raise ValueError(msg)
        if size <= 0:
            msg = f"The size of a scale must be positive, got {size}"
            raise ValueError(msg)
        self._min = min
        self._max = max
        self._size = size
        edges = np.asarray(self._compute_edges(), dtype=np.float64)
        if np.any(np.diff(edges) <= 0):
            msg = f"The bin edges of the scale are not strictly increasing: {self!r}"
            raise ValueError(msg)
        edges.setflags(write=False)
        self._edges = edges

    @abstractmethod
    def _compute_edges(self) -> NDArray[np.float64]:
        """Compute the bin edges.

        Returns:
            An increasing array of `size + 1` edges.
        """

    @property
    def min(self) -> float:
        """The lower bound of the range."""
        return self._min

    @property
    def max(self) -> float:
        """The upper bound of the range."""
        return self._max

    @property
    def size(self) -> int:
        """The number of bins."""
        return self._size

    @property
    def length(self) -> float:
        """The length of the range."""
        return self._max - self._min

    @property
    def edges(self) -> NDArray[np.float64]:
        """The bin edges, a read-only array of `size + 1` values."""
        return self._edges

    def bounds(self, i: int) -> tuple[float, float]:
        """Return the bounds of a bin.

        Args:
            i: The index of the bin.

        Returns:
            The lower bound, included in the bin, and the upper bound, excluded
            from the bin, except for the last bin.

        Raises:
            IndexError: If `i` is not in `[0, size)`.
        """
        if not 0 <= i < self._size:
            msg = f"Bin index {i} out of range [0, {self._size})"
            raise IndexError(msg)
        return float(self._edges[i]), float(self._edges[i + 1])

    def index(self, value: float) -> int:
        """Return the bin containing a value.

        Values outside the range are clamped to the first or the last bin.

        Args:
            value: The value.

        Returns:
            The index of the bin.
        """
        idx = int(np.searchsorted(self._edges, value, side="right")) - 1
        return min(max(idx, 0), self._size - 1)

    def __repr__(self) -> str:
        """Return a short description of the scale."""
        return (
            f"{self.__class__.__name__}(min={self._min}, max={self._max}, "
            f"size={self._size})"
        )


class RealScale(Scale):
    """Base class of the scales with real-valued edges."""


class IntegerScale(Scale):
    """Base class of the scales with integer edges.

    Integer scales require integral bounds, and a range of at least one unit
    per bin.
    """

    def __init__(self, min: int, max: int, size: int) -> None:  # noqa: A002
        """Initialize the scale.

        Args:
            min:  The lower bound of the range.
            max:  The upper bound of the range.
            size: The number of bins.

        Raises:
            ValueError: If the bounds are not integral, or the range is too
                        small for the number of bins.
        """
        if int(min) != min or int(max) != max:
            msg = "Integer scales require integer bounds."
            raise ValueError(msg)
        if max - min < size:
            msg = f"The range [{min}, {max}] is too small for {size} integer bins"
            raise ValueError(msg)
        super().__init__(int(min), int(max), size)

    def bounds(self, i: int) -> tuple[int, int]:  # type: ignore[override]
        """Return the bounds of a bin.

        Args:
            i: The index of the bin.

        Returns:
            The integer lower and upper bounds.

        Raises:
            IndexError: If `i` is not in `[0, size)`.
        """
        lower, upper = super().bounds(i)
        return int(lower), int(upper)


class LinearRealScale(RealScale):
    """Bins of equal width `(max - min) / size`."""

    def _compute_edges(self) -> NDArray[np.float64]:
        edges = self._min + np.arange(self._size + 1) * self.step()
        edges[-1] = self._max
        return edges

    def step(self) -> float:
        """Return the width of the bins."""
        return self.length / self._size


class LinearIntegerScale(IntegerScale):
    """Bins of equal integer width.

    The width is `(max - min) // size`, the last bin absorbs the remainder of
    the range.
    """

    def _compute_edges(self) -> NDArray[np.float64]:
        edges = self._min + np.arange(self._size + 1) * self.step()
        edges[-1] = self._max
        return edges.astype(np.float64)

    def step(self) -> int:
        """Return the integer width of the bins, except possibly the last."""
        return int(self.length) // self._size


class _LogScaleMixin:
    base: float
    _min: float
    _max: float
    _size: int

    def _log_edges(self) -> NDArray[np.float64]:
        exponents = (
            np.arange(self._size + 1)
            * np.log(self._max - self._min + 1.0)
            / np.log(self.base)
            / self._size
        )
        edges = self._min + self.base**exponents - 1.0
        edges[0] = self._min
        edges[-1] = self._max
        return edges


class _LogRealScale(_LogScaleMixin, RealScale):
    def _compute_edges(self) -> NDArray[np.float64]:
        return self._log_edges()


class _LogIntegerScale(_LogScaleMixin, IntegerScale):
    def _compute_edges(self) -> NDArray[np.float64]:
        edges = np.round(self._log_edges())
        for i in range(1, self._size):
            edges[i] = min(max(edges[i], edges[i - 1] + 1), self._max - (self._size - i))
        return edges


class Log2RealScale(_LogRealScale):
    r"""Bins growing geometrically, computed in base 2.

    Edge $i$ is given by $\min + 2^{i \log_2(L + 1) / n} - 1$, where $L$ is
    the length of the range and $n$ the number of bins. The first bins are
    narrow, and the bins widen towards the end of the range.
    """

    base = 2.0


class Log10RealScale(_LogRealScale):
    r"""Bins growing geometrically, computed in base 10.

    Edge $i$ is given by $\min + 10^{i \log_{10}(L + 1) / n} - 1$.
    """

    base = 10.0


class Log2IntegerScale(_LogIntegerScale):
    """Integer bins growing geometrically, computed in base 2.

    The edges of [`Log2RealScale`][landbench.logger.scales.Log2RealScale] are
    rounded to integers. Edges that would coincide after rounding are moved
    apart, so that every bin holds at least one integer.
    """

    base = 2.0


class Log10IntegerScale(_LogIntegerScale):
    """Integer bins growing geometrically, computed in base 10.

    See [`Log2IntegerScale`][landbench.logger.scales.Log2IntegerScale].
    """

    base = 10.0


SCALE_CLASSES: Final[dict[tuple[ScaleDomain, ScaleKind], type[Scale]]] = {
    (ScaleDomain.REAL, ScaleKind.LINEAR): LinearRealScale,
    (ScaleDomain.REAL, ScaleKind.LOG2): Log2RealScale,
    (ScaleDomain.REAL, ScaleKind.LOG10): Log10RealScale,
    (ScaleDomain.INTEGER, ScaleKind.LINEAR): LinearIntegerScale,
    (ScaleDomain.INTEGER, ScaleKind.LOG2): Log2IntegerScale,
    (ScaleDomain.INTEGER, ScaleKind.LOG10): Log10IntegerScale,
}
"""The scale classes, keyed by value domain and bin growth."""
