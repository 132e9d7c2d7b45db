"""Helpers for the pydantic models that hold instance parameters."""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray
from pydantic import BaseModel


def immutable_array(
    array_like: ArrayLike,
    **kwargs: Any,  # noqa: ANN401
) -> NDArray[Any]:
    """Copy data into a read-only NumPy array.

    Instance parameters and histogram grids are shared between problems and
    loggers, the returned copy can therefore not be written to.

    Args:
        array_like: The data to copy.
        kwargs:     Passed on to `numpy.array`, e.g. `dtype` or `ndmin`.

    Returns:
        A read-only copy of the data.
    """
    array = np.array(array_like, **kwargs)
    array.setflags(write=False)
    return array


def is_permutation(array: NDArray[Any], size: int) -> bool:
    """Check if an array holds each index in `[0, size)` exactly once.

    Args:
        array: The array to check.
        size:  The number of indices.

    Returns:
        `True` if the array is a permutation of `range(size)`.
    """
    return array.size == size and np.array_equal(np.sort(array), np.arange(size))


def _convert_1d_array(array: ArrayLike | None) -> NDArray[np.float64] | None:
    if array is None:
        return array
    return immutable_array(array, dtype=np.float64, ndmin=1)


def _convert_1d_array_intc(array: ArrayLike | None) -> NDArray[np.intc] | None:
    if array is None:
        return array
    return immutable_array(array, dtype=np.intc, ndmin=1)


def _convert_1d_array_bool(
    array: ArrayLike | None,
) -> NDArray[np.bool_] | None:
    if array is None:
        return array
    return immutable_array(array, dtype=np.bool_, ndmin=1)


def _convert_2d_array(array: ArrayLike | None) -> NDArray[np.float64] | None:
    if array is None:
        return array
    return immutable_array(array, dtype=np.float64, ndmin=2)


class ImmutableBaseModel(BaseModel):
    """Base model that is locked after validation.

    Subclasses may still fill in derived fields in an `after` model validator,
    by calling `_mutable()` first, and lock the model again with
    `_immutable()`. Any later attribute assignment raises an `AttributeError`.
    """

    _is_immutable: bool

    def _immutable(self) -> None:
        self._is_immutable = True

    def _mutable(self) -> None:
        self._is_immutable = False

    def __setattr__(self, name: str, value: Any) -> None:  # noqa: ANN401
        """Set an attribute, unless the model is locked.

        Raises:
            AttributeError: If the model is locked.
        """
        if name != "_is_immutable" and self._is_immutable:
            msg = f"{self.__class__.__name__} is immutable"
            raise AttributeError(msg)
        super().__setattr__(name, value)
