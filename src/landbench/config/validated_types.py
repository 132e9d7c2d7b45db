"""Annotated types for Pydantic models providing input conversion and validation.

These types leverage Pydantic's `BeforeValidator` to automatically convert
input values (like lists or scalars) into immutable NumPy arrays during model
initialization.

- [`Array1D`][landbench.config.validated_types.Array1D]: Converts input to an
  immutable 1D `np.float64` array.
- [`Array2D`][landbench.config.validated_types.Array2D]: Converts input to an
  immutable 2D `np.float64` array.
- [`Array1DInt`][landbench.config.validated_types.Array1DInt]: Converts input
  to an immutable 1D `np.intc` array.
- [`Array1DBool`][landbench.config.validated_types.Array1DBool]: Converts input
  to an immutable 1D `np.bool_` array.
"""

from typing import Annotated

import numpy as np
from numpy.typing import NDArray
from pydantic import BeforeValidator

from .utils import (
    _convert_1d_array,
    _convert_1d_array_bool,
    _convert_1d_array_intc,
    _convert_2d_array,
)

Array1D = Annotated[NDArray[np.float64], BeforeValidator(_convert_1d_array)]
"""Convert to an immutable 1D numpy array of floating point values."""

Array2D = Annotated[NDArray[np.float64], BeforeValidator(_convert_2d_array)]
"""Convert to an immutable 2D numpy array of floating point values."""

Array1DInt = Annotated[NDArray[np.intc], BeforeValidator(_convert_1d_array_intc)]
"""Convert to an immutable 1D numpy array of integer values."""

Array1DBool = Annotated[NDArray[np.bool_], BeforeValidator(_convert_1d_array_bool)]
"""Convert to an immutable 1D numpy array of boolean values."""
