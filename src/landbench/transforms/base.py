"""This module defines the base classes for transforms."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import numpy as np
    from numpy.typing import NDArray


class VariableTransform(ABC):
    """Abstract base class for variable transformations.

    A variable transform maps a candidate solution, as passed by the user, to
    the input of the next transform in the chain, or of the base landscape if
    it is the last one. Transforms are pure: the result depends only on the
    input and on the parameters given at construction.

    When implementing a variable transformation, the following aspects must be
    considered:

    - **Forward transformation:** Mapping a candidate solution to the domain
      of the base landscape, implemented by the
      [`forward`][landbench.transforms.base.VariableTransform.forward] method.
    - **Inverse transformation:** Mapping a point of the base landscape back
      to a candidate solution. This is used once, when a problem is created,
      to place the known optimum of the base landscape in the user domain. It
      is implemented by the
      [`inverse`][landbench.transforms.base.VariableTransform.inverse] method.
    - **Output size:** Some transforms of bit strings reduce the number of
      variables. The
      [`output_size`][landbench.transforms.base.VariableTransform.output_size]
      method returns the number of variables produced for a given input size.
    """

    @abstractmethod
    def forward(self, values: NDArray[np.float64]) -> NDArray[np.float64]:
        """Transform values from the user domain to the landscape domain.

        Args:
            values: The candidate solution.

        Returns:
            The transformed values.
        """

    @abstractmethod
    def inverse(self, values: NDArray[np.float64]) -> NDArray[np.float64]:
        """Transform values from the landscape domain to the user domain.

        If the forward transformation discards information, the inverse
        returns one of the candidate solutions that are mapped to `values`.

        Args:
            values: The values in the landscape domain.

        Returns:
            A candidate solution in the user domain.
        """

    def output_size(self, size: int) -> int:
        """Return the number of variables produced by the transform.

        The default implementation returns `size`.

        Args:
            size: The number of input variables.

        Returns:
            The number of output variables.
        """
        return size


class ObjectiveTransform(ABC):
    """Abstract base class for objective transformations.

    An objective transform maps the value returned by a base landscape, or by
    the previous transform in the chain, to a new value.
    """

    @abstractmethod
    def forward(self, value: float) -> float:
        """Transform an objective value.

        Args:
            value: The objective value.

        Returns:
            The transformed value.
        """
