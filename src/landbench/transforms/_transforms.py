"""This module defines the ProblemTransforms class."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import numpy as np
    from numpy.typing import NDArray

    from .base import ObjectiveTransform, VariableTransform


@dataclass
class ProblemTransforms:
    """A container for the transform chains of a problem."""

    variables: list[VariableTransform] = field(default_factory=list)
    """The variable transforms, applied in order to a candidate solution.

    If empty, candidate solutions are passed unchanged to the landscape.
    """
    objectives: list[ObjectiveTransform] = field(default_factory=list)
    """The objective transforms, applied in order to the landscape value.

    If empty, the landscape value is returned unchanged.
    """

    def forward_variables(self, values: NDArray[np.float64]) -> NDArray[np.float64]:
        """Apply the variable transforms in order.

        Args:
            values: The candidate solution.

        Returns:
            The input of the base landscape.
        """
        for transform in self.variables:
            values = transform.forward(values)
        return values

    def inverse_variables(self, values: NDArray[np.float64]) -> NDArray[np.float64]:
        """Apply the inverse variable transforms in reverse order.

        Args:
            values: A point of the base landscape.

        Returns:
            A candidate solution mapped to `values`.
        """
        for transform in reversed(self.variables):
            values = transform.inverse(values)
        return values

    def forward_objectives(self, value: float) -> float:
        """Apply the objective transforms in order.

        Args:
            value: The value of the base landscape.

        Returns:
            The transformed objective value.
        """
        for transform in self.objectives:
            value = transform.forward(value)
        return value

    def output_size(self, size: int) -> int:
        """Return the number of variables passed to the landscape.

        Args:
            size: The number of variables of a candidate solution.

        Returns:
            The dimension of the base landscape.
        """
        for transform in self.variables:
            size = transform.output_size(size)
        return size
