"""The built-in pseudo-Boolean problems."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Literal

import numpy as np

from landbench.enums import DiscreteFunction, ProblemClass
from landbench.instances import generate_bit_parameters
from landbench.transforms import (
    Epistasis,
    FlipBits,
    Neutrality,
    ObjectiveScaleShift,
    PermuteVariables,
    ProblemTransforms,
    Ruggedness,
    SelectPositions,
    dummy_positions,
)

from .base import Evaluable, Problem, check_dimension

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from landbench.transforms.base import ObjectiveTransform, VariableTransform

_NEUTRALITY_MU: Final = 3
_EPISTASIS_BLOCK_SIZE: Final = 4


class BitLandscape(Evaluable):
    """Base class of pseudo-Boolean landscapes, maximized at all ones."""

    maximize = True

    def optimal_solution(self, dimension: int) -> NDArray[np.float64]:
        """Return the all-ones bit string."""
        return np.ones(dimension, dtype=np.intc)


class OneMax(BitLandscape):
    """Count the number of ones."""

    def evaluate(self, values: NDArray[np.float64]) -> float:
        """Return the number of ones."""
        return float(np.sum(values))


class LeadingOnes(BitLandscape):
    """Count the number of consecutive ones at the start of the bit string."""

    def evaluate(self, values: NDArray[np.float64]) -> float:
        """Return the length of the leading block of ones."""
        zeros = np.flatnonzero(np.asarray(values) == 0)
        return float(zeros[0] if zeros.size > 0 else values.size)


class Linear(BitLandscape):
    """Sum the bits, weighting bit `i` by `i + 1`."""

    def evaluate(self, values: NDArray[np.float64]) -> float:
        """Return the weighted sum of the bits."""
        return float(np.dot(np.arange(1, values.size + 1), values))


@dataclass(frozen=True, slots=True)
class _Definition:
    name: str
    landscape: type[BitLandscape]
    dummy_rate: float | None = None
    neutrality: bool = False
    epistasis: bool = False
    ruggedness: Literal[1, 2, 3] | None = None


def _variants(
    prefix: str, landscape: type[BitLandscape], first: int
) -> dict[DiscreteFunction, _Definition]:
    definitions = [
        _Definition(f"{prefix}Dummy1", landscape, dummy_rate=0.5),
        _Definition(f"{prefix}Dummy2", landscape, dummy_rate=0.9),
        _Definition(f"{prefix}Neutrality", landscape, neutrality=True),
        _Definition(f"{prefix}Epistasis", landscape, epistasis=True),
        _Definition(f"{prefix}Ruggedness1", landscape, ruggedness=1),
        _Definition(f"{prefix}Ruggedness2", landscape, ruggedness=2),
        _Definition(f"{prefix}Ruggedness3", landscape, ruggedness=3),
    ]
    return {
        DiscreteFunction(first + idx): definition
        for idx, definition in enumerate(definitions)
    }


_DEFINITIONS: Final[dict[DiscreteFunction, _Definition]] = {
    DiscreteFunction.ONE_MAX: _Definition("OneMax", OneMax),
    DiscreteFunction.LEADING_ONES: _Definition("LeadingOnes", LeadingOnes),
    DiscreteFunction.LINEAR: _Definition("Linear", Linear),
    **_variants("OneMax", OneMax, DiscreteFunction.ONE_MAX_DUMMY1),
    **_variants("LeadingOnes", LeadingOnes, DiscreteFunction.LEADING_ONES_DUMMY1),
}


def discrete_name(function_id: DiscreteFunction) -> str:
    """Return the name of a pseudo-Boolean problem.

    Args:
        function_id: The function identifier.

    Returns:
        The name of the problem.
    """
    return _DEFINITIONS[function_id].name


def create_discrete_problem(
    function_id: DiscreteFunction, instance: int, dimension: int
) -> Problem:
    """Create a built-in pseudo-Boolean problem.

    The candidate solution is first transformed by the instance: bits are
    inverted for instances 2 to 50, and permuted for instances 51 to 100, see
    [`generate_bit_parameters`][landbench.instances.generate_bit_parameters].
    Then the variant transform of the problem is applied (dummy variables,
    neutrality or epistasis), and the base landscape is evaluated. The value
    is finally passed through the ruggedness mapping, if any, and through the
    affine objective transform of the instance.

    Args:
        function_id: The function identifier.
        instance:    The instance number.
        dimension:   The number of bits.

    Returns:
        The problem.

    Raises:
        InvalidDimension: If the dimension is too small for the problem.
    """
    definition = _DEFINITIONS[function_id]
    minimum = 1
    if definition.neutrality:
        minimum = _NEUTRALITY_MU
    elif definition.epistasis:
        minimum = _EPISTASIS_BLOCK_SIZE
    check_dimension(dimension, minimum=minimum)

    params = generate_bit_parameters(instance, dimension)

    variables: list[VariableTransform] = []
    if params.flip_mask is not None:
        variables.append(FlipBits(params.flip_mask))
    if params.permutation is not None:
        variables.append(PermuteVariables(params.permutation))
    if definition.dummy_rate is not None:
        variables.append(
            SelectPositions(
                dummy_positions(dimension, definition.dummy_rate), dimension
            )
        )
    if definition.neutrality:
        variables.append(Neutrality(_NEUTRALITY_MU, dimension))
    if definition.epistasis:
        variables.append(Epistasis(_EPISTASIS_BLOCK_SIZE))

    objectives: list[ObjectiveTransform] = []
    if definition.ruggedness is not None:
        objectives.append(Ruggedness(definition.ruggedness, dimension))
    if instance > 1:
        objectives.append(ObjectiveScaleShift(params.objective_scale, params.bias))

    return Problem(
        int(function_id),
        definition.name,
        instance=instance,
        dimension=dimension,
        landscape=definition.landscape(),
        params=params,
        bounds=(0.0, 1.0),
        transforms=ProblemTransforms(variables=variables, objectives=objectives),
        problem_class=ProblemClass.INTEGER,
    )
