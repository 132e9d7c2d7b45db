"""The built-in continuous problems."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

import numpy as np

from landbench.enums import ContinuousFunction, ProblemClass
from landbench.instances import StaticDataLoader, generate_parameters
from landbench.transforms import (
    ObjectiveBias,
    PermuteVariables,
    ProblemTransforms,
    ShiftScaleRotate,
    compose,
    composition_weights,
    split_by_proportions,
)

from ._functions import (
    ackley,
    bent_cigar,
    ellipsoid,
    expanded_griewank_rosenbrock,
    griewank,
    hgbat,
    lunacek_bi_rastrigin,
    rastrigin,
    rosenbrock,
    schwefel,
)
from .base import Evaluable, Problem, check_dimension

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from numpy.typing import NDArray

    from landbench.config import InstanceParameters, StaticDataConfig
    from landbench.transforms.base import VariableTransform

    BaseFunction = Callable[[NDArray[np.float64]], float]

BIASES: Final[dict[ContinuousFunction, float]] = {
    ContinuousFunction.BENT_CIGAR: 100.0,
    ContinuousFunction.SCHWEFEL: 1100.0,
    ContinuousFunction.LUNACEK_BI_RASTRIGIN: 700.0,
    ContinuousFunction.EXPANDED_GRIEWANK_ROSENBROCK: 1900.0,
    ContinuousFunction.HYBRID_FUNCTION_1: 1700.0,
    ContinuousFunction.HYBRID_FUNCTION_2: 1600.0,
    ContinuousFunction.HYBRID_FUNCTION_3: 2100.0,
    ContinuousFunction.COMPOSITION_FUNCTION_1: 2200.0,
    ContinuousFunction.COMPOSITION_FUNCTION_2: 2400.0,
    ContinuousFunction.COMPOSITION_FUNCTION_3: 2500.0,
}
"""The objective bias of each continuous problem."""

_SHRINK_RATES: Final[dict[str, float]] = {
    "ackley": 1.0,
    "bent_cigar": 1.0,
    "ellipsoid": 1.0,
    "griewank": 6.0,
    "hgbat": 0.05,
    "rastrigin": 0.0512,
    "rosenbrock": 0.02048,
    "schwefel": 10.0,
}

_FUNCTIONS: Final[dict[str, BaseFunction]] = {
    "ackley": ackley,
    "bent_cigar": bent_cigar,
    "ellipsoid": ellipsoid,
    "griewank": griewank,
    "hgbat": hgbat,
    "rastrigin": rastrigin,
    "rosenbrock": rosenbrock,
    "schwefel": schwefel,
}

_SMALL_DIMENSIONS: Final = frozenset({2, 10, 20})
_LARGE_DIMENSIONS: Final = frozenset({10, 20})
_BOUND: Final = 100.0
_SHIFT_BOUND: Final = 80.0


class FunctionLandscape(Evaluable):
    """A landscape given by a single base function with its optimum at zero."""

    def __init__(self, function: BaseFunction) -> None:
        """Initialize the landscape.

        Args:
            function: The base function.
        """
        self._function = function

    def evaluate(self, values: NDArray[np.float64]) -> float:
        """Evaluate the base function."""
        return self._function(values)

    def optimal_solution(self, dimension: int) -> NDArray[np.float64]:
        """Return the origin."""
        return np.zeros(dimension, dtype=np.float64)


class HybridLandscape(Evaluable):
    """A landscape that applies different base functions to parts of a vector.

    The variables are divided into consecutive parts with
    [`split_by_proportions`][landbench.transforms.split_by_proportions], and
    each part is scaled and evaluated by its own base function. The landscape
    value is the sum of the part values. Shuffling of the variables, which
    makes the parts non-contiguous, is left to the variable transforms.
    """

    def __init__(self, parts: Sequence[tuple[str, float]]) -> None:
        """Initialize the landscape.

        Args:
            parts: The names and proportions of the base functions.
        """
        self._names = [name for name, _ in parts]
        self._proportions = [proportion for _, proportion in parts]

    def evaluate(self, values: NDArray[np.float64]) -> float:
        """Evaluate the base functions on their parts, and sum the results."""
        result = 0.0
        start = 0
        for name, size in zip(
            self._names,
            split_by_proportions(values.size, self._proportions),
            strict=True,
        ):
            if size > 0:
                part = values[start : start + size]
                result += _FUNCTIONS[name](_SHRINK_RATES[name] * part)
            start += size
        return result

    def optimal_solution(self, dimension: int) -> NDArray[np.float64]:
        """Return the origin."""
        return np.zeros(dimension, dtype=np.float64)


@dataclass(frozen=True, slots=True)
class CompositionComponent:
    """A component of a composition landscape.

    Attributes:
        function: The name of the base function.
        sigma:    The bias range, controlling the width of the basin.
        lam:      The scaling factor of the function value.
        bias:     The bias added to the scaled function value.
    """

    function: str
    sigma: float
    lam: float
    bias: float


class CompositionLandscape(Evaluable):
    """A landscape composed from several shifted and rotated components.

    Each component evaluates its base function on the candidate solution after
    its own shift, scaling and rotation. The component values are combined
    with the weights computed by
    [`composition_weights`][landbench.transforms.composition_weights], using
    [`compose`][landbench.transforms.compose]. The optimum is the shift of
    the first component, which has a zero bias.
    """

    def __init__(
        self,
        components: Sequence[CompositionComponent],
        params: Sequence[InstanceParameters],
    ) -> None:
        """Initialize the landscape.

        Args:
            components: The definitions of the components.
            params:     The instance parameters of the components.
        """
        self.components = list(components)
        self._transforms = [
            ShiftScaleRotate(item, _SHRINK_RATES[component.function])
            for component, item in zip(self.components, params, strict=True)
        ]
        self._shifts = np.vstack([item.shift for item in params])

    def evaluate(self, values: NDArray[np.float64]) -> float:
        """Evaluate and compose the components."""
        component_values = [
            _FUNCTIONS[component.function](transform.forward(values))
            for component, transform in zip(
                self.components, self._transforms, strict=True
            )
        ]
        return compose(
            component_values,
            composition_weights(
                values, self._shifts, [item.sigma for item in self.components]
            ),
            [item.lam for item in self.components],
            [item.bias for item in self.components],
        )

    def optimal_solution(self, dimension: int) -> NDArray[np.float64]:
        """Return the shift of the first component."""
        assert self._shifts.shape[1] == dimension
        return self._shifts[0].copy()


@dataclass(frozen=True, slots=True)
class _Definition:
    name: str
    dimensions: frozenset[int]
    function: str | None = None
    shrink_rate: float = 1.0
    hybrid: tuple[tuple[str, float], ...] = ()
    composition: tuple[CompositionComponent, ...] = ()


_DEFINITIONS: Final[dict[ContinuousFunction, _Definition]] = {
    ContinuousFunction.BENT_CIGAR: _Definition(
        "BentCigar", _SMALL_DIMENSIONS, "bent_cigar", 1.0
    ),
    ContinuousFunction.SCHWEFEL: _Definition(
        "Schwefel", _SMALL_DIMENSIONS, "schwefel", 10.0
    ),
    ContinuousFunction.LUNACEK_BI_RASTRIGIN: _Definition(
        "LunacekBiRastrigin", _SMALL_DIMENSIONS, "lunacek_bi_rastrigin", 0.1
    ),
    ContinuousFunction.EXPANDED_GRIEWANK_ROSENBROCK: _Definition(
        "ExpandedGriewankRosenbrock",
        _SMALL_DIMENSIONS,
        "expanded_griewank_rosenbrock",
        0.05,
    ),
    ContinuousFunction.HYBRID_FUNCTION_1: _Definition(
        "HybridFunction1",
        _LARGE_DIMENSIONS,
        hybrid=(("schwefel", 0.3), ("rastrigin", 0.3), ("ellipsoid", 0.4)),
    ),
    ContinuousFunction.HYBRID_FUNCTION_2: _Definition(
        "HybridFunction2",
        _LARGE_DIMENSIONS,
        hybrid=(
            ("bent_cigar", 0.2),
            ("hgbat", 0.2),
            ("rosenbrock", 0.3),
            ("schwefel", 0.3),
        ),
    ),
    ContinuousFunction.HYBRID_FUNCTION_3: _Definition(
        "HybridFunction3",
        _LARGE_DIMENSIONS,
        hybrid=(
            ("bent_cigar", 0.1),
            ("hgbat", 0.2),
            ("rosenbrock", 0.2),
            ("schwefel", 0.2),
            ("ellipsoid", 0.3),
        ),
    ),
    ContinuousFunction.COMPOSITION_FUNCTION_1: _Definition(
        "CompositionFunction1",
        _LARGE_DIMENSIONS,
        composition=(
            CompositionComponent("rastrigin", 10.0, 1.0, 0.0),
            CompositionComponent("griewank", 20.0, 10.0, 100.0),
            CompositionComponent("schwefel", 30.0, 1.0, 200.0),
        ),
    ),
    ContinuousFunction.COMPOSITION_FUNCTION_2: _Definition(
        "CompositionFunction2",
        _LARGE_DIMENSIONS,
        composition=(
            CompositionComponent("ackley", 10.0, 10.0, 0.0),
            CompositionComponent("ellipsoid", 20.0, 1e-6, 100.0),
            CompositionComponent("griewank", 30.0, 10.0, 200.0),
            CompositionComponent("rastrigin", 40.0, 1.0, 300.0),
        ),
    ),
    ContinuousFunction.COMPOSITION_FUNCTION_3: _Definition(
        "CompositionFunction3",
        _LARGE_DIMENSIONS,
        composition=(
            CompositionComponent("rastrigin", 10.0, 10.0, 0.0),
            CompositionComponent("hgbat", 20.0, 10.0, 100.0),
            CompositionComponent("schwefel", 30.0, 2.5, 200.0),
            CompositionComponent("bent_cigar", 40.0, 1e-26, 300.0),
            CompositionComponent("ellipsoid", 50.0, 1e-6, 400.0),
        ),
    ),
}

_STANDALONE: Final[dict[str, BaseFunction]] = {
    "bent_cigar": bent_cigar,
    "schwefel": schwefel,
    "lunacek_bi_rastrigin": lunacek_bi_rastrigin,
    "expanded_griewank_rosenbrock": expanded_griewank_rosenbrock,
}


def continuous_name(function_id: ContinuousFunction) -> str:
    """Return the name of a continuous problem.

    Args:
        function_id: The function identifier.

    Returns:
        The name of the problem.
    """
    return _DEFINITIONS[function_id].name


def create_continuous_problem(
    function_id: ContinuousFunction,
    instance: int,
    dimension: int,
    *,
    data: StaticDataConfig | None = None,
) -> Problem:
    """Create a built-in continuous problem.

    The instance parameters are generated from the function identifier and
    the instance number, using
    [`generate_parameters`][landbench.instances.generate_parameters]. If a
    static data configuration is given, they are loaded from the static tables
    instead, and do not depend on the instance number.

    Args:
        function_id: The function identifier.
        instance:    The instance number.
        dimension:   The dimension.
        data:        Optional configuration of the static tables.

    Returns:
        The problem.

    Raises:
        InvalidDimension: If the dimension is not supported by the problem.
    """
    definition = _DEFINITIONS[function_id]
    check_dimension(dimension, definition.dimensions)

    bias = BIASES[function_id]
    components = max(1, len(definition.composition))
    shuffle = bool(definition.hybrid)
    if data is None:
        params = [
            generate_parameters(
                function_id,
                instance,
                dimension,
                shift_bound=_SHIFT_BOUND,
                shuffle=shuffle,
                bias=bias if component == 0 else 0.0,
                component=component,
            )
            for component in range(components)
        ]
    else:
        params = StaticDataLoader(data).load_parameters(
            function_id,
            dimension,
            components=components,
            shuffle=shuffle,
            bias=bias,
        )

    landscape: Evaluable
    variables: list[VariableTransform] = []
    if definition.composition:
        landscape = CompositionLandscape(definition.composition, params)
    elif definition.hybrid:
        assert params[0].permutation is not None
        landscape = HybridLandscape(definition.hybrid)
        variables = [
            ShiftScaleRotate(params[0], definition.shrink_rate),
            PermuteVariables(params[0].permutation),
        ]
    else:
        assert definition.function is not None
        landscape = FunctionLandscape(_STANDALONE[definition.function])
        variables = [ShiftScaleRotate(params[0], definition.shrink_rate)]

    return Problem(
        int(function_id),
        definition.name,
        instance=instance,
        dimension=dimension,
        landscape=landscape,
        params=params[0],
        bounds=(-_BOUND, _BOUND),
        transforms=ProblemTransforms(
            variables=variables, objectives=[ObjectiveBias(params[0].bias)]
        ),
        problem_class=ProblemClass.REAL,
    )
