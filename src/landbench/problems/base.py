"""This module defines the base classes of benchmark problems.

Every benchmark problem is an instance of the generic
[`Problem`][landbench.problems.base.Problem] class, which combines a base
landscape, implementing the
[`Evaluable`][landbench.problems.base.Evaluable] interface, with a set of
instance parameters and the transform chains derived from them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

import numpy as np

from landbench.enums import ProblemClass
from landbench.exceptions import InvalidDimension
from landbench.transforms import ProblemTransforms

if TYPE_CHECKING:
    from collections.abc import Collection

    from numpy.typing import ArrayLike, NDArray

    from landbench.config import InstanceParameters


class Evaluable(ABC):
    """Abstract base class for base landscapes.

    A base landscape is the canonical, untransformed function of a problem. It
    is evaluated on the output of the variable transforms of the problem, and
    must know its own optimal solution.
    """

    maximize: ClassVar[bool] = False
    """Whether the landscape is maximized rather than minimized."""

    @abstractmethod
    def evaluate(self, values: NDArray[np.float64]) -> float:
        """Evaluate the landscape.

        Args:
            values: The transformed candidate solution.

        Returns:
            The value of the landscape.
        """

    @abstractmethod
    def optimal_solution(self, dimension: int) -> NDArray[np.float64]:
        """Return an optimal solution of the landscape.

        Args:
            dimension: The dimension of the landscape.

        Returns:
            A solution with the optimal landscape value.
        """


@dataclass(frozen=True, slots=True)
class Solution:
    """A candidate solution with its objective value.

    Attributes:
        x: The candidate solution.
        y: The objective value.
    """

    x: NDArray[np.float64]
    y: float


@dataclass(frozen=True, slots=True)
class Observation:
    """The record of a single evaluation of a problem.

    Observations are returned by
    [`Problem.evaluate`][landbench.problems.base.Problem.evaluate], and may be
    passed on to loggers. They are self-contained, hence loggers do not need
    access to the problem itself.

    Attributes:
        problem_id:  The function identifier of the problem.
        instance:    The instance number of the problem.
        dimension:   The dimension of the problem.
        evaluations: The number of evaluations in the current run, including
                     this one.
        x:           The evaluated candidate solution.
        y:           The objective value.
        best_so_far: The best objective value in the current run.
        regret:      The distance of `y` to the optimal value, non-negative for
                     both minimization and maximization.
    """

    problem_id: int
    instance: int
    dimension: int
    evaluations: int
    x: NDArray[np.float64]
    y: float
    best_so_far: float
    regret: float


def check_dimension(
    dimension: int,
    supported: Collection[int] | None = None,
    minimum: int = 1,
) -> None:
    """Check if a dimension is valid.

    Args:
        dimension: The dimension to check.
        supported: An optional set of supported dimensions.
        minimum:   The minimum dimension.

    Raises:
        InvalidDimension: If the dimension is invalid.
    """
    if dimension <= 0:
        msg = f"The dimension must be positive, got {dimension}."
        raise InvalidDimension(msg)
    if dimension < minimum:
        msg = f"The dimension must be at least {minimum}, got {dimension}."
        raise InvalidDimension(msg)
    if supported is not None and dimension not in supported:
        msg = (
            f"Unsupported dimension {dimension}, "
            f"must be one of: {', '.join(str(item) for item in sorted(supported))}."
        )
        raise InvalidDimension(msg)


class Problem:
    """A benchmark problem instance.

    A problem evaluates a candidate solution `x` by passing it through the
    variable transforms, evaluating the base landscape on the result, and
    passing the landscape value through the objective transforms.

    The optimum of the problem is computed once, at construction, by mapping
    the known optimal solution of the landscape through the inverse variable
    transforms, and evaluating the result with the same chain used for
    arbitrary inputs. Evaluating `optimum.x` therefore returns exactly
    `optimum.y`.

    The problem counts the evaluations of the current run, and tracks the best
    objective value found so far. It knows nothing about loggers: each call to
    [`evaluate`][landbench.problems.base.Problem.evaluate] returns an
    [`Observation`][landbench.problems.base.Observation] record, which the
    caller may pass on, for instance using an
    [`EvaluationDispatcher`][landbench.events.EvaluationDispatcher].

    Problems are not thread-safe. Different problems do not share any mutable
    state, and may be evaluated in parallel.
    """

    def __init__(  # noqa: PLR0913
        self,
        problem_id: int,
        name: str,
        *,
        instance: int,
        dimension: int,
        landscape: Evaluable,
        params: InstanceParameters,
        bounds: tuple[ArrayLike, ArrayLike],
        transforms: ProblemTransforms | None = None,
        problem_class: ProblemClass = ProblemClass.REAL,
    ) -> None:
        """Initialize the problem.

        Args:
            problem_id:    The function identifier.
            name:          The name of the problem.
            instance:      The instance number.
            dimension:     The dimension.
            landscape:     The base landscape.
            params:        The instance parameters.
            bounds:        The lower and upper bounds of the variables.
            transforms:    The transform chains.
            problem_class: The class of the problem.

        Raises:
            InvalidDimension: If the dimension is not positive, or does not
                              match the instance parameters.
        """
        check_dimension(dimension)
        if params.dimension != dimension:
            msg = (
                f"The instance parameters have dimension {params.dimension}, "
                f"expected {dimension}."
            )
            raise InvalidDimension(msg)

        self._problem_id = problem_id
        self._name = name
        self._instance = instance
        self._dimension = dimension
        self._landscape = landscape
        self._params = params
        self._transforms = ProblemTransforms() if transforms is None else transforms
        self._problem_class = problem_class

        lower, upper = bounds
        self._lower = np.broadcast_to(
            np.asarray(lower, dtype=np.float64), (dimension,)
        ).copy()
        self._upper = np.broadcast_to(
            np.asarray(upper, dtype=np.float64), (dimension,)
        ).copy()
        self._lower.setflags(write=False)
        self._upper.setflags(write=False)

        optimum_x = self._transforms.inverse_variables(
            landscape.optimal_solution(self._transforms.output_size(dimension))
        )
        optimum_x = self._convert(optimum_x)
        optimum_x.setflags(write=False)
        self._optimum = Solution(x=optimum_x, y=self._value(optimum_x))

        self._eval_count = 0
        self._best_so_far: float | None = None

    @property
    def problem_id(self) -> int:
        """The function identifier."""
        return self._problem_id

    @property
    def name(self) -> str:
        """The name of the problem."""
        return self._name

    @property
    def instance(self) -> int:
        """The instance number."""
        return self._instance

    @property
    def dimension(self) -> int:
        """The number of variables."""
        return self._dimension

    @property
    def problem_class(self) -> ProblemClass:
        """The class of the problem."""
        return self._problem_class

    @property
    def maximize(self) -> bool:
        """Whether the problem is maximized."""
        return self._landscape.maximize

    @property
    def bounds(self) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """The lower and upper bounds of the variables."""
        return self._lower, self._upper

    @property
    def params(self) -> InstanceParameters:
        """The instance parameters."""
        return self._params

    @property
    def landscape(self) -> Evaluable:
        """The base landscape."""
        return self._landscape

    @property
    def transforms(self) -> ProblemTransforms:
        """The transform chains."""
        return self._transforms

    @property
    def optimum(self) -> Solution:
        """The optimal solution and its objective value."""
        return self._optimum

    @property
    def eval_count(self) -> int:
        """The number of evaluations in the current run."""
        return self._eval_count

    @property
    def best_so_far(self) -> float | None:
        """The best objective value of the current run, if any."""
        return self._best_so_far

    def evaluate(self, x: ArrayLike) -> Observation:
        """Evaluate a candidate solution.

        Args:
            x: The candidate solution.

        Returns:
            The observation record of the evaluation.

        Raises:
            InvalidDimension: If the length of `x` differs from the dimension.
            ValueError:       If an integer problem receives values other than
                              zero and one.
        """
        values = self._convert(x)
        y = self._value(values)

        self._eval_count += 1
        if self._best_so_far is None:
            self._best_so_far = y
        elif self.maximize:
            self._best_so_far = max(self._best_so_far, y)
        else:
            self._best_so_far = min(self._best_so_far, y)

        return Observation(
            problem_id=self._problem_id,
            instance=self._instance,
            dimension=self._dimension,
            evaluations=self._eval_count,
            x=values,
            y=y,
            best_so_far=self._best_so_far,
            regret=self._optimum.y - y if self.maximize else y - self._optimum.y,
        )

    def __call__(self, x: ArrayLike) -> float:
        """Evaluate a candidate solution, returning only the objective value.

        Args:
            x: The candidate solution.

        Returns:
            The objective value.
        """
        return self.evaluate(x).y

    def reset(self) -> None:
        """Reset the evaluation counter and the best value, to start a new run."""
        self._eval_count = 0
        self._best_so_far = None

    def __repr__(self) -> str:
        """Return a short description of the problem."""
        return (
            f"{self.__class__.__name__}(id={self._problem_id}, name={self._name!r}, "
            f"instance={self._instance}, dimension={self._dimension})"
        )

    def _convert(self, x: ArrayLike) -> NDArray[np.float64]:
        values = np.array(x, dtype=np.float64, ndmin=1)
        if values.ndim != 1 or values.size != self._dimension:
            msg = (
                f"Expected a solution of dimension {self._dimension}, "
                f"got shape {values.shape}."
            )
            raise InvalidDimension(msg)
        if self._problem_class == ProblemClass.INTEGER:
            if not np.all((values == 0.0) | (values == 1.0)):
                msg = "The solution of a pseudo-Boolean problem must be a bit string."
                raise ValueError(msg)
            return values.astype(np.intc)
        return values

    def _value(self, values: NDArray[np.float64]) -> float:
        transformed = self._transforms.forward_variables(values)
        return self._transforms.forward_objectives(
            float(self._landscape.evaluate(transformed))
        )
