"""The problem registry."""

from __future__ import annotations

import logging
from functools import partial
from importlib.metadata import entry_points
from typing import TYPE_CHECKING, Final

from landbench.enums import ContinuousFunction, DiscreteFunction, ProblemClass
from landbench.exceptions import InvalidDimension, UnknownProblem

from ._continuous import continuous_name, create_continuous_problem
from ._discrete import create_discrete_problem, discrete_name

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from landbench.config import StaticDataConfig

    from .base import Problem

    ProblemConstructor = Callable[[int, int], Problem]

_logger = logging.getLogger(__name__)

ENTRY_POINT_GROUPS: Final[dict[ProblemClass, str]] = {
    ProblemClass.REAL: "landbench.problems.real",
    ProblemClass.INTEGER: "landbench.problems.integer",
}
"""The entry point groups of third-party problems, per problem class."""


class Registry:
    """Map function identifiers to problem constructors.

    A registry holds constructors, callables that accept an instance number
    and a dimension and return a [`Problem`][landbench.problems.Problem]. It
    is an explicit value, typically created once at process start with
    [`default_registry`][landbench.problems.default_registry], and passed to
    whatever creates problems.

    Registering an identifier that is already present replaces the existing
    constructor, and logs a warning. The registration order is preserved, and
    determines the order of
    [`enumerate`][landbench.problems.Registry.enumerate].

    **Example: Publishing Problems from Another Package**

    Constructors may be published by other packages using entry points, for
    instance in the `pyproject.toml` file of the package:

    ```toml
    [project.entry-points."landbench.problems.real"]
    101 = "my_package.my_module:create_my_problem"
    ```

    The name of the entry point is the function identifier. Such constructors
    are added by [`load_entry_points`][landbench.problems.Registry.load_entry_points],
    or when creating a registry with
    [`from_entry_points`][landbench.problems.Registry.from_entry_points].
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._constructors: dict[int, ProblemConstructor] = {}
        self._names: dict[int, str] = {}

    def register(
        self,
        problem_id: int,
        constructor: ProblemConstructor,
        *,
        name: str | None = None,
    ) -> None:
        """Register a problem constructor.

        Args:
            problem_id:  The function identifier.
            constructor: A callable accepting an instance number and a
                         dimension, returning a problem.
            name:        The name of the problem, defaults to the name of the
                         constructor.
        """
        problem_id = int(problem_id)
        if problem_id in self._constructors:
            _logger.warning(
                "Replacing the constructor of problem %d (%s)",
                problem_id,
                self._names[problem_id],
            )
        self._constructors[problem_id] = constructor
        self._names[problem_id] = (
            getattr(constructor, "__name__", str(problem_id)) if name is None else name
        )

    def create(self, problem_id: int, instance: int, dimension: int) -> Problem:
        """Create a problem.

        Args:
            problem_id: The function identifier.
            instance:   The instance number.
            dimension:  The dimension.

        Returns:
            A new problem, ready for evaluation.

        Raises:
            UnknownProblem:      If the identifier is not registered.
            InvalidDimension:    If the dimension is not supported.
            DataFileUnavailable: If static parameter tables cannot be read.
        """
        constructor = self._constructors.get(int(problem_id))
        if constructor is None:
            raise UnknownProblem(problem_id)
        if dimension <= 0:
            msg = f"The dimension must be positive, got {dimension}."
            raise InvalidDimension(msg)
        problem = constructor(instance, dimension)
        _logger.debug(
            "Created problem %d (%s), instance %d, dimension %d",
            problem_id,
            self._names[int(problem_id)],
            instance,
            dimension,
        )
        return problem

    def enumerate(self) -> Iterator[int]:
        """Iterate over the registered identifiers, in registration order.

        Yields:
            The function identifiers.
        """
        yield from list(self._constructors)

    def name(self, problem_id: int) -> str:
        """Return the name of a registered problem.

        Args:
            problem_id: The function identifier.

        Returns:
            The name of the problem.

        Raises:
            UnknownProblem: If the identifier is not registered.
        """
        try:
            return self._names[int(problem_id)]
        except KeyError:
            raise UnknownProblem(problem_id) from None

    def __contains__(self, problem_id: object) -> bool:
        """Check if an identifier is registered."""
        return problem_id in self._constructors

    def __len__(self) -> int:
        """Return the number of registered problems."""
        return len(self._constructors)

    def load_entry_points(self, group: str) -> None:
        """Register the constructors published under an entry point group.

        Args:
            group: The entry point group.

        Raises:
            ValueError: If the name of an entry point is not an integer.
            TypeError:  If an entry point does not refer to a callable.
        """
        for entry_point in entry_points().select(group=group):
            try:
                problem_id = int(entry_point.name)
            except ValueError:
                msg = (
                    f"Invalid problem entry point `{entry_point.name}` in {group}: "
                    "the name must be an integer function identifier"
                )
                raise ValueError(msg) from None
            constructor = entry_point.load()
            if not callable(constructor):
                msg = (
                    f"Incorrect type for problem entry point `{entry_point.name}`"
                    f": {type(constructor)}"
                )
                raise TypeError(msg)
            self.register(problem_id, constructor)

    @classmethod
    def from_entry_points(cls, group: str) -> Registry:
        """Create a registry from the constructors of an entry point group.

        Args:
            group: The entry point group.

        Returns:
            A new registry.
        """
        registry = cls()
        registry.load_entry_points(group)
        return registry


def default_registry(
    problem_class: ProblemClass,
    data: StaticDataConfig | None = None,
    *,
    plugins: bool = False,
) -> Registry:
    """Create a registry holding the built-in problems of a class.

    Args:
        problem_class: The class of the problems.
        data:          Optional static tables for the continuous problems.
        plugins:       Also register the problems published under the entry
                       point group of the class.

    Returns:
        A new registry.
    """
    registry = Registry()
    if problem_class == ProblemClass.REAL:
        for real_id in ContinuousFunction:
            registry.register(
                real_id,
                partial(create_continuous_problem, real_id, data=data),
                name=continuous_name(real_id),
            )
    else:
        for integer_id in DiscreteFunction:
            registry.register(
                integer_id,
                partial(create_discrete_problem, integer_id),
                name=discrete_name(integer_id),
            )
    if plugins:
        registry.load_entry_points(ENTRY_POINT_GROUPS[problem_class])
    return registry
