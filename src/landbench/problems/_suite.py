"""Ordered collections of benchmark problems."""

from __future__ import annotations

from itertools import product
from typing import TYPE_CHECKING

from landbench.exceptions import UnknownProblem

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from ._registry import Registry
    from .base import Problem


class Suite:
    """An ordered collection of problems to benchmark in sequence.

    Iterating over a suite creates each problem afresh, in the order of the
    function identifiers, then the instances, then the dimensions. Unknown
    identifiers are reported when the suite is created, not while iterating.
    """

    def __init__(
        self,
        registry: Registry,
        problem_ids: Iterable[int] | None = None,
        instances: Iterable[int] = (1,),
        dimensions: Iterable[int] = (10,),
    ) -> None:
        """Initialize the suite.

        Args:
            registry:    The registry used to create the problems.
            problem_ids: The function identifiers, defaults to all identifiers
                         of the registry.
            instances:   The instance numbers.
            dimensions:  The dimensions.

        Raises:
            UnknownProblem: If an identifier is not registered.
        """
        self._registry = registry
        self._problem_ids = (
            list(registry.enumerate()) if problem_ids is None else list(problem_ids)
        )
        for problem_id in self._problem_ids:
            if problem_id not in registry:
                raise UnknownProblem(problem_id)
        self._instances = list(instances)
        self._dimensions = list(dimensions)

    @property
    def problem_ids(self) -> list[int]:
        """The function identifiers of the suite."""
        return list(self._problem_ids)

    @property
    def instances(self) -> list[int]:
        """The instance numbers of the suite."""
        return list(self._instances)

    @property
    def dimensions(self) -> list[int]:
        """The dimensions of the suite."""
        return list(self._dimensions)

    def __len__(self) -> int:
        """Return the number of problems of the suite."""
        return len(self._problem_ids) * len(self._instances) * len(self._dimensions)

    def __iter__(self) -> Iterator[Problem]:
        """Create the problems of the suite in order.

        Yields:
            The problems.
        """
        for problem_id, instance, dimension in product(
            self._problem_ids, self._instances, self._dimensions
        ):
            yield self._registry.create(problem_id, instance, dimension)
