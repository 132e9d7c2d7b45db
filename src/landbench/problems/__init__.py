"""Benchmark problems.

A benchmark problem is a [`Problem`][landbench.problems.Problem] object,
created by a [`Registry`][landbench.problems.Registry] from a function
identifier, an instance number and a dimension. The built-in problems are
registered by [`default_registry`][landbench.problems.default_registry]:

- Continuous problems ([`ContinuousFunction`][landbench.enums.ContinuousFunction]),
  defined on real vectors within `[-100, 100]`, and minimized.
- Pseudo-Boolean problems ([`DiscreteFunction`][landbench.enums.DiscreteFunction]),
  defined on bit strings, and maximized.

A [`Suite`][landbench.problems.Suite] creates a sequence of problems for a set
of identifiers, instances and dimensions.
"""

from ._continuous import BIASES, create_continuous_problem
from ._discrete import create_discrete_problem
from ._registry import ENTRY_POINT_GROUPS, Registry, default_registry
from ._suite import Suite
from .base import Evaluable, Observation, Problem, Solution, check_dimension

__all__ = [
    "BIASES",
    "ENTRY_POINT_GROUPS",
    "Evaluable",
    "Observation",
    "Problem",
    "Registry",
    "Solution",
    "Suite",
    "check_dimension",
    "create_continuous_problem",
    "create_discrete_problem",
    "default_registry",
]
