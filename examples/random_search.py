"""Example of benchmarking a random search on the continuous problems.

This example runs a pure random search on a small suite of continuous
problems. The evaluations are recorded by a histogram logger, configured from
a dictionary, and the runs of each problem are summarized by their attainment
surface.
"""

import sys
from importlib.util import find_spec
from typing import Any

import numpy as np
from numpy.random import default_rng

from landbench.config import HistogramConfig
from landbench.enums import ProblemClass
from landbench.events import EvaluationDispatcher
from landbench.problems import Problem, Suite, default_registry
from landbench.report import attainment

RUNS = 5
BUDGET = 200

CONFIG: dict[str, Any] = {
    "x_scale": {"domain": "integer", "min": 0, "max": BUDGET, "size": 10},
    "y_scale": {"kind": "log10", "min": 0, "max": 1e10, "size": 10},
    "measure": "regret",
}


def random_search(problem: Problem, dispatcher: EvaluationDispatcher, seed: int) -> float:
    """Sample uniformly within the bounds of a problem.

    Args:
        problem:    The problem.
        dispatcher: The dispatcher used to evaluate the samples.
        seed:       The seed of the random generator.

    Returns:
        The best objective value found.
    """
    rng = default_rng(seed=seed)
    lower, upper = problem.bounds
    best = np.inf
    dispatcher.new_run()
    for _ in range(BUDGET):
        best = min(best, dispatcher(rng.uniform(lower, upper)))
    dispatcher.stop()
    return best


def main(argv: list[str] | None = None) -> None:
    """Run the example.

    Args:
        argv: Optional command line arguments, `--table` prints the histogram
              of the last run of each problem.
    """
    suite = Suite(
        default_registry(ProblemClass.REAL),
        problem_ids=[1, 2, 3],
        instances=[1],
        dimensions=[10],
    )
    config = HistogramConfig.model_validate(CONFIG)
    for problem in suite:
        logger = config.create()
        dispatcher = EvaluationDispatcher(problem)
        dispatcher.attach(logger)
        best = min(random_search(problem, dispatcher, seed) for seed in range(RUNS))
        assert len(logger.runs) == RUNS
        assert best >= problem.optimum.y

        surface = attainment(logger.runs)
        print(f"{problem.name}: best regret {best - problem.optimum.y:.3e}")
        print(f"  attained at the end: {surface[-1].round(2)}")

        if argv is not None and "--table" in argv and find_spec("tabulate"):
            from landbench.report import format_histogram  # noqa: PLC0415

            print(format_histogram(logger.runs[-1].grid, logger.x_scale, logger.y_scale))


if __name__ == "__main__":
    main(sys.argv)
