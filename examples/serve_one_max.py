"""Example of a solver driver exchanging JSON messages with a problem.

A (1+1) evolutionary algorithm optimizes a pseudo-Boolean problem, without
direct access to it: candidate solutions are sent as `call` queries, and the
objective values are read from the replies. The queries are handled by a
`QueryHandler`, which records all evaluations in a histogram logger. In a real
setting, the messages would be sent over a pipe or a socket.
"""

import json
from collections.abc import Iterator

import numpy as np
from numpy.random import default_rng

from landbench.enums import DiscreteFunction, ProblemClass
from landbench.events import EvaluationDispatcher
from landbench.logger import HistogramLogger, LinearIntegerScale, LinearRealScale
from landbench.problems import default_registry
from landbench.server import QueryHandler

DIMENSION = 32
BUDGET = 5000


class OnePlusOneEA:
    """A (1+1) EA with standard bit mutation, talking to a query handler."""

    def __init__(self, handler: QueryHandler, seed: int = 42) -> None:
        self._handler = handler
        self._rng = default_rng(seed=seed)
        self.best_value = -np.inf
        self.evaluations = 0

    def _evaluate(self, x: np.ndarray) -> float:
        message = json.dumps({"query_type": "call", "solution": x.astype(float).tolist()})
        (reply,) = (json.loads(item) for item in self._handler.serve([message]))
        assert reply["reply_type"] == "value", reply
        self.evaluations += 1
        return float(reply["value"])

    def run(self, target: float) -> Iterator[float]:
        """Optimize until the target is reached, or the budget is exhausted.

        Args:
            target: The target objective value.

        Yields:
            Improved objective values.
        """
        parent = self._rng.integers(0, 2, DIMENSION)
        self.best_value = self._evaluate(parent)
        while self.best_value < target and self.evaluations < BUDGET:
            mask = self._rng.random(DIMENSION) < 1.0 / DIMENSION
            if not mask.any():
                continue
            child = parent ^ mask
            value = self._evaluate(child)
            if value >= self.best_value:
                if value > self.best_value:
                    yield value
                parent, self.best_value = child, value


def main() -> None:
    """Run the example."""
    registry = default_registry(ProblemClass.INTEGER)
    problem = registry.create(DiscreteFunction.ONE_MAX, 1, DIMENSION)
    logger = HistogramLogger(
        LinearIntegerScale(0, BUDGET, 20),
        LinearRealScale(0.0, DIMENSION + 1.0, DIMENSION + 1),
        measure="regret",
    )
    dispatcher = EvaluationDispatcher(problem)
    dispatcher.attach(logger)
    handler = QueryHandler(dispatcher)

    solver = OnePlusOneEA(handler)
    for value in solver.run(problem.optimum.y):
        print(f"  evaluation {solver.evaluations}: {value:.3f}")

    replies = list(handler.serve([json.dumps({"query_type": "stop"})]))
    assert json.loads(replies[0])["reply_type"] == "ack"
    assert handler.stopped
    assert solver.best_value == problem.optimum.y
    assert logger.runs[0].total == solver.evaluations


if __name__ == "__main__":
    main()
