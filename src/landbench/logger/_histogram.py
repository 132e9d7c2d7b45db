"""The histogram logger."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

import numpy as np

from landbench.enums import EventType, LoggerState
from landbench.events import EventHandler

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from landbench.events import Event
    from landbench.problems import Observation, Problem

    from .scales import Scale

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RunHistogram:
    """The histogram of a completed run.

    Attributes:
        run_id:     The number of the run.
        problem_id: The function identifier of the problem, if known.
        instance:   The instance number of the problem, if known.
        dimension:  The dimension of the problem, if known.
        grid:       The counts, indexed by time bin and quality bin.
    """

    run_id: int
    problem_id: int | None
    instance: int | None
    dimension: int | None
    grid: NDArray[np.int64]

    @property
    def total(self) -> int:
        """The number of observations of the run."""
        return int(self.grid.sum())


class HistogramLogger(EventHandler):
    """Accumulate observations in a two-dimensional histogram.

    Each observation increments one cell of the grid, selected by the bin of
    the evaluation count on the `x_scale` and the bin of the measured quality
    on the `y_scale`. The grid counts observations, it does not track the best
    value found. The `measure` selects the quality: the objective value itself
    or the regret. Values outside the range of a scale are counted in its first
    or last bin.

    The logger is either idle or logging. A run starts with
    [`start_run`][landbench.logger.HistogramLogger.start_run], or implicitly
    with the first observation, and ends with
    [`end_run`][landbench.logger.HistogramLogger.end_run], which stores a copy
    of the grid in [`runs`][landbench.logger.HistogramLogger.runs]. Starting
    the next run clears the grid and increments the run number, see
    [`new_run`][landbench.logger.HistogramLogger.new_run]. The scales are never
    changed, so that the grids of all runs are comparable.

    The logger is an [`EventHandler`][landbench.events.EventHandler], and can
    be attached to an
    [`EvaluationDispatcher`][landbench.events.EvaluationDispatcher].
    """

    def __init__(
        self,
        x_scale: Scale,
        y_scale: Scale,
        *,
        measure: Literal["objective", "regret"] = "objective",
    ) -> None:
        """Initialize the logger.

        Args:
            x_scale: The scale of the evaluation count.
            y_scale: The scale of the measured quality.
            measure: The measured quality.
        """
        self._x_scale = x_scale
        self._y_scale = y_scale
        self._measure = measure
        self._grid = np.zeros((x_scale.size, y_scale.size), dtype=np.int64)
        self._run_id = 0
        self._state = LoggerState.IDLE
        self._started = False
        self._meta: tuple[int | None, int | None, int | None] = (None, None, None)
        self._runs: list[RunHistogram] = []

    @property
    def x_scale(self) -> Scale:
        """The scale of the evaluation count."""
        return self._x_scale

    @property
    def y_scale(self) -> Scale:
        """The scale of the measured quality."""
        return self._y_scale

    @property
    def measure(self) -> Literal["objective", "regret"]:
        """The measured quality."""
        return self._measure

    @property
    def state(self) -> LoggerState:
        """The state of the logger."""
        return self._state

    @property
    def run_id(self) -> int:
        """The number of the current run."""
        return self._run_id

    @property
    def grid(self) -> NDArray[np.int64]:
        """A read-only view of the grid of the current run."""
        view = self._grid.view()
        view.setflags(write=False)
        return view

    @property
    def total(self) -> int:
        """The number of observations of the current run."""
        return int(self._grid.sum())

    @property
    def runs(self) -> list[RunHistogram]:
        """The histograms of the completed runs."""
        return list(self._runs)

    def counts(self) -> dict[tuple[int, int], int]:
        """Return the non-empty cells of the grid.

        Returns:
            A mapping of `(x_bin, y_bin)` pairs to counts.
        """
        return {
            (int(x), int(y)): int(self._grid[x, y])
            for x, y in zip(*np.nonzero(self._grid), strict=True)
        }

    def start_run(self, problem: Problem | None = None) -> None:
        """Start a run.

        An active run is ended first. If a run was started before, the grid is
        cleared and the run number is incremented.

        Args:
            problem: The problem of the run, recorded with its histogram.
        """
        if self._state == LoggerState.LOGGING:
            self.end_run()
        if self._started:
            self.new_run()
        self._started = True
        self._meta = (
            (None, None, None)
            if problem is None
            else (problem.problem_id, problem.instance, problem.dimension)
        )
        self._state = LoggerState.LOGGING
        _logger.debug("Started run %d", self._run_id)

    def log(self, observation: Observation) -> None:
        """Add an observation to the grid.

        If no run is active, a run is started first.

        Args:
            observation: The observation.
        """
        if self._state == LoggerState.IDLE:
            self.start_run()
            self._meta = (
                observation.problem_id,
                observation.instance,
                observation.dimension,
            )
        value = observation.y if self._measure == "objective" else observation.regret
        self._grid[
            self._x_scale.index(observation.evaluations), self._y_scale.index(value)
        ] += 1

    def end_run(self) -> RunHistogram | None:
        """End the active run, and store its histogram.

        Returns:
            The histogram of the run, or `None` if no run was active.
        """
        if self._state == LoggerState.IDLE:
            return None
        self._state = LoggerState.IDLE
        grid = self._grid.copy()
        grid.setflags(write=False)
        problem_id, instance, dimension = self._meta
        histogram = RunHistogram(
            run_id=self._run_id,
            problem_id=problem_id,
            instance=instance,
            dimension=dimension,
            grid=grid,
        )
        self._runs.append(histogram)
        _logger.debug(
            "Ended run %d with %d observations", self._run_id, histogram.total
        )
        return histogram

    def new_run(self) -> None:
        """Clear the grid and increment the run number.

        The scales are not changed. If the logger is idle, the next run starts
        with the cleared grid and the new run number.
        """
        self._grid[...] = 0
        self._run_id += 1
        self._started = self._state == LoggerState.LOGGING

    @property
    def event_types(self) -> set[EventType]:
        """Return the event types that are handled.

        Returns:
            A set of event types that are handled.
        """
        return {EventType.START_RUN, EventType.EVALUATION, EventType.END_RUN}

    def handle_event(self, event: Event) -> None:
        """Handle an event.

        Args:
            event: The event to handle.
        """
        match event.event_type:
            case EventType.START_RUN:
                self.start_run(event.problem)
            case EventType.EVALUATION:
                assert event.observation is not None
                self.log(event.observation)
            case EventType.END_RUN:
                self.end_run()
