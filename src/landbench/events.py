"""Events emitted while benchmarking a problem."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from landbench.enums import EventType

if TYPE_CHECKING:
    from collections.abc import Callable

    from numpy.typing import ArrayLike

    from landbench.problems import Observation, Problem


@dataclass(frozen=True, slots=True)
class Event:
    """The `Event` class stores benchmarking event data.

    Events are emitted by an
    [`EvaluationDispatcher`][landbench.events.EvaluationDispatcher], and
    passed to the callbacks and handlers attached to it.

    Attributes:
        event_type:  The type of the event.
        problem:     The problem being benchmarked.
        observation: The observation, for evaluation events.
    """

    event_type: EventType
    problem: Problem
    observation: Observation | None = None


class EventBroker:
    """A class for handling benchmarking events."""

    def __init__(self) -> None:
        """Initialize the event broker."""
        self._subscribers: dict[EventType, list[Callable[[Event], None]]] = {
            event: [] for event in EventType
        }

    def add_observer(
        self,
        event_type: EventType,
        callback: Callable[[Event], None],
    ) -> None:
        """Add an observer function.

        Args:
            event_type: The type of events to react to.
            callback:   The function to call if the event is received.
        """
        self._subscribers[event_type].append(callback)

    def emit(self, event_type: EventType, /, **kwargs: Any) -> None:  # noqa: ANN401
        """Emit an event.

        The keyword arguments are used to construct an
        [`Event`][landbench.events.Event] object of the type given by
        `event_type`. All stored callbacks that react to this event type are
        then called with that event object as their argument, in the order in
        which they were added.

        Args:
            event_type: The type of event to emit.
            kwargs:     Keyword arguments used to create the event.
        """
        event = Event(event_type=event_type, **kwargs)
        for callback in self._subscribers[event_type]:
            callback(event)


class EventHandler(ABC):
    """Abstract base class for event handlers.

    Event handlers react to a fixed set of event types. They are attached to an
    [`EvaluationDispatcher`][landbench.events.EvaluationDispatcher] with its
    [`attach`][landbench.events.EvaluationDispatcher.attach] method.
    """

    @property
    @abstractmethod
    def event_types(self) -> set[EventType]:
        """Return the event types that are handled.

        Returns:
            A set of event types that are handled.
        """

    @abstractmethod
    def handle_event(self, event: Event) -> None:
        """Handle an event.

        Args:
            event: The event to handle.
        """


class EvaluationDispatcher:
    """Evaluate a problem and forward the results to attached handlers.

    The dispatcher wraps a [`Problem`][landbench.problems.Problem], which
    knows nothing about loggers. Each call evaluates the problem, and emits an
    [`EVALUATION`][landbench.enums.EventType.EVALUATION] event carrying the
    observation. Run boundaries are marked by
    [`START_RUN`][landbench.enums.EventType.START_RUN] and
    [`END_RUN`][landbench.enums.EventType.END_RUN] events. A run starts
    implicitly with the first evaluation, or explicitly by calling
    [`new_run`][landbench.events.EvaluationDispatcher.new_run].

    Evaluation is synchronous: each call returns after all handlers have
    processed the event. The dispatcher does not provide any locking.
    """

    def __init__(self, problem: Problem) -> None:
        """Initialize the dispatcher.

        Args:
            problem: The problem to evaluate.
        """
        self._problem = problem
        self._broker = EventBroker()
        self._running = False

    @property
    def problem(self) -> Problem:
        """The problem evaluated by the dispatcher."""
        return self._problem

    @property
    def running(self) -> bool:
        """Whether a run is active."""
        return self._running

    def add_observer(
        self, event_type: EventType, callback: Callable[[Event], None]
    ) -> None:
        """Add a callback for a type of events.

        Args:
            event_type: The type of events to react to.
            callback:   The function to call if the event is received.
        """
        self._broker.add_observer(event_type, callback)

    def attach(self, handler: EventHandler) -> None:
        """Attach an event handler.

        The handler receives all events of the types it reports in its
        `event_types` property.

        Args:
            handler: The event handler.
        """
        for event_type in sorted(handler.event_types):
            self._broker.add_observer(event_type, handler.handle_event)

    def __call__(self, x: ArrayLike) -> float:
        """Evaluate a candidate solution.

        Args:
            x: The candidate solution.

        Returns:
            The objective value.
        """
        if not self._running:
            self._start()
        observation = self._problem.evaluate(x)
        self._broker.emit(
            EventType.EVALUATION, problem=self._problem, observation=observation
        )
        return observation.y

    def new_run(self) -> None:
        """End the current run, if any, reset the problem, and start a new run."""
        self.stop()
        self._problem.reset()
        self._start()

    def stop(self) -> None:
        """End the current run, if any."""
        if self._running:
            self._running = False
            self._broker.emit(EventType.END_RUN, problem=self._problem)

    def _start(self) -> None:
        self._running = True
        self._broker.emit(EventType.START_RUN, problem=self._problem)
