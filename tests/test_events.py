from functools import partial

import numpy as np

from landbench.enums import ContinuousFunction, EventType
from landbench.events import Event, EventBroker, EvaluationDispatcher, EventHandler
from landbench.problems import create_continuous_problem


class _Recorder(EventHandler):
    def __init__(self) -> None:
        self.events: list[Event] = []

    @property
    def event_types(self) -> set[EventType]:
        return {EventType.START_RUN, EventType.END_RUN}

    def handle_event(self, event: Event) -> None:
        self.events.append(event)


def _record(events: list[tuple[str, Event]], tag: str, event: Event) -> None:
    events.append((tag, event))


def test_event_broker() -> None:
    problem = create_continuous_problem(ContinuousFunction.BENT_CIGAR, 1, 2)
    events: list[tuple[str, Event]] = []
    broker = EventBroker()
    broker.add_observer(EventType.START_RUN, partial(_record, events, "first"))
    broker.add_observer(EventType.START_RUN, partial(_record, events, "second"))
    broker.add_observer(EventType.END_RUN, partial(_record, events, "end"))

    broker.emit(EventType.START_RUN, problem=problem)
    assert [tag for tag, _ in events] == ["first", "second"]
    assert events[0][1].problem is problem
    assert events[0][1].observation is None


def test_dispatcher_events() -> None:
    problem = create_continuous_problem(ContinuousFunction.BENT_CIGAR, 1, 2)
    dispatcher = EvaluationDispatcher(problem)
    recorder = _Recorder()
    dispatcher.attach(recorder)
    evaluations: list[Event] = []
    dispatcher.add_observer(EventType.EVALUATION, evaluations.append)

    assert not dispatcher.running
    value = dispatcher(np.zeros(2))
    assert dispatcher.running
    assert value == evaluations[0].observation.y  # type: ignore[union-attr]
    dispatcher(np.ones(2))
    dispatcher.new_run()
    dispatcher(np.ones(2))
    dispatcher.stop()
    dispatcher.stop()
    assert not dispatcher.running

    assert [event.event_type for event in recorder.events] == [
        EventType.START_RUN,
        EventType.END_RUN,
        EventType.START_RUN,
        EventType.END_RUN,
    ]
    assert [
        event.observation.evaluations  # type: ignore[union-attr]
        for event in evaluations
    ] == [1, 2, 1]
    assert dispatcher.problem is problem
