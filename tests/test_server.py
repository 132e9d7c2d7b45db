import json
import logging
from typing import Any

import pytest

from landbench.enums import ContinuousFunction, ErrorCode, ReplyType
from landbench.events import EvaluationDispatcher
from landbench.exceptions import MalformedQuery
from landbench.logger import HistogramLogger, LinearIntegerScale, LinearRealScale
from landbench.problems import create_continuous_problem
from landbench.server import Query, QueryHandler, Reply, parse_query


@pytest.fixture(name="handler")
def handler_fixture() -> QueryHandler:
    problem = create_continuous_problem(ContinuousFunction.BENT_CIGAR, 1, 2)
    return QueryHandler(EvaluationDispatcher(problem))


def test_parse_query() -> None:
    query = parse_query('{"query_type": "call", "solution": [1.0, 2.0], "id": 3}')
    assert query.solution == [1.0, 2.0]
    assert query.id == 3
    query = parse_query({"query_type": "stop", "unknown": 1})
    assert query.solution is None


@pytest.mark.parametrize(
    ("message", "match"),
    [
        ('{"query_type": "call"}', "non-empty solution"),
        ('{"query_type": "call", "solution": []}', "non-empty solution"),
        ('{"query_type": "call", "solution": ["a"]}', "solution.0"),
        ('{"query_type": "jump"}', "query_type"),
        ('{"solution": [1.0]}', "query_type"),
        ("not json", "Malformed query"),
    ],
)
def test_parse_query_errors(message: str, match: str) -> None:
    with pytest.raises(MalformedQuery, match=match):
        parse_query(message)


def test_reply_validation() -> None:
    with pytest.raises(ValueError, match="requires a value"):
        Reply(reply_type=ReplyType.VALUE)
    with pytest.raises(ValueError, match="requires a message"):
        Reply(reply_type=ReplyType.ERROR, message="")
    reply = Reply(reply_type=ReplyType.ACK, id=1)
    assert json.loads(reply.to_json()) == {"reply_type": "ack", "id": 1}


def test_call(handler: QueryHandler) -> None:
    reply = handler.handle_message(
        {"query_type": "call", "solution": [0.0, 0.0], "id": 7, "remarks": "first"}
    )
    assert reply.reply_type == ReplyType.VALUE
    assert reply.value is not None
    assert reply.solution == [0.0, 0.0]
    assert reply.id == 7
    assert reply.remarks == "first"


def test_call_echoes_complete_query(handler: QueryHandler) -> None:
    message = (
        '{"query_type": "call", "solution": [10, 10], "id": 1,'
        ' "timestamp": "2021-12-21T13:40:31-01:00Z",'
        ' "remarks": "Pandeora solver v0.0.1"}'
    )
    (text,) = handler.serve([message])
    reply = json.loads(text)
    assert reply["reply_type"] == "value"
    assert reply["solution"] == [10.0, 10.0]
    assert reply["id"] == 1
    assert reply["timestamp"] == "2021-12-21T13:40:31-01:00Z"
    assert reply["remarks"] == "Pandeora solver v0.0.1"


def test_timestamp_is_not_reformatted(handler: QueryHandler) -> None:
    reply = handler.handle_message(
        {"query_type": "new_run", "timestamp": "2021-12-21T13:40:31+00:00"}
    )
    assert reply.reply_type == ReplyType.ACK
    assert json.loads(reply.to_json())["timestamp"] == "2021-12-21T13:40:31+00:00"


def test_call_without_solution(handler: QueryHandler, caplog: Any) -> None:
    with caplog.at_level(logging.WARNING):
        reply = handler.handle_message('{"query_type": "call", "id": 1}')
    assert reply.reply_type == ReplyType.ERROR
    assert reply.code == ErrorCode.MALFORMED_QUERY
    assert reply.message
    assert "Malformed query" in caplog.text


def test_call_wrong_dimension(handler: QueryHandler) -> None:
    reply = handler.handle(Query(query_type="call", solution=[1.0, 2.0, 3.0], id=4))
    assert reply.reply_type == ReplyType.ERROR
    assert reply.code == ErrorCode.INVALID_DIMENSION
    assert reply.id == 4
    assert reply.message


def test_new_run_and_stop() -> None:
    problem = create_continuous_problem(ContinuousFunction.BENT_CIGAR, 1, 2)
    dispatcher = EvaluationDispatcher(problem)
    logger = HistogramLogger(
        LinearIntegerScale(0, 100, 10), LinearRealScale(0.0, 1e3, 10)
    )
    dispatcher.attach(logger)
    handler = QueryHandler(dispatcher)

    handler.handle_message({"query_type": "call", "solution": [0.0, 0.0]})
    reply = handler.handle_message({"query_type": "new_run"})
    assert reply.reply_type == ReplyType.ACK
    assert problem.eval_count == 0
    handler.handle_message({"query_type": "call", "solution": [0.0, 0.0]})
    reply = handler.handle_message({"query_type": "stop"})
    assert reply.reply_type == ReplyType.ACK
    assert handler.stopped
    assert [run.total for run in logger.runs] == [1, 1]


def test_serve(handler: QueryHandler) -> None:
    lines = [
        '{"query_type": "call", "solution": [0.0, 0.0], "id": 1}',
        "",
        "{broken",
        '{"query_type": "stop", "id": 2}',
        '{"query_type": "call", "solution": [0.0, 0.0], "id": 3}',
    ]
    replies = [json.loads(item) for item in handler.serve(lines)]
    assert [item["reply_type"] for item in replies] == ["value", "error", "ack"]
    assert replies[0]["id"] == 1
    assert replies[1]["code"] == ErrorCode.MALFORMED_QUERY
    assert replies[2]["id"] == 2
    assert handler.stopped
