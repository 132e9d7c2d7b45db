"""Serve queries of a solver driver."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from landbench.enums import ErrorCode, QueryType, ReplyType
from landbench.exceptions import InvalidDimension, MalformedQuery

from ._messages import Query, Reply, parse_query

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from landbench.events import EvaluationDispatcher

_logger = logging.getLogger(__name__)


class QueryHandler:
    """Answer the queries of a solver driver.

    The handler evaluates `call` queries with an
    [`EvaluationDispatcher`][landbench.events.EvaluationDispatcher], so that
    any loggers attached to the dispatcher observe the evaluations. A
    `new_run` query starts a new run of the dispatcher, and a `stop` query ends
    the run and stops the handler.

    Errors caused by a query, such as a malformed message or a solution of the
    wrong dimension, are answered with an `error` reply and never raised. The
    handler does not implement any transport: messages are passed in and
    replies returned, for instance by
    [`serve`][landbench.server.QueryHandler.serve], which processes a stream
    of newline-delimited JSON messages.
    """

    def __init__(self, dispatcher: EvaluationDispatcher) -> None:
        """Initialize the handler.

        Args:
            dispatcher: The dispatcher used to evaluate solutions.
        """
        self._dispatcher = dispatcher
        self._stopped = False

    @property
    def stopped(self) -> bool:
        """Whether a `stop` query was received."""
        return self._stopped

    def handle(self, query: Query) -> Reply:
        """Answer a validated query.

        Args:
            query: The query.

        Returns:
            The reply.
        """
        echo = {
            "id": query.id,
            "timestamp": query.timestamp,
            "remarks": query.remarks,
        }
        match query.query_type:
            case QueryType.CALL:
                assert query.solution is not None
                try:
                    value = self._dispatcher(query.solution)
                except InvalidDimension as err:
                    return _error(ErrorCode.INVALID_DIMENSION, str(err), echo)
                except ValueError as err:
                    return _error(ErrorCode.EVALUATION_FAILED, str(err), echo)
                return Reply(
                    reply_type=ReplyType.VALUE,
                    value=value,
                    solution=query.solution,
                    **echo,
                )
            case QueryType.NEW_RUN:
                self._dispatcher.new_run()
            case QueryType.STOP:
                self._dispatcher.stop()
                self._stopped = True
                _logger.info("Stop query received")
        return Reply(reply_type=ReplyType.ACK, **echo)

    def handle_message(self, message: str | bytes | Mapping[str, Any]) -> Reply:
        """Parse and answer a message.

        Args:
            message: A JSON string, or a mapping of decoded values.

        Returns:
            The reply, an `error` reply if the message is malformed.
        """
        try:
            query = parse_query(message)
        except MalformedQuery as err:
            _logger.warning("%s", err)
            return _error(ErrorCode.MALFORMED_QUERY, str(err), {})
        return self.handle(query)

    def serve(self, lines: Iterable[str | bytes]) -> Iterator[str]:
        """Answer a stream of newline-delimited JSON messages.

        Blank lines are skipped. Serving ends after a `stop` query, or when
        the stream is exhausted.

        Args:
            lines: The messages, one per line.

        Yields:
            The serialized replies, one per message.
        """
        for line in lines:
            if not line.strip():
                continue
            yield self.handle_message(line).to_json()
            if self._stopped:
                return


def _error(code: ErrorCode, message: str, echo: Mapping[str, Any]) -> Reply:
    return Reply(
        reply_type=ReplyType.ERROR,
        code=int(code),
        message=message or code.name.lower(),
        **echo,
    )
