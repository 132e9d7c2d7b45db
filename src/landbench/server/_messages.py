"""Query and reply messages exchanged with a solver driver."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

from pydantic import BaseModel, ConfigDict, StrictFloat, ValidationError, model_validator

from landbench.enums import QueryType, ReplyType
from landbench.exceptions import MalformedQuery

if TYPE_CHECKING:
    from collections.abc import Mapping


class Query(BaseModel):
    """A query sent by a solver driver.

    Queries are JSON objects. The `query_type` field is required, and a `call`
    query requires a non-empty `solution`. The optional `id`, `timestamp` and
    `remarks` fields are not interpreted, but echoed in the reply. Unknown
    fields are ignored.

    Attributes:
        query_type: The type of the query.
        solution:   The candidate solution to evaluate.
        id:         An optional identifier of the query.
        timestamp:  An optional date and time of the query, kept as given.
        remarks:    An optional comment.
    """

    query_type: QueryType
    solution: list[StrictFloat] | None = None
    id: int | None = None
    timestamp: str | None = None
    remarks: str | None = None

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
    )

    @model_validator(mode="after")
    def _check_solution(self) -> Self:
        if self.query_type == QueryType.CALL and not self.solution:
            msg = "A call query requires a non-empty solution."
            raise ValueError(msg)
        return self


class Reply(BaseModel):
    """A reply sent to a solver driver.

    A `value` reply requires the `value` field, and may include the evaluated
    `solution`. An `error` reply requires a non-empty `message`, and may
    include a numerical `code`. The optional `id`, `timestamp` and `remarks`
    fields mirror the query.

    Attributes:
        reply_type: The type of the reply.
        value:      The objective value.
        solution:   The evaluated solution.
        code:       The error code.
        message:    The error message.
        id:         The identifier of the query.
        timestamp:  The date and time of the query.
        remarks:    The remarks of the query.
    """

    reply_type: ReplyType
    value: float | None = None
    solution: list[float] | None = None
    code: int | None = None
    message: str | None = None
    id: int | None = None
    timestamp: str | None = None
    remarks: str | None = None

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )

    @model_validator(mode="after")
    def _check_required(self) -> Self:
        if self.reply_type == ReplyType.VALUE and self.value is None:
            msg = "A value reply requires a value."
            raise ValueError(msg)
        if self.reply_type == ReplyType.ERROR and not self.message:
            msg = "An error reply requires a message."
            raise ValueError(msg)
        return self

    def to_json(self) -> str:
        """Serialize the reply, omitting fields that are not set.

        Returns:
            A JSON string.
        """
        return self.model_dump_json(exclude_none=True)


def parse_query(message: str | bytes | Mapping[str, Any]) -> Query:
    """Parse and validate a query.

    Args:
        message: A JSON string, or a mapping of already decoded values.

    Returns:
        The validated query.

    Raises:
        MalformedQuery: If the message is not valid JSON, or does not follow
                        the query schema.
    """
    try:
        if isinstance(message, str | bytes):
            return Query.model_validate_json(message)
        return Query.model_validate(message)
    except ValidationError as err:
        details = "; ".join(
            f"{'.'.join(str(item) for item in error['loc']) or 'query'}: {error['msg']}"
            for error in err.errors()
        )
        msg = f"Malformed query: {details}"
        raise MalformedQuery(msg) from err
