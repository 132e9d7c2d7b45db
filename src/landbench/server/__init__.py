"""The query and reply boundary with a remote solver driver.

A solver driver sends [`Query`][landbench.server.Query] messages, which are
answered with [`Reply`][landbench.server.Reply] messages by a
[`QueryHandler`][landbench.server.QueryHandler]. Both are JSON objects,
validated with [`pydantic`](https://docs.pydantic.dev/). Transports, such as
sockets or pipes, are left to the caller.
"""

from ._handler import QueryHandler
from ._messages import Query, Reply, parse_query

__all__ = [
    "Query",
    "QueryHandler",
    "Reply",
    "parse_query",
]
