"""Exceptions raised within the `landbench` library."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    import numpy as np
    from numpy.typing import NDArray


class LandbenchError(Exception):
    """Base class of all errors raised by `landbench`."""


class UnknownProblem(LandbenchError, LookupError):  # noqa: N818
    """Raised when a function identifier is not registered."""

    def __init__(self, problem_id: int) -> None:
        """Initialize the exception.

        Args:
            problem_id: The identifier that was not found.
        """
        self.problem_id = problem_id
        super().__init__(f"Unknown problem: {problem_id}")


class InvalidDimension(LandbenchError, ValueError):  # noqa: N818
    """Raised when a dimension is not supported.

    This covers non-positive dimensions, dimensions outside the set supported
    by a problem, and candidate solutions whose length does not match the
    dimension of the problem.
    """


class MalformedQuery(LandbenchError, ValueError):  # noqa: N818
    """Raised when a query does not follow the query schema."""


class DataFileUnavailable(LandbenchError, OSError):  # noqa: N818
    """Raised when a static parameter file is missing or cannot be read."""


class TruncatedData(LandbenchError):  # noqa: N818
    """Raised when a static parameter file holds fewer values than expected.

    The values that could be read are available in the `data` attribute, so
    that a caller may decide to proceed anyway.
    """

    def __init__(
        self, path: Path, expected: int, data: NDArray[np.float64]
    ) -> None:
        """Initialize the exception.

        Args:
            path:     The file that was read.
            expected: The number of values that were expected.
            data:     The values that were found.
        """
        self.path = path
        self.expected = expected
        self.found = data.size
        self.data = data
        super().__init__(
            f"Truncated data in {path}: expected {expected} values, found {data.size}"
        )
