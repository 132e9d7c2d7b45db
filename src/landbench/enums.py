"""Enumerations used within the `landbench` library."""

from enum import IntEnum, StrEnum


class ProblemClass(StrEnum):
    """Enumerates the classes of benchmark problems.

    Each problem class has its own [`Registry`][landbench.problems.Registry],
    and function identifiers are only unique within one class.
    """

    REAL = "real"
    "Continuous problems defined on real-valued vectors."

    INTEGER = "integer"
    "Pseudo-Boolean problems defined on bit strings."


class ScaleDomain(StrEnum):
    """Enumerates the value domains of a [`Scale`][landbench.logger.Scale]."""

    REAL = "real"
    "Bin edges may take any real value."

    INTEGER = "integer"
    "Bin edges are restricted to integers."


class ScaleKind(StrEnum):
    """Enumerates how the bins of a [`Scale`][landbench.logger.Scale] grow."""

    LINEAR = "linear"
    "All bins have the same width."

    LOG2 = "log2"
    "Bin widths grow geometrically, computed in base 2."

    LOG10 = "log10"
    "Bin widths grow geometrically, computed in base 10."


class EventType(IntEnum):
    """Enumerates the types of events emitted while benchmarking a problem.

    Events are emitted by an
    [`EvaluationDispatcher`][landbench.events.EvaluationDispatcher] and
    received by the handlers attached to it, such as the
    [`HistogramLogger`][landbench.logger.HistogramLogger]. Each event is
    delivered as an [`Event`][landbench.events.Event] object.
    """

    START_RUN = 1
    """Emitted when a new benchmarking run starts."""

    EVALUATION = 2
    """Emitted after each evaluation, carrying the observation."""

    END_RUN = 3
    """Emitted when a run ends, either by a new run or by stopping."""


class QueryType(StrEnum):
    """Enumerates the query types a solver driver may send."""

    CALL = "call"
    """Evaluate the objective function for a given solution."""

    NEW_RUN = "new_run"
    """Reset the logging state and start a new run."""

    STOP = "stop"
    """Stop serving."""


class ReplyType(StrEnum):
    """Enumerates the reply types sent back to a solver driver."""

    VALUE = "value"
    """The objective function value."""

    ACK = "ack"
    """A simple acknowledgment."""

    ERROR = "error"
    """An error message."""


class ErrorCode(IntEnum):
    """Numerical codes carried by error replies."""

    MALFORMED_QUERY = 1
    """The query does not follow the query schema."""

    INVALID_DIMENSION = 2
    """The solution does not have the dimension of the problem."""

    EVALUATION_FAILED = 3
    """The solution was rejected by the problem."""


class ContinuousFunction(IntEnum):
    """Enumerates the built-in continuous problems.

    The values are the function identifiers of the problems in the
    [`ProblemClass.REAL`][landbench.enums.ProblemClass] registry.
    """

    BENT_CIGAR = 1
    SCHWEFEL = 2
    LUNACEK_BI_RASTRIGIN = 3
    EXPANDED_GRIEWANK_ROSENBROCK = 4
    HYBRID_FUNCTION_1 = 5
    HYBRID_FUNCTION_2 = 6
    HYBRID_FUNCTION_3 = 7
    COMPOSITION_FUNCTION_1 = 8
    COMPOSITION_FUNCTION_2 = 9
    COMPOSITION_FUNCTION_3 = 10


class DiscreteFunction(IntEnum):
    """Enumerates the built-in pseudo-Boolean problems.

    The values are the function identifiers of the problems in the
    [`ProblemClass.INTEGER`][landbench.enums.ProblemClass] registry.
    """

    ONE_MAX = 1
    LEADING_ONES = 2
    LINEAR = 3
    ONE_MAX_DUMMY1 = 4
    ONE_MAX_DUMMY2 = 5
    ONE_MAX_NEUTRALITY = 6
    ONE_MAX_EPISTASIS = 7
    ONE_MAX_RUGGEDNESS1 = 8
    ONE_MAX_RUGGEDNESS2 = 9
    ONE_MAX_RUGGEDNESS3 = 10
    LEADING_ONES_DUMMY1 = 11
    LEADING_ONES_DUMMY2 = 12
    LEADING_ONES_NEUTRALITY = 13
    LEADING_ONES_EPISTASIS = 14
    LEADING_ONES_RUGGEDNESS1 = 15
    LEADING_ONES_RUGGEDNESS2 = 16
    LEADING_ONES_RUGGEDNESS3 = 17


class LoggerState(StrEnum):
    """Enumerates the states of a [`HistogramLogger`][landbench.logger.HistogramLogger]."""

    IDLE = "idle"
    """No run is active, observations start a new run."""

    LOGGING = "logging"
    """A run is active, observations are added to its grid."""
