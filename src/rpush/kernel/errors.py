"""Error types raised by the rpush runtime."""

from __future__ import annotations


class RPushError(Exception):
    """Base class for rpush errors."""


class FifoOverflowError(RPushError):
    """Raised when a value is enqueued into a full queue."""


class FifoUnderflowError(RPushError):
    """Raised when an empty queue is dequeued or peeked."""


class ConflictError(RPushError):
    """Raised when a method is invoked twice on one instance in one cycle."""


class ElaborationError(RPushError):
    """Raised when a design cannot be built."""


class RepresentationError(RPushError):
    """Error raised when a value cannot be stored as the queue's element type.

    This error preserves the raw value for debugging purposes.
    """

    def __init__(self, message: str, raw_value: object) -> None:
        self.raw_value = raw_value
        super().__init__(message)

    def __repr__(self) -> str:
        return f"RepresentationError({super().__repr__()}, raw_value={self.raw_value!r})"


class RuleError(RPushError):
    """Error raised when the body of a guarded rule fails."""

    def __init__(self, rule: str, cycle: int, cause: BaseException) -> None:
        self.rule = rule
        self.cycle = cycle
        super().__init__(f"Rule '{rule}' failed at cycle {cycle}: {cause}")
