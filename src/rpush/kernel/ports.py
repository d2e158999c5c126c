"""Port protocols for rpush - pure abstractions."""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)


class RPush(Protocol[T_contra]):
    """Reverse-push consumer.

    Accepts one value per activation and can be reset. ``clear`` must be
    idempotent and must reset every buffered stage the consumer owns.
    """

    def push(self, x: T_contra) -> None:
        """Accept one value for this activation."""
        ...

    def clear(self) -> None:
        """Discard buffered state, recursively."""
        ...


@runtime_checkable
class Guarded(Protocol):
    """Implicit condition of a consumer.

    ``ready`` is True when a push in the current cycle will be accepted.
    """

    @property
    def ready(self) -> bool: ...


class QueuePort(Protocol[T]):
    """Clocked first-in-first-out queue."""

    def enq(self, x: T) -> None: ...
    def deq(self) -> T: ...
    def first(self) -> T: ...
    def clear(self) -> None: ...

    @property
    def not_full(self) -> bool: ...

    @property
    def not_empty(self) -> bool: ...


class StateElement(Protocol):
    """Clocked state committed at the end of every cycle.

    ``checkpoint`` captures the writes staged so far in the cycle and
    ``rollback`` restores them when a rule fails part way through.
    """

    def commit(self) -> None: ...
    def checkpoint(self) -> Any: ...
    def rollback(self, saved: Any) -> None: ...


def is_ready(port: Any) -> bool:
    """Implicit condition of ``port``; consumers without one are always ready."""
    if isinstance(port, Guarded):
        return port.ready
    return True
