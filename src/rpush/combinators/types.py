"""Concrete RPush implementations built by the combinators."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from rpush.kernel.ports import QueuePort, RPush, is_ready

A = TypeVar("A")
B = TypeVar("B")


@dataclass(frozen=True)
class Apply(Generic[A, B]):
    """Maps every pushed value with ``f`` before handing it to ``dst``."""

    f: Callable[[A], B]
    dst: RPush[B]

    def push(self, x: A) -> None:
        self.dst.push(self.f(x))

    def clear(self) -> None:
        self.dst.clear()

    @property
    def ready(self) -> bool:
        return is_ready(self.dst)


@dataclass(frozen=True)
class Tee(Generic[A]):
    """Shows every pushed value to ``observer``, then forwards it unchanged."""

    observer: Callable[[A], Any]
    dst: RPush[A]

    def push(self, x: A) -> None:
        self.observer(x)
        self.dst.push(x)

    def clear(self) -> None:
        self.dst.clear()

    @property
    def ready(self) -> bool:
        return is_ready(self.dst)


@dataclass(frozen=True)
class Forward(Generic[A]):
    """Named pass-through unit."""

    path: str
    dst: RPush[A]

    def push(self, x: A) -> None:
        self.dst.push(x)

    def clear(self) -> None:
        self.dst.clear()

    @property
    def ready(self) -> bool:
        return is_ready(self.dst)


@dataclass(frozen=True)
class Buffer(Generic[A]):
    """Queue in front of ``dst``, drained by a forwarding rule.

    Attributes:
        path: Hierarchical name of the unit
        fifo: Owned queue holding values not yet forwarded
        dst: Owned destination
    """

    path: str
    fifo: QueuePort[A]
    dst: RPush[A]

    def push(self, x: A) -> None:
        self.fifo.enq(x)

    def clear(self) -> None:
        self.fifo.clear()
        self.dst.clear()

    @property
    def ready(self) -> bool:
        return self.fifo.not_full

    def can_forward(self) -> bool:
        return self.fifo.not_empty and is_ready(self.dst)

    def forward(self) -> None:
        self.dst.push(self.fifo.deq())


@dataclass(frozen=True)
class Sink:
    """Absorbs everything."""

    path: str

    def push(self, x: Any) -> None:
        pass

    def clear(self) -> None:
        pass

    @property
    def ready(self) -> bool:
        return True


@dataclass(frozen=True)
class QueueRPush(Generic[A]):
    """An externally owned queue seen as an RPush."""

    queue: QueuePort[A]

    def push(self, x: A) -> None:
        self.queue.enq(x)

    def clear(self) -> None:
        self.queue.clear()

    @property
    def ready(self) -> bool:
        return self.queue.not_full
