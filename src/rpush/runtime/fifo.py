"""Clocked FIFO implementation."""

from __future__ import annotations

from collections import deque
from typing import Annotated, Any, Generic, TypeVar

from pydantic import Field, TypeAdapter, ValidationError

from rpush.kernel.clock import Clock
from rpush.kernel.errors import (
    ConflictError,
    FifoOverflowError,
    FifoUnderflowError,
    RepresentationError,
)
from rpush.kernel.module import Design, Module

T = TypeVar("T")

_NOTHING = object()


def bits(width: int) -> Any:
    """Unsigned integer type of ``width`` bits, usable as a FIFO element type."""
    if width < 1:
        raise ValueError("width must be positive")
    return Annotated[int, Field(ge=0, lt=2**width)]


class Fifo(Generic[T]):
    """Clocked queue of at most ``depth`` elements.

    Reads see the contents committed at the end of the previous cycle;
    enq and deq are staged and take effect when the clock commits. At most
    one enq and one deq are accepted per cycle. A clear dominates every
    other write of its cycle and hides the contents from guards right away.
    """

    def __init__(
        self,
        clock: Clock,
        depth: int = 2,
        element_type: Any | None = None,
        name: str = "fifo",
    ) -> None:
        if depth < 1:
            raise ValueError("depth must be positive")
        self.name = name
        self._clock = clock
        self.depth = depth
        self._items: deque[T] = deque()
        self._staged_enq: Any = _NOTHING
        self._staged_deq = False
        self._clearing = False
        self._adapter: TypeAdapter[Any] | None = None
        if element_type is not None and clock.config.validate_elements:
            self._adapter = TypeAdapter(element_type)
        clock.register(self)

    @property
    def not_full(self) -> bool:
        return len(self._items) < self.depth

    @property
    def not_empty(self) -> bool:
        return bool(self._items) and not self._clearing

    def enq(self, x: T) -> None:
        if self._staged_enq is not _NOTHING:
            raise ConflictError(f"{self.name}: enq called twice in one cycle")
        if not self.not_full:
            raise FifoOverflowError(f"{self.name}: enq on a full queue")
        value = self._validate(x)
        self._clock.touch(self)
        self._staged_enq = value

    def deq(self) -> T:
        if self._staged_deq:
            raise ConflictError(f"{self.name}: deq called twice in one cycle")
        head = self.first()
        self._clock.touch(self)
        self._staged_deq = True
        return head

    def first(self) -> T:
        if not self.not_empty:
            raise FifoUnderflowError(f"{self.name}: queue is empty")
        return self._items[0]

    def clear(self) -> None:
        self._clock.touch(self)
        self._clearing = True

    def commit(self) -> None:
        if self._clearing:
            self._items.clear()
        else:
            if self._staged_deq:
                self._items.popleft()
            if self._staged_enq is not _NOTHING:
                self._items.append(self._staged_enq)
        self._staged_enq = _NOTHING
        self._staged_deq = False
        self._clearing = False

    def checkpoint(self) -> tuple[Any, bool, bool]:
        return (self._staged_enq, self._staged_deq, self._clearing)

    def rollback(self, saved: tuple[Any, bool, bool]) -> None:
        self._staged_enq, self._staged_deq, self._clearing = saved

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Fifo(name={self.name!r}, depth={self.depth}, items={list(self._items)!r})"

    def _validate(self, x: Any) -> T:
        if self._adapter is None:
            return x
        try:
            return self._adapter.validate_python(x, strict=True)
        except ValidationError as exc:
            raise RepresentationError(f"{self.name}: {exc.errors()[0]['msg']}", x) from exc


def mk_fifo(depth: int | None = None, element_type: Any | None = None) -> Module[Fifo[Any]]:
    """Module constructor for a Fifo attached to the design's clock."""
    def body(design: Design) -> Fifo[Any]:
        return Fifo(
            design.clock,
            depth=depth if depth is not None else design.config.fifo_depth,
            element_type=element_type,
            name=design.path,
        )

    return Module.instance("fifo", body)
