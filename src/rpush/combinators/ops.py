"""Combinator primitives: apply, tee, buffer, pass, sink, spew, pipe.

Pure combinators (apply, tee, fifo_to_rpush) return an RPush directly.
Module constructors (buffer, buffered, pass_, passed, sink, spew) return a
Module that instantiates a new addressable unit when built.

Laws:

1. Identity: apply(lambda x: x, dst) behaves as dst
2. Composition: apply(f, apply(g, dst)) behaves as apply(lambda x: g(f(x)), dst)
3. Fusion: buffered(f, dst) == buffer(apply(f, dst))
4. Transparency: pass_(dst) behaves as dst, with its own instance name
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from rpush.combinators.types import Apply, Buffer, Forward, QueueRPush, Sink, Tee
from rpush.kernel import Design, Module, QueuePort, RPush, is_ready
from rpush.runtime import Fifo

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")


def apply(f: Callable[[A], B], dst: RPush[B]) -> RPush[A]:
    """Map every pushed value with ``f`` before forwarding it to ``dst``.

    Semantics:
        - push(x) calls dst.push(f(x)) in the same cycle
        - clear() calls dst.clear()
        - f is assumed total; anything it raises propagates to the pusher

    Args:
        f: Pure function from the new input type to dst's input type.
        dst: Destination, owned by the result.

    Returns:
        RPush[A]: The mapping consumer.
    """
    return Apply(f, dst)


def tee(observer: Callable[[A], Any], dst: RPush[A]) -> RPush[A]:
    """Show every pushed value to ``observer``, then forward it unchanged.

    The observer runs exactly once per push, always before the forward.
    clear() only clears dst.
    """
    return Tee(observer, dst)


def fifo_to_rpush(queue: QueuePort[A]) -> RPush[A]:
    """Adapt an externally owned queue to the RPush interface.

    push enqueues, clear clears the queue. The queue stays owned by the caller.
    """
    return QueueRPush(queue)


def buffer(
    dst: RPush[A],
    depth: int | None = None,
    element_type: Any | None = None,
) -> Module[RPush[A]]:
    """Put a queue in front of ``dst``.

    Semantics:
        - push(x) enqueues x; pushing into a full queue raises FifoOverflowError
        - A forwarding rule fires every cycle the queue holds an element and
          dst is ready, moving the head to dst.push
        - A value pushed in cycle c reaches dst in cycle c+1 at the earliest
        - clear() clears the queue and dst in the same cycle

    Args:
        dst: Destination, owned by the buffer.
        depth: Queue capacity, defaults to the design's fifo_depth.
        element_type: Type every queued value must be representable as.

    Returns:
        Module[RPush[A]]: Builds the buffering unit.
    """
    def body(design: Design) -> RPush[A]:
        fifo: Fifo[A] = Fifo(
            design.clock,
            depth=depth if depth is not None else design.config.fifo_depth,
            element_type=element_type,
            name=design.name_of("fifo"),
        )
        unit = Buffer(design.path, fifo, dst)
        design.clock.add_rule(design.name_of("forward"), unit.can_forward, unit.forward)
        return unit

    return Module.instance("buffer", body)


def buffered(
    f: Callable[[A], B],
    dst: RPush[B],
    depth: int | None = None,
    element_type: Any | None = None,
) -> Module[RPush[A]]:
    """buffer(apply(f, dst)): values are queued as pushed and mapped when forwarded."""
    return buffer(apply(f, dst), depth=depth, element_type=element_type)


def pass_(dst: RPush[A]) -> Module[RPush[A]]:
    """Give ``dst`` its own instance without changing its behavior."""
    def body(design: Design) -> RPush[A]:
        return Forward(design.path, dst)

    return Module.instance("pass", body)


def passed(f: Callable[[A], B], dst: RPush[B]) -> Module[RPush[A]]:
    """pass_(apply(f, dst))."""
    return pass_(apply(f, dst))


def sink() -> Module[RPush[Any]]:
    """Instantiate a consumer that discards everything."""
    def body(design: Design) -> RPush[Any]:
        return Sink(design.path)

    return Module.instance("sink", body)


def spew(
    dst: RPush[A],
    value: A | None = None,
    produce: Callable[[], A] | None = None,
) -> Module[None]:
    """Push a value into ``dst`` every cycle.

    The algebra leaves the produced value unspecified. Here it is ``value``,
    pushed as is even when it is callable, or ``produce()`` evaluated once
    per cycle when ``produce`` is given. The rule holds off only while dst
    is not ready.
    """
    make: Callable[[], Any] = produce if produce is not None else (lambda: value)

    def body(design: Design) -> None:
        design.clock.add_rule(
            design.name_of("produce"),
            lambda: is_ready(dst),
            lambda: dst.push(make()),
        )

    return Module.instance("spew", body)


def pipe(f: Callable[[A], Module[B]], a: Module[A]) -> Module[B]:
    """Build ``a``, then build ``f`` around its result.

    pipe(buffer, sink()) is a buffer in front of a sink;
    pipe(lambda d: passed(g, d), a) wraps a mapping pass around a.
    """
    return a.then(f)
