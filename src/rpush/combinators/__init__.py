"""Combinators - composition primitives for RPush consumers."""

from rpush.combinators.ops import (
    apply,
    buffer,
    buffered,
    fifo_to_rpush,
    pass_,
    passed,
    pipe,
    sink,
    spew,
    tee,
)
from rpush.combinators.types import Apply, Buffer, Forward, QueueRPush, Sink, Tee

__all__ = [
    "apply",
    "buffer",
    "buffered",
    "fifo_to_rpush",
    "pass_",
    "passed",
    "pipe",
    "sink",
    "spew",
    "tee",
    # Implementations
    "Apply",
    "Buffer",
    "Forward",
    "QueueRPush",
    "Sink",
    "Tee",
]
