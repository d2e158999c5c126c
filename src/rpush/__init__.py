from .combinators import (
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
from .kernel import (
    Clock,
    Design,
    Module,
    RPush,
    RPushError,
    SimConfig,
    Trace,
)
from .runtime import Fifo, bits, mk_fifo

__all__ = [
    # Core
    "RPush",
    "Module",
    "Design",
    "Clock",
    "SimConfig",
    "RPushError",
    # Combinators
    "apply",
    "tee",
    "buffer",
    "buffered",
    "pass_",
    "passed",
    "sink",
    "spew",
    "pipe",
    "fifo_to_rpush",
    # Runtime
    "Fifo",
    "bits",
    "mk_fifo",
    # Tracing
    "Trace",
]
