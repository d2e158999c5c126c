"""Runtime layer - reference collaborators for clocked simulation."""

from rpush.runtime.fifo import Fifo, bits, mk_fifo

__all__ = ["Fifo", "bits", "mk_fifo"]
