"""Kernel layer - clock, construction context and port abstractions."""

from rpush.kernel.clock import Clock, Rule
from rpush.kernel.config import SimConfig
from rpush.kernel.errors import (
    ConflictError,
    ElaborationError,
    FifoOverflowError,
    FifoUnderflowError,
    RepresentationError,
    RPushError,
    RuleError,
)
from rpush.kernel.module import Design, Instance, Module
from rpush.kernel.ports import Guarded, QueuePort, RPush, StateElement, is_ready
from rpush.kernel.trace import Evidence, Trace

__all__ = [
    "Clock",
    "Rule",
    "SimConfig",
    # Construction
    "Design",
    "Instance",
    "Module",
    # Ports
    "RPush",
    "Guarded",
    "QueuePort",
    "StateElement",
    "is_ready",
    # Tracing
    "Evidence",
    "Trace",
    # Errors
    "RPushError",
    "ConflictError",
    "ElaborationError",
    "FifoOverflowError",
    "FifoUnderflowError",
    "RepresentationError",
    "RuleError",
]
