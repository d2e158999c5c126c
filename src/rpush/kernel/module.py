"""Module monad - the component-construction context."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generic, TypeVar

from rpush.kernel.clock import Clock
from rpush.kernel.config import SimConfig
from rpush.kernel.errors import ElaborationError
from rpush.kernel.trace import Trace

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class Instance:
    """An addressable unit created during elaboration."""

    path: str
    kind: str


class Design:
    """Elaboration context.

    Owns the clock every built component is attached to and the hierarchy
    of instance names. Instances are named after their kind, made unique
    among their siblings (``top.buffer``, ``top.buffer_1``).
    """

    def __init__(
        self,
        config: SimConfig | None = None,
        clock: Clock | None = None,
        trace: Trace | None = None,
        name: str = "top",
    ) -> None:
        self.config = config or (clock.config if clock is not None else SimConfig())
        if trace is None and clock is not None:
            trace = clock.trace
        if trace is None and self.config.trace:
            trace = Trace()
        self.trace = trace
        self.clock = clock or Clock(self.config, trace)
        if self.clock.trace is None:
            self.clock.trace = trace
        self._scope: list[str] = [name]
        self._taken: set[str] = set()
        self._instances: list[Instance] = []

    @property
    def path(self) -> str:
        """Hierarchical name of the scope currently being elaborated."""
        return ".".join(self._scope)

    @property
    def instances(self) -> tuple[Instance, ...]:
        return tuple(self._instances)

    def name_of(self, local: str) -> str:
        """Hierarchical name for something declared in the current scope."""
        return f"{self.path}.{local}"

    def build(self, module: Module[T]) -> T:
        """Elaborate a module within this design."""
        return module.build(self)

    @contextmanager
    def scope(self, kind: str) -> Iterator[Instance]:
        """Open a new addressable unit for the duration of the block."""
        if not kind or "." in kind:
            raise ElaborationError(f"Invalid instance kind: {kind!r}")
        local = kind
        suffix = 0
        while self.name_of(local) in self._taken:
            suffix += 1
            local = f"{kind}_{suffix}"
        instance = Instance(path=self.name_of(local), kind=kind)
        self._taken.add(instance.path)
        self._instances.append(instance)
        logger.debug("instantiate %s", instance.path)

        event_id: int | None = None
        if self.trace is not None:
            event_id = self.trace.record("instantiate", info={"path": instance.path, "kind": kind})
            if event_id is not None:
                self.trace.push(event_id)
        self._scope.append(local)
        try:
            yield instance
        finally:
            self._scope.pop()
            if self.trace is not None and event_id is not None:
                self.trace.pop()

    def instantiate(self, kind: str, body: Callable[[Design], T]) -> T:
        """Build ``body`` inside a new addressable unit."""
        with self.scope(kind):
            return body(self)


@dataclass(frozen=True)
class Module(Generic[T]):
    """Module monad - a deferred construction of a component of type T.

    Nothing is created until the module is built within a Design.
    """

    _build: Callable[[Design], T]

    def build(self, design: Design) -> T:
        """Elaborate the module and return its interface."""
        return self._build(design)

    def then(self, func: Callable[[T], Module[R]]) -> Module[R]:
        """Build this module, then the module ``func`` makes from its interface.

        The second build cannot start until the first one's result is available.
        """
        def new_build(design: Design) -> R:
            value = self.build(design)
            return func(value).build(design)

        return Module(new_build)

    def map(self, func: Callable[[T], R]) -> Module[R]:
        def new_build(design: Design) -> R:
            return func(self.build(design))

        return Module(new_build)

    @staticmethod
    def start(value: T) -> Module[T]:
        """Create a Module that builds nothing and returns ``value``."""
        return Module.lift_value(value)

    @staticmethod
    def lift_value(value: T) -> Module[T]:
        def build_func(_: Design) -> T:
            return value

        return Module(build_func)

    @staticmethod
    def instance(kind: str, body: Callable[[Design], T]) -> Module[T]:
        """Create a Module whose body is elaborated as a new addressable unit."""
        def build_func(design: Design) -> T:
            return design.instantiate(kind, body)

        return Module(build_func)
