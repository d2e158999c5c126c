"""Single-domain clock - fires guarded rules once per cycle."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from rpush.kernel.config import SimConfig
from rpush.kernel.errors import RuleError
from rpush.kernel.ports import StateElement
from rpush.kernel.trace import Trace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rule:
    """A guarded transition.

    Attributes:
        name: Hierarchical name of the rule
        guard: Evaluated at the start of the firing slot; the body runs only when it holds
        body: Action performed when the rule fires
    """

    name: str
    guard: Callable[[], bool]
    body: Callable[[], None]


class Clock:
    """Synchronous clock driving every rule and state element of a design.

    Whatever a caller does between two ticks belongs to the current cycle.
    ``tick`` then fires the rules in registration order, commits every state
    element and advances the cycle counter.
    """

    def __init__(self, config: SimConfig | None = None, trace: Trace | None = None) -> None:
        self.config = config or SimConfig()
        self.trace = trace
        self.cycle = 0
        self._rules: list[Rule] = []
        self._elements: list[StateElement] = []
        self._undo: list[tuple[StateElement, Any]] | None = None

    @property
    def rules(self) -> tuple[Rule, ...]:
        return tuple(self._rules)

    def add_rule(self, name: str, guard: Callable[[], bool], body: Callable[[], None]) -> Rule:
        """Register a guarded rule."""
        rule = Rule(name=name, guard=guard, body=body)
        self._rules.append(rule)
        return rule

    def register(self, element: StateElement) -> None:
        """Register a state element to be committed at the end of every cycle."""
        self._elements.append(element)

    def touch(self, element: StateElement) -> None:
        """Save ``element``'s staged writes before the firing rule changes them.

        Writes made outside a rule body belong to the caller and are not saved.
        """
        if self._undo is None:
            return
        if any(saved is element for saved, _ in self._undo):
            return
        self._undo.append((element, element.checkpoint()))

    def tick(self) -> list[str]:
        """Run one cycle.

        A rule either fires completely or not at all: when its body raises,
        the writes it staged into state elements are rolled back, the rules
        after it do not fire, and the cycle is committed with what the
        earlier rules did. Pushes into unclocked consumers cannot be undone.

        Returns:
            Names of the rules that fired, in firing order

        Raises:
            RuleError: If a rule body raised
        """
        fired: list[str] = []
        for rule in self._rules:
            if not rule.guard():
                continue
            self._undo = []
            try:
                rule.body()
            except Exception as exc:
                for element, saved in reversed(self._undo):
                    element.rollback(saved)
                logger.debug("rule %s failed at cycle %d", rule.name, self.cycle)
                if self.trace is not None:
                    self.trace.record(
                        "rule_error",
                        info={"rule": rule.name, "error": str(exc)},
                        cycle=self.cycle,
                    )
                cycle = self.cycle
                self._commit(fired)
                raise RuleError(rule.name, cycle, exc) from exc
            finally:
                self._undo = None
            fired.append(rule.name)
            if self.trace is not None:
                self.trace.record("rule_fired", info={"rule": rule.name}, cycle=self.cycle)

        self._commit(fired)
        return fired

    def run(self, cycles: int) -> list[list[str]]:
        """Tick ``cycles`` times and return what fired in each cycle."""
        if cycles < 0:
            raise ValueError("cycles must be non-negative")
        return [self.tick() for _ in range(cycles)]

    def _commit(self, fired: list[str]) -> None:
        for element in self._elements:
            element.commit()

        logger.debug("cycle %d fired %d rule(s)", self.cycle, len(fired))
        self.cycle += 1
