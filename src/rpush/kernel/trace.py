"""Runtime trace infrastructure - separate from component state.

This module captures elaboration and per-cycle events for debugging.
Trace is runtime infrastructure - it never changes what a design does.
Tree relationships are reconstructed only during visualization via as_tree().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True)
class Evidence:
    """A single recorded event.

    Attributes:
        action: What happened (e.g., "instantiate", "rule_fired")
        id: Sequential event id
        parent_id: Enclosing event, if any
        cycle: Clock cycle the event happened in, None during elaboration
        info: Additional context
    """

    action: str
    id: int = 0
    parent_id: int | None = None
    cycle: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    info: dict[str, Any] = field(default_factory=dict)


class Trace:
    """Trace context for capturing elaboration and cycle events.

    Uses stack-based nesting via push/pop for hierarchical parent-child relationships.

    Performance guarantees:
    - Trace disabled → single None check overhead
    - Evidence append is O(1)
    - No recursive tree construction while clocking
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._events: list[Evidence] = []
        self._next_id: int = 0
        self._stack: list[int] = []

    def push(self, event_id: int) -> None:
        """Push an event onto the stack as the current parent."""
        self._stack.append(event_id)

    def pop(self) -> int | None:
        """Pop the current stack frame.

        Returns:
            The event ID that was on top of stack, or None if stack is empty
        """
        if self._stack:
            return self._stack.pop()
        return None

    def record(
        self,
        action: str,
        info: dict[str, Any] | None = None,
        parent_id: int | None = None,
        cycle: int | None = None,
    ) -> int | None:
        """Record an evidence event.

        Args:
            action: What happened
            info: Additional context
            parent_id: Explicit parent event ID for tree relationships
            cycle: Clock cycle of the event

        Returns:
            Event ID for linking child events, or None if tracing disabled
        """
        if not self.enabled:
            return None

        if parent_id is not None:
            effective_parent = parent_id
        elif self._stack:
            effective_parent = self._stack[-1]
        else:
            effective_parent = None

        event_id = self._next_id
        self._next_id += 1

        self._events.append(
            Evidence(
                action=action,
                id=event_id,
                parent_id=effective_parent,
                cycle=cycle,
                timestamp=datetime.now(UTC),
                info=info or {},
            )
        )

        return event_id

    def get_events(self, action: str | None = None) -> list[Evidence]:
        """Get recorded events, optionally only those with the given action."""
        if action is None:
            return list(self._events)
        return [ev for ev in self._events if ev.action == action]

    def as_tree(self) -> dict[int | None, list[int]]:
        """Reconstruct parent-child relationships for visualization.

        Returns:
            Dict mapping parent_id to list of child_ids
        """
        tree: dict[int | None, list[int]] = {}
        for ev in self._events:
            tree.setdefault(ev.parent_id, []).append(ev.id)
        return tree

    def __len__(self) -> int:
        return len(self._events)

    def clear(self) -> None:
        """Clear all events (for reuse)."""
        self._events.clear()
        self._next_id = 0
        self._stack.clear()
