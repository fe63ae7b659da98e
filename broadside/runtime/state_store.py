"""Versioned single-value state store."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

TState = TypeVar("TState")


@dataclass(frozen=True, slots=True)
class StateSnapshot(Generic[TState]):
    """Versioned state snapshot from state-store."""

    value: TState
    revision: int


class RuntimeStateStore(Generic[TState]):
    """Holds an immutable state value and counts replacements.

    Values are expected to be immutable, so snapshots share them without copying.
    """

    def __init__(self, initial_state: TState) -> None:
        self._value = initial_state
        self._revision = 0

    def snapshot(self) -> StateSnapshot[TState]:
        return StateSnapshot(value=self._value, revision=self._revision)

    def get(self) -> TState:
        return self._value

    def update(self, transition: Callable[[TState], TState]) -> bool:
        """Apply a pure transition; returns whether the value changed."""
        next_value = transition(self._value)
        if next_value is self._value:
            return False
        self._value = next_value
        self._revision += 1
        return True

    def revision(self) -> int:
        return self._revision
