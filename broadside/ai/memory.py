"""Opponent memory threaded through every strategy call."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

import numpy as np

from broadside.core.models import Coord


@dataclass(frozen=True, slots=True)
class AIMemory:
    """Per-game opponent memory.

    ``attempted`` holds serialized ``"x,y"`` keys. ``heatmap`` is the score grid of
    the last probability decision, indexed ``[y, x]``; it is diagnostic only.
    """

    attempted: frozenset[str] = frozenset()
    target_queue: tuple[Coord, ...] = ()
    last_hits: tuple[Coord, ...] = ()
    heatmap: np.ndarray | None = field(default=None, compare=False)

    def has_attempted(self, coord: Coord) -> bool:
        return coord.key in self.attempted

    def with_attempted(self, coord: Coord) -> AIMemory:
        """Return memory with ``coord`` recorded as targeted."""
        return replace(self, attempted=self.attempted | {coord.key})


def create_memory(
    *,
    attempted: frozenset[str] | set[str] | None = None,
    target_queue: tuple[Coord, ...] | list[Coord] | None = None,
    last_hits: tuple[Coord, ...] | list[Coord] | None = None,
) -> AIMemory:
    """Build a fresh memory, optionally pre-seeded."""
    return AIMemory(
        attempted=frozenset(attempted or ()),
        target_queue=tuple(target_queue or ()),
        last_hits=tuple(last_hits or ()),
    )
