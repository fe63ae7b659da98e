"""Memory updates after the opponent's shot has been resolved."""

from __future__ import annotations

from dataclasses import replace

from broadside.ai.hunt_target import sort_targets
from broadside.ai.memory import AIMemory
from broadside.ai.strategy import orthogonal_neighbours
from broadside.core.models import Coord, ShotHit, ShotOutcome


def update_memory_on_hit(memory: AIMemory, coord: Coord, sunk: bool, board_size: int) -> AIMemory:
    """Extend the pursuit after a hit, or end it when the ship sank."""
    if sunk:
        return replace(memory, target_queue=(), last_hits=())

    last_hits = memory.last_hits + (coord,)
    candidates: dict[str, Coord] = {queued.key: queued for queued in memory.target_queue}
    for neighbour in orthogonal_neighbours(coord, board_size):
        if memory.has_attempted(neighbour):
            continue
        candidates.setdefault(neighbour.key, neighbour)
    queue = sort_targets(list(candidates.values()), last_hits)
    return replace(memory, target_queue=tuple(queue), last_hits=last_hits)


def update_memory_on_miss(memory: AIMemory) -> AIMemory:
    """Misses need no bookkeeping beyond the attempted set."""
    return memory


def apply_shot_feedback(
    memory: AIMemory, coord: Coord, outcome: ShotOutcome, board_size: int
) -> AIMemory:
    match outcome:
        case ShotHit(sunk=sunk):
            return update_memory_on_hit(memory, coord, sunk, board_size)
        case _:
            return update_memory_on_miss(memory)
