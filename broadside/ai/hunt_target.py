"""Hunt/Target AI strategy with parity hunting."""

from __future__ import annotations

import random
from collections import deque
from dataclasses import replace

from broadside.ai.memory import AIMemory
from broadside.ai.strategy import (
    AIStrategy,
    ShotChoice,
    choose_random,
    is_untargeted,
    untargeted_cells,
)
from broadside.core.models import BoardState, Coord


class HuntTargetAI(AIStrategy):
    """Medium tier: drain the follow-up queue, otherwise hunt on a checkerboard."""

    name = "medium"

    def choose_shot(self, board: BoardState, memory: AIMemory, rng: random.Random) -> ShotChoice:
        queue = deque(memory.target_queue)
        while queue:
            coord = queue.popleft()
            if is_untargeted(board, memory, coord):
                updated = replace(memory, target_queue=tuple(queue))
                return ShotChoice(coord=coord, memory=updated.with_attempted(coord))

        # Every queued entry was stale.
        memory = replace(memory, target_queue=())
        unseen = untargeted_cells(board, memory)
        parity = [coord for coord in unseen if (coord.x + coord.y) % 2 == 0]
        coord = choose_random(parity or unseen, rng)
        return ShotChoice(coord=coord, memory=memory.with_attempted(coord))


def sort_targets(queue: list[Coord], hits: tuple[Coord, ...] | list[Coord]) -> list[Coord]:
    """Order follow-up candidates along the axis inferred from the last two hits."""
    if len(hits) < 2:
        return list(queue)
    previous, latest = hits[-2], hits[-1]
    if previous.x == latest.x:
        return sorted(queue, key=lambda coord: abs(coord.y - latest.y))
    if previous.y == latest.y:
        return sorted(queue, key=lambda coord: abs(coord.x - latest.x))
    return list(queue)
