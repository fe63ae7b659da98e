"""AI strategy interface and shared targeting helpers."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass

from broadside.ai.memory import AIMemory
from broadside.core.board import in_bounds
from broadside.core.errors import NoTargetsError
from broadside.core.models import BoardState, Coord, is_targeted_cell


@dataclass(frozen=True, slots=True)
class ShotChoice:
    """Chosen coordinate plus the memory to carry into the next decision."""

    coord: Coord
    memory: AIMemory


class AIStrategy(ABC):
    """Opponent targeting contract.

    Implementations are stateless: everything they learn lives in ``AIMemory``,
    which they receive and return. The chosen coordinate is already recorded as
    attempted in the returned memory.
    """

    name: str = "strategy"

    @abstractmethod
    def choose_shot(self, board: BoardState, memory: AIMemory, rng: random.Random) -> ShotChoice:
        """Return next coordinate to fire at ``board``."""


class RandomShotAI(AIStrategy):
    """Easy tier: uniform pick among never-targeted cells."""

    name = "easy"

    def choose_shot(self, board: BoardState, memory: AIMemory, rng: random.Random) -> ShotChoice:
        coord = choose_random(untargeted_cells(board, memory), rng)
        return ShotChoice(coord=coord, memory=memory.with_attempted(coord))


def is_untargeted(board: BoardState, memory: AIMemory, coord: Coord) -> bool:
    """Cell was neither recorded in memory nor marked on the board."""
    return not memory.has_attempted(coord) and not is_targeted_cell(board.cell(coord))


def untargeted_cells(board: BoardState, memory: AIMemory) -> list[Coord]:
    """All never-targeted cells in row-major order."""
    return [
        Coord(x, y)
        for y in range(board.size)
        for x in range(board.size)
        if is_untargeted(board, memory, Coord(x, y))
    ]


def orthogonal_neighbours(coord: Coord, size: int) -> list[Coord]:
    candidates = (
        Coord(coord.x + 1, coord.y),
        Coord(coord.x - 1, coord.y),
        Coord(coord.x, coord.y + 1),
        Coord(coord.x, coord.y - 1),
    )
    return [cell for cell in candidates if in_bounds(cell, size)]


def choose_random(cells: list[Coord], rng: random.Random) -> Coord:
    if not cells:
        raise NoTargetsError("No untargeted cells left to choose from.")
    return cells[rng.randrange(len(cells))]
