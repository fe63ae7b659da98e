"""Probability-density AI scoring cells from every consistent ship placement."""

from __future__ import annotations

import logging
import random
from dataclasses import replace

import numpy as np

from broadside.ai.hunt_target import HuntTargetAI
from broadside.ai.memory import AIMemory
from broadside.ai.strategy import AIStrategy, ShotChoice, orthogonal_neighbours
from broadside.core.models import (
    BoardState,
    Coord,
    HitCell,
    MissCell,
    Orientation,
    SunkCell,
    cells_for_placement,
    is_targeted_cell,
)

ADJACENT_HIT_BONUS = 50
INLINE_HIT_BONUS = 30
INLINE_HIT_REACH = 2
CENTER_BONUS_MAX = 10
PARITY_BONUS = 5

logger = logging.getLogger(__name__)


class ProbabilityTargetAI(AIStrategy):
    """Hard tier: heat map over remaining ships plus hunt heuristics."""

    name = "hard"

    def __init__(self, fallback: AIStrategy | None = None) -> None:
        self._fallback = fallback or HuntTargetAI()

    def choose_shot(self, board: BoardState, memory: AIMemory, rng: random.Random) -> ShotChoice:
        targeted = _targeted_mask(board, memory)
        hits = _cells_matching(board, HitCell)
        heat = build_heatmap(board, hits, targeted)
        if not heat.any():
            logger.debug("heatmap_empty fallback=%s", self._fallback.name)
            return self._fallback.choose_shot(board, memory, rng)

        scores = heat + _bonus_grid(board.size, hits)
        scores[(heat == 0) | targeted] = 0
        coord = _select_best(scores, hits, board.size)
        scores.setflags(write=False)
        updated = replace(memory, heatmap=scores)
        return ShotChoice(coord=coord, memory=updated.with_attempted(coord))


def build_heatmap(board: BoardState, hits: list[Coord], targeted: np.ndarray) -> np.ndarray:
    """Sum ship lengths over every placement consistent with hits and misses.

    Placements must avoid misses and sunk ships and, while any hit is unresolved,
    cover at least one hit. Only untargeted cells accumulate heat.
    """
    size = board.size
    blocked = set(_cells_matching(board, MissCell))
    blocked.update(_cells_matching(board, SunkCell))
    hit_set = set(hits)
    heat = np.zeros((size, size), dtype=np.int64)

    for kind in board.remaining:
        length = kind.length
        for orientation in (Orientation.HORIZONTAL, Orientation.VERTICAL):
            for y in range(size):
                for x in range(size):
                    cells = cells_for_placement(Coord(x, y), length, orientation)
                    if cells[-1].x >= size or cells[-1].y >= size:
                        continue
                    if any(cell in blocked for cell in cells):
                        continue
                    if hit_set and not any(cell in hit_set for cell in cells):
                        continue
                    for cell in cells:
                        if not targeted[cell.y, cell.x]:
                            heat[cell.y, cell.x] += length
    return heat


def _bonus_grid(size: int, hits: list[Coord]) -> np.ndarray:
    ys, xs = np.indices((size, size))
    center = (size - 1) / 2
    distance = np.abs(xs - center) + np.abs(ys - center)
    bonus = np.maximum(0, CENTER_BONUS_MAX - distance).astype(np.int64)
    bonus += np.where((xs + ys) % 2 == 0, PARITY_BONUS, 0)

    for hit in hits:
        for neighbour in orthogonal_neighbours(hit, size):
            bonus[neighbour.y, neighbour.x] += ADJACENT_HIT_BONUS
        for offset in range(1, INLINE_HIT_REACH + 1):
            for cell in (
                Coord(hit.x - offset, hit.y),
                Coord(hit.x + offset, hit.y),
                Coord(hit.x, hit.y - offset),
                Coord(hit.x, hit.y + offset),
            ):
                if 0 <= cell.x < size and 0 <= cell.y < size:
                    bonus[cell.y, cell.x] += INLINE_HIT_BONUS
    return bonus


def _select_best(scores: np.ndarray, hits: list[Coord], size: int) -> Coord:
    best = scores.max()
    candidates = [Coord(int(x), int(y)) for y, x in zip(*np.nonzero(scores == best))]
    hit_set = set(hits)
    center = (size - 1) / 2

    def rank(coord: Coord) -> tuple[int, int, float]:
        adjacent = sum(1 for n in orthogonal_neighbours(coord, size) if n in hit_set)
        aligned = any(hit.x == coord.x or hit.y == coord.y for hit in hits)
        distance = abs(coord.x - center) + abs(coord.y - center)
        return -adjacent, 0 if aligned else 1, distance

    # min() keeps the first row-major candidate among equal ranks.
    return min(candidates, key=rank)


def _targeted_mask(board: BoardState, memory: AIMemory) -> np.ndarray:
    mask = np.zeros((board.size, board.size), dtype=bool)
    for y, row in enumerate(board.grid):
        for x, cell in enumerate(row):
            mask[y, x] = is_targeted_cell(cell) or memory.has_attempted(Coord(x, y))
    return mask


def _cells_matching(board: BoardState, cell_type: type) -> list[Coord]:
    return [
        Coord(x, y)
        for y, row in enumerate(board.grid)
        for x, cell in enumerate(row)
        if isinstance(cell, cell_type)
    ]
