"""Difficulty to strategy dispatch."""

from __future__ import annotations

import random

from broadside.ai.hunt_target import HuntTargetAI
from broadside.ai.memory import AIMemory
from broadside.ai.probability_target import ProbabilityTargetAI
from broadside.ai.strategy import AIStrategy, RandomShotAI, ShotChoice
from broadside.core.models import BoardState, Difficulty

_STRATEGIES: dict[Difficulty, AIStrategy] = {
    Difficulty.EASY: RandomShotAI(),
    Difficulty.MEDIUM: HuntTargetAI(),
    Difficulty.HARD: ProbabilityTargetAI(),
}


def build_ai_strategy(difficulty: Difficulty | str) -> AIStrategy:
    """Return the strategy for a tier; unknown values map to easy."""
    if not isinstance(difficulty, Difficulty):
        difficulty = Difficulty.parse(difficulty)
    return _STRATEGIES.get(difficulty, _STRATEGIES[Difficulty.EASY])


def pick_shot(
    board: BoardState,
    difficulty: Difficulty | str,
    memory: AIMemory,
    rng: random.Random,
) -> ShotChoice:
    """Choose the opponent's next shot at ``board``."""
    return build_ai_strategy(difficulty).choose_shot(board, memory, rng)
