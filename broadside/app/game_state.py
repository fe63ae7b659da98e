"""Immutable match state owned by the controller."""

from __future__ import annotations

from dataclasses import dataclass

from broadside.ai.memory import AIMemory, create_memory
from broadside.app.state_machine import Phase
from broadside.core.board import create_empty_board, unplaced_kinds
from broadside.core.models import (
    BOARD_SIZE,
    DEFAULT_DIFFICULTY,
    BoardState,
    Coord,
    Difficulty,
    Shooter,
    ShipKind,
    TurnRecord,
)


@dataclass(frozen=True, slots=True)
class GameState:
    """Complete match state; replaced, never edited, by transitions."""

    phase: Phase
    difficulty: Difficulty
    player_board: BoardState
    opponent_board: BoardState
    memory: AIMemory
    initial_player_board: BoardState | None = None
    initial_opponent_board: BoardState | None = None
    turn_count: int = 1
    history: tuple[TurnRecord, ...] = ()
    history_cursor: int | None = None
    history_open: bool = False
    placement_order: tuple[ShipKind, ...] = ()
    winner: Shooter | None = None
    opponent_thinking: bool = False

    @property
    def is_live(self) -> bool:
        return self.phase in (Phase.PLAYER_TURN, Phase.AI_TURN)

    @property
    def hint_queue(self) -> tuple[Coord, ...]:
        """Follow-up coordinates the opponent is pursuing, for hint rendering."""
        return self.memory.target_queue


def create_initial_state(
    difficulty: Difficulty = DEFAULT_DIFFICULTY, size: int = BOARD_SIZE
) -> GameState:
    """Fresh setup-phase state with two empty boards."""
    player_board = create_empty_board(size)
    return GameState(
        phase=Phase.SETUP,
        difficulty=difficulty,
        player_board=player_board,
        opponent_board=create_empty_board(size),
        memory=create_memory(),
        placement_order=unplaced_kinds(player_board),
    )
