"""Replay of the turn log onto the initial board snapshots."""

from __future__ import annotations

from dataclasses import dataclass

from broadside.app.game_state import GameState
from broadside.app.state_machine import Phase
from broadside.core.board import clone_board, fire_at
from broadside.core.models import BoardState, Shooter


@dataclass(frozen=True, slots=True)
class HistoryBoards:
    """Pair of boards as seen at one moment of the match."""

    player: BoardState
    opponent: BoardState


@dataclass(frozen=True, slots=True)
class ReplaySnapshot:
    turn: int
    shooter: Shooter
    player_board: BoardState
    opponent_board: BoardState


def get_history_at_turn(state: GameState, turn: int | None) -> HistoryBoards:
    """Reconstruct both boards as they stood right after ``turn`` was resolved.

    Live boards are returned untouched when no turn is selected, nothing was fired
    yet, or the match is still in setup. Otherwise the log is replayed from the
    initial snapshots, never from the live boards.
    """
    if turn is None or not state.history or state.phase is Phase.SETUP:
        return HistoryBoards(player=state.player_board, opponent=state.opponent_board)

    player_board, opponent_board = _initial_boards(state)
    for record in sorted(state.history, key=lambda entry: entry.turn):
        if record.shooter is Shooter.PLAYER:
            opponent_board, _ = fire_at(opponent_board, record.target)
        else:
            player_board, _ = fire_at(player_board, record.target)
        if record.turn == turn:
            break
    return HistoryBoards(player=player_board, opponent=opponent_board)


def create_replay_snapshots(state: GameState) -> list[ReplaySnapshot]:
    """Boards after every recorded turn, preceded by the turn-0 starting position."""
    player_board, opponent_board = _initial_boards(state)
    snapshots = [
        ReplaySnapshot(
            turn=0,
            shooter=Shooter.PLAYER,
            player_board=player_board,
            opponent_board=opponent_board,
        )
    ]
    for record in sorted(state.history, key=lambda entry: entry.turn):
        if record.shooter is Shooter.PLAYER:
            opponent_board, _ = fire_at(opponent_board, record.target)
        else:
            player_board, _ = fire_at(player_board, record.target)
        snapshots.append(
            ReplaySnapshot(
                turn=record.turn,
                shooter=record.shooter,
                player_board=player_board,
                opponent_board=opponent_board,
            )
        )
    return snapshots


def _initial_boards(state: GameState) -> tuple[BoardState, BoardState]:
    player = state.initial_player_board or state.player_board
    opponent = state.initial_opponent_board or state.opponent_board
    return clone_board(player), clone_board(opponent)
