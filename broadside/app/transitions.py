"""Pure state transitions, one per controller action.

Every function takes the current ``GameState`` and returns the next one. Commands
that are illegal in the current phase return the input state object unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from broadside.ai.feedback import apply_shot_feedback
from broadside.ai.memory import AIMemory, create_memory
from broadside.app.actions import (
    GameAction,
    OpponentShotResolved,
    PlayerFire,
    RandomizePlayerFleet,
    ResetToSetup,
    SetDifficulty,
    SetHistoryCursor,
    SetPlayerBoard,
    StartGame,
    ToggleHistory,
)
from broadside.app.game_state import GameState, create_initial_state
from broadside.app.state_machine import Phase, can_transition
from broadside.core.board import (
    clone_board,
    fire_at,
    is_fleet_complete,
    is_targetable,
    is_victory,
    targeted_coords,
    unplaced_kinds,
    validate_fleet,
)
from broadside.core.fleet import randomize_fleet
from broadside.core.models import BoardState, Coord, Difficulty, Shooter, TurnRecord

logger = logging.getLogger(__name__)


def reset_to_setup(state: GameState) -> GameState:
    return create_initial_state(state.difficulty, state.player_board.size)


def set_difficulty(state: GameState, difficulty: Difficulty) -> GameState:
    """Rebuild setup with the new tier; mid-match only the stored value changes."""
    if state.phase is Phase.SETUP:
        return create_initial_state(difficulty, state.player_board.size)
    if difficulty is state.difficulty:
        return state
    return replace(state, difficulty=difficulty)


def randomize_player_fleet(state: GameState, seed: int) -> GameState:
    if state.phase is not Phase.SETUP:
        logger.debug("randomize_ignored phase=%s", state.phase)
        return state
    board = randomize_fleet(seed, state.player_board.size)
    return replace(state, player_board=board, placement_order=unplaced_kinds(board))


def set_player_board(state: GameState, board: BoardState) -> GameState:
    if state.phase is not Phase.SETUP:
        logger.debug("set_board_ignored phase=%s", state.phase)
        return state
    valid, reason = validate_fleet(board)
    if valid and board.size != state.player_board.size:
        valid, reason = False, "size mismatch"
    if valid and (targeted_coords(board) or any(ship.hits for ship in board.ships)):
        valid, reason = False, "board already fired at"
    if not valid:
        logger.warning("set_board_rejected reason=%s", reason)
        return state
    return replace(state, player_board=board, placement_order=unplaced_kinds(board))


def start_game(state: GameState, seed: int) -> GameState:
    """Generate the opponent fleet, snapshot both boards and hand the turn to the player."""
    if state.phase is not Phase.SETUP:
        logger.debug("start_ignored phase=%s", state.phase)
        return state
    if not is_fleet_complete(state.player_board):
        logger.warning("start_ignored reason=fleet_incomplete missing=%s", state.placement_order)
        return state

    opponent_board = randomize_fleet(seed, state.player_board.size)
    return _enter(
        state,
        Phase.PLAYER_TURN,
        opponent_board=opponent_board,
        initial_player_board=clone_board(state.player_board),
        initial_opponent_board=clone_board(opponent_board),
        memory=create_memory(),
        turn_count=1,
        history=(),
        winner=None,
        opponent_thinking=False,
    )


def player_fire(state: GameState, coord: Coord, *, now: float) -> GameState:
    """Resolve the player's shot against the opponent board."""
    if state.phase is not Phase.PLAYER_TURN:
        logger.debug("player_fire_ignored phase=%s", state.phase)
        return state
    if not is_targetable(state.opponent_board, coord):
        logger.debug("player_fire_ignored target=%s reason=not_targetable", coord.key)
        return state

    board, outcome = fire_at(state.opponent_board, coord)
    record = TurnRecord.from_outcome(
        turn=state.turn_count, shooter=Shooter.PLAYER, target=coord, outcome=outcome, timestamp=now
    )
    changes = {
        "opponent_board": board,
        "history": state.history + (record,),
        "turn_count": state.turn_count + 1,
    }
    if is_victory(board):
        return _enter(
            state, Phase.FINISHED, winner=Shooter.PLAYER, opponent_thinking=False, **changes
        )
    return _enter(state, Phase.AI_TURN, opponent_thinking=True, **changes)


def opponent_shot_resolved(
    state: GameState, coord: Coord, memory: AIMemory, *, now: float
) -> GameState:
    """Resolve the opponent's chosen shot against the player board."""
    if state.phase is not Phase.AI_TURN:
        logger.debug("opponent_shot_ignored phase=%s", state.phase)
        return state
    if not is_targetable(state.player_board, coord):
        logger.warning("opponent_shot_ignored target=%s reason=not_targetable", coord.key)
        return state

    board, outcome = fire_at(state.player_board, coord)
    record = TurnRecord.from_outcome(
        turn=state.turn_count,
        shooter=Shooter.OPPONENT,
        target=coord,
        outcome=outcome,
        timestamp=now,
    )
    changes = {
        "player_board": board,
        "memory": apply_shot_feedback(memory, coord, outcome, board.size),
        "history": state.history + (record,),
        "turn_count": state.turn_count + 1,
        "opponent_thinking": False,
    }
    if is_victory(board):
        return _enter(state, Phase.FINISHED, winner=Shooter.OPPONENT, **changes)
    return _enter(state, Phase.PLAYER_TURN, **changes)


def toggle_history(state: GameState) -> GameState:
    closing = state.history_open
    return replace(
        state,
        history_open=not closing,
        history_cursor=None if closing else state.history_cursor,
    )


def set_history_cursor(state: GameState, turn: int | None) -> GameState:
    if turn is not None and not any(record.turn == turn for record in state.history):
        logger.debug("history_cursor_ignored turn=%s", turn)
        return state
    if turn == state.history_cursor:
        return state
    return replace(state, history_cursor=turn)


def reduce(state: GameState, action: GameAction, *, now: float = 0.0) -> GameState:
    """Single entry point mapping an action onto its transition."""
    match action:
        case ResetToSetup():
            return reset_to_setup(state)
        case SetDifficulty(difficulty=difficulty):
            return set_difficulty(state, difficulty)
        case RandomizePlayerFleet(seed=seed):
            return randomize_player_fleet(state, seed)
        case SetPlayerBoard(board=board):
            return set_player_board(state, board)
        case StartGame(seed=seed):
            return start_game(state, seed)
        case PlayerFire(coord=coord):
            return player_fire(state, coord, now=now)
        case OpponentShotResolved(coord=coord, memory=memory):
            return opponent_shot_resolved(state, coord, memory, now=now)
        case ToggleHistory():
            return toggle_history(state)
        case SetHistoryCursor(turn=turn):
            return set_history_cursor(state, turn)
    raise TypeError(f"Unsupported action: {action!r}")


def _enter(state: GameState, phase: Phase, **changes: object) -> GameState:
    if not can_transition(state.phase, phase):
        raise RuntimeError(f"Illegal phase transition {state.phase} -> {phase}")
    # Live play always clears a paused historical view.
    return replace(state, phase=phase, history_cursor=None, **changes)
