"""Turn controller: owns match state and sequences player and opponent moves."""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable

from broadside.ai.selection import pick_shot
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
from broadside.app.events import GameFinished, GameStarted, MatchReset, TurnResolved
from broadside.app.game_state import GameState, create_initial_state
from broadside.app.history import (
    HistoryBoards,
    ReplaySnapshot,
    create_replay_snapshots,
    get_history_at_turn,
)
from broadside.app.state_machine import Phase
from broadside.app.transitions import reduce
from broadside.core.errors import SetupFailureError
from broadside.core.models import (
    BOARD_SIZE,
    DEFAULT_DIFFICULTY,
    BoardState,
    Coord,
    Difficulty,
)
from broadside.runtime.events import RuntimeEventBus
from broadside.runtime.scheduler import Scheduler
from broadside.runtime.state_store import RuntimeStateStore

DEFAULT_OPPONENT_DELAY_SECONDS = 0.6
_SEED_BOUND = 2**32
_SETUP_RETRIES = 3

logger = logging.getLogger(__name__)


class GameController:
    """Single serialized entry point for every state change of a match.

    All commands funnel through :meth:`dispatch`. The opponent's move is scheduled
    on the scheduler once the match enters ``AI_TURN`` and cancelled if the phase
    changes before it fires; the host drives it with :meth:`advance`.
    """

    def __init__(
        self,
        rng: random.Random,
        *,
        difficulty: Difficulty = DEFAULT_DIFFICULTY,
        board_size: int = BOARD_SIZE,
        opponent_delay_seconds: float = DEFAULT_OPPONENT_DELAY_SECONDS,
        scheduler: Scheduler | None = None,
        event_bus: RuntimeEventBus | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._rng = rng
        self._store = RuntimeStateStore(create_initial_state(difficulty, board_size))
        self._scheduler = scheduler or Scheduler()
        self._events = event_bus or RuntimeEventBus()
        self._clock = clock
        self._opponent_delay_seconds = opponent_delay_seconds
        self._opponent_task: int | None = None

    @property
    def state(self) -> GameState:
        """Current immutable state; read-only view for presentation."""
        return self._store.get()

    @property
    def revision(self) -> int:
        return self._store.revision()

    @property
    def events(self) -> RuntimeEventBus:
        return self._events

    @property
    def opponent_pending(self) -> bool:
        return self._opponent_task is not None

    def dispatch(self, action: GameAction) -> bool:
        """Apply one action. Returns whether state changed."""
        previous = self._store.get()
        now = self._clock()
        changed = self._store.update(lambda state: reduce(state, action, now=now))
        current = self._store.get()
        if changed:
            self._publish_changes(previous, current, action)
        self._sync_opponent_task(current)
        return changed

    def reset(self) -> bool:
        return self.dispatch(ResetToSetup())

    def set_difficulty(self, difficulty: Difficulty | str) -> bool:
        if not isinstance(difficulty, Difficulty):
            difficulty = Difficulty.parse(difficulty)
        return self.dispatch(SetDifficulty(difficulty))

    def randomize_fleet(self, seed: int | None = None) -> bool:
        return self.dispatch(RandomizePlayerFleet(self._resolve_seed(seed)))

    def set_player_board(self, board: BoardState) -> bool:
        return self.dispatch(SetPlayerBoard(board))

    def start_game(self, seed: int | None = None) -> bool:
        """Start the match, retrying opponent fleet generation with fresh seeds."""
        for attempt in range(1, _SETUP_RETRIES + 1):
            chosen = self._resolve_seed(seed if attempt == 1 else None)
            try:
                return self.dispatch(StartGame(chosen))
            except SetupFailureError:
                logger.warning("opponent_fleet_failed seed=%s attempt=%d", chosen, attempt)
                if attempt == _SETUP_RETRIES:
                    raise
        return False

    def fire(self, coord: Coord) -> bool:
        """Player shot at the opponent board; stale or illegal shots are ignored."""
        return self.dispatch(PlayerFire(coord))

    def toggle_history(self) -> bool:
        return self.dispatch(ToggleHistory())

    def set_history_cursor(self, turn: int | None) -> bool:
        return self.dispatch(SetHistoryCursor(turn))

    def advance(self, delta_seconds: float) -> int:
        """Advance host time, running the deferred opponent move when due."""
        return self._scheduler.advance(delta_seconds)

    def viewed_boards(self) -> HistoryBoards:
        """Boards at the history cursor, or the live boards when none is set."""
        state = self._store.get()
        return get_history_at_turn(state, state.history_cursor)

    def replay(self) -> list[ReplaySnapshot]:
        return create_replay_snapshots(self._store.get())

    def _run_opponent_turn(self) -> None:
        self._opponent_task = None
        state = self._store.get()
        if state.phase is not Phase.AI_TURN:
            return
        choice = pick_shot(state.player_board, state.difficulty, state.memory, self._rng)
        logger.debug("opponent_choice difficulty=%s target=%s", state.difficulty, choice.coord.key)
        self.dispatch(OpponentShotResolved(coord=choice.coord, memory=choice.memory))

    def _sync_opponent_task(self, state: GameState) -> None:
        if state.phase is Phase.AI_TURN:
            if self._opponent_task is None:
                self._opponent_task = self._scheduler.call_later(
                    self._opponent_delay_seconds, self._run_opponent_turn
                )
            return
        if self._opponent_task is not None:
            self._scheduler.cancel(self._opponent_task)
            logger.debug("opponent_turn_cancelled phase=%s", state.phase)
            self._opponent_task = None

    def _publish_changes(self, previous: GameState, current: GameState, action: GameAction) -> None:
        if isinstance(action, ResetToSetup):
            logger.info("match_reset difficulty=%s", current.difficulty)
            self._events.publish(MatchReset())
            return
        if previous.phase is Phase.SETUP and current.phase is Phase.PLAYER_TURN:
            logger.info("match_started difficulty=%s", current.difficulty)
            self._events.publish(GameStarted(difficulty=current.difficulty))
        for record in current.history[len(previous.history) :]:
            logger.info(
                "turn_resolved turn=%d shooter=%s target=%s result=%s kind=%s sunk=%s",
                record.turn,
                record.shooter,
                record.target.key,
                record.result,
                record.kind,
                record.sunk,
            )
            self._events.publish(TurnResolved(record=record))
        if current.winner is not None and previous.winner is None:
            logger.info("match_finished winner=%s turns=%d", current.winner, len(current.history))
            self._events.publish(GameFinished(winner=current.winner, turns=len(current.history)))

    def _resolve_seed(self, seed: int | None) -> int:
        return seed if seed is not None else self._rng.randrange(_SEED_BOUND)
