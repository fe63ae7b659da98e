"""Headless match runner."""

from __future__ import annotations

import argparse
import logging
import random
from collections.abc import Sequence

from broadside.ai.feedback import apply_shot_feedback
from broadside.ai.memory import AIMemory, create_memory
from broadside.ai.selection import pick_shot
from broadside.app.controller import GameController
from broadside.app.events import TurnResolved
from broadside.app.game_state import GameState
from broadside.app.state_machine import Phase
from broadside.core.models import Difficulty, Shooter
from broadside.infra.logging import setup_logging
from broadside.infra.settings import GameSettings, load_game_settings

logger = logging.getLogger(__name__)

_MAX_STEPS = 1_000


class Autopilot:
    """Plays the player's side with one of the opponent strategies."""

    def __init__(
        self, controller: GameController, difficulty: Difficulty, rng: random.Random
    ) -> None:
        self._controller = controller
        self._difficulty = difficulty
        self._rng = rng
        self._memory: AIMemory = create_memory()
        controller.events.subscribe(TurnResolved, self._on_turn_resolved)

    def take_turn(self) -> None:
        state = self._controller.state
        choice = pick_shot(state.opponent_board, self._difficulty, self._memory, self._rng)
        self._memory = choice.memory
        self._controller.fire(choice.coord)

    def _on_turn_resolved(self, event: TurnResolved) -> None:
        record = event.record
        if record.shooter is not Shooter.PLAYER:
            return
        size = self._controller.state.opponent_board.size
        self._memory = apply_shot_feedback(self._memory, record.target, record.outcome, size)


def run_headless_match(settings: GameSettings, autopilot: Difficulty) -> GameState:
    """Play one full match without a presentation layer."""
    rng = random.Random(settings.seed)
    controller = GameController(
        rng,
        difficulty=settings.difficulty,
        board_size=settings.board_size,
        opponent_delay_seconds=settings.opponent_delay_seconds,
    )
    pilot = Autopilot(controller, autopilot, random.Random(rng.randrange(2**32)))
    controller.randomize_fleet()
    controller.start_game()

    for _ in range(_MAX_STEPS):
        state = controller.state
        if state.phase is Phase.FINISHED:
            break
        if state.phase is Phase.PLAYER_TURN:
            pilot.take_turn()
        else:
            controller.advance(settings.opponent_delay_seconds)
    else:
        raise RuntimeError(f"Match did not finish within {_MAX_STEPS} steps.")
    return controller.state


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a headless Broadside match.")
    parser.add_argument("--difficulty", choices=[d.value for d in Difficulty], default=None)
    parser.add_argument("--autopilot", choices=[d.value for d in Difficulty], default="medium")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--no-log-file", action="store_true", help="Log to console only.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run a match and print the summary."""
    args = build_parser().parse_args(argv)
    settings = load_game_settings()
    setup_logging(to_file=not args.no_log_file)

    settings = GameSettings(
        difficulty=Difficulty.parse(args.difficulty) if args.difficulty else settings.difficulty,
        opponent_delay_seconds=0.0,
        seed=args.seed if args.seed is not None else settings.seed,
        board_size=settings.board_size,
    )
    final = run_headless_match(settings, Difficulty.parse(args.autopilot))
    winner = final.winner.value if final.winner else "none"
    print(f"winner={winner} turns={len(final.history)} difficulty={final.difficulty.value}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
