"""Match phases and the transitions allowed between them."""

from enum import StrEnum


class Phase(StrEnum):
    """Top-level match phases."""

    SETUP = "setup"
    PLAYER_TURN = "player_turn"
    AI_TURN = "ai_turn"
    FINISHED = "finished"


# Reset back to SETUP is allowed from every phase.
PHASE_TRANSITIONS: dict[Phase, frozenset[Phase]] = {
    Phase.SETUP: frozenset({Phase.SETUP, Phase.PLAYER_TURN}),
    Phase.PLAYER_TURN: frozenset({Phase.SETUP, Phase.AI_TURN, Phase.FINISHED}),
    Phase.AI_TURN: frozenset({Phase.SETUP, Phase.PLAYER_TURN, Phase.FINISHED}),
    Phase.FINISHED: frozenset({Phase.SETUP}),
}


def can_transition(source: Phase, target: Phase) -> bool:
    """Return whether ``source`` may move to ``target``."""
    return target in PHASE_TRANSITIONS[source]
