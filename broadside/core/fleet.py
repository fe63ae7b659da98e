"""Random fleet generation."""

from __future__ import annotations

import logging
import random

from broadside.core.board import can_place, create_empty_board, place_ship
from broadside.core.errors import SetupFailureError
from broadside.core.models import BOARD_SIZE, DEFAULT_SHIPS, BoardState, Coord, Orientation

MAX_PLACEMENT_ATTEMPTS = 500

logger = logging.getLogger(__name__)


def randomize_fleet(seed: int, size: int = BOARD_SIZE) -> BoardState:
    """Place every catalog ship at a random legal position, deterministic per seed."""
    rng = random.Random(seed)
    board = create_empty_board(size)

    for ship in DEFAULT_SHIPS:
        if ship.length > size:
            raise SetupFailureError(f"{ship.kind.value} does not fit on a {size}x{size} board.")
        for _ in range(MAX_PLACEMENT_ATTEMPTS):
            orientation = Orientation.HORIZONTAL if rng.random() < 0.5 else Orientation.VERTICAL
            max_x = size - ship.length if orientation is Orientation.HORIZONTAL else size - 1
            max_y = size - ship.length if orientation is Orientation.VERTICAL else size - 1
            origin = Coord(rng.randint(0, max_x), rng.randint(0, max_y))
            if can_place(board, ship, origin, orientation):
                board = place_ship(board, ship, origin, orientation)
                break
        else:
            raise SetupFailureError(
                f"Failed to place {ship.kind.value} after {MAX_PLACEMENT_ATTEMPTS} attempts."
            )

    logger.debug("fleet_randomized seed=%s size=%s", seed, size)
    return board
