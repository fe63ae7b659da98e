from __future__ import annotations

import random

import pytest

from broadside.app.controller import GameController
from broadside.core.board import create_empty_board, place_ship
from broadside.core.models import SHIP_DEFS, SHIP_ORDER, BoardState, Coord, Orientation


def make_fleet_board() -> BoardState:
    board = create_empty_board()
    for row, kind in enumerate(SHIP_ORDER):
        board = place_ship(board, SHIP_DEFS[kind], Coord(0, row * 2), Orientation.HORIZONTAL)
    return board


class FakeClock:
    def __init__(self) -> None:
        self.now = 1_000.0

    def __call__(self) -> float:
        self.now += 1.0
        return self.now


@pytest.fixture
def fleet_board() -> BoardState:
    return make_fleet_board()


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def controller_factory():
    def _make(seed: int = 1337, **kwargs) -> GameController:
        kwargs.setdefault("clock", FakeClock())
        return GameController(random.Random(seed), **kwargs)

    return _make
