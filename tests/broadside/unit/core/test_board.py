from dataclasses import replace

import pytest

from broadside.core.board import (
    can_place,
    clone_board,
    create_empty_board,
    fire_at,
    is_fleet_complete,
    is_targetable,
    is_victory,
    place_ship,
    remove_ship,
    targeted_coords,
    unplaced_kinds,
    validate_fleet,
)
from broadside.core.errors import (
    AlreadyTargetedError,
    BattleshipError,
    InvalidPlacementError,
    OutOfBoundsError,
)
from broadside.core.models import (
    BOARD_SIZE,
    SHIP_DEFS,
    SHIP_ORDER,
    Coord,
    EmptyCell,
    HitCell,
    MissCell,
    Orientation,
    ShipCell,
    ShipKind,
    ShotHit,
    ShotMiss,
    SunkCell,
)

DESTROYER = SHIP_DEFS[ShipKind.DESTROYER]
CARRIER = SHIP_DEFS[ShipKind.CARRIER]


def test_empty_board_dimensions_and_contents() -> None:
    board = create_empty_board()
    assert board.size == BOARD_SIZE
    assert len(board.grid) == BOARD_SIZE
    assert all(len(row) == BOARD_SIZE for row in board.grid)
    assert all(isinstance(cell, EmptyCell) for row in board.grid for cell in row)
    assert board.ships == ()
    assert board.remaining == ()


def test_can_place_bounds_and_overlap() -> None:
    board = create_empty_board()
    assert can_place(board, DESTROYER, Coord(0, 0), Orientation.HORIZONTAL)
    assert not can_place(board, DESTROYER, Coord(9, 9), Orientation.HORIZONTAL)
    assert not can_place(board, DESTROYER, Coord(9, 9), Orientation.VERTICAL)
    assert not can_place(board, DESTROYER, Coord(-1, 0), Orientation.HORIZONTAL)

    board = place_ship(board, CARRIER, Coord(0, 0), Orientation.HORIZONTAL)
    assert not can_place(board, DESTROYER, Coord(3, 0), Orientation.VERTICAL)
    # Same kind may overlap its own cells when being moved.
    assert can_place(board, CARRIER, Coord(1, 0), Orientation.HORIZONTAL)


def test_place_ship_occupies_cells_and_leaves_input_untouched() -> None:
    empty = create_empty_board()
    board = place_ship(empty, DESTROYER, Coord(0, 0), Orientation.HORIZONTAL)

    assert board.cell(Coord(0, 0)) == ShipCell(ShipKind.DESTROYER)
    assert board.cell(Coord(1, 0)) == ShipCell(ShipKind.DESTROYER)
    assert board.cell(Coord(2, 0)) == EmptyCell()
    assert board.remaining == (ShipKind.DESTROYER,)
    assert empty.cell(Coord(0, 0)) == EmptyCell()
    assert empty.ships == ()


def test_place_ship_rejects_invalid_geometry() -> None:
    board = place_ship(create_empty_board(), CARRIER, Coord(0, 0), Orientation.HORIZONTAL)
    with pytest.raises(InvalidPlacementError):
        place_ship(board, DESTROYER, Coord(4, 0), Orientation.VERTICAL)
    with pytest.raises(InvalidPlacementError):
        place_ship(board, DESTROYER, Coord(9, 0), Orientation.HORIZONTAL)


def test_place_ship_moves_existing_kind_atomically() -> None:
    board = place_ship(create_empty_board(), DESTROYER, Coord(0, 0), Orientation.HORIZONTAL)
    moved = place_ship(board, DESTROYER, Coord(5, 5), Orientation.VERTICAL)

    assert moved.cell(Coord(0, 0)) == EmptyCell()
    assert moved.cell(Coord(1, 0)) == EmptyCell()
    assert moved.cell(Coord(5, 5)) == ShipCell(ShipKind.DESTROYER)
    assert moved.cell(Coord(5, 6)) == ShipCell(ShipKind.DESTROYER)
    assert len(moved.ships) == 1
    assert moved.remaining == (ShipKind.DESTROYER,)


def test_place_ship_keeps_hits_still_covered_by_new_footprint() -> None:
    board = place_ship(create_empty_board(), CARRIER, Coord(0, 0), Orientation.HORIZONTAL)
    board, _ = fire_at(board, Coord(1, 0))
    board, _ = fire_at(board, Coord(4, 0))

    moved = place_ship(board, CARRIER, Coord(1, 0), Orientation.HORIZONTAL)
    placement = moved.placement(ShipKind.CARRIER)
    assert placement is not None
    assert set(placement.hits) == {Coord(1, 0), Coord(4, 0)}

    shifted = place_ship(board, CARRIER, Coord(3, 0), Orientation.HORIZONTAL)
    placement = shifted.placement(ShipKind.CARRIER)
    assert placement is not None
    assert placement.hits == (Coord(4, 0),)
    assert shifted.cell(Coord(4, 0)) == HitCell(ShipKind.CARRIER)
    assert shifted.cell(Coord(1, 0)) == EmptyCell()


@pytest.mark.parametrize(
    ("with_fleet", "origin", "orientation"),
    [
        (False, Coord(0, 0), Orientation.HORIZONTAL),
        (True, Coord(7, 2), Orientation.VERTICAL),
    ],
)
def test_place_then_remove_restores_board(fleet_board, with_fleet, origin, orientation) -> None:
    base = remove_ship(fleet_board, ShipKind.DESTROYER) if with_fleet else create_empty_board()
    placed = place_ship(base, DESTROYER, origin, orientation)
    restored = remove_ship(placed, ShipKind.DESTROYER)
    assert restored == base


def test_remove_ship_missing_kind_is_noop() -> None:
    board = create_empty_board()
    assert remove_ship(board, ShipKind.CARRIER) is board


def test_fire_scenario_miss_hit_sink_and_victory() -> None:
    board = place_ship(create_empty_board(), DESTROYER, Coord(0, 0), Orientation.HORIZONTAL)

    board, outcome = fire_at(board, Coord(5, 5))
    assert outcome == ShotMiss()
    assert board.cell(Coord(5, 5)) == MissCell()

    board, outcome = fire_at(board, Coord(0, 0))
    assert outcome == ShotHit(kind=ShipKind.DESTROYER, sunk=False)
    assert board.cell(Coord(0, 0)) == HitCell(ShipKind.DESTROYER)
    assert not is_victory(board)

    board, outcome = fire_at(board, Coord(1, 0))
    assert outcome == ShotHit(kind=ShipKind.DESTROYER, sunk=True)
    assert board.cell(Coord(0, 0)) == SunkCell(ShipKind.DESTROYER)
    assert board.cell(Coord(1, 0)) == SunkCell(ShipKind.DESTROYER)
    assert board.remaining == ()
    assert is_victory(board)


def test_sinking_rewrites_only_that_ship(fleet_board) -> None:
    board = fleet_board
    board, _ = fire_at(board, Coord(0, 0))
    for x in range(2):
        board, _ = fire_at(board, Coord(x, 8))

    assert board.cell(Coord(0, 0)) == HitCell(ShipKind.CARRIER)
    assert board.cell(Coord(1, 0)) == ShipCell(ShipKind.CARRIER)
    assert ShipKind.DESTROYER not in board.remaining
    assert ShipKind.CARRIER in board.remaining
    sunk = [cell for row in board.grid for cell in row if isinstance(cell, SunkCell)]
    assert len(sunk) == 2


def test_fire_rejects_repeat_and_out_of_bounds() -> None:
    board, _ = fire_at(create_empty_board(), Coord(3, 3))
    with pytest.raises(AlreadyTargetedError):
        fire_at(board, Coord(3, 3))
    with pytest.raises(OutOfBoundsError):
        fire_at(board, Coord(10, 0))
    with pytest.raises(OutOfBoundsError):
        fire_at(board, Coord(0, -1))


def test_fleet_complete_and_unplaced_kinds(fleet_board) -> None:
    assert is_fleet_complete(fleet_board)
    assert unplaced_kinds(fleet_board) == ()
    partial = remove_ship(fleet_board, ShipKind.CRUISER)
    assert not is_fleet_complete(partial)
    assert unplaced_kinds(partial) == (ShipKind.CRUISER,)
    assert unplaced_kinds(create_empty_board()) == SHIP_ORDER


def test_victory_only_after_every_ship_sunk(fleet_board) -> None:
    board = fleet_board
    cells = [cell for ship in fleet_board.ships for cell in ship.cells]
    for cell in cells[:-1]:
        board, _ = fire_at(board, cell)
        assert not is_victory(board)
    board, _ = fire_at(board, cells[-1])
    assert is_victory(board)


def test_clone_board_is_equal_and_independent(fleet_board) -> None:
    board, _ = fire_at(fleet_board, Coord(0, 0))
    copy = clone_board(board)
    assert copy == board
    assert copy.grid is not board.grid
    assert copy.ships is not board.ships
    assert copy.ships[0].hits == board.ships[0].hits


def test_targeted_coords_and_targetable() -> None:
    board = place_ship(create_empty_board(), DESTROYER, Coord(0, 0), Orientation.HORIZONTAL)
    board, _ = fire_at(board, Coord(0, 0))
    board, _ = fire_at(board, Coord(9, 9))
    assert targeted_coords(board) == {"0,0", "9,9"}
    assert not is_targetable(board, Coord(0, 0))
    assert not is_targetable(board, Coord(10, 10))
    assert is_targetable(board, Coord(1, 0))


def test_validate_fleet(fleet_board) -> None:
    assert validate_fleet(fleet_board) == (True, "")
    tampered = replace(fleet_board, ships=fleet_board.ships[1:])
    ok, reason = validate_fleet(tampered)
    assert not ok
    assert reason


def test_validate_fleet_requires_remaining_to_match_ships_afloat(fleet_board) -> None:
    assert not validate_fleet(replace(fleet_board, remaining=()))[0]
    doubled = replace(fleet_board, remaining=fleet_board.remaining + (ShipKind.CARRIER,))
    assert not validate_fleet(doubled)[0]

    board = fleet_board
    for x in range(2):
        board, _ = fire_at(board, Coord(x, 8))
    assert validate_fleet(board) == (True, "")
    assert not validate_fleet(replace(board, remaining=fleet_board.remaining))[0]


def test_validate_fleet_requires_grid_damage_to_match_hits(fleet_board) -> None:
    fired, _ = fire_at(fleet_board, Coord(0, 0))
    assert validate_fleet(fired) == (True, "")
    assert not validate_fleet(replace(fired, ships=fleet_board.ships))[0]
    assert not validate_fleet(replace(fleet_board, ships=fired.ships))[0]


def test_fire_on_ship_cell_without_placement_reports_corrupt_board(fleet_board) -> None:
    orphaned = replace(fleet_board, ships=fleet_board.ships[1:])
    with pytest.raises(BattleshipError) as excinfo:
        fire_at(orphaned, Coord(0, 0))
    assert not isinstance(excinfo.value, InvalidPlacementError)
