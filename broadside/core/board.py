"""Board construction, placement and fire resolution.

Every operation returns a new ``BoardState``; input boards are never mutated.
"""

from __future__ import annotations

import logging

from broadside.core.errors import (
    AlreadyTargetedError,
    BattleshipError,
    InvalidPlacementError,
    OutOfBoundsError,
)
from broadside.core.models import (
    BOARD_SIZE,
    EMPTY,
    MISS,
    SHIP_ORDER,
    BoardState,
    CellState,
    Coord,
    EmptyCell,
    HitCell,
    MissCell,
    Orientation,
    ShipCell,
    ShipDefinition,
    ShipKind,
    ShipPlacement,
    ShotHit,
    ShotMiss,
    ShotOutcome,
    SunkCell,
    cells_for_placement,
    is_targeted_cell,
)

logger = logging.getLogger(__name__)

_MutableGrid = list[list[CellState]]


def create_empty_board(size: int = BOARD_SIZE) -> BoardState:
    """Create a board with every cell empty and no ships."""
    row = tuple(EMPTY for _ in range(size))
    return BoardState(size=size, grid=tuple(row for _ in range(size)))


def in_bounds(coord: Coord, size: int) -> bool:
    """Return whether the coordinate is inside a ``size`` x ``size`` grid."""
    return 0 <= coord.x < size and 0 <= coord.y < size


def can_place(
    board: BoardState, ship: ShipDefinition, origin: Coord, orientation: Orientation
) -> bool:
    """Return whether ``ship`` fits at ``origin`` without overlapping another kind.

    Cells already held by the same kind count as free so a ship can be moved.
    """
    for coord in cells_for_placement(origin, ship.length, orientation):
        if not in_bounds(coord, board.size):
            return False
        match board.cell(coord):
            case EmptyCell():
                continue
            case ShipCell(kind=kind) | HitCell(kind=kind) if kind is ship.kind:
                continue
            case _:
                return False
    return True


def place_ship(
    board: BoardState, ship: ShipDefinition, origin: Coord, orientation: Orientation
) -> BoardState:
    """Place (or move) a ship and return the new board."""
    if not can_place(board, ship, origin, orientation):
        raise InvalidPlacementError(
            f"Cannot place {ship.kind.value} at {origin.x},{origin.y} {orientation.value}."
        )

    grid = _thaw(board.grid)
    new_cells = cells_for_placement(origin, ship.length, orientation)
    existing = board.placement(ship.kind)
    kept_hits: tuple[Coord, ...] = ()
    if existing is not None:
        _clear_cells(grid, existing.cells)
        kept_hits = tuple(hit for hit in existing.hits if hit in new_cells)

    for coord in new_cells:
        grid[coord.y][coord.x] = HitCell(ship.kind) if coord in kept_hits else ShipCell(ship.kind)

    placement = ShipPlacement(
        kind=ship.kind,
        origin=origin,
        orientation=orientation,
        length=ship.length,
        hits=kept_hits,
    )
    if existing is None:
        ships = board.ships + (placement,)
    else:
        ships = tuple(placement if s.kind is ship.kind else s for s in board.ships)

    remaining = board.remaining
    if ship.kind not in remaining:
        remaining = remaining + (ship.kind,)
    return BoardState(size=board.size, grid=_freeze(grid), ships=ships, remaining=remaining)


def remove_ship(board: BoardState, kind: ShipKind) -> BoardState:
    """Remove a placed ship; returns ``board`` itself when the kind is not placed."""
    existing = board.placement(kind)
    if existing is None:
        return board
    grid = _thaw(board.grid)
    _clear_cells(grid, existing.cells)
    return BoardState(
        size=board.size,
        grid=_freeze(grid),
        ships=tuple(s for s in board.ships if s.kind is not kind),
        remaining=tuple(k for k in board.remaining if k is not kind),
    )


def fire_at(board: BoardState, coord: Coord) -> tuple[BoardState, ShotOutcome]:
    """Resolve a shot and return the new board with the outcome."""
    if not in_bounds(coord, board.size):
        raise OutOfBoundsError(f"Shot {coord.x},{coord.y} out of bounds.")

    cell = board.cell(coord)
    match cell:
        case MissCell() | HitCell() | SunkCell():
            raise AlreadyTargetedError(f"Cell {coord.x},{coord.y} already targeted.")
        case EmptyCell():
            grid = _thaw(board.grid)
            grid[coord.y][coord.x] = MISS
            return (
                BoardState(board.size, _freeze(grid), board.ships, board.remaining),
                ShotMiss(),
            )
        case ShipCell(kind=kind):
            return _resolve_hit(board, coord, kind)


def _resolve_hit(board: BoardState, coord: Coord, kind: ShipKind) -> tuple[BoardState, ShotHit]:
    grid = _thaw(board.grid)
    grid[coord.y][coord.x] = HitCell(kind)

    target: ShipPlacement | None = None
    ships: list[ShipPlacement] = []
    for ship in board.ships:
        if ship.kind is kind and coord not in ship.hits:
            ship = ShipPlacement(
                kind=ship.kind,
                origin=ship.origin,
                orientation=ship.orientation,
                length=ship.length,
                hits=ship.hits + (coord,),
            )
        if ship.kind is kind:
            target = ship
        ships.append(ship)

    if target is None:
        raise BattleshipError(f"Grid holds {kind.value} with no matching placement.")

    remaining = board.remaining
    if target.sunk:
        for cell in target.cells:
            grid[cell.y][cell.x] = SunkCell(kind)
        remaining = tuple(k for k in remaining if k is not kind)
        logger.debug("ship_sunk kind=%s at=%s", kind.value, coord.key)

    updated = BoardState(board.size, _freeze(grid), tuple(ships), remaining)
    return updated, ShotHit(kind=kind, sunk=target.sunk)


def is_fleet_complete(board: BoardState) -> bool:
    """Return whether every catalog kind has been placed."""
    return len({ship.kind for ship in board.ships}) == len(SHIP_ORDER)


def is_victory(board: BoardState) -> bool:
    """Return whether no placed ship remains afloat.

    ``remaining`` fills as ships are placed, so an empty or partial setup board counts
    as victorious; callers only ask once a full fleet is in play.
    """
    return not board.remaining


def clone_board(board: BoardState) -> BoardState:
    """Return a fully independent copy of ``board``."""
    return BoardState(
        size=board.size,
        grid=tuple(tuple(row) for row in board.grid),
        ships=tuple(
            ShipPlacement(
                kind=ship.kind,
                origin=Coord(ship.origin.x, ship.origin.y),
                orientation=ship.orientation,
                length=ship.length,
                hits=tuple(Coord(hit.x, hit.y) for hit in ship.hits),
            )
            for ship in board.ships
        ),
        remaining=tuple(board.remaining),
    )


def targeted_coords(board: BoardState) -> set[str]:
    """Return serialized keys of every miss/hit/sunk cell."""
    keys: set[str] = set()
    for y, row in enumerate(board.grid):
        for x, cell in enumerate(row):
            if is_targeted_cell(cell):
                keys.add(Coord(x, y).key)
    return keys


def is_targetable(board: BoardState, coord: Coord) -> bool:
    """Return whether a shot at ``coord`` would be legal."""
    return in_bounds(coord, board.size) and not is_targeted_cell(board.cell(coord))


def unplaced_kinds(board: BoardState) -> tuple[ShipKind, ...]:
    """Catalog kinds still waiting to be placed, in catalog order."""
    placed = {ship.kind for ship in board.ships}
    return tuple(kind for kind in SHIP_ORDER if kind not in placed)


def validate_fleet(board: BoardState) -> tuple[bool, str]:
    """Validate placements against the grid, the one-per-kind rule and ``remaining``.

    Each placed cell must carry the state its placement implies: sunk for a sunk
    ship, hit for a recorded hit, intact otherwise. ``remaining`` must list exactly
    the placed kinds still afloat.
    """
    if len(board.grid) != board.size or any(len(row) != board.size for row in board.grid):
        return False, "Grid dimensions do not match board size."

    seen: set[ShipKind] = set()
    for ship in board.ships:
        if ship.kind in seen:
            return False, f"Duplicate ship kind: {ship.kind.value}."
        seen.add(ship.kind)
        if ship.length != ship.kind.length:
            return False, f"Wrong length for {ship.kind.value}."
        cells = ship.cells
        if len(set(ship.hits)) != len(ship.hits) or not set(ship.hits) <= set(cells):
            return False, f"Hits recorded off the hull of {ship.kind.value}."
        for coord in cells:
            if not in_bounds(coord, board.size):
                return False, f"Placement for {ship.kind.value} leaves the board."
            if ship.sunk:
                expected: CellState = SunkCell(ship.kind)
            elif coord in ship.hits:
                expected = HitCell(ship.kind)
            else:
                expected = ShipCell(ship.kind)
            if board.cell(coord) != expected:
                return False, f"Grid does not match placement for {ship.kind.value}."

    afloat = [ship.kind for ship in board.ships if not ship.sunk]
    if len(board.remaining) != len(afloat) or set(board.remaining) != set(afloat):
        return False, "Remaining ships do not match the fleet afloat."

    occupied = sum(
        1
        for row in board.grid
        for cell in row
        if isinstance(cell, ShipCell | HitCell | SunkCell)
    )
    if occupied != sum(ship.length for ship in board.ships):
        return False, "Grid holds ship cells without a placement."
    return True, ""


def _thaw(grid: tuple[tuple[CellState, ...], ...]) -> _MutableGrid:
    return [list(row) for row in grid]


def _freeze(grid: _MutableGrid) -> tuple[tuple[CellState, ...], ...]:
    return tuple(tuple(row) for row in grid)


def _clear_cells(grid: _MutableGrid, cells: list[Coord]) -> None:
    for coord in cells:
        grid[coord.y][coord.x] = EMPTY
