"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

BOARD_SIZE = 10


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate, 0-indexed column ``x`` and row ``y``."""

    x: int
    y: int

    @property
    def key(self) -> str:
        """Serialized form used by opponent memory."""
        return f"{self.x},{self.y}"


class Orientation(StrEnum):
    """Ship orientation."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def step(self) -> tuple[int, int]:
        if self is Orientation.HORIZONTAL:
            return 1, 0
        return 0, 1


class ShipKind(StrEnum):
    """Ship kinds making up one fleet."""

    CARRIER = "carrier"
    BATTLESHIP = "battleship"
    CRUISER = "cruiser"
    SUBMARINE = "submarine"
    DESTROYER = "destroyer"

    @property
    def length(self) -> int:
        return SHIP_DEFS[self].length


@dataclass(frozen=True, slots=True)
class ShipDefinition:
    """Immutable catalog entry for a ship kind."""

    kind: ShipKind
    length: int
    display_name: str


SHIP_ORDER: tuple[ShipKind, ...] = (
    ShipKind.CARRIER,
    ShipKind.BATTLESHIP,
    ShipKind.CRUISER,
    ShipKind.SUBMARINE,
    ShipKind.DESTROYER,
)

SHIP_DEFS: dict[ShipKind, ShipDefinition] = {
    ShipKind.CARRIER: ShipDefinition(ShipKind.CARRIER, 5, "Cattle Carrier (5)"),
    ShipKind.BATTLESHIP: ShipDefinition(ShipKind.BATTLESHIP, 4, "Bronco Battleship (4)"),
    ShipKind.CRUISER: ShipDefinition(ShipKind.CRUISER, 3, "Cowboy Cruiser (3)"),
    ShipKind.SUBMARINE: ShipDefinition(ShipKind.SUBMARINE, 3, "Stampede Sub (3)"),
    ShipKind.DESTROYER: ShipDefinition(ShipKind.DESTROYER, 2, "Lasso Destroyer (2)"),
}

DEFAULT_SHIPS: tuple[ShipDefinition, ...] = tuple(SHIP_DEFS[kind] for kind in SHIP_ORDER)


# Cell states form a closed sum type; consumers match on the concrete class.


@dataclass(frozen=True, slots=True)
class EmptyCell:
    """Untouched water."""


@dataclass(frozen=True, slots=True)
class ShipCell:
    """Intact ship segment."""

    kind: ShipKind


@dataclass(frozen=True, slots=True)
class MissCell:
    """Water that has been fired at."""


@dataclass(frozen=True, slots=True)
class HitCell:
    """Ship segment that has been hit, ship still afloat."""

    kind: ShipKind


@dataclass(frozen=True, slots=True)
class SunkCell:
    """Segment of a sunk ship."""

    kind: ShipKind


CellState = EmptyCell | ShipCell | MissCell | HitCell | SunkCell

EMPTY = EmptyCell()
MISS = MissCell()


def is_targeted_cell(cell: CellState) -> bool:
    """Return whether a cell has already been fired at."""
    match cell:
        case MissCell() | HitCell() | SunkCell():
            return True
        case EmptyCell() | ShipCell():
            return False


def cells_for_placement(origin: Coord, length: int, orientation: Orientation) -> list[Coord]:
    """Compute occupied cells from origin, length and orientation."""
    dx, dy = orientation.step
    return [Coord(origin.x + dx * i, origin.y + dy * i) for i in range(length)]


@dataclass(frozen=True, slots=True)
class ShipPlacement:
    """A ship bound to a board."""

    kind: ShipKind
    origin: Coord
    orientation: Orientation
    length: int
    hits: tuple[Coord, ...] = ()

    @property
    def sunk(self) -> bool:
        return len(self.hits) >= self.length

    @property
    def cells(self) -> list[Coord]:
        return cells_for_placement(self.origin, self.length, self.orientation)


@dataclass(frozen=True, slots=True)
class BoardState:
    """Immutable board: grid rows are indexed ``grid[y][x]``."""

    size: int
    grid: tuple[tuple[CellState, ...], ...]
    ships: tuple[ShipPlacement, ...] = ()
    remaining: tuple[ShipKind, ...] = ()

    def cell(self, coord: Coord) -> CellState:
        return self.grid[coord.y][coord.x]

    def placement(self, kind: ShipKind) -> ShipPlacement | None:
        """Find placement for the given kind."""
        for ship in self.ships:
            if ship.kind is kind:
                return ship
        return None


class ShotResult(StrEnum):
    """Result of a single shot."""

    HIT = "hit"
    MISS = "miss"


@dataclass(frozen=True, slots=True)
class ShotMiss:
    """Shot landed in water."""

    @property
    def result(self) -> ShotResult:
        return ShotResult.MISS


@dataclass(frozen=True, slots=True)
class ShotHit:
    """Shot struck a ship; ``sunk`` when it was the final segment."""

    kind: ShipKind
    sunk: bool

    @property
    def result(self) -> ShotResult:
        return ShotResult.HIT


ShotOutcome = ShotMiss | ShotHit


class Shooter(StrEnum):
    """Side that fired a shot."""

    PLAYER = "player"
    OPPONENT = "opponent"


class Difficulty(StrEnum):
    """Opponent difficulty tiers."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: str | None) -> Difficulty:
        """Map free-form text to a tier, defaulting to easy."""
        if value is None:
            return cls.EASY
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.EASY


DEFAULT_DIFFICULTY = Difficulty.EASY


@dataclass(frozen=True, slots=True)
class TurnRecord:
    """One resolved shot in the turn log."""

    turn: int
    shooter: Shooter
    target: Coord
    result: ShotResult
    kind: ShipKind | None = None
    sunk: bool | None = None
    timestamp: float = 0.0

    @property
    def outcome(self) -> ShotOutcome:
        if self.result is ShotResult.HIT and self.kind is not None:
            return ShotHit(kind=self.kind, sunk=bool(self.sunk))
        return ShotMiss()

    @classmethod
    def from_outcome(
        cls,
        *,
        turn: int,
        shooter: Shooter,
        target: Coord,
        outcome: ShotOutcome,
        timestamp: float,
    ) -> TurnRecord:
        match outcome:
            case ShotHit(kind=kind, sunk=sunk):
                return cls(turn, shooter, target, ShotResult.HIT, kind, sunk, timestamp)
            case ShotMiss():
                return cls(turn, shooter, target, ShotResult.MISS, None, None, timestamp)
