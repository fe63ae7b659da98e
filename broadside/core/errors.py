"""Board and strategy error taxonomy."""

from __future__ import annotations


class BattleshipError(Exception):
    """Base class for rule violations raised by the core."""


class InvalidPlacementError(BattleshipError, ValueError):
    """Ship geometry is out of bounds or overlaps a different kind."""


class OutOfBoundsError(BattleshipError, ValueError):
    """Shot coordinate lies outside the grid."""


class AlreadyTargetedError(BattleshipError, ValueError):
    """Cell was already fired at."""


class SetupFailureError(BattleshipError, RuntimeError):
    """Random fleet generation exceeded its attempt bound."""


class NoTargetsError(BattleshipError, RuntimeError):
    """Every coordinate has already been targeted."""
