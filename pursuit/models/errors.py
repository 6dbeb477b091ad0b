"""
Error taxonomy for Manor Pursuit.

Entity constructors and mutators raise these immediately. The world
orchestrator catches them and turns them into human-readable results.
"""

from __future__ import annotations


class PursuitError(Exception):
    """Base exception for the game core."""


class InvalidArgumentError(PursuitError, ValueError):
    """A required argument was missing, empty, or out of range."""


class NotFoundError(PursuitError, LookupError):
    """A named space, item, or player does not exist."""


class IllegalStateError(PursuitError, RuntimeError):
    """The action is not allowed in the current game state."""


class IllegalMoveError(PursuitError):
    """The destination is not adjacent to the mover's current space."""


class InventoryFullError(IllegalStateError):
    """The inventory is at capacity."""


class ItemNotPresentError(NotFoundError):
    """The item is not in the player's current space."""
