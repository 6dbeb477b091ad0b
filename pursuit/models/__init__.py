"""
Core Data Models for Manor Pursuit.

These models define the world simulation's entities:
- Space: rooms and their symmetric adjacency
- Item: damage-dealing objects
- Player / PlayerInventory: human and computer controlled characters
- Pet: the target's companion that blocks sightlines
"""

from pursuit.models.errors import (
    IllegalMoveError,
    IllegalStateError,
    InvalidArgumentError,
    InventoryFullError,
    ItemNotPresentError,
    NotFoundError,
    PursuitError,
)
from pursuit.models.item import Item, create_item
from pursuit.models.pet import Pet
from pursuit.models.player import (
    DEFAULT_INVENTORY_CAPACITY,
    DEFAULT_UNARMED_DAMAGE,
    AttackOutcome,
    Player,
    PlayerInventory,
    PlayerKind,
    create_ai_player,
    create_human_player,
)
from pursuit.models.space import Space

__all__ = [
    # Errors
    "IllegalMoveError",
    "IllegalStateError",
    "InvalidArgumentError",
    "InventoryFullError",
    "ItemNotPresentError",
    "NotFoundError",
    "PursuitError",
    # Items
    "Item",
    "create_item",
    # Players
    "DEFAULT_INVENTORY_CAPACITY",
    "DEFAULT_UNARMED_DAMAGE",
    "AttackOutcome",
    "Player",
    "PlayerInventory",
    "PlayerKind",
    "create_ai_player",
    "create_human_player",
    # Pets
    "Pet",
    # Spaces
    "Space",
]
