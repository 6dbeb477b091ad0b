"""
Player models for Manor Pursuit.

Defines the inventory and the player entity. Human and computer
controlled players share one class and differ only in their
``PlayerKind`` tag and an optional movement strategy.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from pursuit.models.errors import (
    IllegalStateError,
    InvalidArgumentError,
    InventoryFullError,
    ItemNotPresentError,
)
from pursuit.models.item import Item
from pursuit.models.space import Space

if TYPE_CHECKING:
    from pursuit.services.strategies import Strategy

logger = logging.getLogger(__name__)

DEFAULT_INVENTORY_CAPACITY = 3
DEFAULT_UNARMED_DAMAGE = 1


class PlayerKind(str, Enum):
    """Who controls a player."""

    HUMAN = "human"
    AI = "ai"


class AttackOutcome(BaseModel):
    """What an attack did to its victim."""

    weapon: Item | None = Field(default=None, description="Consumed weapon, None if unarmed")
    damage: int = Field(ge=0)
    victim_health: int = Field(ge=0, description="Victim health after the blow")


class PlayerInventory:
    """Bounded, ordered collection of items."""

    def __init__(self, capacity: int = DEFAULT_INVENTORY_CAPACITY) -> None:
        if capacity <= 0:
            raise InvalidArgumentError("Inventory capacity must be greater than zero.")
        self._capacity = capacity
        self._items: list[Item] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def items(self) -> list[Item]:
        return list(self._items)

    def is_full(self) -> bool:
        return len(self._items) >= self._capacity

    def add_item(self, item: Item) -> bool:
        """Add an item; returns False when full or already held."""
        if item is None:
            raise InvalidArgumentError("Item cannot be None.")
        if self.is_full() or item in self._items:
            return False
        self._items.append(item)
        return True

    def remove_item(self, item: Item) -> bool:
        if item in self._items:
            self._items.remove(item)
            return True
        return False

    def contains(self, item: Item) -> bool:
        return item in self._items

    def best_item(self) -> Item | None:
        """Highest-damage item; the earliest one wins ties."""
        best: Item | None = None
        for item in self._items:
            if best is None or item.damage > best.damage:
                best = item
        return best

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items))


class Player:
    """
    A character that moves through the mansion.

    The player's current space is authoritative: moving updates the
    player's pointer and the rosters of the old and new spaces together.
    """

    def __init__(
        self,
        name: str,
        health: int,
        start_space: Space,
        kind: PlayerKind = PlayerKind.HUMAN,
        strategy: Strategy | None = None,
        inventory_capacity: int = DEFAULT_INVENTORY_CAPACITY,
    ) -> None:
        if not name or not name.strip():
            raise InvalidArgumentError("Player name cannot be empty.")
        if health <= 0:
            raise InvalidArgumentError("Health must be greater than zero.")
        if start_space is None:
            raise InvalidArgumentError("Starting space cannot be None.")

        self._name = name
        self._health = health
        self._max_health = health
        self.kind = PlayerKind(kind)
        self.strategy = strategy
        self._inventory = PlayerInventory(inventory_capacity)
        self._visibility: dict[Player, bool] = {}
        self.is_current_turn = False

        self._current_space = start_space
        start_space.add_player(self)

    @property
    def name(self) -> str:
        return self._name

    @property
    def health(self) -> int:
        return self._health

    @property
    def max_health(self) -> int:
        return self._max_health

    @property
    def current_space(self) -> Space:
        return self._current_space

    @property
    def inventory(self) -> PlayerInventory:
        return self._inventory

    @property
    def items(self) -> list[Item]:
        return self._inventory.items

    @property
    def is_ai(self) -> bool:
        return self.kind == PlayerKind.AI

    @property
    def is_alive(self) -> bool:
        return self._health > 0

    def set_health(self, health: int) -> None:
        if health < 0:
            raise InvalidArgumentError("Health cannot be negative.")
        self._health = health

    def reduce_health(self, damage: int) -> int:
        """Subtract damage, flooring at zero. Returns the new health."""
        if damage < 0:
            raise InvalidArgumentError("Damage cannot be negative.")
        self._health = max(0, self._health - damage)
        logger.info("%s now has %d health remaining", self._name, self._health)
        return self._health

    def move(self, space: Space) -> None:
        """Relocate to ``space``, updating both rosters."""
        if space is None:
            raise InvalidArgumentError("Invalid move: the destination space is None.")
        if space is self._current_space:
            return
        old_space = self._current_space
        old_space.remove_player(self)
        space.add_player(self)
        self._current_space = space
        logger.info("%s moved from %s to %s", self._name, old_space.name, space.name)

    def pick_up_item(self, item: Item) -> None:
        """Take an item from the current space into the inventory."""
        if item is None:
            raise InvalidArgumentError("Item cannot be None.")
        if not self._current_space.has_item(item):
            raise ItemNotPresentError(
                f"{item.name} is not available in {self._current_space.name}."
            )
        if self._inventory.is_full():
            raise InventoryFullError(f"{self._name} cannot carry {item.name}: inventory is full.")
        self._inventory.add_item(item)
        self._current_space.remove_item(item)
        logger.info("%s picked up %s", self._name, item.name)

    def attempt_attack(
        self,
        target: Player,
        unarmed_damage: int = DEFAULT_UNARMED_DAMAGE,
    ) -> AttackOutcome:
        """
        Strike ``target`` with the best item carried.

        The weapon is discarded after use. Without a weapon the blow deals
        ``unarmed_damage``. Legality (same room, witnesses) is the world's
        concern; this only applies the blow.
        """
        if target is None:
            raise InvalidArgumentError("Target player cannot be None.")
        if target is self:
            raise InvalidArgumentError(f"{self._name} cannot attack themselves.")
        if not self.is_alive:
            raise IllegalStateError(f"{self._name} is dead and cannot attack.")
        if not target.is_alive:
            raise IllegalStateError(f"{target.name} is already dead.")

        weapon = self._inventory.best_item()
        if weapon is not None:
            damage = weapon.damage
            self._inventory.remove_item(weapon)
            logger.info("%s attacks %s with %s", self._name, target.name, weapon.name)
        else:
            damage = unarmed_damage
            logger.info("%s attacks %s unarmed", self._name, target.name)

        remaining = target.reduce_health(damage)
        return AttackOutcome(weapon=weapon, damage=damage, victim_health=remaining)

    def can_see(self, other: Player) -> bool:
        return self._visibility.get(other, False)

    def set_can_see(self, other: Player, visible: bool) -> None:
        if other is None:
            raise InvalidArgumentError("Player cannot be None.")
        self._visibility[other] = visible

    def describe(self) -> str:
        """Status text: name, health, location and carried items."""
        carried = ", ".join(str(item) for item in self._inventory) or "None"
        return "\n".join(
            [
                f"Player: {self._name} ({self.kind.value})",
                f"Health: {self._health}/{self._max_health}",
                f"Current Space: {self._current_space.name}",
                f"Inventory ({len(self._inventory)}/{self._inventory.capacity}): {carried}",
            ]
        )

    def __repr__(self) -> str:
        return f"Player({self._name!r}, health={self._health}, kind={self.kind.value})"


def create_human_player(
    name: str,
    health: int,
    start_space: Space,
    inventory_capacity: int = DEFAULT_INVENTORY_CAPACITY,
) -> Player:
    """Factory function to create a human-controlled player."""
    return Player(name, health, start_space, PlayerKind.HUMAN, None, inventory_capacity)


def create_ai_player(
    name: str,
    health: int,
    start_space: Space,
    strategy: Strategy | None = None,
    inventory_capacity: int = DEFAULT_INVENTORY_CAPACITY,
) -> Player:
    """Factory function to create a computer-controlled player."""
    return Player(name, health, start_space, PlayerKind.AI, strategy, inventory_capacity)
