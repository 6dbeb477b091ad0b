"""
Space graph for Manor Pursuit.

A space is a room of the mansion. Spaces hold references to the items,
players and pets currently inside them and to their neighbors. Adjacency
is always symmetric.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pursuit.models.errors import InvalidArgumentError
from pursuit.models.item import Item

if TYPE_CHECKING:
    from pursuit.models.pet import Pet
    from pursuit.models.player import Player

logger = logging.getLogger(__name__)


def _join_names(entries: list) -> str:
    return ", ".join(entry.name for entry in entries) if entries else "None"


class Space:
    """
    A room in the world graph.

    Membership collections are ordered and set-like: adding a member twice
    or removing a non-member is a no-op. Two spaces are equal when their
    name and coordinates match.
    """

    def __init__(self, name: str, x: int = 0, y: int = 0) -> None:
        if not name or not name.strip():
            raise InvalidArgumentError("Space name cannot be empty.")
        self._name = name
        self._x = x
        self._y = y
        self._items: list[Item] = []
        self._players: list[Player] = []
        self._pets: list[Pet] = []
        self._neighbors: list[Space] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def x(self) -> int:
        return self._x

    @property
    def y(self) -> int:
        return self._y

    @property
    def coordinates(self) -> tuple[int, int]:
        return (self._x, self._y)

    @property
    def items(self) -> list[Item]:
        return list(self._items)

    @property
    def players(self) -> list[Player]:
        return list(self._players)

    @property
    def pets(self) -> list[Pet]:
        return list(self._pets)

    @property
    def neighbors(self) -> list[Space]:
        return list(self._neighbors)

    # Adjacency

    def add_neighbor(self, other: Space | None) -> None:
        """Link this space and ``other`` in both directions."""
        if other is None:
            raise InvalidArgumentError("Neighbor cannot be None.")
        if other is self or other == self:
            raise InvalidArgumentError(f"Space {self._name} cannot neighbor itself.")
        if other not in self._neighbors:
            self._neighbors.append(other)
            logger.debug("Linked %s -> %s", self._name, other.name)
        if self not in other._neighbors:
            other._neighbors.append(self)

    def is_neighbor(self, other: Space) -> bool:
        return other in self._neighbors

    # Items

    def add_item(self, item: Item) -> None:
        if item is None:
            raise InvalidArgumentError("Item cannot be None.")
        if item not in self._items:
            self._items.append(item)

    def remove_item(self, item: Item) -> None:
        if item in self._items:
            self._items.remove(item)

    def has_item(self, item: Item) -> bool:
        return item in self._items

    def find_item(self, name: str) -> Item | None:
        """Return the first item in this space called ``name``."""
        for item in self._items:
            if item.name == name:
                return item
        return None

    # Players

    def add_player(self, player: Player) -> None:
        if player is None:
            raise InvalidArgumentError("Player cannot be None.")
        if player not in self._players:
            self._players.append(player)

    def remove_player(self, player: Player) -> None:
        if player in self._players:
            self._players.remove(player)

    def contains_player(self, player: Player) -> bool:
        return player in self._players

    # Pets

    def add_pet(self, pet: Pet) -> None:
        if pet is None:
            raise InvalidArgumentError("Pet cannot be None.")
        if pet not in self._pets:
            self._pets.append(pet)

    def remove_pet(self, pet: Pet) -> None:
        if pet in self._pets:
            self._pets.remove(pet)

    def contains_pet(self, pet: Pet) -> bool:
        return pet in self._pets

    def has_pet(self) -> bool:
        return bool(self._pets)

    def get_description(self) -> str:
        """Deterministic summary of the space and its contents."""
        return "\n".join(
            [
                f"Space: {self._name} ({self._x}, {self._y})",
                f"Items: {_join_names(self._items)}",
                f"Players: {_join_names(self._players)}",
                f"Pets: {_join_names(self._pets)}",
                f"Neighbors: {_join_names(self._neighbors)}",
            ]
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Space):
            return NotImplemented
        return self._name == other._name and self.coordinates == other.coordinates

    def __hash__(self) -> int:
        return hash((self._name, self._x, self._y))

    def __repr__(self) -> str:
        return f"Space({self._name!r}, {self._x}, {self._y})"
