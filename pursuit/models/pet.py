"""
Pet model for Manor Pursuit.

The target's pet wanders the mansion on its own strategy. A space
holding the pet cannot be seen into from neighboring spaces.
"""

from __future__ import annotations

import logging
import weakref
from typing import TYPE_CHECKING

from pursuit.models.errors import InvalidArgumentError
from pursuit.models.space import Space

if TYPE_CHECKING:
    from pursuit.engine.world import World
    from pursuit.services.strategies import Strategy

logger = logging.getLogger(__name__)


class Pet:
    """A roaming pet. Holds its world only through a weak reference."""

    def __init__(self, name: str, start_space: Space, strategy: Strategy | None = None) -> None:
        if not name or not name.strip():
            raise InvalidArgumentError("Pet name cannot be empty.")
        if start_space is None:
            raise InvalidArgumentError("Starting space cannot be None.")

        self._name = name
        self._current_space = start_space
        self.strategy = strategy
        self._world_ref: weakref.ReferenceType[World] | None = None
        start_space.add_pet(self)
        logger.info("Pet %s placed in %s", name, start_space.name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def current_space(self) -> Space:
        return self._current_space

    @property
    def world(self) -> World | None:
        return self._world_ref() if self._world_ref is not None else None

    def attach_world(self, world: World) -> None:
        if world is None:
            raise InvalidArgumentError("World cannot be None.")
        self._world_ref = weakref.ref(world)

    def move(self, space: Space) -> None:
        """Relocate the pet, updating both spaces."""
        if space is None:
            raise InvalidArgumentError("New space cannot be None.")
        if space is self._current_space:
            return
        old_space = self._current_space
        old_space.remove_pet(self)
        space.add_pet(self)
        self._current_space = space
        logger.info("Pet %s moved from %s to %s", self._name, old_space.name, space.name)

    def decide_action(self) -> str:
        """Let the pet's strategy pick its next move."""
        if self.strategy is None:
            logger.warning("No strategy set for pet %s", self._name)
            return f"{self._name} has no strategy and stays in {self._current_space.name}."
        world = self.world
        if world is None:
            logger.warning("No world attached to pet %s", self._name)
            return f"{self._name} is not in a world and stays in {self._current_space.name}."
        return self.strategy.move_pet(self, world)

    def get_details(self) -> str:
        strategy_name = type(self.strategy).__name__ if self.strategy is not None else "None"
        return (
            f"Pet Details: [Name: {self._name}, Current Space: {self._current_space.name}, "
            f"Strategy: {strategy_name}]"
        )

    def __repr__(self) -> str:
        return f"Pet({self._name!r}, space={self._current_space.name!r})"
