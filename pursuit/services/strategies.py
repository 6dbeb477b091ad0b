"""
Movement strategies for Manor Pursuit.

A strategy decides and performs one move for a computer-controlled
actor (a player, the target character, or the pet) and returns a
human-readable description of what happened. Strategies never raise
for "nothing to do" situations; they report a no-op instead.
"""

from __future__ import annotations

import logging
import math
import random
from typing import TYPE_CHECKING, Protocol

from pursuit.models.errors import InvalidArgumentError
from pursuit.models.pet import Pet
from pursuit.models.player import Player
from pursuit.models.space import Space

if TYPE_CHECKING:
    from pursuit.engine.world import World

logger = logging.getLogger(__name__)


class Actor(Protocol):
    """Anything a strategy can move."""

    @property
    def name(self) -> str: ...

    @property
    def current_space(self) -> Space: ...

    def move(self, space: Space) -> None: ...


class Strategy(Protocol):
    """Interface for movement strategies."""

    def move_player(self, player: Player, world: World) -> str:
        """Move a player (or the target character) one step."""
        ...

    def move_pet(self, pet: Pet, world: World) -> str:
        """Move the pet one step."""
        ...


def distance(first: Space, second: Space) -> float:
    """Euclidean distance between two spaces' coordinates."""
    return math.dist(first.coordinates, second.coordinates)


class _BaseStrategy:
    """Shared argument checks; subclasses implement ``_step``."""

    def move_player(self, player: Player, world: World) -> str:
        if player is None or world is None:
            raise InvalidArgumentError("Player and world cannot be None.")
        return self._step(player, world)

    def move_pet(self, pet: Pet, world: World) -> str:
        if pet is None or world is None:
            raise InvalidArgumentError("Pet and world cannot be None.")
        return self._step(pet, world)

    def _step(self, actor: Actor, world: World) -> str:
        raise NotImplementedError

    def _report(self, message: str) -> str:
        logger.info("%s: %s", type(self).__name__, message)
        return message


class RandomMoveStrategy(_BaseStrategy):
    """Moves the actor to a uniformly random neighbor."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def _step(self, actor: Actor, world: World) -> str:
        space = actor.current_space
        neighbors = space.neighbors
        if not neighbors:
            return self._report(
                f"{actor.name} has no neighboring spaces to move to and stays in {space.name}."
            )
        destination = self.rng.choice(neighbors)
        actor.move(destination)
        return self._report(f"{actor.name} moved to {destination.name} randomly.")


class ChasePlayerStrategy(_BaseStrategy):
    """
    Moves the actor toward the nearest other living character.

    The quarry is the closest character by Euclidean distance over space
    coordinates (first found wins ties). The actor steps to the neighbor
    that is strictly closer to the quarry's space than its current space,
    or to a random neighbor when no neighbor is closer. An actor already
    sharing the quarry's space stays put.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def find_quarry(self, actor: Actor, world: World) -> Player | None:
        origin = actor.current_space
        closest: Player | None = None
        closest_distance = math.inf
        for candidate in world.characters:
            if candidate is actor or not candidate.is_alive:
                continue
            candidate_distance = distance(origin, candidate.current_space)
            if candidate_distance < closest_distance:
                closest = candidate
                closest_distance = candidate_distance
        return closest

    def _step(self, actor: Actor, world: World) -> str:
        quarry = self.find_quarry(actor, world)
        if quarry is None:
            return self._report(f"{actor.name} has no players to chase.")

        space = actor.current_space
        goal = quarry.current_space
        if space is goal:
            return self._report(f"{actor.name} stays with {quarry.name} in {space.name}.")

        neighbors = space.neighbors
        if not neighbors:
            return self._report(f"{actor.name} has no valid moves.")

        best: Space | None = None
        best_distance = distance(space, goal)
        for neighbor in neighbors:
            neighbor_distance = distance(neighbor, goal)
            if neighbor_distance < best_distance:
                best = neighbor
                best_distance = neighbor_distance

        if best is None:
            best = self.rng.choice(neighbors)
        actor.move(best)
        return self._report(f"{actor.name} moved towards {quarry.name} and entered {best.name}.")


class DepthFirstMoveStrategy(_BaseStrategy):
    """
    Explores the graph one depth-first step per call.

    The visited set and stack belong to this instance, so each actor that
    explores needs its own strategy object. Once every reachable space has
    been visited and the stack unwinds, calls report exhaustion; with
    ``restart_when_exhausted`` the next call begins a fresh traversal.
    """

    def __init__(self, restart_when_exhausted: bool = False) -> None:
        self.restart_when_exhausted = restart_when_exhausted
        self._visited: set[Space] = set()
        self._stack: list[Space] = []

    @property
    def visited(self) -> set[Space]:
        return set(self._visited)

    def reset(self) -> None:
        self._visited.clear()
        self._stack.clear()

    def _next_unvisited(self, space: Space) -> Space | None:
        for neighbor in space.neighbors:
            if neighbor not in self._visited:
                return neighbor
        return None

    def _step(self, actor: Actor, world: World) -> str:
        current = actor.current_space
        if not self._stack:
            self._stack.append(current)
        self._visited.add(current)

        destination = self._next_unvisited(current)
        if destination is not None:
            actor.move(destination)
            self._stack.append(destination)
            self._visited.add(destination)
            return self._report(
                f"{actor.name} moved to {destination.name} using depth-first traversal."
            )

        self._stack.pop()
        if self._stack:
            previous = self._stack[-1]
            actor.move(previous)
            return self._report(f"{actor.name} backtracked to {previous.name}.")

        if self.restart_when_exhausted:
            self.reset()
        return self._report(f"{actor.name} has no more spaces to explore.")


STRATEGIES: dict[str, type[_BaseStrategy]] = {
    "random": RandomMoveStrategy,
    "chase": ChasePlayerStrategy,
    "depth-first": DepthFirstMoveStrategy,
}


def create_strategy(name: str, rng: random.Random | None = None) -> Strategy:
    """Build a strategy from its short name."""
    key = name.strip().lower()
    if key == "random":
        return RandomMoveStrategy(rng)
    if key == "chase":
        return ChasePlayerStrategy(rng)
    if key in ("depth-first", "dfs"):
        return DepthFirstMoveStrategy(restart_when_exhausted=True)
    raise InvalidArgumentError(
        f"Unknown strategy: {name}. Choose from: {', '.join(sorted(STRATEGIES))}"
    )
