"""
World orchestrator for Manor Pursuit.

The World owns the space graph, the player roster, the target
character, the pet and the target's movement strategy. It validates
every action requested by the UI layer, applies it, and advances the
turn. Errors raised below this layer are turned into ActionResults so a
caller can always show the player a readable message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pursuit.engine.models import ActionResult, AttackResult, GameConfig, GameOverPolicy
from pursuit.engine.turns import TurnManager
from pursuit.models.errors import (
    IllegalMoveError,
    InvalidArgumentError,
    NotFoundError,
    PursuitError,
)
from pursuit.models.item import Item
from pursuit.models.pet import Pet
from pursuit.models.player import Player
from pursuit.models.space import Space
from pursuit.services.strategies import RandomMoveStrategy, Strategy

logger = logging.getLogger(__name__)


def _names(entries: list) -> str:
    return ", ".join(entry.name for entry in entries)


@dataclass(eq=False)
class World:
    """
    Main game orchestrator.

    Coordinates:
    - Action validation (adjacency, item presence, attack legality)
    - Turn sequencing through a TurnManager
    - Target and pet movement at the end of every turn
    - Sightline bookkeeping between characters

    The first turn begins as soon as the world is constructed.
    """

    spaces: list[Space]
    players: list[Player]
    target: Player
    pet: Pet | None = None
    strategy: Strategy | None = None
    config: GameConfig = field(default_factory=GameConfig)

    # Initialized in __post_init__
    turn_manager: TurnManager = field(init=False)
    last_turn_events: list[str] = field(init=False, default_factory=list)
    _spaces_by_name: dict[str, Space] = field(init=False, default_factory=dict)
    _turn_budget_spent: bool = field(init=False, default=False)
    _winner: Player | None = field(init=False, default=None)
    _ai_fallback: RandomMoveStrategy = field(init=False, default_factory=RandomMoveStrategy)

    def __post_init__(self) -> None:
        """Validate the world and begin the first turn."""
        if not self.spaces:
            raise InvalidArgumentError("A world needs at least one space.")
        if not self.players:
            raise InvalidArgumentError("A world needs at least one player.")
        if self.target is None:
            raise InvalidArgumentError("A world needs a target character.")

        self.spaces = list(self.spaces)
        self.players = list(self.players)
        for space in self.spaces:
            if space.name in self._spaces_by_name:
                raise InvalidArgumentError(f"Duplicate space name: {space.name}")
            self._spaces_by_name[space.name] = space

        seen_names: set[str] = set()
        for character in self.characters:
            if character.name in seen_names:
                raise InvalidArgumentError(f"Duplicate player name: {character.name}")
            seen_names.add(character.name)
            self._require_member(character.current_space, character.name)
        if self.target in self.players:
            raise InvalidArgumentError("The target cannot also be a roster player.")

        if self.pet is not None:
            self._require_member(self.pet.current_space, self.pet.name)
            self.pet.attach_world(self)
        if self.strategy is None:
            self.strategy = RandomMoveStrategy()

        self.turn_manager = TurnManager(self.players, self.config.max_turns)
        self._refresh_sightlines()
        self._begin_turn()
        logger.info(
            "World initialized with %d spaces, %d players, target %s",
            len(self.spaces),
            len(self.players),
            self.target.name,
        )

    def _require_member(self, space: Space, owner: str) -> None:
        if self._spaces_by_name.get(space.name) is not space:
            raise InvalidArgumentError(f"{owner} starts in {space.name}, which is not in this world.")

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def characters(self) -> list[Player]:
        """Roster players followed by the target character."""
        return [*self.players, self.target]

    @property
    def current_player(self) -> Player | None:
        return self.turn_manager.current_player

    @property
    def turn_count(self) -> int:
        return self.turn_manager.turn_count

    @property
    def winner(self) -> Player | None:
        return self._winner

    @property
    def items(self) -> list[Item]:
        """Every item still in play, lying in a space or carried."""
        found: list[Item] = []
        for space in self.spaces:
            found.extend(space.items)
        for character in self.characters:
            found.extend(character.items)
        return found

    def get_space(self, name: str) -> Space | None:
        return self._spaces_by_name.get(name)

    def get_player(self, name: str) -> Player | None:
        """Find a roster player or the target by name."""
        for character in self.characters:
            if character.name == name:
                return character
        return None

    def get_space_name_at(self, x: int, y: int) -> str | None:
        for space in self.spaces:
            if space.coordinates == (x, y):
                return space.name
        logger.warning("No space found at coordinates (%d, %d)", x, y)
        return None

    def is_space_visible(self, space: Space) -> bool:
        """A space can be seen into unless a pet is inside it."""
        if space is None:
            raise InvalidArgumentError("Space cannot be None.")
        if self._spaces_by_name.get(space.name) is not space:
            return False
        return not space.has_pet()

    def living_players(self) -> list[Player]:
        return [player for player in self.players if player.is_alive]

    # =========================================================================
    # Game over
    # =========================================================================

    def is_game_over(self) -> bool:
        if self._winner is not None:
            return True
        if self.current_player is None:
            return True

        all_dead = not self.living_players()
        policy = self.config.game_over_policy
        if policy == GameOverPolicy.ALL_DEAD:
            return all_dead
        if policy == GameOverPolicy.MAX_TURNS:
            return self._turn_budget_spent
        if policy == GameOverPolicy.BOTH:
            return all_dead and self._turn_budget_spent
        return all_dead or self._turn_budget_spent

    def game_over_reason(self) -> str | None:
        if not self.is_game_over():
            return None
        if self._winner is not None:
            return f"{self._winner.name} defeated {self.target.name}."
        if not self.living_players():
            return "All players are dead."
        if self._turn_budget_spent:
            return f"The maximum of {self.config.max_turns} turns has been reached."
        return "No player is left to take a turn."

    # =========================================================================
    # Turn flow
    # =========================================================================

    def _begin_turn(self) -> None:
        player = self.turn_manager.next_player()
        if player is not None:
            return

        if self.turn_manager.players and self.turn_manager.turns_remaining == 0:
            self._turn_budget_spent = True
            if self.config.game_over_policy in (GameOverPolicy.ALL_DEAD, GameOverPolicy.BOTH):
                # Only deaths end these games, so the turn budget renews.
                self.turn_manager.extend(self.config.max_turns)
                self.turn_manager.next_player()
                return
        logger.info("Game over: %s", self.game_over_reason())

    def _end_turn(self) -> list[str]:
        """Move the target and pet, update sightlines and begin the next turn."""
        events: list[str] = []
        if self._winner is None:
            if self.target.is_alive:
                events.append(self.move_target())
            if self.pet is not None:
                events.append(self.move_pet())

        for player in self.players:
            if not player.is_alive and player in self.turn_manager.players:
                self.turn_manager.remove_player(player)
                events.append(f"{player.name} has been eliminated.")

        self._refresh_sightlines()
        if self._winner is None:
            self._begin_turn()
        self.last_turn_events = events
        return events

    def _refresh_sightlines(self) -> None:
        """
        Record who can see whom across neighboring spaces.

        A room holding the pet blocks sightlines both into and out of it.
        """
        characters = self.characters
        for observer in characters:
            for observed in characters:
                if observed is observer:
                    continue
                there = observed.current_space
                visible = (
                    observer.is_alive
                    and observed.is_alive
                    and observer.current_space.is_neighbor(there)
                    and self.is_space_visible(there)
                    and self.is_space_visible(observer.current_space)
                )
                observer.set_can_see(observed, visible)

    def _refuse(self, message: str, result_type: type[ActionResult] = ActionResult) -> ActionResult:
        logger.warning("Action rejected: %s", message)
        return result_type(success=False, message=message)

    def _acting_player(self) -> Player | str:
        """The player whose turn it is, or the reason nobody may act."""
        if self.is_game_over():
            return f"The game is over. {self.game_over_reason()}"
        player = self.current_player
        if player is None:
            return "No player is taking a turn."
        return player

    def _finish(self, message: str) -> ActionResult:
        events = self._end_turn()
        return ActionResult(success=True, message="\n".join([message, *events]), turn_ended=True)

    def pass_turn(self) -> ActionResult:
        """End the current turn without acting."""
        actor = self._acting_player()
        if isinstance(actor, str):
            return self._refuse(actor)
        return self._finish(f"{actor.name} waits.")

    # =========================================================================
    # Actions
    # =========================================================================

    def move_player(self, space_name: str) -> ActionResult:
        """Move the current player to a neighboring space."""
        actor = self._acting_player()
        if isinstance(actor, str):
            return self._refuse(actor)

        origin = actor.current_space
        try:
            destination = self._adjacent_space(origin, space_name)
            actor.move(destination)
        except PursuitError as e:
            return self._refuse(str(e))
        return self._finish(f"{actor.name} moved from {origin.name} to {destination.name}.")

    def _adjacent_space(self, origin: Space, space_name: str) -> Space:
        destination = self.get_space(space_name)
        if destination is None:
            raise NotFoundError(f"There is no space named {space_name!r}.")
        if not origin.is_neighbor(destination):
            raise IllegalMoveError(f"{destination.name} is not adjacent to {origin.name}.")
        return destination

    def pick_up_item(self, item_name: str) -> ActionResult:
        """Pick up a named item from the current player's space."""
        actor = self._acting_player()
        if isinstance(actor, str):
            return self._refuse(actor)

        space = actor.current_space
        item = space.find_item(item_name)
        if item is None:
            return self._refuse(f"There is no {item_name!r} in {space.name}.")

        try:
            actor.pick_up_item(item)
        except PursuitError as e:
            return self._refuse(str(e))
        return self._finish(f"{actor.name} picked up {item.name}.")

    def witnesses(self, attacker: Player, victim: Player) -> list[Player]:
        """Living third parties who would see ``attacker`` strike."""
        return [
            character
            for character in self.characters
            if character is not attacker
            and character is not victim
            and character.is_alive
            and (
                character.current_space is attacker.current_space
                or character.can_see(attacker)
            )
        ]

    def attack(self, target_name: str) -> AttackResult:
        """
        Attempt an attack by the current player.

        The attack is legal only when attacker and victim share a space,
        both are alive, and the attacker cannot already see the victim.
        An attack seen by any living third party is stopped, which still
        ends the attacker's turn. The best carried item is used and
        discarded; without one the blow deals the unarmed damage.
        """
        actor = self._acting_player()
        if isinstance(actor, str):
            return self._refuse(actor, AttackResult)

        victim = self.get_player(target_name)
        if victim is None:
            return self._refuse(f"There is no player named {target_name!r}.", AttackResult)
        if victim is actor:
            return self._refuse(f"{actor.name} cannot attack themselves.", AttackResult)
        if not victim.is_alive:
            return self._refuse(f"{victim.name} is already dead.", AttackResult)
        if victim.current_space is not actor.current_space:
            return self._refuse(
                f"{victim.name} is not in {actor.current_space.name}.", AttackResult
            )
        # Sightlines never span a shared room, so only set_can_see trips this
        if actor.can_see(victim):
            return self._refuse(
                f"{actor.name} was in plain view of {victim.name}; there is no surprise.",
                AttackResult,
            )

        seen_by = self.witnesses(actor, victim)
        if seen_by:
            message = f"{actor.name}'s attack on {victim.name} was seen by {_names(seen_by)} and stopped."
            logger.info(message)
            events = self._end_turn()
            return AttackResult(
                success=False,
                message="\n".join([message, *events]),
                turn_ended=True,
                attacker=actor.name,
                victim=victim.name,
                witnesses=[witness.name for witness in seen_by],
            )

        try:
            outcome = actor.attempt_attack(victim, self.config.unarmed_damage)
        except PursuitError as e:
            return self._refuse(str(e), AttackResult)

        if outcome.weapon is not None:
            message = (
                f"{actor.name} attacked {victim.name} with {outcome.weapon.name} for "
                f"{outcome.damage} damage. {outcome.weapon.name} was removed from play as evidence."
            )
        else:
            message = f"{actor.name} attacked {victim.name} unarmed for {outcome.damage} damage."

        defeated = outcome.victim_health == 0
        if defeated:
            message += f" {victim.name} has been defeated!"
            if victim is self.target and self.config.end_on_target_defeat:
                self._winner = actor
                message += f" {actor.name} wins the game!"

        events = self._end_turn()
        return AttackResult(
            success=True,
            message="\n".join([message, *events]),
            turn_ended=True,
            attacker=actor.name,
            victim=victim.name,
            damage=outcome.damage,
            weapon=outcome.weapon.name if outcome.weapon is not None else None,
            victim_defeated=defeated,
        )

    def attack_player(self, target_name: str) -> str:
        """Attack by name and return the result message."""
        return self.attack(target_name).message

    def move_target(self) -> str:
        """Move the target character one step with the world strategy."""
        if not self.target.is_alive:
            return f"{self.target.name} is dead and does not move."
        return self.strategy.move_player(self.target, self)

    def move_pet(self) -> str:
        if self.pet is None:
            return "There is no pet in this world."
        return self.pet.decide_action()

    def set_strategy(self, strategy: Strategy) -> None:
        if strategy is None:
            raise InvalidArgumentError("Strategy cannot be None.")
        self.strategy = strategy

    def play_ai_turn(self) -> ActionResult:
        """
        Take the current computer player's turn.

        Priority: attack the target when the attack is legal, then pick up
        the strongest item in the room if there is space to carry it,
        otherwise move with the player's strategy. Players without one
        wander randomly; the target's strategy is never borrowed.
        """
        actor = self._acting_player()
        if isinstance(actor, str):
            return self._refuse(actor)
        if not actor.is_ai:
            return self._refuse(f"{actor.name} is not a computer-controlled player.")

        target = self.target
        if (
            target.is_alive
            and target.current_space is actor.current_space
            and not actor.can_see(target)
            and not self.witnesses(actor, target)
        ):
            return self.attack(target.name)

        room_items = actor.current_space.items
        if room_items and not actor.inventory.is_full():
            best = max(room_items, key=lambda item: item.damage)
            return self.pick_up_item(best.name)

        strategy = actor.strategy or self._ai_fallback
        try:
            message = strategy.move_player(actor, self)
        except PursuitError as e:
            return self._refuse(str(e))
        return self._finish(message)

    # =========================================================================
    # Descriptions
    # =========================================================================

    def look_around(self) -> str:
        """Describe the current player's space and its neighbors."""
        actor = self.current_player
        if actor is None:
            return "No player is taking a turn."

        space = actor.current_space
        lines = [f"You are currently in: {space.name} ({space.x}, {space.y})"]

        items = space.items
        lines.append(
            f"Items in this space: {', '.join(str(item) for item in items)}"
            if items
            else "There are no items in this space."
        )
        others = [player for player in space.players if player is not actor]
        lines.append(
            f"Other players in this space: {_names(others)}"
            if others
            else "There are no other players in this space."
        )
        if space.pets:
            lines.append(f"Pets in this space: {_names(space.pets)}")

        neighbors = space.neighbors
        if not neighbors:
            lines.append("There are no exits from this space.")
            return "\n".join(lines)

        lines.append("From here, you can see:")
        for neighbor in neighbors:
            if not self.is_space_visible(neighbor):
                lines.append(f" - {neighbor.name} is not visible.")
                continue
            neighbor_items = _names(neighbor.items) or "no items"
            neighbor_players = _names(neighbor.players) or "no players"
            lines.append(f" - {neighbor.name} with {neighbor_items} and {neighbor_players}")
        return "\n".join(lines)

    def describe_space(self, name: str) -> str:
        space = self.get_space(name)
        if space is None:
            return f"There is no space named {name!r}."
        return space.get_description()

    def get_player_status(self) -> str:
        """Status of the player whose turn it is."""
        actor = self.current_player
        if actor is None:
            return "No player status available."
        return (
            f"{actor.describe()}\n"
            f"Turn: {self.turn_count}/{self.turn_manager.max_turns}"
        )

    def summary(self) -> str:
        """End-of-game (or current) standings."""
        lines = [f"Turns played: {self.turn_count}"]
        reason = self.game_over_reason()
        if reason:
            lines.append(f"Game over: {reason}")
        for character in self.characters:
            lines.append(f"{character.name}: {character.health}/{character.max_health} health")
        return "\n".join(lines)
