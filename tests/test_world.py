"""
Tests for the World orchestrator.
"""

from __future__ import annotations

import logging

import pytest

from pursuit.engine import GameConfig, GameOverPolicy, World
from pursuit.models import (
    InvalidArgumentError,
    Item,
    Pet,
    Player,
    PlayerKind,
    Space,
    create_item,
)
from pursuit.services import (
    ChasePlayerStrategy,
    DepthFirstMoveStrategy,
    RandomMoveStrategy,
)


@pytest.fixture
def garden() -> Space:
    return Space("Garden", 0, 0)


@pytest.fixture
def kitchen(garden) -> Space:
    kitchen = Space("Kitchen", 1, 0)
    garden.add_neighbor(kitchen)
    return kitchen


@pytest.fixture
def cellar() -> Space:
    """A room with no doors, so nothing wanders in or out."""
    return Space("Cellar", 5, 5)


@pytest.fixture
def sword(garden) -> Item:
    sword = create_item("Sword", 15)
    garden.add_item(sword)
    return sword


@pytest.fixture
def alice(garden) -> Player:
    return Player("Alice", 100, garden)


@pytest.fixture
def bob(garden) -> Player:
    return Player("Bob", 100, garden)


@pytest.fixture
def lucky(cellar) -> Player:
    return Player("Lucky", 50, cellar, kind=PlayerKind.AI)


@pytest.fixture
def world(garden, kitchen, cellar, sword, alice, bob, lucky) -> World:
    return World(spaces=[garden, kitchen, cellar], players=[alice, bob], target=lucky)


# =============================================================================
# Construction
# =============================================================================


class TestWorldConstruction:
    """Tests for validating a new world."""

    def test_first_turn_begins(self, world, alice):
        assert world.current_player is alice
        assert alice.is_current_turn
        assert world.turn_count == 1
        assert not world.is_game_over()

    def test_characters_include_target(self, world, alice, bob, lucky):
        assert world.characters == [alice, bob, lucky]

    def test_defaults(self, world):
        assert isinstance(world.strategy, RandomMoveStrategy)
        assert world.config == GameConfig()

    def test_requires_players(self, garden, lucky, cellar):
        with pytest.raises(InvalidArgumentError):
            World(spaces=[garden, cellar], players=[], target=lucky)

    def test_rejects_duplicate_space_names(self, garden, cellar, alice, lucky):
        with pytest.raises(InvalidArgumentError, match="Duplicate space"):
            World(spaces=[garden, Space("Garden", 9, 9), cellar], players=[alice], target=lucky)

    def test_rejects_duplicate_player_names(self, garden, cellar, alice, lucky):
        twin = Player("Alice", 10, garden)
        with pytest.raises(InvalidArgumentError, match="Duplicate player"):
            World(spaces=[garden, cellar], players=[alice, twin], target=lucky)

    def test_rejects_player_outside_world(self, garden, alice, lucky):
        with pytest.raises(InvalidArgumentError, match="not in this world"):
            World(spaces=[garden], players=[alice], target=lucky)

    def test_rejects_target_in_roster(self, garden, cellar, alice, lucky):
        with pytest.raises(InvalidArgumentError):
            World(spaces=[garden, cellar], players=[alice, lucky], target=lucky)


# =============================================================================
# Queries
# =============================================================================


class TestWorldQueries:
    """Tests for lookups and descriptions."""

    def test_get_space_and_player(self, world, kitchen, lucky):
        assert world.get_space("Kitchen") is kitchen
        assert world.get_space("Attic") is None
        assert world.get_player("Lucky") is lucky
        assert world.get_player("Nobody") is None

    def test_get_space_name_at(self, world):
        assert world.get_space_name_at(1, 0) == "Kitchen"
        assert world.get_space_name_at(9, 9) is None

    def test_items_include_carried_items(self, world, sword, alice):
        assert world.items == [sword]
        world.pick_up_item("Sword")
        assert world.items == [sword]
        assert alice.items == [sword]

    def test_player_status(self, world):
        status = world.get_player_status()

        assert "Player: Alice" in status
        assert "Health: 100/100" in status
        assert "Turn: 1/50" in status

    def test_describe_space(self, world):
        assert world.describe_space("Garden").startswith("Space: Garden (0, 0)")
        assert world.describe_space("Attic") == "There is no space named 'Attic'."

    def test_look_around(self, world, kitchen):
        kitchen.add_item(create_item("Knife", 4))

        assert world.look_around() == "\n".join(
            [
                "You are currently in: Garden (0, 0)",
                "Items in this space: Sword (15 dmg)",
                "Other players in this space: Bob",
                "From here, you can see:",
                " - Kitchen with Knife and no players",
            ]
        )

    def test_look_around_does_not_use_a_turn(self, world, alice):
        world.look_around()

        assert world.current_player is alice
        assert world.turn_count == 1

    def test_look_around_hides_the_pet_room(self, garden, kitchen, cellar, alice, lucky):
        Pet("Cat", kitchen)
        world = World(spaces=[garden, kitchen, cellar], players=[alice], target=lucky)

        description = world.look_around()

        assert "There are no items in this space." in description
        assert "There are no other players in this space." in description
        assert " - Kitchen is not visible." in description

    def test_look_around_without_exits(self, cellar):
        lonely = Player("Hermit", 10, cellar)
        solo = World(spaces=[cellar], players=[lonely], target=Player("Ghost", 5, cellar))

        assert solo.look_around().endswith("There are no exits from this space.")


class TestVisibility:
    """Tests for room visibility and sightlines."""

    def test_space_visible_without_pet(self, world, kitchen):
        assert world.is_space_visible(kitchen)

    def test_pet_blocks_visibility(self, garden, kitchen, cellar, alice, lucky):
        Pet("Cat", kitchen)
        world = World(spaces=[garden, kitchen, cellar], players=[alice], target=lucky)

        assert not world.is_space_visible(kitchen)
        assert world.is_space_visible(garden)

    def test_foreign_space_not_visible(self, world):
        assert not world.is_space_visible(Space("Elsewhere", 7, 7))

    def test_none_space_rejected(self, world):
        with pytest.raises(InvalidArgumentError):
            world.is_space_visible(None)

    def test_sightlines_cover_neighboring_rooms(self, garden, kitchen, cellar, alice, lucky):
        carol = Player("Carol", 100, kitchen)
        World(spaces=[garden, kitchen, cellar], players=[alice, carol], target=lucky)

        assert alice.can_see(carol)
        assert carol.can_see(alice)
        assert not alice.can_see(lucky)

    def test_same_room_is_not_a_sightline(self, world, alice, bob):
        assert not alice.can_see(bob)

    def test_sightlines_refresh_after_each_turn(self, world, alice, bob, kitchen):
        world.move_player("Kitchen")  # Alice

        assert bob.can_see(alice)
        assert alice.can_see(bob)


# =============================================================================
# Actions
# =============================================================================


class TestMovePlayer:
    """Tests for moving the current player."""

    def test_move_to_neighbor_ends_turn(self, world, alice, bob, kitchen):
        result = world.move_player("Kitchen")

        assert result
        assert result.turn_ended
        assert alice.current_space is kitchen
        assert world.current_player is bob
        assert world.turn_count == 2
        assert result.message.startswith("Alice moved from Garden to Kitchen.")

    def test_move_to_non_neighbor_rejected(self, world, alice, garden):
        result = world.move_player("Cellar")

        assert not result
        assert not result.turn_ended
        assert result.message == "Cellar is not adjacent to Garden."
        assert alice.current_space is garden
        assert world.current_player is alice

    def test_move_to_unknown_space_rejected(self, world, alice):
        result = world.move_player("Attic")

        assert not result
        assert world.current_player is alice

    def test_rejected_action_is_logged(self, world, caplog):
        with caplog.at_level(logging.WARNING, logger="pursuit.engine.world"):
            world.move_player("Attic")

        assert "Action rejected" in caplog.text


class TestPickUpItem:
    """Tests for picking up items."""

    def test_pick_up(self, world, alice, garden, sword):
        result = world.pick_up_item("Sword")

        assert result
        assert result.turn_ended
        assert alice.items == [sword]
        assert not garden.has_item(sword)

    def test_missing_item_rejected(self, world, alice):
        result = world.pick_up_item("Crown")

        assert not result
        assert world.current_player is alice

    def test_full_inventory_rejected(self, garden, kitchen, cellar, sword, lucky):
        config = GameConfig(inventory_capacity=1)
        alice = Player("Alice", 100, garden, inventory_capacity=config.inventory_capacity)
        alice.inventory.add_item(create_item("Rope", 2))
        world = World(spaces=[garden, kitchen, cellar], players=[alice], target=lucky, config=config)

        result = world.pick_up_item("Sword")

        assert not result
        assert "inventory is full" in result.message
        assert garden.has_item(sword)


class TestAttack:
    """Tests for attack legality and resolution."""

    def test_unseen_attack_with_weapon(self, world, alice, bob, sword):
        world.pick_up_item("Sword")  # Alice
        world.pass_turn()  # Bob

        result = world.attack("Bob")

        assert result
        assert result.turn_ended
        assert result.damage == 15
        assert result.weapon == "Sword"
        assert not result.victim_defeated
        assert bob.health == 85
        assert sword not in alice.items
        assert sword not in world.items
        assert result.message.startswith(
            "Alice attacked Bob with Sword for 15 damage. Sword was removed from play as evidence."
        )

    def test_attack_player_returns_message(self, world, bob):
        message = world.attack_player("Bob")

        assert message.startswith("Alice attacked Bob unarmed for 1 damage.")
        assert bob.health == 99

    def test_unarmed_damage_is_configurable(self, garden, kitchen, cellar, alice, bob, lucky):
        world = World(
            spaces=[garden, kitchen, cellar],
            players=[alice, bob],
            target=lucky,
            config=GameConfig(unarmed_damage=3),
        )

        world.attack("Bob")

        assert bob.health == 97

    def test_victim_must_share_the_space(self, world, lucky):
        result = world.attack("Lucky")

        assert not result
        assert not result.turn_ended
        assert lucky.health == 50

    def test_unknown_victim(self, world):
        assert not world.attack("Nobody")

    def test_cannot_attack_self(self, world):
        assert not world.attack("Alice")

    def test_attacker_who_can_see_victim_is_refused(self, world, alice, bob):
        alice.set_can_see(bob, True)

        result = world.attack("Bob")

        assert not result
        assert "plain view" in result.message
        assert bob.health == 100

    def test_witness_in_the_room_stops_attack(self, garden, kitchen, cellar, sword, alice, bob, lucky):
        carol = Player("Carol", 100, garden)
        world = World(spaces=[garden, kitchen, cellar], players=[alice, bob, carol], target=lucky)
        world.pick_up_item("Sword")
        world.pass_turn()
        world.pass_turn()

        result = world.attack("Bob")

        assert not result
        assert result.turn_ended
        assert result.witnesses == ["Carol"]
        assert bob.health == 100
        assert alice.items == [sword]
        assert world.current_player is bob

    def test_witness_next_door_stops_attack(self, garden, kitchen, cellar, alice, bob, lucky):
        carol = Player("Carol", 100, kitchen)
        world = World(spaces=[garden, kitchen, cellar], players=[alice, bob, carol], target=lucky)

        result = world.attack("Bob")

        assert not result
        assert result.witnesses == ["Carol"]

    def test_pet_blocks_the_witness(self, garden, kitchen, cellar, alice, bob, lucky):
        carol = Player("Carol", 100, kitchen)
        Pet("Cat", garden)
        world = World(spaces=[garden, kitchen, cellar], players=[alice, bob, carol], target=lucky)

        result = world.attack("Bob")

        assert result
        assert bob.health == 99

    def test_defeated_player_leaves_the_roster(self, garden, kitchen, cellar, sword, alice, lucky):
        bob = Player("Bob", 10, garden)
        world = World(spaces=[garden, kitchen, cellar], players=[alice, bob], target=lucky)
        world.pick_up_item("Sword")
        world.pass_turn()

        result = world.attack("Bob")

        assert result.victim_defeated
        assert "Bob has been defeated!" in result.message
        assert bob not in world.turn_manager.players
        assert world.current_player is alice
        assert not world.is_game_over()

    def test_dead_victim_rejected(self, world, bob):
        bob.set_health(0)

        result = world.attack("Bob")

        assert not result
        assert "already dead" in result.message


class TestTargetDefeat:
    """Tests for killing the target character."""

    @pytest.fixture
    def hunt(self, garden, kitchen, cellar, sword, alice):
        lucky = Player("Lucky", 10, garden, kind=PlayerKind.AI)
        bob = Player("Bob", 100, cellar)
        alice.pick_up_item(sword)
        return lucky, bob

    def test_defeating_target_wins(self, hunt, garden, kitchen, cellar, alice):
        lucky, bob = hunt
        world = World(spaces=[garden, kitchen, cellar], players=[alice, bob], target=lucky)

        result = world.attack("Lucky")

        assert result.victim_defeated
        assert "Alice wins the game!" in result.message
        assert world.winner is alice
        assert world.is_game_over()
        assert world.game_over_reason() == "Alice defeated Lucky."
        assert not world.move_player("Kitchen")

    def test_game_can_continue_after_target_dies(self, hunt, garden, kitchen, cellar, alice):
        lucky, bob = hunt
        world = World(
            spaces=[garden, kitchen, cellar],
            players=[alice, bob],
            target=lucky,
            config=GameConfig(end_on_target_defeat=False),
        )

        world.attack("Lucky")

        assert world.winner is None
        assert not world.is_game_over()
        assert world.move_target() == "Lucky is dead and does not move."


# =============================================================================
# Turn flow
# =============================================================================


class TestTurnFlow:
    """Tests for end-of-turn movement and computer turns."""

    def test_target_moves_after_each_turn(self, garden, kitchen, alice, bob):
        lucky = Player("Lucky", 50, kitchen, kind=PlayerKind.AI)
        world = World(
            spaces=[garden, kitchen],
            players=[alice, bob],
            target=lucky,
            strategy=ChasePlayerStrategy(),
        )

        result = world.pass_turn()

        assert lucky.current_space is garden
        assert "Lucky moved towards Alice and entered Garden." in result.message
        assert world.last_turn_events[0] == "Lucky moved towards Alice and entered Garden."

    def test_pet_moves_after_each_turn(self, garden, kitchen, cellar, alice, lucky):
        cat = Pet("Cat", kitchen, DepthFirstMoveStrategy())
        world = World(spaces=[garden, kitchen, cellar], players=[alice], target=lucky, pet=cat)

        world.pass_turn()

        assert cat.current_space is garden
        assert not world.is_space_visible(garden)

    def test_pet_wandering_in_hides_the_room(self, garden, kitchen, cellar, alice, bob, lucky):
        pantry = Space("Pantry", 2, 0)
        kitchen.add_neighbor(pantry)
        carol = Player("Carol", 100, kitchen)
        cat = Pet("Cat", pantry, DepthFirstMoveStrategy())
        world = World(
            spaces=[garden, kitchen, pantry, cellar],
            players=[alice, bob, carol],
            target=lucky,
            pet=cat,
        )
        assert carol.can_see(bob)

        world.pass_turn()  # Alice

        assert cat.current_space is kitchen
        assert not world.is_space_visible(kitchen)
        assert not bob.can_see(carol)
        assert not carol.can_see(bob)
        assert " - Kitchen is not visible." in world.look_around()

        result = world.attack("Alice")

        assert result
        assert result.witnesses == []
        assert alice.health == 99

    def test_move_pet_without_pet(self, world):
        assert world.move_pet() == "There is no pet in this world."

    def test_set_strategy(self, world):
        strategy = ChasePlayerStrategy()
        world.set_strategy(strategy)

        assert world.strategy is strategy
        with pytest.raises(InvalidArgumentError):
            world.set_strategy(None)

    def test_ai_turn_rejected_for_humans(self, world, alice):
        result = world.play_ai_turn()

        assert not result
        assert world.current_player is alice

    def test_ai_attacks_target(self, garden, kitchen, cellar):
        bot = Player("Bot", 100, garden, kind=PlayerKind.AI)
        lucky = Player("Lucky", 50, garden, kind=PlayerKind.AI)
        world = World(spaces=[garden, kitchen, cellar], players=[bot], target=lucky)

        result = world.play_ai_turn()

        assert result
        assert lucky.health == 49

    def test_ai_picks_up_best_item(self, garden, kitchen, cellar, lucky):
        bot = Player("Bot", 100, kitchen, kind=PlayerKind.AI)
        knife = create_item("Knife", 4)
        kitchen.add_item(create_item("Rope", 2))
        kitchen.add_item(knife)
        world = World(spaces=[garden, kitchen, cellar], players=[bot], target=lucky)

        world.play_ai_turn()

        assert bot.items == [knife]

    def test_ai_moves_with_its_strategy(self, garden, kitchen, cellar, lucky):
        bot = Player("Bot", 100, kitchen, kind=PlayerKind.AI, strategy=DepthFirstMoveStrategy())
        world = World(spaces=[garden, kitchen, cellar], players=[bot], target=lucky)

        result = world.play_ai_turn()

        assert result.turn_ended
        assert bot.current_space is garden
        assert world.turn_count == 2

    def test_ai_without_strategy_leaves_target_strategy_alone(
        self, garden, kitchen, cellar, lucky
    ):
        bot = Player("Bot", 100, garden, kind=PlayerKind.AI)
        explorer = DepthFirstMoveStrategy()
        world = World(
            spaces=[garden, kitchen, cellar], players=[bot], target=lucky, strategy=explorer
        )

        world.play_ai_turn()

        assert bot.current_space is kitchen
        assert explorer.visited == {cellar}
        assert lucky.current_space is cellar


# =============================================================================
# Game over
# =============================================================================


class TestGameOver:
    """Tests for end conditions and policies."""

    def _world(self, garden, kitchen, cellar, alice, bob, lucky, policy):
        config = GameConfig(max_turns=2, game_over_policy=policy)
        return World(
            spaces=[garden, kitchen, cellar], players=[alice, bob], target=lucky, config=config
        )

    def test_last_turn_is_playable(self, garden, kitchen, cellar, alice, bob, lucky):
        world = self._world(garden, kitchen, cellar, alice, bob, lucky, GameOverPolicy.EITHER)
        world.pass_turn()

        assert world.current_player is bob
        assert not world.is_game_over()
        assert world.move_player("Kitchen")

    def test_max_turns_ends_game(self, garden, kitchen, cellar, alice, bob, lucky):
        world = self._world(garden, kitchen, cellar, alice, bob, lucky, GameOverPolicy.EITHER)
        world.pass_turn()
        world.pass_turn()

        assert world.is_game_over()
        assert world.current_player is None
        assert world.game_over_reason() == "The maximum of 2 turns has been reached."

    def test_actions_rejected_after_game_over(self, garden, kitchen, cellar, alice, bob, lucky):
        world = self._world(garden, kitchen, cellar, alice, bob, lucky, GameOverPolicy.MAX_TURNS)
        world.pass_turn()
        world.pass_turn()

        result = world.move_player("Kitchen")

        assert not result
        assert result.message.startswith("The game is over.")
        assert alice.current_space is garden
        assert not world.pick_up_item("Sword")
        assert not world.attack("Bob")

    @pytest.mark.parametrize("policy", [GameOverPolicy.ALL_DEAD, GameOverPolicy.BOTH])
    def test_turn_limit_renews_when_only_deaths_end_the_game(
        self, garden, kitchen, cellar, alice, bob, lucky, policy
    ):
        world = self._world(garden, kitchen, cellar, alice, bob, lucky, policy)
        world.pass_turn()
        world.pass_turn()

        assert not world.is_game_over()
        assert world.current_player is alice
        assert world.turn_count == 3

    def test_all_dead_ends_game(self, world, alice, bob):
        alice.set_health(0)
        bob.set_health(0)

        assert world.is_game_over()
        assert world.game_over_reason() == "All players are dead."

    def test_game_not_over(self, world):
        assert world.game_over_reason() is None

    def test_summary(self, world):
        summary = world.summary()

        assert "Turns played: 1" in summary
        assert "Lucky: 50/50 health" in summary
