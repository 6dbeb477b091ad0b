"""
Starter Mansion for Manor Pursuit.

Provides a pre-built mansion with rooms, weapons, a rival computer
player, the target and the target's cat, so a game can start
immediately.
"""

from __future__ import annotations

import random

from pursuit.content.layout import (
    ItemRecord,
    NeighborRecord,
    PetRecord,
    PlayerRecord,
    SpaceRecord,
    TargetRecord,
    WorldLayout,
    build_world,
)
from pursuit.engine.models import GameConfig
from pursuit.engine.world import World
from pursuit.models.player import PlayerKind

TARGET_NAME = "Doctor Lucky"
RIVAL_NAME = "Miss Scarlet"


def create_mansion_layout(
    player_name: str = "Player",
    target_strategy: str = "random",
    pet_strategy: str = "depth-first",
) -> WorldLayout:
    """
    Describe the starter mansion.

    Nine rooms on a three by four grid:
    - The Foyer as the human player's starting room
    - Doctor Lucky and his cat in the Dining Hall
    - A rival computer player in the Library
    - One weapon in most rooms, the Revolver hidden in the Study
    """
    # =========================================================================
    # Rooms
    # =========================================================================
    spaces = [
        SpaceRecord(name="Foyer", x=1, y=0),
        SpaceRecord(name="Wine Cellar", x=2, y=0),
        SpaceRecord(name="Library", x=0, y=1),
        SpaceRecord(name="Dining Hall", x=1, y=1),
        SpaceRecord(name="Kitchen", x=2, y=1),
        SpaceRecord(name="Study", x=0, y=2),
        SpaceRecord(name="Billiard Room", x=1, y=2),
        SpaceRecord(name="Conservatory", x=2, y=2),
        SpaceRecord(name="Gallery", x=1, y=3),
    ]

    neighbors = [
        NeighborRecord(first="Foyer", second="Dining Hall"),
        NeighborRecord(first="Foyer", second="Wine Cellar"),
        NeighborRecord(first="Wine Cellar", second="Kitchen"),
        NeighborRecord(first="Dining Hall", second="Kitchen"),
        NeighborRecord(first="Dining Hall", second="Library"),
        NeighborRecord(first="Dining Hall", second="Billiard Room"),
        NeighborRecord(first="Library", second="Study"),
        NeighborRecord(first="Kitchen", second="Conservatory"),
        NeighborRecord(first="Billiard Room", second="Conservatory"),
        NeighborRecord(first="Billiard Room", second="Gallery"),
        NeighborRecord(first="Study", second="Gallery"),
    ]

    # =========================================================================
    # Weapons
    # =========================================================================
    items = [
        ItemRecord(name="Wine Bottle", damage=3, space="Wine Cellar"),
        ItemRecord(name="Letter Opener", damage=2, space="Library"),
        ItemRecord(name="Candlestick", damage=3, space="Dining Hall"),
        ItemRecord(
            name="Carving Knife",
            damage=4,
            space="Kitchen",
            description="Freshly sharpened for the roast.",
        ),
        ItemRecord(
            name="Revolver",
            damage=8,
            space="Study",
            description="Loaded. Nobody remembers why.",
        ),
        ItemRecord(name="Billiard Cue", damage=2, space="Billiard Room"),
        ItemRecord(name="Rope", damage=2, space="Conservatory"),
        ItemRecord(name="Crossbow", damage=6, space="Gallery"),
    ]

    # =========================================================================
    # Characters
    # =========================================================================
    players = [
        PlayerRecord(name=player_name, health=100, space="Foyer"),
        PlayerRecord(
            name=RIVAL_NAME,
            health=100,
            space="Library",
            kind=PlayerKind.AI,
            strategy="chase",
        ),
    ]

    return WorldLayout(
        name="Lucky Mansion",
        spaces=spaces,
        items=items,
        players=players,
        target=TargetRecord(
            name=TARGET_NAME, health=50, space="Dining Hall", strategy=target_strategy
        ),
        pet=PetRecord(name="Fortune the Cat", space="Dining Hall", strategy=pet_strategy),
        neighbors=neighbors,
    )


def create_starter_world(
    player_name: str = "Player",
    config: GameConfig | None = None,
    rng: random.Random | None = None,
    target_strategy: str = "random",
    pet_strategy: str = "depth-first",
) -> World:
    """
    Create the starter mansion, ready to play.

    Args:
        player_name: Name for the human player
        config: Game rules, defaults when omitted
        rng: Random source for the random strategies
        target_strategy: How Doctor Lucky wanders
        pet_strategy: How the cat wanders

    Returns:
        A World whose first turn belongs to the human player
    """
    layout = create_mansion_layout(player_name, target_strategy, pet_strategy)
    return build_world(layout, config=config, rng=rng)
