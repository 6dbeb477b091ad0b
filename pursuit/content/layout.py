"""
World layouts for Manor Pursuit.

A WorldLayout is a plain description of a mansion: its spaces, items,
players, target, pet and the doors between spaces. ``build_world``
turns a layout into a live World.
"""

from __future__ import annotations

import logging
import random

from pydantic import BaseModel, Field, field_validator

from pursuit.engine.models import GameConfig
from pursuit.engine.world import World
from pursuit.models.errors import NotFoundError
from pursuit.models.item import create_item
from pursuit.models.pet import Pet
from pursuit.models.player import Player, PlayerKind
from pursuit.models.space import Space
from pursuit.services.strategies import create_strategy

logger = logging.getLogger(__name__)


class SpaceRecord(BaseModel):
    """A room and its grid coordinates."""

    name: str = Field(min_length=1)
    x: int = 0
    y: int = 0


class ItemRecord(BaseModel):
    """An item and the space it starts in."""

    name: str = Field(min_length=1)
    damage: int = Field(default=0, ge=0)
    space: str
    description: str = "No description"


class PlayerRecord(BaseModel):
    """A roster player."""

    name: str = Field(min_length=1)
    health: int = Field(gt=0)
    space: str
    kind: PlayerKind = PlayerKind.HUMAN
    strategy: str | None = Field(
        default=None, description="Movement strategy name for computer players"
    )


class TargetRecord(BaseModel):
    """The character every player is after."""

    name: str = Field(min_length=1)
    health: int = Field(gt=0)
    space: str
    strategy: str = "random"


class PetRecord(BaseModel):
    """The target's pet."""

    name: str = Field(min_length=1)
    space: str
    strategy: str = "depth-first"


class NeighborRecord(BaseModel):
    """A door between two spaces. Doors work both ways."""

    first: str
    second: str


class WorldLayout(BaseModel):
    """Everything needed to build a World."""

    name: str = "Mansion"
    spaces: list[SpaceRecord] = Field(min_length=1)
    items: list[ItemRecord] = Field(default_factory=list)
    players: list[PlayerRecord] = Field(min_length=1)
    target: TargetRecord
    pet: PetRecord | None = None
    neighbors: list[NeighborRecord] = Field(default_factory=list)

    @field_validator("spaces")
    @classmethod
    def unique_space_names(cls, spaces: list[SpaceRecord]) -> list[SpaceRecord]:
        names = [space.name for space in spaces]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate space names: {', '.join(duplicates)}")
        return spaces


def _lookup(spaces: dict[str, Space], name: str, owner: str) -> Space:
    space = spaces.get(name)
    if space is None:
        raise NotFoundError(f"{owner} refers to unknown space {name!r}.")
    return space


def build_world(
    layout: WorldLayout,
    config: GameConfig | None = None,
    rng: random.Random | None = None,
) -> World:
    """
    Build a World from a layout.

    Construction order is spaces, items, players, target, pet, then the
    neighbor edges. Computer players without a named strategy get their
    own instance of the target's strategy.

    Args:
        layout: The mansion description
        config: Game rules, defaults when omitted
        rng: Random source shared by every random strategy

    Returns:
        A World whose first turn has already begun

    Raises:
        NotFoundError: A record names a space the layout does not define
    """
    config = config or GameConfig()
    rng = rng or random.Random()

    spaces = {record.name: Space(record.name, record.x, record.y) for record in layout.spaces}

    for record in layout.items:
        space = _lookup(spaces, record.space, f"Item {record.name}")
        space.add_item(create_item(record.name, record.damage, record.description))

    players = []
    for record in layout.players:
        start = _lookup(spaces, record.space, f"Player {record.name}")
        strategy = None
        if record.kind == PlayerKind.AI:
            # Each computer player owns its strategy instance
            strategy = create_strategy(record.strategy or layout.target.strategy, rng)
        elif record.strategy:
            strategy = create_strategy(record.strategy, rng)
        players.append(
            Player(
                record.name,
                record.health,
                start,
                kind=record.kind,
                strategy=strategy,
                inventory_capacity=config.inventory_capacity,
            )
        )

    target_record = layout.target
    target = Player(
        target_record.name,
        target_record.health,
        _lookup(spaces, target_record.space, f"Target {target_record.name}"),
        kind=PlayerKind.AI,
        inventory_capacity=config.inventory_capacity,
    )

    pet = None
    if layout.pet is not None:
        pet = Pet(
            layout.pet.name,
            _lookup(spaces, layout.pet.space, f"Pet {layout.pet.name}"),
            create_strategy(layout.pet.strategy, rng),
        )

    for record in layout.neighbors:
        first = _lookup(spaces, record.first, "Door")
        second = _lookup(spaces, record.second, "Door")
        first.add_neighbor(second)

    logger.info(
        "Built %s: %d spaces, %d items, %d players",
        layout.name,
        len(spaces),
        len(layout.items),
        len(players),
    )
    return World(
        spaces=list(spaces.values()),
        players=players,
        target=target,
        pet=pet,
        strategy=create_strategy(target_record.strategy, rng),
        config=config,
    )
