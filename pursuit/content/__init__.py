"""
Content module for Manor Pursuit.

Contains world layouts and the pre-built starter mansion.
"""

from __future__ import annotations

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
from pursuit.content.mansion import create_mansion_layout, create_starter_world

__all__ = [
    "ItemRecord",
    "NeighborRecord",
    "PetRecord",
    "PlayerRecord",
    "SpaceRecord",
    "TargetRecord",
    "WorldLayout",
    "build_world",
    "create_mansion_layout",
    "create_starter_world",
]
