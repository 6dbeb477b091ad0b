"""
Engine Data Models for Manor Pursuit.

Defines the structures exchanged with the UI layer:
- GameConfig: tunable rules of a game
- ActionResult / AttackResult: feedback for a requested action
"""

from __future__ import annotations

import os
from enum import Enum

from pydantic import BaseModel, Field

from pursuit.models.player import DEFAULT_INVENTORY_CAPACITY, DEFAULT_UNARMED_DAMAGE


class GameOverPolicy(str, Enum):
    """Which end conditions finish a game."""

    ALL_DEAD = "all_dead"  # every roster player at 0 health
    MAX_TURNS = "max_turns"  # turn limit reached
    EITHER = "either"
    BOTH = "both"


class GameConfig(BaseModel):
    """Game configuration."""

    max_turns: int = Field(default=50, gt=0, description="Turns before the game ends")
    game_over_policy: GameOverPolicy = GameOverPolicy.EITHER
    inventory_capacity: int = Field(default=DEFAULT_INVENTORY_CAPACITY, gt=0)
    unarmed_damage: int = Field(default=DEFAULT_UNARMED_DAMAGE, ge=0)
    end_on_target_defeat: bool = Field(
        default=True, description="Killing the target ends the game immediately"
    )

    @classmethod
    def from_env(cls, prefix: str = "PURSUIT_") -> GameConfig:
        """Build a config from environment variables, falling back to defaults."""
        values: dict[str, str] = {}
        for field_name in (
            "max_turns",
            "game_over_policy",
            "inventory_capacity",
            "unarmed_damage",
            "end_on_target_defeat",
        ):
            raw = os.getenv(f"{prefix}{field_name.upper()}")
            if raw is not None and raw.strip():
                values[field_name] = raw.strip()
        return cls(**values)


class ActionResult(BaseModel):
    """Outcome of a requested action. Truthy when the action succeeded."""

    success: bool
    message: str = Field(description="Human-readable result")
    turn_ended: bool = Field(default=False, description="Whether the action used up the turn")

    def __bool__(self) -> bool:
        return self.success

    def __str__(self) -> str:
        return self.message


class AttackResult(ActionResult):
    """Outcome of an attack attempt."""

    attacker: str | None = None
    victim: str | None = None
    damage: int = Field(default=0, ge=0)
    weapon: str | None = Field(default=None, description="Weapon consumed, None if unarmed")
    victim_defeated: bool = False
    witnesses: list[str] = Field(default_factory=list)
