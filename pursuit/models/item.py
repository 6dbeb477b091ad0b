"""
Item model for Manor Pursuit.

Items lie in spaces until a player picks them up. Each item is held by
exactly one space or inventory at a time.
"""

from __future__ import annotations

from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class Item(BaseModel):
    """An immutable, damage-dealing item."""

    model_config = {"frozen": True}

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(min_length=1, max_length=255)
    damage: int = Field(default=0, ge=0, description="Damage dealt when used in an attack")
    description: str = Field(default="No description")

    def __str__(self) -> str:
        return f"{self.name} ({self.damage} dmg)"


def create_item(name: str, damage: int = 0, description: str = "No description") -> Item:
    """Factory function to create an item."""
    return Item(name=name, damage=damage, description=description)
