"""
Core Engine for Manor Pursuit.

The engine orchestrates:
- Turn sequencing (who acts next, when the game ends)
- Action validation and resolution (move, pick up, attack)
- Target and pet movement between player turns
"""

from __future__ import annotations

from pursuit.engine.models import ActionResult, AttackResult, GameConfig, GameOverPolicy
from pursuit.engine.turns import TurnManager
from pursuit.engine.world import World

__all__ = [
    # Models
    "ActionResult",
    "AttackResult",
    "GameConfig",
    "GameOverPolicy",
    # Turns
    "TurnManager",
    # World
    "World",
]
