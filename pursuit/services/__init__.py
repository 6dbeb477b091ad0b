"""
Service layer for Manor Pursuit.

Services hold the decision logic for computer-controlled actors.
"""

from __future__ import annotations

from pursuit.services.strategies import (
    Actor,
    ChasePlayerStrategy,
    DepthFirstMoveStrategy,
    RandomMoveStrategy,
    Strategy,
    create_strategy,
    distance,
)

__all__ = [
    "Actor",
    "ChasePlayerStrategy",
    "DepthFirstMoveStrategy",
    "RandomMoveStrategy",
    "Strategy",
    "create_strategy",
    "distance",
]
