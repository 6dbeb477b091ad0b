"""
Turn sequencing for Manor Pursuit.

The TurnManager hands out turns round-robin over the player roster and
stops once the turn limit is reached or the roster empties.
"""

from __future__ import annotations

import logging

from pursuit.models.errors import InvalidArgumentError
from pursuit.models.player import Player

logger = logging.getLogger(__name__)


class TurnManager:
    """Round-robin turn order with a fixed turn budget."""

    def __init__(self, players: list[Player], max_turns: int) -> None:
        if not players:
            raise InvalidArgumentError("Player list cannot be empty.")
        if max_turns <= 0:
            raise InvalidArgumentError("Maximum turns must be greater than zero.")

        self._players: list[Player] = list(players)
        self._max_turns = max_turns
        self._current_index = 0
        self._turn_count = 0
        self._current: Player | None = None

        logger.info(
            "TurnManager initialized with %d players and max turns %d",
            len(self._players),
            max_turns,
        )

    @property
    def players(self) -> list[Player]:
        return list(self._players)

    @property
    def turn_count(self) -> int:
        return self._turn_count

    @property
    def max_turns(self) -> int:
        return self._max_turns

    @property
    def turns_remaining(self) -> int:
        return max(0, self._max_turns - self._turn_count)

    @property
    def current_player(self) -> Player | None:
        """The player most recently handed a turn."""
        return self._current

    def add_player(self, player: Player) -> None:
        if player is None:
            raise InvalidArgumentError("Player cannot be None.")
        if player not in self._players:
            self._players.append(player)
            logger.info("Player added to turn order: %s", player.name)

    def remove_player(self, player: Player) -> bool:
        """Drop a player from the rotation, keeping the next player in line."""
        if player is None:
            raise InvalidArgumentError("Player cannot be None.")
        if player not in self._players:
            logger.warning("Player not in turn order: %s", player.name)
            return False

        index = self._players.index(player)
        self._players.pop(index)
        if index < self._current_index:
            self._current_index -= 1
        if self._current_index >= len(self._players):
            self._current_index = 0
        if self._current is player:
            player.is_current_turn = False
            self._current = None
        logger.info("Player removed from turn order: %s", player.name)
        return True

    def extend(self, turns: int) -> None:
        """Raise the turn limit by ``turns``."""
        if turns <= 0:
            raise InvalidArgumentError("Additional turns must be greater than zero.")
        self._max_turns += turns
        logger.info("Turn limit extended to %d", self._max_turns)

    def next_player(self) -> Player | None:
        """
        Hand the turn to the next player.

        Returns:
            The player whose turn begins, or None once the game is over
        """
        if self.is_game_over():
            logger.warning("Cannot advance turn: the game is over")
            if self._current is not None:
                self._current.is_current_turn = False
                self._current = None
            return None

        player = self._players[self._current_index]
        if self._current is not None:
            self._current.is_current_turn = False
        player.is_current_turn = True
        self._current = player

        self._current_index = (self._current_index + 1) % len(self._players)
        self._turn_count += 1
        logger.info("Turn %d: %s", self._turn_count, player.name)
        return player

    def is_game_over(self) -> bool:
        return self._turn_count >= self._max_turns or not self._players
