"""
Interactive REPL for Manor Pursuit.

Provides a text-based interface for playing the game. Human players
type commands; computer players take their turns automatically in
between.
"""

from __future__ import annotations

import argparse
import logging
import random
from collections.abc import Callable
from dataclasses import dataclass

from pursuit.content import create_starter_world
from pursuit.engine.models import ActionResult, GameConfig
from pursuit.engine.world import World
from pursuit.services.strategies import STRATEGIES


@dataclass
class GameState:
    """Current state of the game session."""

    world: World
    running: bool = True


@dataclass
class Command:
    """A REPL command."""

    name: str
    aliases: list[str]
    description: str
    handler: Callable[[GameState, list[str]], str | None]
    usage: str = ""


class GameREPL:
    """
    Interactive REPL for playing Manor Pursuit.

    Handles user input, command dispatch, and computer-controlled turns.
    """

    def __init__(self) -> None:
        self.commands: dict[str, Command] = {}
        self._register_commands()

    def _register_commands(self) -> None:
        """Register all commands."""
        commands = [
            Command(
                name="quit",
                aliases=["exit", "q"],
                description="Exit the game",
                handler=self._cmd_quit,
            ),
            Command(
                name="help",
                aliases=["?", "h"],
                description="Show available commands",
                handler=self._cmd_help,
            ),
            Command(
                name="look",
                aliases=["l"],
                description="Look around the current space (does not use a turn)",
                handler=self._cmd_look,
            ),
            Command(
                name="move",
                aliases=["go", "m"],
                description="Move to a neighboring space",
                handler=self._cmd_move,
                usage="<space>",
            ),
            Command(
                name="pickup",
                aliases=["take", "get"],
                description="Pick up an item in your space",
                handler=self._cmd_pickup,
                usage="<item>",
            ),
            Command(
                name="attack",
                aliases=["kill", "a"],
                description="Attack a player in your space",
                handler=self._cmd_attack,
                usage="<player>",
            ),
            Command(
                name="status",
                aliases=["stats", "me"],
                description="Show the current player's status",
                handler=self._cmd_status,
            ),
            Command(
                name="map",
                aliases=["spaces"],
                description="List every space and its doors, or describe one space",
                handler=self._cmd_map,
                usage="[space]",
            ),
            Command(
                name="where",
                aliases=["at"],
                description="Name the space at a coordinate",
                handler=self._cmd_where,
                usage="<x> <y>",
            ),
            Command(
                name="pass",
                aliases=["wait"],
                description="End your turn without acting",
                handler=self._cmd_pass,
            ),
        ]

        for cmd in commands:
            self.commands[cmd.name] = cmd
            for alias in cmd.aliases:
                self.commands[alias] = cmd

    # =========================================================================
    # Commands
    # =========================================================================

    def _cmd_quit(self, state: GameState, args: list[str]) -> str | None:
        """Handle quit command."""
        state.running = False
        return "The mansion falls silent. Goodbye!"

    def _cmd_help(self, state: GameState, args: list[str]) -> str | None:
        """Handle help command."""
        lines = [
            "Available Commands:",
            "-" * 40,
        ]

        # Get unique commands (no aliases)
        seen = set()
        for cmd in self.commands.values():
            if cmd.name not in seen:
                usage = f" {cmd.usage}" if cmd.usage else ""
                aliases = f" ({', '.join(cmd.aliases)})" if cmd.aliases else ""
                lines.append(f"  {cmd.name}{usage}{aliases} - {cmd.description}")
                seen.add(cmd.name)

        lines.extend(
            [
                "",
                "Tips:",
                "  - Attacks only work when nobody can see you",
                "  - The cat blocks the view into and out of its room",
            ]
        )
        return "\n".join(lines)

    def _cmd_look(self, state: GameState, args: list[str]) -> str | None:
        return state.world.look_around()

    def _cmd_move(self, state: GameState, args: list[str]) -> str | None:
        if not args:
            return "Move where? Usage: move <space>"
        return self._take_turn(state, state.world.move_player(" ".join(args)))

    def _cmd_pickup(self, state: GameState, args: list[str]) -> str | None:
        if not args:
            return "Pick up what? Usage: pickup <item>"
        return self._take_turn(state, state.world.pick_up_item(" ".join(args)))

    def _cmd_attack(self, state: GameState, args: list[str]) -> str | None:
        if not args:
            return "Attack whom? Usage: attack <player>"
        return self._take_turn(state, state.world.attack(" ".join(args)))

    def _cmd_pass(self, state: GameState, args: list[str]) -> str | None:
        return self._take_turn(state, state.world.pass_turn())

    def _cmd_status(self, state: GameState, args: list[str]) -> str | None:
        return state.world.get_player_status()

    def _cmd_map(self, state: GameState, args: list[str]) -> str | None:
        """List the mansion, or describe a single space."""
        if args:
            return state.world.describe_space(" ".join(args))

        lines = ["Mansion Map:", "-" * 40]
        for space in state.world.spaces:
            doors = ", ".join(neighbor.name for neighbor in space.neighbors) or "none"
            lines.append(f"  {space.name} ({space.x}, {space.y}) -> {doors}")
        return "\n".join(lines)

    def _cmd_where(self, state: GameState, args: list[str]) -> str | None:
        if len(args) != 2:
            return "Usage: where <x> <y>"
        try:
            x, y = int(args[0]), int(args[1])
        except ValueError:
            return "Coordinates must be whole numbers."
        name = state.world.get_space_name_at(x, y)
        if name is None:
            return f"There is no space at ({x}, {y})."
        return f"({x}, {y}) is the {name}."

    # =========================================================================
    # Turn handling
    # =========================================================================

    def _take_turn(self, state: GameState, result: ActionResult) -> str:
        """Report an action, then let computer players act until a human is up."""
        parts = [str(result)]
        if result.turn_ended:
            parts.extend(self._play_ai_turns(state))
        return "\n".join(part for part in parts if part)

    def _play_ai_turns(self, state: GameState) -> list[str]:
        world = state.world
        messages: list[str] = []
        while not world.is_game_over():
            player = world.current_player
            if player is None or not player.is_ai:
                break
            result = world.play_ai_turn()
            messages.append(f"[{player.name}] {result}")
            if not result.turn_ended:
                # A refused computer turn would repeat forever
                messages.append(str(world.pass_turn()))

        if world.is_game_over():
            messages.append(world.summary())
            state.running = False
        else:
            messages.append(self._prompt_line(world))
        return messages

    def _prompt_line(self, world: World) -> str:
        player = world.current_player
        if player is None:
            return ""
        return f"It is {player.name}'s turn ({player.current_space.name})."

    def _is_command(self, text: str) -> bool:
        return bool(text) and self._parse_command(text)[0] in self.commands

    def _parse_command(self, text: str) -> tuple[str, list[str]]:
        """Split ``text`` into a command name and its arguments."""
        parts = text.strip().lstrip("/").split()
        if not parts:
            return "", []
        return parts[0].lower(), parts[1:]

    def process_input(self, text: str, state: GameState) -> str:
        """Process user input and return the response."""
        text = text.strip()
        if not text:
            return ""

        if not self._is_command(text):
            return f"Unknown command: {text.split()[0]}. Type 'help' for commands."
        cmd_name, args = self._parse_command(text)
        command = self.commands[cmd_name]
        if state.world.is_game_over() and command.name not in ("help", "quit"):
            state.running = False
            return state.world.summary()

        result = command.handler(state, args)
        return result or ""

    def start(self, state: GameState) -> str:
        """Opening text; plays any computer turns that come first."""
        lines = ["Welcome to the mansion. Find the target before the night ends."]
        if state.world.current_player is not None and state.world.current_player.is_ai:
            lines.extend(self._play_ai_turns(state))
        else:
            lines.append(self._prompt_line(state.world))
        if state.running:
            lines.append(state.world.look_around())
        return "\n".join(lines)

    def _print_banner(self) -> None:
        """Print the game banner."""
        banner = r"""
  __  __                          ____                       _ _
 |  \/  | __ _ _ __   ___  _ __  |  _ \ _   _ _ __ ___ _   _(_) |_
 | |\/| |/ _` | '_ \ / _ \| '__| | |_) | | | | '__/ __| | | | | __|
 | |  | | (_| | | | | (_) | |    |  __/| |_| | |  \__ \ |_| | | |_
 |_|  |_|\__,_|_| |_|\___/|_|    |_|    \__,_|_|  |___/\__,_|_|\__|
"""
        print(banner)
        print("Type help for commands.\n")

    def run(self, world: World) -> None:
        """Run the interactive REPL."""
        state = GameState(world=world)
        self._print_banner()
        print(self.start(state))
        print()

        # Main loop
        while state.running:
            try:
                user_input = input("> ").strip()
                if not user_input:
                    continue

                response = self.process_input(user_input, state)
                if response:
                    print()
                    print(response)
                    print()

            except KeyboardInterrupt:
                print("\n")
                state.running = False
            except EOFError:
                print("\n")
                state.running = False

        print("Thanks for playing!")


def run_game(
    player_name: str = "Player",
    config: GameConfig | None = None,
    target_strategy: str = "random",
    pet_strategy: str = "depth-first",
    seed: int | None = None,
) -> None:
    """
    Run Manor Pursuit in the starter mansion.

    Args:
        player_name: Name for the human player
        config: Game rules, read from the environment when omitted
        target_strategy: How the target wanders
        pet_strategy: How the pet wanders
        seed: Seed for reproducible random movement
    """
    world = create_starter_world(
        player_name=player_name,
        config=config or GameConfig.from_env(),
        rng=random.Random(seed),
        target_strategy=target_strategy,
        pet_strategy=pet_strategy,
    )
    GameREPL().run(world)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manor Pursuit")
    parser.add_argument("--name", default="Player", help="Player name")
    parser.add_argument("--max-turns", type=int, default=None, help="Turn limit")
    parser.add_argument(
        "--target-strategy",
        choices=sorted(STRATEGIES),
        default="random",
        help="How the target moves",
    )
    parser.add_argument(
        "--pet-strategy",
        choices=sorted(STRATEGIES),
        default="depth-first",
        help="How the pet moves",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    config = GameConfig.from_env()
    if args.max_turns is not None:
        config = GameConfig(**{**config.model_dump(), "max_turns": args.max_turns})

    run_game(
        player_name=args.name,
        config=config,
        target_strategy=args.target_strategy,
        pet_strategy=args.pet_strategy,
        seed=args.seed,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
