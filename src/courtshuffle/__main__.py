"""Command-line interface for Court Shuffle.

Run ``court-shuffle simulate`` for a scripted session, or start the
interactive mode to run a real session court side.
"""

# Court Shuffle
# Copyright (C) 2025  Court Shuffle developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import random
import sys
import time
from typing import List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from courtshuffle.controllers.session import ShuffleSession
from courtshuffle.exceptions import CourtShuffleException
from courtshuffle.models.player import Player
from courtshuffle.models.round import Round
from courtshuffle.models.shuffle_config import ShuffleConfig
from courtshuffle.utils import configure_logging, setup_logger
from courtshuffle.utils.stats import fairness_report

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


# Interactive commands with their usage
COMMANDS = {
    "new": {
        "description": "Start a new game",
        "usage": "new <courts> <name> <name> ...",
    },
    "next": {"description": "Plan the next round", "usage": "next"},
    "sitout": {
        "description": "Replan the current round with these players sitting out",
        "usage": "sitout <name> ...",
    },
    "courts": {
        "description": "Change the number of courts for later rounds",
        "usage": "courts <count>",
    },
    "add": {"description": "Add a late arrival", "usage": "add <name>"},
    "remove": {"description": "Remove a player", "usage": "remove <name>"},
    "undo": {"description": "Remove the last round", "usage": "undo"},
    "show": {"description": "Show a round (default: current)", "usage": "show [round]"},
    "stats": {"description": "Show the fairness report", "usage": "stats"},
    "help": {"description": "Show available commands", "usage": "help"},
    "exit": {"description": "Exit the interactive mode", "usage": "exit"},
}


def print_banner():
    """Print the application banner."""
    banner = f"""
{Colors.OKBLUE}╔═══════════════════════════════════════════════════════════════╗
║                                                               ║
║                      COURT SHUFFLE                            ║
║                                                               ║
║              [Fair doubles rotations, round by round]         ║
║                                                               ║
╚═══════════════════════════════════════════════════════════════╝{Colors.ENDC}

Type {Colors.BOLD}help{Colors.ENDC} to see all available commands
Type {Colors.BOLD}exit{Colors.ENDC} or {Colors.BOLD}quit{Colors.ENDC} to leave interactive mode
"""
    print(banner)


def print_commands_list():
    """Print list of all available commands."""
    print(f"\n{Colors.BOLD}Available Commands:{Colors.ENDC}\n")
    for cmd, info in COMMANDS.items():
        print(f"  {Colors.OKGREEN}{info['usage']:32}{Colors.ENDC} {info['description']}")
    print()


def create_completer():
    """Create autocomplete completer for interactive mode."""
    return WordCompleter(list(COMMANDS.keys()), ignore_case=True)


def format_round(session: ShuffleSession, round_: Round, number: int) -> List[str]:
    """Render a round with player names, one court per line."""
    # Players removed since the round was planned still show by id.
    names = {player.id: player.name for player in session.players}
    lines = [f"{Colors.BOLD}Round {number}{Colors.ENDC}"]
    for court, (team_a, team_b) in enumerate(round_.matches, start=1):
        left = " & ".join(names.get(p, p) for p in team_a)
        right = " & ".join(names.get(p, p) for p in team_b)
        lines.append(f"  Court {court}: {left}  vs  {right}")
    if round_.sit_outs:
        sitting = ", ".join(names.get(p, p) for p in round_.sit_outs)
        lines.append(f"  {Colors.WARNING}Sitting out: {sitting}{Colors.ENDC}")
    return lines


def print_fairness(session: ShuffleSession):
    """Print the fairness report for the session so far."""
    report = fairness_report(session.rounds, session.roster)
    print(f"\n{Colors.BOLD}Fairness Report:{Colors.ENDC}")
    print(f"  Rounds: {len(session.rounds)}")
    print(f"  Partner variance: {report.partner_variance:.3f}")
    print(f"  Opponent variance: {report.opponent_variance:.3f}")
    print(f"  Sit-out variance: {report.sit_out_variance:.3f}")
    print(f"  Most times partnered: {report.max_played_with}")
    print(f"  Repeated matches: {report.repeated_matches}")


def run_simulate_command(args: argparse.Namespace) -> int:
    """Plan a whole session for generated players and report on it."""
    config = ShuffleConfig(
        round_lookahead=args.lookahead,
        round_attempts=args.attempts,
    )
    players = [Player(name=f"P{i:02d}", id=f"P{i:02d}") for i in range(1, args.players + 1)]
    session = ShuffleSession(
        players, args.courts, config=config, rng=random.Random(args.seed)
    )

    print(f"\n{Colors.BOLD}Simulating {args.rounds} rounds...{Colors.ENDC}")
    print(f"Players: {args.players}, courts: {args.courts}\n")

    start = time.perf_counter()
    for _ in range(args.rounds):
        new_round = session.next_round()
        for line in format_round(session, new_round, session.current_round_number):
            print(line)
    elapsed = time.perf_counter() - start

    print_fairness(session)
    print(f"  Planning time: {elapsed*1000:.2f}ms")
    return 0


def _current_round_or_warn(session: ShuffleSession) -> Optional[int]:
    if session.current_round_number == 0:
        print(f"{Colors.WARNING}No rounds yet; use 'next' first{Colors.ENDC}")
        return None
    return session.current_round_number


def execute_command(session: ShuffleSession, command: str, args_list: List[str]):
    """Run one interactive command against the session."""
    if command == "new":
        if len(args_list) < 2:
            print(f"Usage: {COMMANDS['new']['usage']}")
            return
        new_round = session.new_game(args_list[1:], int(args_list[0]))
        print("\n".join(format_round(session, new_round, 1)))
    elif command == "next":
        new_round = session.next_round()
        print("\n".join(format_round(session, new_round, session.current_round_number)))
    elif command == "sitout":
        number = _current_round_or_warn(session)
        if number is None:
            return
        volunteers = [session.find_player(name).id for name in args_list]
        new_round = session.regenerate_round(number, volunteers)
        print("\n".join(format_round(session, new_round, number)))
    elif command == "courts":
        if not args_list:
            print(f"Courts: {session.courts}")
            return
        session.set_courts(int(args_list[0]))
        print(f"{Colors.OKGREEN}Courts set to {session.courts}{Colors.ENDC}")
    elif command == "add":
        for name in args_list:
            player = session.add_player(name)
            print(f"{Colors.OKGREEN}Added {player.name}{Colors.ENDC}")
    elif command == "remove":
        for name in args_list:
            player = session.remove_player(name)
            print(f"{Colors.OKGREEN}Removed {player.name}{Colors.ENDC}")
    elif command == "undo":
        if session.undo_last_round():
            print(f"{Colors.OKGREEN}Removed the last round{Colors.ENDC}")
        else:
            print(f"{Colors.WARNING}Nothing to undo{Colors.ENDC}")
    elif command == "show":
        number = int(args_list[0]) if args_list else session.current_round_number
        round_ = session.get_round(number)
        if round_ is None:
            print(f"{Colors.FAIL}No round {number}{Colors.ENDC}")
            return
        print("\n".join(format_round(session, round_, number)))
    elif command == "stats":
        print_fairness(session)
    elif command == "help":
        print_commands_list()


def run_interactive_mode(args: Optional[argparse.Namespace] = None) -> int:
    """Run in interactive mode with autocomplete."""
    print_banner()

    seed = args.seed if args is not None else None
    session = ShuffleSession(rng=random.Random(seed))

    style = Style.from_dict(
        {
            "prompt": "#00aa00 bold",
        }
    )
    prompt = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=style,
    )

    while True:
        try:
            user_input = prompt.prompt("court-shuffle> ").strip()
            if not user_input:
                continue

            if user_input in ["exit", "quit", "q"]:
                print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
                break

            parts = user_input.split()
            command = parts[0].lstrip("/").lower()
            if command not in COMMANDS:
                print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
                print(f"Type {Colors.BOLD}help{Colors.ENDC} to see available commands")
                continue

            try:
                execute_command(session, command, parts[1:])
            except (CourtShuffleException, ValueError) as e:
                print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
                logger.debug("Command failed", exc_info=True)

        except KeyboardInterrupt:
            print(f"\n{Colors.WARNING}Use 'exit' or 'quit' to leave{Colors.ENDC}")
        except EOFError:
            print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
            break

    return 0


def create_main_parser():
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="court-shuffle",
        description="Fair doubles rotations for social play",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  court-shuffle

  # Simulate ten rounds for 14 players on 3 courts
  court-shuffle simulate --players 14 --courts 3 --rounds 10 --seed 7
        """,
    )
    parser.add_argument(
        "--interactive", "-i", action="store_true", help="Start in interactive mode"
    )
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    sim_parser = subparsers.add_parser("simulate", help="Simulate a session")
    sim_parser.add_argument("--players", type=int, default=12, help="Number of players")
    sim_parser.add_argument("--courts", type=int, default=2, help="Number of courts")
    sim_parser.add_argument("--rounds", type=int, default=8, help="Rounds to plan")
    sim_parser.add_argument(
        "--seed", type=int, default=argparse.SUPPRESS, help="Random seed"
    )
    sim_parser.add_argument(
        "--lookahead", type=int, default=3, help="Rounds simulated per trial"
    )
    sim_parser.add_argument(
        "--attempts", type=int, default=20, help="Trials per planned round"
    )
    sim_parser.add_argument(
        "--verbose", action="store_true", default=argparse.SUPPRESS, help="Debug logging"
    )
    sim_parser.set_defaults(func=run_simulate_command)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the court-shuffle CLI."""
    parser = create_main_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        configure_logging("DEBUG")

    if args.interactive or not hasattr(args, "func"):
        return run_interactive_mode(args)

    try:
        return args.func(args)
    except CourtShuffleException as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
