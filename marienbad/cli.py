"""
Marienbad CLI - Hot-seat terminal host for the engine.

Usage:
    marienbad play [--groups 3 5 7]    Play a two-player game in the terminal
    marienbad show [--groups 3 5 7]    Print the starting board

Environment:
    MARIENBAD_GROUPS      Default group sizes, comma-separated (default 3,5,7)
    MARIENBAD_LOG_LEVEL   Logging level (default WARNING)
"""

import argparse
import logging
import os
import sys
from typing import Any, Optional

MARIENBAD_LOG_LEVEL = os.getenv("MARIENBAD_LOG_LEVEL", "WARNING")

HELP_TEXT = """Commands:
  r <group> <token>   take a token (1-based numbers)
  p                   end your turn
  restart             start over with the same groups
  q                   quit"""


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Marienbad - two-player Nim-style token game",
        prog="marienbad",
    )
    parser.add_argument(
        "--log-level",
        default=MARIENBAD_LOG_LEVEL,
        help="Logging level (DEBUG, INFO, WARNING, ...)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    play_parser = subparsers.add_parser("play", help="Play a hot-seat game")
    play_parser.add_argument("--groups", type=int, nargs="+", help="Token count per group")

    show_parser = subparsers.add_parser("show", help="Print the starting board")
    show_parser.add_argument("--groups", type=int, nargs="+", help="Token count per group")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        return cmd_play(args)
    elif args.command == "show":
        return cmd_show(args)
    parser.print_help()
    return 1


def parse_input(line: str) -> Optional[dict[str, Any]]:
    """
    Turn a line typed by the user into a command dict.

    Returns None for quit. Raises ValueError for anything unrecognised.
    """
    words = line.strip().lower().split()
    if not words:
        raise ValueError("empty command")
    head, rest = words[0], words[1:]

    if head in ("q", "quit", "exit"):
        return None
    if head in ("p", "pass", "end"):
        return {"type": "pass_turn"}
    if head == "restart":
        return {"type": "restart"}
    if head in ("r", "remove", "take"):
        if len(rest) != 2:
            raise ValueError("usage: r <group> <token>")
        try:
            group, item = (int(word) for word in rest)
        except ValueError:
            raise ValueError("group and token must be numbers") from None
        if group < 1 or item < 1:
            raise ValueError("group and token numbers start at 1")
        return {"type": "remove", "group": group - 1, "item": item - 1}
    raise ValueError(f"unknown command: {head}")


def render_snapshot(snapshot) -> str:
    """
    Text rendering of a GameSnapshot.

    o = present, . = removed, * marks the group locked this turn.
    """
    lines = [snapshot.status_text]
    for group in snapshot.groups:
        marker = "*" if group.locked else " "
        tokens = " ".join("." if token.removed else "o" for token in group.tokens)
        lines.append(f"{marker}{group.index + 1:>2}: {tokens}   ({group.remaining}/{group.size})")
    return "\n".join(lines)


def _start_session(args):
    """Create the service and a session. Bad group config becomes an ErrorResponse."""
    from .api import APIService, ErrorCode, ErrorResponse
    from .engine_core.validation import GroupSpecError

    try:
        service = APIService(default_groups=args.groups) if args.groups else APIService()
    except GroupSpecError as e:
        return None, ErrorResponse(error=str(e), error_code=ErrorCode.INVALID_SPEC)
    return service, service.create_session()


def cmd_show(args) -> int:
    """Print the starting board."""
    from .api import ErrorResponse

    service, response = _start_session(args)
    if isinstance(response, ErrorResponse):
        print(f"Error: {response.error}")
        return 1
    print(render_snapshot(response.snapshot))
    service.end_session(response.session_id)
    return 0


def cmd_play(args) -> int:
    """Run a hot-seat game until someone quits."""
    from .api import ErrorResponse

    service, response = _start_session(args)
    if isinstance(response, ErrorResponse):
        print(f"Error: {response.error}")
        return 1

    session_id = response.session_id
    snapshot = response.snapshot
    print(HELP_TEXT)

    while True:
        print()
        print(render_snapshot(snapshot))
        try:
            line = input("> ")
        except EOFError:
            break

        try:
            command = parse_input(line)
        except ValueError as e:
            print(f"Error: {e}")
            continue
        if command is None:
            break
        if command["type"] == "pass_turn" and not snapshot.can_pass:
            print("Game is over" if snapshot.game_over else "Take at least one token first")
            continue

        result = service.dispatch(session_id, command)
        if isinstance(result, ErrorResponse):
            print(f"Error: {result.error}")
            continue
        for change in result.state_changes:
            print(change)
        snapshot = result.snapshot

    service.end_session(session_id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
