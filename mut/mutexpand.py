"""
mut main module.

Command line entry point for the mut placeholder expansion. Outside a game
server, placeholders are served by a local table filled from the command
line, and ``%mut_...%`` requests by the expansion itself.

Features:
- Expands ``{name}`` spans and ``%name%`` placeholders in the given text
- Evaluates time differences, weekday names and expiry durations
- Supports stdin, a direct --eval string, and an interactive REPL

Examples:
    Single expansion:
        $ mut --eval 'Reset in %mut_diffDays.hour."00:00:00".true% hours'
        $ mut --eval '%mut_getTheWeek%'

    Nested placeholders:
        $ mut --define vip_expiry="1mo 2d" \\
              --eval '%mut_luckPermsExpiryTime."{vip_expiry}"%'

    Batch mode, one expansion per line:
        $ cat templates.txt | mut --player Steve

Note:
    Input priority order:
    1. stdin (if available)
    2. --eval argument (if provided)
    3. interactive REPL (default)
"""

import json
import sys
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace
from pathlib import Path
from typing import Final, Optional
from rich.markup import escape
from mut.config.settings import console
from mut.lib.input import Session, input_handle, input_readStdin, mode_detect
from mut.lib.placeholders import PlaceholderTable
from mut.lib.repl import repl_do
from mut.models.dataModel import InputMode, PlayerContext
from mut.lib.log import LOG

__version__: Final[str] = "1.0.0"

parser: Final[ArgumentParser] = ArgumentParser(
    prog="mut",
    description="Expand placeholder text with time, duration and player values.",
    formatter_class=ArgumentDefaultsHelpFormatter,
)
parser.add_argument("--eval", type=str, help="Text to expand (alternative to stdin)")
parser.add_argument("--player", type=str, help="Player name to evaluate for")
parser.add_argument("--address", type=str, help="Host address of the player")
parser.add_argument(
    "--define",
    action="append",
    default=[],
    metavar="KEY=VALUE",
    help="Define a static placeholder (repeatable)",
)
parser.add_argument(
    "--placeholders", type=Path, help="JSON file of static placeholder definitions"
)
parser.add_argument(
    "-V", "--version", action="version", version=f"%(prog)s {__version__}"
)


def definitions_build(options: Namespace) -> dict[str, str]:
    """Collect static placeholder definitions from the options.

    Definitions given with --define override those from --placeholders.

    Raises:
        ValueError: On a malformed definition or definitions file
    """
    definitions: dict[str, str] = {}
    if options.placeholders:
        with open(options.placeholders, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{options.placeholders} does not hold a JSON object")
        definitions.update({str(k): str(v) for k, v in data.items()})
    for definition in options.define:
        key, sep, value = definition.partition("=")
        if not sep or not key:
            raise ValueError(f"Definition must look like KEY=VALUE: {definition}")
        definitions[key] = value
    return definitions


def session_build(options: Namespace) -> Session:
    player: Optional[PlayerContext] = None
    if options.player:
        player = PlayerContext(name=options.player, address=options.address)
    return Session(table=PlaceholderTable(definitions_build(options)), player=player)


def run(options: Namespace) -> int:
    """Run the selected input mode.

    Returns:
        Process exit code
    """
    try:
        session: Session = session_build(options)
    except (OSError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        return 1

    mode: InputMode = mode_detect(options.eval)
    try:
        if mode.has_stdin:
            ok: bool = True
            for line in input_readStdin():
                ok = input_handle(line, session, non_interactive=True) and ok
            return 0 if ok else 1

        if mode.eval_string:
            return 0 if input_handle(mode.eval_string, session, non_interactive=True) else 1

        repl_do(session)
        return 0

    except Exception as e:
        LOG(f"Unhandled exception in run: {e}")
        console.print(f"[bold red]An unexpected error occurred: {escape(str(e))}[/bold red]")
        return 1


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the command line."""
    options: Namespace = parser.parse_args(argv)
    try:
        sys.exit(run(options))
    except KeyboardInterrupt:
        console.print("\n[bold cyan]Program interrupted by user. Exiting.[/bold cyan]")


if __name__ == "__main__":
    main()
