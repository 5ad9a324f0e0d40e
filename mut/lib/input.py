"""
Input handling and processing for the mut command line.

This module turns a line of text into its expanded form and prints it.

The module handles:
- Input mode detection (stdin, --eval, REPL)
- Brace interpolation of ``{...}`` spans
- Expansion of ``%...%`` placeholders, including ``%mut_...%``
- REPL commands (``/exit``, ``/help``, ``/player``, ``/define``)

Processing order:
1. Leading backslash: the rest of the line is printed as is
2. Commands (lines starting with '/')
3. Brace interpolation
4. Percent placeholder expansion
"""

import shlex
import sys
from functools import partial
from typing import Final, Optional
from rich.markup import escape
from mut.config.settings import console
from mut.lib.expansion import Expansion
from mut.lib.parser import BraceTokenParser, ExternalResolver
from mut.lib.placeholders import PlaceholderTable
from mut.models.dataModel import InputMode, ParseResult, PlayerContext, ProcessResult
from mut.lib.log import LOG

HELP_TEXT: Final[str] = """[bold cyan]Expand placeholder text.[/bold cyan]

[bold yellow]Input:[/bold yellow]
    [green]{name}[/green]       resolved as %name%, innermost first
    [green]%mut_...%[/green]    evaluated by the expansion, e.g. %mut_getTheWeek%
    [green]\\{ \\}[/green]        literal braces

[bold yellow]Commands:[/bold yellow]
    [green]/player NAME [ADDRESS][/green]  evaluate for a player
    [green]/define KEY VALUE[/green]       define a static placeholder
    [green]/help[/green]                   show this help
    [green]/exit[/green]                   quit
"""


class Session:
    """
    State shared by every line of input.

    Attributes:
        table: The placeholder system
        expansion: The registered mut expansion
        player: Identity lines are evaluated for
    """

    def __init__(
        self,
        table: Optional[PlaceholderTable] = None,
        expansion: Optional[Expansion] = None,
        player: Optional[PlayerContext] = None,
    ) -> None:
        self.table: PlaceholderTable = table if table is not None else PlaceholderTable()
        self.expansion: Expansion = (
            expansion if expansion is not None else Expansion(placeholders=self.table)
        )
        self.table.register(self.expansion)
        self.player: Optional[PlayerContext] = player

    def parser_get(self) -> BraceTokenParser:
        return BraceTokenParser(
            resolver=ExternalResolver(partial(self.table.expand, player=self.player))
        )


def mode_detect(eval_string: str | None = None) -> InputMode:
    """Detect the appropriate input mode.

    Args:
        eval_string: Optional text given on the command line

    Returns:
        InputMode indicating how to handle input

    Note:
        Priority order:
        1. Stdin content
        2. Eval string
        3. REPL mode
    """
    try:
        if not sys.stdin.isatty():
            return InputMode(has_stdin=True, eval_string=None, use_repl=False)
        if eval_string:
            return InputMode(has_stdin=False, eval_string=eval_string, use_repl=False)
        return InputMode(has_stdin=False, eval_string=None, use_repl=True)

    except Exception as e:
        LOG(f"Error detecting input mode: {e}")
        return InputMode(has_stdin=False, eval_string=None, use_repl=True)


def input_readStdin() -> list[str]:
    """Read the non-empty lines from stdin.

    Raises:
        IOError: If stdin read fails or holds nothing
    """
    try:
        lines: list[str] = [line.strip() for line in sys.stdin.read().splitlines()]
    except Exception as e:
        LOG(f"Error reading from stdin: {e}")
        raise IOError(f"Failed to read from stdin: {e}")
    lines = [line for line in lines if line]
    if not lines:
        raise IOError("Empty input from stdin")
    return lines


def command_process(text: str, session: Session) -> ProcessResult:
    """Handle a line starting with '/'.

    Args:
        text: The command line, slash included
        session: Session to update

    Returns:
        ProcessResult with the command's reply
    """
    try:
        parts: list[str] = shlex.split(text[1:])
    except ValueError as e:
        LOG(f"Error parsing command: {e}")
        return ProcessResult(
            text="", is_command=True, should_exit=False, error=str(e), success=False, exit_code=1
        )

    command: str = parts[0].lower() if parts else ""
    args: list[str] = parts[1:]

    if command == "exit":
        return ProcessResult(text="", is_command=True, should_exit=True)
    if command == "help":
        return ProcessResult(text=HELP_TEXT, is_command=True, should_exit=False)
    if command == "player" and 1 <= len(args) <= 2:
        session.player = PlayerContext(name=args[0], address=args[1] if len(args) > 1 else None)
        return ProcessResult(
            text=f"Evaluating for [green]{args[0]}[/green]", is_command=True, should_exit=False
        )
    if command == "define" and len(args) == 2:
        session.table.define(args[0], args[1])
        return ProcessResult(
            text=f"Defined [green]%{args[0]}%[/green]", is_command=True, should_exit=False
        )

    return ProcessResult(
        text="",
        is_command=True,
        should_exit=False,
        error=f"Unknown command or arguments: {text}",
        success=False,
        exit_code=1,
    )


def input_process(text: str, session: Session) -> ProcessResult:
    """Process any type of input (commands or placeholder text).

    Args:
        text: Raw input text to process
        session: Session the input belongs to

    Returns:
        ProcessResult containing the expanded text or command status
    """
    try:
        if text.startswith("\\"):
            return ProcessResult(text=text[1:], is_command=False, should_exit=False)

        if text.startswith("/"):
            return command_process(text, session)

        parsed: ParseResult = session.parser_get().parse(text)
        if not parsed.success:
            return ProcessResult(
                text="",
                is_command=False,
                should_exit=False,
                error=parsed.error,
                success=False,
                exit_code=1,
            )

        return ProcessResult(
            text=session.table.expand(parsed.text, session.player),
            is_command=False,
            should_exit=False,
        )

    except Exception as e:
        LOG(f"Error processing input: {e}")
        return ProcessResult(
            text="",
            is_command=False,
            should_exit=True,
            error=str(e),
            success=False,
            exit_code=1,
        )


def input_handle(text: str, session: Session, non_interactive: bool = False) -> bool:
    """Handle input processing and return whether to continue.

    Returns:
        bool: True to keep reading input, False to stop
    """
    process_result: ProcessResult = input_process(text, session)
    if not process_result.success:
        console.print(f"[bold red]Error: {escape(str(process_result.error))}[/bold red]")
        return not (non_interactive or process_result.should_exit)

    if process_result.is_command:
        if process_result.text:
            console.print(process_result.text)
        if process_result.should_exit:
            console.print("[bold cyan]Exiting.[/bold cyan]")
            return False
        return True

    console.print(process_result.text, markup=False, highlight=False)
    return True
