"""
REPL implementation for the mut command line.

This module provides the REPL (Read-Eval-Print Loop) interface, managing:
- Prompting with persistent history
- Input processing
- Output display
- Error handling
"""

from pathlib import Path
from typing import Final, Optional
from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory
from mut.config.settings import CONFIG_DIR, console
from mut.lib.input import Session, input_handle
from mut.models.dataModel import InputResult
from mut.lib.log import LOG

HISTORY_FILE: Final[Path] = CONFIG_DIR / "history"


def prompt_sessionGet() -> PromptSession:
    """Prompt session with file history, in-memory if the file is unusable."""
    try:
        HISTORY_FILE.parent.mkdir(parents=True, exist_ok=True)
        return PromptSession(history=FileHistory(str(HISTORY_FILE)), enable_history_search=True)
    except OSError as e:
        LOG(f"History unavailable: {e}")
        return PromptSession()


def input_get(prompt_session: PromptSession, session: Session) -> InputResult:
    """Read one line of input.

    Returns:
        InputResult; `continue_loop` is False on end of input
    """
    who: str = session.player.name if session.player else "mut"
    try:
        text: str = prompt_session.prompt(f"{who}> ")
        return InputResult(text=text.strip(), continue_loop=True)
    except EOFError:
        return InputResult(text="", continue_loop=False, error="End of input")


def repl_do(session: Session, prompt_session: Optional[PromptSession] = None) -> None:
    """Main REPL entry point.

    Exits on:
    - /exit command
    - End of input (Ctrl-D)
    - Critical errors
    """
    console.print(
        """
        [cyan]Placeholder expansion REPL.
        [green]Type [white]/exit[green] to quit.
        [green]Use [white]/help[green] for command list.
        """
    )
    if prompt_session is None:
        prompt_session = prompt_sessionGet()

    continue_repl: bool = True
    while continue_repl:
        try:
            input_result: InputResult = input_get(prompt_session, session)

            if not input_result.continue_loop:
                break

            if not input_result.text:
                continue

            continue_repl = input_handle(input_result.text, session, non_interactive=False)

        except KeyboardInterrupt:
            console.print("\n[bold yellow]Use '/exit' to quit properly[/bold yellow]")
        except Exception as e:
            LOG(f"REPL critical error: {e}")
            console.print(f"[bold red]Fatal error: {e}[/bold red]")
            continue_repl = False

    console.print("[bold cyan]REPL session terminated[/bold cyan]")
