"""
dataModel.py

This module defines the data models, enums and collaborator protocols used
throughout the mut expansion. Records leverage Pydantic for validation.

Features:
- Time units with their (approximate) length in milliseconds
- Parsing and dispatch results
- Player identity and records returned by external collaborators
- Protocols for the clock and for the auth, inventory and presence systems

Usage:
Import these models to validate and structure data used in the application.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Protocol
from pydantic import BaseModel, ConfigDict, Field

MILLIS_PER_DAY: int = 1000 * 60 * 60 * 24


class TimeUnit(Enum):
    """
    Units a duration can be reported in, valued by their length in
    milliseconds. MONTH and YEAR are fixed 30 and 365 day buckets.
    """

    MILLI = 1
    SECOND = 1000
    MINUTE = 1000 * 60
    HOUR = 1000 * 60 * 60
    DAY = MILLIS_PER_DAY
    MONTH = MILLIS_PER_DAY * 30
    YEAR = MILLIS_PER_DAY * 365

    @classmethod
    def lookup(cls, token: str) -> Optional["TimeUnit"]:
        """Case-insensitive lookup; None for unknown tokens."""
        return cls.__members__.get(token.strip().upper())


class DurationToken(BaseModel):
    """A single `<number><unit>` pair found in a duration string.

    Attributes:
        value: The numeric part
        unit: One of y, mo, w, d, h, m, s
    """

    value: int
    unit: str

    model_config = ConfigDict(frozen=True)


class ParseResult(BaseModel):
    """Result of token parsing operation.

    Attributes:
        text: The processed text after substitutions
        error: Optional error message if parsing failed
        success: Whether parsing succeeded
    """

    text: str
    error: str | None
    success: bool


class Outcome(Enum):
    """
    How a dispatch request ended.
    """

    OK = "ok"
    INSUFFICIENT_ARGS = "insufficient_args"
    UNKNOWN_SELECTOR = "unknown_selector"


class EvalResult(BaseModel):
    """Result of dispatching an argument list to a handler.

    Attributes:
        text: The reply text (empty unless outcome is OK)
        outcome: Whether the request was served
    """

    text: str = ""
    outcome: Outcome = Outcome.OK

    @property
    def success(self) -> bool:
        return self.outcome == Outcome.OK


class PlayerContext(BaseModel):
    """
    The identity a placeholder request is evaluated for.

    Attributes:
        name (str): Player name, used as the key for every lookup.
        address (Optional[str]): Host address the player connected from.
    """

    name: str = Field(..., description="Player name.")
    address: Optional[str] = Field(
        default=None, description="Host address the player connected from."
    )


class RegistrationRecord(BaseModel):
    """
    Registration details held by the auth system.

    Attributes:
        registered_at (datetime): Local time of registration.
    """

    registered_at: datetime


class ItemSnapshot(BaseModel):
    """
    The item stack held in a player's main hand.

    Attributes:
        material (str): Material name, "AIR" for an empty hand.
        amount (int): Stack size.
        localized_name (Optional[str]): Localized name from the item meta.
        display_name (Optional[str]): Custom display name from the item meta.
        enchanted (bool): Whether the stack carries any enchantment.
    """

    material: str = "AIR"
    amount: int = 0
    localized_name: Optional[str] = None
    display_name: Optional[str] = None
    enchanted: bool = False

    @property
    def is_empty(self) -> bool:
        return self.material.upper() == "AIR"


class Clock(Protocol):
    """Source of the current local date-time."""

    def now(self) -> datetime: ...


class AuthRegistry(Protocol):
    """Protocol for the authentication plugin lookups.

    Note:
        Implementations may raise; callers convert failures to sentinels.
    """

    def registration_info(self, name: str) -> Optional[RegistrationRecord]: ...

    def is_registered(self, name: str) -> bool: ...

    def names_by_address(self, address: str) -> list[str]: ...


class Inventory(Protocol):
    """Protocol for inventory reads."""

    def main_hand_item(self, name: str) -> Optional[ItemSnapshot]: ...

    def empty_slot_count(self, name: str) -> int:
        """Empty slots in the 36-slot main inventory (armor and offhand excluded)."""
        ...


class Presence(Protocol):
    """Protocol for online-player checks."""

    def is_online(self, name: str) -> bool: ...


class ProcessResult(BaseModel):
    """Result of command/input processing.

    Attributes:
        text: Processed output text or command output
        is_command: Whether input was a command
        should_exit: Whether to exit processing
        error: Optional error message
        success: Whether processing succeeded
        exit_code: Exit code for non-interactive mode
    """

    text: str
    is_command: bool
    should_exit: bool
    error: str | None = None
    success: bool = True
    exit_code: int = 0


class InputResult(BaseModel):
    """Result of input collection operation.

    Attributes:
        text: The collected input text
        continue_loop: Whether to continue processing
        error: Optional error message if input collection failed
    """

    text: str
    continue_loop: bool
    error: str | None = None


class InputMode(BaseModel):
    """Input mode determination.

    Attributes:
        has_stdin: Whether stdin has content
        eval_string: Text given with --eval
        use_repl: Whether to use interactive REPL
    """

    has_stdin: bool = False
    eval_string: str | None = None
    use_repl: bool = True
