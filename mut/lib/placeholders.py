"""
A standalone ``%...%`` placeholder system.

Inside a game server the expansion is driven by the server's placeholder
plugin. Outside of it, `PlaceholderTable` plays that role: it expands
``%name%`` from static definitions and routes ``%<identifier>_<params>%`` to
registered expansions. Unknown placeholders are left as written.

Example:
    table = PlaceholderTable({"luckperms_expiry_time_vip": "1mo 2d"})
    table.register(Expansion())
    table.expand("Today is %mut_getTheWeek%")
"""

import re
from typing import Final, Optional, Protocol
from mut.models.dataModel import PlayerContext

_PERCENT_SPAN: Final[re.Pattern[str]] = re.compile(r"%([^%]+)%")


class Evaluator(Protocol):
    """Anything answering ``%<identifier>_<params>%`` requests."""

    identifier: str

    def evaluate(self, raw_args: str, player: Optional[PlayerContext] = None) -> str: ...


class PlaceholderTable:
    """
    Static definitions plus registered expansions.

    Attributes:
        definitions: Placeholder name to replacement text
        expansions: Lower-cased identifier to expansion
    """

    def __init__(self, definitions: Optional[dict[str, str]] = None) -> None:
        self.definitions: dict[str, str] = dict(definitions or {})
        self.expansions: dict[str, Evaluator] = {}

    def define(self, name: str, value: str) -> None:
        self.definitions[name] = value

    def register(self, expansion: Evaluator) -> None:
        self.expansions[expansion.identifier.lower()] = expansion

    def lookup(self, name: str, player: Optional[PlayerContext] = None) -> Optional[str]:
        """Value of a single placeholder name, None if nothing answers it."""
        if name in self.definitions:
            return self.definitions[name]
        identifier, sep, params = name.partition("_")
        expansion: Optional[Evaluator] = self.expansions.get(identifier.lower())
        if expansion is None or not sep:
            return None
        return expansion.evaluate(params, player)

    def expand(self, text: str, player: Optional[PlayerContext] = None) -> str:
        """Replace every known ``%name%`` in `text`, in a single pass."""

        def replace(match: re.Match[str]) -> str:
            value: Optional[str] = self.lookup(match.group(1), player)
            return match.group(0) if value is None else value

        return _PERCENT_SPAN.sub(replace, text)

    def __call__(self, text: str, player: Optional[PlayerContext] = None) -> str:
        return self.expand(text, player)
