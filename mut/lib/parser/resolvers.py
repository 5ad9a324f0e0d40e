"""
Token resolvers for brace interpolation.

Implements the resolution strategy used by the expansion: the inner text of
a ``{...}`` span is handed to an external ``%...%`` placeholder system.
"""

from typing import Callable, Self
from mut.lib.log import LOG
from mut.models.dataModel import ParseResult


class ExternalResolver:
    """Resolver that asks an external placeholder system for ``%token%``.

    The external system is any callable taking a text and returning it with
    its ``%...%`` placeholders replaced.
    """

    def __init__(self: Self, placeholders: Callable[[str], str]) -> None:
        """Initialize resolver with the external expand function."""
        self.placeholders: Callable[[str], str] = placeholders

    def resolve(self: Self, token_value: str) -> ParseResult:
        """Expand ``%token_value%`` through the external system.

        Args:
            token_value: Placeholder name without percent signs

        Returns:
            ParseResult containing the expansion or error details
        """
        try:
            text: str = self.placeholders(f"%{token_value}%")
        except Exception as e:
            msg: str = f"Placeholder system failed on %{token_value}%: {e}"
            LOG(msg)
            return ParseResult(text="", error=msg, success=False)

        if text is None:
            msg = f"Placeholder system returned nothing for %{token_value}%"
            LOG(msg)
            return ParseResult(text="", error=msg, success=False)

        return ParseResult(text=str(text), error=None, success=True)
