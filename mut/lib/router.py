"""
Selector routing and dispatch for the mut expansion.

Placeholder parameters are split into an argument list whose first element
is the selector (``diffDays``, ``authMe`` ...). This module maps selectors,
case-insensitively, to handlers:

- Registration of selector handlers
- Dispatch of an argument list to its handler
- An explicit outcome for unknown selectors and missing arguments

Example flow:
    ["diffWeeks", "hour", "18:00:00", "5"] -> DiffWeeksHandler.handle(...)
    ["nope"]                                -> Outcome.UNKNOWN_SELECTOR
"""

from typing import Optional, Protocol
from mut.models.dataModel import EvalResult, Outcome, PlayerContext
from mut.lib.log import LOG


class RouteHandler(Protocol):
    """Protocol for selector handlers.

    Attributes:
        min_args: Arguments required, selector included
    """

    min_args: int

    def handle(self, args: list[str], player: Optional[PlayerContext]) -> EvalResult:
        """Serve a request whose argument count is at least `min_args`."""
        ...


class Router:
    def __init__(self) -> None:
        """Initialize empty route registry."""
        self._routes: dict[str, RouteHandler] = {}

    def register(self, selector: str, handler: RouteHandler) -> None:
        """Register handler for a selector.

        Args:
            selector: Selector name, case-insensitive
            handler: Handler instance for the selector

        Raises:
            ValueError: If the selector is already registered
        """
        key: str = selector.upper()
        if key in self._routes:
            raise ValueError(f"Handler already registered for {selector}")
        self._routes[key] = handler

    def selectors(self) -> list[str]:
        return sorted(self._routes)

    def dispatch(self, args: list[str], player: Optional[PlayerContext] = None) -> EvalResult:
        """Dispatch an argument list to the handler of its selector.

        Args:
            args: Split arguments, selector first
            player: Identity the request is made for

        Returns:
            The handler's result, or an unknown-selector or
            insufficient-arguments outcome
        """
        if not args:
            return EvalResult(outcome=Outcome.UNKNOWN_SELECTOR)

        handler: Optional[RouteHandler] = self._routes.get(args[0].upper())
        if handler is None:
            LOG(f"No handler for selector {args[0]}")
            return EvalResult(outcome=Outcome.UNKNOWN_SELECTOR)

        if len(args) < handler.min_args:
            LOG(f"{args[0]} needs {handler.min_args} arguments, got {len(args)}")
            return EvalResult(outcome=Outcome.INSUFFICIENT_ARGS)

        return handler.handle(args, player)
