"""
The mut placeholder expansion.

Ties the pieces together: a raw parameter string is split into arguments,
dispatched by selector through the `Router`, and the outcome rendered as
text. Unknown selectors and missing arguments reply with the configured
unsupported-parameter message; nothing raises to the caller.

External systems are injected, so the expansion runs without a game server:

    expansion = Expansion(clock=my_clock, registry=my_auth)
    expansion.evaluate('diffDays.hour."08:00:00".true')
    expansion.evaluate("getTheWeek")
"""

from typing import Optional
from mut.config.settings import appsettings
from mut.models.dataModel import (
    AuthRegistry,
    Clock,
    EvalResult,
    Inventory,
    PlayerContext,
    Presence,
)
from mut.lib.authme import AuthMeHandler
from mut.lib.bukkit import BukkitHandler
from mut.lib.handlers import (
    DiffDaysHandler,
    DiffMonthsHandler,
    DiffWeeksHandler,
    ExpiryHandler,
    Placeholders,
    WeekdayHandler,
)
from mut.lib.router import Router
from mut.lib.splitter import args_split
from mut.lib.timediff import TimeDiff
from mut.lib.log import LOG


def placeholders_none(text: str, player: Optional[PlayerContext] = None) -> str:
    """Stand-in for an absent placeholder system: leaves text as written."""
    return text


class Expansion:
    """
    Evaluator for ``%mut_<params>%`` requests.

    Attributes:
        identifier: Prefix the expansion answers to
        router: Selector registry
        unsupported: Reply for unknown selectors or missing arguments
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        placeholders: Optional[Placeholders] = None,
        registry: Optional[AuthRegistry] = None,
        inventory: Optional[Inventory] = None,
        presence: Optional[Presence] = None,
    ) -> None:
        """Build the expansion and register every selector.

        Args:
            clock: Current local time source (system clock when None)
            placeholders: External ``%...%`` expander called as
                ``placeholders(text, player=...)``
            registry: Auth plugin lookups
            inventory: Inventory reads
            presence: Online checks
        """
        self.identifier: str = appsettings.identifier
        self.unsupported: str = appsettings.unsupportedMessage
        self.timediff: TimeDiff = TimeDiff(clock)
        self.router: Router = Router()

        self.router.register("diffDays", DiffDaysHandler(self.timediff))
        self.router.register("diffWeeks", DiffWeeksHandler(self.timediff))
        self.router.register("diffMonths", DiffMonthsHandler(self.timediff))
        self.router.register("getTheWeek", WeekdayHandler(self.timediff))
        self.router.register(
            "luckPermsExpiryTime", ExpiryHandler(placeholders or placeholders_none)
        )
        self.router.register(
            "authMe", AuthMeHandler(registry, self.timediff, appsettings.nullText)
        )
        self.router.register("bukkit", BukkitHandler(inventory, presence))

    def dispatch(self, raw_args: str, player: Optional[PlayerContext] = None) -> EvalResult:
        """Split and dispatch, reporting the outcome."""
        return self.router.dispatch(args_split(raw_args), player)

    def evaluate(self, raw_args: str, player: Optional[PlayerContext] = None) -> str:
        """Evaluate a raw parameter string.

        Args:
            raw_args: Parameters after the ``mut_`` prefix,
                e.g. ``diffWeeks.minute."18:00:00".5``
            player: Identity the request is made for

        Returns:
            The reply text, or the unsupported-parameter message
        """
        try:
            result: EvalResult = self.dispatch(raw_args, player)
        except Exception as e:
            LOG(f"Evaluation of '{raw_args}' failed: {e}")
            return self.unsupported
        return result.text if result.success else self.unsupported
