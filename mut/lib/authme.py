"""
Handler for the ``authMe`` selector.

Reads registration data from the authentication plugin through the
`AuthRegistry` protocol. Every lookup degrades to a sentinel instead of
raising:

    authMe.registered                   -> true | false
    authMe.getUserCountByIp             -> names sharing the address (1 if none, 0 on failure)
    authMe.registrationDate."<pattern>" -> formatted date | null
    authMe.registrationDiffDate.<unit>  -> elapsed units | -1
    authMe.listNameByIp."<separator>"   -> joined names | own name
"""

from typing import Optional
from mut.models.dataModel import AuthRegistry, PlayerContext, RegistrationRecord
from mut.lib.datefmt import datetime_formatPattern
from mut.lib.handlers import ActionHandler
from mut.lib.timediff import TimeDiff
from mut.lib.log import LOG


class AuthMeHandler(ActionHandler):
    """
    Registration queries against the auth plugin.

    Attributes:
        registry: The auth plugin lookups, None when the plugin is absent
        timediff: Engine used for elapsed-time queries
        null_text: Reply for absent date records
    """

    def __init__(
        self,
        registry: Optional[AuthRegistry],
        timediff: TimeDiff,
        null_text: str = "null",
    ) -> None:
        super().__init__()
        self.registry: Optional[AuthRegistry] = registry
        self.timediff: TimeDiff = timediff
        self.null_text: str = null_text
        self.action_add("registered", 2, self.registered)
        self.action_add("getUserCountByIp", 2, self.userCount_byAddress)
        self.action_add("registrationDate", 3, self.registrationDate_format)
        self.action_add("registrationDiffDate", 3, self.registration_since)
        self.action_add("listNameByIp", 3, self.names_byAddress)

    def record_get(self, player: Optional[PlayerContext]) -> Optional[RegistrationRecord]:
        if self.registry is None or player is None:
            return None
        return self.registry.registration_info(player.name)

    def addressNames_get(self, player: PlayerContext) -> list[str]:
        if self.registry is None or player.address is None:
            raise LookupError(f"No address lookup available for {player.name}")
        return list(self.registry.names_by_address(player.address) or [])

    def registered(self, args: list[str], player: Optional[PlayerContext]) -> bool:
        if self.registry is None or player is None:
            return False
        try:
            return bool(self.registry.is_registered(player.name))
        except Exception as e:
            LOG(f"Registration check failed: {e}")
            return False

    def userCount_byAddress(self, args: list[str], player: Optional[PlayerContext]) -> int:
        if player is None:
            return 0
        try:
            names: list[str] = self.addressNames_get(player)
        except Exception as e:
            LOG(f"Address lookup failed: {e}")
            return 0
        return len(names) if names else 1

    def registrationDate_format(self, args: list[str], player: Optional[PlayerContext]) -> str:
        try:
            record: Optional[RegistrationRecord] = self.record_get(player)
            if record is None:
                return self.null_text
            return datetime_formatPattern(record.registered_at, args[2])
        except Exception as e:
            LOG(f"Registration date unavailable: {e}")
            return self.null_text

    def registration_since(self, args: list[str], player: Optional[PlayerContext]) -> int:
        try:
            record: Optional[RegistrationRecord] = self.record_get(player)
            if record is None:
                return -1
            return self.timediff.since(record.registered_at, args[2])
        except Exception as e:
            LOG(f"Registration age unavailable: {e}")
            return -1

    def names_byAddress(self, args: list[str], player: Optional[PlayerContext]) -> str:
        if player is None:
            return self.null_text
        try:
            names: list[str] = self.addressNames_get(player)
        except Exception as e:
            LOG(f"Address lookup failed: {e}")
            return player.name
        return args[2].join(names) if names else player.name
