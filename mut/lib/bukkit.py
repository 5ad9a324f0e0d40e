"""
Handler for the ``bukkit`` selector.

Inventory and presence reads through the `Inventory` and `Presence`
protocols:

    bukkit.emptySlots            -> empty main-inventory slots
    bukkit.playerOnline.<name>   -> true | false
    bukkit.itemInHand            -> material name, AIR when empty
    bukkit.itemInHandName        -> localized name, else material, Air when empty
    bukkit.itemInHandCustomName  -> display name, else as itemInHandName
    bukkit.itemInHandAmount      -> stack size, 0 without an item
    bukkit.itemInHandEnchanted   -> true | false
"""

from typing import Optional
from mut.models.dataModel import Inventory, ItemSnapshot, PlayerContext, Presence
from mut.lib.handlers import ActionHandler
from mut.lib.log import LOG

EMPTY_HAND_NAME: str = "Air"


class BukkitHandler(ActionHandler):
    """
    Inventory and presence queries against the game server.

    Attributes:
        inventory: Inventory reads, None when unavailable
        presence: Online checks, None when unavailable
    """

    def __init__(
        self, inventory: Optional[Inventory], presence: Optional[Presence]
    ) -> None:
        super().__init__()
        self.inventory: Optional[Inventory] = inventory
        self.presence: Optional[Presence] = presence
        self.action_add("emptySlots", 2, self.slots_empty)
        self.action_add("playerOnline", 3, self.player_online)
        self.action_add("itemInHand", 2, self.item_material)
        self.action_add("itemInHandName", 2, self.item_localizedName)
        self.action_add("itemInHandCustomName", 2, self.item_displayName)
        self.action_add("itemInHandAmount", 2, self.item_amount)
        self.action_add("itemInHandEnchanted", 2, self.item_enchanted)

    def item_get(self, player: Optional[PlayerContext]) -> Optional[ItemSnapshot]:
        """The main-hand item, or None when it cannot be read."""
        if self.inventory is None or player is None:
            return None
        try:
            return self.inventory.main_hand_item(player.name)
        except Exception as e:
            LOG(f"Main hand read failed: {e}")
            return None

    def slots_empty(self, args: list[str], player: Optional[PlayerContext]) -> int:
        if self.inventory is None or player is None:
            return 0
        try:
            return self.inventory.empty_slot_count(player.name)
        except Exception as e:
            LOG(f"Inventory read failed: {e}")
            return 0

    def player_online(self, args: list[str], player: Optional[PlayerContext]) -> bool:
        if self.presence is None:
            return False
        try:
            return bool(self.presence.is_online(args[2]))
        except Exception as e:
            LOG(f"Presence check failed: {e}")
            return False

    def item_material(self, args: list[str], player: Optional[PlayerContext]) -> str:
        item: Optional[ItemSnapshot] = self.item_get(player)
        if item is None or item.is_empty:
            return "AIR"
        return item.material

    def item_localizedName(self, args: list[str], player: Optional[PlayerContext]) -> str:
        item: Optional[ItemSnapshot] = self.item_get(player)
        if item is None or item.is_empty:
            return EMPTY_HAND_NAME
        return item.localized_name or item.material

    def item_displayName(self, args: list[str], player: Optional[PlayerContext]) -> str:
        item: Optional[ItemSnapshot] = self.item_get(player)
        if item is None or item.is_empty:
            return EMPTY_HAND_NAME
        return item.display_name or item.localized_name or item.material

    def item_amount(self, args: list[str], player: Optional[PlayerContext]) -> int:
        item: Optional[ItemSnapshot] = self.item_get(player)
        return 0 if item is None else item.amount

    def item_enchanted(self, args: list[str], player: Optional[PlayerContext]) -> bool:
        item: Optional[ItemSnapshot] = self.item_get(player)
        if item is None or item.is_empty:
            return False
        return item.enchanted
