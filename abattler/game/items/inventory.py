from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from abattler import colors
from abattler.constants.combat import CombatConstants as Combat
from abattler.events import ItemEffectExpiredEvent, narrate, publish_event
from abattler.game.items.item_core import ActiveItemEffect, InventorySlot, ItemType

if TYPE_CHECKING:
    from abattler.game.actors.hero import Hero

logger = logging.getLogger(__name__)


class InventoryComponent:
    """The hero's consumables and the item effects currently ticking on them.

    Slots are never removed: a slot whose quantity drops to zero stays in
    place and is simply left out of :meth:`available_slots`, so raw slot
    indices remain stable for the whole session.
    """

    def __init__(self, owner: Hero) -> None:
        self.owner = owner
        self.slots: list[InventorySlot] = []
        self.active_effects: list[ActiveItemEffect] = []

    def __iter__(self) -> Iterator[InventorySlot]:
        return iter(self.slots)

    def __len__(self) -> int:
        return len(self.slots)

    def add_item(self, item: ItemType) -> None:
        """Add ``item.quantity`` units, merging into a slot with the same name."""
        for slot in self.slots:
            if slot.name == item.name:
                slot.quantity += item.quantity
                break
        else:
            self.slots.append(InventorySlot(item, item.quantity))
        narrate(f"Added {item.name} to inventory.", colors.ITEM)

    def available_slots(self) -> list[tuple[int, InventorySlot]]:
        """``(raw_index, slot)`` pairs for every slot with quantity left."""
        return [(i, slot) for i, slot in enumerate(self.slots) if slot.available]

    def use_item(self, index: int) -> bool:
        """Consume one unit of the item in slot ``index``.

        An instant item heals now. An item with a duration starts a new active
        effect, independent of any running instance of the same item.

        Returns:
            ``False`` (and nothing changes) when the index is out of range or
            the slot is empty.
        """
        if not 0 <= index < len(self.slots):
            narrate("Invalid item choice!", colors.BLOCK_FAILED)
            return False

        slot = self.slots[index]
        if slot.quantity <= 0:
            narrate(f"No more {slot.name} remaining!", colors.BLOCK_FAILED)
            return False

        item = slot.item_type
        narrate(f"Used {item.name}!", colors.ITEM)

        if item.is_instant and item.heal_amount > 0:
            healed = self.owner.heal(item.heal_amount)
            narrate(f"Healed for {healed:g} HP!", colors.HEAL)

        if not item.is_instant:
            self.active_effects.append(ActiveItemEffect.start(item))
            narrate(f"Effect will last for {item.duration} turns.", colors.ITEM)

        slot.quantity -= 1
        logger.debug(f"{self.owner.name} used {item.name}, {slot.quantity} left")
        return True

    def tick_active_effects(self) -> list[str]:
        """Apply heal-over-time and count every active item effect down.

        Returns:
            Names of the effects that expired, in list order.
        """
        expired: list[ActiveItemEffect] = []
        for effect in self.active_effects:
            if effect.item_type.heal_amount > 0:
                healed = self.owner.heal(effect.item_type.heal_amount)
                narrate(f"{effect.name} healed for {healed:g} HP!", colors.HEAL)
            effect.remaining -= 1
            if effect.remaining <= 0:
                expired.append(effect)

        if expired:
            self.active_effects = [e for e in self.active_effects if e not in expired]
        for effect in expired:
            publish_event(ItemEffectExpiredEvent(self.owner.name, effect.name))
            narrate(f"{effect.name} effect has worn off!", colors.STATUS_EXPIRED)
        return [effect.name for effect in expired]

    def attack_multiplier(self) -> float:
        """Product of ``attack_buff`` over all active item effects."""
        product = 1.0
        for effect in self.active_effects:
            product *= effect.item_type.attack_buff
        return product

    def defense_factor(self) -> float:
        """Factor applied to incoming damage: product of ``2.0 - defense_buff``."""
        product = 1.0
        for effect in self.active_effects:
            product *= Combat.DEFENSE_BUFF_PIVOT - effect.item_type.defense_buff
        return product

    def quantity_of(self, name: str) -> int:
        for slot in self.slots:
            if slot.name == name:
                return slot.quantity
        return 0

    def inventory_descriptions(self) -> list[str]:
        return [slot.describe() for _, slot in self.available_slots()]

    def active_effect_descriptions(self) -> list[str]:
        return [effect.describe() for effect in self.active_effects]
