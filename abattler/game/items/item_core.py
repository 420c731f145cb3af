from __future__ import annotations

from dataclasses import dataclass, replace

from abattler.types import HitPoints, TurnCount


@dataclass(frozen=True)
class ItemType:
    """Immutable template for a consumable item.

    ``duration == 0`` marks an instant item: its heal is applied on use and it
    never becomes an active effect. Items with a duration are added to the
    hero's active effects and heal/buff once per round until they run out.

    The buff multipliers use ``1.0`` as "no buff". ``attack_buff`` multiplies
    outgoing damage; ``defense_buff`` enters incoming damage as
    ``(2.0 - defense_buff)``.
    """

    name: str
    description: str
    duration: TurnCount = 0
    heal_amount: HitPoints = 0.0
    attack_buff: float = 1.0
    defense_buff: float = 1.0
    quantity: int = 1

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise ValueError(f"{self.name}: quantity cannot be negative")
        if self.duration < 0:
            raise ValueError(f"{self.name}: duration cannot be negative")

    @property
    def is_instant(self) -> bool:
        return self.duration == 0

    def with_quantity(self, quantity: int) -> ItemType:
        """Return a copy of this template carrying ``quantity`` units."""
        return replace(self, quantity=quantity)


@dataclass
class InventorySlot:
    """One line of the hero's inventory: a template and how many are left."""

    item_type: ItemType
    quantity: int

    @property
    def name(self) -> str:
        return self.item_type.name

    @property
    def available(self) -> bool:
        return self.quantity > 0

    def describe(self) -> str:
        desc = f"{self.item_type.name}: {self.item_type.description}"
        if self.quantity > 0:
            desc += f" (x{self.quantity})"
        return desc


@dataclass(eq=False)
class ActiveItemEffect:
    """A used item that is still healing or buffing the hero."""

    item_type: ItemType
    remaining: TurnCount

    @classmethod
    def start(cls, item_type: ItemType) -> ActiveItemEffect:
        return cls(item_type, item_type.duration)

    @property
    def name(self) -> str:
        return self.item_type.name

    def describe(self) -> str:
        return f"{self.item_type.name} ({self.remaining} turns remaining)"
