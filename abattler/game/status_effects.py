from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from abattler import colors
from abattler.events import (
    StatusEffectAppliedEvent,
    StatusEffectExpiredEvent,
    narrate,
    publish_event,
)
from abattler.game.enums import ElementalType
from abattler.types import TurnCount


@dataclass
class StatusEffect:
    """A named, duration-bounded modifier attached to a combatant.

    Attributes
    ----------
    name:
        Key of the effect on its owner. Applying an effect with the same name
        replaces the existing one instead of stacking.
    duration:
        Remaining number of **rounds**. Decremented once per round by
        :meth:`StatusEffectsComponent.tick`; the effect is removed when it
        reaches zero, so an effect applied with ``duration=3`` survives
        exactly three ticks.
    damage_multiplier:
        Applied to every hit the owner deals.
    defense_multiplier:
        Applied to damage the owner receives. Values below ``1.0`` mean the
        owner takes *less* damage (see the monster mitigation path).
    """

    name: str
    duration: TurnCount
    damage_multiplier: float = 1.0
    defense_multiplier: float = 1.0

    def describe(self) -> str:
        """Return e.g. ``"Burn (ATK x0.90) [3 turns]"``."""
        desc = self.name
        if self.damage_multiplier != 1.0:
            desc += f" (ATK x{self.damage_multiplier:.2f})"
        if self.defense_multiplier != 1.0:
            desc += f" (DEF x{self.defense_multiplier:.2f})"
        return f"{desc} [{self.duration} turns]"


class StatusEffectsComponent:
    """Keyed container for a combatant's active status effects.

    Effects iterate in insertion order. Replacing an effect keeps its original
    position, which keeps descriptions and multiplier products reproducible.
    """

    def __init__(self, owner_name: str) -> None:
        self.owner_name = owner_name
        self._effects: dict[str, StatusEffect] = {}

    def __iter__(self) -> Iterator[StatusEffect]:
        return iter(self._effects.values())

    def __len__(self) -> int:
        return len(self._effects)

    def __contains__(self, name: object) -> bool:
        return name in self._effects

    def get(self, name: str) -> StatusEffect | None:
        return self._effects.get(name)

    def apply(
        self,
        name: str,
        duration: TurnCount,
        damage_multiplier: float = 1.0,
        defense_multiplier: float = 1.0,
    ) -> StatusEffect:
        """Attach an effect, overwriting any effect with the same name."""
        effect = StatusEffect(name, duration, damage_multiplier, defense_multiplier)
        self._effects[name] = effect
        publish_event(StatusEffectAppliedEvent(self.owner_name, effect))
        narrate(f"{name} status effect applied!", colors.STATUS_APPLIED)
        return effect

    def tick(self) -> list[str]:
        """Advance every effect by one round and drop the expired ones.

        Returns:
            Names of the effects that expired, in iteration order.
        """
        expired: list[str] = []
        for name, effect in self._effects.items():
            effect.duration -= 1
            if effect.duration <= 0:
                expired.append(name)
        for name in expired:
            del self._effects[name]
            publish_event(StatusEffectExpiredEvent(self.owner_name, name))
            narrate(f"{name} effect has worn off!", colors.STATUS_EXPIRED)
        return expired

    def damage_multiplier(self) -> float:
        """Product of the damage multipliers of all active effects."""
        product = 1.0
        for effect in self._effects.values():
            product *= effect.damage_multiplier
        return product

    def defense_multiplier(self) -> float:
        """Product of the defense multipliers of all active effects."""
        product = 1.0
        for effect in self._effects.values():
            product *= effect.defense_multiplier
        return product

    def descriptions(self) -> Iterator[str]:
        """Lazily describe each active effect. Call again to restart."""
        return (effect.describe() for effect in self._effects.values())


@dataclass(frozen=True)
class Affliction:
    """Template for the status effect a monster's special move inflicts."""

    name: str
    duration: TurnCount
    damage_multiplier: float
    defense_multiplier: float

    def inflict(self, target: StatusEffectsComponent) -> StatusEffect:
        return target.apply(
            self.name, self.duration, self.damage_multiplier, self.defense_multiplier
        )


# Status effect inflicted by a special move, by attacker element. Normal
# attackers inflict nothing.
ELEMENTAL_AFFLICTIONS: dict[ElementalType, Affliction] = {
    ElementalType.FIRE: Affliction("Burn", 3, 0.9, 1.0),
    ElementalType.ICE: Affliction("Frozen", 2, 1.0, 0.8),
    ElementalType.POISON: Affliction("Poisoned", 4, 0.8, 0.9),
    ElementalType.UNDEAD: Affliction("Cursed", 3, 0.7, 0.7),
}
