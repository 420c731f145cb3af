"""Elemental effectiveness between attacker and defender types.

The table is asymmetric: Fire scorches Ice, but Ice attacks on Fire are
halved. Any pair not listed is neutral. The chart is an immutable value passed
to every combatant, so tests can substitute their own.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TypeAlias

from abattler.game.enums import ElementalType

ElementPair: TypeAlias = tuple[ElementalType, ElementalType]

NEUTRAL_MULTIPLIER = 1.0


@dataclass(frozen=True)
class ElementChart:
    """Attacker type -> defender type -> damage multiplier."""

    multipliers: Mapping[ElementPair, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze the caller's mapping so the chart can be shared freely.
        object.__setattr__(
            self, "multipliers", MappingProxyType(dict(self.multipliers))
        )

    def effectiveness(
        self, attacker: ElementalType, defender: ElementalType
    ) -> float:
        return self.multipliers.get((attacker, defender), NEUTRAL_MULTIPLIER)


DEFAULT_ELEMENT_CHART = ElementChart(
    {
        (ElementalType.FIRE, ElementalType.ICE): 1.5,
        (ElementalType.ICE, ElementalType.FIRE): 0.5,
        (ElementalType.POISON, ElementalType.UNDEAD): 0.5,
        (ElementalType.FIRE, ElementalType.UNDEAD): 1.25,
        (ElementalType.ICE, ElementalType.POISON): 1.25,
    }
)


def effectiveness_message(multiplier: float) -> str | None:
    """Narration for a non-neutral multiplier, ``None`` when neutral."""
    if multiplier > NEUTRAL_MULTIPLIER:
        return f"It's super effective! (x{multiplier:g})"
    if multiplier < NEUTRAL_MULTIPLIER:
        return f"It's not very effective... (x{multiplier:g})"
    return None
