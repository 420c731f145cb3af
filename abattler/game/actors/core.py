"""Shared combatant state and the damage rules common to monsters and heroes.

Monsters and the hero do not share behaviour through inheritance. Both carry
the same :class:`CombatantState` fields and both satisfy the
:class:`Combatant` protocol; the parts of the damage model they have in
common are free functions here that each variant calls into.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from abattler import colors
from abattler.constants.combat import CombatConstants as Combat
from abattler.events import CombatantDefeatedEvent, narrate, publish_event
from abattler.game.elements import (
    DEFAULT_ELEMENT_CHART,
    ElementChart,
    effectiveness_message,
)
from abattler.game.enums import ElementalType
from abattler.game.status_effects import StatusEffectsComponent
from abattler.types import HitPoints
from abattler.util.rng import RNG

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpecialMove:
    name: str
    multiplier: float


@dataclass(frozen=True)
class MoveResult:
    """What a special move did.

    ``name`` is ``None`` when the move could not be performed; ``failure``
    then says why and no damage was dealt.
    """

    name: str | None
    damage: HitPoints = 0.0
    failure: str | None = None

    @property
    def performed(self) -> bool:
        return self.name is not None

    @classmethod
    def failed(cls, reason: str) -> MoveResult:
        return cls(name=None, failure=reason)


class Combatant(Protocol):
    """Capabilities the battle engine needs from either side of a fight."""

    name: str
    hp: HitPoints
    max_hp: HitPoints
    attack_power: float
    level: int
    element: ElementalType
    combo_points: int
    status_effects: StatusEffectsComponent

    @property
    def is_alive(self) -> bool: ...

    def calculate_outgoing_damage(
        self, base_damage: float, target_element: ElementalType
    ) -> HitPoints: ...

    def receive_damage(self, raw_damage: HitPoints) -> HitPoints: ...

    def reset_combo(self) -> None: ...


@dataclass(eq=False, kw_only=True)
class CombatantState:
    """Stats and per-fight state carried by every combatant.

    ``hp`` starts at ``max_hp``. It is kept in ``[0, max_hp]``: damage is
    clamped at zero and healing at the maximum.
    """

    name: str
    max_hp: HitPoints
    attack_power: float
    rng: RNG
    level: int = 1
    element: ElementalType = ElementalType.NORMAL
    special_moves: tuple[SpecialMove, ...] = ()
    combo_points: int = 0
    chart: ElementChart = DEFAULT_ELEMENT_CHART
    hp: HitPoints = field(init=False)
    status_effects: StatusEffectsComponent = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.level < 1:
            raise ValueError(f"{self.name}: level must be at least 1")
        self.hp = self.max_hp
        self.status_effects = StatusEffectsComponent(self.name)

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    def heal(self, amount: HitPoints) -> HitPoints:
        """Restore HP up to ``max_hp``. Returns the amount actually gained."""
        old_hp = self.hp
        self.hp = min(self.hp + amount, self.max_hp)
        return self.hp - old_hp

    def reset_combo(self) -> None:
        self.combo_points = 0


def base_outgoing_damage(
    attacker: CombatantState, base_damage: float, target_element: ElementalType
) -> HitPoints:
    """Scale ``base_damage`` by element effectiveness and the attacker's effects."""
    element_multiplier = attacker.chart.effectiveness(attacker.element, target_element)
    if message := effectiveness_message(element_multiplier):
        narrate(message, colors.EFFECTIVENESS)
    multiplier = element_multiplier * attacker.status_effects.damage_multiplier()
    return base_damage * multiplier


def apply_damage(target: CombatantState, amount: HitPoints) -> HitPoints:
    """Subtract ``amount`` from HP, never going below zero.

    Returns:
        The damage as computed, which is what the narration reports even when
        it exceeds the remaining HP.
    """
    was_alive = target.is_alive
    target.hp = max(0.0, target.hp - amount)
    if was_alive and not target.is_alive:
        publish_event(CombatantDefeatedEvent(target.name))
    return amount


def basic_attack(attacker: Combatant, target: Combatant, rng: RNG) -> HitPoints:
    """Roll a basic attack and return the damage for the caller to apply.

    Damage is ``attack_power * (1.0 + d/10)`` for ``d`` in ``0..9``, scaled by
    the attacker's outgoing multipliers. Builds one combo point. The target
    is not touched: the caller passes the result to ``target.receive_damage``.
    """
    variance = rng.randrange(Combat.BASIC_ATTACK_VARIANCE_STEPS) / 10
    base_damage = attacker.attack_power * (1.0 + variance)
    damage = attacker.calculate_outgoing_damage(base_damage, target.element)
    attacker.combo_points += 1
    logger.debug(
        f"{attacker.name} basic attack: base={base_damage:.2f} final={damage:.2f}"
    )
    return damage
