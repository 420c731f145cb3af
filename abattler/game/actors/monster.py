from __future__ import annotations

import logging
from dataclasses import dataclass

from abattler import colors
from abattler.constants.combat import CombatConstants as Combat
from abattler.constants.combat import EncounterConstants as Encounter
from abattler.events import narrate
from abattler.game.actors.core import (
    Combatant,
    CombatantState,
    MoveResult,
    apply_damage,
    base_outgoing_damage,
)
from abattler.game.actors.monster_types import MonsterTemplate
from abattler.game.enums import ElementalType
from abattler.game.status_effects import ELEMENTAL_AFFLICTIONS
from abattler.types import HitPoints
from abattler.util.rng import RNG

logger = logging.getLogger(__name__)


@dataclass(eq=False, kw_only=True)
class Monster(CombatantState):
    """A combatant rolled for a single encounter and discarded afterwards."""

    @classmethod
    def from_template(
        cls, template: MonsterTemplate, level: int, rng: RNG
    ) -> Monster:
        """Build a monster with HP and attack scaled by ``level``."""
        return cls(
            name=template.name,
            element=template.element,
            level=level,
            max_hp=template.base_hp * (1 + level * Encounter.HP_SCALING),
            attack_power=template.base_attack * (1 + level * Encounter.ATTACK_SCALING),
            special_moves=template.special_moves,
            rng=rng,
        )

    def calculate_outgoing_damage(
        self, base_damage: float, target_element: ElementalType
    ) -> HitPoints:
        return base_outgoing_damage(self, base_damage, target_element)

    def receive_damage(self, raw_damage: HitPoints) -> HitPoints:
        """Mitigate by own defense effects, then dodge on a 0-1 out of 0-3.

        Returns:
            Damage applied, ``0.0`` on a dodge.
        """
        damage = raw_damage * self.status_effects.defense_multiplier()
        roll = self.rng.randrange(Combat.DODGE_DIE_SIDES)
        logger.debug(f"{self.name} dodge roll {roll}")
        if roll < Combat.DODGE_THRESHOLD:
            narrate(f"{self.name} dodged the attack!", colors.DODGE)
            return 0.0
        apply_damage(self, damage)
        narrate(f"{self.name} took {damage:.1f} damage!", colors.DAMAGE_TAKEN)
        return damage

    def perform_special_move(self, target: Combatant) -> MoveResult:
        """Use a random special move on ``target``.

        The move's elemental affliction lands before the damage roll and
        regardless of whether the target then mitigates the hit. Unlike a
        basic attack, the damage is applied to the target here.
        """
        if not self.special_moves:
            return MoveResult.failed("No special moves available!")

        move = self.rng.choice(self.special_moves)
        affliction = ELEMENTAL_AFFLICTIONS.get(self.element)
        if affliction is not None:
            affliction.inflict(target.status_effects)

        damage = self.calculate_outgoing_damage(
            self.attack_power * move.multiplier, target.element
        )
        dealt = target.receive_damage(damage)
        return MoveResult(move.name, dealt)
