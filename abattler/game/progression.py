"""Experience and levelling for the hero."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from abattler import colors
from abattler.constants.combat import ProgressionConstants as Progression
from abattler.events import LevelUpEvent, narrate, publish_event

if TYPE_CHECKING:
    from abattler.game.actors.hero import Hero

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LevelUp:
    level: int
    max_hp: float
    attack_power: float


def add_experience(hero: Hero, amount: float) -> list[LevelUp]:
    """Grant ``amount`` XP and apply every level up it pays for.

    Each level costs 100 XP and gives +10 max HP, +3 attack and a full heal.
    There is no level cap; a large grant levels up repeatedly.

    Returns:
        One :class:`LevelUp` per level gained, in order.
    """
    hero.xp += amount
    narrate(f"Gained {amount:g} XP!", colors.LEVEL_UP)

    gained: list[LevelUp] = []
    while hero.xp >= Progression.XP_PER_LEVEL:
        hero.level += 1
        hero.max_hp += Progression.MAX_HP_PER_LEVEL
        hero.attack_power += Progression.ATTACK_PER_LEVEL
        hero.xp -= Progression.XP_PER_LEVEL
        hero.hp = hero.max_hp

        gained.append(LevelUp(hero.level, hero.max_hp, hero.attack_power))
        logger.debug(f"{hero.name} reached level {hero.level}")
        publish_event(LevelUpEvent(hero.name, hero.level))
        narrate(f"LEVEL UP! You are now level {hero.level}!", colors.LEVEL_UP)
        narrate(
            f"Max HP increased by {Progression.MAX_HP_PER_LEVEL:g}!", colors.LEVEL_UP
        )
        narrate(
            f"Attack increased by {Progression.ATTACK_PER_LEVEL:g}!", colors.LEVEL_UP
        )
        narrate("You've been fully healed!", colors.HEAL)

    narrate(
        f"XP Progress: {hero.xp:g}/{Progression.XP_PER_LEVEL:g}", colors.LEVEL_UP
    )
    return gained
