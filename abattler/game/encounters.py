"""Rolling monsters for the next fight and paying out victories."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from abattler.constants.combat import EncounterConstants as Encounter
from abattler.game.actors.monster import Monster
from abattler.game.actors.monster_types import MONSTER_CATALOG, MonsterTemplate
from abattler.game.enums import ElementalType
from abattler.game.items.item_core import ItemType
from abattler.game.items.item_types import ITEM_CATALOG
from abattler.util.rng import RNG

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VictoryReward:
    xp: float
    item: ItemType | None = None


def monster_level_for(monsters_defeated: int) -> int:
    """Monsters gain a level every three victories, starting at level 1."""
    return 1 + monsters_defeated // Encounter.DEFEATS_PER_MONSTER_LEVEL


def victory_xp(monster: Monster) -> float:
    xp = Encounter.VICTORY_XP_BASE + monster.level * Encounter.VICTORY_XP_PER_LEVEL
    if monster.element is not ElementalType.NORMAL:
        xp *= Encounter.ELEMENTAL_XP_BONUS
    return xp


class EncounterGenerator:
    """Creates monsters and rewards from the catalogs.

    Args:
        spawn_rng: Picks monster templates and rolls item drops.
        combat_rng: Handed to every monster for its dodge and move rolls.
    """

    def __init__(
        self,
        spawn_rng: RNG,
        combat_rng: RNG,
        monster_catalog: Sequence[MonsterTemplate] = MONSTER_CATALOG,
        item_catalog: Sequence[ItemType] = ITEM_CATALOG,
    ) -> None:
        if not monster_catalog:
            raise ValueError("Monster catalog cannot be empty")
        self.spawn_rng = spawn_rng
        self.combat_rng = combat_rng
        self.monster_catalog = tuple(monster_catalog)
        self.item_catalog = tuple(item_catalog)

    def spawn(self, monsters_defeated: int) -> Monster:
        template = self.spawn_rng.choice(self.monster_catalog)
        level = monster_level_for(monsters_defeated)
        monster = Monster.from_template(template, level, self.combat_rng)
        logger.debug(
            f"Spawned level {level} {template.name} "
            f"(hp={monster.max_hp:.1f}, atk={monster.attack_power:.2f})"
        )
        return monster

    def roll_reward(self, monster: Monster) -> VictoryReward:
        """XP for beating ``monster`` plus a 50% chance of one random item."""
        item: ItemType | None = None
        if self.item_catalog and self.spawn_rng.randrange(Encounter.DROP_DIE_SIDES) == 0:
            item = self.spawn_rng.choice(self.item_catalog).with_quantity(1)
        return VictoryReward(victory_xp(monster), item)
