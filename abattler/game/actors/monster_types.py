"""Monster templates that encounters are rolled from."""

from __future__ import annotations

from dataclasses import dataclass

from abattler.game.actors.core import SpecialMove
from abattler.game.enums import ElementalType


@dataclass(frozen=True)
class MonsterTemplate:
    name: str
    element: ElementalType
    base_hp: float
    base_attack: float
    special_moves: tuple[SpecialMove, ...] = ()


def _template(
    name: str,
    element: ElementalType,
    base_hp: float,
    base_attack: float,
    *moves: tuple[str, float],
) -> MonsterTemplate:
    return MonsterTemplate(
        name,
        element,
        base_hp,
        base_attack,
        tuple(SpecialMove(move, mult) for move, mult in moves),
    )


GOBLIN = _template(
    "Goblin", ElementalType.NORMAL, 20, 4,
    ("Sneaky Strike", 1.2), ("Rabid Attack", 1.4),
)  # fmt: skip
FIRE_DRAKE = _template(
    "Fire Drake", ElementalType.FIRE, 25, 5,
    ("Flame Breath", 1.5), ("Heat Wave", 1.3),
)  # fmt: skip
FROST_GIANT = _template(
    "Frost Giant", ElementalType.ICE, 30, 3,
    ("Ice Shard", 1.4), ("Freeze", 1.2),
)  # fmt: skip
POISON_SPIDER = _template(
    "Poison Spider", ElementalType.POISON, 15, 6,
    ("Venom Strike", 1.3), ("Web Trap", 1.1),
)  # fmt: skip
SKELETON = _template(
    "Skeleton", ElementalType.UNDEAD, 18, 4,
    ("Bone Throw", 1.2), ("Death Touch", 1.4),
)  # fmt: skip
DRAGON = _template(
    "Dragon", ElementalType.FIRE, 40, 7,
    ("Inferno", 1.8), ("Wing Slash", 1.5),
)  # fmt: skip
ICE_WITCH = _template(
    "Ice Witch", ElementalType.ICE, 22, 5,
    ("Blizzard", 1.6), ("Frost Nova", 1.4),
)  # fmt: skip
TOXIC_SLIME = _template(
    "Toxic Slime", ElementalType.POISON, 25, 3,
    ("Acid Splash", 1.3), ("Dissolve", 1.5),
)  # fmt: skip
LICH = _template(
    "Lich", ElementalType.UNDEAD, 35, 6,
    ("Soul Drain", 1.7), ("Curse", 1.4),
)  # fmt: skip
BABAYAGA = _template(
    "Babayaga", ElementalType.NORMAL, 50, 10,
    ("Doggono", 3.0), ("Mad gun", 2.5),
)  # fmt: skip

MONSTER_CATALOG: tuple[MonsterTemplate, ...] = (
    GOBLIN,
    FIRE_DRAKE,
    FROST_GIANT,
    POISON_SPIDER,
    SKELETON,
    DRAGON,
    ICE_WITCH,
    TOXIC_SLIME,
    LICH,
    BABAYAGA,
)
