from abattler.game.actors.core import (
    Combatant,
    CombatantState,
    MoveResult,
    SpecialMove,
    basic_attack,
)
from abattler.game.actors.hero import HERO_SPECIAL_MOVES, Hero
from abattler.game.actors.monster import Monster
from abattler.game.actors.monster_types import MONSTER_CATALOG, MonsterTemplate

__all__ = [
    "HERO_SPECIAL_MOVES",
    "MONSTER_CATALOG",
    "Combatant",
    "CombatantState",
    "Hero",
    "Monster",
    "MonsterTemplate",
    "MoveResult",
    "SpecialMove",
    "basic_attack",
]
