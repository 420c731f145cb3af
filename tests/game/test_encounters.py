from __future__ import annotations

import pytest

from abattler.game.actors.monster_types import DRAGON, GOBLIN, MONSTER_CATALOG
from abattler.game.encounters import (
    EncounterGenerator,
    monster_level_for,
    victory_xp,
)
from abattler.game.items.item_types import ITEM_CATALOG
from tests.helpers import ScriptedRNG, make_monster


@pytest.mark.parametrize(
    ("defeated", "level"), [(0, 1), (2, 1), (3, 2), (5, 2), (6, 3), (30, 11)]
)
def test_monster_level_steps_every_three_defeats(defeated: int, level: int) -> None:
    assert monster_level_for(defeated) == level


def test_spawn_scales_chosen_template() -> None:
    combat_rng = ScriptedRNG()
    dragon_index = MONSTER_CATALOG.index(DRAGON)
    generator = EncounterGenerator(ScriptedRNG(choices=[dragon_index]), combat_rng)

    monster = generator.spawn(monsters_defeated=4)

    assert monster.name == "Dragon"
    assert monster.level == 2
    assert monster.max_hp == pytest.approx(40 * 2.0)
    assert monster.hp == monster.max_hp
    assert monster.attack_power == pytest.approx(7 * 1.6)
    assert monster.rng is combat_rng
    assert monster.special_moves == DRAGON.special_moves


def test_spawn_returns_fresh_monsters() -> None:
    generator = EncounterGenerator(ScriptedRNG(), ScriptedRNG())
    first = generator.spawn(0)
    first.status_effects.apply("Burn", 3, 0.9, 1.0)

    second = generator.spawn(0)

    assert second is not first
    assert len(second.status_effects) == 0


def test_victory_xp_normal_and_elemental() -> None:
    goblin = make_monster(template=GOBLIN, level=1)
    dragon = make_monster(template=DRAGON, level=2)

    assert victory_xp(goblin) == pytest.approx(35.0)
    assert victory_xp(dragon) == pytest.approx(40.0 * 1.2)


def test_reward_with_drop() -> None:
    spawn_rng = ScriptedRNG(ints=[0], choices=[2])
    generator = EncounterGenerator(spawn_rng, ScriptedRNG())

    reward = generator.roll_reward(make_monster(template=GOBLIN, level=1))

    assert reward.xp == pytest.approx(35.0)
    assert reward.item is not None
    assert reward.item.name == ITEM_CATALOG[2].name
    assert reward.item.quantity == 1


def test_reward_without_drop() -> None:
    generator = EncounterGenerator(ScriptedRNG(ints=[1]), ScriptedRNG())
    reward = generator.roll_reward(make_monster(template=GOBLIN, level=1))
    assert reward.item is None


def test_empty_catalog_rejected() -> None:
    with pytest.raises(ValueError):
        EncounterGenerator(ScriptedRNG(), ScriptedRNG(), monster_catalog=())
