"""Tests for the turn state machine."""

from __future__ import annotations

import pytest

from abattler.events import BattleEndedEvent, subscribe_to_event
from abattler.game.actors.monster_types import FIRE_DRAKE, GOBLIN
from abattler.game.battle import Battle
from abattler.game.enums import BattleOutcome, BattlePhase, PlayerAction
from abattler.game.items.item_types import HEALING_SALVE_TYPE, HEALTH_POTION_TYPE
from tests.helpers import (
    MessageRecorder,
    ScriptedRNG,
    StubBlockGate,
    make_hero,
    make_monster,
)


def make_battle(
    *,
    ai: list[int] | None = None,
    dice: list[int] | None = None,
    monster_rolls: list[int] | None = None,
    block_gate: StubBlockGate | None = None,
    template=GOBLIN,
) -> Battle:
    hero = make_hero(hp=30, attack=5, block_gate=block_gate)
    monster = make_monster(
        template=template, level=1, rng=ScriptedRNG(ints=monster_rolls or [])
    )
    return Battle(hero, monster, ScriptedRNG(ai or []), ScriptedRNG(dice or []))


class TestPlayerTurn:
    def test_attack_damages_monster_and_passes_turn(self) -> None:
        battle = make_battle(dice=[4], monster_rolls=[3])

        result = battle.take_player_action(PlayerAction.ATTACK)

        assert result.damage_dealt == pytest.approx(7.0)
        assert battle.monster.hp == pytest.approx(23.0)
        assert battle.hero.combo_points == 1
        assert battle.phase is BattlePhase.MONSTER_TURN

    def test_block_sets_stance_that_survives_the_monster_turn(self) -> None:
        gate = StubBlockGate.always_correct()
        battle = make_battle(ai=[1], dice=[0], block_gate=gate)

        battle.take_player_action(PlayerAction.BLOCK)
        assert battle.hero.is_blocking

        battle.take_monster_turn()

        assert gate.attempts == 1
        assert battle.hero.hp == pytest.approx(30 - 5.2 * 0.3)
        assert battle.hero.is_blocking

    def test_next_action_clears_stance(self) -> None:
        battle = make_battle(dice=[0], monster_rolls=[3])
        battle.hero.is_blocking = True

        battle.take_player_action(PlayerAction.ATTACK)

        assert not battle.hero.is_blocking

    def test_invalid_choice_skips_turn(self) -> None:
        recorder = MessageRecorder()
        battle = make_battle()
        battle.hero.is_blocking = True

        result = battle.take_player_action(PlayerAction.from_choice(9))

        assert result.action is None
        assert "Invalid choice! Turn skipped." in recorder
        assert not battle.hero.is_blocking
        assert battle.phase is BattlePhase.MONSTER_TURN

    def test_special_move_without_combo_still_uses_the_turn(self) -> None:
        recorder = MessageRecorder()
        battle = make_battle()

        result = battle.take_player_action(PlayerAction.SPECIAL_MOVE)

        assert result.move is not None and not result.move.performed
        assert "Not enough combo points!" in recorder
        assert battle.phase is BattlePhase.MONSTER_TURN

    def test_item_choice_maps_to_available_slots(self) -> None:
        battle = make_battle()
        hero = battle.hero
        hero.inventory.add_item(HEALTH_POTION_TYPE.with_quantity(0))
        hero.inventory.add_item(HEALING_SALVE_TYPE)

        battle.take_player_action(PlayerAction.USE_ITEM, item_choice=1)

        assert hero.inventory.quantity_of("Healing Salve") == 0
        assert [e.name for e in hero.inventory.active_effects] == ["Healing Salve"]

    @pytest.mark.parametrize("choice", [None, 0, 2])
    def test_bad_item_choice_is_rejected(self, choice: int | None) -> None:
        recorder = MessageRecorder()
        battle = make_battle()
        battle.hero.inventory.add_item(HEALTH_POTION_TYPE)

        battle.take_player_action(PlayerAction.USE_ITEM, item_choice=choice)

        assert "Invalid item choice!" in recorder
        assert battle.hero.inventory.quantity_of("Health Potion") == 1
        assert battle.phase is BattlePhase.MONSTER_TURN

    def test_use_item_with_empty_inventory(self) -> None:
        recorder = MessageRecorder()
        battle = make_battle()

        battle.take_player_action(PlayerAction.USE_ITEM, item_choice=1)

        assert "No items in inventory!" in recorder


class TestFlee:
    def test_successful_flee_ends_battle_without_monster_turn(self) -> None:
        outcomes: list[BattleOutcome] = []
        subscribe_to_event(BattleEndedEvent, lambda e: outcomes.append(e.outcome))
        battle = make_battle(ai=[0])

        battle.take_player_action(PlayerAction.FLEE)

        assert battle.is_over
        assert battle.outcome is BattleOutcome.FLED
        assert outcomes == [BattleOutcome.FLED]
        assert battle.hero.hp == 30
        with pytest.raises(RuntimeError):
            battle.take_monster_turn()

    def test_failed_flee_takes_a_counter_attack_in_the_same_turn(self) -> None:
        battle = make_battle(ai=[2], dice=[0])

        result = battle.take_player_action(PlayerAction.FLEE)

        assert result.damage_taken == pytest.approx(5.2 * 1.3)
        assert battle.hero.hp == pytest.approx(30 - 5.2 * 1.3)
        assert battle.phase is BattlePhase.MONSTER_TURN

    def test_fatal_counter_attack_is_a_defeat(self) -> None:
        battle = make_battle(ai=[1], dice=[9])
        battle.hero.hp = 1

        battle.take_player_action(PlayerAction.FLEE)

        assert battle.outcome is BattleOutcome.DEFEAT


class TestMonsterTurn:
    def test_basic_attack_then_ticks(self) -> None:
        battle = make_battle(ai=[1], dice=[0])
        battle.take_player_action(PlayerAction.BLOCK)
        battle.hero.is_blocking = False
        battle.hero.status_effects.apply("Burn", 1, 0.9, 1.0)
        battle.monster.status_effects.apply("Frozen", 2, 1.0, 0.8)
        battle.hero.inventory.add_item(HEALING_SALVE_TYPE)
        battle.hero.inventory.use_item(0)

        battle.take_monster_turn()

        # The active salve doubles the hit.
        assert battle.hero.hp == pytest.approx(30 - 5.2 * 2.0 + 5.0)
        assert "Burn" not in battle.hero.status_effects
        assert battle.monster.status_effects.get("Frozen").duration == 1
        assert battle.hero.inventory.active_effects[0].remaining == 2
        assert battle.phase is BattlePhase.PLAYER_TURN
        assert battle.rounds == 1

    def test_special_move_branch(self) -> None:
        recorder = MessageRecorder()
        battle = make_battle(ai=[0], template=FIRE_DRAKE)
        battle.take_player_action(PlayerAction.BLOCK)
        battle.hero.is_blocking = False

        battle.take_monster_turn()

        assert "Fire Drake uses Flame Breath!" in recorder
        # Burn applied with 3 turns, then ticked once at the end of the turn.
        assert battle.hero.status_effects.get("Burn").duration == 2

    def test_defeat_stops_before_ticking(self) -> None:
        battle = make_battle(ai=[1], dice=[0])
        battle.take_player_action(PlayerAction.BLOCK)
        battle.hero.is_blocking = False
        battle.hero.hp = 2
        battle.hero.status_effects.apply("Burn", 3, 0.9, 1.0)

        battle.take_monster_turn()

        assert battle.outcome is BattleOutcome.DEFEAT
        assert battle.hero.hp == 0
        assert battle.hero.status_effects.get("Burn").duration == 3

    def test_monster_turn_out_of_order_raises(self) -> None:
        battle = make_battle()
        with pytest.raises(RuntimeError):
            battle.take_monster_turn()


def test_victory_when_monster_hp_reaches_zero() -> None:
    recorder = MessageRecorder()
    battle = make_battle(dice=[9], monster_rolls=[3])
    battle.monster.hp = 1

    battle.take_player_action(PlayerAction.ATTACK)

    assert battle.outcome is BattleOutcome.VICTORY
    assert "Victory! You defeated the Goblin!" in recorder
    with pytest.raises(RuntimeError):
        battle.take_player_action(PlayerAction.ATTACK)


def test_three_attacks_build_combo_against_level_one_goblin() -> None:
    battle = make_battle(
        ai=[1, 1],
        dice=[0, 0, 5, 0, 9],
        monster_rolls=[2, 3, 2],
    )
    assert battle.monster.max_hp == pytest.approx(30.0)
    assert battle.monster.attack_power == pytest.approx(5.2)

    dealt = []
    for turn in range(3):
        dealt.append(battle.take_player_action(PlayerAction.ATTACK).damage_dealt)
        if turn < 2:
            battle.take_monster_turn()

    assert battle.hero.combo_points == 3
    assert all(5.0 - 1e-9 <= d <= 9.5 + 1e-9 for d in dealt)
    assert dealt == pytest.approx([5.0, 7.5, 9.5])
    assert battle.monster.hp == pytest.approx(30 - 22.0)
    assert battle.hero.hp == pytest.approx(30 - 5.2 * 2)
