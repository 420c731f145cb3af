"""
Turn orchestration for a single hero-versus-monster fight.

The battle is a small state machine:

    PLAYER_TURN -> MONSTER_TURN -> PLAYER_TURN -> ...
                                 +-> OVER (VICTORY | DEFEAT | FLED)

- Every player action except Block clears the hero's blocking stance once the
  action has resolved.
- A successful flee ends the battle at once. A failed flee lets the monster
  strike from behind for 1.3x damage as part of the same player turn; the
  regular monster turn still follows.
- Each monster turn, after the monster acts, both combatants' status effects
  tick and so do the hero's active item effects.
- The battle ends the moment either side's HP reaches zero, checked after
  every damage application.

The presentation layer drives the machine: it calls
:meth:`Battle.take_player_action` or :meth:`Battle.take_monster_turn`
depending on :attr:`Battle.phase` and renders the narration published on the
event bus in between.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from abattler import colors
from abattler.constants.combat import CombatConstants as Combat
from abattler.events import BattleEndedEvent, narrate, publish_event
from abattler.game.actors.core import MoveResult, basic_attack
from abattler.game.actors.hero import Hero
from abattler.game.actors.monster import Monster
from abattler.game.enums import BattleOutcome, BattlePhase, PlayerAction
from abattler.types import HitPoints
from abattler.util.rng import RNG

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TurnResult:
    """Summary of one resolved turn, for callers that want more than narration."""

    action: PlayerAction | None
    damage_dealt: HitPoints = 0.0
    damage_taken: HitPoints = 0.0
    move: MoveResult | None = None


class Battle:
    """One encounter between the session's hero and a freshly rolled monster.

    Args:
        hero: The player's combatant.
        monster: The opponent.
        ai_rng: Monster action choice and flee rolls.
        dice: Variance rolls for basic attacks on both sides.
    """

    def __init__(self, hero: Hero, monster: Monster, ai_rng: RNG, dice: RNG) -> None:
        self.hero = hero
        self.monster = monster
        self.ai_rng = ai_rng
        self.dice = dice
        self.phase = BattlePhase.PLAYER_TURN
        self.outcome: BattleOutcome | None = None
        self.rounds = 0

    @property
    def is_over(self) -> bool:
        return self.phase is BattlePhase.OVER

    # ------------------------------------------------------------------
    # Player turn
    # ------------------------------------------------------------------

    def take_player_action(
        self, action: PlayerAction | None, item_choice: int | None = None
    ) -> TurnResult:
        """Resolve the hero's action and hand the turn to the monster.

        Args:
            action: The chosen action, ``None`` for an unrecognised choice
                (the turn is skipped).
            item_choice: 1-based position in the list of *available* items,
                only used with :attr:`PlayerAction.USE_ITEM`.
        """
        self._require_phase(BattlePhase.PLAYER_TURN)

        match action:
            case PlayerAction.ATTACK:
                result = self._player_attack()
            case PlayerAction.SPECIAL_MOVE:
                result = self._player_special_move()
            case PlayerAction.BLOCK:
                narrate("You take a defensive stance!", colors.PLAYER_ACTION)
                self.hero.is_blocking = True
                result = TurnResult(action)
            case PlayerAction.USE_ITEM:
                result = self._player_use_item(item_choice)
            case PlayerAction.FLEE:
                result = self._player_flee()
            case _:
                narrate("Invalid choice! Turn skipped.", colors.BLOCK_FAILED)
                result = TurnResult(None)

        if action is not PlayerAction.BLOCK:
            self.hero.is_blocking = False

        if not self.is_over and not self._check_end():
            self.phase = BattlePhase.MONSTER_TURN
        return result

    def _player_attack(self) -> TurnResult:
        damage = basic_attack(self.hero, self.monster, self.dice)
        narrate("You attack!", colors.PLAYER_ACTION)
        dealt = self.monster.receive_damage(damage)
        return TurnResult(PlayerAction.ATTACK, damage_dealt=dealt)

    def _player_special_move(self) -> TurnResult:
        move = self.hero.perform_special_move(self.monster)
        if move.performed:
            narrate(f"Special Move: {move.name}!", colors.PLAYER_ACTION)
        else:
            narrate(f"Special Move: {move.failure}", colors.BLOCK_FAILED)
        return TurnResult(PlayerAction.SPECIAL_MOVE, damage_dealt=move.damage, move=move)

    def _player_use_item(self, item_choice: int | None) -> TurnResult:
        available = self.hero.inventory.available_slots()
        if not available:
            narrate("No items in inventory!", colors.BLOCK_FAILED)
        elif item_choice is None or not 1 <= item_choice <= len(available):
            narrate("Invalid item choice!", colors.BLOCK_FAILED)
        else:
            slot_index, _ = available[item_choice - 1]
            self.hero.inventory.use_item(slot_index)
        return TurnResult(PlayerAction.USE_ITEM)

    def _player_flee(self) -> TurnResult:
        if self.ai_rng.randrange(Combat.FLEE_DIE_SIDES) == 0:
            narrate("You successfully ran away!", colors.PLAYER_ACTION)
            self._finish(BattleOutcome.FLED)
            return TurnResult(PlayerAction.FLEE)

        narrate("Couldn't escape!", colors.BLOCK_FAILED)
        damage = basic_attack(self.monster, self.hero, self.dice)
        narrate(f"{self.monster.name} attacks from behind!", colors.MONSTER_ACTION)
        taken = self.hero.receive_damage(damage * Combat.FLEE_COUNTER_MULTIPLIER)
        return TurnResult(PlayerAction.FLEE, damage_taken=taken)

    # ------------------------------------------------------------------
    # Monster turn
    # ------------------------------------------------------------------

    def take_monster_turn(self) -> TurnResult:
        """Let the monster act, then tick effects on both sides."""
        self._require_phase(BattlePhase.MONSTER_TURN)

        if self.ai_rng.randrange(Combat.MONSTER_SPECIAL_DIE_SIDES) == 0:
            move = self.monster.perform_special_move(self.hero)
            if move.performed:
                narrate(f"{self.monster.name} uses {move.name}!", colors.MONSTER_ACTION)
            else:
                narrate(f"{self.monster.name}: {move.failure}", colors.MONSTER_ACTION)
            result = TurnResult(None, damage_taken=move.damage, move=move)
        else:
            damage = basic_attack(self.monster, self.hero, self.dice)
            narrate(f"{self.monster.name} attacks!", colors.MONSTER_ACTION)
            result = TurnResult(None, damage_taken=self.hero.receive_damage(damage))

        if self._check_end():
            return result

        self.hero.tick_round()
        self.monster.status_effects.tick()
        self.rounds += 1
        self.phase = BattlePhase.PLAYER_TURN
        return result

    # ------------------------------------------------------------------
    # End of battle
    # ------------------------------------------------------------------

    def _check_end(self) -> bool:
        if not self.hero.is_alive:
            narrate(f"{self.hero.name} has fallen...", colors.DEFEAT)
            self._finish(BattleOutcome.DEFEAT)
        elif not self.monster.is_alive:
            narrate(
                f"Victory! You defeated the {self.monster.name}!", colors.VICTORY
            )
            self._finish(BattleOutcome.VICTORY)
        return self.is_over

    def _finish(self, outcome: BattleOutcome) -> None:
        self.phase = BattlePhase.OVER
        self.outcome = outcome
        logger.debug(f"Battle against {self.monster.name} ended: {outcome.name}")
        publish_event(BattleEndedEvent(outcome))

    def _require_phase(self, phase: BattlePhase) -> None:
        if self.phase is not phase:
            raise RuntimeError(f"Expected {phase.name}, battle is in {self.phase.name}")
