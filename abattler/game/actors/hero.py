from __future__ import annotations

import logging
from dataclasses import dataclass, field

from abattler import colors, config
from abattler.constants.combat import CombatConstants as Combat
from abattler.events import narrate
from abattler.game.actors.core import (
    Combatant,
    CombatantState,
    MoveResult,
    SpecialMove,
    apply_damage,
    base_outgoing_damage,
)
from abattler.game.challenge import BlockGate
from abattler.game.enums import ElementalType
from abattler.game.items.inventory import InventoryComponent
from abattler.game.progression import LevelUp, add_experience
from abattler.types import HitPoints
from abattler.util.rng import RNG

logger = logging.getLogger(__name__)

# Ordered by strength. The move used is picked by combo points above the
# threshold: 3 points -> first move, 6 or more -> last move.
HERO_SPECIAL_MOVES: tuple[SpecialMove, ...] = (
    SpecialMove("Triple Strike", 1.8),
    SpecialMove("Whirlwind Slash", 2.0),
    SpecialMove("Power Attack", 2.2),
    SpecialMove("Ultimate Combo", 2.5),
)


@dataclass(eq=False, kw_only=True)
class Hero(CombatantState):
    """The player's combatant. Lives for the whole session.

    On top of the shared combatant state the hero blocks (through
    ``block_gate``), carries an inventory, and turns combo points into
    special moves.
    """

    block_gate: BlockGate
    special_moves: tuple[SpecialMove, ...] = HERO_SPECIAL_MOVES
    is_blocking: bool = False
    xp: float = 0.0
    successful_blocks: int = 0
    inventory: InventoryComponent = field(init=False, repr=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        self.inventory = InventoryComponent(self)

    @classmethod
    def create(cls, name: str, rng: RNG, block_gate: BlockGate) -> Hero:
        """A fresh level 1 hero with the configured base stats."""
        return cls(
            name=name,
            max_hp=config.HERO_BASE_HP,
            attack_power=config.HERO_BASE_ATTACK,
            rng=rng,
            block_gate=block_gate,
        )

    def calculate_outgoing_damage(
        self, base_damage: float, target_element: ElementalType
    ) -> HitPoints:
        """Shared element/status scaling, then every active item attack buff."""
        damage = base_outgoing_damage(self, base_damage, target_element)
        return damage * self.inventory.attack_multiplier()

    def receive_damage(self, raw_damage: HitPoints) -> HitPoints:
        """Take a hit. Heroes never dodge.

        Active item effects scale the damage by ``(2.0 - defense_buff)`` each.
        In blocking stance the block challenge runs first; a correct answer in
        time cuts the hit to 30% and counts a successful block. The stance is
        left as is; the battle clears it after the player's next action.

        Returns:
            Damage applied.
        """
        factor = self.inventory.defense_factor()

        if self.is_blocking:
            report = self.block_gate.attempt()
            if report.succeeded:
                self.successful_blocks += 1
                damage = raw_damage * Combat.BLOCKED_DAMAGE_FRACTION * factor
                apply_damage(self, damage)
                narrate(
                    f"{self.name} blocked most of the damage! "
                    f"Only took {damage:.1f} damage!",
                    colors.BLOCK_SUCCESS,
                )
                return damage

        damage = raw_damage * factor
        apply_damage(self, damage)
        narrate(f"{self.name} took {damage:.1f} damage!", colors.DAMAGE_TAKEN)
        return damage

    def perform_special_move(self, target: Combatant) -> MoveResult:
        """Spend all combo points on the strongest special move they unlock.

        Damage is ``attack * multiplier * (1 + successful_blocks / 10)`` and is
        applied to ``target`` here. Below the combo threshold nothing happens.
        """
        if self.combo_points < Combat.COMBO_THRESHOLD:
            return MoveResult.failed(
                f"Not enough combo points! (Need {Combat.COMBO_THRESHOLD}, "
                f"have {self.combo_points})"
            )

        index = min(
            self.combo_points - Combat.COMBO_THRESHOLD, len(self.special_moves) - 1
        )
        move = self.special_moves[index]
        block_bonus = 1.0 + self.successful_blocks / Combat.BLOCK_BONUS_DIVISOR
        damage = self.calculate_outgoing_damage(
            self.attack_power * move.multiplier * block_bonus, target.element
        )
        dealt = target.receive_damage(damage)
        self.reset_combo()
        logger.debug(f"{self.name} used {move.name} ({damage:.2f} before mitigation)")
        return MoveResult(move.name, dealt)

    def add_experience(self, amount: float) -> list[LevelUp]:
        return add_experience(self, amount)

    def tick_round(self) -> None:
        """End-of-round bookkeeping: status effects, then item effects."""
        self.status_effects.tick()
        self.inventory.tick_active_effects()
