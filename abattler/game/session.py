"""A whole run: one hero facing monsters until they fall."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from abattler import colors, config
from abattler.events import narrate
from abattler.game.actors.hero import Hero
from abattler.game.battle import Battle
from abattler.game.challenge import AnswerSource, BlockChallenge
from abattler.game.encounters import EncounterGenerator, VictoryReward
from abattler.game.enums import BattleOutcome
from abattler.game.items.item_types import STARTER_ITEMS
from abattler.util.rng import RNGProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionSummary:
    monsters_defeated: int
    final_level: int
    successful_blocks: int


class GameSession:
    """Owns the hero and the encounter loop state for one process run.

    Args:
        hero: The session's hero, already set up.
        generator: Source of monsters and rewards.
        rng: Provider whose streams drive the battles.
    """

    def __init__(
        self, hero: Hero, generator: EncounterGenerator, rng: RNGProvider
    ) -> None:
        self.hero = hero
        self.generator = generator
        self.rng = rng
        self.monsters_defeated = 0
        self.battle: Battle | None = None

    @classmethod
    def start(
        cls, hero_name: str, answers: AnswerSource, rng: RNGProvider
    ) -> GameSession:
        """Create the hero, hand out the starter kit and the starting XP."""
        challenge = BlockChallenge(answers, rng.get("challenge.problem"))
        hero = Hero.create(hero_name, rng.get("combat.dice"), challenge)
        for item in STARTER_ITEMS:
            hero.inventory.add_item(item)
        hero.add_experience(config.STARTING_XP)

        generator = EncounterGenerator(rng.get("encounter.spawn"), rng.get("combat.dice"))
        logger.info(f"Session started for {hero_name} (seed={rng.master_seed})")
        return cls(hero, generator, rng)

    @property
    def is_over(self) -> bool:
        return not self.hero.is_alive

    def next_battle(self) -> Battle:
        if self.is_over:
            raise RuntimeError("The hero has fallen; no more battles")
        monster = self.generator.spawn(self.monsters_defeated)
        narrate(
            f"A level {monster.level} {monster.element.value} {monster.name} appears!",
            colors.ELEMENT_COLORS[monster.element],
        )
        self.battle = Battle(
            self.hero, monster, self.rng.get("combat.ai"), self.rng.get("combat.dice")
        )
        return self.battle

    def conclude_battle(self, battle: Battle) -> VictoryReward | None:
        """Pay out a victory. Fled or lost battles give nothing."""
        if not battle.is_over:
            raise RuntimeError("Battle is still in progress")
        if battle.outcome is not BattleOutcome.VICTORY:
            return None

        reward = self.generator.roll_reward(battle.monster)
        self.hero.add_experience(reward.xp)
        self.monsters_defeated += 1
        if reward.item is not None:
            self.hero.inventory.add_item(reward.item)
        return reward

    def summary(self) -> SessionSummary:
        return SessionSummary(
            monsters_defeated=self.monsters_defeated,
            final_level=self.hero.level,
            successful_blocks=self.hero.successful_blocks,
        )
