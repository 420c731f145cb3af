"""Terminal presentation: narration, the battle panel and keyboard input.

Nothing here decides game rules. The view renders state it is given, prints
narration as it is published on the event bus, and turns typed text into the
values the battle engine expects.
"""

from __future__ import annotations

import select
import sys
import termios
import time
from typing import TextIO

from abattler import colors, config
from abattler.events import MessageEvent, subscribe_to_event, unsubscribe_from_event
from abattler.game.actors.hero import Hero
from abattler.game.actors.monster import Monster
from abattler.game.enums import PlayerAction
from abattler.game.session import SessionSummary
from abattler.util.message_log import MessageLog

TITLE_ART = r"""
    _          ____        _   _   _
   / \        | __ )  __ _| |_| |_| | ___
  / _ \ _____ |  _ \ / _` | __| __| |/ _ \
 / ___ \_____|| |_) | (_| | |_| |_| |  __/
/_/   \_\     |____/ \__,_|\__|\__|_|\___|
"""

TUTORIAL_TEXT = """
=== GAME TUTORIAL ===
1. COMBAT BASICS:
   - Attack to build combo points
   - Use special moves when you have 3+ combo points
   - Block with correct math answers to reduce damage
   - Use items to heal or gain temporary buffs

2. ELEMENT SYSTEM:
   - Fire beats Ice
   - Ice beats Poison
   - Fire beats Undead
   - Poison is weak vs Undead

3. STATUS EFFECTS:
   - Burn: Reduces attack power
   - Frozen: Reduces defense
   - Poison: Reduces both attack and defense
   - Curse: Severely reduces both stats

4. ITEMS:
   - Health Potion: Instant healing
   - Healing Salve: Healing over time
   - Warrior's Elixir: Temporary attack boost
   - Stone Skin Potion: Temporary defense boost
   - Battle Flask: Temporary attack and defense boost
"""

ACTION_MENU = (
    (PlayerAction.ATTACK, "Attack (Build combo)"),
    (PlayerAction.SPECIAL_MOVE, "Special Move (Requires 3+ combo points)"),
    (PlayerAction.BLOCK, "Block Stance"),
    (PlayerAction.USE_ITEM, "Use Item"),
    (PlayerAction.FLEE, "Try to Run"),
)


def colorize(text: str, color: colors.Color) -> str:
    if not config.COLOR_OUTPUT_ENABLED:
        return text
    r, g, b = color
    return f"\x1b[38;2;{r};{g};{b}m{text}\x1b[0m"


def parse_choice(text: str) -> int | None:
    """Parse a typed menu number, ``None`` for anything that is not an int."""
    try:
        return int(text.strip())
    except ValueError:
        return None


class StdinAnswerSource:
    """Non-blocking line reader over a terminal stream (POSIX ``select``)."""

    def __init__(self, stream: TextIO = sys.stdin) -> None:
        self.stream = stream

    def poll(self) -> str | None:
        ready, _, _ = select.select([self.stream], [], [], 0)
        if not ready:
            return None
        return self.stream.readline()

    def discard_pending(self) -> None:
        # Only a terminal is flushed. Piped input is a script, keep it.
        if self.stream.isatty():
            termios.tcflush(self.stream, termios.TCIFLUSH)


class ConsoleView:
    """Prints narration live and draws the battle panel between turns."""

    def __init__(
        self, out: TextIO = sys.stdout, pause_ms: int = config.ACTION_PAUSE_MS
    ) -> None:
        self.out = out
        self.pause_ms = pause_ms
        self.message_log = MessageLog()
        subscribe_to_event(MessageEvent, self._print_message)

    def close(self) -> None:
        unsubscribe_from_event(MessageEvent, self._print_message)
        self.message_log.close()

    def _print_message(self, event: MessageEvent) -> None:
        self.write(colorize(event.text, event.color))

    def write(self, text: str = "") -> None:
        print(text, file=self.out, flush=True)

    def clear_screen(self) -> None:
        if config.COLOR_OUTPUT_ENABLED:
            self.out.write("\x1b[2J\x1b[H")
        else:
            self.out.write("\n" * 100)
        self.out.flush()

    def pause(self) -> None:
        if self.pause_ms > 0:
            time.sleep(self.pause_ms / 1000)

    # ------------------------------------------------------------------
    # Screens
    # ------------------------------------------------------------------

    def show_title(self) -> None:
        self.write(colorize(TITLE_ART, colors.LEVEL_UP))

    def show_tutorial(self) -> None:
        self.write(TUTORIAL_TEXT)

    def show_battle(self, hero: Hero, monster: Monster) -> None:
        self.clear_screen()
        self.write("=" * config.PANEL_WIDTH)
        for line in hero_panel(hero):
            self.write(line)
        self.write()
        self.write("-" * (config.PANEL_WIDTH // 2))
        self.write()
        for line in monster_panel(monster):
            self.write(line)
        self.write("=" * config.PANEL_WIDTH)
        recent = self.message_log.current_turn()[-config.MESSAGE_LOG_VISIBLE_LINES :]
        for message in recent:
            self.write(colorize(message.full_text, message.fg))
        self.message_log.mark_turn()

    def show_action_menu(self) -> None:
        self.write("\nYour turn! Choose action:")
        for action, label in ACTION_MENU:
            self.write(f"{action.value}. {label}")

    def show_item_menu(self, hero: Hero) -> None:
        descriptions = hero.inventory.inventory_descriptions()
        for i, desc in enumerate(descriptions, 1):
            self.write(f"  {i}. {desc}")

    def show_summary(self, summary: SessionSummary) -> None:
        self.write(colorize("\n=== GAME OVER ===\n", colors.DEFEAT))
        self.write("Final Statistics:")
        self.write(f"Monsters Defeated: {summary.monsters_defeated}")
        self.write(f"Final Level: {summary.final_level}")
        self.write(f"Successful Blocks: {summary.successful_blocks}")

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def prompt(self, text: str) -> str:
        return input(text)

    def prompt_choice(self, text: str) -> int | None:
        return parse_choice(self.prompt(text))


def hero_panel(hero: Hero) -> list[str]:
    lines = [
        f"=== {hero.name} ===",
        f"Level: {hero.level}",
        f"HP: {hero.hp:.1f}/{hero.max_hp:.1f}",
        f"Attack: {hero.attack_power:.1f}",
        f"Combo Points: {hero.combo_points}",
        f"Stance: {'Blocking' if hero.is_blocking else 'Normal'}",
    ]
    effects = list(hero.status_effects.descriptions())
    if effects:
        lines.append("Status Effects:")
        lines.extend(f"  - {desc}" for desc in effects)
    active = hero.inventory.active_effect_descriptions()
    if active:
        lines.append("Active Items:")
        lines.extend(f"  - {desc}" for desc in active)
    inventory = hero.inventory.inventory_descriptions()
    if inventory:
        lines.append("Inventory:")
        lines.extend(f"  {i}. {desc}" for i, desc in enumerate(inventory, 1))
    return lines


def monster_panel(monster: Monster) -> list[str]:
    lines = [
        colorize(
            f"=== {monster.name} ===", colors.ELEMENT_COLORS[monster.element]
        ),
        f"Type: {monster.element.value}",
        f"Level: {monster.level}",
        f"HP: {monster.hp:.1f}/{monster.max_hp:.1f}",
        f"Attack: {monster.attack_power:.1f}",
    ]
    effects = list(monster.status_effects.descriptions())
    if effects:
        lines.append("Status Effects:")
        lines.extend(f"  - {desc}" for desc in effects)
    return lines
