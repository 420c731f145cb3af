"""Main entry point for the game."""

import argparse
import logging
import sys

from abattler import config
from abattler.game.battle import Battle
from abattler.game.enums import BattlePhase, PlayerAction
from abattler.game.session import GameSession
from abattler.util.rng import RNGProvider, time_seed
from abattler.view.console import ConsoleView, StdinAnswerSource

logger = logging.getLogger("abattler")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        prog="abattler",
        description="Turn-based terminal battles against random monsters.",
    )
    ap.add_argument("--seed", help="Master RNG seed for a reproducible run.")
    ap.add_argument(
        "--log-level",
        default=config.LOG_LEVEL,
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Verbosity of the diagnostic log written to stderr.",
    )
    return ap.parse_args(argv)


def play_battle(session: GameSession, battle: Battle, view: ConsoleView) -> None:
    while not battle.is_over:
        view.show_battle(battle.hero, battle.monster)
        if battle.phase is BattlePhase.PLAYER_TURN:
            view.show_action_menu()
            action = PlayerAction.from_choice(view.prompt_choice("Choice: "))
            item_choice = None
            if action is PlayerAction.USE_ITEM and battle.hero.inventory.available_slots():
                view.show_item_menu(battle.hero)
                count = len(battle.hero.inventory.available_slots())
                item_choice = view.prompt_choice(f"Choose item to use (1-{count}): ")
            battle.take_player_action(action, item_choice)
        else:
            battle.take_monster_turn()
        view.pause()

    session.conclude_battle(battle)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    seed = args.seed if args.seed is not None else config.RANDOM_SEED
    if seed is None:
        seed = time_seed()
    rng = RNGProvider(seed)

    view = ConsoleView()
    view.clear_screen()
    view.show_title()

    session: GameSession | None = None
    try:
        hero_name = view.prompt("\nEnter your hero's name: ").strip() or "Hero"
        session = GameSession.start(hero_name, StdinAnswerSource(), rng)
        view.show_tutorial()
        view.prompt("Press Enter to continue...")

        while not session.is_over:
            battle = session.next_battle()
            play_battle(session, battle, view)
            if not session.is_over:
                view.prompt("\nPress Enter to continue...")
    except (EOFError, KeyboardInterrupt):
        logger.info("Input closed, ending the run")

    if session is not None:
        view.show_summary(session.summary())
    view.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
