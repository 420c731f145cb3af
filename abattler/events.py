"""Global event system for decoupling battle narration from the combat rules.

This event bus carries notifications only. The combat engine publishes what
happened (a status effect landed, an item wore off, the hero levelled up) and
the console view, the message log and the tests subscribe to whatever they
care about.

USE FOR:
- Narration lines shown to the player
- Notifications that several listeners may care about (level ups, defeats)

DO NOT USE FOR:
- Core game mechanics (damage resolution, turn order, inventory changes)
- Operations that need a return value or a synchronous confirmation
- Error handling or exception propagation

The event bus is fire-and-forget. All handlers execute immediately
(synchronously), in subscription order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import suppress
from dataclasses import dataclass
from typing import TYPE_CHECKING

from abattler import colors

if TYPE_CHECKING:
    from abattler.game.enums import BattleOutcome
    from abattler.game.status_effects import StatusEffect

logger = logging.getLogger(__name__)


@dataclass
class GameEvent:
    """Base class for all game events."""

    pass


@dataclass
class MessageEvent(GameEvent):
    """Event for adding a narration line to the message log."""

    text: str
    color: colors.Color = colors.WHITE
    stack: bool = True


@dataclass
class StatusEffectAppliedEvent(GameEvent):
    """A status effect was attached to (or replaced on) a combatant."""

    target_name: str
    effect: StatusEffect


@dataclass
class StatusEffectExpiredEvent(GameEvent):
    """A status effect ran out of turns and was removed."""

    target_name: str
    effect_name: str


@dataclass
class ItemEffectExpiredEvent(GameEvent):
    """An active item effect on the hero ran out of turns."""

    owner_name: str
    item_name: str


@dataclass
class LevelUpEvent(GameEvent):
    """The hero gained a level.

    Attributes:
        hero_name: Name of the hero that levelled up.
        new_level: Level reached. A single XP grant can publish several of
            these in a row.
    """

    hero_name: str
    new_level: int


@dataclass
class CombatantDefeatedEvent(GameEvent):
    """A combatant's HP reached zero."""

    name: str


@dataclass
class BattleEndedEvent(GameEvent):
    """Fired once when a battle reaches its terminal state."""

    outcome: BattleOutcome


class EventBus:
    """Simple event bus for publish/subscribe pattern."""

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable]] = {}

    def subscribe(self, event_type: type, handler: Callable) -> None:
        """Subscribe a handler to an event type."""
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(self, event_type: type, handler: Callable) -> None:
        """Unsubscribe a handler from an event type."""
        if event_type in self._handlers:
            with suppress(ValueError):
                self._handlers[event_type].remove(handler)

    def publish(self, event: GameEvent) -> None:
        """Publish an event to all subscribed handlers."""
        event_type = type(event)
        # Copy the handler list to allow safe subscribe/unsubscribe during dispatch
        for handler in list(self._handlers.get(event_type, ())):
            try:
                handler(event)
            except Exception:
                logger.exception(f"Error handling event {event_type.__name__}")


# Global event bus instance
_global_event_bus = EventBus()


def subscribe_to_event(event_type: type, handler: Callable) -> None:
    """Subscribe to an event type globally."""
    _global_event_bus.subscribe(event_type, handler)


def unsubscribe_from_event(event_type: type, handler: Callable) -> None:
    """Unsubscribe from an event type globally."""
    _global_event_bus.unsubscribe(event_type, handler)


def publish_event(event: GameEvent) -> None:
    """Publish an event globally."""
    _global_event_bus.publish(event)


def narrate(text: str, color: colors.Color = colors.WHITE) -> None:
    """Shorthand for publishing a :class:`MessageEvent`."""
    _global_event_bus.publish(MessageEvent(text, color))


def reset_event_bus_for_testing() -> None:
    """Reset the global event bus. Use only in tests."""
    global _global_event_bus
    _global_event_bus = EventBus()
