from __future__ import annotations

from dataclasses import dataclass

from abattler import colors
from abattler.events import MessageEvent, subscribe_to_event, unsubscribe_from_event


@dataclass(slots=True)
class Message:
    """A single narration line."""

    plain_text: str
    fg: colors.Color
    count: int = 1

    @property
    def full_text(self) -> str:
        """The full text of this message, including the count if > 1."""
        if self.count > 1:
            return f"{self.plain_text} (x{self.count})"
        return self.plain_text


class MessageLog:
    """Collects narration published on the event bus, stacking repeats."""

    def __init__(self) -> None:
        self.messages: list[Message] = []
        # Index of the first message of the current turn, see mark_turn().
        self._turn_start = 0
        subscribe_to_event(MessageEvent, self._handle_message_event)

    def _handle_message_event(self, event: MessageEvent) -> None:
        self.add_message(event.text, event.color, stack=event.stack)

    def add_message(
        self,
        text: str,
        fg: colors.Color = colors.WHITE,
        *,
        stack: bool = True,
    ) -> None:
        """Add a message, merging it into the previous one if identical."""
        if (
            stack
            and len(self.messages) > self._turn_start
            and self.messages[-1].plain_text == text
            and self.messages[-1].fg == fg
        ):
            self.messages[-1].count += 1
        else:
            self.messages.append(Message(text, fg))

    def mark_turn(self) -> None:
        """Start a new turn: later messages never stack onto earlier ones."""
        self._turn_start = len(self.messages)

    def current_turn(self) -> list[Message]:
        """Messages added since the last :meth:`mark_turn`."""
        return self.messages[self._turn_start :]

    def close(self) -> None:
        """Stop listening to the event bus."""
        unsubscribe_from_event(MessageEvent, self._handle_message_event)
