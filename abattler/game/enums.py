from __future__ import annotations

from enum import Enum, IntEnum, auto


class ElementalType(Enum):
    """Element of a combatant. The value is the display name."""

    NORMAL = "Normal"
    FIRE = "Fire"
    ICE = "Ice"
    POISON = "Poison"
    UNDEAD = "Undead"


class PlayerAction(IntEnum):
    """Main menu choices, numbered as shown to the player."""

    ATTACK = 1
    SPECIAL_MOVE = 2
    BLOCK = 3
    USE_ITEM = 4
    FLEE = 5

    @classmethod
    def from_choice(cls, choice: int | None) -> PlayerAction | None:
        """Map a typed menu number to an action, ``None`` if out of range."""
        if choice is None:
            return None
        try:
            return cls(choice)
        except ValueError:
            return None


class BattlePhase(Enum):
    PLAYER_TURN = auto()
    MONSTER_TURN = auto()
    OVER = auto()


class BattleOutcome(Enum):
    VICTORY = auto()
    DEFEAT = auto()
    FLED = auto()


class ArithmeticOperator(Enum):
    """Operators used by the block challenge. The value is the printed symbol."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "×"
