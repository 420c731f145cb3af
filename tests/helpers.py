from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Sequence
from typing import TypeVar

from abattler.events import MessageEvent, subscribe_to_event
from abattler.game.actors.hero import Hero
from abattler.game.actors.monster import Monster
from abattler.game.actors.monster_types import MonsterTemplate
from abattler.game.challenge import (
    Answered,
    ArithmeticProblem,
    ChallengeAnswer,
    ChallengeReport,
    TimedOut,
)
from abattler.game.enums import ArithmeticOperator, ElementalType

T = TypeVar("T")


class ScriptedRNG:
    """Deterministic stand-in for an RNG stream.

    ``randrange``/``randint`` pop queued integers; ``choice`` pops queued
    indices. When a queue runs dry the lowest possible value is returned.
    """

    def __init__(
        self, ints: Iterable[int] = (), choices: Iterable[int] = ()
    ) -> None:
        self.ints: deque[int] = deque(ints)
        self.choices: deque[int] = deque(choices)

    def random(self) -> float:
        return 0.0

    def randrange(self, start: int, stop: int | None = None, step: int = 1) -> int:
        return self.ints.popleft() if self.ints else (0 if stop is None else start)

    def randint(self, a: int, b: int) -> int:
        return self.ints.popleft() if self.ints else a

    def choice(self, seq: Sequence[T]) -> T:
        return seq[self.choices.popleft() if self.choices else 0]


class StubBlockGate:
    """Block gate that answers from a script instead of the keyboard."""

    PROBLEM = ArithmeticProblem(2, ArithmeticOperator.ADD, 3)

    def __init__(self, *answers: ChallengeAnswer) -> None:
        self.answers: deque[ChallengeAnswer] = deque(answers)
        self.attempts = 0

    def attempt(self) -> ChallengeReport:
        self.attempts += 1
        answer = self.answers.popleft() if self.answers else TimedOut()
        return ChallengeReport(self.PROBLEM, answer)

    @classmethod
    def always_correct(cls, times: int = 10) -> StubBlockGate:
        return cls(*(Answered(cls.PROBLEM.answer) for _ in range(times)))


class MessageRecorder:
    """Collects narration text published on the event bus."""

    def __init__(self) -> None:
        self.messages: list[str] = []
        subscribe_to_event(MessageEvent, lambda e: self.messages.append(e.text))

    def __contains__(self, text: str) -> bool:
        return any(text in message for message in self.messages)


def make_hero(
    *,
    hp: float = 30.0,
    attack: float = 5.0,
    rng: ScriptedRNG | None = None,
    block_gate: StubBlockGate | None = None,
) -> Hero:
    return Hero(
        name="Tester",
        max_hp=hp,
        attack_power=attack,
        rng=rng or ScriptedRNG(),
        block_gate=block_gate or StubBlockGate(),
    )


def make_monster(
    *,
    hp: float = 30.0,
    attack: float = 5.2,
    element: ElementalType = ElementalType.NORMAL,
    rng: ScriptedRNG | None = None,
    template: MonsterTemplate | None = None,
    level: int = 1,
) -> Monster:
    if template is not None:
        return Monster.from_template(template, level, rng or ScriptedRNG())
    return Monster(
        name="Dummy",
        max_hp=hp,
        attack_power=attack,
        element=element,
        rng=rng or ScriptedRNG(),
    )
