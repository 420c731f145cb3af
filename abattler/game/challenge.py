"""Timed arithmetic challenge that gates a successful block.

While the hero is in blocking stance, every incoming hit first shows a small
arithmetic problem. The answer has to arrive before the time limit and parse
as the right integer; anything else is a failed block.

Waiting for the answer is an async operation, :func:`await_answer`, resolving
to exactly one of :class:`Answered`, :class:`TimedOut` or :class:`ParseFailed`.
Where the text comes from is abstracted behind :class:`AnswerSource`; the
console implementation lives in :mod:`abattler.view.console`.
"""

from __future__ import annotations

import asyncio
import logging
import operator
from dataclasses import dataclass
from typing import Protocol, TypeAlias

from abattler import colors, config
from abattler.events import narrate
from abattler.game.enums import ArithmeticOperator
from abattler.types import Seconds
from abattler.util.rng import RNG

logger = logging.getLogger(__name__)

OPERAND_MIN = 1
OPERAND_MAX = 10

_OPERATIONS = {
    ArithmeticOperator.ADD: operator.add,
    ArithmeticOperator.SUBTRACT: operator.sub,
    ArithmeticOperator.MULTIPLY: operator.mul,
}


@dataclass(frozen=True)
class ArithmeticProblem:
    left: int
    op: ArithmeticOperator
    right: int

    @property
    def answer(self) -> int:
        return _OPERATIONS[self.op](self.left, self.right)

    @property
    def text(self) -> str:
        return f"{self.left} {self.op.value} {self.right}"


def generate_problem(rng: RNG) -> ArithmeticProblem:
    """Two operands in 1..10 and a random operator.

    For subtraction the larger operand goes first so the answer is never
    negative.
    """
    left = rng.randint(OPERAND_MIN, OPERAND_MAX)
    right = rng.randint(OPERAND_MIN, OPERAND_MAX)
    op = rng.choice(tuple(ArithmeticOperator))
    if op is ArithmeticOperator.SUBTRACT and left < right:
        left, right = right, left
    return ArithmeticProblem(left, op, right)


# ---------------------------------------------------------------------------
# Answer outcomes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Answered:
    value: int


@dataclass(frozen=True)
class TimedOut:
    pass


@dataclass(frozen=True)
class ParseFailed:
    text: str


ChallengeAnswer: TypeAlias = Answered | TimedOut | ParseFailed


class AnswerSource(Protocol):
    """Non-blocking supplier of typed answers."""

    def poll(self) -> str | None:
        """Return a complete line if one is ready, otherwise ``None`` at once."""
        ...

    def discard_pending(self) -> None:
        """Drop anything typed after the challenge resolved."""
        ...


def parse_answer(text: str) -> Answered | ParseFailed:
    try:
        return Answered(int(text.strip()))
    except ValueError:
        return ParseFailed(text)


async def await_answer(
    source: AnswerSource,
    timeout: Seconds | float,
    poll_interval: Seconds | float = config.ANSWER_POLL_INTERVAL,
) -> ChallengeAnswer:
    """Wait up to ``timeout`` seconds for ``source`` to produce a line.

    The source is checked every ``poll_interval`` seconds and the task sleeps
    in between. The first line received decides the result; reaching the
    deadline first resolves to :class:`TimedOut`.
    """
    try:
        async with asyncio.timeout(timeout):
            while True:
                line = source.poll()
                if line is not None:
                    return parse_answer(line)
                await asyncio.sleep(poll_interval)
    except TimeoutError:
        return TimedOut()


# ---------------------------------------------------------------------------
# Block gate
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChallengeReport:
    problem: ArithmeticProblem
    answer: ChallengeAnswer

    @property
    def succeeded(self) -> bool:
        return (
            isinstance(self.answer, Answered)
            and self.answer.value == self.problem.answer
        )


class BlockGate(Protocol):
    """Decides whether a block attempt succeeds."""

    def attempt(self) -> ChallengeReport: ...


class BlockChallenge:
    """Poses a problem, waits for the answer and narrates the result."""

    def __init__(
        self,
        source: AnswerSource,
        rng: RNG,
        time_limit: Seconds | float = config.BLOCK_TIME_LIMIT,
        poll_interval: Seconds | float = config.ANSWER_POLL_INTERVAL,
    ) -> None:
        self.source = source
        self.rng = rng
        self.time_limit = time_limit
        self.poll_interval = poll_interval

    def attempt(self) -> ChallengeReport:
        problem = generate_problem(self.rng)
        narrate("Quick! Solve this problem to block effectively!", colors.YELLOW)
        narrate(
            f"{problem.text} = ? ({self.time_limit:g} seconds to answer!)",
            colors.YELLOW,
        )
        answer = asyncio.run(
            await_answer(self.source, self.time_limit, self.poll_interval)
        )
        self.source.discard_pending()
        report = ChallengeReport(problem, answer)
        logger.debug(f"Block challenge {problem.text}: {answer!r}")

        if report.succeeded:
            narrate("Correct! Perfect block!", colors.BLOCK_SUCCESS)
        else:
            match answer:
                case TimedOut():
                    narrate("Time's up! Block failed!", colors.BLOCK_FAILED)
                case _:
                    narrate("Wrong answer! Block failed!", colors.BLOCK_FAILED)
            narrate(f"The correct answer was: {problem.answer}", colors.BLOCK_FAILED)
        return report
