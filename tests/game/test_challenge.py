"""Tests for arithmetic problem generation and the timed answer wait."""

from __future__ import annotations

import asyncio
import time
from collections import deque

import pytest

from abattler.game.challenge import (
    Answered,
    ArithmeticProblem,
    BlockChallenge,
    ParseFailed,
    TimedOut,
    await_answer,
    generate_problem,
    parse_answer,
)
from abattler.game.enums import ArithmeticOperator
from abattler.util.rng import RNGProvider
from tests.helpers import MessageRecorder, ScriptedRNG

SUBTRACT_INDEX = list(ArithmeticOperator).index(ArithmeticOperator.SUBTRACT)


class SilentSource:
    """Never produces an answer."""

    def __init__(self) -> None:
        self.polls = 0
        self.discards = 0

    def poll(self) -> str | None:
        self.polls += 1
        return None

    def discard_pending(self) -> None:
        self.discards += 1


class DelayedSource:
    """Produces ``line`` on the ``after``-th poll."""

    def __init__(self, line: str, after: int = 1) -> None:
        self.lines: deque[str | None] = deque([None] * (after - 1) + [line])

    def poll(self) -> str | None:
        return self.lines.popleft() if self.lines else None

    def discard_pending(self) -> None:
        self.lines.clear()


class TestProblems:
    def test_subtraction_puts_larger_operand_first(self) -> None:
        problem = generate_problem(ScriptedRNG(ints=[3, 9], choices=[SUBTRACT_INDEX]))

        assert problem == ArithmeticProblem(9, ArithmeticOperator.SUBTRACT, 3)
        assert problem.answer == 6
        assert problem.text == "9 - 3"

    def test_generated_problems_stay_in_range_and_non_negative(self) -> None:
        rng = RNGProvider(master_seed=7).get("challenge.problem")
        for _ in range(500):
            problem = generate_problem(rng)
            assert 1 <= problem.left <= 10
            assert 1 <= problem.right <= 10
            assert problem.answer >= 0
            if problem.op is ArithmeticOperator.SUBTRACT:
                assert problem.left >= problem.right

    def test_answers(self) -> None:
        assert ArithmeticProblem(4, ArithmeticOperator.ADD, 5).answer == 9
        assert ArithmeticProblem(4, ArithmeticOperator.MULTIPLY, 5).answer == 20
        assert ArithmeticProblem(4, ArithmeticOperator.MULTIPLY, 5).text == "4 × 5"


class TestParseAnswer:
    @pytest.mark.parametrize(("text", "value"), [("12\n", 12), (" 7 ", 7), ("-3", -3)])
    def test_integers(self, text: str, value: int) -> None:
        assert parse_answer(text) == Answered(value)

    @pytest.mark.parametrize("text", ["", "\n", "seven", "4.5", "9999999999x"])
    def test_non_integers(self, text: str) -> None:
        assert parse_answer(text) == ParseFailed(text)


class TestAwaitAnswer:
    def test_immediate_answer(self) -> None:
        result = asyncio.run(await_answer(DelayedSource("42\n"), timeout=1.0))
        assert result == Answered(42)

    def test_answer_after_a_few_polls(self) -> None:
        source = DelayedSource("5\n", after=3)
        result = asyncio.run(await_answer(source, timeout=1.0, poll_interval=0.01))
        assert result == Answered(5)

    def test_unparseable_answer(self) -> None:
        result = asyncio.run(await_answer(DelayedSource("abc\n"), timeout=1.0))
        assert result == ParseFailed("abc\n")

    def test_timeout_resolves_once_within_bounded_overhead(self) -> None:
        source = SilentSource()
        timeout = 0.3
        start = time.monotonic()

        result = asyncio.run(await_answer(source, timeout=timeout, poll_interval=0.05))

        elapsed = time.monotonic() - start
        assert result == TimedOut()
        assert elapsed >= timeout - 0.01
        assert elapsed < timeout + 0.25
        # Slept between polls instead of spinning.
        assert source.polls <= timeout / 0.05 + 2


class TestBlockChallenge:
    def test_correct_answer_succeeds(self) -> None:
        recorder = MessageRecorder()
        rng = ScriptedRNG(ints=[2, 3], choices=[0])
        challenge = BlockChallenge(DelayedSource("5\n"), rng, time_limit=1.0)

        report = challenge.attempt()

        assert report.succeeded
        assert "2 + 3 = ? (1 seconds to answer!)" in recorder
        assert "Correct! Perfect block!" in recorder

    def test_wrong_answer_fails_and_reveals_answer(self) -> None:
        recorder = MessageRecorder()
        rng = ScriptedRNG(ints=[2, 3], choices=[0])
        challenge = BlockChallenge(DelayedSource("6\n"), rng, time_limit=1.0)

        report = challenge.attempt()

        assert not report.succeeded
        assert "Wrong answer! Block failed!" in recorder
        assert "The correct answer was: 5" in recorder

    def test_timeout_fails(self) -> None:
        recorder = MessageRecorder()
        challenge = BlockChallenge(
            SilentSource(), ScriptedRNG(), time_limit=0.05, poll_interval=0.01
        )

        report = challenge.attempt()

        assert report.answer == TimedOut()
        assert not report.succeeded
        assert "Time's up! Block failed!" in recorder

    def test_late_input_is_discarded_after_a_timeout(self) -> None:
        source = SilentSource()
        challenge = BlockChallenge(
            source, ScriptedRNG(), time_limit=0.05, poll_interval=0.01
        )

        challenge.attempt()

        assert source.discards == 1

    def test_input_typed_after_the_answer_is_discarded(self) -> None:
        source = DelayedSource("5\n")
        source.lines.append("12\n")
        challenge = BlockChallenge(source, ScriptedRNG(ints=[2, 3]), time_limit=1.0)

        challenge.attempt()

        assert source.poll() is None
