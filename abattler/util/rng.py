"""Seedable random number streams for the battle engine.

One :class:`RNGProvider` is created per process (in ``__main__``) from a master
seed. Each subsystem asks it for its own named stream and keeps that stream as
an explicit collaborator, so no rule reads a hidden module-level generator and
a fixed seed replays a whole run:

    provider = RNGProvider(master_seed=1234)
    dice = provider.get("combat.dice")
    monster = Monster.from_template(template, level=2, rng=dice)

Domain names used by the game:
    - "combat.dice"        attack variance, dodge rolls, special move choice
    - "combat.ai"          monster action choice, flee rolls
    - "encounter.spawn"    monster selection and item drops
    - "challenge.problem"  arithmetic problems for the block challenge
"""

from __future__ import annotations

import time
import zlib
from collections.abc import Sequence
from random import Random
from typing import TypeAlias, TypeVar

from abattler.types import RandomSeed

T = TypeVar("T")


class RNGStream:
    """Proxy that delegates to the provider's generator for a domain.

    The generator is created on first draw, so asking for a stream is free.
    """

    def __init__(self, provider: RNGProvider, domain: str) -> None:
        self._provider = provider
        self._domain = domain

    def _rng(self) -> Random:
        return self._provider._get_raw(self._domain)

    def random(self) -> float:
        """Return random float in [0.0, 1.0)."""
        return self._rng().random()

    def randint(self, a: int, b: int) -> int:
        """Return random integer N such that a <= N <= b."""
        return self._rng().randint(a, b)

    def randrange(self, start: int, stop: int | None = None, step: int = 1) -> int:
        """Return randomly selected element from range(start, stop, step)."""
        return self._rng().randrange(start, stop, step)

    def choice(self, seq: Sequence[T]) -> T:
        """Return random element from non-empty sequence."""
        return self._rng().choice(seq)


# Functions that draw random numbers accept either a plain Random or a stream.
RNG: TypeAlias = Random | RNGStream


class RNGProvider:
    """Hands out isolated, deterministically derived streams per domain."""

    def __init__(self, master_seed: RandomSeed = None) -> None:
        self._master_seed = master_seed
        self._streams: dict[str, Random] = {}
        self._proxies: dict[str, RNGStream] = {}

    @property
    def master_seed(self) -> RandomSeed:
        return self._master_seed

    def get(self, domain: str) -> RNGStream:
        """Get the stream for a domain such as ``"combat.dice"``."""
        if domain not in self._proxies:
            self._proxies[domain] = RNGStream(self, domain)
        return self._proxies[domain]

    def _get_raw(self, domain: str) -> Random:
        if domain not in self._streams:
            if self._master_seed is None:
                self._streams[domain] = Random()
            else:
                # crc32 rather than hash(): str hashing is salted per process
                derived_seed = zlib.crc32(f"{self._master_seed}:{domain}".encode())
                self._streams[domain] = Random(derived_seed)
        return self._streams[domain]


def time_seed() -> int:
    """Master seed derived from the wall clock, used when none is configured."""
    return time.time_ns() // 1_000_000
