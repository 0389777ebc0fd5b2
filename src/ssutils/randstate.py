"""The random context consumed by primality testing and prime generation.

A `RandState` is created once, handed explicitly to every call that needs randomness and cleared once at the end.
Seeded states are deterministic (Mersenne Twister), which makes key generation reproducible for a given seed.
Unseeded states draw from the operating system through `secrets`.

Typical usage example:

    with RandState(1234) as rs:
        p = make_prime(64, 50, rs)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import random
import secrets

log = logging.getLogger(__name__)


class RandState:
    """Process-scoped pseudorandom source with explicit initialization and teardown.

    Not reentrant; a state must not be shared between threads.

    Attributes:
        seed: The seed the state was initialized from, None for an OS-backed state.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._gen: random.Random | None
        if seed is None:
            self._gen = secrets.SystemRandom()
            log.debug("Random state initialized from system entropy")
        else:
            self._gen = random.Random(seed)
            log.debug("Random state initialized with seed %d", seed)

    @property
    def cleared(self) -> bool:
        return self._gen is None

    def _source(self) -> random.Random:
        if self._gen is None:
            raise RuntimeError("Random state used after it was cleared.")
        return self._gen

    def randbits(self, k: int) -> int:
        """Uniform integer in [0, 2**k)."""
        if k < 0:
            raise ValueError("Number of bits must be non-negative.")
        source = self._source()
        if k == 0:
            return 0
        return source.getrandbits(k)

    def randint(self, lo: int, hi: int) -> int:
        """Uniform integer in [lo, hi], both ends inclusive."""
        if lo > hi:
            raise ValueError(f"Empty range [{lo}, {hi}].")
        return self._source().randint(lo, hi)

    def clear(self) -> None:
        """Tears the state down. Further draws raise RuntimeError."""
        if self._gen is not None:
            log.debug("Random state cleared")
        self._gen = None

    def __enter__(self) -> "RandState":
        return self

    def __exit__(self, *exc_info) -> None:
        self.clear()
