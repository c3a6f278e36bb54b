#!/usr/bin/env python3
"""
Random Source
=============
Cryptographically secure integer draws for every generator in the package.

All randomness goes through :class:`SecureRandom`, which wraps
``secrets.SystemRandom`` (``os.urandom`` underneath). A failure of the
system entropy source propagates; there is no fallback to a weaker RNG.
"""

import secrets
from typing import Any, List, MutableSequence, Sequence


class SecureRandom:
    """
    Uniform, unbiased integer source backed by the OS CSPRNG.

    One instance is shared process-wide (see :func:`get_rng`) and handed to
    the generators; it holds no mutable state of its own, so sharing it
    between threads is safe. Tests may pass any ``random.Random`` compatible
    object as ``rng`` to get reproducible draws.
    """

    def __init__(self, rng=None):
        self._rng = rng if rng is not None else secrets.SystemRandom()

    def randbelow(self, n: int) -> int:
        """Return a random integer in ``[0, n)``."""
        if n <= 0:
            raise ValueError(f"upper bound must be positive, got {n}")
        return self._rng.randrange(n)

    def randint(self, a: int, b: int) -> int:
        """Return random integer N such that a <= N <= b."""
        return a + self.randbelow(b - a + 1)

    def choice(self, seq: Sequence[Any]) -> Any:
        """Return a random element from non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from empty sequence")
        return seq[self.randbelow(len(seq))]

    def shuffle(self, seq: MutableSequence[Any]) -> None:
        """
        Fisher-Yates shuffle in place.

        Walks from the last index down to 1 swapping position ``i`` with a
        drawn ``j`` in ``[0, i]``.
        """
        for i in range(len(seq) - 1, 0, -1):
            j = self.randbelow(i + 1)
            seq[i], seq[j] = seq[j], seq[i]

    def positions(self, total: int, k: int) -> List[int]:
        """Return ``k`` distinct random indexes from ``range(total)``."""
        if k > total:
            raise ValueError(f"cannot pick {k} distinct positions out of {total}")
        indexes = list(range(total))
        # Partial Fisher-Yates: only the first k slots need settling
        for i in range(k):
            j = i + self.randbelow(total - i)
            indexes[i], indexes[j] = indexes[j], indexes[i]
        return indexes[:k]


# Global instance
_secure_random = SecureRandom()


def get_rng() -> SecureRandom:
    """Get the shared secure random source."""
    return _secure_random
