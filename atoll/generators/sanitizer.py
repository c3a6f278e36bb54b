#!/usr/bin/env python3
"""
Pattern Sanitizer
=================
Post-processing for generated passwords:
- Strips leading/trailing whitespace and backfills the lost length
- Reshuffles the password until no weak pattern (``abc``, ``qwerty``,
  ``admin``, ...) is left in it
"""

import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Optional, Pattern

import yaml

from ..errors import RepairLimitError
from ..settings import require_setting
from .pool import WorkingPool
from .randomness import SecureRandom, get_rng

logger = logging.getLogger(__name__)

LISTS_DIR = Path(__file__).parent / 'lists'


@lru_cache(maxsize=1)
def load_weak_patterns() -> tuple:
    """Load the weak-pattern catalogue (all categories flattened)."""
    filepath = LISTS_DIR / 'weak_patterns.yaml'
    with open(filepath, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}
    patterns = []
    for entries in data.values():
        patterns.extend(str(entry) for entry in entries or [])
    return tuple(patterns)


def compile_patterns(patterns: Iterable[str]) -> Optional[Pattern]:
    """Compile literal substrings into one case-insensitive matcher."""
    escaped = [re.escape(p) for p in patterns if p]
    if not escaped:
        return None
    return re.compile('|'.join(escaped), re.IGNORECASE)


@lru_cache(maxsize=1)
def default_matcher() -> Optional[Pattern]:
    return compile_patterns(load_weak_patterns())


class PatternSanitizer:
    """
    Removes weak patterns and boundary whitespace from a password.

    Usage:
        sanitizer = PatternSanitizer()
        password = sanitizer.sanitize(password, pool, length=16)
    """

    def __init__(self,
                 rng: SecureRandom = None,
                 patterns: Iterable[str] = None,
                 max_shuffles: int = None):
        """
        Args:
            rng: Random source (defaults to the shared one)
            patterns: Literal weak substrings; defaults to weak_patterns.yaml
            max_shuffles: Reshuffle cap; defaults to ``sanitizer.max_shuffles``
        """
        self.rng = rng or get_rng()
        if patterns is None:
            self._matcher = default_matcher()
        else:
            self._matcher = compile_patterns(patterns)
        if max_shuffles is None:
            max_shuffles = require_setting("sanitizer.max_shuffles")
        self.max_shuffles = int(max_shuffles)

    def has_weak_pattern(self, secret: str) -> bool:
        return self._matcher is not None and self._matcher.search(secret) is not None

    def sanitize(self, secret: str, pool, length: int) -> str:
        """
        Return ``secret`` trimmed, backfilled to ``length`` and free of weak patterns.

        Args:
            secret: Candidate password
            pool: WorkingPool the password was drawn from
            length: Required length in characters

        Raises:
            RepairLimitError: If the password still matches after max_shuffles reshuffles
        """
        chars = self._backfill(secret, pool, length)

        shuffles = 0
        while self.has_weak_pattern("".join(chars)):
            if shuffles >= self.max_shuffles:
                raise RepairLimitError(
                    f"password still contains a weak pattern after {shuffles} reshuffles"
                )
            self.rng.shuffle(chars)
            shuffles += 1

        if shuffles:
            logger.debug(f"Reshuffled password {shuffles} time(s) to clear weak patterns")
        return "".join(chars)

    def _backfill(self, secret: str, pool, length: int) -> List[str]:
        if isinstance(pool, str):
            pool = WorkingPool(pool)
        stripped = secret.strip()
        lead = len(secret) - len(secret.lstrip())
        # Whitespace that was cut off, kept in case the pool runs dry
        trimmed = list(secret[:lead]) + list(secret[lead + len(stripped):])
        chars = list(stripped)

        while len(chars) < length:
            if pool:
                chars.insert(self.rng.randbelow(len(chars) + 1), pool.draw(self.rng))
            elif trimmed:
                # Interior slot so the whitespace does not end up on a boundary again
                pos = 1 + self.rng.randbelow(len(chars) - 1) if len(chars) > 1 else len(chars)
                chars.insert(pos, trimmed.pop())
            else:
                raise RepairLimitError("no characters left to restore the password length")
        return chars
