#!/usr/bin/env python3
"""
Password Generator
==================
Builds fixed-length passwords from character levels.

Pipeline per call:
1. Validate the spec (no randomness is used before this succeeds)
2. Build the pool from the levels minus excluded characters
3. Seed one character of each level when the length allows it
4. Fill the remaining slots from the pool
5. Insert the required characters at random positions
6. Sanitize (trim, backfill, reshuffle away weak patterns)

Usage:
    from atoll.generators import PasswordGenerator, PasswordSpec, LOWERCASE, DIGIT

    spec = PasswordSpec(length=16, levels=(LOWERCASE, DIGIT), exclude="0o")
    password = PasswordGenerator().generate(spec)
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ..errors import (
    IncludeExceedsLengthError,
    IncludeExcludeConflictError,
    InvalidIncludeError,
    InvalidLengthError,
    NoLevelsError,
    PoolExhaustedError,
)
from .pool import ALL_LEVELS, Level, WorkingPool, build_pool, unique_levels
from .randomness import SecureRandom, get_rng
from .sanitizer import PatternSanitizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PasswordSpec:
    """Parameters of a password. Levels are resolved and deduplicated on creation."""
    length: int
    levels: Tuple[Level, ...] = ()
    include: str = ""
    exclude: str = ""
    repeat: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'levels', tuple(unique_levels(self.levels)))


def _is_valid_include_char(char: str) -> bool:
    return char.isascii() and char.isprintable()


class PasswordGenerator:
    """Generates passwords that satisfy a :class:`PasswordSpec`."""

    def __init__(self, rng: SecureRandom = None, sanitizer: PatternSanitizer = None):
        self.rng = rng or get_rng()
        self.sanitizer = sanitizer or PatternSanitizer(rng=self.rng)

    def validate(self, spec: PasswordSpec) -> str:
        """
        Check ``spec`` and return its pool.

        Raises:
            InvalidLengthError, NoLevelsError, IncludeExcludeConflictError,
            InvalidIncludeError, IncludeExceedsLengthError, EmptyLevelError,
            LevelFullyExcludedError, PoolExhaustedError
        """
        if spec.length < 1:
            raise InvalidLengthError("invalid password length")

        if not spec.levels:
            raise NoLevelsError("no levels were specified")

        conflict = set(spec.include) & set(spec.exclude)
        if conflict:
            raise IncludeExcludeConflictError(
                f"included characters cannot be excluded: {''.join(sorted(conflict))!r}"
            )

        for char in spec.include:
            if not _is_valid_include_char(char):
                raise InvalidIncludeError(f"include contains invalid characters: {char!r}")

        if len(spec.include) > spec.length:
            raise IncludeExceedsLengthError("characters to include exceed the password length")

        pool = build_pool(spec.levels, spec.exclude)

        if not spec.repeat and spec.length > len(pool) + len(spec.include):
            raise PoolExhaustedError(
                "password length is higher than the pool and repetition is turned off"
            )
        return pool

    def generate(self, spec: PasswordSpec) -> str:
        pool = self.validate(spec)
        working = WorkingPool(pool, repeat=spec.repeat)

        generated = spec.length - len(spec.include)
        chars = self._seed_levels(spec.levels, working, generated)
        while len(chars) < generated:
            self._insert(chars, working.draw(self.rng))

        self._insert_include(chars, spec.include)
        return self.sanitizer.sanitize("".join(chars), working, spec.length)

    def _seed_levels(self, levels: Sequence[Level], working: WorkingPool, slots: int) -> List[str]:
        """Put one character of every level in the password when there is room for all."""
        chars: List[str] = []
        if slots <= len(levels):
            return chars

        for level in levels:
            char = working.draw_from(level.chars, self.rng)
            if char is None:
                # Space gets stripped at the boundaries anyway; other levels
                # only run dry when custom levels overlap
                logger.debug(f"No character left to seed the {level.name} level")
                continue
            self._insert(chars, char)
        return chars

    def _insert_include(self, chars: List[str], include: str) -> None:
        required = list(include)
        self.rng.shuffle(required)
        for char in required:
            self._insert(chars, char)

    def _insert(self, chars: List[str], char: str) -> None:
        chars.insert(self.rng.randbelow(len(chars) + 1), char)


# =============================================================================
# Spec inference
# =============================================================================

def infer_spec(sample: str) -> PasswordSpec:
    """
    Guess the spec that could have produced ``sample``.

    Levels are the predefined ones whose characters appear in the sample (all
    of them when none do), ``repeat`` is set when a character occurs twice
    and the length is counted in characters. An empty sample gives an empty
    spec.
    """
    if not sample:
        return PasswordSpec(length=0)

    levels = [lvl for lvl in ALL_LEVELS if any(c in lvl.chars for c in sample)]
    if not levels:
        levels = list(ALL_LEVELS)

    repeat = len(set(sample)) != len(sample)

    return PasswordSpec(length=len(sample), levels=tuple(levels), repeat=repeat)

