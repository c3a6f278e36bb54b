#!/usr/bin/env python3
"""
Character Levels and Pools
==========================
A *level* is a named group of characters (lowercase, uppercase, digit,
space, special or a custom set). The *pool* is the deduplicated union of
the requested levels minus the excluded characters; it is what every
password character is drawn from.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union

from ..errors import EmptyLevelError, LevelFullyExcludedError, NoLevelsError


# =============================================================================
# Levels
# =============================================================================

@dataclass(frozen=True)
class Level:
    """A named, immutable group of characters."""
    name: str
    chars: str

    def __eq__(self, other):
        if not isinstance(other, Level):
            return NotImplemented
        return self.chars == other.chars

    def __hash__(self):
        return hash(self.chars)

    def __len__(self):
        return len(self.chars)

    def __contains__(self, char):
        return char in self.chars

    @classmethod
    def custom(cls, chars: str) -> "Level":
        return cls("custom", chars)


LOWERCASE = Level("lowercase", "abcdefghijklmnopqrstuvwxyz")
UPPERCASE = Level("uppercase", "ABCDEFGHIJKLMNOPQRSTUVWXYZ")
DIGIT = Level("digit", "0123456789")
SPACE = Level("space", " ")
SPECIAL = Level("special", "&$%@#|/\\=\"*~^`'.?!,;:-+_(){}[]<>")

ALL_LEVELS: Tuple[Level, ...] = (LOWERCASE, UPPERCASE, DIGIT, SPACE, SPECIAL)

# Names and numeric format codes accepted wherever a level is expected
_LEVEL_ALIASES = {
    "lower": LOWERCASE,
    "lowercase": LOWERCASE,
    "upper": UPPERCASE,
    "uppercase": UPPERCASE,
    "digit": DIGIT,
    "digits": DIGIT,
    "space": SPACE,
    "special": SPECIAL,
    1: LOWERCASE,
    2: UPPERCASE,
    3: DIGIT,
    4: SPACE,
    5: SPECIAL,
}

LevelLike = Union[Level, str, int]


def resolve_level(value: LevelLike) -> Level:
    """
    Normalize a level given as a :class:`Level`, a name or a format code.

    Raises:
        ValueError: If a name or code is unknown
    """
    if isinstance(value, Level):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid level: {value!r}")
    key = value.lower() if isinstance(value, str) else value
    level = _LEVEL_ALIASES.get(key)
    if level is None:
        available = ', '.join(sorted(k for k in _LEVEL_ALIASES if isinstance(k, str)))
        raise ValueError(
            f"Unknown level {value!r}. Use a Level, a format code 1-5 or one of: {available}"
        )
    return level


def unique_levels(levels: Iterable[LevelLike]) -> List[Level]:
    """Resolve levels and drop duplicates, keeping first occurrence."""
    seen = set()
    result = []
    for value in levels:
        level = resolve_level(value)
        if level in seen:
            continue
        seen.add(level)
        result.append(level)
    return result


# =============================================================================
# Pool construction
# =============================================================================

def validate_levels(levels: Iterable[LevelLike], exclude: str = "") -> List[Level]:
    """
    Check that every level is usable once ``exclude`` is applied.

    Returns the resolved, deduplicated levels.

    Raises:
        NoLevelsError: If no level was given
        EmptyLevelError: If a level has no characters
        LevelFullyExcludedError: If all characters of a level are excluded
    """
    resolved = unique_levels(levels)
    if not resolved:
        raise NoLevelsError("no levels were specified")

    excluded = set(exclude)
    for level in resolved:
        if not level.chars:
            raise EmptyLevelError(f"{level.name} level is empty")
        if set(level.chars) <= excluded:
            raise LevelFullyExcludedError(
                f"{level.name} level is used and all its characters are excluded"
            )
    return resolved


def build_pool(levels: Iterable[LevelLike], exclude: str = "") -> str:
    """
    Build the character pool for ``levels`` without the ``exclude`` characters.

    Levels are deduplicated by content and every character appears at most
    once in the result, in level order.
    """
    resolved = validate_levels(levels, exclude)
    excluded = set(exclude)
    seen = set()
    chars = []
    for level in resolved:
        for char in level.chars:
            if char in excluded or char in seen:
                continue
            seen.add(char)
            chars.append(char)
    return "".join(chars)


class WorkingPool:
    """
    Mutable copy of a pool owned by a single generation call.

    When repetition is disallowed, drawn characters are taken out with a
    swap-remove so every draw stays O(1).
    """

    def __init__(self, pool: str, repeat: bool = True):
        self._chars = list(pool)
        self._index = {char: i for i, char in enumerate(self._chars)}
        self.repeat = repeat

    def __len__(self):
        return len(self._chars)

    def __bool__(self):
        return bool(self._chars)

    def __contains__(self, char):
        return char in self._index

    def __str__(self):
        return "".join(self._chars)

    def draw(self, rng) -> str:
        """Draw one character uniformly, consuming it when repetition is off."""
        if not self._chars:
            raise IndexError("Cannot draw from an empty pool")
        char = self._chars[rng.randbelow(len(self._chars))]
        self.consume(char)
        return char

    def draw_from(self, candidates: str, rng):
        """
        Draw one character of ``candidates`` that is still in the pool.

        Returns None when none of them is available.
        """
        available = [c for c in dict.fromkeys(candidates) if c in self._index]
        if not available:
            return None
        char = available[rng.randbelow(len(available))]
        self.consume(char)
        return char

    def consume(self, char: str) -> None:
        if self.repeat or char not in self._index:
            return
        i = self._index.pop(char)
        last = self._chars.pop()
        if i < len(self._chars):
            self._chars[i] = last
            self._index[last] = i
