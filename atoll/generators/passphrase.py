#!/usr/bin/env python3
"""
Passphrase Generator
====================
Builds passphrases of a fixed number of words with one of three strategies:
- FREEFORM: words synthesized letter by letter (no list, 3-12 letters)
- WORD_LIST: words drawn from the bundled word dictionary
- SYLLABLE_LIST: words drawn from the bundled syllable dictionary

Required words are placed at random slots, forbidden words are redrawn
with the same strategy, and the words are joined with the separator.

Usage:
    from atoll.generators import PassphraseGenerator, PassphraseSpec, Strategy

    spec = PassphraseSpec(length=6, separator="-", strategy=Strategy.WORD_LIST)
    passphrase = PassphraseGenerator().generate(spec)
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ..errors import (
    IncludeExceedsLengthError,
    IncludeExcludeConflictError,
    InvalidIncludeWordError,
    InvalidLengthError,
    InvalidSeparatorError,
    RepairLimitError,
)
from ..settings import get_setting, require_setting
from .dictionaries import load_syllables, load_words
from .randomness import SecureRandom, get_rng

logger = logging.getLogger(__name__)

VOWELS = "aeiou"
CONSONANTS = "bcdfghjklmnpqrstvwxyz"

FREEFORM_MIN_LETTERS = 3
FREEFORM_MAX_LETTERS = 12
# A draw in [0, 11) below this picks a vowel: 4/11 vowels, 7/11 consonants
_VOWEL_CUTOFF = 4
_LETTER_DRAW = 11


class Strategy(Enum):
    """How passphrase words are chosen."""
    FREEFORM = "freeform"
    WORD_LIST = "word_list"
    SYLLABLE_LIST = "syllable_list"


@dataclass(frozen=True)
class PassphraseSpec:
    """
    Parameters of a passphrase.

    ``length`` is the number of words. An empty separator and a missing
    strategy mean "use the default" (a single space and FREEFORM).
    """
    length: int
    separator: str = ""
    strategy: Optional[Strategy] = None
    include: Tuple[str, ...] = ()
    exclude: Tuple[str, ...] = ()

    def __post_init__(self):
        if isinstance(self.strategy, str):
            object.__setattr__(self, 'strategy', Strategy(self.strategy))
        object.__setattr__(self, 'include', tuple(self.include))
        object.__setattr__(self, 'exclude', tuple(self.exclude))

    def with_defaults(self) -> "PassphraseSpec":
        separator = self.separator or get_setting("passphrase.default_separator", " ")
        strategy = self.strategy or Strategy.FREEFORM
        return replace(self, separator=separator, strategy=strategy)


def _is_printable_ascii(text: str) -> bool:
    return text.isascii() and text.isprintable()


def validate_passphrase_spec(spec: PassphraseSpec) -> PassphraseSpec:
    """
    Check ``spec`` and return it with defaults filled in.

    Raises:
        InvalidLengthError, IncludeExceedsLengthError, IncludeExcludeConflictError,
        InvalidSeparatorError, InvalidIncludeWordError
    """
    if spec.length < 1:
        raise InvalidLengthError("passphrase length must be equal to or higher than 1")

    if len(spec.include) > spec.length:
        raise IncludeExceedsLengthError("number of words to include exceed the passphrase length")

    excluded = set(spec.exclude)
    for word in spec.include:
        if word in excluded:
            raise IncludeExcludeConflictError(f"word {word!r} cannot be included and excluded")

    if spec.separator and not (len(spec.separator) == 1 and _is_printable_ascii(spec.separator)):
        raise InvalidSeparatorError(f"separator {spec.separator!r} contains invalid characters")

    spec = spec.with_defaults()

    for word in spec.include:
        if not word or not _is_printable_ascii(word):
            raise InvalidIncludeWordError(f"included word {word!r} contains invalid characters")
        if spec.separator in word:
            raise InvalidIncludeWordError(
                f"included word {word!r} contains the separator {spec.separator!r}"
            )
    return spec


class PassphraseGenerator:
    """Generates passphrases that satisfy a :class:`PassphraseSpec`."""

    def __init__(self,
                 rng: SecureRandom = None,
                 words: Sequence[str] = None,
                 syllables: Sequence[str] = None,
                 workers: int = None,
                 redraw_factor: int = None):
        """
        Args:
            rng: Random source (defaults to the shared one)
            words: Word dictionary (defaults to the bundled list)
            syllables: Syllable dictionary (defaults to the bundled list)
            workers: Threads for FREEFORM synthesis; defaults to
                ``passphrase.freeform_workers``
            redraw_factor: Excluded-word redraws allowed per word; defaults
                to ``passphrase.exclude_redraw_factor``
        """
        self.rng = rng or get_rng()
        self._words = tuple(words) if words is not None else None
        self._syllables = tuple(syllables) if syllables is not None else None
        if workers is None:
            workers = get_setting("passphrase.freeform_workers", 1)
        if redraw_factor is None:
            redraw_factor = require_setting("passphrase.exclude_redraw_factor")
        self.workers = max(1, int(workers))
        self.redraw_factor = int(redraw_factor)

    @property
    def words(self) -> Tuple[str, ...]:
        if self._words is None:
            self._words = load_words()
        return self._words

    @property
    def syllables(self) -> Tuple[str, ...]:
        if self._syllables is None:
            self._syllables = load_syllables()
        return self._syllables

    def dictionary_size(self, strategy: Strategy) -> int:
        """Number of entries a list strategy samples from."""
        if strategy == Strategy.WORD_LIST:
            return len(self.words)
        if strategy == Strategy.SYLLABLE_LIST:
            return len(self.syllables)
        raise ValueError(f"{strategy} does not use a dictionary")

    def generate(self, spec: PassphraseSpec) -> str:
        spec = validate_passphrase_spec(spec)

        words = self.draw_words(spec.strategy, spec.length - len(spec.include))
        if spec.include:
            words = self._include_words(words, spec.include)
        if spec.exclude:
            self._exclude_words(words, spec)

        return spec.separator.join(words)

    def draw_words(self, strategy: Strategy, count: int) -> List[str]:
        """Draw ``count`` words with ``strategy``."""
        if strategy == Strategy.FREEFORM and self.workers > 1 and count > 1:
            # Every word is finished before the caller sees any of them
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                futures = [executor.submit(self.freeform_word) for _ in range(count)]
                return [future.result() for future in futures]
        return [self.draw_word(strategy) for _ in range(count)]

    def draw_word(self, strategy: Strategy) -> str:
        if strategy == Strategy.FREEFORM:
            return self.freeform_word()
        if strategy == Strategy.WORD_LIST:
            return self.rng.choice(self.words)
        if strategy == Strategy.SYLLABLE_LIST:
            return self.rng.choice(self.syllables)
        raise ValueError(f"Unknown strategy: {strategy!r}")

    def freeform_word(self) -> str:
        """Synthesize a 3-12 letter word; each letter is a vowel with probability 4/11."""
        length = self.rng.randint(FREEFORM_MIN_LETTERS, FREEFORM_MAX_LETTERS)
        letters = []
        for _ in range(length):
            if self.rng.randbelow(_LETTER_DRAW) < _VOWEL_CUTOFF:
                letters.append(self.rng.choice(VOWELS))
            else:
                letters.append(self.rng.choice(CONSONANTS))
        return "".join(letters)

    def _include_words(self, words: List[str], include: Sequence[str]) -> List[str]:
        """Place ``include`` at random slots, then shuffle the whole passphrase."""
        total = len(words) + len(include)
        slots: List[Optional[str]] = [None] * total
        for pos, word in zip(self.rng.positions(total, len(include)), include):
            slots[pos] = word

        generated = iter(words)
        result = [word if word is not None else next(generated) for word in slots]
        self.rng.shuffle(result)
        return result

    def _exclude_words(self, words: List[str], spec: PassphraseSpec) -> None:
        """Redraw excluded words in place with the spec's strategy."""
        excluded = set(spec.exclude)
        limit = self.redraw_factor * spec.length
        redraws = 0

        for i in range(len(words)):
            while words[i] in excluded:
                if redraws >= limit:
                    raise RepairLimitError(
                        f"could not avoid excluded words after {redraws} redraws"
                    )
                words[i] = self.draw_word(spec.strategy)
                redraws += 1

        if redraws:
            logger.debug(f"Redrew {redraws} excluded word(s)")

