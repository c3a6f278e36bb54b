#!/usr/bin/env python3
"""
Secret Generators
=================
Provides the generation engine:
- Password: character passwords built from levels
- Passphrase: word sequences (freeform, word list, syllable list)
- Pool/Sanitizer: the building blocks both rely on
"""

from .randomness import SecureRandom, get_rng
from .pool import (
    Level,
    LOWERCASE,
    UPPERCASE,
    DIGIT,
    SPACE,
    SPECIAL,
    ALL_LEVELS,
    WorkingPool,
    build_pool,
    resolve_level,
    validate_levels,
)
from .sanitizer import PatternSanitizer, load_weak_patterns
from .dictionaries import load_words, load_syllables
from .password import (
    PasswordGenerator,
    PasswordSpec,
    infer_spec,
)
from .passphrase import (
    PassphraseGenerator,
    PassphraseSpec,
    Strategy,
    validate_passphrase_spec,
)

__all__ = [
    # Randomness
    'SecureRandom',
    'get_rng',
    # Levels and pools
    'Level',
    'LOWERCASE',
    'UPPERCASE',
    'DIGIT',
    'SPACE',
    'SPECIAL',
    'ALL_LEVELS',
    'WorkingPool',
    'build_pool',
    'resolve_level',
    'validate_levels',
    # Sanitizer
    'PatternSanitizer',
    'load_weak_patterns',
    # Dictionaries
    'load_words',
    'load_syllables',
    # Password
    'PasswordGenerator',
    'PasswordSpec',
    'infer_spec',
    # Passphrase
    'PassphraseGenerator',
    'PassphraseSpec',
    'Strategy',
    'validate_passphrase_spec',
]
