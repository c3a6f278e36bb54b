#!/usr/bin/env python3
"""
Secret Strength
===============
Entropy, keyspace and brute-force time of generated secrets.

Entropy is ``log2(alphabet ** length)``:
- passwords: alphabet = pool size + number of included characters
- list passphrases: alphabet = dictionary size + included - excluded words,
  length = number of words
- freeform passphrases: alphabet = 26 letters, length = letters actually
  generated, so the secret itself is needed

The power is computed on integers, so large secrets never overflow and the
result is never negative infinity.
"""

import math
from typing import Optional, Union

from .generators.passphrase import (
    CONSONANTS,
    VOWELS,
    PassphraseGenerator,
    PassphraseSpec,
    Strategy,
)
from .generators.password import PasswordSpec
from .generators.pool import build_pool
from .settings import require_setting

FREEFORM_ALPHABET = len(VOWELS) + len(CONSONANTS)


def _log2_power(base: int, exponent: int) -> float:
    if base <= 1 or exponent <= 0:
        return 0.0
    return math.log2(base ** exponent)


def password_entropy(spec: PasswordSpec) -> float:
    """Entropy in bits of a password generated from ``spec``."""
    if spec.length < 1 or not spec.levels:
        return 0.0
    pool = build_pool(spec.levels, spec.exclude)
    return _log2_power(len(pool) + len(spec.include), spec.length)


def passphrase_entropy(spec: PassphraseSpec,
                       secret: Optional[str] = None,
                       dictionary_size: Optional[int] = None) -> float:
    """
    Entropy in bits of a passphrase generated from ``spec``.

    Args:
        spec: Passphrase parameters
        secret: The generated passphrase; required for FREEFORM, which
            returns 0.0 without it
        dictionary_size: Size of the list the words came from; defaults to
            the bundled dictionary of the spec's strategy
    """
    spec = spec.with_defaults()

    if spec.strategy == Strategy.FREEFORM:
        if not secret:
            return 0.0
        letters = len(secret) - len(spec.separator) * (spec.length - 1)
        return _log2_power(FREEFORM_ALPHABET, letters)

    if dictionary_size is None:
        dictionary_size = PassphraseGenerator(workers=1).dictionary_size(spec.strategy)
    alphabet = dictionary_size + len(spec.include) - len(spec.exclude)
    return _log2_power(alphabet, spec.length)


def entropy(spec: Union[PasswordSpec, PassphraseSpec], secret: Optional[str] = None) -> float:
    """Entropy in bits for either kind of spec."""
    if isinstance(spec, PasswordSpec):
        return password_entropy(spec)
    if isinstance(spec, PassphraseSpec):
        return passphrase_entropy(spec, secret)
    raise TypeError(f"Unsupported spec type: {type(spec).__name__}")


def keyspace(bits: float) -> float:
    """Number of possible secrets, ``2 ** bits`` (inf once it no longer fits a float)."""
    try:
        return math.pow(2.0, bits)
    except OverflowError:
        return math.inf


def seconds_to_crack(bits: float, guesses_per_second: float = None) -> float:
    """
    Time in seconds for a brute force attack to cover the whole keyspace.

    The attacker rate defaults to ``entropy.guesses_per_second`` (one
    trillion guesses per second).
    """
    if guesses_per_second is None:
        guesses_per_second = require_setting("entropy.guesses_per_second")
    if guesses_per_second <= 0:
        raise ValueError("guesses_per_second must be positive")
    return keyspace(bits) / guesses_per_second
