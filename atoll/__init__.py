#!/usr/bin/env python3
"""
atoll - Password & Passphrase Generator
=======================================

Generates cryptographically secure passwords and passphrases under
composition constraints and reports how strong they are.

Quick Start
-----------
    from atoll import Atoll, PasswordSpec, PassphraseSpec, Strategy, LOWERCASE, DIGIT

    kit = Atoll()

    secret = kit.new_secret(PasswordSpec(length=16, levels=(LOWERCASE, DIGIT)))
    print(secret.value, secret.entropy, secret.seconds_to_crack)

    words = kit.generate_passphrase(PassphraseSpec(length=6, strategy=Strategy.WORD_LIST))

Modules
-------
    atoll.generators - Pools, sanitizer, password and passphrase generators
    atoll.strength   - Entropy, keyspace and time to crack
    atoll.errors     - Exception hierarchy
    atoll.settings   - YAML settings (configs/app.yaml)
"""

__version__ = "0.1.0"

from dataclasses import dataclass, field
from typing import Union

from . import errors
from . import generators
from . import strength

from .errors import AtollError
from .generators import (
    Level,
    LOWERCASE,
    UPPERCASE,
    DIGIT,
    SPACE,
    SPECIAL,
    ALL_LEVELS,
    PasswordGenerator,
    PasswordSpec,
    PassphraseGenerator,
    PassphraseSpec,
    PatternSanitizer,
    SecureRandom,
    Strategy,
    get_rng,
)
from .generators import infer_spec as secret_from_string
from .strength import entropy, keyspace, seconds_to_crack

Spec = Union[PasswordSpec, PassphraseSpec]


@dataclass
class Secret:
    """A generated secret with its strength."""
    value: str
    spec: Spec = field(repr=False)
    entropy: float = 0.0

    @property
    def keyspace(self) -> float:
        return keyspace(self.entropy)

    @property
    def seconds_to_crack(self) -> float:
        return seconds_to_crack(self.entropy)


class Atoll:
    """
    Main interface for secret generation.

    Holds one random source and reusable generators. Each call works on its
    own pool and buffers, so one instance can serve many calls.

    Examples:
        kit = Atoll()
        password = kit.generate_password(PasswordSpec(length=20, levels=("lower", "digit")))
        passphrase = kit.generate_passphrase(PassphraseSpec(length=5))
    """

    def __init__(self, rng: SecureRandom = None, workers: int = None):
        self.rng = rng or get_rng()
        self.passwords = PasswordGenerator(rng=self.rng)
        self.passphrases = PassphraseGenerator(rng=self.rng, workers=workers)

    def generate_password(self, spec: PasswordSpec) -> str:
        return self.passwords.generate(spec)

    def generate_passphrase(self, spec: PassphraseSpec) -> str:
        return self.passphrases.generate(spec)

    def generate(self, spec: Spec) -> str:
        """Generate a password or passphrase depending on the spec type."""
        if isinstance(spec, PasswordSpec):
            return self.generate_password(spec)
        if isinstance(spec, PassphraseSpec):
            return self.generate_passphrase(spec)
        raise TypeError(f"Unsupported spec type: {type(spec).__name__}")

    def entropy(self, spec: Spec, secret: str = None) -> float:
        if isinstance(spec, PassphraseSpec):
            spec = spec.with_defaults()
            if spec.strategy != Strategy.FREEFORM:
                size = self.passphrases.dictionary_size(spec.strategy)
                return strength.passphrase_entropy(spec, secret, dictionary_size=size)
        return entropy(spec, secret)

    def new_secret(self, spec: Spec) -> Secret:
        """Generate a secret and measure it."""
        value = self.generate(spec)
        return Secret(value=value, spec=spec, entropy=self.entropy(spec, value))


# =============================================================================
# Convenience Functions
# =============================================================================

def generate_password(spec: Union[PasswordSpec, int], levels=None, **kwargs) -> str:
    """
    Generate a password with the shared random source.

    Examples:
        generate_password(PasswordSpec(length=16, levels=ALL_LEVELS))
        generate_password(16, levels=("lower", "digit"), exclude="0O")
    """
    if not isinstance(spec, PasswordSpec):
        spec = PasswordSpec(length=spec, levels=tuple(levels or ()), **kwargs)
    return PasswordGenerator().generate(spec)


def generate_passphrase(spec: Union[PassphraseSpec, int], strategy=None, **kwargs) -> str:
    """Generate a passphrase with the shared random source."""
    if not isinstance(spec, PassphraseSpec):
        spec = PassphraseSpec(length=spec, strategy=strategy, **kwargs)
    return PassphraseGenerator().generate(spec)


def new_secret(spec: Spec) -> Secret:
    """Generate a secret together with its entropy."""
    return Atoll().new_secret(spec)


__all__ = [
    'Atoll',
    'Secret',
    'AtollError',
    'Level',
    'LOWERCASE',
    'UPPERCASE',
    'DIGIT',
    'SPACE',
    'SPECIAL',
    'ALL_LEVELS',
    'PasswordSpec',
    'PassphraseSpec',
    'Strategy',
    'PasswordGenerator',
    'PassphraseGenerator',
    'PatternSanitizer',
    'SecureRandom',
    'get_rng',
    'generate_password',
    'generate_passphrase',
    'new_secret',
    'secret_from_string',
    'entropy',
    'keyspace',
    'seconds_to_crack',
    'errors',
    'generators',
    'strength',
]
