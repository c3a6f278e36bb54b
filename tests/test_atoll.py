"""
Tests for the atoll package interface
=====================================
Tests the Atoll facade, module-level helpers, spec inference,
the random source and the settings loader.
"""

import math
import random

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import atoll
from atoll import (
    ALL_LEVELS,
    DIGIT,
    LOWERCASE,
    Atoll,
    PassphraseSpec,
    PasswordSpec,
    SecureRandom,
    Secret,
    Strategy,
    secret_from_string,
)
from atoll.errors import AtollError, IncludeExcludeConflictError, InvalidLengthError
from atoll.settings import get_setting, load_app_config


@pytest.fixture
def kit():
    return Atoll(rng=SecureRandom(random.Random(11)))


class TestAtoll:
    """Tests for the Atoll facade."""

    def test_new_password_secret(self, kit):
        spec = PasswordSpec(length=18, levels=ALL_LEVELS, include="!")
        secret = kit.new_secret(spec)
        assert isinstance(secret, Secret)
        assert len(secret.value) == 18
        assert secret.entropy == atoll.entropy(spec)
        assert secret.keyspace == atoll.keyspace(secret.entropy)
        assert secret.seconds_to_crack == secret.keyspace / 1e12

    def test_new_freeform_secret(self, kit):
        spec = PassphraseSpec(length=5, separator="_")
        secret = kit.new_secret(spec)
        letters = len(secret.value) - 4
        assert secret.entropy == pytest.approx(letters * math.log2(26))

    def test_new_word_list_secret(self, kit):
        spec = PassphraseSpec(length=5, strategy=Strategy.WORD_LIST)
        secret = kit.new_secret(spec)
        size = kit.passphrases.dictionary_size(Strategy.WORD_LIST)
        assert secret.entropy == pytest.approx(5 * math.log2(size))

    def test_generate_dispatch(self, kit):
        assert len(kit.generate(PasswordSpec(length=9, levels=(DIGIT,)))) == 9
        assert len(kit.generate(PassphraseSpec(length=3)).split(" ")) == 3
        with pytest.raises(TypeError):
            kit.generate({"length": 3})

    def test_secret_repr_hides_spec(self, kit):
        secret = kit.new_secret(PasswordSpec(length=6, levels=(LOWERCASE,)))
        assert "PasswordSpec" not in repr(secret)


class TestModuleFunctions:
    """Tests for the module-level helpers."""

    def test_generate_password(self):
        assert len(atoll.generate_password(PasswordSpec(length=12, levels=("lower", "digit")))) == 12

    def test_generate_passphrase(self):
        passphrase = atoll.generate_passphrase(PassphraseSpec(length=4, separator="-"))
        assert len(passphrase.split("-")) == 4

    def test_length_and_keywords(self):
        password = atoll.generate_password(10, levels=("digit",), exclude="0", repeat=True)
        assert len(password) == 10
        assert set(password) <= set("123456789")

        passphrase = atoll.generate_passphrase(3, strategy="word_list", separator="+")
        assert len(passphrase.split("+")) == 3

    def test_new_secret(self):
        secret = atoll.new_secret(PassphraseSpec(length=3, strategy=Strategy.SYLLABLE_LIST))
        assert secret.entropy > 0

    def test_invalid_length(self):
        with pytest.raises(InvalidLengthError):
            atoll.generate_password(PasswordSpec(length=0, levels=(LOWERCASE,)))

    def test_include_exclude_conflict(self):
        spec = PassphraseSpec(length=2, include=("go",), exclude=("go",))
        with pytest.raises(IncludeExcludeConflictError):
            atoll.generate_passphrase(spec)

    def test_errors_share_base_class(self):
        with pytest.raises(AtollError):
            atoll.generate_passphrase(PassphraseSpec(length=0))


class TestSecretFromString:
    """Tests for spec inference from an example secret."""

    def test_all_levels(self):
        spec = secret_from_string("aB1 _")
        assert spec.levels == ALL_LEVELS
        assert spec.length == 5
        assert spec.repeat is False

    def test_empty(self):
        spec = secret_from_string("")
        assert spec.length == 0
        assert spec.levels == ()

    def test_repetition_detected(self):
        spec = secret_from_string("aab")
        assert spec.levels == (LOWERCASE,)
        assert spec.repeat is True

    def test_unknown_characters_use_all_levels(self):
        spec = secret_from_string("ñé")
        assert spec.levels == ALL_LEVELS
        assert spec.length == 2

    def test_inferred_spec_generates(self, kit):
        spec = secret_from_string("Tr0ub4dor&3")
        assert len(kit.generate_password(spec)) == len("Tr0ub4dor&3")


class TestSecureRandom:
    """Tests for the random source wrapper."""

    @pytest.fixture
    def rng(self):
        return SecureRandom(random.Random(5))

    def test_randbelow_bounds(self, rng):
        assert all(0 <= rng.randbelow(7) < 7 for _ in range(200))
        with pytest.raises(ValueError):
            rng.randbelow(0)

    def test_randint_inclusive(self, rng):
        values = {rng.randint(3, 5) for _ in range(200)}
        assert values == {3, 4, 5}

    def test_choice(self, rng):
        assert rng.choice("xyz") in "xyz"
        with pytest.raises(IndexError):
            rng.choice([])

    def test_shuffle_is_permutation(self, rng):
        items = list(range(50))
        rng.shuffle(items)
        assert sorted(items) == list(range(50))
        assert items != list(range(50))

    def test_positions_distinct(self, rng):
        positions = rng.positions(10, 4)
        assert len(set(positions)) == 4
        assert all(0 <= p < 10 for p in positions)
        with pytest.raises(ValueError):
            rng.positions(3, 4)

    def test_shared_instance(self):
        assert atoll.get_rng() is atoll.get_rng()


class TestSettings:
    """Tests for the YAML settings loader."""

    def test_guess_rate(self):
        assert get_setting("entropy.guesses_per_second") == 10 ** 12

    def test_missing_key_default(self):
        assert get_setting("entropy.missing", 5) == 5
        assert get_setting("nowhere.at.all") is None

    def test_config_override(self, tmp_path, monkeypatch):
        config = tmp_path / "app.yaml"
        config.write_text("entropy:\n  guesses_per_second: 1000\n", encoding="utf-8")
        monkeypatch.setenv("ATOLL_CONFIG", str(config))
        load_app_config.cache_clear()
        try:
            assert get_setting("entropy.guesses_per_second") == 1000
            assert atoll.seconds_to_crack(10) == 1.024
        finally:
            monkeypatch.delenv("ATOLL_CONFIG")
            load_app_config.cache_clear()
        assert get_setting("entropy.guesses_per_second") == 10 ** 12
