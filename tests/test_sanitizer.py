"""
Tests for Pattern Sanitizer
===========================
Tests weak-pattern detection, boundary whitespace trimming/backfill
and the reshuffle cap.
"""

import random

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from atoll.errors import RepairLimitError
from atoll.generators import PatternSanitizer, SecureRandom, WorkingPool, load_weak_patterns


@pytest.fixture
def rng():
    return SecureRandom(random.Random(99))


@pytest.fixture
def sanitizer(rng):
    return PatternSanitizer(rng=rng)


class TestWeakPatterns:
    """Tests for the weak-pattern catalogue."""

    def test_catalogue_loaded(self):
        patterns = load_weak_patterns()
        assert "qwerty" in patterns
        assert "!@#$" in patterns
        assert "zaq1" in patterns
        assert len(patterns) == 15

    @pytest.mark.parametrize("secret", [
        "xxPASSxx", "myAdmin", "ABC", "9123", "Qwerty!", "zZaQ1", "a!@#$b", "!q@w",
    ])
    def test_detects_case_insensitive(self, sanitizer, secret):
        assert sanitizer.has_weak_pattern(secret)

    @pytest.mark.parametrize("secret", ["x7#Kq9", "ab c", "1 2 3", "pas s"])
    def test_clean_secrets(self, sanitizer, secret):
        assert not sanitizer.has_weak_pattern(secret)

    def test_custom_patterns_are_literal(self, rng):
        sanitizer = PatternSanitizer(rng=rng, patterns=["a.c"])
        assert sanitizer.has_weak_pattern("xa.cx")
        assert not sanitizer.has_weak_pattern("abc")

    def test_no_patterns(self, rng):
        sanitizer = PatternSanitizer(rng=rng, patterns=[])
        assert not sanitizer.has_weak_pattern("password123")


class TestSanitize:
    """Tests for sanitize()."""

    def test_trims_and_backfills(self, rng):
        sanitizer = PatternSanitizer(rng=rng, patterns=[])
        result = sanitizer.sanitize("  xy  ", "kmn", 6)
        assert len(result) == 6
        assert " " not in result
        assert "x" in result and "y" in result
        assert set(result) <= set("xykmn")

    def test_backfill_consumes_working_pool(self, rng):
        sanitizer = PatternSanitizer(rng=rng, patterns=[])
        pool = WorkingPool("kmn", repeat=False)
        result = sanitizer.sanitize(" xy ", pool, 4)
        assert len(result) == 4
        assert len(set(result)) == 4
        assert len(pool) == 1

    def test_reinserts_trimmed_space_when_pool_is_empty(self, rng):
        sanitizer = PatternSanitizer(rng=rng, patterns=[])
        result = sanitizer.sanitize(" ab", WorkingPool("", repeat=False), 3)
        assert result == "a b"

    def test_reshuffles_weak_pattern_away(self, sanitizer):
        result = sanitizer.sanitize("abcdef", "xyz", 6)
        assert sorted(result) == sorted("abcdef")
        assert not sanitizer.has_weak_pattern(result)

    def test_clean_secret_untouched(self, sanitizer):
        assert sanitizer.sanitize("x7#Kq9", "xyz", 6) == "x7#Kq9"

    def test_reshuffle_cap(self, rng):
        sanitizer = PatternSanitizer(rng=rng, patterns=["a"], max_shuffles=5)
        with pytest.raises(RepairLimitError):
            sanitizer.sanitize("aaa", "a", 3)

    def test_max_shuffles_from_settings(self, rng):
        assert PatternSanitizer(rng=rng).max_shuffles == 10000
