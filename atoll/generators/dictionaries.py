#!/usr/bin/env python3
"""
Static word and syllable lists used by the passphrase strategies.

Both lists are loaded once from YAML on first use and kept as tuples, so
every generator in the process shares the same read-only data.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Tuple

import yaml

logger = logging.getLogger(__name__)

LISTS_DIR = Path(__file__).parent / 'lists'


@lru_cache(maxsize=4)
def _load_list(filename: str, key: str) -> Tuple[str, ...]:
    filepath = LISTS_DIR / filename
    with open(filepath, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}
    entries = tuple(str(entry) for entry in data.get(key) or [])
    if not entries:
        raise ValueError(f"{filename} has no '{key}' entries")
    logger.debug(f"Loaded {len(entries)} {key} from {filename}")
    return entries


def load_words() -> Tuple[str, ...]:
    """Word dictionary for the word-list strategy."""
    return _load_list('words.yaml', 'words')


def load_syllables() -> Tuple[str, ...]:
    """Syllable dictionary for the syllable-list strategy."""
    return _load_list('syllables.yaml', 'syllables')
