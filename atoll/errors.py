#!/usr/bin/env python3
"""
Errors
======
Every failure raised by the generators derives from :class:`AtollError`.

Argument problems also subclass ``ValueError`` so callers that only care
about "bad input" can catch that. Nothing is retried and no partial secret
is returned when one of these is raised.
"""


class AtollError(Exception):
    """Base class for all atoll errors."""


# =============================================================================
# Validation
# =============================================================================

class InvalidLengthError(AtollError, ValueError):
    """Password length or passphrase word count is lower than 1."""


class NoLevelsError(AtollError, ValueError):
    """A password was requested without any character level."""


class IncludeExcludeConflictError(AtollError, ValueError):
    """The same character or word is both required and forbidden."""


class IncludeExceedsLengthError(AtollError, ValueError):
    """More characters or words must be included than fit in the secret."""


class InvalidIncludeError(AtollError, ValueError):
    """An included character is not a single printable ASCII character."""


class InvalidIncludeWordError(AtollError, ValueError):
    """An included word is empty, not printable ASCII or contains the separator."""


class InvalidSeparatorError(AtollError, ValueError):
    """The passphrase separator is not a single printable ASCII character."""


class EmptyLevelError(AtollError, ValueError):
    """A requested character level has no characters."""


class LevelFullyExcludedError(AtollError, ValueError):
    """Every character of a requested level is excluded."""


# =============================================================================
# Infeasibility / internal
# =============================================================================

class PoolExhaustedError(AtollError, ValueError):
    """Repetition is off and the pool cannot fill the requested length."""


class RepairLimitError(AtollError, RuntimeError):
    """A reshuffle or redraw loop hit its configured cap."""


__all__ = [
    "AtollError",
    "InvalidLengthError",
    "NoLevelsError",
    "IncludeExcludeConflictError",
    "IncludeExceedsLengthError",
    "InvalidIncludeError",
    "InvalidIncludeWordError",
    "InvalidSeparatorError",
    "EmptyLevelError",
    "LevelFullyExcludedError",
    "PoolExhaustedError",
    "RepairLimitError",
]
