"""
Exception hierarchy for crackle.

Two families:
  - FatalError       : the process cannot continue (corpus, config, feedback I/O).
  - RecoverableError : the caller may retry or end the session gracefully.

Validation errors also subclass ValueError so callers that only care about
"bad input" can catch the builtin.
"""

from __future__ import annotations

from .scoring import EXPECTED_FORMAT, WORD_LENGTH


class CrackleError(Exception):
    """Base class for every error raised by crackle."""


# ---- Fatal ----

class FatalError(CrackleError):
    pass


class CorpusError(FatalError):
    """Word list missing, unreadable, or without a single valid word."""


class ConfigError(FatalError):
    pass


class FeedbackSourceClosed(FatalError):
    """The feedback source hit EOF or failed while reading."""


# ---- Recoverable ----

class RecoverableError(CrackleError):
    pass


class InvalidInputFormat(RecoverableError, ValueError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid input format: expected '{EXPECTED_FORMAT}' format, got '{value}'")


class InvalidWordLength(RecoverableError, ValueError):
    def __init__(self, length: int):
        self.length = length
        super().__init__(f"Word must be exactly {WORD_LENGTH} characters, got {length}")


class InvalidWordCharacter(RecoverableError, ValueError):
    def __init__(self, character: str):
        self.character = character
        super().__init__(f"Word contains invalid character '{character}'")


class NoGuessFound(RecoverableError):
    def __init__(self):
        super().__init__("No words match current constraints")


# ---- Misuse / control flow ----

class ProbabilitiesNotFinalized(CrackleError, RuntimeError):
    def __init__(self):
        super().__init__("Probabilities not finalized yet, call finalize() first")


class SessionAborted(CrackleError):
    """The player asked to leave the current session."""
