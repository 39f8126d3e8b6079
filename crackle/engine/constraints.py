"""
Accumulated feedback knowledge and candidate filtering.

FeedbackState holds everything learned from the player so far:
  - resolved            : 5 slots, None or the confirmed (green) letter
  - forbidden_positions : (letter, index) pairs the answer cannot have
  - required_characters : letters the answer must contain somewhere
  - excluded_characters : letters the answer does not contain at all
  - current_guess       : the last word proposed to the player

matches_pattern narrows a word list to the green pattern; filter_candidates
then turns the rest of that knowledge into a shrinking candidate pool. The
per-word test (is_consistent) only reads the state, so filtering the same
pool twice, or the same words in another order, keeps the same words.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set, Tuple

from .scoring import WORD_LENGTH

Resolved = Tuple[Optional[str], ...]

# Wildcard for an unresolved slot in a green pattern
UNKNOWN = "_"


def _unknown_slots() -> Resolved:
    return (None,) * WORD_LENGTH


@dataclass
class FeedbackState:
    resolved: Resolved = field(default_factory=_unknown_slots)
    forbidden_positions: Set[Tuple[str, int]] = field(default_factory=set)
    required_characters: Set[str] = field(default_factory=set)
    excluded_characters: Set[str] = field(default_factory=set)
    current_guess: str = ""

    def pattern(self) -> str:
        """Resolved slots as text, '_' for unknown (e.g. 'a__l_')."""
        return "".join(c if c is not None else UNKNOWN for c in self.resolved)

    def copy(self) -> "FeedbackState":
        return FeedbackState(
            resolved=self.resolved,
            forbidden_positions=set(self.forbidden_positions),
            required_characters=set(self.required_characters),
            excluded_characters=set(self.excluded_characters),
            current_guess=self.current_guess,
        )


def is_consistent(word: str, state: FeedbackState) -> bool:
    """
    True if `word` could still be the answer given `state`.

    A word survives iff:
      - it is not the guess we just made
      - every required letter occurs in it
      - none of its (letter, index) pairs is forbidden
      - none of its letters is excluded
    """
    if word == state.current_guess:
        return False

    letters = set(word)
    if not state.required_characters <= letters:
        return False

    for i, c in enumerate(word):
        if c in state.excluded_characters or (c, i) in state.forbidden_positions:
            return False
    return True


def filter_candidates(words: Iterable[str], state: FeedbackState) -> List[str]:
    """
    Keep only words consistent with `state` (order preserved as in `words`).
    """
    return [w for w in words if is_consistent(w, state)]


def matches_pattern(word: str, pattern: str) -> bool:
    """
    True if `word` has every confirmed letter of `pattern` in place.
    `pattern` is FeedbackState.pattern() text: a letter or '_' per slot.
    """
    if len(word) != len(pattern):
        return False
    return all(p == UNKNOWN or p == c for c, p in zip(word, pattern))
