"""
Constraint engine: decodes player feedback and picks the next guess.

One engine per game. It owns a FeedbackState, counts guesses against an
optional budget, and each round:
  1) filters the caller's candidate pool through the accumulated constraints
     (the pool is expected to match the green pattern already, see
     Corpus.matching)
  2) builds a fresh FrequencyModel from the survivors
  3) proposes that model's best word

The engine never blocks and never talks to the player directly; the session
harness does that.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from crackle.model.frequency import FrequencyModel

from .constraints import FeedbackState, filter_candidates
from .errors import NoGuessFound
from .scoring import CORRECT, PRESENT
from .validation import check_word, parse_feedback

log = logging.getLogger(__name__)

IN_PROGRESS = "in_progress"
WON = "won"
EXHAUSTED = "exhausted"


class ConstraintEngine:
    def __init__(self, max_guesses: Optional[int] = None):
        if max_guesses is not None and max_guesses < 1:
            raise ValueError(f"max_guesses must be >= 1, got {max_guesses}")
        self.max_guesses = max_guesses
        self.state = FeedbackState()
        self.guesses = 0
        self.history: List[Tuple[str, str]] = []

    @property
    def current_guess(self) -> str:
        return self.state.current_guess

    def set_starting_guess(self, word: str) -> None:
        """
        Seed the first guess. Only meaningful before any feedback.

        Raises InvalidWordLength / InvalidWordCharacter on a malformed word.
        """
        if self.history:
            raise RuntimeError("starting guess must be set before any feedback")
        self.state.current_guess = check_word(word)
        self.guesses = 1

    # ---- feedback ----

    def apply_feedback(self, signal: Union[str, Sequence[str]]) -> None:
        """
        Fold one round of feedback for `current_guess` into the state.

        Symbol i describes letter i of the current guess:
          g -> the letter is resolved at i
          y -> the letter is required, but not at i
          n -> the letter is excluded, unless this round or an earlier one
               shows it elsewhere; then it is only forbidden at i

        Raises InvalidInputFormat (state untouched) on a malformed signal.
        """
        symbols = parse_feedback(signal)
        guess = self.state.current_guess
        if len(guess) != len(symbols):
            raise RuntimeError("apply_feedback called without a current guess")

        st = self.state
        resolved = list(st.resolved)
        pending_absent: List[Tuple[str, int]] = []

        # Pass 1: classify each position
        for i, (ch, sym) in enumerate(zip(guess, symbols)):
            if sym == CORRECT:
                resolved[i] = ch
            elif sym == PRESENT:
                st.forbidden_positions.add((ch, i))
                st.required_characters.add(ch)
            else:
                pending_absent.append((ch, i))
        st.resolved = tuple(resolved)

        # Pass 2: a gray letter known to be in the answer is only wrong here
        for ch, i in pending_absent:
            if ch in st.resolved or ch in st.required_characters:
                st.forbidden_positions.add((ch, i))
            else:
                st.excluded_characters.add(ch)

        pattern = "".join(symbols)
        self.history.append((guess, pattern))
        log.debug("feedback %s -> %s | resolved=%s required=%s excluded=%s",
                  guess, pattern, st.pattern(),
                  "".join(sorted(st.required_characters)),
                  "".join(sorted(st.excluded_characters)))

    def has_won(self) -> bool:
        return all(c is not None for c in self.state.resolved)

    def out_of_guesses(self) -> bool:
        return self.max_guesses is not None and self.guesses >= self.max_guesses

    @property
    def status(self) -> str:
        if self.has_won():
            return WON
        if self.out_of_guesses():
            return EXHAUSTED
        return IN_PROGRESS

    # ---- guessing ----

    def candidates(self, pool: Iterable[str]) -> List[str]:
        return filter_candidates(pool, self.state)

    def select_next_guess(self, pool: Iterable[str]) -> str:
        """
        Pick the most probable word of `pool` that fits every constraint.

        The current guess is never proposed again. Raises NoGuessFound when
        nothing survives the filter.
        """
        survivors = self.candidates(pool)
        model = FrequencyModel.build(survivors)
        best = model.best_word()
        if best is None:
            log.info("no candidates left after %d guess(es)", self.guesses)
            raise NoGuessFound()

        log.debug("%d candidate(s); best %s (%.2f)", len(survivors), best.text, best.score)
        self.state.current_guess = best.text
        self.guesses += 1
        return best.text
