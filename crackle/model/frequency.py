"""
Positional Letter Frequency model.

Idea:
  Build per-position histograms from the CURRENT candidate pool.
  A letter's probability at a position is its integer share of that
  position's total (floor of frequency * 100 / total).
  A word's score is the sum of its five letter probabilities / 100.

Scores are only comparable within one build: they are not true
probabilities, and a model is rebuilt (not mutated) whenever the pool
changes. Typical use:

    model = FrequencyModel.build(candidates)
    best = model.best_word()

Fast: O(|pool|*N) to build and to score.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from crackle.engine.errors import ProbabilitiesNotFinalized
from crackle.engine.scoring import WORD_LENGTH
from crackle.engine.validation import check_word

log = logging.getLogger(__name__)

# Probabilities are integer percentages.
PERCENT = 100


@dataclass
class LetterStat:
    """Frequency of one character at one position, and its derived percentage."""
    character: str
    position: int
    frequency: int = 0
    probability: Optional[int] = None   # None until finalize()


class ScoredWord:
    """A five-letter word plus the score assigned by the model that holds it."""

    __slots__ = ("letters", "_score")

    def __init__(self, word: str):
        self.letters: Tuple[str, ...] = tuple(check_word(word))
        self._score: Optional[float] = None

    @property
    def text(self) -> str:
        return "".join(self.letters)

    @property
    def score(self) -> float:
        if self._score is None:
            raise ProbabilitiesNotFinalized()
        return self._score

    @property
    def finalized(self) -> bool:
        return self._score is not None

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        shown = "?" if self._score is None else f"{self._score:.2f}"
        return f"ScoredWord({self.text!r}, score={shown})"


class FrequencyModel:
    def __init__(self):
        self._stats: Dict[Tuple[str, int], LetterStat] = {}
        self._words: List[ScoredWord] = []
        self._position_totals: Tuple[int, ...] = (0,) * WORD_LENGTH
        self._finalized = False

    @classmethod
    def build(cls, words: Iterable[str]) -> "FrequencyModel":
        """
        Ingest every valid word from `words` and finalize.

        Malformed entries are skipped with a warning; they never touch the
        counters of the words around them.
        """
        model = cls()
        for w in words:
            try:
                model.ingest(w)
            except ValueError as e:
                log.warning("skipping %r: %s", w, e)
        model.finalize()
        return model

    # ---- ingestion ----

    def ingest(self, word: str) -> None:
        """
        Count each (character, position) pair of `word` and store it.

        Raises InvalidWordLength / InvalidWordCharacter before anything is
        mutated, so a failed call leaves the model as it was.
        """
        scored = ScoredWord(word)
        for i, ch in enumerate(scored.letters):
            stat = self._stats.get((ch, i))
            if stat is None:
                stat = self._stats[(ch, i)] = LetterStat(ch, i)
            stat.frequency += 1
        self._words.append(scored)
        self._finalized = False

    def finalize(self) -> None:
        """
        Derive every letter probability and every stored word's score.
        No-op when nothing was ingested since the last call.
        """
        if self._finalized:
            return

        totals = [0] * WORD_LENGTH
        for stat in self._stats.values():
            totals[stat.position] += stat.frequency
        self._position_totals = tuple(totals)

        for stat in self._stats.values():
            total = totals[stat.position]
            if total > 0:
                stat.probability = stat.frequency * PERCENT // total

        for w in self._words:
            w._score = self._percent_sum(w.letters) / float(PERCENT)

        self._finalized = True

    def _percent_sum(self, letters: Tuple[str, ...]) -> int:
        s = 0
        for i, ch in enumerate(letters):
            stat = self._stats.get((ch, i))
            if stat is not None and stat.probability is not None:
                s += stat.probability
        return s

    # ---- ranking ----

    def _require_finalized(self) -> None:
        if not self._finalized:
            raise ProbabilitiesNotFinalized()

    def score(self, word: str) -> float:
        """
        Score any well-formed word against this model's statistics.
        Letters never observed at a position contribute 0.
        """
        self._require_finalized()
        return self._percent_sum(tuple(check_word(word))) / float(PERCENT)

    def best_word(self) -> Optional[ScoredWord]:
        """
        Highest-scoring stored word, or None for an empty pool.

        Ties go to the word ingested first. Finalizes on demand, since this
        is the usual call right after building a filtered pool.
        """
        self.finalize()
        best: Optional[ScoredWord] = None
        for w in self._words:
            if best is None or w.score > best.score:
                best = w
        return best

    def ranked(self) -> List[ScoredWord]:
        """All stored words, best first (stable: ingestion order within ties)."""
        self._require_finalized()
        return sorted(self._words, key=lambda w: w.score, reverse=True)

    def top_words(self, limit: int) -> List[ScoredWord]:
        if limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")
        return self.ranked()[:limit]

    # ---- introspection ----

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def total_words(self) -> int:
        return len(self._words)

    @property
    def words(self) -> List[ScoredWord]:
        return list(self._words)

    @property
    def position_totals(self) -> Tuple[int, ...]:
        self._require_finalized()
        return self._position_totals

    @property
    def stats(self) -> Dict[Tuple[str, int], LetterStat]:
        return dict(self._stats)

    def stat(self, character: str, position: int) -> Optional[LetterStat]:
        if not 0 <= position < WORD_LENGTH:
            raise ValueError(f"Invalid position argument, valid position 0-{WORD_LENGTH - 1} got {position}")
        return self._stats.get((character, position))

    def __len__(self) -> int:
        return len(self._words)
