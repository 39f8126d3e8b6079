"""
Corpus loading.

A Corpus is the read-only candidate pool a session draws guesses from: the
word list in file order, plus a FrequencyModel over the whole list (used to
pick starting words). Loading failures are fatal (CorpusError); individual
malformed entries are skipped with a warning.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from crackle.engine.constraints import matches_pattern
from crackle.engine.errors import CorpusError
from crackle.engine.validation import check_word
from crackle.model.frequency import FrequencyModel, ScoredWord
from .io import DEFAULT_WORDLIST, iter_words, read_lines

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Corpus:
    words: List[str]
    model: FrequencyModel
    source: str = "<memory>"

    @classmethod
    def from_words(cls, words: Iterable[str], source: str = "<memory>") -> "Corpus":
        clean = normalize_words(words)
        if not clean:
            raise CorpusError(f"no valid words in {source}")
        return cls(words=clean, model=FrequencyModel.build(clean), source=source)

    def top_words(self, limit: int) -> List[ScoredWord]:
        return self.model.top_words(limit)

    def matching(self, pattern: str) -> List[str]:
        """Words whose letters agree with every resolved slot of `pattern` (e.g. 'cra_e')."""
        return [w for w in self.words if matches_pattern(w, pattern)]

    def __contains__(self, word: object) -> bool:
        return word in self.words

    def __len__(self) -> int:
        return len(self.words)


def normalize_words(words: Iterable[str]) -> List[str]:
    """
    Lowercase, drop malformed entries (with a warning) and duplicates,
    keeping first-seen order.
    """
    seen = set()
    out: List[str] = []
    for w in iter_words(words):
        try:
            check_word(w)
        except ValueError as e:
            log.warning("skipping %r: %s", w, e)
            continue
        if w in seen:
            continue
        seen.add(w)
        out.append(w)
    return out


def load_corpus(path: Optional[Path | str] = None) -> Corpus:
    """
    Read a word list (default: the bundled list) into a Corpus.

    Raises CorpusError if the file is missing/unreadable or holds no valid word.
    """
    p = Path(path) if path is not None else DEFAULT_WORDLIST
    try:
        lines = read_lines(p)
    except (OSError, UnicodeDecodeError) as e:
        raise CorpusError(f"cannot read word list {p}: {e}") from e

    corpus = Corpus.from_words(lines, source=str(p))
    log.info("loaded %d words from %s", len(corpus), p)
    return corpus
