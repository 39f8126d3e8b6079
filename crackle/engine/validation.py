"""
Input validation for words and feedback.

Two questions are answered here:
  - "Is this a word the model can ingest?"  -> check_word (raises)
  - "Is this a feedback signal we understand?" -> parse_feedback (raises)

validate_guess keeps the boolean form for callers that only need a yes/no,
e.g. checking a user-supplied starting word against the corpus.
"""

from typing import Iterable, Sequence, Set, Tuple, Union

from .errors import InvalidInputFormat, InvalidWordCharacter, InvalidWordLength
from .scoring import SYMBOLS, WORD_LENGTH


def check_word(word: str) -> str:
    """
    Return `word` unchanged if it is exactly WORD_LENGTH ASCII letters.

    Case is accepted either way and kept verbatim; normalisation is the
    caller's business.

    Raises:
      InvalidWordLength    : wrong number of characters
      InvalidWordCharacter : first non-letter found
    """
    if len(word) != WORD_LENGTH:
        raise InvalidWordLength(len(word))
    for ch in word:
        if not (ch.isascii() and ch.isalpha()):
            raise InvalidWordCharacter(ch)
    return word


def parse_feedback(signal: Union[str, Sequence[str]]) -> Tuple[str, ...]:
    """
    Normalise a feedback signal into a WORD_LENGTH tuple of symbols.

    Accepts a string ("gyngy", surrounding whitespace and case ignored) or a
    sequence of one-letter symbols. Anything else raises InvalidInputFormat.
    """
    raw = signal if isinstance(signal, str) else "".join(str(s) for s in signal)
    symbols = tuple(raw.strip().lower())
    if len(symbols) != WORD_LENGTH or any(s not in SYMBOLS for s in symbols):
        raise InvalidInputFormat(raw)
    return symbols


def validate_guess(word: str, allowed: Iterable[str]) -> bool:
    """
    Return True if `word` is well formed and present in `allowed`.

    Notes:
      - `allowed` is turned into a set locally; precompute one if you call
        this in a loop.
    """
    if not isinstance(word, str):
        return False

    w = word.strip().lower()
    try:
        check_word(w)
    except ValueError:
        return False

    allowed_set: Set[str] = {a.strip().lower() for a in allowed}
    return w in allowed_set
