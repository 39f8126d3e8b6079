"""
Wordle-style feedback for a single (guess, answer) pair.

Conventions (the alphabet the player types back to us):
  - 'g' : green  = correct letter in the correct position
  - 'y' : yellow = correct letter in the wrong position
  - 'n' : gray   = letter not present (or present fewer times than guessed)

The solver never sees the answer; this scorer exists so a session can be
driven without a human (simulated feedback, batch runs, tests).

Algorithm (two-pass, duplicate-safe):
  1) First pass marks all greens and counts the remaining (unmatched) letters
     from the answer.
  2) Second pass marks yellows only if the letter still has remaining count.
"""

from collections import Counter
from typing import Literal

WORD_LENGTH = 5

CORRECT = "g"
PRESENT = "y"
ABSENT = "n"
SYMBOLS = (CORRECT, PRESENT, ABSENT)

# Example shown to players when they type something we cannot parse.
EXPECTED_FORMAT = "gyngy"

PatternChar = Literal["g", "y", "n"]


def score(guess: str, answer: str) -> str:
    """
    Compute the feedback pattern for `guess` against `answer`.

    Preconditions:
      - len(guess) == len(answer)

    Returns:
      - string of length N composed only of 'g', 'y', 'n'

    Examples:
      score("belle", "level") -> "ngyyy"
      score("lemon", "level") -> "ggnnn"
    """
    guess = guess.strip().lower()
    answer = answer.strip().lower()
    if len(guess) != len(answer):
        raise ValueError(f"guess and answer must be the same length: {guess!r} vs {answer!r}")

    pattern = [ABSENT] * len(guess)

    # Pass 1: greens, and leftover answer letters for pass 2
    remaining = Counter()
    for i, (g, a) in enumerate(zip(guess, answer)):
        if g == a:
            pattern[i] = CORRECT
        else:
            remaining[a] += 1

    # Pass 2: yellows capped by the true multiplicity in the answer
    for i, g in enumerate(guess):
        if pattern[i] == CORRECT:
            continue
        if remaining[g] > 0:
            pattern[i] = PRESENT
            remaining[g] -= 1

    return "".join(pattern)


def is_solved(pattern: str) -> bool:
    return len(pattern) == WORD_LENGTH and all(p == CORRECT for p in pattern)
