"""
Feedback sources and output sinks for a session.

A session asks a FeedbackSource for the pattern the game showed for the
current guess and reports what happens to an OutputSink. Swapping the pair
turns the same loop into an interactive assistant, a simulated game against a
known answer, or a scripted test.
"""

from __future__ import annotations

import sys
from typing import Any, Iterable, List, Optional, TextIO, Tuple

from crackle.engine.errors import FeedbackSourceClosed, SessionAborted
from crackle.engine.scoring import EXPECTED_FORMAT, score

EXIT_WORDS = ("exit", "quit")


# ---- feedback sources ----

class FeedbackSource:
    # Interactive sources can be re-prompted after a malformed reply.
    interactive = False

    def get_feedback(self, guess: str) -> str:
        raise NotImplementedError("Override in subclass")


class InteractiveInput(FeedbackSource):
    """Reads one line per round from a text stream (stdin by default)."""
    interactive = True

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def get_feedback(self, guess: str) -> str:
        stream = self.stream if self.stream is not None else sys.stdin
        try:
            line = stream.readline()
        except OSError as e:
            raise FeedbackSourceClosed(f"cannot read feedback: {e}") from e
        if not line:
            raise FeedbackSourceClosed("feedback source closed")

        text = line.strip().lower()
        if text in EXIT_WORDS:
            raise SessionAborted()
        return text


class SimulatedInput(FeedbackSource):
    """Answers with the real game's feedback for a known hidden word."""

    def __init__(self, answer: str):
        self.answer = answer.strip().lower()

    def get_feedback(self, guess: str) -> str:
        return score(guess, self.answer)


class ScriptedInput(FeedbackSource):
    """Replays canned replies in order, as a player typing them would."""
    interactive = True

    def __init__(self, replies: Iterable[str]):
        self._replies = list(replies)
        self.asked: List[str] = []

    def get_feedback(self, guess: str) -> str:
        self.asked.append(guess)
        if not self._replies:
            raise FeedbackSourceClosed("no scripted replies left")
        return self._replies.pop(0)


# ---- output sinks ----

class OutputSink:
    def welcome(self, starting_word: str) -> None:
        pass

    def guess(self, word: str, number: int) -> None:
        raise NotImplementedError("Override in subclass")

    def invalid_feedback(self, message: str) -> None:
        pass

    def no_guesses(self) -> None:
        pass

    def out_of_guesses(self) -> None:
        pass

    def result(self, result: Any) -> None:
        pass


class ConsoleOutput(OutputSink):
    """Plain text for a person at a terminal."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def _say(self, text: str = "") -> None:
        print(text, file=self.stream if self.stream is not None else sys.stdout)

    def welcome(self, starting_word: str) -> None:
        self._say("Welcome to Crackle!")
        self._say("I will give you a word to try based on positional letter frequency.")
        self._say("After each guess, type what the game showed: g for green, y for yellow, n for gray.")
        self._say(f"Example: {EXPECTED_FORMAT}   (type 'exit' to leave)")
        self._say(f"Starting game with word: {starting_word}")
        self._say()

    def guess(self, word: str, number: int) -> None:
        self._say(f"Guess {number}: {word}")

    def invalid_feedback(self, message: str) -> None:
        self._say(f"Sorry, {message}. Please try again.")

    def no_guesses(self) -> None:
        self._say("No matching words found, I'm stumped!")

    def out_of_guesses(self) -> None:
        self._say("Out of guesses. Damn, we will get it next time.")

    def result(self, result: Any) -> None:
        if result.win:
            self._say(f"Solved '{result.word}' in {result.guesses} guess(es)!")
        else:
            self._say(f"Game over after {result.guesses} guess(es).")


class RecordingOutput(OutputSink):
    """Keeps every event in memory (batch runs and tests)."""

    def __init__(self):
        self.events: List[Tuple[str, Any]] = []

    def welcome(self, starting_word: str) -> None:
        self.events.append(("welcome", starting_word))

    def guess(self, word: str, number: int) -> None:
        self.events.append(("guess", word))

    def invalid_feedback(self, message: str) -> None:
        self.events.append(("invalid_feedback", message))

    def no_guesses(self) -> None:
        self.events.append(("no_guesses", None))

    def out_of_guesses(self) -> None:
        self.events.append(("out_of_guesses", None))

    def result(self, result: Any) -> None:
        self.events.append(("result", result))

    @property
    def guesses(self) -> List[str]:
        return [w for kind, w in self.events if kind == "guess"]

    def kinds(self) -> List[str]:
        return [kind for kind, _ in self.events]
