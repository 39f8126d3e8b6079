"""
Session harness primitives.

- pick_starting_word: random pick among the corpus' most probable words.
- run_session:        play one game, from starting word to win / loss.
- iter_batch / run_batch: simulated sessions for many hidden answers.
- summarize:          win rate and guess distribution over many sessions.

These functions are UI-agnostic: all player interaction goes through a
FeedbackSource and an OutputSink, so the same loop serves the interactive
CLI, batch experiments and tests.
"""

from __future__ import annotations

import datetime as dt
import logging
import random
import time
import uuid
from dataclasses import asdict, dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from crackle.config import DEFAULT_MAX_GUESSES
from crackle.datasets.corpus import Corpus
from crackle.engine.errors import InvalidInputFormat, NoGuessFound
from crackle.engine.game import ConstraintEngine
from .channels import FeedbackSource, OutputSink, RecordingOutput, SimulatedInput

log = logging.getLogger(__name__)


@dataclass
class SessionResult:
    """Final record of one game, handed to the results sink."""
    word: str                      # solved word, or the last word tried
    guesses: int
    win: bool
    history: List[Tuple[str, str]] = field(default_factory=list)
    answer: Optional[str] = None   # known only for simulated games
    time_ms: float = 0.0
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    date: str = field(default_factory=lambda: dt.datetime.now(dt.timezone.utc).isoformat(timespec="seconds"))

    def to_dict(self) -> Dict:
        return asdict(self)


def pick_starting_word(corpus: Corpus, limit: int, rng: random.Random) -> str:
    """Uniform choice among the `limit` highest-scoring corpus words."""
    top = corpus.top_words(limit)
    if not top:
        raise NoGuessFound()
    return rng.choice(top).text


def _read_feedback(engine: ConstraintEngine, source: FeedbackSource, sink: OutputSink) -> str:
    """Ask until the source gives a well-formed pattern, then apply it."""
    while True:
        raw = source.get_feedback(engine.current_guess)
        try:
            engine.apply_feedback(raw)
            return raw
        except InvalidInputFormat as e:
            log.info("rejected feedback %r for %s", raw, engine.current_guess)
            sink.invalid_feedback(str(e))
            if not source.interactive:
                raise


def run_session(
        corpus: Corpus,
        source: FeedbackSource,
        sink: OutputSink,
        *,
        max_guesses: int = DEFAULT_MAX_GUESSES,
        starting_word_limit: int = 10,
        seed: int | None = None,
        starting_word: str | None = None,
        answer: str | None = None,
) -> SessionResult:
    """
    Play one game until it is won, the guess budget is spent, or no word
    fits the feedback.

    Args:
        corpus:              candidate pool (read-only)
        source:              where feedback comes from
        sink:                where guesses and outcomes go
        max_guesses:         guess budget (Wordle: 6)
        starting_word_limit: starting word is drawn from this many top words
        seed:                RNG seed for the starting-word draw
        starting_word:       skip the draw and open with this word
        answer:              hidden word, recorded in the result if known

    FatalError and SessionAborted from the source propagate to the caller.
    """
    rng = random.Random(seed)
    engine = ConstraintEngine(max_guesses=max_guesses)
    start = starting_word or pick_starting_word(corpus, starting_word_limit, rng)
    engine.set_starting_guess(start)
    sink.welcome(start)

    t0 = time.perf_counter()
    win = False
    while True:
        sink.guess(engine.current_guess, engine.guesses)
        feedback = _read_feedback(engine, source, sink)
        log.info("round %d: %s -> %s", engine.guesses, engine.current_guess, feedback)

        if engine.has_won():
            win = True
            break
        if engine.out_of_guesses():
            sink.out_of_guesses()
            break
        try:
            engine.select_next_guess(corpus.matching(engine.state.pattern()))
        except NoGuessFound:
            sink.no_guesses()
            break

    result = SessionResult(
        word=engine.current_guess,
        guesses=engine.guesses,
        win=win,
        history=list(engine.history),
        answer=answer,
        time_ms=(time.perf_counter() - t0) * 1000.0,
    )
    log.info("session %s finished: win=%s guesses=%d", result.session_id, win, result.guesses)
    sink.result(result)
    return result


def iter_batch(
        corpus: Corpus,
        answers: Sequence[str],
        *,
        max_guesses: int = DEFAULT_MAX_GUESSES,
        starting_word_limit: int = 10,
        seed: int | None = None,
        sample: int | None = None,
) -> Iterator[SessionResult]:
    """
    Yield one simulated session per answer. If 'sample' is given, only the
    first K answers are played.

    Each case's seed is derived from the base seed (seed + index) so runs are
    reproducible without every case opening with the same word.
    """
    pool = list(answers)
    if sample is not None:
        pool = pool[:sample]

    for idx, ans in enumerate(pool, start=1):
        case_seed = None if seed is None else seed + idx
        yield run_session(
            corpus, SimulatedInput(ans), RecordingOutput(),
            max_guesses=max_guesses, starting_word_limit=starting_word_limit,
            seed=case_seed, answer=ans,
        )


def run_batch(corpus: Corpus, answers: Sequence[str], **kwargs) -> List[SessionResult]:
    return list(iter_batch(corpus, answers, **kwargs))


def summarize(results: Sequence[SessionResult]) -> Dict:
    """
    Aggregate a batch: games, wins, win rate, mean/median guesses of won
    games, and how many games were won in exactly k guesses.
    """
    n = len(results)
    guesses = np.array([r.guesses for r in results], dtype=int)
    wins = np.array([r.win for r in results], dtype=bool)
    won = guesses[wins]

    dist = np.bincount(won, minlength=1) if won.size else np.zeros(1, dtype=int)
    return {
        "games": n,
        "wins": int(wins.sum()),
        "win_rate": float(wins.mean()) if n else 0.0,
        "mean_guesses": float(won.mean()) if won.size else None,
        "median_guesses": float(np.median(won)) if won.size else None,
        "distribution": {int(k): int(c) for k, c in enumerate(dist) if k > 0 and c > 0},
    }
