import csv
import io
import random

import pytest
from crackle.datasets import Corpus, load_corpus
from crackle.engine.errors import FeedbackSourceClosed, InvalidInputFormat, InvalidWordLength, SessionAborted
from crackle.harness import SessionResult, append_result, pick_starting_word, run_batch, run_session, \
    summarize, write_csv
from crackle.harness.channels import ConsoleOutput, FeedbackSource, InteractiveInput, RecordingOutput, \
    ScriptedInput, SimulatedInput

WORDS = ["crane", "crate", "trace", "slate", "brine"]


def test_run_session_simulated_win():
    corpus = Corpus.from_words(WORDS)
    out = RecordingOutput()
    r = run_session(corpus, SimulatedInput("crate"), out, starting_word="crane", answer="crate")
    assert r.win is True
    assert r.word == "crate"
    assert r.guesses == 2
    assert r.history == [("crane", "gggng"), ("crate", "ggggg")]
    assert out.guesses == ["crane", "crate"]
    assert out.kinds()[0] == "welcome" and out.kinds()[-1] == "result"

def test_run_session_reprompts_on_bad_feedback():
    corpus = Corpus.from_words(WORDS)
    out = RecordingOutput()
    src = ScriptedInput(["bad", "gggng", "GGGGG"])
    r = run_session(corpus, src, out, starting_word="crane")
    assert r.win is True and r.guesses == 2
    assert "invalid_feedback" in out.kinds()
    assert src.asked == ["crane", "crane", "crate"]

def test_run_session_stumped_is_a_loss():
    corpus = Corpus.from_words(["crane", "brine"])
    out = RecordingOutput()
    r = run_session(corpus, SimulatedInput("crate"), out, starting_word="crane")
    assert r.win is False
    assert r.guesses == 1
    assert "no_guesses" in out.kinds()

def test_run_session_out_of_guesses():
    corpus = Corpus.from_words(WORDS)
    out = RecordingOutput()
    r = run_session(corpus, SimulatedInput("crate"), out, starting_word="crane", max_guesses=1)
    assert r.win is False and r.guesses == 1
    assert "out_of_guesses" in out.kinds()

def test_non_interactive_bad_feedback_propagates():
    class Broken(FeedbackSource):
        def get_feedback(self, guess):
            return "zzzzz"

    with pytest.raises(InvalidInputFormat):
        run_session(Corpus.from_words(WORDS), Broken(), RecordingOutput(), starting_word="crane")

def test_interactive_input_exit_and_eof():
    corpus = Corpus.from_words(WORDS)
    with pytest.raises(SessionAborted):
        run_session(corpus, InteractiveInput(io.StringIO("exit\n")), RecordingOutput(),
                    starting_word="crane")
    with pytest.raises(FeedbackSourceClosed):
        run_session(corpus, InteractiveInput(io.StringIO("")), RecordingOutput(),
                    starting_word="crane")

def test_interactive_session_transcript():
    corpus = Corpus.from_words(WORDS)
    buf = io.StringIO()
    r = run_session(corpus, InteractiveInput(io.StringIO(" gggng \nggggg\n")), ConsoleOutput(buf),
                    starting_word="crane")
    text = buf.getvalue()
    assert r.win is True
    assert "Welcome to Crackle!" in text
    assert "Example: gyngy" in text
    assert "Guess 2: crate" in text
    assert "Solved 'crate' in 2 guess(es)!" in text

def test_pick_starting_word_is_seeded_and_from_top():
    corpus = load_corpus()
    top = {w.text for w in corpus.top_words(10)}
    a = pick_starting_word(corpus, 10, random.Random(7))
    b = pick_starting_word(corpus, 10, random.Random(7))
    assert a == b and a in top

def test_run_batch_smoke():
    corpus = load_corpus()
    answers = ["crane", "slate", "house", "world", "speed"]
    results = run_batch(corpus, answers, seed=42, sample=3)
    assert [r.answer for r in results] == ["crane", "slate", "house"]
    for r in results:
        assert 1 <= r.guesses <= 6
        assert len(r.history) == r.guesses
        if r.win:
            assert r.word == r.answer

def test_summarize():
    results = [
        SessionResult(word="crane", guesses=3, win=True),
        SessionResult(word="slate", guesses=4, win=True),
        SessionResult(word="brine", guesses=6, win=False),
    ]
    s = summarize(results)
    assert s["games"] == 3 and s["wins"] == 2
    assert s["win_rate"] == pytest.approx(2 / 3)
    assert s["mean_guesses"] == 3.5
    assert s["median_guesses"] == 3.5
    assert s["distribution"] == {3: 1, 4: 1}

def test_summarize_empty():
    s = summarize([])
    assert s["games"] == 0 and s["win_rate"] == 0.0
    assert s["mean_guesses"] is None and s["distribution"] == {}

def test_write_csv_and_append_result(tmp_path):
    corpus = Corpus.from_words(WORDS)
    r = run_session(corpus, SimulatedInput("crate"), RecordingOutput(), starting_word="crane",
                    answer="crate")

    out = write_csv([r, r], str(tmp_path / "run.csv"), max_turns=6)
    with open(out, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 2
    assert rows[0]["guess_1"] == "crane" and rows[0]["feedback_1"] == "gggng"
    assert rows[0]["guess_3"] == "" and rows[0]["win"] == "True"

    path = str(tmp_path / "results" / "results.csv")
    append_result(r, path, max_turns=6)
    append_result(r, path, max_turns=6)
    with open(path, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 2
    assert rows[1]["answer"] == "crate" and rows[1]["guesses"] == "2"

def test_next_guess_keeps_confirmed_letters_in_place():
    # 'slate', 'plate' and 'elate' pass the gray/yellow checks after "gggng"
    # but drop the confirmed c, r at the front
    corpus = Corpus.from_words(["crane", "slate", "plate", "elate", "crate"])
    r = run_session(corpus, SimulatedInput("crate"), RecordingOutput(), starting_word="crane",
                    answer="crate")
    assert r.history == [("crane", "gggng"), ("crate", "ggggg")]
    assert r.win is True and r.word == r.answer

def test_run_session_rejects_malformed_starting_word():
    with pytest.raises(InvalidWordLength):
        run_session(Corpus.from_words(WORDS), SimulatedInput("crate"), RecordingOutput(),
                    starting_word="cran")
