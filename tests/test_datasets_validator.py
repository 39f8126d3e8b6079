import logging
from pathlib import Path

import pytest
from crackle.datasets import DEFAULT_WORDLIST, Corpus, load_corpus, normalize_words, pretty_summary, validate_wordlist
from crackle.engine.errors import CorpusError


def _write(p: Path, lines):
    p.write_text("\n".join(lines) + "\n", encoding="utf-8")


def test_validate_wordlist_happy_path(tmp_path: Path):
    words = tmp_path / "words_5.txt"
    _write(words, ["# starter list", "crane", "raise", "", "stare"])

    rep = validate_wordlist(str(words))
    assert rep["passed"] is True
    assert rep["words"]["count"] == 3
    assert rep["answers"] is None
    s = pretty_summary(rep)
    assert "N=5" in s and "words=3" in s and s.endswith("OK")


def test_validate_wordlist_flags_errors(tmp_path: Path):
    words = tmp_path / "words_5.txt"
    # 'cranes' too long, '???' invalid chars, 'Raise' not lowercase, 'crane' duplicated
    _write(words, ["crane", "cranes", "???", "Raise", "crane"])

    rep = validate_wordlist(str(words))
    assert rep["passed"] is False
    assert rep["words"]["invalid_lines"] == 3
    assert any("invalid" in msg for msg in rep["issues"])
    assert any("duplicate" in msg for msg in rep["issues"])


def test_validate_wordlist_answers_subset(tmp_path: Path):
    words = tmp_path / "words_5.txt"
    answers = tmp_path / "answers_5.txt"
    _write(words, ["crane", "stare"])
    _write(answers, ["crane", "raise"])  # 'raise' cannot be guessed

    rep = validate_wordlist(str(words), str(answers))
    assert rep["passed"] is False
    assert rep["answers_subset_words"] is False
    assert any("subset" in msg for msg in rep["issues"])
    assert "answers⊆words=False" in pretty_summary(rep)


def test_validate_wordlist_missing_file(tmp_path: Path):
    rep = validate_wordlist(str(tmp_path / "nope.txt"))
    assert rep["passed"] is False
    assert rep["words"]["exists"] is False
    assert any("not found" in msg for msg in rep["issues"])


def test_bundled_wordlist_is_valid():
    assert validate_wordlist(str(DEFAULT_WORDLIST))["passed"] is True


def test_normalize_words_skips_and_dedupes(caplog):
    with caplog.at_level(logging.WARNING):
        out = normalize_words(["Crane", "crane", "  slate ", "sl8te", "toolong", "", "# note", "TRACE"])
    assert out == ["crane", "slate", "trace"]
    assert "sl8te" in caplog.text and "toolong" in caplog.text


def test_load_corpus(tmp_path: Path):
    words = tmp_path / "words.txt"
    _write(words, ["crane", "bad", "slate", "crane"])
    corpus = load_corpus(words)
    assert corpus.words == ["crane", "slate"]
    assert "slate" in corpus and "bad" not in corpus
    assert corpus.model.total_words == 2
    assert corpus.source == str(words)


def test_corpus_matching_keeps_file_order():
    corpus = Corpus.from_words(["crane", "slate", "crate", "plate", "crepe"])
    assert corpus.matching("cr___") == ["crane", "crate", "crepe"]
    assert corpus.matching("__ate") == ["slate", "crate", "plate"]
    assert corpus.matching("_____") == corpus.words
    assert corpus.matching("zzzzz") == []


def test_load_corpus_default():
    corpus = load_corpus()
    assert len(corpus) > 100
    assert len(corpus.top_words(10)) == 10


def test_load_corpus_errors(tmp_path: Path):
    with pytest.raises(CorpusError):
        load_corpus(tmp_path / "missing.txt")

    empty = tmp_path / "empty.txt"
    _write(empty, ["1234", "toolong"])
    with pytest.raises(CorpusError):
        load_corpus(empty)
