import random

import pytest
from crackle.engine import FeedbackState, check_word, filter_candidates, is_consistent, parse_feedback, score, \
    validate_guess
from crackle.engine.constraints import matches_pattern
from crackle.engine.errors import InvalidInputFormat, InvalidWordCharacter, InvalidWordLength
from crackle.engine.scoring import EXPECTED_FORMAT

# --- golden feedback (duplicates + placements) ---
@pytest.mark.parametrize("guess,answer,expected", [
    ("belle", "level", "ngyyy"),
    ("level", "level", "ggggg"),
    ("lemon", "level", "ggnnn"),
    ("cools", "scoop", "yygny"),
    ("scoop", "scoop", "ggggg"),
    ("raise", "crane", "yynng"),
    ("stare", "crane", "nngyg"),
    ("speed", "abide", "nnyny"),
])
def test_score_golden(guess, answer, expected):
    assert score(guess, answer) == expected

def test_score_length_mismatch():
    with pytest.raises(ValueError):
        score("crane", "cranes")

# --- word / feedback validation ---
def test_check_word_accepts_either_case_verbatim():
    assert check_word("crane") == "crane"
    assert check_word("CRANE") == "CRANE"

@pytest.mark.parametrize("word,exc", [
    ("hell", InvalidWordLength),
    ("cranes", InvalidWordLength),
    ("", InvalidWordLength),
    ("he1lo", InvalidWordCharacter),
    ("ab-cd", InvalidWordCharacter),
    ("cafés", InvalidWordCharacter),
])
def test_check_word_rejects(word, exc):
    with pytest.raises(exc):
        check_word(word)

def test_parse_feedback_normalizes():
    assert parse_feedback("gyngy") == ("g", "y", "n", "g", "y")
    assert parse_feedback("  GYNGY\n") == ("g", "y", "n", "g", "y")
    assert parse_feedback(["g", "g", "n", "n", "y"]) == ("g", "g", "n", "n", "y")

@pytest.mark.parametrize("signal", ["gyng", "gyngyy", "", "gyngx", "abcde", "g y n"])
def test_parse_feedback_rejects(signal):
    with pytest.raises(InvalidInputFormat):
        parse_feedback(signal)


def test_invalid_feedback_message_names_expected_format():
    with pytest.raises(InvalidInputFormat, match=EXPECTED_FORMAT):
        parse_feedback("xx")

def test_validate_guess():
    allowed = ["crane", "raise", "stare"]
    assert validate_guess("CRANE", allowed) is True
    assert validate_guess("cranes", allowed) is False
    assert validate_guess("trace", allowed) is False
    assert validate_guess("???", allowed) is False

# --- filter predicate ---
def _state(**kw):
    kw.setdefault("current_guess", "manor")
    return FeedbackState(**kw)

def test_filter_no_constraints_keeps_everything():
    words = ["hello", "world", "rust"]
    assert filter_candidates(words, _state()) == words

def test_filter_excluded_characters():
    words = ["hello", "world", "rust"]
    assert filter_candidates(words, _state(excluded_characters={"l"})) == ["rust"]

def test_filter_all_words_excluded():
    assert filter_candidates(["hello", "world"], _state(excluded_characters={"o"})) == []

def test_filter_forbidden_positions():
    words = ["hello", "helps", "world"]
    assert filter_candidates(words, _state(forbidden_positions={("e", 1)})) == ["world"]

def test_filter_both_exclusions():
    words = ["hello", "helps", "world", "great"]
    st = _state(forbidden_positions={("e", 1)}, excluded_characters={"l"})
    assert filter_candidates(words, st) == ["great"]

def test_filter_required_characters():
    words = ["hello", "world", "bread", "great"]
    assert filter_candidates(words, _state(required_characters={"e", "a"})) == ["bread", "great"]

def test_filter_required_with_position_exclusion():
    words = ["bread", "great", "heart"]
    st = _state(forbidden_positions={("e", 1)}, required_characters={"e", "a"})
    assert filter_candidates(words, st) == ["bread", "great"]

def test_filter_drops_current_guess():
    st = _state(current_guess="bread")
    assert filter_candidates(["bread", "great"], st) == ["great"]

def test_filter_empty_pool():
    assert filter_candidates([], _state(excluded_characters={"a"})) == []

def test_filter_is_pure_and_order_independent():
    words = ["crane", "crate", "trace", "slate", "brine", "react", "cater", "pleat", "steal"]
    st = _state(current_guess="crane", excluded_characters={"n"},
                forbidden_positions={("a", 2), ("t", 0)}, required_characters={"a", "e"})
    before = st.copy()

    first = filter_candidates(words, st)
    assert filter_candidates(words, st) == first
    assert st == before

    rng = random.Random(0)
    for _ in range(10):
        shuffled = words[:]
        rng.shuffle(shuffled)
        assert set(filter_candidates(shuffled, st)) == set(first)
    assert all(is_consistent(w, st) for w in first)


@pytest.mark.parametrize("word,pattern,expected", [
    ("crate", "cra_e", True),
    ("crane", "cra_e", True),
    ("slate", "__ate", True),
    ("slate", "cr___", False),
    ("plate", "_____", True),
    ("plate", "plat", False),
])
def test_matches_pattern(word, pattern, expected):
    assert matches_pattern(word, pattern) is expected


def test_state_pattern_selects_words_with_confirmed_letters():
    st = _state(resolved=("c", "r", None, None, "e"))
    assert st.pattern() == "cr__e"
    assert [w for w in ["crane", "slate", "crepe", "brine"] if matches_pattern(w, st.pattern())] == \
        ["crane", "crepe"]
