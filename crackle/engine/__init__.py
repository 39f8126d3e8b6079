from .scoring import score
from .constraints import FeedbackState, filter_candidates, is_consistent, matches_pattern
from .validation import check_word, parse_feedback, validate_guess

__all__ = [
    "score",
    "FeedbackState",
    "filter_candidates",
    "is_consistent",
    "matches_pattern",
    "check_word",
    "parse_feedback",
    "validate_guess",
]
