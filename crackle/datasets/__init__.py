from .validator import validate_wordlist, pretty_summary
from .io import DEFAULT_WORDLIST, iter_words, read_lines, write_lines
from .corpus import Corpus, load_corpus, normalize_words

__all__ = [
    "validate_wordlist",
    "pretty_summary",
    "DEFAULT_WORDLIST",
    "read_lines",
    "write_lines",
    "Corpus",
    "load_corpus",
    "normalize_words",
]
