from .core import SessionResult, pick_starting_word, run_session, iter_batch, run_batch, summarize
from .io import write_csv, append_result, write_manifest

__all__ = [
    "SessionResult",
    "pick_starting_word",
    "run_session",
    "iter_batch",
    "run_batch",
    "summarize",
    "write_csv",
    "append_result",
    "write_manifest",
]
