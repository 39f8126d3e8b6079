"""
Report writers for sessions and batch runs.

Responsibilities:
- write_csv:      flatten a batch of session results into a tidy CSV (one row per game).
- append_result:  results sink for interactive play; appends one row, header on first write.
- write_manifest: dump a JSON manifest with config, word list hashes, and summary.
- timestamp_id:   stable UTC run ID string.
- git_commit_or_unknown: best-effort short commit hash for reproducibility.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Sequence
import csv
import json
import subprocess
import datetime as dt

from .core import SessionResult

BASE_FIELDS = ["session_id", "date", "answer", "word", "win", "guesses", "time_ms"]


def _fields(max_turns: int) -> List[str]:
    fields = list(BASE_FIELDS)
    for i in range(1, max_turns + 1):
        fields += [f"guess_{i}", f"feedback_{i}"]
    return fields


def _row(r: SessionResult, max_turns: int) -> Dict:
    row = {
        "session_id": r.session_id,
        "date": r.date,
        "answer": r.answer or "",
        "word": r.word,
        "win": r.win,
        "guesses": r.guesses,
        "time_ms": round(float(r.time_ms), 3),
    }
    # Expand history into fixed columns; unplayed turns stay blank
    for i in range(1, max_turns + 1):
        if i <= len(r.history):
            g, patt = r.history[i - 1]
        else:
            g, patt = "", ""
        row[f"guess_{i}"] = g
        row[f"feedback_{i}"] = patt
    return row


def write_csv(results: Sequence[SessionResult], path: str, max_turns: int) -> str:
    """
    Serialize a batch of session results to CSV.

    Schema (columns):
      session_id, date, answer, word, win, guesses, time_ms,
      guess_1, feedback_1, ..., guess_max_turns, feedback_max_turns

    Returns:
      The path written (string).
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=_fields(max_turns))
        w.writeheader()
        for r in results:
            w.writerow(_row(r, max_turns))

    return str(p)


def append_result(result: SessionResult, path: str, max_turns: int) -> str:
    """
    Append one session to a results CSV, writing the header if the file is
    new or empty. Later rows keep the header's column count, so the budget
    should stay the same for one results file.
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    new_file = not p.exists() or p.stat().st_size == 0

    with p.open("a", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=_fields(max_turns), extrasaction="ignore")
        if new_file:
            w.writeheader()
        w.writerow(_row(result, max_turns))

    return str(p)


def write_manifest(manifest: Dict, path: str) -> str:
    """
    Write a JSON manifest for a batch run.

    Typical keys:
      - run_id, git_commit
      - config: CLI args (words, answers, seed, sample, outdir)
      - wordlists: output of datasets.validate_wordlist(...)
      - summary: output of harness.summarize(...)
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2)
    return str(p)


def timestamp_id() -> str:
    """
    Return a compact UTC timestamp suitable for filenames, e.g. 20250820T024121Z.
    """
    return dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def git_commit_or_unknown() -> str:
    """
    Best-effort short git hash of the current repo state.
    Returns 'unknown' if git is not available or the call fails.
    """
    try:
        return (
            subprocess.check_output(
                ["git", "rev-parse", "--short", "HEAD"],
                stderr=subprocess.DEVNULL,
            )
            .decode()
            .strip()
        )
    except (OSError, subprocess.CalledProcessError):
        return "unknown"
