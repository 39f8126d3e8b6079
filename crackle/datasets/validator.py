"""
Word list validator for crackle.

What this module does:
- Validate a corpus file (the candidate words the solver may propose) and,
  for batch runs, an answers file (the hidden words to simulate).
- Enforce formatting rules (lowercase, a–z only, exactly 5 letters, one per line;
  blank lines and '#' comments are ignored).
- Detect duplicates and invalid lines; compute SHA-256 of the raw files.
- Check that answers ⊆ corpus (an answer outside the corpus can never be guessed).
- Return a machine-readable dict (for manifests) and a pretty one-line summary.

Typical use:
    from crackle.datasets import validate_wordlist, pretty_summary
    rep = validate_wordlist("crackle/datasets/data/words_5.txt")
    print(pretty_summary(rep))
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, List, Optional, Tuple
import hashlib

from crackle.engine.scoring import WORD_LENGTH


@dataclass
class FileReport:
    """Per-file diagnostics and metadata."""
    path: str            # file path (as given)
    exists: bool         # did the file exist on disk?
    count: int           # number of VALID words
    sha256: str          # SHA-256 of raw file bytes (empty string if missing)
    unique_count: int    # unique valid words
    invalid_lines: int   # entries that are not 5 lowercase letters
    invalid_examples: List[str]


@dataclass
class ValidationReport:
    N: int
    words: FileReport
    answers: Optional[FileReport]
    answers_subset_words: Optional[bool]
    passed: bool
    issues: List[str]


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def _is_valid(raw: str) -> bool:
    return raw == raw.lower() and raw.isascii() and raw.isalpha() and len(raw) == WORD_LENGTH


def _load_and_check(path: Path) -> Tuple[List[str], List[str]]:
    """
    Returns:
      (valid_words, invalid_entries)
    """
    valid: List[str] = []
    invalid: List[str] = []
    with path.open("r", encoding="utf-8") as f:
        for raw in f:
            w = raw.strip()
            if not w or w.startswith("#"):
                continue
            (valid if _is_valid(w) else invalid).append(w)
    return valid, invalid


def _missing(path: str) -> FileReport:
    return FileReport(path, False, 0, "", 0, 0, [])


def _report(path: Path) -> Tuple[FileReport, List[str]]:
    valid, invalid = _load_and_check(path)
    rep = FileReport(
        path=str(path),
        exists=True,
        count=len(valid),
        sha256=_sha256_file(path),
        unique_count=len(set(valid)),
        invalid_lines=len(invalid),
        invalid_examples=invalid[:5],
    )
    return rep, valid


def _file_issues(label: str, rep: FileReport) -> List[str]:
    issues = []
    if rep.count == 0:
        issues.append(f"{label} file contains 0 valid words")
    if rep.invalid_lines:
        issues.append(f"{label} has {rep.invalid_lines} invalid line(s) (e.g., {rep.invalid_examples})")
    if rep.count != rep.unique_count:
        issues.append(f"{label} contains duplicate lines")
    return issues


def validate_wordlist(words_path: str, answers_path: Optional[str] = None) -> Dict:
    """
    Validate a corpus file and, optionally, an answers file against it.

    Returns a JSON-serializable dict (see ValidationReport). `passed` is
    strict: files exist, non-empty, no invalid lines, answers ⊆ corpus.
    Duplicates are reported but do not fail validation.
    """
    issues: List[str] = []

    w_p = Path(words_path)
    a_p = Path(answers_path) if answers_path else None

    if not w_p.exists():
        issues.append(f"words file not found: {words_path}")
    if a_p is not None and not a_p.exists():
        issues.append(f"answers file not found: {answers_path}")
    if issues:
        rep = ValidationReport(
            N=WORD_LENGTH,
            words=_report(w_p)[0] if w_p.exists() else _missing(words_path),
            answers=None if a_p is None else _missing(str(answers_path)),
            answers_subset_words=None if a_p is None else False,
            passed=False,
            issues=issues,
        )
        return asdict(rep)

    words_rep, words = _report(w_p)
    issues += _file_issues("words", words_rep)

    answers_rep: Optional[FileReport] = None
    subset_ok: Optional[bool] = None
    if a_p is not None:
        answers_rep, answers = _report(a_p)
        issues += _file_issues("answers", answers_rep)
        missing = sorted(set(answers) - set(words))
        subset_ok = not missing
        if missing:
            issues.append(f"answers not subset of words (e.g., {missing[:5]})")

    passed = (
            words_rep.count > 0
            and words_rep.invalid_lines == 0
            and (answers_rep is None
                 or (answers_rep.count > 0 and answers_rep.invalid_lines == 0 and bool(subset_ok)))
    )

    rep = ValidationReport(
        N=WORD_LENGTH,
        words=words_rep,
        answers=answers_rep,
        answers_subset_words=subset_ok,
        passed=passed,
        issues=issues,
    )
    return asdict(rep)


def pretty_summary(report: Dict) -> str:
    """
    One-liner for the console, e.g.:
        N=5 | words=2315 (uniq=2315, sha=abc123...) | OK
        N=5 | words=2315 (...) | answers=200 (...) | answers⊆words=True | OK
    """
    def part(label: str, fr: Dict) -> str:
        sha = (fr.get("sha256") or "")[:12]
        return f"{label}={fr['count']} (uniq={fr['unique_count']}, sha={sha})"

    parts = [f"N={report['N']}", part("words", report["words"])]
    if report.get("answers") is not None:
        parts.append(part("answers", report["answers"]))
        parts.append(f"answers⊆words={report['answers_subset_words']}")
    parts.append("OK" if report["passed"] else "FAIL")
    return " | ".join(parts)
