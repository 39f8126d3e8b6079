# apps/cli/run.py
"""
CLI entry point for batch crackle experiments.

This script:
  1) Validates the word lists (prints counts + SHA, checks answers ⊆ words).
  2) Loads the corpus and picks the hidden answers to simulate.
  3) Plays one simulated game per answer with a live progress indicator and writes:
       - CSV:  per-game results + guess/feedback history columns
       - JSON: manifest with config, word list hashes, git commit, summary
"""

from __future__ import annotations

import argparse
import random
import sys
import time
from pathlib import Path

from tqdm import tqdm

from crackle.config import load_config
from crackle.datasets import load_corpus, normalize_words, pretty_summary, read_lines, validate_wordlist
from crackle.engine.errors import ConfigError, FatalError
from crackle.harness import iter_batch, summarize, write_csv, write_manifest
from crackle.harness.io import git_commit_or_unknown, timestamp_id
from crackle.logs import LEVELS, setup_logging


def main(argv: list[str] | None = None) -> int:
    """
    Parse CLI args, validate datasets, run the batch with progress, and write outputs.
    """
    ap = argparse.ArgumentParser(description="crackle: simulate games against known answers")
    ap.add_argument("--config", help="TOML config file (default: ~/.config/crackle/config.toml)")
    ap.add_argument("--words", help="candidate word list (default: config or bundled list)")
    ap.add_argument("--answers", help="hidden answers to simulate (default: the word list itself)")
    ap.add_argument("--sample", type=int,
                    help="run only a subset of answers (deterministic by seed)")
    ap.add_argument("--seed", type=int, default=123, help="base RNG seed (for reproducibility)")
    ap.add_argument("--max-guesses", type=int, help="guess budget per game (default 6)")
    ap.add_argument("--starting-limit", type=int,
                    help="draw starting words from this many top-scoring words")
    ap.add_argument("--outdir", default="reports", help="directory for output files")
    ap.add_argument(
        "--progress",
        choices=["auto", "bar", "plain", "off"],
        default="auto",
        help="Show run progress (auto=bar on a terminal, else plain text)."
    )
    ap.add_argument("--log-level", choices=LEVELS, default="WARNING")
    ap.add_argument("--log-file")
    args = ap.parse_args(argv)

    try:
        cfg = load_config(args.config).override(
            word_list_path=args.words,
            max_guesses=args.max_guesses,
            starting_word_limit=args.starting_limit,
            log_file=args.log_file,
        )
    except ConfigError as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        return 2
    setup_logging(args.log_level, cfg.log_file)

    # 1) Validate word lists and print a one-liner summary
    rep = validate_wordlist(cfg.word_list_path, args.answers)
    print(pretty_summary(rep))

    # 2) Load corpus and answers
    try:
        corpus = load_corpus(cfg.word_list_path)
        answers = normalize_words(read_lines(args.answers)) if args.answers else list(corpus.words)
    except (FatalError, OSError) as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1

    # 3) Choose cases (deterministic sample by seed)
    rng = random.Random(args.seed)
    if args.sample and args.sample < len(answers):
        pool = list(answers)
        rng.shuffle(pool)
        cases = pool[: args.sample]
    else:
        cases = list(answers)
    total = len(cases)

    # 4) Progress mode
    mode = args.progress
    if mode == "auto":
        mode = "bar" if sys.stderr.isatty() else "plain"

    games = iter_batch(
        corpus, cases,
        max_guesses=cfg.max_guesses,
        starting_word_limit=cfg.starting_word_limit,
        seed=args.seed,
    )
    if mode == "bar":
        games = tqdm(games, total=total, ncols=80, desc="Running", unit="game")

    results = []
    start = time.time()
    last_print = 0.0
    for idx, r in enumerate(games, 1):
        results.append(r)
        if mode == "plain":
            now = time.time()
            if (now - last_print >= 1.0) or (idx == total):
                elapsed = now - start
                rate = (idx / elapsed) if elapsed > 0 else 0.0
                remaining = (total - idx) / rate if rate > 0 else 0.0
                pct = 100.0 * idx / max(1, total)
                sys.stderr.write(
                    f"\r[{idx}/{total}] {pct:5.1f}% | elapsed {elapsed:6.1f}s | ETA {remaining:5.1f}s"
                )
                sys.stderr.flush()
                last_print = now

    if mode == "plain":
        sys.stderr.write("\n"); sys.stderr.flush()

    # 5) Write outputs (CSV + manifest)
    summary = summarize(results)
    run_id = timestamp_id()
    outdir = Path(args.outdir)
    csv_path = outdir / f"run_{run_id}.csv"
    manifest_path = outdir / f"run_{run_id}_manifest.json"

    write_csv(results, str(csv_path), max_turns=cfg.max_guesses)
    write_manifest({
        "run_id": run_id,
        "git_commit": git_commit_or_unknown(),
        "config": vars(args) | {"max_guesses": cfg.max_guesses,
                                "starting_word_limit": cfg.starting_word_limit,
                                "words": cfg.word_list_path},
        "wordlists": rep,
        "num_cases": len(results),
        "summary": summary,
    }, str(manifest_path))

    print(f"win rate {summary['win_rate']:.3f} ({summary['wins']}/{summary['games']}), "
          f"mean guesses {summary['mean_guesses']}, distribution {summary['distribution']}")
    print(f"Wrote: {csv_path}")
    print(f"Wrote: {manifest_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
