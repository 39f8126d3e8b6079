# apps/cli/play.py
"""
Interactive entry point: crackle suggests words while you play.

This script:
  1) Loads the config (TOML file + CLI overrides) and sets up logging.
  2) Validates and loads the word list.
  3) Opens with one of the corpus' most probable words, then after each
     round reads the feedback you type (e.g. "gyngy") and suggests the next
     word.
  4) Appends the game's result to the results CSV.

Usage:
    python -m apps.cli.play
    python -m apps.cli.play --start crane --log-file logs/crackle.log
"""

from __future__ import annotations

import argparse
import sys

from crackle.config import load_config
from crackle.datasets import load_corpus, pretty_summary, validate_wordlist
from crackle.engine import validate_guess
from crackle.engine.errors import ConfigError, FatalError, SessionAborted
from crackle.harness import append_result, run_session
from crackle.harness.channels import ConsoleOutput, InteractiveInput
from crackle.logs import LEVELS, setup_logging


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="crackle: five-letter word game assistant")
    ap.add_argument("--config", help="TOML config file (default: ~/.config/crackle/config.toml)")
    ap.add_argument("--words", help="word list, one 5-letter word per line")
    ap.add_argument("--start", help="open with this word instead of a random top word")
    ap.add_argument("--max-guesses", type=int, help="guess budget (default 6)")
    ap.add_argument("--starting-limit", type=int,
                    help="draw the starting word from this many top-scoring words")
    ap.add_argument("--results", help="results CSV to append the game to")
    ap.add_argument("--seed", type=int, help="RNG seed for the starting word")
    ap.add_argument("--log-level", choices=LEVELS, default="WARNING")
    ap.add_argument("--log-file", help="append session logs to this file")
    args = ap.parse_args(argv)

    try:
        cfg = load_config(args.config).override(
            word_list_path=args.words,
            max_guesses=args.max_guesses,
            starting_word_limit=args.starting_limit,
            results_path=args.results,
            log_file=args.log_file,
        )
    except ConfigError as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        return 2

    setup_logging(args.log_level, cfg.log_file)

    print(pretty_summary(validate_wordlist(cfg.word_list_path)))
    try:
        corpus = load_corpus(cfg.word_list_path)
    except FatalError as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1

    start = args.start.strip().lower() if args.start else None
    if start is not None and not validate_guess(start, corpus.words):
        print(f"Starting word '{args.start}' is not in the word list", file=sys.stderr)
        return 2

    try:
        result = run_session(
            corpus, InteractiveInput(), ConsoleOutput(),
            max_guesses=cfg.max_guesses,
            starting_word_limit=cfg.starting_word_limit,
            seed=args.seed,
            starting_word=start,
        )
    except SessionAborted:
        print("Exiting game")
        return 0
    except FatalError as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1

    path = append_result(result, cfg.results_path, max_turns=cfg.max_guesses)
    print(f"Game results stored in {path}. See you tomorrow!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
