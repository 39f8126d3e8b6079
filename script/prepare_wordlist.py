"""
Turn a raw word list into a clean crackle corpus.

Features:
- Lowercases and keeps only 5-letter a–z words (others are reported and dropped).
- Drops blank lines, '#' comments and duplicates, preserving first-seen order.
- Optional sorting AFTER cleaning (alphabetical); otherwise keep input order.
- Optional ranking by positional letter frequency, most probable first.
- Overwrite in place by default, or write to a separate --out path.

Usage:
    python -m script.prepare_wordlist --in raw_words.txt --out crackle/datasets/data/words_5.txt
"""

import argparse
import logging
import sys

from crackle.datasets import normalize_words, read_lines, write_lines
from crackle.model import FrequencyModel


def main(argv=None):
    ap = argparse.ArgumentParser(description="Clean a word list for crackle.")
    ap.add_argument("--in", dest="inp", required=True, help="input .txt file")
    ap.add_argument("--out", dest="out", help="output file (default: overwrite input)")
    order = ap.add_mutually_exclusive_group()
    order.add_argument("--sort", action="store_true", help="sort alphabetically after cleaning")
    order.add_argument("--rank", action="store_true",
                       help="order by positional letter-frequency score, best first")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")

    lines = read_lines(args.inp)
    words = normalize_words(lines)
    if args.sort:
        words = sorted(words)
    elif args.rank:
        words = [w.text for w in FrequencyModel.build(words).ranked()]

    outp = write_lines(words, args.out or args.inp)
    print(f"Input: {args.inp} ({len(lines)} lines) -> Output: {outp} ({len(words)} words)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
