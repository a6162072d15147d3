"""Command-line interface for the fuzzy matcher."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from .matcher import fuzzymatch, rank


def _read_keys_file(path: Path) -> list[str]:
    """Load keys from a text file (one per line) or a JSON array."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SystemExit(f"Cannot read keys file {str(path)!r}: {e}") from e

    if path.suffix.lower() == ".json":
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise SystemExit(f"Invalid JSON in {str(path)!r}: {e}") from e
        if not isinstance(data, list) or not all(isinstance(k, str) for k in data):
            raise SystemExit(f"{str(path)!r} must contain a JSON array of strings")
        return data

    # Blank lines are kept out; every other line is a key, verbatim.
    return [line for line in raw.splitlines() if line.strip()]


def cli() -> None:
    """Console-script entry point.

    After installing the package:

        fuzzymatch --keys-file titles.txt --term "jngl"
    """
    raise SystemExit(main())


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description=(
            "Match a term against a list of keys (exact, case-insensitive, initials, "
            "substring, edit distance) and print the matches, best first."
        )
    )

    keys_group = parser.add_mutually_exclusive_group(required=True)
    keys_group.add_argument(
        "--keys-file",
        help="File with one key per line, or a JSON array of strings (*.json).",
    )
    keys_group.add_argument(
        "--key",
        action="append",
        dest="keys",
        help="A key to match against. Repeat for several keys.",
    )

    parser.add_argument("--term", required=True, help="The search term.")
    parser.add_argument(
        "--threshold",
        type=float,
        default=0.5,
        help=(
            "Strictness for substring and edit-distance matches (usually 0..1). "
            "Higher is stricter. Default: 0.5."
        ),
    )
    parser.add_argument(
        "--values-only",
        action="store_true",
        help="Print only the matched values, one per line.",
    )
    parser.add_argument(
        "--explain",
        action="store_true",
        help="Include the match tier and within-tier distance for every match.",
    )
    parser.add_argument(
        "--jsonl",
        "--compact-json",
        action="store_true",
        help="Print output as a single-line JSON.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr.",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
    )

    keys = args.keys
    if keys is None:
        keys = _read_keys_file(Path(args.keys_file))

    if args.values_only:
        for m in fuzzymatch(keys, args.term, args.threshold):
            print(m.value)
        return 0

    if args.explain:
        matches = [m.to_dict() for m in rank(keys, args.term, args.threshold)]
    else:
        matches = [
            {"index": m.index, "value": m.value}
            for m in fuzzymatch(keys, args.term, args.threshold)
        ]

    out: dict[str, object] = {
        "term": args.term,
        "threshold": args.threshold,
        "matches": matches,
    }

    if args.jsonl:
        print(json.dumps(out, ensure_ascii=False))
    else:
        print(json.dumps(out, ensure_ascii=False, indent=2))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
