"""Command-line front end for the SHA-2 engine in `sha2.py`.

Usage:
    python sha2_cli.py "message"                 # SHA-256 of the UTF-8 text
    python sha2_cli.py -a sha512/256 "message"
    python sha2_cli.py -a sha384 -f path/to/file
    python sha2_cli.py --self-test               # run vectors.yaml
    python sha2_cli.py --list

The hex digest is printed to stdout.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from sha2 import hash_bytes
from variants import VARIANTS, get_variant
from vectors import check_vectors, load_vectors


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compute SHA-2 digests (SHA-224/256/384/512, SHA-512/224, SHA-512/256)"
    )
    parser.add_argument(
        "message",
        nargs="?",
        help="Text to hash (UTF-8 encoded)",
    )
    parser.add_argument(
        "-a",
        "--algorithm",
        default="sha256",
        help="Variant to use, e.g. sha224, sha512/256 (default: sha256)",
    )
    parser.add_argument(
        "-f",
        "--file",
        help="Hash the raw bytes of this file instead of a message",
    )
    parser.add_argument(
        "--self-test",
        action="store_true",
        help="Check the engine against the known-answer vectors",
    )
    parser.add_argument(
        "--vectors",
        default=None,
        help="Vectors file for --self-test (default: vectors.yaml)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List the supported algorithm names",
    )
    return parser


def _run_self_test(path: Optional[str]) -> int:
    try:
        vectors = load_vectors(path)
    except (OSError, ValueError) as e:
        sys.stderr.write(f"Error loading vectors: {e}\n")
        return 1

    failed = 0
    for vector, actual_hex, ok in check_vectors(vectors):
        status = "PASS" if ok else "FAIL"
        print(f"[{status}] {vector.algorithm:<10} {vector.description}")
        if not ok:
            failed += 1
            print(f"    expected {vector.digest.hex()}")
            print(f"    got      {actual_hex}")

    print(f"\n{len(vectors) - failed} passed, {failed} failed")
    return 0 if failed == 0 else 1


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point; returns the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.list:
        for name, variant in VARIANTS.items():
            print(f"{name:<10} {variant.digest_bits}-bit digest, {variant.family.bits}-bit words")
        return 0

    if args.self_test:
        return _run_self_test(args.vectors)

    try:
        variant = get_variant(args.algorithm)
    except ValueError as e:
        sys.stderr.write(f"{e}\n")
        return 1

    if args.file is not None:
        if args.message is not None:
            sys.stderr.write("Give either a message or -f, not both\n")
            return 1
        try:
            with open(args.file, "rb") as f:
                data = f.read()
        except OSError as e:
            sys.stderr.write(f"Error reading file '{args.file}': {e}\n")
            return 1
    elif args.message is not None:
        data = args.message.encode("utf-8")
    else:
        parser.print_usage(sys.stderr)
        return 1

    print(hash_bytes(data, variant).hex())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
