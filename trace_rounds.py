"""Record the working state after every compression round of a SHA-2 computation.

For one message, this script:
1. Computes the digest with the chosen variant while tracking a..h at each round
2. Saves results to <output-dir>/<algorithm>.yaml or <algorithm>.db (SQLite)

Usage:
    python trace_rounds.py "abc"
    python trace_rounds.py "abc" -a sha512
    python trace_rounds.py -f message.bin -a sha224 --format sqlite

SQLite Schema:
    - metadata: algorithm, message_length_bytes, block_count, rounds_per_block, digest_hex
    - blocks: block_index, block_hex
    - rounds: block_index, round_index, a, b, c, d, e, f, g, h
"""

from __future__ import annotations

import argparse
import os
import sqlite3
import sys
from typing import Dict, List, Optional

import yaml

from sha2 import hash_with_trace, iter_blocks
from variants import Variant, get_variant


_REGISTERS = ("a", "b", "c", "d", "e", "f", "g", "h")


def _word_hex(word: int, variant: Variant) -> str:
    return f"{word:0{variant.family.bits // 4}x}"


def build_trace(message: bytes, variant: Variant) -> Dict:
    """Hash `message` and collect the per-round working state as plain data."""
    digest, traces = hash_with_trace(message, variant)
    blocks = list(iter_blocks(message, variant))

    result: Dict = {
        "algorithm": variant.name,
        "message_length_bytes": len(message),
        "message_hex": message.hex(),
        "digest_hex": digest.hex(),
        "rounds_per_block": variant.family.rounds,
        "blocks": [],
    }
    for block_idx, (block, rounds) in enumerate(zip(blocks, traces)):
        result["blocks"].append({
            "block_index": block_idx,
            "block_hex": block.hex(),
            "rounds": [
                {name: _word_hex(word, variant) for name, word in zip(_REGISTERS, state)}
                for state in rounds
            ],
        })
    return result


def write_yaml(trace: Dict, output_dir: str) -> str:
    """Save a trace as YAML; returns the file path."""
    output_path = os.path.join(output_dir, f"{trace['algorithm']}.yaml")
    with open(output_path, "w") as f:
        yaml.dump(trace, f, default_flow_style=False, sort_keys=False)
    return output_path


def write_sqlite(trace: Dict, output_dir: str) -> str:
    """Save a trace to a fresh SQLite database; returns the file path."""
    output_path = os.path.join(output_dir, f"{trace['algorithm']}.db")

    # Remove existing database if present
    if os.path.exists(output_path):
        os.remove(output_path)

    conn = sqlite3.connect(output_path)
    try:
        cursor = conn.cursor()
        cursor.executescript("""
            CREATE TABLE metadata (
                algorithm TEXT NOT NULL,
                message_length_bytes INTEGER NOT NULL,
                block_count INTEGER NOT NULL,
                rounds_per_block INTEGER NOT NULL,
                digest_hex TEXT NOT NULL
            );

            CREATE TABLE blocks (
                block_index INTEGER PRIMARY KEY,
                block_hex TEXT NOT NULL
            );

            CREATE TABLE rounds (
                block_index INTEGER NOT NULL,
                round_index INTEGER NOT NULL,
                a TEXT NOT NULL, b TEXT NOT NULL, c TEXT NOT NULL, d TEXT NOT NULL,
                e TEXT NOT NULL, f TEXT NOT NULL, g TEXT NOT NULL, h TEXT NOT NULL,
                FOREIGN KEY (block_index) REFERENCES blocks(block_index)
            );

            CREATE INDEX idx_rounds_block ON rounds(block_index);
        """)

        cursor.execute(
            "INSERT INTO metadata VALUES (?, ?, ?, ?, ?)",
            (
                trace["algorithm"],
                trace["message_length_bytes"],
                len(trace["blocks"]),
                trace["rounds_per_block"],
                trace["digest_hex"],
            ),
        )
        cursor.executemany(
            "INSERT INTO blocks VALUES (?, ?)",
            [(block["block_index"], block["block_hex"]) for block in trace["blocks"]],
        )
        cursor.executemany(
            "INSERT INTO rounds VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            [
                (block["block_index"], round_idx) + tuple(state[name] for name in _REGISTERS)
                for block in trace["blocks"]
                for round_idx, state in enumerate(block["rounds"])
            ],
        )
        conn.commit()
    finally:
        conn.close()

    return output_path


def _print_summary(trace: Dict) -> None:
    """Print the digest and the final round of every block."""
    print(f"Algorithm: {trace['algorithm']}")
    print(f"Message length: {trace['message_length_bytes']} bytes")
    print(f"Blocks: {len(trace['blocks'])} x {trace['rounds_per_block']} rounds")
    for block in trace["blocks"]:
        last = block["rounds"][-1]
        print(f"  [{block['block_index']}] a={last['a']} e={last['e']}")
    print(f"Digest: {trace['digest_hex']}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Record the SHA-2 working state after every compression round"
    )
    parser.add_argument(
        "message",
        nargs="?",
        help="Text to hash (UTF-8 encoded)",
    )
    parser.add_argument(
        "-f",
        "--file",
        help="Trace the raw bytes of this file instead of a message",
    )
    parser.add_argument(
        "-a",
        "--algorithm",
        default="sha256",
        help="SHA-2 variant (default: sha256)",
    )
    parser.add_argument(
        "--max-blocks",
        type=int,
        default=64,
        help="Maximum number of blocks to trace (default: 64)",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="data/trace",
        help="Output directory (default: data/trace)",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["yaml", "sqlite"],
        default="yaml",
        help="Output format: yaml or sqlite (default: yaml)",
    )
    args = parser.parse_args(argv)

    try:
        variant = get_variant(args.algorithm)
    except ValueError as e:
        print(f"ERROR: {e}")
        return 1

    if args.file is not None:
        try:
            with open(args.file, "rb") as f:
                message = f.read()
        except OSError as e:
            print(f"ERROR: cannot read '{args.file}': {e}")
            return 1
    elif args.message is not None:
        message = args.message.encode("utf-8")
    else:
        print("ERROR: give a message or -f FILE")
        return 1

    # Marker byte plus length suffix, rounded up to whole blocks.
    padded_length = len(message) + 1 + variant.family.length_field_size
    block_count = -(-padded_length // variant.block_size)
    if block_count > args.max_blocks:
        print(f"ERROR: Too many blocks ({block_count:,} > {args.max_blocks:,})")
        print("Use --max-blocks to increase limit if you really want to proceed")
        return 1

    os.makedirs(args.output_dir, exist_ok=True)

    trace = build_trace(message, variant)
    if args.format == "sqlite":
        output_path = write_sqlite(trace, args.output_dir)
    else:
        output_path = write_yaml(trace, args.output_dir)

    _print_summary(trace)
    print(f"Saved {len(trace['blocks'])} block trace(s) to {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
