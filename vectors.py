"""Load and evaluate the known-answer vectors in ``vectors.yaml``."""

from __future__ import annotations

import os
from typing import Dict, List, NamedTuple, Optional, Tuple

import yaml

from hexcodec import hex_to_bytes
from sha2 import hash_bytes
from variants import get_variant


DEFAULT_VECTORS_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "vectors.yaml")

_MESSAGE_KEYS = ("text", "hex", "repeat")


class KnownAnswer(NamedTuple):
    algorithm: str
    description: str
    message: bytes
    digest: bytes


def _message_from_entry(entry: Dict, fragments: Dict[str, str], index: int) -> bytes:
    given = [key for key in _MESSAGE_KEYS if key in entry]
    if len(given) != 1:
        raise ValueError(
            f"Vector {index} must define exactly one of {', '.join(_MESSAGE_KEYS)}, got {given}"
        )

    key = given[0]
    if key == "text":
        return str(entry["text"]).encode("utf-8")
    if key == "hex":
        return hex_to_bytes(str(entry["hex"]))

    name = entry["repeat"]
    if name not in fragments:
        raise ValueError(f"Vector {index} repeats unknown fragment {name!r}")
    if "length" not in entry:
        raise ValueError(f"Vector {index} uses 'repeat' without a 'length'")
    fragment = fragments[name].encode("utf-8")
    length = int(entry["length"])
    if length < 0 or not fragment:
        raise ValueError(f"Vector {index} has an invalid repeat length {length}")
    copies = length // len(fragment) + 1
    return (fragment * copies)[:length]


def load_vectors(path: Optional[str] = None) -> List[KnownAnswer]:
    """Parse a vectors file (``vectors.yaml`` beside this module by default)."""
    if path is None:
        path = DEFAULT_VECTORS_PATH

    with open(path, "r", encoding="utf-8") as f:
        document = yaml.safe_load(f)

    if not isinstance(document, dict) or not isinstance(document.get("vectors"), list):
        raise ValueError(f"{path} must contain a top-level 'vectors' list")
    fragments = document.get("fragments") or {}

    vectors: List[KnownAnswer] = []
    for index, entry in enumerate(document["vectors"]):
        if not isinstance(entry, dict):
            raise ValueError(f"Vector {index} is not a mapping: {entry!r}")
        for key in ("algorithm", "digest"):
            if key not in entry:
                raise ValueError(f"Vector {index} is missing {key!r}")

        variant = get_variant(str(entry["algorithm"]))
        digest = hex_to_bytes(str(entry["digest"]))
        if len(digest) != variant.digest_size:
            raise ValueError(
                f"Vector {index}: {variant.name} digests are {variant.digest_size} bytes, "
                f"got {len(digest)}"
            )

        vectors.append(
            KnownAnswer(
                algorithm=variant.name,
                description=str(entry.get("description", "")),
                message=_message_from_entry(entry, fragments, index),
                digest=digest,
            )
        )

    return vectors


def check_vectors(vectors: List[KnownAnswer]) -> List[Tuple[KnownAnswer, str, bool]]:
    """Hash every vector; return ``(vector, actual_hex, matches)`` per vector."""
    results = []
    for vector in vectors:
        actual = hash_bytes(vector.message, vector.algorithm)
        results.append((vector, actual.hex(), actual == vector.digest))
    return results
