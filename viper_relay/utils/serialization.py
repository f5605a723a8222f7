"""Deterministic serialisation of relay payloads.

Viper nodes verify proofs by re-marshalling the same structures with Go's
``encoding/json``.  The helpers below reproduce that byte layout exactly:
compact separators, caller-defined key order for structs, sorted keys for
map-typed fields and the HTML-safe escaping Go applies to strings.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Mapping, Optional

from ..crypto_utils import hash_bytes


class SerializationError(ValueError):
    """Raised when a value cannot be encoded canonically."""


# Go's encoder escapes these even though JSON does not require it.
_GO_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)

# Go encoders before 1.22 write backspace and form feed as \u escapes.
_GO_SHORT_ESCAPES = {"b": "\\u0008", "f": "\\u000c"}
_ESCAPE_PAIR = re.compile(r"\\(.)")


def sorted_map(mapping: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    """Return *mapping* with its keys in sorted order, ``None`` stays ``None``.

    Struct-like payloads keep the order they were built in; anything that is a
    map on the wire has to go through this first.
    """

    if mapping is None:
        return None
    return {key: mapping[key] for key in sorted(mapping)}


def canonical_json(payload: Any) -> bytes:
    """Return the compact, Go-compatible JSON encoding of *payload*."""

    try:
        serialised = json.dumps(
            payload,
            ensure_ascii=False,
            separators=(",", ":"),
            allow_nan=False,
        )
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"payload is not JSON serialisable: {exc}") from exc

    # Escape pairs are matched left to right, so an escaped backslash never
    # pairs with the character after it.
    serialised = _ESCAPE_PAIR.sub(
        lambda match: _GO_SHORT_ESCAPES.get(match.group(1), match.group(0)), serialised
    )
    # The escaped characters can only occur inside string literals.
    for raw, escaped in _GO_ESCAPES:
        serialised = serialised.replace(raw, escaped)

    try:
        return serialised.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise SerializationError("payload contains invalid unicode") from exc


def canonical_hash(payload: Any) -> bytes:
    """Return the SHA3-256 hash of *payload* with stable JSON encoding."""

    return hash_bytes(canonical_json(payload))


__all__ = ["SerializationError", "canonical_hash", "canonical_json", "sorted_map"]
