"""Cryptographic primitives shared by the relay pipeline.

Hashing is SHA3-256 throughout, matching what Viper nodes use when they
recompute request, token and proof hashes.  Randomness always comes from the
operating system CSPRNG through :mod:`secrets`; entropy values and node
choices must not be predictable.
"""

from __future__ import annotations

import binascii
import hashlib
import secrets
from dataclasses import dataclass
from typing import Iterable

from ecdsa import SECP256k1, VerifyingKey
from ecdsa.errors import MalformedPointError
from nacl.exceptions import CryptoError
from nacl.signing import VerifyKey


MAX_INT64 = 2**63 - 1

ED25519_PUBLIC_KEY_SIZE = 32
SECP256K1_PUBLIC_KEY_SIZE = 33
ADDRESS_SIZE = 20


def hash_bytes(*chunks: Iterable[bytes]) -> bytes:
    """Hash the concatenation of *chunks* with SHA3-256."""

    digest = hashlib.sha3_256()
    for chunk in chunks:
        digest.update(bytes(chunk))
    return digest.digest()


def hash_hex(*chunks: Iterable[bytes]) -> str:
    """Return the lowercase hex SHA3-256 digest of *chunks*."""

    return hash_bytes(*chunks).hex()


def random_below(upper: int) -> int:
    """Return a cryptographically secure integer in ``[0, upper)``."""

    if upper <= 0:
        raise ValueError("upper bound must be positive")
    return secrets.randbelow(upper)


def random_entropy() -> int:
    """Return fresh relay entropy, uniform in ``[0, MAX_INT64)``."""

    return random_below(MAX_INT64)


def decode_hex(value: str) -> bytes:
    """Decode a hex string, raising ``ValueError`` on malformed input."""

    if not isinstance(value, str):
        raise TypeError("hex value must be a string")
    try:
        return binascii.unhexlify(value)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"invalid hex string: {value!r}") from exc


def address_from_public_key(public_key: bytes) -> bytes:
    """Derive the 20-byte account address of an ed25519 public key."""

    if len(public_key) != ED25519_PUBLIC_KEY_SIZE:
        raise ValueError("ed25519 public keys must be 32 bytes long")
    return hashlib.sha256(public_key).digest()[:ADDRESS_SIZE]


@dataclass(frozen=True)
class PublicKey:
    """A parsed account public key."""

    scheme: str
    raw: bytes

    def hex(self) -> str:
        return self.raw.hex()


def parse_public_key(value: str) -> PublicKey:
    """Parse a hex encoded ed25519 or compressed secp256k1 public key."""

    raw = decode_hex(value)
    if len(raw) == ED25519_PUBLIC_KEY_SIZE:
        try:
            VerifyKey(raw)
        except (CryptoError, TypeError, ValueError) as exc:  # pragma: no cover - length checked
            raise ValueError("invalid ed25519 public key") from exc
        return PublicKey("ed25519", raw)

    if len(raw) == SECP256K1_PUBLIC_KEY_SIZE:
        try:
            VerifyingKey.from_string(raw, curve=SECP256k1)
        except (MalformedPointError, ValueError) as exc:
            raise ValueError("invalid secp256k1 public key") from exc
        return PublicKey("secp256k1", raw)

    raise ValueError(f"unsupported public key length: {len(raw)} bytes")


__all__ = [
    "ADDRESS_SIZE",
    "ED25519_PUBLIC_KEY_SIZE",
    "MAX_INT64",
    "PublicKey",
    "SECP256K1_PUBLIC_KEY_SIZE",
    "address_from_public_key",
    "decode_hex",
    "hash_bytes",
    "hash_hex",
    "parse_public_key",
    "random_below",
    "random_entropy",
]
