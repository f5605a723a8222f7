"""Ed25519 signer used to sign relay proofs."""

from __future__ import annotations

import binascii
from dataclasses import dataclass

from nacl.exceptions import BadSignatureError, CryptoError
from nacl.signing import SigningKey, VerifyKey

from . import crypto_utils

SEED_SIZE = 32
PRIVATE_KEY_SIZE = 64


@dataclass(frozen=True)
class KeySigner:
    """Holds an ed25519 key pair and signs payloads with it.

    Private keys use the network's 64-byte form: the 32-byte seed followed by
    the public key, hex encoded.
    """

    signing_key: SigningKey

    @classmethod
    def generate(cls) -> "KeySigner":
        return cls(SigningKey.generate())

    @classmethod
    def from_private_key(cls, private_key: str) -> "KeySigner":
        """Load a signer from a hex encoded 64-byte private key or 32-byte seed."""

        raw = crypto_utils.decode_hex(private_key)
        if len(raw) not in (SEED_SIZE, PRIVATE_KEY_SIZE):
            raise ValueError("private key must be 32 or 64 bytes long")

        signing_key = SigningKey(raw[:SEED_SIZE])
        if len(raw) == PRIVATE_KEY_SIZE and raw[SEED_SIZE:] != bytes(signing_key.verify_key):
            raise ValueError("private key does not match its embedded public key")
        return cls(signing_key)

    @property
    def public_key(self) -> str:
        return bytes(self.signing_key.verify_key).hex()

    @property
    def private_key(self) -> str:
        return (bytes(self.signing_key) + bytes(self.signing_key.verify_key)).hex()

    @property
    def address(self) -> str:
        return crypto_utils.address_from_public_key(bytes(self.signing_key.verify_key)).hex()

    def sign(self, payload: bytes) -> str:
        """Return the hex encoded ed25519 signature over *payload*."""

        return self.signing_key.sign(bytes(payload)).signature.hex()

    def __repr__(self) -> str:
        return f"KeySigner(address={self.address})"


def verify_signature(public_key: str, message: bytes, signature: str) -> bool:
    """Return ``True`` if *signature* is a valid signature of *message*."""

    try:
        verify_key = VerifyKey(crypto_utils.decode_hex(public_key))
        raw_signature = binascii.unhexlify(signature)
    except (CryptoError, TypeError, ValueError, binascii.Error):
        return False

    try:
        verify_key.verify(bytes(message), raw_signature)
    except (BadSignatureError, CryptoError, ValueError):
        return False
    return True


__all__ = ["KeySigner", "verify_signature"]
