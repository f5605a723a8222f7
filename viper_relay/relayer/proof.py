"""Relay proof assembly and signing."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from .. import crypto_utils
from ..models import Node, RelayProof, RequestHash
from .hashing import generate_proof_bytes, hash_request

if TYPE_CHECKING:
    from .relayer import Input, Signer


def new_entropy() -> int:
    """Draw fresh per-relay entropy."""

    return crypto_utils.random_entropy()


def build_signed_proof(signer: "Signer", node: Node, relay_input: "Input", entropy: int) -> RelayProof:
    """Build the proof for *relay_input* served by *node* and sign it.

    The signed proof carries exactly the fields of the unsigned proof the
    signature was computed over, plus the signature.
    """

    request_hash = hash_request(
        RequestHash(payload=relay_input.relay_payload(), meta=relay_input.relay_meta())
    )

    unsigned = RelayProof(
        request_hash=request_hash,
        entropy=entropy,
        session_block_height=relay_input.session.header.session_height,
        servicer_pub_key=node.public_key,
        blockchain=relay_input.blockchain,
        aat=relay_input.aat,
        signature="",
    )

    signature = signer.sign(generate_proof_bytes(unsigned))
    return replace(unsigned, signature=signature)


__all__ = ["build_signed_proof", "new_entropy"]
