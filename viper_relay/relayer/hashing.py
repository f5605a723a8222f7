"""Request, token and proof hashes.

Nodes recompute these exact values to check a relay proof, so every function
here is a fixed contract: same structures, same field order, same digest.
"""

from __future__ import annotations

from typing import Any, Dict

from ..models import AAT, RelayProof, RequestHash
from ..utils.serialization import canonical_hash


def hash_aat(aat: AAT) -> str:
    """Return the hex hash of *aat* with its signature cleared."""

    return canonical_hash(aat.unsigned().to_json()).hex()


def hash_request(request_hash: RequestHash) -> str:
    """Return the hex hash committing to a relay payload and its metadata."""

    return canonical_hash(request_hash.to_json()).hex()


def proof_for_signature(proof: RelayProof) -> Dict[str, Any]:
    """Return the representation of *proof* that the servicer signature covers.

    The AAT is replaced by its hash and the signature is always empty.
    """

    return {
        "entropy": proof.entropy,
        "session_block_height": proof.session_block_height,
        "servicer_pub_key": proof.servicer_pub_key,
        "blockchain": proof.blockchain,
        "signature": "",
        "token": hash_aat(proof.aat),
        "request_hash": proof.request_hash,
    }


def generate_proof_bytes(proof: RelayProof) -> bytes:
    """Return the 32-byte digest handed to the signer for *proof*."""

    return canonical_hash(proof_for_signature(proof))


__all__ = ["generate_proof_bytes", "hash_aat", "hash_request", "proof_for_signature"]
