# Relay pipeline
#
# Provides:
#  - canonical request / AAT / proof hashing (hashing.py)
#  - servicer selection and session membership checks (selector.py)
#  - proof assembly and signing (proof.py)
#  - the Relayer orchestrator with its Signer / Provider capabilities (relayer.py)
from .hashing import generate_proof_bytes, hash_aat, hash_request
from .proof import build_signed_proof, new_entropy
from .relayer import Input, Output, Provider, Relayer, Signer
from .selector import get_node, get_random_session_node, is_node_in_session

__all__ = [
    "Input",
    "Output",
    "Provider",
    "Relayer",
    "Signer",
    "build_signed_proof",
    "generate_proof_bytes",
    "get_node",
    "get_random_session_node",
    "hash_aat",
    "hash_request",
    "is_node_in_session",
    "new_entropy",
]
