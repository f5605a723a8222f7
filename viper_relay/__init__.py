# Viper relay client
#
# Provides:
#  - the Relayer: session node selection, signed relay proofs, dispatch
#  - KeySigner, an ed25519 Signer implementation
#  - HTTPProvider, an httpx based Provider implementation
#  - transaction message builders
#
# See viper_relay/relayer/relayer.py for the relay pipeline.
__version__ = "0.1.0"

from .errors import RelayerError, RelayerErrorKind
from .models import (
    AAT,
    Node,
    RelayInput,
    RelayMeta,
    RelayOutput,
    RelayPayload,
    RelayProof,
    RelayRequestOptions,
    RequestHash,
    Session,
    SessionHeader,
)
from .provider import (
    HTTPProvider,
    MalformedResponseError,
    NonJSONResponseError,
    ProviderError,
    RelayError,
    ServerError,
    UnexpectedStatusError,
)
from .relayer import Input, Output, Relayer
from .signer import KeySigner, verify_signature

__all__ = [
    "AAT",
    "HTTPProvider",
    "Input",
    "KeySigner",
    "MalformedResponseError",
    "Node",
    "NonJSONResponseError",
    "Output",
    "ProviderError",
    "RelayError",
    "RelayInput",
    "RelayMeta",
    "RelayOutput",
    "RelayPayload",
    "RelayProof",
    "RelayRequestOptions",
    "Relayer",
    "RelayerError",
    "RelayerErrorKind",
    "RequestHash",
    "ServerError",
    "Session",
    "SessionHeader",
    "UnexpectedStatusError",
    "verify_signature",
]
