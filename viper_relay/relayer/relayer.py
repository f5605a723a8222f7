"""Relay orchestration: validate, pick a servicer, sign a proof, dispatch.

The relayer is a thin sequential pipeline over two injected capabilities, a
:class:`Signer` and a :class:`Provider`.  It holds no other state, draws fresh
entropy for every call and never retries; transport failures reach the caller
exactly as the provider raised them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Protocol

from ..errors import RelayerError, RelayerErrorKind
from ..models import (
    AAT,
    Node,
    RelayInput,
    RelayMeta,
    RelayOutput,
    RelayPayload,
    RelayProof,
    RelayRequestOptions,
    Session,
)
from .proof import build_signed_proof, new_entropy
from .selector import get_node

logger = logging.getLogger("viper.relayer")


class Signer(Protocol):
    def sign(self, payload: bytes) -> str:
        ...


class Provider(Protocol):
    def relay(
        self,
        rpc_url: str,
        relay_input: RelayInput,
        options: Optional[RelayRequestOptions] = None,
    ) -> RelayOutput:
        ...


@dataclass
class Input:
    """Everything needed to perform one relay."""

    blockchain: str = ""
    data: str = ""
    headers: Optional[Dict[str, str]] = None
    method: str = ""
    node: Optional[Node] = None
    path: str = ""
    session: Optional[Session] = None
    aat: Optional[AAT] = None

    def relay_payload(self) -> RelayPayload:
        return RelayPayload(data=self.data, method=self.method, path=self.path, headers=self.headers)

    def relay_meta(self) -> RelayMeta:
        return RelayMeta(block_height=self.session.header.session_height)


@dataclass(frozen=True)
class Output:
    relay_output: RelayOutput
    proof: RelayProof
    node: Node


class Relayer:
    """Performs relays with a fixed signer and provider."""

    def __init__(self, signer: Optional[Signer], provider: Optional[Provider]) -> None:
        self._signer = signer
        self._provider = provider

    @property
    def signer(self) -> Optional[Signer]:
        return self._signer

    @property
    def provider(self) -> Optional[Provider]:
        return self._provider

    def _validate_relay_request(self, relay_input: Input) -> None:
        if self._signer is None:
            raise RelayerError(RelayerErrorKind.NO_SIGNER)

        if self._provider is None:
            raise RelayerError(RelayerErrorKind.NO_PROVIDER)

        if relay_input.session is None:
            raise RelayerError(RelayerErrorKind.NO_SESSION)

        if relay_input.aat is None:
            raise RelayerError(RelayerErrorKind.NO_AAT)

        if not relay_input.session.nodes:
            raise RelayerError(RelayerErrorKind.SESSION_HAS_NO_NODES)

        if relay_input.session.header is None:
            raise RelayerError(RelayerErrorKind.NO_SESSION_HEADER)

    def relay(self, relay_input: Input, options: Optional[RelayRequestOptions] = None) -> Output:
        """Relay *relay_input* to a session node and return its response.

        Raises :class:`RelayerError` when a precondition fails.  Hashing,
        signer and provider exceptions propagate unchanged.
        """

        self._validate_relay_request(relay_input)

        node = get_node(relay_input)
        logger.debug("relaying %s request to servicer %s", relay_input.blockchain, node.public_key)

        proof = build_signed_proof(self._signer, node, relay_input, new_entropy())
        relay = RelayInput(
            payload=relay_input.relay_payload(),
            meta=relay_input.relay_meta(),
            proof=proof,
        )

        try:
            relay_output = self._provider.relay(node.service_url, relay, options)
        except Exception as exc:
            logger.warning("relay to servicer %s failed: %s", node.public_key, exc)
            raise

        return Output(relay_output=relay_output, proof=proof, node=node)


__all__ = ["Input", "Output", "Provider", "Relayer", "Signer"]
