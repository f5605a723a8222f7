"""Data model shared by the relayer, the signer and the HTTP provider.

Every structure that ends up on the wire (or inside a hash) exposes
``to_json()``.  The returned dict is built with an explicit key order: the
order is part of the hashing contract and must match the field order the
network decodes with.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel

from .utils.serialization import sorted_map


@dataclass(frozen=True)
class Node:
    """A servicer endpoint. Identity is the public key."""

    public_key: str
    service_url: str = ""
    address: str = ""
    chains: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Node":
        return cls(
            public_key=str(payload.get("public_key", "")),
            service_url=str(payload.get("service_url", "")),
            address=str(payload.get("address", "")),
            chains=tuple(payload.get("chains") or ()),
        )


@dataclass(frozen=True)
class SessionHeader:
    app_public_key: str = ""
    chain: str = ""
    session_height: int = 0

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "SessionHeader":
        return cls(
            app_public_key=str(payload.get("app_public_key", "")),
            chain=str(payload.get("chain", "")),
            session_height=int(payload.get("session_height", 0)),
        )


@dataclass(frozen=True)
class Session:
    """Nodes authorised to serve an application/blockchain pair at a height."""

    header: Optional[SessionHeader] = None
    nodes: Tuple[Node, ...] = ()
    key: str = ""

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Session":
        """Build a session from a dispatch response ``session`` object."""

        header = payload.get("header")
        return cls(
            header=SessionHeader.from_dict(header) if header is not None else None,
            nodes=tuple(Node.from_dict(node) for node in payload.get("nodes") or ()),
            key=str(payload.get("key", "")),
        )


@dataclass(frozen=True)
class AAT:
    """Application Authentication Token granting relay rights to a client."""

    version: str = ""
    app_pub_key: str = ""
    client_pub_key: str = ""
    signature: str = ""

    def unsigned(self) -> "AAT":
        return replace(self, signature="")

    def to_json(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "app_pub_key": self.app_pub_key,
            "client_pub_key": self.client_pub_key,
            "signature": self.signature,
        }


@dataclass(frozen=True)
class RelayPayload:
    """The application level request forwarded to the blockchain node."""

    data: str = ""
    method: str = ""
    path: str = ""
    headers: Optional[Dict[str, str]] = None

    def to_json(self) -> Dict[str, Any]:
        return {
            "data": self.data,
            "method": self.method,
            "path": self.path,
            "headers": sorted_map(self.headers),
        }


@dataclass(frozen=True)
class RelayMeta:
    block_height: int = 0

    def to_json(self) -> Dict[str, Any]:
        return {"block_height": self.block_height}


@dataclass(frozen=True)
class RequestHash:
    """Payload and metadata pair the request hash commits to."""

    payload: RelayPayload
    meta: RelayMeta

    def to_json(self) -> Dict[str, Any]:
        return {"payload": self.payload.to_json(), "meta": self.meta.to_json()}


@dataclass(frozen=True)
class RelayProof:
    """Signed artifact binding a relay to its session, servicer and token."""

    request_hash: str
    entropy: int
    session_block_height: int
    servicer_pub_key: str
    blockchain: str
    aat: AAT
    signature: str = ""

    def to_json(self) -> Dict[str, Any]:
        return {
            "request_hash": self.request_hash,
            "entropy": self.entropy,
            "session_block_height": self.session_block_height,
            "servicer_pub_key": self.servicer_pub_key,
            "blockchain": self.blockchain,
            "aat": self.aat.to_json(),
            "signature": self.signature,
        }


@dataclass(frozen=True)
class RelayInput:
    """Body of a client relay request."""

    payload: RelayPayload
    meta: RelayMeta
    proof: RelayProof

    def to_json(self) -> Dict[str, Any]:
        return {
            "payload": self.payload.to_json(),
            "meta": self.meta.to_json(),
            "proof": self.proof.to_json(),
        }


class RelayOutput(BaseModel):
    """Successful relay response returned by a servicer."""

    response: str = ""
    signature: str = ""


class RelayErrorBody(BaseModel):
    code: int
    codespace: str = ""
    message: str = ""


class RelayErrorResponse(BaseModel):
    error: RelayErrorBody
    dispatch: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class RelayRequestOptions:
    """Per-request transport overrides understood by the HTTP provider."""

    timeout: Optional[float] = None
    headers: Dict[str, str] = field(default_factory=dict)


__all__ = [
    "AAT",
    "Node",
    "RelayErrorBody",
    "RelayErrorResponse",
    "RelayInput",
    "RelayMeta",
    "RelayOutput",
    "RelayPayload",
    "RelayProof",
    "RelayRequestOptions",
    "RequestHash",
    "Session",
    "SessionHeader",
]
