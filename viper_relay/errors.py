"""Precondition failures raised by the relayer before any network work."""

from __future__ import annotations

from enum import Enum


class RelayerErrorKind(Enum):
    """Closed set of relay precondition failures, in validation order."""

    NO_SIGNER = "no signer provided"
    NO_PROVIDER = "no provider provided"
    NO_SESSION = "no session provided"
    NO_AAT = "no Viper AAT provided"
    SESSION_HAS_NO_NODES = "session has no nodes"
    NO_SESSION_HEADER = "no session header provided"
    NODE_NOT_IN_SESSION = "node not in session"


class RelayerError(Exception):
    """A relay was rejected; ``kind`` identifies which check failed."""

    def __init__(self, kind: RelayerErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RelayerError):
            return self.kind is other.kind
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.kind)

    def __repr__(self) -> str:
        return f"RelayerError({self.kind.name})"


__all__ = ["RelayerError", "RelayerErrorKind"]
