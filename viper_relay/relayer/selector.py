"""Servicer selection within a session."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import crypto_utils
from ..errors import RelayerError, RelayerErrorKind
from ..models import Node, Session

if TYPE_CHECKING:
    from .relayer import Input


def is_node_in_session(session: Session, node: Node) -> bool:
    """Return ``True`` if a session node shares *node*'s public key."""

    return any(session_node.public_key == node.public_key for session_node in session.nodes)


def get_random_session_node(session: Session) -> Node:
    """Pick a session node uniformly at random using the OS CSPRNG."""

    index = crypto_utils.random_below(len(session.nodes))
    return session.nodes[index]


def get_node(relay_input: "Input") -> Node:
    """Return the caller's node after a membership check, or a random one."""

    if relay_input.node is None:
        return get_random_session_node(relay_input.session)

    if not is_node_in_session(relay_input.session, relay_input.node):
        raise RelayerError(RelayerErrorKind.NODE_NOT_IN_SESSION)

    return relay_input.node


__all__ = ["get_node", "get_random_session_node", "is_node_in_session"]
