"""Constructors for the messages carried by Viper transactions.

Each constructor decodes the hex encoded addresses or public key it is given
and raises ``ValueError`` on malformed input; no other validation happens
here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple, Union

from .crypto_utils import PublicKey, decode_hex, parse_public_key


@dataclass(frozen=True)
class MsgSend:
    from_address: bytes
    to_address: bytes
    amount: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from_address": self.from_address.hex(),
            "to_address": self.to_address.hex(),
            "amount": str(self.amount),
        }


@dataclass(frozen=True)
class MsgStakeApp:
    public_key: PublicKey
    chains: Tuple[str, ...]
    value: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pubkey": self.public_key.hex(),
            "chains": list(self.chains),
            "value": str(self.value),
        }


@dataclass(frozen=True)
class MsgBeginUnstakeApp:
    address: bytes

    def to_dict(self) -> Dict[str, Any]:
        return {"application_address": self.address.hex()}


@dataclass(frozen=True)
class MsgUnjailApp:
    app_address: bytes

    def to_dict(self) -> Dict[str, Any]:
        return {"address": self.app_address.hex()}


@dataclass(frozen=True)
class MsgStakeNode:
    public_key: PublicKey
    chains: Tuple[str, ...]
    value: int
    service_url: str
    output_address: bytes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "public_key": self.public_key.hex(),
            "chains": list(self.chains),
            "value": str(self.value),
            "service_url": self.service_url,
            "output_address": self.output_address.hex(),
        }


@dataclass(frozen=True)
class MsgBeginUnstakeNode:
    address: bytes
    signer: bytes

    def to_dict(self) -> Dict[str, Any]:
        return {"validator_address": self.address.hex(), "signer_address": self.signer.hex()}


@dataclass(frozen=True)
class MsgUnjailNode:
    validator_address: bytes
    signer: bytes

    def to_dict(self) -> Dict[str, Any]:
        return {"address": self.validator_address.hex(), "signer_address": self.signer.hex()}


TransactionMessage = Union[
    MsgSend,
    MsgStakeApp,
    MsgBeginUnstakeApp,
    MsgUnjailApp,
    MsgStakeNode,
    MsgBeginUnstakeNode,
    MsgUnjailNode,
]


def new_send(from_address: str, to_address: str, amount: int) -> MsgSend:
    return MsgSend(
        from_address=decode_hex(from_address),
        to_address=decode_hex(to_address),
        amount=amount,
    )


def new_stake_app(public_key: str, chains: Sequence[str], amount: int) -> MsgStakeApp:
    return MsgStakeApp(public_key=parse_public_key(public_key), chains=tuple(chains), value=amount)


def new_unstake_app(address: str) -> MsgBeginUnstakeApp:
    return MsgBeginUnstakeApp(address=decode_hex(address))


def new_unjail_app(address: str) -> MsgUnjailApp:
    return MsgUnjailApp(app_address=decode_hex(address))


def new_stake_node(
    public_key: str,
    service_url: str,
    output_address: str,
    chains: Sequence[str],
    amount: int,
) -> MsgStakeNode:
    """Build a node stake message; *output_address* receives rewards."""

    parsed_key = parse_public_key(public_key)
    return MsgStakeNode(
        public_key=parsed_key,
        chains=tuple(chains),
        value=amount,
        service_url=service_url,
        output_address=decode_hex(output_address),
    )


def new_unstake_node(from_address: str, operator_address: str) -> MsgBeginUnstakeNode:
    signer = decode_hex(from_address)
    return MsgBeginUnstakeNode(address=decode_hex(operator_address), signer=signer)


def new_unjail_node(from_address: str, operator_address: str) -> MsgUnjailNode:
    signer = decode_hex(from_address)
    return MsgUnjailNode(validator_address=decode_hex(operator_address), signer=signer)


__all__ = [
    "MsgBeginUnstakeApp",
    "MsgBeginUnstakeNode",
    "MsgSend",
    "MsgStakeApp",
    "MsgStakeNode",
    "MsgUnjailApp",
    "MsgUnjailNode",
    "TransactionMessage",
    "new_send",
    "new_stake_app",
    "new_stake_node",
    "new_unjail_app",
    "new_unjail_node",
    "new_unstake_app",
    "new_unstake_node",
]
