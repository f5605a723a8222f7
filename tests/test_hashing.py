import hashlib
from dataclasses import replace

import pytest

from viper_relay import AAT, RelayMeta, RelayPayload, RelayProof, RequestHash
from viper_relay.relayer import generate_proof_bytes, hash_aat, hash_request
from viper_relay.utils.serialization import SerializationError


def sha3_hex(data: bytes) -> str:
    return hashlib.sha3_256(data).hexdigest()


def make_request(**overrides) -> RequestHash:
    payload = {
        "data": "ping",
        "method": "POST",
        "path": "/v1/query/height",
        "headers": {"X-Trace": "1", "Content-Type": "application/json"},
    }
    payload.update(overrides)
    return RequestHash(payload=RelayPayload(**payload), meta=RelayMeta(block_height=5))


def make_proof(aat: AAT, **overrides) -> RelayProof:
    fields = {
        "request_hash": "ab" * 32,
        "entropy": 42,
        "session_block_height": 5,
        "servicer_pub_key": "AOG",
        "blockchain": "0021",
        "aat": aat,
        "signature": "",
    }
    fields.update(overrides)
    return RelayProof(**fields)


def test_hash_aat_clears_signature_and_keeps_field_order(aat):
    expected = b'{"version":"0.0.1","app_pub_key":"a1b2","client_pub_key":"c3d4","signature":""}'
    assert hash_aat(aat) == sha3_hex(expected)


def test_hash_aat_ignores_signature_value(aat):
    assert hash_aat(aat) == hash_aat(replace(aat, signature="another"))
    assert hash_aat(aat) == hash_aat(replace(aat, signature=""))


@pytest.mark.parametrize("field", ["version", "app_pub_key", "client_pub_key"])
def test_hash_aat_changes_with_every_signed_field(aat, field):
    assert hash_aat(aat) != hash_aat(replace(aat, **{field: "ff"}))


def test_hash_aat_is_lowercase_hex(aat):
    digest = hash_aat(aat)
    assert len(digest) == 64
    assert digest == digest.lower()
    bytes.fromhex(digest)


def test_hash_request_layout():
    expected = (
        b'{"payload":{"data":"ping","method":"POST","path":"/v1/query/height",'
        b'"headers":{"Content-Type":"application/json","X-Trace":"1"}},'
        b'"meta":{"block_height":5}}'
    )
    assert hash_request(make_request()) == sha3_hex(expected)


def test_hash_request_is_independent_of_header_insertion_order():
    forward = make_request(headers={"a": "1", "b": "2"})
    backward = make_request(headers={"b": "2", "a": "1"})
    assert hash_request(forward) == hash_request(backward)


def test_hash_request_encodes_missing_headers_as_null():
    expected = (
        b'{"payload":{"data":"ping","method":"POST","path":"/v1/query/height","headers":null},'
        b'"meta":{"block_height":5}}'
    )
    assert hash_request(make_request(headers=None)) == sha3_hex(expected)
    assert hash_request(make_request(headers=None)) != hash_request(make_request(headers={}))


@pytest.mark.parametrize(
    "overrides",
    [{"data": "pong"}, {"method": "GET"}, {"path": "/"}, {"headers": {"X-Trace": "2"}}],
)
def test_hash_request_changes_with_every_field(overrides):
    assert hash_request(make_request()) != hash_request(make_request(**overrides))


def test_hash_request_changes_with_block_height():
    request = make_request()
    moved = RequestHash(payload=request.payload, meta=RelayMeta(block_height=6))
    assert hash_request(request) != hash_request(moved)


def test_hash_request_rejects_invalid_unicode():
    with pytest.raises(SerializationError):
        hash_request(make_request(data="\udcff"))


def test_generate_proof_bytes_layout(aat):
    proof = make_proof(aat)
    expected = (
        '{"entropy":42,"session_block_height":5,"servicer_pub_key":"AOG",'
        '"blockchain":"0021","signature":"","token":"%s","request_hash":"%s"}'
        % (hash_aat(aat), "ab" * 32)
    ).encode("utf-8")
    assert generate_proof_bytes(proof) == hashlib.sha3_256(expected).digest()
    assert len(generate_proof_bytes(proof)) == 32


def test_generate_proof_bytes_ignores_proof_and_token_signatures(aat):
    proof = make_proof(aat)
    signed = replace(proof, signature="deadbeef", aat=replace(aat, signature="00"))
    assert generate_proof_bytes(proof) == generate_proof_bytes(signed)


@pytest.mark.parametrize(
    "overrides",
    [
        {"request_hash": "cd" * 32},
        {"entropy": 43},
        {"session_block_height": 6},
        {"servicer_pub_key": "PJOG"},
        {"blockchain": "0001"},
    ],
)
def test_generate_proof_bytes_changes_with_every_field(aat, overrides):
    assert generate_proof_bytes(make_proof(aat)) != generate_proof_bytes(make_proof(aat, **overrides))


def test_generate_proof_bytes_binds_the_token(aat):
    other = replace(aat, client_pub_key="ffff")
    assert generate_proof_bytes(make_proof(aat)) != generate_proof_bytes(make_proof(other))


def test_generate_proof_bytes_handles_large_entropy(aat):
    proof = make_proof(aat, entropy=2**63 - 2)
    assert len(generate_proof_bytes(proof)) == 32
