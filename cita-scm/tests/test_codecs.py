from __future__ import annotations

import hashlib

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey
from eth_keys import keys

from abi_codec import decode_output, encode_call, function_selector, parse_type
from signing import build_signer
from transforms import blake2b256, bytes32_to_text, keccak256, text_to_bytes32
from tx_codec import Transaction, _varint, chain_id_v1_bytes, serialize_unverified

from ._scm_helpers import ACCOUNT, OTHER, SHA3_ADDRESS, SHA3_KEY, _pad_address, _word


def test_keccak_known_vectors():
    assert keccak256(b"").hex() == "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
    assert function_selector("transfer(address,uint256)") == "0xa9059cbb"


def test_blake2b_is_personalized():
    digest = blake2b256(b"cita")
    assert len(digest) == 32
    assert digest != hashlib.blake2b(b"cita", digest_size=32).digest()


def test_bytes32_names():
    assert bytes32_to_text("0x" + text_to_bytes32("root").hex()) == "root"
    with pytest.raises(ValueError):
        text_to_bytes32("x" * 33)


def test_encode_call_with_address_array():
    data = encode_call("newRole(bytes32,address[])", ["0x" + "00" * 32, [ACCOUNT, OTHER]])
    body = data[10:]
    assert data.startswith(function_selector("newRole(bytes32,address[])"))
    assert body[64:128] == _word(64)
    assert body[128:192] == _word(2)
    assert body[192:256] == _pad_address(ACCOUNT)
    assert body[256:320] == _pad_address(OTHER)


def test_bool_must_be_a_real_bool():
    assert encode_call("setState(bool)", [True]).endswith(_word(1))
    with pytest.raises(ValueError):
        encode_call("setState(bool)", ["true"])


def test_decode_tuple_of_name_and_arrays():
    name = text_to_bytes32("perm").hex()
    data = (
        "0x"
        + name
        + _word(96)
        + _word(160)
        + _word(1)
        + _pad_address(ACCOUNT)
        + _word(1)
        + "a9059cbb".ljust(64, "0")
    )
    decoded = decode_output("bytes32,address[],bytes4[]", data)
    assert bytes32_to_text(decoded[0]) == "perm"
    assert decoded[1] == [ACCOUNT]
    assert decoded[2] == ["0xa9059cbb"]


def test_arrays_of_dynamic_types_are_rejected():
    with pytest.raises(ValueError):
        parse_type("string[]")


def test_only_unsigned_integers_are_encoded():
    assert encode_call("setBQL(uint256)", [5]).endswith(_word(5))
    with pytest.raises(ValueError):
        parse_type("int256")
    for bad in ("5", "0x05", -1, True):
        with pytest.raises(ValueError):
            encode_call("setBQL(uint256)", [bad])


def test_varint():
    assert _varint(1) == b"\x01"
    assert _varint(300) == b"\xac\x02"


def test_v0_transaction_uses_string_to_and_chain_id():
    tx = Transaction(
        to=ACCOUNT,
        nonce="n",
        quota=10,
        valid_until_block=100,
        data=b"\x01",
        chain_id=1,
        version=0,
    )
    raw = tx.serialize()
    assert raw.startswith(b"\x0a\x28" + ACCOUNT[2:].encode())
    assert raw.endswith(b"\x38\x01")
    assert b"\x4a\x14" not in raw


def test_v1_transaction_uses_bytes_to_and_chain_id_v1():
    tx = Transaction(
        to=ACCOUNT,
        nonce="n",
        quota=10,
        valid_until_block=100,
        data=b"",
        chain_id_v1=chain_id_v1_bytes("0x1"),
        version=1,
    )
    raw = tx.serialize()
    assert not raw.startswith(b"\x0a")
    assert b"\x40\x01" in raw
    assert b"\x4a\x14" + bytes.fromhex(ACCOUNT[2:]) in raw
    assert raw.endswith(b"\x52\x20" + (1).to_bytes(32, "big"))


def test_unverified_wraps_transaction_and_signature():
    wrapped = serialize_unverified(b"\x10\x01", b"\xaa" * 65)
    assert wrapped == b"\x0a\x02\x10\x01" + b"\x12\x41" + b"\xaa" * 65


def test_sha3_signature_recovers_signer():
    signer = build_signer("sha3", bytes.fromhex(SHA3_KEY[2:]))
    payload = b"cita transaction"
    signature = signer.sign(payload)
    assert len(signature) == 65
    assert signature[64] in (0, 1)
    recovered = keys.Signature(signature).recover_public_key_from_msg_hash(keccak256(payload))
    assert recovered.to_checksum_address().lower() == SHA3_ADDRESS
    assert signer.address == SHA3_ADDRESS


def test_blake2b_signature_carries_public_key():
    signer = build_signer("blake2b", b"\x07" * 64)
    payload = b"cita transaction"
    signature = signer.sign(payload)
    assert len(signature) == 96
    Ed25519PublicKey.from_public_bytes(signature[64:]).verify(signature[:64], blake2b256(payload))
    assert signer.address == "0x" + blake2b256(signature[64:])[12:].hex()


def test_signer_repr_hides_key():
    signer = build_signer("sha3", bytes.fromhex(SHA3_KEY[2:]))
    assert SHA3_KEY[2:] not in repr(signer)
