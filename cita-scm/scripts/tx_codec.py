"""Protobuf wire encoding for CITA transactions.

Only the two messages needed to submit a transaction are covered::

    message Transaction {
        string to = 1; string nonce = 2; uint64 quota = 3;
        uint64 valid_until_block = 4; bytes data = 5; bytes value = 6;
        uint32 chain_id = 7; uint32 version = 8; bytes to_v1 = 9;
        bytes chain_id_v1 = 10;
    }
    message UnverifiedTransaction {
        Transaction transaction = 1; bytes signature = 2; Crypto crypto = 3;
    }

Fields holding their proto3 default are omitted, as protobuf does.
"""

from __future__ import annotations

from dataclasses import dataclass

from transforms import strip_0x

WIRE_VARINT = 0
WIRE_LEN = 2

# Blocks a submitted transaction stays valid for.
VALID_BLOCK_WINDOW = 88


def _varint(value: int) -> bytes:
    if value < 0:
        raise ValueError("varint cannot be negative")
    out = bytearray()
    while True:
        bits = value & 0x7F
        value >>= 7
        if value:
            out.append(bits | 0x80)
        else:
            out.append(bits)
            return bytes(out)


def _key(field: int, wire_type: int) -> bytes:
    return _varint((field << 3) | wire_type)


def _field_varint(field: int, value: int) -> bytes:
    if not value:
        return b""
    return _key(field, WIRE_VARINT) + _varint(value)


def _field_bytes(field: int, data: bytes) -> bytes:
    if not data:
        return b""
    return _key(field, WIRE_LEN) + _varint(len(data)) + data


def _field_string(field: int, text: str) -> bytes:
    return _field_bytes(field, text.encode("utf-8"))


@dataclass(frozen=True)
class Transaction:
    to: str
    nonce: str
    quota: int
    valid_until_block: int
    data: bytes
    chain_id: int = 0
    chain_id_v1: bytes = b""
    version: int = 0
    value: bytes = b"\x00" * 32

    def serialize(self) -> bytes:
        to_body = strip_0x(self.to).lower()
        parts = [
            _field_string(2, self.nonce),
            _field_varint(3, self.quota),
            _field_varint(4, self.valid_until_block),
            _field_bytes(5, self.data),
            _field_bytes(6, self.value),
        ]
        if self.version == 0:
            parts.insert(0, _field_string(1, to_body))
            parts.append(_field_varint(7, self.chain_id))
        else:
            parts.append(_field_varint(8, self.version))
            parts.append(_field_bytes(9, bytes.fromhex(to_body)))
            parts.append(_field_bytes(10, self.chain_id_v1))
        return b"".join(parts)


def serialize_unverified(tx_bytes: bytes, signature: bytes, crypto: int = 0) -> bytes:
    return (
        _key(1, WIRE_LEN)
        + _varint(len(tx_bytes))
        + tx_bytes
        + _field_bytes(2, signature)
        + _field_varint(3, crypto)
    )


def chain_id_v1_bytes(raw: str | int) -> bytes:
    if isinstance(raw, int):
        return raw.to_bytes(32, "big")
    return int(strip_0x(str(raw)) or "0", 16).to_bytes(32, "big")
