"""Hashing and hex helpers shared by the codec, signer and facades."""

from __future__ import annotations

import hashlib
import re

HEX_BODY_RE = re.compile(r"^(?:[0-9a-fA-F]{2})*$")

# CITA personalizes blake2b with this 16-byte tag.
BLAKE2B_PERSON = b"CryptapeCryptape"

_MASK_64 = (1 << 64) - 1
_KECCAK_ROUNDS = 24
_KECCAK_RATE_BYTES = 136  # keccak-256 bitrate

_ROTATION_OFFSETS = [
    [0, 36, 3, 41, 18],
    [1, 44, 10, 45, 2],
    [62, 6, 43, 15, 61],
    [28, 55, 25, 21, 56],
    [27, 20, 39, 8, 14],
]

_ROUND_CONSTANTS = [
    0x0000000000000001,
    0x0000000000008082,
    0x800000000000808A,
    0x8000000080008000,
    0x000000000000808B,
    0x0000000080000001,
    0x8000000080008081,
    0x8000000000008009,
    0x000000000000008A,
    0x0000000000000088,
    0x0000000080008009,
    0x000000008000000A,
    0x000000008000808B,
    0x800000000000008B,
    0x8000000000008089,
    0x8000000000008003,
    0x8000000000008002,
    0x8000000000000080,
    0x000000000000800A,
    0x800000008000000A,
    0x8000000080008081,
    0x8000000000008080,
    0x0000000080000001,
    0x8000000080008008,
]


def _rotl64(value: int, shift: int) -> int:
    shift %= 64
    return ((value << shift) | (value >> (64 - shift))) & _MASK_64


def _keccak_f1600(state: list[int]) -> None:
    for round_idx in range(_KECCAK_ROUNDS):
        c = [state[x] ^ state[x + 5] ^ state[x + 10] ^ state[x + 15] ^ state[x + 20] for x in range(5)]
        d = [c[(x - 1) % 5] ^ _rotl64(c[(x + 1) % 5], 1) for x in range(5)]
        for x in range(5):
            for y in range(5):
                state[x + 5 * y] ^= d[x]

        b = [0] * 25
        for x in range(5):
            for y in range(5):
                b[y + 5 * ((2 * x + 3 * y) % 5)] = _rotl64(
                    state[x + 5 * y], _ROTATION_OFFSETS[x][y]
                )

        for x in range(5):
            for y in range(5):
                state[x + 5 * y] = (
                    b[x + 5 * y] ^ ((~b[(x + 1) % 5 + 5 * y]) & b[(x + 2) % 5 + 5 * y])
                ) & _MASK_64

        state[0] ^= _ROUND_CONSTANTS[round_idx]


def keccak256(data: bytes) -> bytes:
    state = [0] * 25
    padded = bytearray(data)
    padded.append(0x01)
    while (len(padded) % _KECCAK_RATE_BYTES) != (_KECCAK_RATE_BYTES - 1):
        padded.append(0)
    padded.append(0x80)

    for offset in range(0, len(padded), _KECCAK_RATE_BYTES):
        block = padded[offset : offset + _KECCAK_RATE_BYTES]
        for i in range(_KECCAK_RATE_BYTES // 8):
            lane = int.from_bytes(block[i * 8 : (i + 1) * 8], "little")
            state[i] ^= lane
        _keccak_f1600(state)

    output = bytearray()
    while len(output) < 32:
        for i in range(_KECCAK_RATE_BYTES // 8):
            output.extend(state[i].to_bytes(8, "little"))
        if len(output) >= 32:
            break
        _keccak_f1600(state)
    return bytes(output[:32])


def blake2b256(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=32, person=BLAKE2B_PERSON).digest()


def hash_for_algorithm(algorithm: str, data: bytes) -> bytes:
    if algorithm == "blake2b":
        return blake2b256(data)
    if algorithm == "sha3":
        return keccak256(data)
    raise ValueError(f"unsupported hash algorithm: {algorithm}")


def strip_0x(value: str) -> str:
    if value.startswith(("0x", "0X")):
        return value[2:]
    return value


def hex_to_bytes(value: str) -> bytes:
    body = strip_0x(value.strip())
    if not HEX_BODY_RE.fullmatch(body):
        raise ValueError("value must be hex with an even number of digits")
    return bytes.fromhex(body)


def to_hex(data: bytes) -> str:
    return f"0x{data.hex()}"


def text_to_bytes32(text: str) -> bytes:
    raw = text.encode("utf-8")
    if len(raw) > 32:
        raise ValueError(f"name '{text}' is longer than 32 bytes")
    return raw + b"\x00" * (32 - len(raw))


def bytes32_to_text(value: str) -> str:
    raw = hex_to_bytes(value).rstrip(b"\x00")
    return raw.decode("utf-8", errors="replace")
