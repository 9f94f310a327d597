"""Pure parsers for command arguments.

Each parser takes the raw flag string and returns the typed value or raises
``CommandError``. None of them touch the network or shared state.
"""

from __future__ import annotations

import re

from error_map import (
    ERR_INVALID_FORMAT,
    ERR_INVALID_HEIGHT,
    ERR_INVALID_KEY,
    ERR_OUT_OF_RANGE,
    CommandError,
)
from transforms import strip_0x

ADDRESS_BODY_RE = re.compile(r"^[0-9a-fA-F]{40}$")
HEX_BODY_RE = re.compile(r"^(?:[0-9a-fA-F]{2})*$")
HEX_LIST_RE = re.compile(r"^[\s\[\],0-9a-fA-FxX]*$")
DECIMAL_RE = re.compile(r"^[0-9]+$")

U64_MAX = (1 << 64) - 1
LATEST = "latest"

# Private key byte length per hash algorithm / signature scheme.
PRIVATE_KEY_LENGTHS = {
    "sha3": 32,  # secp256k1
    "blake2b": 64,  # ed25519 secret + public
}


def _flag(name: str) -> str:
    return f"--{name}"


def parse_address(raw: str, *, name: str = "address") -> str:
    body = strip_0x(str(raw).strip())
    if not ADDRESS_BODY_RE.fullmatch(body):
        raise CommandError(
            ERR_INVALID_FORMAT,
            f"{_flag(name)} must be a 20-byte hex address, got '{raw}'",
        )
    return f"0x{body.lower()}"


def parse_hex(raw: str, *, name: str = "hash") -> str:
    body = strip_0x(str(raw).strip())
    if not body or not HEX_BODY_RE.fullmatch(body):
        raise CommandError(
            ERR_INVALID_FORMAT,
            f"{_flag(name)} must be hex with an even number of digits, got '{raw}'",
        )
    return f"0x{body.lower()}"


def parse_u64(raw: str, *, name: str = "quota") -> int:
    value = str(raw).strip()
    if value.startswith("-") and DECIMAL_RE.fullmatch(value[1:]):
        raise CommandError(ERR_OUT_OF_RANGE, f"{_flag(name)} must be non-negative, got '{raw}'")
    if not DECIMAL_RE.fullmatch(value):
        raise CommandError(ERR_INVALID_FORMAT, f"{_flag(name)} must be a decimal integer, got '{raw}'")
    out = int(value, 10)
    if out > U64_MAX:
        raise CommandError(ERR_OUT_OF_RANGE, f"{_flag(name)} does not fit in 64 bits, got '{raw}'")
    return out


def parse_private_key(raw: str, *, algorithm: str, name: str = "private-key") -> bytes:
    expected = PRIVATE_KEY_LENGTHS.get(algorithm)
    if expected is None:
        raise CommandError(ERR_INVALID_KEY, f"unsupported signature algorithm: {algorithm}")
    body = strip_0x(str(raw).strip())
    if not HEX_BODY_RE.fullmatch(body) or len(body) != expected * 2:
        # never echo key material
        raise CommandError(
            ERR_INVALID_KEY,
            f"{_flag(name)} must be {expected} hex-encoded bytes for the {algorithm} algorithm",
        )
    return bytes.fromhex(body)


def parse_height(raw: str, *, name: str = "height") -> str | int:
    value = str(raw).strip()
    if value == LATEST:
        return LATEST
    if DECIMAL_RE.fullmatch(value):
        return int(value, 10)
    raise CommandError(
        ERR_INVALID_HEIGHT,
        f"{_flag(name)} must be 'latest' or a non-negative decimal block number, got '{raw}'",
    )


def parse_bool(raw: str, *, name: str = "state") -> bool:
    value = str(raw).strip()
    if value == "true":
        return True
    if value == "false":
        return False
    raise CommandError(ERR_INVALID_FORMAT, f"{_flag(name)} must be 'true' or 'false', got '{raw}'")


def parse_text(raw: str, *, name: str = "name") -> str:
    return str(raw)


def parse_hex_list(raw: str, *, name: str = "accounts") -> str:
    value = str(raw)
    if not value.strip() or not HEX_LIST_RE.fullmatch(value):
        raise CommandError(
            ERR_INVALID_FORMAT,
            f"{_flag(name)} must be a comma-separated list of hex values, got '{raw}'",
        )
    return value
