"""Transaction signers for the two CITA signature schemes.

``sha3`` signs a Keccak-256 digest with secp256k1 and produces ``r || s || v``
(65 bytes, ``v`` in {0, 1}). ``blake2b`` signs a Blake2b-256 digest with
ed25519 and produces ``signature || public key`` (96 bytes).
"""

from __future__ import annotations

from dataclasses import dataclass

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat
from eth_account import Account

from transforms import blake2b256, hash_for_algorithm, to_hex

ALGORITHMS = ("sha3", "blake2b")


@dataclass(frozen=True, repr=False)
class Signer:
    """Signing material for one write call. Not retained after dispatch."""

    algorithm: str
    private_key: bytes

    def __repr__(self) -> str:
        return f"Signer(algorithm={self.algorithm!r}, private_key=<redacted>)"

    def digest(self, payload: bytes) -> bytes:
        return hash_for_algorithm(self.algorithm, payload)

    def sign(self, payload: bytes) -> bytes:
        message_hash = self.digest(payload)
        if self.algorithm == "sha3":
            signed = Account.unsafe_sign_hash(message_hash, self.private_key)
            return signed.r.to_bytes(32, "big") + signed.s.to_bytes(32, "big") + bytes([signed.v - 27])
        key = Ed25519PrivateKey.from_private_bytes(self.private_key[:32])
        return key.sign(message_hash) + self._ed25519_public_key(key)

    @staticmethod
    def _ed25519_public_key(key: Ed25519PrivateKey) -> bytes:
        return key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)

    @property
    def address(self) -> str:
        if self.algorithm == "sha3":
            return str(Account.from_key(self.private_key).address).lower()
        key = Ed25519PrivateKey.from_private_bytes(self.private_key[:32])
        return to_hex(blake2b256(self._ed25519_public_key(key))[12:])


def build_signer(algorithm: str, private_key: bytes) -> Signer:
    if algorithm not in ALGORITHMS:
        raise ValueError(f"unsupported signature algorithm: {algorithm}")
    return Signer(algorithm=algorithm, private_key=private_key)
