"""Base CITA JSON-RPC client shared by every system contract facade."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any

from error_map import ERR_CONTRACT, ERR_RPC_TRANSPORT, CommandError
from rpc_transport import invoke_rpc
from signing import Signer
from transforms import to_hex
from tx_codec import VALID_BLOCK_WINDOW, Transaction, chain_id_v1_bytes, serialize_unverified

logger = logging.getLogger(__name__)

DEFAULT_URL = "http://127.0.0.1:1337"
DEFAULT_TIMEOUT_SECONDS = 20.0


@dataclass(frozen=True)
class ClientContext:
    """Process-wide client settings. Built once from configuration."""

    url: str = DEFAULT_URL
    debug: bool = False
    algorithm: str = "sha3"
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


def format_height(height: str | int) -> str:
    if isinstance(height, int):
        return hex(height)
    return str(height)


def _remote_error_hint(error_obj: dict[str, Any]) -> str | None:
    message = str(error_obj.get("message", "")).lower()
    if "quota" in message:
        return "the transaction ran out of quota. retry with a larger --quota."
    if "permission" in message or "not admin" in message:
        return "the signing account lacks the permission for this operation."
    if "method not found" in message:
        return "the node does not support this rpc method."
    return None


class CitaClient:
    def __init__(self, context: ClientContext) -> None:
        self.context = context
        self._next_id = 1

    def rpc(self, method: str, params: list[Any]) -> Any:
        payload = {"jsonrpc": "2.0", "id": self._next_id, "method": method, "params": params}
        self._next_id += 1
        transport = invoke_rpc(
            rpc_url=self.context.url,
            payload=payload,
            timeout_seconds=self.context.timeout_seconds,
        )
        if not transport["ok"]:
            raise CommandError(
                str(transport["error_code"] or ERR_RPC_TRANSPORT),
                f"{method}: {transport['error_message']}",
                hint=f"check that a CITA node is reachable at {self.context.url}",
            )

        rpc_response = transport["rpc_response"]
        if not isinstance(rpc_response, dict):
            raise CommandError(ERR_RPC_TRANSPORT, f"{method}: rpc response must be an object")
        error_obj = rpc_response.get("error")
        if error_obj is not None:
            if not isinstance(error_obj, dict):
                error_obj = {"message": str(error_obj)}
            raise CommandError(
                ERR_CONTRACT,
                f"{method}: {error_obj.get('message', 'rpc returned an error response')}"
                f" (code {error_obj.get('code')})",
                hint=_remote_error_hint(error_obj),
            )
        if "result" not in rpc_response:
            raise CommandError(ERR_RPC_TRANSPORT, f"{method}: rpc response has no result")
        return rpc_response["result"]

    def call(self, to: str, data: str, height: str | int = "latest") -> str:
        result = self.rpc("call", [{"to": to, "data": data}, format_height(height)])
        if not isinstance(result, str):
            raise CommandError(ERR_RPC_TRANSPORT, "call: expected a hex string result")
        return result

    def block_number(self) -> int:
        result = self.rpc("blockNumber", [])
        try:
            return int(str(result), 16)
        except ValueError as err:
            raise CommandError(ERR_RPC_TRANSPORT, f"blockNumber: invalid result {result!r}") from err

    def get_metadata(self, height: str | int = "latest") -> dict[str, Any]:
        result = self.rpc("getMetaData", [format_height(height)])
        if not isinstance(result, dict):
            raise CommandError(ERR_RPC_TRANSPORT, "getMetaData: expected an object result")
        return result

    def build_transaction(self, to: str, data: str, *, quota: int) -> Transaction:
        metadata = self.get_metadata()
        current = self.block_number()
        version = int(metadata.get("version", 0) or 0)
        return Transaction(
            to=to,
            nonce=uuid.uuid4().hex,
            quota=quota,
            valid_until_block=current + VALID_BLOCK_WINDOW,
            data=bytes.fromhex(data[2:] if data.startswith("0x") else data),
            chain_id=int(metadata.get("chainId", 0) or 0) if version == 0 else 0,
            chain_id_v1=chain_id_v1_bytes(metadata.get("chainIdV1", "0x0")) if version else b"",
            version=version,
        )

    def send_transaction(self, to: str, data: str, *, quota: int, signer: Signer) -> dict[str, Any]:
        tx = self.build_transaction(to, data, quota=quota)
        tx_bytes = tx.serialize()
        signature = signer.sign(tx_bytes)
        raw = serialize_unverified(tx_bytes, signature)
        logger.debug("submitting transaction to %s with quota %d", to, quota)
        result = self.rpc("sendRawTransaction", [to_hex(raw)])
        if not isinstance(result, dict):
            raise CommandError(ERR_RPC_TRANSPORT, "sendRawTransaction: expected an object result")
        return {
            "hash": result.get("hash"),
            "status": result.get("status"),
            "to": to,
            "sender": signer.address,
            "quota": quota,
            "valid_until_block": tx.valid_until_block,
        }
