"""HTTP JSON-RPC transport. One POST per call, no retries."""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from socket import timeout as SocketTimeout
from typing import Any

from error_map import ERR_RPC_TIMEOUT, ERR_RPC_TRANSPORT

logger = logging.getLogger(__name__)


def invoke_rpc(
    *,
    rpc_url: str,
    payload: dict[str, Any],
    timeout_seconds: float,
) -> dict[str, Any]:
    body = json.dumps(payload).encode("utf-8")
    logger.debug("rpc request to %s: %s", rpc_url, body.decode("utf-8"))
    req = urllib.request.Request(
        rpc_url,
        data=body,
        method="POST",
        headers={"Content-Type": "application/json"},
    )
    try:
        with urllib.request.urlopen(req, timeout=timeout_seconds) as resp:
            text = resp.read().decode("utf-8")
    except SocketTimeout as err:
        return {
            "ok": False,
            "error_code": ERR_RPC_TIMEOUT,
            "error_message": f"rpc request timed out: {err}",
            "rpc_response": None,
        }
    except urllib.error.HTTPError as err:
        text = err.read().decode("utf-8", errors="replace")
        return {
            "ok": False,
            "error_code": ERR_RPC_TRANSPORT,
            "error_message": f"http error {err.code}",
            "rpc_response": {"status": err.code, "raw": text},
        }
    except urllib.error.URLError as err:
        if isinstance(err.reason, SocketTimeout):
            return {
                "ok": False,
                "error_code": ERR_RPC_TIMEOUT,
                "error_message": f"rpc request timed out: {err.reason}",
                "rpc_response": None,
            }
        return {
            "ok": False,
            "error_code": ERR_RPC_TRANSPORT,
            "error_message": str(err.reason),
            "rpc_response": None,
        }
    except (OSError, ValueError) as err:
        return {
            "ok": False,
            "error_code": ERR_RPC_TRANSPORT,
            "error_message": str(err),
            "rpc_response": None,
        }

    logger.debug("rpc response from %s: %s", rpc_url, text)
    try:
        rpc_response = json.loads(text)
    except json.JSONDecodeError:
        return {
            "ok": False,
            "error_code": ERR_RPC_TRANSPORT,
            "error_message": "rpc endpoint returned non-json response",
            "rpc_response": {"raw": text},
        }
    return {
        "ok": True,
        "error_code": None,
        "error_message": None,
        "rpc_response": rpc_response,
    }
