from __future__ import annotations

import json
import os
import subprocess
import sys
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer
from pathlib import Path
from typing import Any


ROOT = Path(__file__).resolve().parents[1]
SCRIPTS = ROOT / "scripts"

# eth-account documentation key; never holds funds.
SHA3_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
SHA3_ADDRESS = "0x2c7536e3605d9c16a7a3d7b1898e529396a65c23"
BLAKE2B_KEY = "0x" + "11" * 64

ACCOUNT = "0x1111111111111111111111111111111111111111"
OTHER = "0x2222222222222222222222222222222222222222"
DEAD_URL = "http://127.0.0.1:1"

METADATA_V0 = {"chainId": 1, "chainIdV1": "0x1", "version": 0}
METADATA_V1 = {"chainId": 0, "chainIdV1": "0x1", "version": 1}
TX_ACK = {"hash": "0x" + "ab" * 32, "status": "OK"}


def _run_cmd(
    args: list[str],
    *,
    url: str = DEAD_URL,
    extra_env: dict[str, str] | None = None,
    stdin: str | None = None,
) -> subprocess.CompletedProcess[str]:
    cmd = [sys.executable, str(SCRIPTS / "scm.py"), "--url", url, *args]
    env = os.environ.copy()
    for name in ("CITA_URL", "CITA_SCM_CONFIG", "CITA_SCM_DEBUG", "CITA_SCM_ALGORITHM"):
        env.pop(name, None)
    # keep a real ~/.cita-scm.yaml out of the run
    env["HOME"] = str(ROOT / "tests")
    if extra_env:
        env.update(extra_env)
    return subprocess.run(cmd, input=stdin, capture_output=True, text=True, check=False, env=env)


def _run_call(
    group: str,
    operation: str,
    flags: list[str],
    *,
    url: str = DEAD_URL,
    global_args: list[str] | None = None,
    extra_env: dict[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    return _run_cmd([*(global_args or []), "call", group, operation, *flags], url=url, extra_env=extra_env)


def _word(value: int) -> str:
    return f"{value:064x}"


def _pad_address(addr: str) -> str:
    return f"{'0'*24}{addr[2:].lower()}"


def _rpc_error(code: int, message: str) -> dict[str, Any]:
    return {"__error__": {"code": code, "message": message}}


class _RPCHandler(BaseHTTPRequestHandler):
    routes: dict[str, Any] = {}
    calls: list[dict[str, Any]] = []

    def do_POST(self) -> None:  # noqa: N802
        length = int(self.headers.get("Content-Length", "0"))
        body = self.rfile.read(length).decode("utf-8")
        try:
            payload = json.loads(body)
        except Exception:  # noqa: BLE001
            payload = {"raw": body}
        _RPCHandler.calls.append(payload)

        method = payload.get("method")
        route = _RPCHandler.routes.get(method)
        # a list is a queue of results, one per call
        if isinstance(route, list):
            route = route.pop(0) if route else None
        if isinstance(route, dict) and "__error__" in route:
            response_payload = {"jsonrpc": "2.0", "id": payload.get("id", 1), "error": route["__error__"]}
        elif route is None:
            response_payload = {
                "jsonrpc": "2.0",
                "id": payload.get("id", 1),
                "error": {"code": -32601, "message": f"Method not found: {method}"},
            }
        else:
            response_payload = {"jsonrpc": "2.0", "id": payload.get("id", 1), "result": route}

        encoded = json.dumps(response_payload).encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(encoded)))
        self.end_headers()
        self.wfile.write(encoded)

    def log_message(self, format: str, *args) -> None:  # noqa: A003
        return


def _serve(routes: dict[str, Any]) -> tuple[HTTPServer, str]:
    _RPCHandler.routes = {k: list(v) if isinstance(v, list) else v for k, v in routes.items()}
    _RPCHandler.calls = []
    server = HTTPServer(("127.0.0.1", 0), _RPCHandler)
    url = f"http://127.0.0.1:{server.server_address[1]}"
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    return server, url


def _stop(server: HTTPServer) -> None:
    server.shutdown()
    server.server_close()


def _methods() -> list[str]:
    return [str(call.get("method")) for call in _RPCHandler.calls]
