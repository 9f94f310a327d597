"""JSON envelopes for command outcomes, plus the ``--select`` path syntax."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

from dispatcher import OperationResult
from error_map import ERR_INTERNAL, ERR_INVALID_REQUEST, CommandError, exit_code_for


def json_dump(payload: Any, pretty: bool = True) -> str:
    return json.dumps(payload, indent=2 if pretty else None, sort_keys=False)


def _timestamp() -> str:
    return datetime.now(UTC).isoformat()


def base_response(command: str) -> dict[str, Any]:
    return {
        "timestamp_utc": _timestamp(),
        "command": command,
        "status": "error",
        "ok": False,
        "error_code": ERR_INTERNAL,
        "error_message": "unset",
    }


def build_error_payload(
    *,
    command: str,
    code: str,
    message: str,
    request: dict[str, Any] | None = None,
    duration_ms: int | None = None,
    hint: str | None = None,
) -> dict[str, Any]:
    payload = base_response(command)
    payload.update({"kind": "error", "error_code": code, "error_message": message})
    if request is not None:
        payload["request"] = request
    if duration_ms is not None:
        payload["duration_ms"] = duration_ms
    if hint:
        payload["hint"] = hint
    return payload


def build_payload(result: OperationResult) -> dict[str, Any]:
    request = dict(result.request)
    if result.error is not None:
        return build_error_payload(
            command=result.command,
            code=result.error.code,
            message=result.error.message,
            request=request,
            duration_ms=result.duration_ms,
            hint=result.error.hint,
        )
    payload = base_response(result.command)
    payload.update(
        {
            "status": "ok",
            "ok": True,
            "kind": result.kind,
            "error_code": None,
            "error_message": None,
            "request": request,
            "result": result.value,
            "duration_ms": result.duration_ms,
        }
    )
    return payload


def print_error(err: CommandError, *, command: str = "") -> int:
    """Print a failure as one compact JSON line and return its exit code."""
    payload = build_error_payload(command=command, code=err.code, message=err.message, hint=err.hint)
    print(json_dump(payload, pretty=False))
    return exit_code_for(err.code)


def print_selected_value(value: Any, *, compact: bool) -> None:
    if isinstance(value, (dict, list)):
        print(json_dump(value, pretty=not compact))
        return
    if value is None:
        print("null")
        return
    if isinstance(value, bool):
        print("true" if value else "false")
        return
    print(str(value))


def parse_path_segments(path: str, *, require_root: bool = True) -> list[tuple[str, Any]]:
    if not isinstance(path, str) or not path:
        raise ValueError("path must be a non-empty string")

    i = 0
    if require_root:
        if not path.startswith("$"):
            raise ValueError("path must start with '$'")
        i = 1

    segments: list[tuple[str, Any]] = []
    while i < len(path):
        ch = path[i]
        if ch == ".":
            i += 1
            start = i
            while i < len(path) and path[i] not in ".[":
                i += 1
            key = path[start:i]
            if not key:
                raise ValueError("invalid path: empty key segment")
            segments.append(("key", key))
            continue
        if ch == "[":
            i += 1
            start = i
            while i < len(path) and path[i].isdigit():
                i += 1
            if start == i or i >= len(path) or path[i] != "]":
                raise ValueError("invalid path: list index must be numeric and closed with ']'")
            segments.append(("idx", int(path[start:i], 10)))
            i += 1
            continue
        raise ValueError(f"invalid path syntax at position {i}")
    return segments


def select_by_segments(value: Any, segments: list[tuple[str, Any]]) -> Any:
    current = value
    for kind, token in segments:
        if kind == "key":
            if not isinstance(current, dict):
                raise ValueError(f"cannot select key '{token}' from non-object")
            if token not in current:
                raise ValueError(f"key '{token}' not found")
            current = current[token]
            continue
        if not isinstance(current, list):
            raise ValueError(f"cannot select index [{token}] from non-array")
        if token >= len(current):
            raise ValueError(f"index [{token}] out of range")
        current = current[token]
    return current


def render(
    result: OperationResult,
    *,
    compact: bool = False,
    result_only: bool = False,
    select: str | None = None,
) -> int:
    """Print one outcome and return the process exit code for it."""
    payload = build_payload(result)
    if result.error is not None:
        print(json_dump(payload, pretty=False))
        return exit_code_for(result.error.code)

    if select:
        try:
            selected = select_by_segments(payload, parse_path_segments(select))
        except ValueError as err:
            return print_error(
                CommandError(ERR_INVALID_REQUEST, f"invalid --select path: {err}"),
                command=result.command,
            )
        print_selected_value(selected, compact=compact)
        return 0

    if result_only:
        print_selected_value(payload.get("result"), compact=compact)
        return 0

    print(json_dump(payload, pretty=not compact))
    return 0
