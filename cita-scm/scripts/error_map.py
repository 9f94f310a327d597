"""Error codes shared by validators, dispatcher, client and reporter."""

from __future__ import annotations

ERR_INVALID_FORMAT = "INVALID_FORMAT"
ERR_OUT_OF_RANGE = "OUT_OF_RANGE"
ERR_INVALID_KEY = "INVALID_KEY"
ERR_INVALID_HEIGHT = "INVALID_HEIGHT"
ERR_UNKNOWN_COMMAND = "UNKNOWN_COMMAND"
ERR_MISSING_REQUIRED_PARAMETER = "MISSING_REQUIRED_PARAMETER"
ERR_UNEXPECTED_PARAMETER = "UNEXPECTED_PARAMETER"
ERR_INVALID_REQUEST = "INVALID_REQUEST"
ERR_CONFIG = "CONFIG_ERROR"
ERR_RPC_TRANSPORT = "TRANSPORT_ERROR"
ERR_RPC_TIMEOUT = "RPC_TIMEOUT"
ERR_CONTRACT = "CONTRACT_ERROR"
ERR_ABI_DECODE_FAILED = "ABI_DECODE_FAILED"
ERR_INTERNAL = "INTERNAL"

# Failures detected before any network I/O.
VALIDATION_ERRORS = frozenset(
    {
        ERR_INVALID_FORMAT,
        ERR_OUT_OF_RANGE,
        ERR_INVALID_KEY,
        ERR_INVALID_HEIGHT,
        ERR_UNKNOWN_COMMAND,
        ERR_MISSING_REQUIRED_PARAMETER,
        ERR_UNEXPECTED_PARAMETER,
        ERR_INVALID_REQUEST,
        ERR_CONFIG,
    }
)


class CommandError(Exception):
    """A failed invocation, carrying one of the codes above."""

    def __init__(self, code: str, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.hint = hint

    def __str__(self) -> str:
        return self.message


def exit_code_for(code: str) -> int:
    if code in VALIDATION_ERRORS:
        return 2
    return 1
