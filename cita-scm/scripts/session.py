"""Interactive session state: the last successful output and ``{{last}}`` references."""

from __future__ import annotations

import json
import re
from typing import Any

from error_map import ERR_INVALID_REQUEST, CommandError
from reporter import parse_path_segments, select_by_segments

TEMPLATE_FULL_RE = re.compile(r"^\{\{\s*([^{}]+?)\s*\}\}$")
TEMPLATE_ANY_RE = re.compile(r"\{\{\s*([^{}]+?)\s*\}\}")
LAST = "last"


def _as_argument(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_as_argument(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, sort_keys=True)
    return str(value)


class Session:
    """Holds the output of the last successful command in a shell run.

    ``{{last}}`` is the last result value; ``{{last.<path>}}`` selects from the
    whole output record (``command``, ``kind``, ``result``), for example
    ``{{last.result[0]}}``.
    """

    def __init__(self) -> None:
        self.last_output: dict[str, Any] | None = None

    def record(self, output: dict[str, Any]) -> None:
        self.last_output = output

    def _resolve_expr(self, expr: str) -> Any:
        raw = expr.strip()
        if not raw.startswith(LAST) or raw[len(LAST) : len(LAST) + 1] not in ("", ".", "["):
            raise CommandError(ERR_INVALID_REQUEST, f"unknown template reference '{{{{{raw}}}}}'")
        if self.last_output is None:
            raise CommandError(
                ERR_INVALID_REQUEST,
                f"template '{{{{{raw}}}}}' used before any command succeeded",
            )
        rest = raw[len(LAST) :]
        if not rest:
            return self.last_output.get("result")
        try:
            return select_by_segments(self.last_output, parse_path_segments(f"${rest}"))
        except ValueError as err:
            raise CommandError(ERR_INVALID_REQUEST, f"template path '{raw}' failed: {err}") from err

    def resolve(self, value: str) -> str:
        full_match = TEMPLATE_FULL_RE.fullmatch(value)
        if full_match:
            return _as_argument(self._resolve_expr(full_match.group(1)))
        return TEMPLATE_ANY_RE.sub(lambda m: _as_argument(self._resolve_expr(m.group(1))), value)

    def resolve_arguments(self, raw_args: dict[str, list[str]]) -> dict[str, list[str]]:
        return {name: [self.resolve(v) for v in values] for name, values in raw_args.items()}
