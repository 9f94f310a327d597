"""Resolve raw command arguments and route them to one facade method."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Mapping

from cita_client import ClientContext
from command_registry import (
    KIND_ADDRESS,
    KIND_ADDRESS_LIST,
    KIND_BOOL,
    KIND_HEIGHT,
    KIND_HEX,
    KIND_HEX_LIST,
    KIND_PRIVATE_KEY,
    KIND_TEXT,
    KIND_U64,
    OperationSpec,
    ParamSpec,
    lookup,
)
from error_map import (
    ERR_INVALID_KEY,
    ERR_INVALID_REQUEST,
    ERR_MISSING_REQUIRED_PARAMETER,
    ERR_UNEXPECTED_PARAMETER,
    CommandError,
)
from signing import Signer, build_signer
from system_contracts import FACADES, ContractClient
from validators import (
    parse_address,
    parse_bool,
    parse_height,
    parse_hex,
    parse_hex_list,
    parse_private_key,
    parse_text,
    parse_u64,
)

if TYPE_CHECKING:
    from session import Session

logger = logging.getLogger(__name__)

KIND_QUERY = "query"
KIND_TRANSACTION = "transaction"
KIND_ERROR = "error"

SECRET_FLAGS = frozenset({"private-key", "admin-private"})

RawArguments = Mapping[str, "str | list[str]"]
ResolvedArguments = Mapping[str, Any]


def _usage_hint(group: str, operation: str) -> str:
    return f'run "scm usage {group} {operation}" for the accepted flags'


@dataclass(frozen=True)
class OperationResult:
    command: str
    kind: str
    value: Any = None
    error: CommandError | None = None
    request: Mapping[str, Any] = field(default_factory=dict)
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    def output(self) -> dict[str, Any]:
        return {"command": self.command, "kind": self.kind, "result": self.value}


def parse_flag_bag(tokens: list[str]) -> dict[str, list[str]]:
    """Collect ``--flag value`` / ``--flag=value`` tokens, keeping repeats."""
    out: dict[str, list[str]] = {}
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if not token.startswith("--") or token == "--":
            raise CommandError(
                ERR_INVALID_REQUEST,
                f"expected a --flag, got '{token}'",
                hint="pass parameters as --flag value",
            )
        if "=" in token:
            name, value = token[2:].split("=", 1)
            i += 1
        else:
            name = token[2:]
            if i + 1 >= len(tokens):
                raise CommandError(ERR_INVALID_REQUEST, f"--{name} expects a value")
            value = tokens[i + 1]
            i += 2
        if not name:
            raise CommandError(ERR_INVALID_REQUEST, f"invalid flag '{token}'")
        out.setdefault(name, []).append(value)
    return out


def _validator_for(spec: ParamSpec, algorithm: str) -> Callable[[str], Any]:
    if spec.kind == KIND_ADDRESS:
        return lambda raw: parse_address(raw, name=spec.name)
    if spec.kind == KIND_HEX:
        return lambda raw: parse_hex(raw, name=spec.name)
    if spec.kind == KIND_U64:
        return lambda raw: parse_u64(raw, name=spec.name)
    if spec.kind == KIND_PRIVATE_KEY:
        return lambda raw: parse_private_key(raw, algorithm=algorithm, name=spec.name)
    if spec.kind == KIND_HEIGHT:
        return lambda raw: parse_height(raw, name=spec.name)
    if spec.kind == KIND_BOOL:
        return lambda raw: parse_bool(raw, name=spec.name)
    if spec.kind == KIND_TEXT:
        return lambda raw: parse_text(raw, name=spec.name)
    if spec.kind in {KIND_ADDRESS_LIST, KIND_HEX_LIST}:
        return lambda raw: parse_hex_list(raw, name=spec.name)
    raise CommandError(ERR_INVALID_REQUEST, f"unsupported parameter kind: {spec.kind}")


def _as_values(raw: str | list[str] | tuple[str, ...]) -> list[str]:
    if isinstance(raw, (list, tuple)):
        return [str(item) for item in raw]
    return [str(raw)]


def resolve_arguments(
    group: str,
    op: OperationSpec,
    raw_args: RawArguments,
    *,
    algorithm: str,
) -> ResolvedArguments:
    declared = {p.name for p in op.params}
    for name in raw_args:
        if name not in declared:
            raise CommandError(
                ERR_UNEXPECTED_PARAMETER,
                f"--{name} is not a parameter of {group} {op.name}",
                hint=_usage_hint(group, op.name),
            )

    resolved: dict[str, Any] = {}
    for spec in op.params:
        validate = _validator_for(spec, algorithm)
        if spec.name in raw_args:
            values = _as_values(raw_args[spec.name])
        elif spec.default is not None:
            values = [spec.default]
        elif spec.required:
            raise CommandError(
                ERR_MISSING_REQUIRED_PARAMETER,
                f"missing required parameter {spec.flag} for {group} {op.name}",
                hint=_usage_hint(group, op.name),
            )
        else:
            resolved[spec.name] = None
            continue

        if spec.multiple:
            resolved[spec.name] = tuple(validate(v) for v in values)
        elif len(values) != 1:
            raise CommandError(ERR_INVALID_REQUEST, f"{spec.flag} given more than once")
        else:
            resolved[spec.name] = validate(values[0])
    return MappingProxyType(resolved)


def _signer_for(op: OperationSpec, resolved: ResolvedArguments, algorithm: str) -> Signer:
    key_spec = next(p for p in op.params if p.kind == KIND_PRIVATE_KEY)
    signer = build_signer(algorithm, resolved[key_spec.name])
    try:
        address = signer.address
    except Exception as err:  # noqa: BLE001
        raise CommandError(ERR_INVALID_KEY, f"{key_spec.flag} is not a valid {algorithm} private key") from err
    logger.debug("signing as %s", address)
    return signer


def _invoke(
    facade: ContractClient,
    op: OperationSpec,
    resolved: ResolvedArguments,
    signer: Signer | None,
) -> Any:
    method = getattr(facade, op.method)
    positional: list[Any] = []
    keyword: dict[str, Any] = {}
    for spec in op.params:
        value = resolved[spec.name]
        if spec.kind == KIND_PRIVATE_KEY:
            continue
        if spec.name in {"quota", "height"}:
            keyword[spec.name] = value
            continue
        positional.append(value)
    if signer is not None:
        keyword["signer"] = signer
    return method(*positional, **keyword)


def redacted_request(group: str, op_name: str, raw_args: RawArguments) -> dict[str, Any]:
    args: dict[str, Any] = {}
    for name, value in raw_args.items():
        if name in SECRET_FLAGS:
            args[name] = "<redacted>"
        elif isinstance(value, (list, tuple)):
            args[name] = value[0] if len(value) == 1 else list(value)
        else:
            args[name] = value
    return {"group": group, "operation": op_name, "args": args}


def dispatch(
    group: str,
    operation: str,
    raw_args: RawArguments,
    context: ClientContext,
    session: Session | None = None,
    *,
    client_factory: Callable[[type[ContractClient], ClientContext], ContractClient] | None = None,
) -> OperationResult:
    """Run one command end to end and wrap its outcome.

    Validation happens before any facade is built, so a rejected command never
    touches the network. ``CommandError`` becomes an error result; anything
    else propagates to the caller.
    """
    started = time.perf_counter()
    command = f"{group} {operation}"
    request = MappingProxyType(redacted_request(group, operation, raw_args))

    def _elapsed() -> int:
        return int((time.perf_counter() - started) * 1000)

    try:
        group_spec, op = lookup(group, operation)
        kind = KIND_TRANSACTION if op.is_write else KIND_QUERY
        resolved = resolve_arguments(group, op, raw_args, algorithm=context.algorithm)
        signer = _signer_for(op, resolved, context.algorithm) if op.is_write else None

        facade_cls = FACADES[group_spec.facade]
        facade = client_factory(facade_cls, context) if client_factory else facade_cls(context)
        logger.debug("dispatching %s to %s.%s", command, group_spec.facade, op.method)
        value = _invoke(facade, op, resolved, signer)
    except CommandError as err:
        logger.debug("%s failed: %s %s", command, err.code, err.message)
        return OperationResult(
            command=command,
            kind=KIND_ERROR,
            error=err,
            request=request,
            duration_ms=_elapsed(),
        )

    result = OperationResult(command=command, kind=kind, value=value, request=request, duration_ms=_elapsed())
    if session is not None:
        session.record(result.output())
    return result
