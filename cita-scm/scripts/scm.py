#!/usr/bin/env python3
"""Command-line manager for the CITA system contracts."""

from __future__ import annotations

import argparse
import logging
import shlex
import sys
from pathlib import Path
from typing import TextIO

# Local imports for script execution (python3 scripts/scm.py ...)
SCRIPT_DIR = Path(__file__).resolve().parent
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from cita_client import ClientContext  # noqa: E402
from command_registry import describe_commands, lookup, usage  # noqa: E402
from dispatcher import KIND_ERROR, OperationResult, dispatch, parse_flag_bag  # noqa: E402
from error_map import ERR_INTERNAL, ERR_INVALID_REQUEST, CommandError  # noqa: E402
from reporter import json_dump, print_error, render  # noqa: E402
from scm_config import load_context  # noqa: E402
from session import Session  # noqa: E402
from signing import ALGORITHMS  # noqa: E402

logger = logging.getLogger("scm")

EXIT_WORDS = {"exit", "quit"}


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _render_for_args(args: argparse.Namespace, result: OperationResult) -> int:
    return render(
        result,
        compact=bool(args.compact),
        result_only=bool(args.result_only),
        select=args.select,
    )


def run_command(
    group: str,
    operation: str,
    tokens: list[str],
    context: ClientContext,
    session: Session | None = None,
) -> OperationResult:
    try:
        # unknown paths fail before any flag is parsed or templated
        lookup(group, operation)
        raw_args = parse_flag_bag(tokens)
        if session is not None:
            raw_args = session.resolve_arguments(raw_args)
    except CommandError as err:
        return OperationResult(command=f"{group} {operation}", kind=KIND_ERROR, error=err)
    return dispatch(group, operation, raw_args, context, session)


def cmd_call(args: argparse.Namespace, context: ClientContext) -> int:
    result = run_command(args.group, args.operation, list(args.args), context)
    return _render_for_args(args, result)


def cmd_usage(args: argparse.Namespace, context: ClientContext) -> int:
    print(usage(args.group, args.operation))
    return 0


def cmd_commands(args: argparse.Namespace, context: ClientContext) -> int:
    print(json_dump(describe_commands(), pretty=not args.compact))
    return 0


def run_shell(
    args: argparse.Namespace,
    context: ClientContext,
    stream: TextIO,
) -> int:
    session = Session()
    for line_no, line in enumerate(stream, start=1):
        text = line.strip()
        if not text or text.startswith("#"):
            continue
        if text in EXIT_WORDS:
            break
        try:
            tokens = shlex.split(text)
        except ValueError as err:
            rc = print_error(CommandError(ERR_INVALID_REQUEST, f"line {line_no}: {err}"))
            if args.fail_fast:
                return rc
            continue
        if len(tokens) < 2:
            rc = print_error(
                CommandError(
                    ERR_INVALID_REQUEST,
                    f"line {line_no}: expected GROUP OPERATION [--flag value ...]",
                    hint='run "scm usage" to list the contract groups',
                )
            )
            if args.fail_fast:
                return rc
            continue

        result = run_command(tokens[0], tokens[1], tokens[2:], context, session)
        rc = _render_for_args(args, result)
        if rc != 0 and args.fail_fast:
            return rc
    return 0


def cmd_shell(args: argparse.Namespace, context: ClientContext) -> int:
    return run_shell(args, context, sys.stdin)


def _add_output_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--compact", action="store_true", help="compact JSON output")
    parser.add_argument("--result-only", action="store_true", help="print only result field")
    parser.add_argument(
        "--select",
        help="jsonpath-lite selector (supports $, .key, [index])",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scm", description=__doc__)
    parser.add_argument("--url", help="JSON-RPC url of the CITA node (env: CITA_URL)")
    parser.add_argument("--debug", action="store_true", help="log rpc requests and responses to stderr")
    parser.add_argument("--algorithm", choices=ALGORITHMS, help="signature algorithm for write calls")
    parser.add_argument("--config", help="YAML config file (env: CITA_SCM_CONFIG)")
    parser.add_argument("--timeout-seconds", type=float, help="rpc timeout in seconds")
    _add_output_args(parser)
    sub = parser.add_subparsers(dest="command", required=True)

    call_parser = sub.add_parser("call", help="Call one system contract operation")
    call_parser.add_argument("group", help="contract group, e.g. QuotaManager")
    call_parser.add_argument("operation", help="operation, e.g. setAQL")
    call_parser.add_argument("args", nargs=argparse.REMAINDER, help="--flag value pairs")
    call_parser.set_defaults(func=cmd_call)

    usage_parser = sub.add_parser("usage", help="Show the flags of a group or operation")
    usage_parser.add_argument("group", nargs="?")
    usage_parser.add_argument("operation", nargs="?")
    usage_parser.set_defaults(func=cmd_usage)

    commands_parser = sub.add_parser("commands", help="List every command as JSON")
    commands_parser.set_defaults(func=cmd_commands)

    shell_parser = sub.add_parser("shell", help="Read commands from stdin, one per line")
    shell_parser.add_argument("--fail-fast", action="store_true", help="stop at the first failed command")
    shell_parser.set_defaults(func=cmd_shell)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        context = load_context(args)
    except CommandError as err:
        return print_error(err)
    configure_logging(context.debug)
    logger.debug("using %s with %s signatures", context.url, context.algorithm)

    try:
        return int(args.func(args, context))
    except CommandError as err:
        return print_error(err)
    except Exception as err:  # noqa: BLE001
        logger.debug("unhandled error", exc_info=True)
        return print_error(CommandError(ERR_INTERNAL, f"{type(err).__name__}: {err}"))


if __name__ == "__main__":
    raise SystemExit(main())
