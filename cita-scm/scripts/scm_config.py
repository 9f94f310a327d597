"""Global configuration: defaults, then YAML file, then environment, then flags."""

from __future__ import annotations

import os
from argparse import Namespace
from pathlib import Path
from typing import Any, Mapping

import yaml

from cita_client import DEFAULT_TIMEOUT_SECONDS, DEFAULT_URL, ClientContext
from error_map import ERR_CONFIG, CommandError
from signing import ALGORITHMS

DEFAULT_CONFIG_PATH = Path("~/.cita-scm.yaml")
CONFIG_KEYS = ("url", "debug", "algorithm", "timeout_seconds")

TRUE_WORDS = {"1", "true", "yes", "on"}
FALSE_WORDS = {"0", "false", "no", "off", ""}


def defaults() -> dict[str, Any]:
    return {
        "url": DEFAULT_URL,
        "debug": False,
        "algorithm": "sha3",
        "timeout_seconds": DEFAULT_TIMEOUT_SECONDS,
    }


def config_path(explicit: str | None, env: Mapping[str, str]) -> tuple[Path, bool]:
    """Return the file to read and whether it was asked for explicitly."""
    if explicit:
        return Path(explicit).expanduser(), True
    if env.get("CITA_SCM_CONFIG"):
        return Path(env["CITA_SCM_CONFIG"]).expanduser(), True
    return DEFAULT_CONFIG_PATH.expanduser(), False


def load_file(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.exists():
        if required:
            raise CommandError(ERR_CONFIG, f"config file not found: {path}")
        return {}
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as err:
        raise CommandError(ERR_CONFIG, f"cannot read config file {path}: {err}") from err
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise CommandError(ERR_CONFIG, f"config file {path} must hold a mapping")
    unknown = sorted(str(k) for k in payload if k not in CONFIG_KEYS)
    if unknown:
        raise CommandError(
            ERR_CONFIG,
            f"unknown keys in config file {path}: {', '.join(unknown)}",
            hint=f"supported keys: {', '.join(CONFIG_KEYS)}",
        )
    return dict(payload)


def _env_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in TRUE_WORDS:
        return True
    if value in FALSE_WORDS:
        return False
    raise CommandError(ERR_CONFIG, f"{name} must be a boolean, got '{raw}'")


def from_env(env: Mapping[str, str]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    if env.get("CITA_URL"):
        out["url"] = env["CITA_URL"]
    if "CITA_SCM_DEBUG" in env:
        out["debug"] = _env_bool("CITA_SCM_DEBUG", env["CITA_SCM_DEBUG"])
    if env.get("CITA_SCM_ALGORITHM"):
        out["algorithm"] = env["CITA_SCM_ALGORITHM"]
    return out


def from_args(args: Namespace) -> dict[str, Any]:
    out: dict[str, Any] = {}
    if getattr(args, "url", None):
        out["url"] = args.url
    if getattr(args, "debug", False):
        out["debug"] = True
    if getattr(args, "algorithm", None):
        out["algorithm"] = args.algorithm
    if getattr(args, "timeout_seconds", None) is not None:
        out["timeout_seconds"] = args.timeout_seconds
    return out


def validate(settings: dict[str, Any]) -> ClientContext:
    url = settings["url"]
    if not isinstance(url, str) or not url.startswith(("http://", "https://")):
        raise CommandError(ERR_CONFIG, f"url must be an http(s) URL, got '{url}'")
    algorithm = settings["algorithm"]
    if algorithm not in ALGORITHMS:
        raise CommandError(
            ERR_CONFIG,
            f"algorithm must be one of {', '.join(ALGORITHMS)}, got '{algorithm}'",
        )
    debug = settings["debug"]
    if not isinstance(debug, bool):
        raise CommandError(ERR_CONFIG, f"debug must be a boolean, got '{debug}'")
    timeout = settings["timeout_seconds"]
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise CommandError(ERR_CONFIG, f"timeout_seconds must be a positive number, got '{timeout}'")
    return ClientContext(url=url, debug=debug, algorithm=algorithm, timeout_seconds=float(timeout))


def load_context(args: Namespace, env: Mapping[str, str] | None = None) -> ClientContext:
    """Build the process-wide ``ClientContext``; later sources win."""
    environ = os.environ if env is None else env
    path, required = config_path(getattr(args, "config", None), environ)
    settings = defaults()
    settings.update(load_file(path, required=required))
    settings.update(from_env(environ))
    settings.update(from_args(args))
    return validate(settings)
