from __future__ import annotations

import inspect
from argparse import Namespace
from typing import Any

import pytest

from cita_client import ClientContext
from command_registry import (
    KIND_PRIVATE_KEY,
    REGISTRY,
    iter_commands,
    lookup,
)
from dispatcher import dispatch, parse_flag_bag, resolve_arguments
from error_map import CommandError
from scm_config import load_context
from session import Session
from signing import Signer
from system_contracts import FACADES, pack_tx_codes, split_list

from ._scm_helpers import ACCOUNT, OTHER, SHA3_KEY

CONTEXT = ClientContext(url="http://127.0.0.1:1")


class _RecordingFacade:
    """Stands in for a contract facade and records the single call it gets."""

    calls: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = []

    def __init__(self, context: ClientContext) -> None:
        self.context = context

    def __getattr__(self, name: str):
        def _method(*args: Any, **kwargs: Any) -> Any:
            _RecordingFacade.calls.append((name, args, kwargs))
            return {"hash": "0x01", "status": "OK"} if "signer" in kwargs else [ACCOUNT]

        return _method


def _recording_factory(cls: type, context: ClientContext) -> _RecordingFacade:
    return _RecordingFacade(context)


@pytest.fixture(autouse=True)
def _reset_calls():
    _RecordingFacade.calls = []


def test_every_operation_has_a_facade_method_with_matching_signature():
    for group, op in iter_commands():
        facade = FACADES[group.facade]
        method = getattr(facade, op.method, None)
        assert method is not None, f"{group.name} {op.name}"

        params = inspect.signature(method).parameters
        positional = [
            name
            for name, p in params.items()
            if name != "self" and p.kind is inspect.Parameter.POSITIONAL_OR_KEYWORD
        ]
        expected = [p for p in op.params if p.kind != KIND_PRIVATE_KEY and p.name not in {"quota", "height"}]
        assert len(positional) == len(expected), f"{group.name} {op.name}"
        if op.is_write:
            assert "quota" in params and "signer" in params
        else:
            assert "height" in params


def test_registry_covers_all_system_contract_groups():
    assert set(REGISTRY) == {
        "NodeManager",
        "QuotaManager",
        "Group",
        "GroupManagement",
        "Role",
        "RoleManagement",
        "Authorization",
        "Permission",
        "PermissionManagement",
        "AdminManagement",
        "BatchTx",
        "SysConfig",
        "EmergencyBrake",
    }
    assert set(FACADES) == {g.facade for g in REGISTRY.values()}


def test_lookup_rejects_unknown_paths():
    with pytest.raises(CommandError) as exc:
        lookup("Group", "deleteEverything")
    assert exc.value.code == "UNKNOWN_COMMAND"


def test_flag_bag_forms():
    bag = parse_flag_bag(["--address", ACCOUNT, "--tx-code=0x01", "--tx-code", "0x02"])
    assert bag == {"address": [ACCOUNT], "tx-code": ["0x01", "0x02"]}
    with pytest.raises(CommandError):
        parse_flag_bag(["--address"])
    with pytest.raises(CommandError):
        parse_flag_bag(["positional"])


def test_resolved_arguments_are_immutable_and_typed():
    _, op = lookup("QuotaManager", "setAQL")
    resolved = resolve_arguments(
        "QuotaManager",
        op,
        {"address": ACCOUNT.upper().replace("0X", "0x"), "quota-limit": "5000000", "admin-private": SHA3_KEY},
        algorithm="sha3",
    )
    assert resolved["address"] == ACCOUNT
    assert resolved["quota-limit"] == 5_000_000
    assert resolved["quota"] is None
    assert isinstance(resolved["admin-private"], bytes)
    with pytest.raises(TypeError):
        resolved["quota"] = 1  # type: ignore[index]


def test_repeated_single_value_flag_is_rejected():
    _, op = lookup("AdminManagement", "isAdmin")
    with pytest.raises(CommandError) as exc:
        resolve_arguments("AdminManagement", op, {"address": [ACCOUNT, OTHER]}, algorithm="sha3")
    assert exc.value.code == "INVALID_REQUEST"


def test_write_passes_positional_args_default_quota_and_signer():
    session = Session()
    result = dispatch(
        "RoleManagement",
        "setRole",
        {"account": [ACCOUNT], "address": [OTHER], "private-key": [SHA3_KEY]},
        CONTEXT,
        session,
        client_factory=_recording_factory,
    )
    assert result.ok
    assert result.kind == "transaction"
    assert result.request["args"]["private-key"] == "<redacted>"

    [(name, args, kwargs)] = _RecordingFacade.calls
    assert name == "set_role"
    assert args == (ACCOUNT, OTHER)
    assert kwargs["quota"] is None
    assert isinstance(kwargs["signer"], Signer)
    assert session.last_output == {"command": "RoleManagement setRole", "kind": "transaction", "result": result.value}


def test_read_passes_height_by_keyword():
    result = dispatch(
        "Group",
        "inGroup",
        {"address": ACCOUNT, "account": OTHER, "height": "7"},
        CONTEXT,
        client_factory=_recording_factory,
    )
    assert result.ok and result.kind == "query"
    [(name, args, kwargs)] = _RecordingFacade.calls
    assert name == "in_group"
    assert args == (ACCOUNT, OTHER)
    assert kwargs == {"height": 7}


def test_multiple_flag_resolves_to_tuple():
    dispatch(
        "BatchTx",
        "multiTxs",
        {"tx-code": [ACCOUNT + "aa", OTHER], "private-key": SHA3_KEY},
        CONTEXT,
        client_factory=_recording_factory,
    )
    [(_, args, _)] = _RecordingFacade.calls
    assert args == ((ACCOUNT + "aa", OTHER),)


def test_validation_failure_never_builds_a_facade():
    session = Session()
    result = dispatch(
        "EmergencyBrake",
        "setState",
        {"state": "maybe", "admin-private": SHA3_KEY},
        CONTEXT,
        session,
        client_factory=_recording_factory,
    )
    assert not result.ok
    assert result.error is not None and result.error.code == "INVALID_FORMAT"
    assert _RecordingFacade.calls == []
    assert session.last_output is None


def test_out_of_curve_secp256k1_key_is_invalid_key():
    result = dispatch(
        "AdminManagement",
        "update",
        {"address": ACCOUNT, "admin-private": "0x" + "ff" * 32},
        CONTEXT,
        client_factory=_recording_factory,
    )
    assert result.error is not None and result.error.code == "INVALID_KEY"


def test_list_splitting_and_tx_code_packing():
    assert split_list(f"[{ACCOUNT}, {OTHER}]") == [ACCOUNT, OTHER]
    assert split_list(f"{ACCOUNT},{OTHER},") == [ACCOUNT, OTHER]

    packed = pack_tx_codes([ACCOUNT + "a9059cbb"])
    assert packed == bytes.fromhex(ACCOUNT[2:]) + (4).to_bytes(4, "big") + bytes.fromhex("a9059cbb")
    with pytest.raises(CommandError):
        pack_tx_codes(["0x1234"])


def test_session_templates():
    session = Session()
    with pytest.raises(CommandError):
        session.resolve("{{last}}")
    session.record({"command": "Role queryPermissions", "kind": "query", "result": [ACCOUNT, OTHER]})
    assert session.resolve("{{last}}") == f"{ACCOUNT},{OTHER}"
    assert session.resolve("{{ last.result[1] }}") == OTHER
    assert session.resolve("[{{last.result[0]}}]") == f"[{ACCOUNT}]"
    session.record({"command": "EmergencyBrake state", "kind": "query", "result": True})
    assert session.resolve_arguments({"state": ["{{last}}"]}) == {"state": ["true"]}
    with pytest.raises(CommandError):
        session.resolve("{{last.result[5]}}")
    with pytest.raises(CommandError):
        session.resolve("{{previous}}")


def _args(**kwargs: Any) -> Namespace:
    base = {"url": None, "debug": False, "algorithm": None, "config": None, "timeout_seconds": None}
    base.update(kwargs)
    return Namespace(**base)


def test_config_layering(tmp_path):
    cfg = tmp_path / "scm.yaml"
    cfg.write_text("url: http://file:1337\nalgorithm: blake2b\ntimeout_seconds: 5\n", encoding="utf-8")

    ctx = load_context(_args(config=str(cfg)), env={})
    assert ctx == ClientContext(url="http://file:1337", debug=False, algorithm="blake2b", timeout_seconds=5.0)

    ctx = load_context(_args(config=str(cfg)), env={"CITA_URL": "http://env:1", "CITA_SCM_DEBUG": "1"})
    assert ctx.url == "http://env:1"
    assert ctx.debug is True

    ctx = load_context(_args(config=str(cfg), url="http://flag:2", algorithm="sha3"), env={"CITA_URL": "http://env:1"})
    assert ctx.url == "http://flag:2"
    assert ctx.algorithm == "sha3"


def test_config_defaults_without_file(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    ctx = load_context(_args(), env={})
    assert ctx.url == "http://127.0.0.1:1337"
    assert ctx.algorithm == "sha3"


@pytest.mark.parametrize(
    "content",
    ["- a\n- b\n", "colour: blue\n", "timeout_seconds: -1\n", "url: ftp://node\n", "debug: maybe\n"],
)
def test_config_rejects_bad_files(tmp_path, content):
    cfg = tmp_path / "scm.yaml"
    cfg.write_text(content, encoding="utf-8")
    with pytest.raises(CommandError) as exc:
        load_context(_args(config=str(cfg)), env={})
    assert exc.value.code == "CONFIG_ERROR"
