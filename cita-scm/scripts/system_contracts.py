"""Typed client facades, one per CITA system contract.

Read methods take an optional ``height`` and return decoded values. Write
methods take an optional ``quota`` (``None`` means the default) and a
``signer``, and return the submission acknowledgment.
"""

from __future__ import annotations

from typing import Any

from abi_codec import decode_output, encode_call
from cita_client import CitaClient, ClientContext
from command_registry import DEFAULT_QUOTA
from error_map import ERR_ABI_DECODE_FAILED, ERR_INVALID_FORMAT, ERR_OUT_OF_RANGE, CommandError
from signing import Signer
from transforms import bytes32_to_text, hex_to_bytes, text_to_bytes32, to_hex
from validators import parse_address, parse_hex

SYS_CONFIG_ADDRESS = "0xffffffffffffffffffffffffffffffffff020000"
NODE_MANAGER_ADDRESS = "0xffffffffffffffffffffffffffffffffff020001"
QUOTA_MANAGER_ADDRESS = "0xffffffffffffffffffffffffffffffffff020003"
PERMISSION_MANAGEMENT_ADDRESS = "0xffffffffffffffffffffffffffffffffff020004"
AUTHORIZATION_ADDRESS = "0xffffffffffffffffffffffffffffffffff020006"
ROLE_MANAGEMENT_ADDRESS = "0xffffffffffffffffffffffffffffffffff020007"
GROUP_MANAGEMENT_ADDRESS = "0xffffffffffffffffffffffffffffffffff02000a"
ADMIN_ADDRESS = "0xffffffffffffffffffffffffffffffffff02000c"
BATCH_TX_ADDRESS = "0xffffffffffffffffffffffffffffffffff02000e"
EMERGENCY_BRAKE_ADDRESS = "0xffffffffffffffffffffffffffffffffff02000f"

U63_MAX = 2**63 - 1
BQL_MIN = 2**28 - 1
AQL_MIN = 2**22 - 1

NODE_STATUS = {0: "close", 1: "start", 2: "ready"}


def split_list(raw: str) -> list[str]:
    """Split ``"[0xa, 0xb]"`` or ``"0xa,0xb"`` into its items."""
    body = raw.strip()
    if body.startswith("["):
        body = body[1:]
    if body.endswith("]"):
        body = body[:-1]
    return [item.strip() for item in body.split(",") if item.strip()]


def address_list(raw: str, *, name: str) -> list[str]:
    return [parse_address(item, name=name) for item in split_list(raw)]


def function_hash(raw: str, *, name: str = "function-hash") -> str:
    value = parse_hex(raw, name=name)
    if len(value) != 10:
        raise CommandError(ERR_INVALID_FORMAT, f"--{name} must be a 4-byte function selector, got '{raw}'")
    return value


def function_hash_list(raw: str, *, name: str = "function-hashes") -> list[str]:
    return [function_hash(item, name=name) for item in split_list(raw)]


def name_bytes32(text: str, *, name: str = "name") -> str:
    try:
        return to_hex(text_to_bytes32(text))
    except ValueError as err:
        raise CommandError(ERR_INVALID_FORMAT, f"--{name}: {err}") from err


def check_quota_limit(value: int, minimum: int) -> int:
    if not minimum <= value <= U63_MAX:
        raise CommandError(
            ERR_OUT_OF_RANGE,
            f"--quota-limit must be between {minimum} and {U63_MAX}, got {value}",
        )
    return value


class ContractClient:
    """Shared plumbing: encode, call or send, decode."""

    def __init__(self, context: ClientContext, client: CitaClient | None = None) -> None:
        self.context = context
        self.client = client or CitaClient(context)

    def _encode(self, signature: str, args: list[Any]) -> str:
        try:
            return encode_call(signature, args)
        except ValueError as err:
            raise CommandError(ERR_INVALID_FORMAT, f"{signature}: {err}") from err

    def _query(
        self,
        to: str,
        signature: str,
        args: list[Any],
        out_types: str,
        height: str | int = "latest",
    ) -> list[Any]:
        data = self._encode(signature, args)
        output = self.client.call(to, data, height)
        if output in ("0x", "") and out_types:
            raise CommandError(
                ERR_ABI_DECODE_FAILED,
                f"{signature}: empty return data from {to}",
                hint="the address may not hold the expected contract",
            )
        try:
            return decode_output(out_types, output)
        except (ValueError, UnicodeDecodeError) as err:
            raise CommandError(ERR_ABI_DECODE_FAILED, f"{signature}: {err}") from err

    def _query_one(self, to: str, signature: str, args: list[Any], out_type: str, height: str | int) -> Any:
        return self._query(to, signature, args, out_type, height)[0]

    def _send(
        self,
        to: str,
        signature: str,
        args: list[Any],
        quota: int | None,
        signer: Signer,
    ) -> dict[str, Any]:
        data = self._encode(signature, args)
        return self.client.send_transaction(
            to,
            data,
            quota=DEFAULT_QUOTA if quota is None else quota,
            signer=signer,
        )


class NodeManageClient(ContractClient):
    def list_node(self, *, height: str | int = "latest") -> list[str]:
        return self._query_one(NODE_MANAGER_ADDRESS, "listNode()", [], "address[]", height)

    def list_stake(self, *, height: str | int = "latest") -> list[int]:
        return self._query_one(NODE_MANAGER_ADDRESS, "listStake()", [], "uint64[]", height)

    def node_status(self, address: str, *, height: str | int = "latest") -> dict[str, Any]:
        code = self._query_one(NODE_MANAGER_ADDRESS, "getStatus(address)", [address], "uint8", height)
        return {"code": code, "status": NODE_STATUS.get(code, "unknown")}

    def delete_node(self, address: str, *, quota: int | None = None, signer: Signer) -> dict[str, Any]:
        return self._send(NODE_MANAGER_ADDRESS, "deleteNode(address)", [address], quota, signer)

    def approve_node(self, address: str, *, quota: int | None = None, signer: Signer) -> dict[str, Any]:
        return self._send(NODE_MANAGER_ADDRESS, "approveNode(address)", [address], quota, signer)

    def set_stake(self, address: str, stake: int, *, quota: int | None = None, signer: Signer) -> dict[str, Any]:
        return self._send(NODE_MANAGER_ADDRESS, "setStake(address,uint64)", [address, stake], quota, signer)

    def stake_permillage(self, address: str, *, height: str | int = "latest") -> int:
        return self._query_one(NODE_MANAGER_ADDRESS, "stakePermillage(address)", [address], "uint64", height)


class QuotaManageClient(ContractClient):
    def get_bql(self, *, height: str | int = "latest") -> int:
        return self._query_one(QUOTA_MANAGER_ADDRESS, "getBQL()", [], "uint256", height)

    def get_default_aql(self, *, height: str | int = "latest") -> int:
        return self._query_one(QUOTA_MANAGER_ADDRESS, "getDefaultAQL()", [], "uint256", height)

    def get_accounts(self, *, height: str | int = "latest") -> list[str]:
        return self._query_one(QUOTA_MANAGER_ADDRESS, "getAccounts()", [], "address[]", height)

    def get_quotas(self, *, height: str | int = "latest") -> list[int]:
        return self._query_one(QUOTA_MANAGER_ADDRESS, "getQuotas()", [], "uint256[]", height)

    def get_aql(self, address: str, *, height: str | int = "latest") -> int:
        return self._query_one(QUOTA_MANAGER_ADDRESS, "getAQL(address)", [address], "uint256", height)

    def set_bql(self, quota_limit: int, *, quota: int | None = None, signer: Signer) -> dict[str, Any]:
        check_quota_limit(quota_limit, BQL_MIN)
        return self._send(QUOTA_MANAGER_ADDRESS, "setBQL(uint256)", [quota_limit], quota, signer)

    def set_default_aql(self, quota_limit: int, *, quota: int | None = None, signer: Signer) -> dict[str, Any]:
        check_quota_limit(quota_limit, AQL_MIN)
        return self._send(QUOTA_MANAGER_ADDRESS, "setDefaultAQL(uint256)", [quota_limit], quota, signer)

    def set_aql(
        self,
        address: str,
        quota_limit: int,
        *,
        quota: int | None = None,
        signer: Signer,
    ) -> dict[str, Any]:
        check_quota_limit(quota_limit, AQL_MIN)
        return self._send(QUOTA_MANAGER_ADDRESS, "setAQL(address,uint256)", [address, quota_limit], quota, signer)


class GroupClient(ContractClient):
    """Queries against one group contract, addressed by ``address``."""

    def query_info(self, address: str, *, height: str | int = "latest") -> dict[str, Any]:
        name, accounts = self._query(address, "queryInfo()", [], "bytes32,address[]", height)
        return {"name": bytes32_to_text(name), "accounts": accounts}

    def query_name(self, address: str, *, height: str | int = "latest") -> str:
        return bytes32_to_text(self._query_one(address, "queryName()", [], "bytes32", height))

    def query_accounts(self, address: str, *, height: str | int = "latest") -> list[str]:
        return self._query_one(address, "queryAccounts()", [], "address[]", height)

    def query_child(self, address: str, *, height: str | int = "latest") -> list[str]:
        return self._query_one(address, "queryChild()", [], "address[]", height)

    def query_child_length(self, address: str, *, height: str | int = "latest") -> int:
        return self._query_one(address, "queryChildLength()", [], "uint256", height)

    def query_parent(self, address: str, *, height: str | int = "latest") -> str:
        return self._query_one(address, "queryParent()", [], "address", height)

    def in_group(self, address: str, account: str, *, height: str | int = "latest") -> bool:
        return self._query_one(address, "inGroup(address)", [account], "bool", height)


class GroupManageClient(ContractClient):
    def new_group(
        self,
        origin: str,
        name: str,
        accounts: str,
        *,
        quota: int | None = None,
        signer: Signer,
    ) -> dict[str, Any]:
        args = [parse_address(origin, name="origin"), name_bytes32(name), address_list(accounts, name="accounts")]
        return self._send(GROUP_MANAGEMENT_ADDRESS, "newGroup(address,bytes32,address[])", args, quota, signer)

    def delete_group(self, origin: str, target: str, *, quota: int | None = None, signer: Signer) -> dict[str, Any]:
        args = [parse_address(origin, name="origin"), parse_address(target, name="target")]
        return self._send(GROUP_MANAGEMENT_ADDRESS, "deleteGroup(address,address)", args, quota, signer)

    def update_group_name(
        self,
        origin: str,
        target: str,
        name: str,
        *,
        quota: int | None = None,
        signer: Signer,
    ) -> dict[str, Any]:
        args = [parse_address(origin, name="origin"), parse_address(target, name="target"), name_bytes32(name)]
        return self._send(GROUP_MANAGEMENT_ADDRESS, "updateGroupName(address,address,bytes32)", args, quota, signer)

    def add_accounts(
        self,
        origin: str,
        target: str,
        accounts: str,
        *,
        quota: int | None = None,
        signer: Signer,
    ) -> dict[str, Any]:
        args = [
            parse_address(origin, name="origin"),
            parse_address(target, name="target"),
            address_list(accounts, name="accounts"),
        ]
        return self._send(GROUP_MANAGEMENT_ADDRESS, "addAccounts(address,address,address[])", args, quota, signer)

    def delete_accounts(
        self,
        origin: str,
        target: str,
        accounts: str,
        *,
        quota: int | None = None,
        signer: Signer,
    ) -> dict[str, Any]:
        args = [
            parse_address(origin, name="origin"),
            parse_address(target, name="target"),
            address_list(accounts, name="accounts"),
        ]
        return self._send(GROUP_MANAGEMENT_ADDRESS, "deleteAccounts(address,address,address[])", args, quota, signer)

    def check_scope(self, origin: str, target: str, *, height: str | int = "latest") -> bool:
        args = [parse_address(origin, name="origin"), parse_address(target, name="target")]
        return self._query_one(GROUP_MANAGEMENT_ADDRESS, "checkScope(address,address)", args, "bool", height)

    def query_groups(self, *, height: str | int = "latest") -> list[str]:
        return self._query_one(GROUP_MANAGEMENT_ADDRESS, "queryGroups()", [], "address[]", height)


class RoleClient(ContractClient):
    """Queries against one role contract, addressed by ``address``."""

    def query_role(self, address: str, *, height: str | int = "latest") -> dict[str, Any]:
        name, permissions = self._query(address, "queryRole()", [], "bytes32,address[]", height)
        return {"name": bytes32_to_text(name), "permissions": permissions}

    def query_name(self, address: str, *, height: str | int = "latest") -> str:
        return bytes32_to_text(self._query_one(address, "queryName()", [], "bytes32", height))

    def query_permissions(self, address: str, *, height: str | int = "latest") -> list[str]:
        return self._query_one(address, "queryPermissions()", [], "address[]", height)

    def length_of_permissions(self, address: str, *, height: str | int = "latest") -> int:
        return self._query_one(address, "lengthOfPermissions()", [], "uint256", height)

    def in_permissions(self, address: str, permission: str, *, height: str | int = "latest") -> bool:
        return self._query_one(address, "inPermissions(address)", [permission], "bool", height)


class RoleManageClient(ContractClient):
    def new_role(self, name: str, permissions: str, *, quota: int | None = None, signer: Signer) -> dict[str, Any]:
        args = [name_bytes32(name), address_list(permissions, name="permissions")]
        return self._send(ROLE_MANAGEMENT_ADDRESS, "newRole(bytes32,address[])", args, quota, signer)

    def delete_role(self, address: str, *, quota: int | None = None, signer: Signer) -> dict[str, Any]:
        return self._send(ROLE_MANAGEMENT_ADDRESS, "deleteRole(address)", [address], quota, signer)

    def update_role_name(self, address: str, name: str, *, quota: int | None = None, signer: Signer) -> dict[str, Any]:
        args = [address, name_bytes32(name)]
        return self._send(ROLE_MANAGEMENT_ADDRESS, "updateRoleName(address,bytes32)", args, quota, signer)

    def add_permissions(
        self,
        address: str,
        permissions: str,
        *,
        quota: int | None = None,
        signer: Signer,
    ) -> dict[str, Any]:
        args = [address, address_list(permissions, name="permissions")]
        return self._send(ROLE_MANAGEMENT_ADDRESS, "addPermissions(address,address[])", args, quota, signer)

    def delete_permissions(
        self,
        address: str,
        permissions: str,
        *,
        quota: int | None = None,
        signer: Signer,
    ) -> dict[str, Any]:
        args = [address, address_list(permissions, name="permissions")]
        return self._send(ROLE_MANAGEMENT_ADDRESS, "deletePermissions(address,address[])", args, quota, signer)

    def set_role(self, account: str, address: str, *, quota: int | None = None, signer: Signer) -> dict[str, Any]:
        return self._send(ROLE_MANAGEMENT_ADDRESS, "setRole(address,address)", [account, address], quota, signer)

    def cancel_role(self, account: str, address: str, *, quota: int | None = None, signer: Signer) -> dict[str, Any]:
        return self._send(ROLE_MANAGEMENT_ADDRESS, "cancelRole(address,address)", [account, address], quota, signer)

    def clear_role(self, account: str, *, quota: int | None = None, signer: Signer) -> dict[str, Any]:
        return self._send(ROLE_MANAGEMENT_ADDRESS, "clearRole(address)", [account], quota, signer)

    def query_roles(self, account: str, *, height: str | int = "latest") -> list[str]:
        return self._query_one(ROLE_MANAGEMENT_ADDRESS, "queryRoles(address)", [account], "address[]", height)

    def query_accounts(self, address: str, *, height: str | int = "latest") -> list[str]:
        return self._query_one(ROLE_MANAGEMENT_ADDRESS, "queryAccounts(address)", [address], "address[]", height)


class AuthorizationClient(ContractClient):
    def query_permissions(self, account: str, *, height: str | int = "latest") -> list[str]:
        return self._query_one(AUTHORIZATION_ADDRESS, "queryPermissions(address)", [account], "address[]", height)

    def query_accounts(self, permission: str, *, height: str | int = "latest") -> list[str]:
        return self._query_one(AUTHORIZATION_ADDRESS, "queryAccounts(address)", [permission], "address[]", height)

    def query_all_accounts(self, *, height: str | int = "latest") -> list[str]:
        return self._query_one(AUTHORIZATION_ADDRESS, "queryAllAccounts()", [], "address[]", height)

    def check_resource(
        self,
        account: str,
        contract: str,
        function_hash_value: str,
        *,
        height: str | int = "latest",
    ) -> bool:
        args = [account, contract, function_hash(function_hash_value)]
        return self._query_one(AUTHORIZATION_ADDRESS, "checkResource(address,address,bytes4)", args, "bool", height)

    def check_permission(self, account: str, permission: str, *, height: str | int = "latest") -> bool:
        args = [account, permission]
        return self._query_one(AUTHORIZATION_ADDRESS, "checkPermission(address,address)", args, "bool", height)


class PermissionClient(ContractClient):
    """Queries against one permission contract, addressed by ``permission``."""

    def in_permission(
        self,
        permission: str,
        contract: str,
        function_hash_value: str,
        *,
        height: str | int = "latest",
    ) -> bool:
        args = [contract, function_hash(function_hash_value)]
        return self._query_one(permission, "inPermission(address,bytes4)", args, "bool", height)

    def query_info(self, permission: str, *, height: str | int = "latest") -> dict[str, Any]:
        name, contracts, funcs = self._query(permission, "queryInfo()", [], "bytes32,address[],bytes4[]", height)
        return {"name": bytes32_to_text(name), "contracts": contracts, "function_hashes": funcs}

    def query_name(self, permission: str, *, height: str | int = "latest") -> str:
        return bytes32_to_text(self._query_one(permission, "queryName()", [], "bytes32", height))

    def query_resource(self, permission: str, *, height: str | int = "latest") -> dict[str, Any]:
        contracts, funcs = self._query(permission, "queryResource()", [], "address[],bytes4[]", height)
        return {"contracts": contracts, "function_hashes": funcs}


class PermissionManageClient(ContractClient):
    def _resources(self, contracts: str, function_hashes: str) -> list[Any]:
        conts = address_list(contracts, name="contracts")
        funcs = function_hash_list(function_hashes)
        if len(conts) != len(funcs):
            raise CommandError(
                ERR_INVALID_FORMAT,
                f"--contracts and --function-hashes must have the same length, got {len(conts)} and {len(funcs)}",
            )
        return [conts, funcs]

    def new_permission(
        self,
        name: str,
        contracts: str,
        function_hashes: str,
        *,
        quota: int | None = None,
        signer: Signer,
    ) -> dict[str, Any]:
        args = [name_bytes32(name), *self._resources(contracts, function_hashes)]
        return self._send(
            PERMISSION_MANAGEMENT_ADDRESS,
            "newPermission(bytes32,address[],bytes4[])",
            args,
            quota,
            signer,
        )

    def delete_permission(self, permission: str, *, quota: int | None = None, signer: Signer) -> dict[str, Any]:
        return self._send(PERMISSION_MANAGEMENT_ADDRESS, "deletePermission(address)", [permission], quota, signer)

    def update_permission_name(
        self,
        permission: str,
        name: str,
        *,
        quota: int | None = None,
        signer: Signer,
    ) -> dict[str, Any]:
        args = [permission, name_bytes32(name)]
        return self._send(PERMISSION_MANAGEMENT_ADDRESS, "updatePermissionName(address,bytes32)", args, quota, signer)

    def add_resources(
        self,
        permission: str,
        contracts: str,
        function_hashes: str,
        *,
        quota: int | None = None,
        signer: Signer,
    ) -> dict[str, Any]:
        args = [permission, *self._resources(contracts, function_hashes)]
        return self._send(
            PERMISSION_MANAGEMENT_ADDRESS,
            "addResources(address,address[],bytes4[])",
            args,
            quota,
            signer,
        )

    def delete_resources(
        self,
        permission: str,
        contracts: str,
        function_hashes: str,
        *,
        quota: int | None = None,
        signer: Signer,
    ) -> dict[str, Any]:
        args = [permission, *self._resources(contracts, function_hashes)]
        return self._send(
            PERMISSION_MANAGEMENT_ADDRESS,
            "deleteResources(address,address[],bytes4[])",
            args,
            quota,
            signer,
        )

    def set_authorization(
        self,
        account: str,
        permission: str,
        *,
        quota: int | None = None,
        signer: Signer,
    ) -> dict[str, Any]:
        args = [account, permission]
        return self._send(PERMISSION_MANAGEMENT_ADDRESS, "setAuthorization(address,address)", args, quota, signer)

    def set_authorizations(
        self,
        account: str,
        permissions: str,
        *,
        quota: int | None = None,
        signer: Signer,
    ) -> dict[str, Any]:
        args = [account, address_list(permissions, name="permissions")]
        return self._send(PERMISSION_MANAGEMENT_ADDRESS, "setAuthorizations(address,address[])", args, quota, signer)

    def cancel_authorization(
        self,
        account: str,
        permission: str,
        *,
        quota: int | None = None,
        signer: Signer,
    ) -> dict[str, Any]:
        args = [account, permission]
        return self._send(PERMISSION_MANAGEMENT_ADDRESS, "cancelAuthorization(address,address)", args, quota, signer)

    def cancel_authorizations(
        self,
        account: str,
        permissions: str,
        *,
        quota: int | None = None,
        signer: Signer,
    ) -> dict[str, Any]:
        args = [account, address_list(permissions, name="permissions")]
        return self._send(
            PERMISSION_MANAGEMENT_ADDRESS,
            "cancelAuthorizations(address,address[])",
            args,
            quota,
            signer,
        )

    def clear_authorization(self, account: str, *, quota: int | None = None, signer: Signer) -> dict[str, Any]:
        return self._send(PERMISSION_MANAGEMENT_ADDRESS, "clearAuthorization(address)", [account], quota, signer)


class AdminClient(ContractClient):
    def admin(self, *, height: str | int = "latest") -> str:
        return self._query_one(ADMIN_ADDRESS, "admin()", [], "address", height)

    def is_admin(self, address: str, *, height: str | int = "latest") -> bool:
        return self._query_one(ADMIN_ADDRESS, "isAdmin(address)", [address], "bool", height)

    def update(self, address: str, *, quota: int | None = None, signer: Signer) -> dict[str, Any]:
        return self._send(ADMIN_ADDRESS, "update(address)", [address], quota, signer)


def pack_tx_codes(tx_codes: tuple[str, ...] | list[str]) -> bytes:
    """Pack ``address || data`` codes as ``address || uint32 len(data) || data``."""
    out = bytearray()
    for code in tx_codes:
        raw = hex_to_bytes(code)
        if len(raw) < 20:
            raise CommandError(
                ERR_INVALID_FORMAT,
                f"--tx-code must start with a 20-byte contract address, got '{code}'",
            )
        target, data = raw[:20], raw[20:]
        out += target + len(data).to_bytes(4, "big") + data
    return bytes(out)


class BatchTxClient(ContractClient):
    def multi_txs(self, tx_code: tuple[str, ...], *, quota: int | None = None, signer: Signer) -> dict[str, Any]:
        packed = pack_tx_codes(tx_code)
        return self._send(BATCH_TX_ADDRESS, "multiTxs(bytes)", [packed], quota, signer)


class SysConfigClient(ContractClient):
    def get_chain_owner(self, *, height: str | int = "latest") -> str:
        return self._query_one(SYS_CONFIG_ADDRESS, "getChainOwner()", [], "address", height)

    def get_delay_block_number(self, *, height: str | int = "latest") -> int:
        return self._query_one(SYS_CONFIG_ADDRESS, "getDelayBlockNumber()", [], "uint256", height)

    def get_feeback_platform_check(self, *, height: str | int = "latest") -> bool:
        return self._query_one(SYS_CONFIG_ADDRESS, "getFeeBackPlatformCheck()", [], "bool", height)

    def get_economical_model(self, *, height: str | int = "latest") -> dict[str, Any]:
        code = self._query_one(SYS_CONFIG_ADDRESS, "getEconomicalModel()", [], "uint8", height)
        return {"code": code, "model": {0: "quota", 1: "charge"}.get(code, "unknown")}

    def get_permission_check(self, *, height: str | int = "latest") -> bool:
        return self._query_one(SYS_CONFIG_ADDRESS, "getPermissionCheck()", [], "bool", height)

    def get_quota_check(self, *, height: str | int = "latest") -> bool:
        return self._query_one(SYS_CONFIG_ADDRESS, "getQuotaCheck()", [], "bool", height)

    def set_chain_name(self, chain_name: str, *, quota: int | None = None, signer: Signer) -> dict[str, Any]:
        return self._send(SYS_CONFIG_ADDRESS, "setChainName(string)", [chain_name], quota, signer)

    def set_operator(self, operator: str, *, quota: int | None = None, signer: Signer) -> dict[str, Any]:
        return self._send(SYS_CONFIG_ADDRESS, "setOperator(string)", [operator], quota, signer)

    def set_website(self, website: str, *, quota: int | None = None, signer: Signer) -> dict[str, Any]:
        return self._send(SYS_CONFIG_ADDRESS, "setWebsite(string)", [website], quota, signer)


class EmergencyBrakeClient(ContractClient):
    def state(self, *, height: str | int = "latest") -> bool:
        return self._query_one(EMERGENCY_BRAKE_ADDRESS, "state()", [], "bool", height)

    def set_state(self, state: bool, *, quota: int | None = None, signer: Signer) -> dict[str, Any]:
        return self._send(EMERGENCY_BRAKE_ADDRESS, "setState(bool)", [state], quota, signer)


FACADES: dict[str, type[ContractClient]] = {
    cls.__name__: cls
    for cls in (
        NodeManageClient,
        QuotaManageClient,
        GroupClient,
        GroupManageClient,
        RoleClient,
        RoleManageClient,
        AuthorizationClient,
        PermissionClient,
        PermissionManageClient,
        AdminClient,
        BatchTxClient,
        SysConfigClient,
        EmergencyBrakeClient,
    )
}
