"""Static command tree: contract group -> operation -> typed parameters.

The registry is the only place parameter lists are declared. Usage text, the
``commands`` listing and the dispatcher all read from it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from error_map import ERR_UNKNOWN_COMMAND, CommandError

KIND_ADDRESS = "address"
KIND_HEX = "hex"
KIND_U64 = "u64"
KIND_PRIVATE_KEY = "private_key"
KIND_HEIGHT = "height"
KIND_BOOL = "bool"
KIND_TEXT = "text"
KIND_ADDRESS_LIST = "address_list"
KIND_HEX_LIST = "hex_list"

DEFAULT_QUOTA = 10_000_000


@dataclass(frozen=True)
class ParamSpec:
    name: str
    kind: str
    required: bool = True
    default: str | None = None
    multiple: bool = False
    help: str = ""

    @property
    def flag(self) -> str:
        return f"--{self.name}"

    def with_help(self, text: str) -> ParamSpec:
        return ParamSpec(
            name=self.name,
            kind=self.kind,
            required=self.required,
            default=self.default,
            multiple=self.multiple,
            help=text,
        )


@dataclass(frozen=True)
class OperationSpec:
    name: str
    method: str
    params: tuple[ParamSpec, ...] = ()
    about: str = ""

    @property
    def is_write(self) -> bool:
        return any(p.kind == KIND_PRIVATE_KEY for p in self.params)


@dataclass(frozen=True)
class GroupSpec:
    name: str
    facade: str
    about: str = ""
    operations: tuple[OperationSpec, ...] = field(default_factory=tuple)

    def operation(self, name: str) -> OperationSpec | None:
        for op in self.operations:
            if op.name == name:
                return op
        return None


# Flags shared across operations.
HEIGHT = ParamSpec("height", KIND_HEIGHT, required=False, default="latest", help="The number of the block")
QUOTA = ParamSpec(
    "quota",
    KIND_U64,
    required=False,
    help=f"Transaction quota costs, default {DEFAULT_QUOTA:_}",
)
ADMIN_PRIVATE = ParamSpec("admin-private", KIND_PRIVATE_KEY, help="Private key must be admin")
PRIVATE_KEY = ParamSpec("private-key", KIND_PRIVATE_KEY, help="Private key")
ADDRESS = ParamSpec("address", KIND_ADDRESS)
NAME = ParamSpec("name", KIND_TEXT)
ACCOUNT = ParamSpec("account", KIND_ADDRESS, help="Account address")
ORIGIN = ParamSpec("origin", KIND_HEX, help="Group origin address")
TARGET = ParamSpec("target", KIND_HEX, help="Group target address")
ACCOUNTS = ParamSpec("accounts", KIND_ADDRESS_LIST, help="Group account address list")
CONTRACT = ParamSpec("contract", KIND_ADDRESS, help="The contract address")
FUNCTION_HASH = ParamSpec("function-hash", KIND_HEX, help="The function hash")
CONTRACTS = ParamSpec("contracts", KIND_ADDRESS_LIST, help="Contract address list")
FUNCTION_HASHES = ParamSpec("function-hashes", KIND_HEX_LIST, help="Function hash list")
PERMISSION = ParamSpec("permission", KIND_ADDRESS, help="Permission address")
PERMISSIONS = ParamSpec("permissions", KIND_ADDRESS_LIST, help="Permission address list")

GROUP_ADDRESS = ADDRESS.with_help("Group address")
GROUP_NAME = NAME.with_help("Group name")
ROLE_ADDRESS = ADDRESS.with_help("Role address")
ROLE_NAME = NAME.with_help("Role name")
PERMISSION_NAME = NAME.with_help("Permission name")


def _read(name: str, method: str, *params: ParamSpec, about: str = "") -> OperationSpec:
    return OperationSpec(name=name, method=method, params=(*params, HEIGHT), about=about)


def _write(name: str, method: str, *params: ParamSpec, signer: ParamSpec = PRIVATE_KEY, about: str = "") -> OperationSpec:
    return OperationSpec(name=name, method=method, params=(*params, QUOTA, signer), about=about)


def _admin_write(name: str, method: str, *params: ParamSpec, about: str = "") -> OperationSpec:
    return _write(name, method, *params, signer=ADMIN_PRIVATE, about=about)


NODE_MANAGER = GroupSpec(
    name="NodeManager",
    facade="NodeManageClient",
    about="Consensus node management (node_manager.sol)",
    operations=(
        _read("listNode", "list_node", about="List the consensus nodes"),
        _read("listStake", "list_stake", about="List the stakes of the consensus nodes"),
        _read("getStatus", "node_status", ADDRESS.with_help("Node address"), about="Get the status of a node"),
        _admin_write(
            "deleteNode",
            "delete_node",
            ADDRESS.with_help("Degraded node address"),
            about="Downgrade a consensus node",
        ),
        _admin_write(
            "approveNode",
            "approve_node",
            ADDRESS.with_help("Approve node address"),
            about="Approve a node as consensus node",
        ),
        _admin_write(
            "setStake",
            "set_stake",
            ADDRESS.with_help("Set address"),
            ParamSpec("stake", KIND_U64, help="The stake you want to set"),
            about="Set the stake of a node",
        ),
        _read(
            "stakePermillage",
            "stake_permillage",
            ADDRESS.with_help("Query address"),
            about="Get the stake permillage of a node",
        ),
    ),
)

QUOTA_MANAGER = GroupSpec(
    name="QuotaManager",
    facade="QuotaManageClient",
    about="Quota limits (quota_manager.sol)",
    operations=(
        _read("getBQL", "get_bql", about="Get the block quota limit"),
        _read("getDefaultAQL", "get_default_aql", about="Get the default account quota limit"),
        _read("getAccounts", "get_accounts", about="Get accounts with a special quota limit"),
        _read("getQuotas", "get_quotas", about="Get the special quota limits"),
        _read("getAQL", "get_aql", ADDRESS.with_help("Account address"), about="Get an account quota limit"),
        _admin_write(
            "setBQL",
            "set_bql",
            ParamSpec(
                "quota-limit",
                KIND_U64,
                help="The quota value must be between 2 ** 63 - 1 and 2 ** 28 - 1",
            ),
            about="Set the block quota limit",
        ),
        _admin_write(
            "setDefaultAQL",
            "set_default_aql",
            ParamSpec(
                "quota-limit",
                KIND_U64,
                help="The quota value must be between 2 ** 63 - 1 and 2 ** 22 - 1",
            ),
            about="Set the default account quota limit",
        ),
        _admin_write(
            "setAQL",
            "set_aql",
            ADDRESS.with_help("Account address"),
            ParamSpec(
                "quota-limit",
                KIND_U64,
                help="The quota value must be between 2 ** 63 - 1 and 2 ** 22 - 1",
            ),
            about="Set an account quota limit",
        ),
    ),
)

GROUP = GroupSpec(
    name="Group",
    facade="GroupClient",
    about="Group contract (group.sol)",
    operations=(
        _read("queryInfo", "query_info", GROUP_ADDRESS, about="Query the information of the group"),
        _read("queryName", "query_name", GROUP_ADDRESS, about="Query the name of the group"),
        _read("queryAccounts", "query_accounts", GROUP_ADDRESS, about="Query the accounts of the group"),
        _read("queryChild", "query_child", GROUP_ADDRESS, about="Query the child of the group"),
        _read(
            "queryChildLength",
            "query_child_length",
            GROUP_ADDRESS,
            about="Query the length of children of the group",
        ),
        _read("queryParent", "query_parent", GROUP_ADDRESS, about="Query the parent of the group"),
        _read("inGroup", "in_group", GROUP_ADDRESS, ACCOUNT, about="Check the account in the group"),
    ),
)

GROUP_MANAGEMENT = GroupSpec(
    name="GroupManagement",
    facade="GroupManageClient",
    about="User management using group struct (group_management.sol)",
    operations=(
        _write("newGroup", "new_group", ORIGIN, GROUP_NAME, ACCOUNTS, about="Create a new group"),
        _write("deleteGroup", "delete_group", ORIGIN, TARGET, about="Delete the group"),
        _write("updateGroupName", "update_group_name", ORIGIN, TARGET, GROUP_NAME, about="Update the group name"),
        _write("addAccounts", "add_accounts", ORIGIN, TARGET, ACCOUNTS, about="Add accounts to the group"),
        _write("deleteAccounts", "delete_accounts", ORIGIN, TARGET, ACCOUNTS, about="Delete accounts of the group"),
        _read("checkScope", "check_scope", ORIGIN, TARGET, about="Check the target is in the scope of the origin"),
        _read("queryGroups", "query_groups", about="Query all groups"),
    ),
)

ROLE = GroupSpec(
    name="Role",
    facade="RoleClient",
    about="Role.sol",
    operations=(
        _read("queryRole", "query_role", ROLE_ADDRESS, about="Query the information of the role"),
        _read("queryName", "query_name", ROLE_ADDRESS, about="Query the name of the role"),
        _read("queryPermissions", "query_permissions", ROLE_ADDRESS, about="Query the permissions of the role"),
        _read(
            "lengthOfPermissions",
            "length_of_permissions",
            ROLE_ADDRESS,
            about="Query the length of the permissions",
        ),
        _read(
            "inPermissions",
            "in_permissions",
            ROLE_ADDRESS,
            PERMISSION,
            about="Check the duplicate permission",
        ),
    ),
)

ROLE_MANAGEMENT = GroupSpec(
    name="RoleManagement",
    facade="RoleManageClient",
    about="RoleManagement.sol",
    operations=(
        _write("newRole", "new_role", ROLE_NAME, PERMISSIONS, about="Create a new role"),
        _write("deleteRole", "delete_role", ROLE_ADDRESS, about="Delete the role"),
        _write("updateRoleName", "update_role_name", ROLE_ADDRESS, ROLE_NAME, about="Update role's name"),
        _write("addPermissions", "add_permissions", ROLE_ADDRESS, PERMISSIONS, about="Add permissions of role"),
        _write(
            "deletePermissions",
            "delete_permissions",
            ROLE_ADDRESS,
            PERMISSIONS,
            about="Delete permissions of role",
        ),
        _write("setRole", "set_role", ACCOUNT, ROLE_ADDRESS, about="Set the role to the account"),
        _write("cancelRole", "cancel_role", ACCOUNT, ROLE_ADDRESS, about="Cancel the account's role"),
        _write("clearRole", "clear_role", ACCOUNT, about="Clear the account's role"),
        _read("queryRoles", "query_roles", ACCOUNT, about="Query the roles of the account"),
        _read("queryAccounts", "query_accounts", ROLE_ADDRESS, about="Query the accounts that have the role"),
    ),
)

AUTHORIZATION = GroupSpec(
    name="Authorization",
    facade="AuthorizationClient",
    about="Authorization.sol",
    operations=(
        _read("queryPermissions", "query_permissions", ACCOUNT, about="Query the account's permissions"),
        _read("queryAccounts", "query_accounts", PERMISSION, about="Query the permission's accounts"),
        _read("queryAllAccounts", "query_all_accounts", about="Query all accounts"),
        _read(
            "checkResource",
            "check_resource",
            ACCOUNT,
            CONTRACT,
            FUNCTION_HASH,
            about="Check Resource",
        ),
        _read("checkPermission", "check_permission", ACCOUNT, PERMISSION, about="Check Permission"),
    ),
)

PERMISSION_GROUP = GroupSpec(
    name="Permission",
    facade="PermissionClient",
    about="Permission.sol",
    operations=(
        _read(
            "inPermission",
            "in_permission",
            PERMISSION,
            CONTRACT,
            FUNCTION_HASH,
            about="Check resource in the permission",
        ),
        _read("queryInfo", "query_info", PERMISSION, about="Query the information of the permission"),
        _read("queryName", "query_name", PERMISSION, about="Query the name of the permission"),
        _read("queryResource", "query_resource", PERMISSION, about="Query the resource of the permission"),
    ),
)

PERMISSION_MANAGEMENT = GroupSpec(
    name="PermissionManagement",
    facade="PermissionManageClient",
    about="PermissionManagement.sol",
    operations=(
        _write(
            "newPermission",
            "new_permission",
            PERMISSION_NAME,
            CONTRACTS,
            FUNCTION_HASHES,
            about="Create a new permission",
        ),
        _write("deletePermission", "delete_permission", PERMISSION, about="Delete the permission"),
        _write(
            "updatePermissionName",
            "update_permission_name",
            PERMISSION,
            PERMISSION_NAME,
            about="Update the permission name",
        ),
        _write(
            "addResources",
            "add_resources",
            PERMISSION,
            CONTRACTS,
            FUNCTION_HASHES,
            about="Add the resources of permission",
        ),
        _write(
            "deleteResources",
            "delete_resources",
            PERMISSION,
            CONTRACTS,
            FUNCTION_HASHES,
            about="Delete the resources of permission",
        ),
        _write(
            "setAuthorization",
            "set_authorization",
            ACCOUNT,
            PERMISSION,
            about="Set permission to the account",
        ),
        _write(
            "setAuthorizations",
            "set_authorizations",
            ACCOUNT,
            PERMISSIONS,
            about="Set multiple permissions to the account",
        ),
        _write(
            "cancelAuthorization",
            "cancel_authorization",
            ACCOUNT,
            PERMISSION,
            about="Cancel the account's permission",
        ),
        _write(
            "cancelAuthorizations",
            "cancel_authorizations",
            ACCOUNT,
            PERMISSIONS,
            about="Cancel the account's multiple permission",
        ),
        _write("clearAuthorization", "clear_authorization", ACCOUNT, about="Clear the account's permissions"),
    ),
)

ADMIN_MANAGEMENT = GroupSpec(
    name="AdminManagement",
    facade="AdminClient",
    about="Admin.sol",
    operations=(
        _read("admin", "admin", about="Query the admin address"),
        _read("isAdmin", "is_admin", ADDRESS.with_help("Account address"), about="Check the account is admin"),
        _admin_write("update", "update", ADDRESS.with_help("Account address"), about="Update the admin"),
    ),
)

BATCH_TX = GroupSpec(
    name="BatchTx",
    facade="BatchTxClient",
    about="BatchTx.sol",
    operations=(
        _write(
            "multiTxs",
            "multi_txs",
            ParamSpec(
                "tx-code",
                KIND_HEX,
                multiple=True,
                help="Binary content of one transaction[address + encode(function + params)]",
            ),
            about="Send multiple transactions in one",
        ),
    ),
)

SYS_CONFIG = GroupSpec(
    name="SysConfig",
    facade="SysConfigClient",
    about="SysConfig.sol",
    operations=(
        _read("getChainOwner", "get_chain_owner", about="Get the chain owner"),
        _read("getDelayBlockNumber", "get_delay_block_number", about="Get the delay block number"),
        _read(
            "getFeeBackPlatformCheck",
            "get_feeback_platform_check",
            about="Get the fee back platform check",
        ),
        _read("getEconomicalModel", "get_economical_model", about="Get the economical model"),
        _read("getPermissionCheck", "get_permission_check", about="Get the permission check"),
        _read("getQuotaCheck", "get_quota_check", about="Get the quota check"),
        _admin_write(
            "setChainName",
            "set_chain_name",
            ParamSpec("chain-name", KIND_TEXT, help="Set chain name"),
            about="Set the chain name",
        ),
        _admin_write(
            "setOperator",
            "set_operator",
            ParamSpec("operator", KIND_TEXT, help="Set operator"),
            about="Set the operator",
        ),
        _admin_write(
            "setWebsite",
            "set_website",
            ParamSpec("website", KIND_TEXT, help="Set website"),
            about="Set the website",
        ),
    ),
)

EMERGENCY_BRAKE = GroupSpec(
    name="EmergencyBrake",
    facade="EmergencyBrakeClient",
    about="EmergencyBrake.sol",
    operations=(
        _read("state", "state", about="Query the emergency brake state"),
        _admin_write(
            "setState",
            "set_state",
            ParamSpec("state", KIND_BOOL, help="State value"),
            about="Set the emergency brake state",
        ),
    ),
)

REGISTRY: dict[str, GroupSpec] = {
    group.name: group
    for group in (
        NODE_MANAGER,
        QUOTA_MANAGER,
        GROUP,
        GROUP_MANAGEMENT,
        ROLE,
        ROLE_MANAGEMENT,
        AUTHORIZATION,
        PERMISSION_GROUP,
        PERMISSION_MANAGEMENT,
        ADMIN_MANAGEMENT,
        BATCH_TX,
        SYS_CONFIG,
        EMERGENCY_BRAKE,
    )
}


def lookup(group: str, operation: str) -> tuple[GroupSpec, OperationSpec]:
    group_spec = REGISTRY.get(group)
    op_spec = group_spec.operation(operation) if group_spec is not None else None
    if group_spec is None or op_spec is None:
        raise CommandError(
            ERR_UNKNOWN_COMMAND,
            f"unknown command: {group} {operation}",
            hint='run "scm commands" to list the supported commands',
        )
    return group_spec, op_spec


def iter_commands() -> list[tuple[GroupSpec, OperationSpec]]:
    return [(g, op) for g in REGISTRY.values() for op in g.operations]


def _param_usage(p: ParamSpec) -> str:
    token = f"{p.flag} <{p.kind}>"
    if p.multiple:
        token += "..."
    if not p.required:
        token = f"[{token}]"
    return token


def operation_usage(group: GroupSpec, op: OperationSpec) -> str:
    parts = ["scm call", group.name, op.name, *(_param_usage(p) for p in op.params)]
    lines = [" ".join(parts)]
    if op.about:
        lines.append(f"    {op.about}")
    for p in op.params:
        detail = p.help or p.kind
        if p.default is not None:
            detail += f" (default: {p.default})"
        lines.append(f"    {p.flag:<20} {detail}")
    return "\n".join(lines)


def usage(group: str | None = None, operation: str | None = None) -> str:
    if group is None:
        return "\n".join(f"{g.name:<22} {g.about}" for g in REGISTRY.values())
    if operation is None:
        group_spec = REGISTRY.get(group)
        if group_spec is None:
            raise CommandError(
                ERR_UNKNOWN_COMMAND,
                f"unknown command: {group}",
                hint='run "scm usage" to list the contract groups',
            )
        return "\n\n".join(operation_usage(group_spec, op) for op in group_spec.operations)
    group_spec, op_spec = lookup(group, operation)
    return operation_usage(group_spec, op_spec)


def describe_commands() -> list[dict[str, object]]:
    out: list[dict[str, object]] = []
    for group, op in iter_commands():
        out.append(
            {
                "group": group.name,
                "operation": op.name,
                "kind": "write" if op.is_write else "read",
                "params": [
                    {
                        "flag": p.flag,
                        "type": p.kind,
                        "required": p.required,
                        "default": p.default,
                        "multiple": p.multiple,
                    }
                    for p in op.params
                ],
            }
        )
    return out
