from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PrincipalType(str, Enum):
    USER = "user"
    GROUP = "group"
    WORLD = "world"
    ANONYMOUS = "anonymous"

    @property
    def requires_name(self) -> bool:
        return self in (PrincipalType.USER, PrincipalType.GROUP)


class Permission(str, Enum):
    READ = "read"
    WRITE = "write"
    CREATE = "create"
    DELETE = "delete"
    LIST = "list"
    ALL = "all"
    NONE = "none"
    READ_ACL = "read_acl"
    WRITE_ACL = "write_acl"

    @property
    def symbol(self) -> str:
        return _SYMBOL_BY_PERMISSION[self]


# Insertion order is the canonical rendering order.
PERMISSION_SYMBOLS: dict[str, Permission] = {
    "r": Permission.READ,
    "w": Permission.WRITE,
    "c": Permission.CREATE,
    "d": Permission.DELETE,
    "l": Permission.LIST,
    "a": Permission.ALL,
    "n": Permission.NONE,
    "x": Permission.READ_ACL,
    "y": Permission.WRITE_ACL,
}

_SYMBOL_BY_PERMISSION: dict[Permission, str] = {perm: sym for sym, perm in PERMISSION_SYMBOLS.items()}


@dataclass(frozen=True)
class AccessControlEntry:
    """One principal and the permissions granted to it.

    Built from a compact grant string such as ``user:alice:rw``; see
    :func:`storage_provisioner.services.grant_parser.parse_grant`.
    """

    principal_type: PrincipalType
    principal_name: str
    permissions: frozenset[Permission]

    @property
    def permission_symbols(self) -> str:
        return "".join(sym for sym, perm in PERMISSION_SYMBOLS.items() if perm in self.permissions)
