from __future__ import annotations

from storage_provisioner.errors import GrantFormatError
from storage_provisioner.models.acl import (
    PERMISSION_SYMBOLS,
    AccessControlEntry,
    Permission,
    PrincipalType,
)

_SEPARATOR = ":"


def parse_grant(grant: str) -> AccessControlEntry:
    """Parse a compact grant string into an :class:`AccessControlEntry`.

    The expected form is ``principalType:principalName:permissions``, for
    example ``user:alice:rw`` or ``world::r``. Repeated permission symbols are
    collapsed; unknown ones are rejected.

    Raises:
        GrantFormatError: if the string does not have exactly three segments,
            names an unknown principal type or permission symbol, or pairs a
            principal type with a missing (user/group) or unexpected
            (world/anonymous) principal name.
    """

    parts = grant.split(_SEPARATOR)
    if len(parts) != 3:
        raise GrantFormatError(
            grant=grant,
            reason=f"expected 3 ':'-separated segments, got {len(parts)}",
        )

    type_raw, name, symbols = parts

    try:
        principal_type = PrincipalType(type_raw)
    except ValueError:
        known = ", ".join(t.value for t in PrincipalType)
        raise GrantFormatError(
            grant=grant,
            reason=f"unknown principal type {type_raw!r} (expected one of: {known})",
        ) from None

    if principal_type.requires_name and not name:
        raise GrantFormatError(grant=grant, reason=f"a principal name is required for {principal_type.value}")
    if not principal_type.requires_name and name:
        raise GrantFormatError(grant=grant, reason=f"unexpected principal name for {principal_type.value}")

    if not symbols:
        raise GrantFormatError(grant=grant, reason="no permissions given")

    permissions: set[Permission] = set()
    for symbol in symbols:
        permission = PERMISSION_SYMBOLS.get(symbol)
        if permission is None:
            raise GrantFormatError(grant=grant, reason=f"unknown permission symbol {symbol!r}")
        permissions.add(permission)

    return AccessControlEntry(
        principal_type=principal_type,
        principal_name=name,
        permissions=frozenset(permissions),
    )


def format_grant(entry: AccessControlEntry) -> str:
    """Render an entry back to its compact form, permissions in canonical order."""

    return _SEPARATOR.join((entry.principal_type.value, entry.principal_name, entry.permission_symbols))
