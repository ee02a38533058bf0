from __future__ import annotations

import logging
import re
from typing import Iterable, Optional, Union

from storage_provisioner.errors import ConfigurationError
from storage_provisioner.models.acl import AccessControlEntry
from storage_provisioner.models.resources import (
    BucketArgs,
    ResourceIdentity,
    StorageType,
    VolumeArgs,
)
from storage_provisioner.services.argument_classifier import ClassifiedArguments, ResourceKind
from storage_provisioner.services.grant_parser import parse_grant


logger = logging.getLogger(__name__)

QUOTA_UNITS = ("BYTES", "KB", "MB", "GB", "TB", "PB", "EB")
_QUOTA_PATTERN = re.compile(r"^\s*([0-9]+)\s*([A-Za-z]+)\s*$")
_BOOLEAN_VALUES = {"true": True, "false": False}


def parse_quota(raw: str) -> str:
    """Validate a quota such as ``50 GB`` and return it unchanged.

    The size must be a positive integer and the unit one of QUOTA_UNITS
    (matched case-insensitively). No conversion is done here.
    """

    match = _QUOTA_PATTERN.match(raw)
    if match is None:
        raise ConfigurationError(field="quota", value=raw, reason="expected '<size> <unit>', e.g. '50 GB'")

    size, unit = match.groups()
    if int(size) <= 0:
        raise ConfigurationError(field="quota", value=raw, reason="size must be positive")
    if unit.upper() not in QUOTA_UNITS:
        raise ConfigurationError(
            field="quota",
            value=raw,
            reason=f"unknown unit {unit!r} (expected one of: {', '.join(QUOTA_UNITS)})",
        )
    return raw


def parse_owner(raw: str) -> str:
    if not raw or not raw.strip():
        raise ConfigurationError(field="owner", value=raw, reason="owner must not be blank")
    if any(ch.isspace() for ch in raw) or ":" in raw:
        raise ConfigurationError(field="owner", value=raw, reason="owner must not contain whitespace or ':'")
    return raw


def parse_storage_type(raw: str) -> StorageType:
    # Exact, case-sensitive match against the enumerant names.
    try:
        return StorageType[raw]
    except KeyError:
        known = ", ".join(t.value for t in StorageType)
        raise ConfigurationError(
            field="storage_type",
            value=raw,
            reason=f"expected one of: {known}",
        ) from None


def parse_versioning(raw: str) -> bool:
    try:
        return _BOOLEAN_VALUES[raw]
    except KeyError:
        raise ConfigurationError(field="versioning", value=raw, reason="expected 'true' or 'false'") from None


def parse_resource_name(field: str, raw: str) -> str:
    if not raw or not raw.strip():
        raise ConfigurationError(field=field, value=raw, reason="name must not be blank")
    return raw


def parse_acls(grants: Iterable[str]) -> tuple[AccessControlEntry, ...]:
    return tuple(parse_grant(grant) for grant in grants)


def resolve_volume_args(
    *,
    quota: Optional[str] = None,
    owner: Optional[str] = None,
    acls: Iterable[str] = (),
) -> VolumeArgs:
    """Build a :class:`VolumeArgs` from independently optional raw values.

    Fields are resolved in order quota, owner, acls. A None value leaves the
    field unset; a supplied value is validated and raises ConfigurationError
    (or GrantFormatError for ACLs) if it is not acceptable.
    """

    return VolumeArgs(
        quota=parse_quota(quota) if quota is not None else None,
        owner=parse_owner(owner) if owner is not None else None,
        acls=parse_acls(acls),
    )


def resolve_bucket_args(
    *,
    storage_type: Optional[str] = None,
    versioning: Optional[str] = None,
    acls: Iterable[str] = (),
) -> BucketArgs:
    """Build a :class:`BucketArgs`; see :func:`resolve_volume_args`."""

    return BucketArgs(
        storage_type=parse_storage_type(storage_type) if storage_type is not None else None,
        versioning=parse_versioning(versioning) if versioning is not None else None,
        acls=parse_acls(acls),
    )


def resolve_classified(
    classified: ClassifiedArguments,
) -> tuple[ResourceIdentity, Union[VolumeArgs, BucketArgs]]:
    """Resolve positional arguments into an identity and a creation request."""

    options = classified.options
    acl = options.get("acl")
    acls = (acl,) if acl is not None else ()

    if classified.kind is ResourceKind.VOLUME:
        identity = ResourceIdentity(name=parse_resource_name("name", classified.identity["name"]))
        args: Union[VolumeArgs, BucketArgs] = resolve_volume_args(
            quota=options.get("quota"),
            owner=options.get("owner"),
            acls=acls,
        )
    else:
        identity = ResourceIdentity(
            volume_name=parse_resource_name("volume_name", classified.identity["volume_name"]),
            name=parse_resource_name("name", classified.identity["name"]),
        )
        args = resolve_bucket_args(
            storage_type=options.get("storage_type"),
            versioning=options.get("versioning"),
            acls=acls,
        )

    logger.debug("Resolved %s %s from %d option(s)", classified.kind.value, identity, len(classified.supplied))
    return identity, args
