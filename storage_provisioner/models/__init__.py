from storage_provisioner.models.acl import AccessControlEntry, Permission, PrincipalType
from storage_provisioner.models.resources import (
    BucketArgs,
    ResourceIdentity,
    StorageType,
    VolumeArgs,
)

__all__ = [
    "AccessControlEntry",
    "BucketArgs",
    "Permission",
    "PrincipalType",
    "ResourceIdentity",
    "StorageType",
    "VolumeArgs",
]
