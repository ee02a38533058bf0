from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from storage_provisioner.models.acl import AccessControlEntry


class StorageType(str, Enum):
    RAM_DISK = "RAM_DISK"
    SSD = "SSD"
    DISK = "DISK"
    ARCHIVE = "ARCHIVE"


@dataclass(frozen=True)
class ResourceIdentity:
    """Which remote resource a resolved configuration applies to.

    `volume_name` is set only for buckets.
    """

    name: str
    volume_name: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("name must be provided")
        if self.volume_name is not None and not self.volume_name.strip():
            raise ValueError("volume_name must not be blank")

    @property
    def is_bucket(self) -> bool:
        return self.volume_name is not None

    def __str__(self) -> str:
        if self.volume_name is None:
            return f"/{self.name}"
        return f"/{self.volume_name}/{self.name}"


@dataclass(frozen=True)
class VolumeArgs:
    """Resolved volume creation request.

    A field left as None is omitted from the request so the remote service
    applies its own default.
    """

    quota: Optional[str] = None
    owner: Optional[str] = None
    acls: tuple[AccessControlEntry, ...] = ()


@dataclass(frozen=True)
class BucketArgs:
    """Resolved bucket creation request. None means "service default"."""

    storage_type: Optional[StorageType] = None
    versioning: Optional[bool] = None
    acls: tuple[AccessControlEntry, ...] = ()


ResourceArgs = Union[VolumeArgs, BucketArgs]
