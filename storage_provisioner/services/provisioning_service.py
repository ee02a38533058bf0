from __future__ import annotations

import logging
from typing import AsyncContextManager, Callable, Protocol, Union

from storage_provisioner.errors import ProvisioningError
from storage_provisioner.models.resources import BucketArgs, ResourceIdentity, VolumeArgs
from storage_provisioner.services.grant_parser import format_grant


logger = logging.getLogger(__name__)


class ObjectStoreClient(Protocol):
    async def create_volume(self, *, name: str, args: VolumeArgs) -> None: ...

    async def create_bucket(self, *, volume_name: str, name: str, args: BucketArgs) -> None: ...


ClientFactory = Callable[[], AsyncContextManager[ObjectStoreClient]]


class ProvisioningService:
    """Creates exactly one volume or bucket per call.

    Each call opens its own client through `client_factory` and releases it
    before returning, on success and on failure. Nothing is retried: creating
    the same resource twice surfaces the service's "already exists" error.
    """

    def __init__(self, *, client_factory: ClientFactory) -> None:
        self._client_factory = client_factory

    async def provision(self, identity: ResourceIdentity, args: Union[VolumeArgs, BucketArgs]) -> None:
        if identity.is_bucket and not isinstance(args, BucketArgs):
            raise ValueError(f"Bucket {identity} requires BucketArgs, got {type(args).__name__}")
        if not identity.is_bucket and not isinstance(args, VolumeArgs):
            raise ValueError(f"Volume {identity} requires VolumeArgs, got {type(args).__name__}")

        logger.info(
            "Creating %s %s (%s)",
            "bucket" if identity.is_bucket else "volume",
            identity,
            _describe(args),
        )

        try:
            async with self._client_factory() as client:
                if isinstance(args, BucketArgs) and identity.volume_name is not None:
                    await client.create_bucket(volume_name=identity.volume_name, name=identity.name, args=args)
                else:
                    await client.create_volume(name=identity.name, args=args)
        except ProvisioningError:
            raise
        except Exception as exc:
            logger.exception("Provisioning %s failed", identity)
            raise ProvisioningError(f"Failed to create {identity}") from exc

        logger.info("Created %s", identity)


def _describe(args: Union[VolumeArgs, BucketArgs]) -> str:
    if isinstance(args, VolumeArgs):
        fields = {"quota": args.quota, "owner": args.owner}
    else:
        fields = {
            "storage_type": args.storage_type.value if args.storage_type is not None else None,
            "versioning": args.versioning,
        }
    parts = [f"{key}={value}" for key, value in fields.items() if value is not None]
    if args.acls:
        parts.append("acls=" + ",".join(format_grant(entry) for entry in args.acls))
    return ", ".join(parts) or "service defaults"
