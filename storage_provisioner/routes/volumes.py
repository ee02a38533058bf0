from __future__ import annotations

from fastapi import APIRouter, Depends, Path
from starlette import status

from storage_provisioner.models.api import (
    CreateBucketRequest,
    CreateBucketResponse,
    CreateVolumeRequest,
    CreateVolumeResponse,
)
from storage_provisioner.models.resources import ResourceIdentity
from storage_provisioner.services.config_resolver import (
    parse_resource_name,
    resolve_bucket_args,
    resolve_volume_args,
)
from storage_provisioner.services.dependencies import get_provisioning_service
from storage_provisioner.services.provisioning_service import ProvisioningService

router = APIRouter(prefix="/volumes", tags=["volumes"])


@router.post("", response_model=CreateVolumeResponse, status_code=status.HTTP_201_CREATED)
async def create_volume(
    body: CreateVolumeRequest,
    svc: ProvisioningService = Depends(get_provisioning_service),
) -> CreateVolumeResponse:
    identity = ResourceIdentity(name=parse_resource_name("name", body.name))
    args = resolve_volume_args(quota=body.quota, owner=body.owner, acls=body.acls)
    await svc.provision(identity, args)
    return CreateVolumeResponse(volume=identity.name, created=True)


@router.post("/{volume}/buckets", response_model=CreateBucketResponse, status_code=status.HTTP_201_CREATED)
async def create_bucket(
    body: CreateBucketRequest,
    volume: str = Path(..., description="Volume that will contain the bucket"),
    svc: ProvisioningService = Depends(get_provisioning_service),
) -> CreateBucketResponse:
    identity = ResourceIdentity(
        volume_name=parse_resource_name("volume_name", volume),
        name=parse_resource_name("name", body.name),
    )
    args = resolve_bucket_args(storage_type=body.storage_type, versioning=body.versioning, acls=body.acls)
    await svc.provision(identity, args)
    return CreateBucketResponse(volume=volume, bucket=identity.name, created=True)
