from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class CreateVolumeRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Volume name")
    quota: Optional[str] = Field(default=None, description="Capacity limit, e.g. '50 GB'")
    owner: Optional[str] = Field(default=None, description="Owning principal")
    acls: list[str] = Field(default_factory=list, description="Grants such as 'user:alice:rw'")


class CreateBucketRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Bucket name")
    storage_type: Optional[str] = Field(default=None, description="RAM_DISK, SSD, DISK or ARCHIVE")
    versioning: Optional[str] = Field(default=None, description="'true' or 'false'")
    acls: list[str] = Field(default_factory=list, description="Grants such as 'user:alice:rw'")


class CreateVolumeResponse(BaseModel):
    volume: str
    created: bool


class CreateBucketResponse(BaseModel):
    volume: str
    bucket: str
    created: bool
