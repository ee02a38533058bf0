"""Shared fixtures: an in-memory object store standing in for the remote service."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import pytest

from storage_provisioner.models.resources import BucketArgs, VolumeArgs
from storage_provisioner.services.object_store_service import (
    ResourceAlreadyExistsError,
    VolumeNotFoundError,
)
from storage_provisioner.services.provisioning_service import ProvisioningService


class InMemoryObjectStore:
    """Records created resources and reports duplicates like the real service."""

    def __init__(self) -> None:
        self.volumes: dict[str, VolumeArgs] = {}
        self.buckets: dict[tuple[str, str], BucketArgs] = {}
        self.volume_calls: list[tuple[str, VolumeArgs]] = []
        self.bucket_calls: list[tuple[str, str, BucketArgs]] = []
        self.opened = 0
        self.closed = 0

    async def create_volume(self, *, name: str, args: VolumeArgs) -> None:
        self.volume_calls.append((name, args))
        if name in self.volumes:
            raise ResourceAlreadyExistsError(f"Volume already exists: {name}")
        self.volumes[name] = args

    async def create_bucket(self, *, volume_name: str, name: str, args: BucketArgs) -> None:
        self.bucket_calls.append((volume_name, name, args))
        if volume_name not in self.volumes:
            raise VolumeNotFoundError(f"Volume not found: {volume_name}")
        if (volume_name, name) in self.buckets:
            raise ResourceAlreadyExistsError(f"Bucket already exists: /{volume_name}/{name}")
        self.buckets[(volume_name, name)] = args

    @asynccontextmanager
    async def connect(self) -> AsyncIterator["InMemoryObjectStore"]:
        self.opened += 1
        try:
            yield self
        finally:
            self.closed += 1


@pytest.fixture
def store() -> InMemoryObjectStore:
    return InMemoryObjectStore()


@pytest.fixture
def provisioning_service(store: InMemoryObjectStore) -> ProvisioningService:
    return ProvisioningService(client_factory=store.connect)
