from __future__ import annotations

from storage_provisioner.services.config import ObjectStoreConfig
from storage_provisioner.services.object_store_service import open_object_store
from storage_provisioner.services.provisioning_service import ProvisioningService


def get_provisioning_service() -> ProvisioningService:
    """Dependency provider for a ProvisioningService backed by the configured object store."""

    config = ObjectStoreConfig.from_env()
    return ProvisioningService(client_factory=lambda: open_object_store(config))
