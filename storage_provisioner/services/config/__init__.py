"""Configuration package (Facade).

Re-exports the public config types so callers import from a single path:

    from storage_provisioner.services.config import ObjectStoreConfig
"""

from storage_provisioner.services.config.object_store_config import ObjectStoreConfig

__all__ = ["ObjectStoreConfig"]
