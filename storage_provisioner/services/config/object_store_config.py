from __future__ import annotations

import os
from dataclasses import dataclass
from typing import ClassVar, Optional


@dataclass(frozen=True)
class ObjectStoreConfig:
    """Runtime configuration for object-store (control plane) calls.

    `endpoint` is the service base URL including scheme, e.g.
    "https://om.storage.example.com:9878".
    """

    endpoint: str
    region_name: Optional[str] = None
    service_name: str = "s3"
    _DEFAULT_TIMEOUT_SECONDS: ClassVar[float] = 30.0
    timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS
    sign_requests: bool = True

    def __post_init__(self) -> None:
        if self.sign_requests and not self.region_name:
            raise ValueError(
                "Missing required environment variable: OBJECT_STORE_REGION (or AWS_REGION/AWS_DEFAULT_REGION)"
            )

    @staticmethod
    def from_env(
        *,
        endpoint_env: str = "OBJECT_STORE_ENDPOINT",
        region_env: str = "OBJECT_STORE_REGION",
        service_env: str = "OBJECT_STORE_SERVICE_NAME",
        timeout_env: str = "OBJECT_STORE_TIMEOUT_SECONDS",
        sign_env: str = "OBJECT_STORE_SIGN_REQUESTS",
    ) -> "ObjectStoreConfig":
        endpoint = os.getenv(endpoint_env)
        if not endpoint:
            raise ValueError(f"Missing required environment variable: {endpoint_env}")

        region_name = os.getenv(region_env) or os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION")

        timeout_raw = os.getenv(timeout_env)
        timeout_seconds = ObjectStoreConfig._DEFAULT_TIMEOUT_SECONDS
        if timeout_raw:
            try:
                timeout_seconds = float(timeout_raw)
            except ValueError as exc:
                raise ValueError(f"Invalid {timeout_env}; must be a number") from exc

        sign_raw = (os.getenv(sign_env) or "true").strip().lower()
        if sign_raw not in ("true", "false"):
            raise ValueError(f"Invalid {sign_env}; must be 'true' or 'false'")

        return ObjectStoreConfig(
            endpoint=endpoint.rstrip("/"),
            region_name=region_name,
            service_name=os.getenv(service_env) or "s3",
            timeout_seconds=timeout_seconds,
            sign_requests=sign_raw == "true",
        )
