from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Any, AsyncIterator, Optional
from urllib.parse import quote

import aiohttp
import botocore.session
from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest

from storage_provisioner.errors import ProvisioningError
from storage_provisioner.models.acl import AccessControlEntry
from storage_provisioner.models.resources import BucketArgs, VolumeArgs
from storage_provisioner.services.config import ObjectStoreConfig
from storage_provisioner.services.grant_parser import format_grant


logger = logging.getLogger(__name__)


class ObjectStoreServiceError(ProvisioningError):
    pass


class ResourceAlreadyExistsError(ObjectStoreServiceError):
    pass


class VolumeNotFoundError(ObjectStoreServiceError):
    pass


class ObjectStoreService:
    """Minimal object-store control-plane client.

    Requests are signed with AWS SigV4 using whatever credentials botocore
    resolves (env vars, profiles/SSO, instance role, etc.) unless signing is
    disabled in the config. The HTTP session is owned by the caller; use
    :func:`open_object_store` for a scoped one.
    """

    def __init__(self, config: ObjectStoreConfig, *, session: aiohttp.ClientSession) -> None:
        self._config = config
        self._session = session

    def _sign(self, *, method: str, url: str, body: Optional[bytes], headers: dict[str, str]) -> dict[str, str]:
        session = botocore.session.get_session()
        credentials = session.get_credentials()
        if credentials is None:
            raise ObjectStoreServiceError("No AWS credentials available for object store request signing")

        aws_request = AWSRequest(method=method, url=url, data=body, headers=headers)
        SigV4Auth(credentials.get_frozen_credentials(), self._config.service_name, self._config.region_name).add_auth(
            aws_request
        )
        return dict(aws_request.prepare().headers)

    async def _signed_request(
        self,
        *,
        method: str,
        path: str,
        body: Optional[bytes] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> tuple[int, bytes]:
        if not path.startswith("/"):
            path = "/" + path

        method = method.upper()
        url = f"{self._config.endpoint}{path}"

        effective_headers: dict[str, str] = {"Accept": "application/json"}
        if headers:
            effective_headers.update(headers)
        if body is not None:
            effective_headers.setdefault("Content-Type", "application/json")

        if self._config.sign_requests:
            effective_headers = self._sign(method=method, url=url, body=body, headers=effective_headers)

        try:
            async with self._session.request(
                method,
                url,
                data=body,
                headers=effective_headers,
                timeout=aiohttp.ClientTimeout(total=self._config.timeout_seconds),
            ) as resp:
                return (resp.status, await resp.read() or b"")
        except Exception as exc:
            logger.exception("Object store request failed (method=%s path=%s)", method, path)
            raise ObjectStoreServiceError(f"Object store request failed ({method} {path})") from exc

    @staticmethod
    def _acl_payload(acls: tuple[AccessControlEntry, ...]) -> list[str]:
        return [format_grant(entry) for entry in acls]

    @staticmethod
    def _volume_payload(args: VolumeArgs) -> dict[str, Any]:
        # Absent fields are left out so the service applies its own defaults.
        payload: dict[str, Any] = {}
        if args.quota is not None:
            payload["quota"] = args.quota
        if args.owner is not None:
            payload["owner"] = args.owner
        if args.acls:
            payload["acls"] = ObjectStoreService._acl_payload(args.acls)
        return payload

    @staticmethod
    def _bucket_payload(args: BucketArgs) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if args.storage_type is not None:
            payload["storageType"] = args.storage_type.value
        if args.versioning is not None:
            payload["versioning"] = args.versioning
        if args.acls:
            payload["acls"] = ObjectStoreService._acl_payload(args.acls)
        return payload

    @staticmethod
    def _details(payload: bytes) -> str:
        try:
            return payload.decode("utf-8") if payload else ""
        except Exception:
            return ""

    @staticmethod
    def _validate_name(value: str, *, field: str) -> None:
        if not value or not value.strip():
            raise ValueError(f"{field} must be provided")

    async def create_volume(self, *, name: str, args: VolumeArgs) -> None:
        """Create a volume.

        Raises:
            ResourceAlreadyExistsError: if a volume with the same name exists.
            ObjectStoreServiceError: for any other failure.
        """

        self._validate_name(name, field="name")

        status, payload = await self._signed_request(
            method="PUT",
            path=f"/volumes/{quote(name, safe='')}",
            body=json.dumps(self._volume_payload(args)).encode("utf-8"),
        )

        if status in (HTTPStatus.OK, HTTPStatus.CREATED):
            return
        if status == HTTPStatus.CONFLICT:
            raise ResourceAlreadyExistsError(f"Volume already exists: {name}")

        raise ObjectStoreServiceError(
            f"Failed to create volume (volume={name}) HTTP {status} {self._details(payload)}".strip()
        )

    async def create_bucket(self, *, volume_name: str, name: str, args: BucketArgs) -> None:
        """Create a bucket inside `volume_name`.

        Raises:
            ResourceAlreadyExistsError: if the bucket already exists in the volume.
            VolumeNotFoundError: if the volume does not exist.
            ObjectStoreServiceError: for any other failure.
        """

        self._validate_name(volume_name, field="volume_name")
        self._validate_name(name, field="name")

        status, payload = await self._signed_request(
            method="PUT",
            path=f"/volumes/{quote(volume_name, safe='')}/buckets/{quote(name, safe='')}",
            body=json.dumps(self._bucket_payload(args)).encode("utf-8"),
        )

        if status in (HTTPStatus.OK, HTTPStatus.CREATED):
            return
        if status == HTTPStatus.CONFLICT:
            raise ResourceAlreadyExistsError(f"Bucket already exists: /{volume_name}/{name}")
        if status == HTTPStatus.NOT_FOUND:
            raise VolumeNotFoundError(f"Volume not found: {volume_name}")

        raise ObjectStoreServiceError(
            f"Failed to create bucket (volume={volume_name}, bucket={name}) HTTP {status} {self._details(payload)}".strip()
        )


@asynccontextmanager
async def open_object_store(config: ObjectStoreConfig) -> AsyncIterator[ObjectStoreService]:
    """Yield an ObjectStoreService whose HTTP session is closed on exit."""

    async with aiohttp.ClientSession() as session:
        yield ObjectStoreService(config, session=session)
