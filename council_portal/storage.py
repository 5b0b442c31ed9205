"""
Object storage for uploaded images and thumbnails.

S3-compatible storage for deployments and an in-memory client for local
development and tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol

import boto3
from botocore.config import Config

from .config import settings


class StorageClient(Protocol):
    """Defines the operations the portal needs from object storage."""

    def presign_get(self, path: str, expires_in: int = 3600) -> str:
        ...

    def presign_put(self, path: str, content_type: Optional[str] = None, expires_in: int = 3600) -> str:
        ...

    def delete_object(self, path: str) -> None:
        ...


@dataclass
class InMemoryStorageClient:
    """Test double for storage interactions."""

    base_url: str = "https://storage.example.test"
    stored_objects: Dict[str, bytes] = field(default_factory=dict)

    def presign_get(self, path: str, expires_in: int = 3600) -> str:
        return f"{self.base_url}/{path}?op=get&expires={expires_in}"

    def presign_put(self, path: str, content_type: Optional[str] = None, expires_in: int = 3600) -> str:
        return f"{self.base_url}/{path}?op=put&expires={expires_in}"

    def put_bytes(self, path: str, payload: bytes) -> None:
        self.stored_objects[path] = payload

    def delete_object(self, path: str) -> None:
        self.stored_objects.pop(path, None)


@dataclass
class S3StorageClient:
    """S3-compatible storage client."""

    bucket: str
    region: str
    endpoint: Optional[str]
    access_key_id: Optional[str]
    secret_access_key: Optional[str]

    def __post_init__(self):
        config = Config(signature_version="s3v4")
        self._client = boto3.client(
            "s3",
            endpoint_url=self.endpoint or None,
            region_name=self.region or None,
            aws_access_key_id=self.access_key_id,
            aws_secret_access_key=self.secret_access_key,
            config=config,
        )

    def presign_get(self, path: str, expires_in: int = 3600) -> str:
        return self._client.generate_presigned_url(
            ClientMethod="get_object",
            Params={"Bucket": self.bucket, "Key": path},
            ExpiresIn=expires_in,
        )

    def presign_put(self, path: str, content_type: Optional[str] = None, expires_in: int = 3600) -> str:
        params = {"Bucket": self.bucket, "Key": path}
        if content_type:
            params["ContentType"] = content_type
        return self._client.generate_presigned_url(
            ClientMethod="put_object",
            Params=params,
            ExpiresIn=expires_in,
        )

    def delete_object(self, path: str) -> None:
        self._client.delete_object(Bucket=self.bucket, Key=path)


_storage_client: StorageClient | None = None


def get_storage_client() -> StorageClient:
    """Return a singleton storage client for the configured backend."""
    global _storage_client
    if _storage_client:
        return _storage_client

    if settings.storage.backend == "s3" and settings.storage.bucket:
        _storage_client = S3StorageClient(
            bucket=settings.storage.bucket,
            region=settings.storage.region or "",
            endpoint=settings.storage.endpoint,
            access_key_id=settings.storage.access_key_id,
            secret_access_key=settings.storage.secret_access_key,
        )
    else:
        _storage_client = InMemoryStorageClient()
    return _storage_client
