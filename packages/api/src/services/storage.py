# This project was developed with assistance from AI tools.
"""S3-compatible object storage for applicant documents (MinIO in dev).

boto3 is synchronous, so every call is pushed to the default thread-pool
executor. A module-level singleton is created at app startup via
``init_storage_service()``.
"""

import asyncio
import logging
import ntpath
import posixpath
from functools import partial

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from ..core.config import Settings

logger = logging.getLogger(__name__)


class StorageUnavailableError(RuntimeError):
    """Raised when the object store is not configured or not reachable."""


class StorageService:
    """Thin async wrapper around a boto3 S3 client bound to one bucket."""

    def __init__(
        self,
        endpoint: str,
        access_key: str,
        secret_key: str,
        bucket: str,
        region: str = "us-east-1",
    ):
        self._bucket = bucket
        self._client = boto3.client(
            "s3",
            endpoint_url=endpoint,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            region_name=region,
            config=BotoConfig(signature_version="s3v4", s3={"addressing_style": "path"}),
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    def ensure_bucket(self) -> None:
        """Create the bucket if it doesn't already exist (dev convenience)."""
        try:
            self._client.head_bucket(Bucket=self._bucket)
        except ClientError:
            logger.info("Creating S3 bucket: %s", self._bucket)
            self._client.create_bucket(Bucket=self._bucket)

    async def _run(self, func, **kwargs):
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, partial(func, **kwargs))
        except (BotoCoreError, ClientError) as exc:
            logger.error("Object storage call failed (bucket=%s): %s", self._bucket, exc)
            raise StorageUnavailableError(str(exc)) from exc

    async def upload_file(self, file_data: bytes, object_key: str, content_type: str) -> str:
        """Upload bytes and return the object key."""
        await self._run(
            self._client.put_object,
            Bucket=self._bucket,
            Key=object_key,
            Body=file_data,
            ContentType=content_type,
        )
        return object_key

    async def delete_file(self, object_key: str) -> None:
        await self._run(self._client.delete_object, Bucket=self._bucket, Key=object_key)

    async def get_download_url(self, object_key: str, expires_in: int = 900) -> str:
        """Return a presigned GET URL for the object."""
        return await self._run(
            self._client.generate_presigned_url,
            ClientMethod="get_object",
            Params={"Bucket": self._bucket, "Key": object_key},
            ExpiresIn=expires_in,
        )

    @staticmethod
    def build_object_key(applicant_id: int, document_id: int, filename: str) -> str:
        """``applicants/{applicant_id}/{document_id}/{filename}``.

        Directory components (POSIX or Windows) are stripped from the
        client-supplied filename.
        """
        safe_name = posixpath.basename(ntpath.basename(filename or "")) or f"document-{document_id}"
        return f"applicants/{applicant_id}/{document_id}/{safe_name}"


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

_service: StorageService | None = None


def init_storage_service(cfg: Settings) -> StorageService:
    """Initialise the singleton (called once from app lifespan)."""
    global _service  # noqa: PLW0603
    _service = StorageService(
        endpoint=cfg.S3_ENDPOINT,
        access_key=cfg.S3_ACCESS_KEY,
        secret_key=cfg.S3_SECRET_KEY,
        bucket=cfg.S3_BUCKET,
        region=cfg.S3_REGION,
    )
    try:
        _service.ensure_bucket()
    except (BotoCoreError, ClientError):
        logger.warning(
            "Object storage unreachable at %s; uploads will fail until it is up",
            cfg.S3_ENDPOINT,
            exc_info=True,
        )
    logger.info("StorageService initialised (bucket=%s)", cfg.S3_BUCKET)
    return _service


def get_storage_service() -> StorageService:
    """Return the initialised StorageService singleton."""
    if _service is None:
        raise StorageUnavailableError(
            "StorageService not initialised -- call init_storage_service() first"
        )
    return _service
