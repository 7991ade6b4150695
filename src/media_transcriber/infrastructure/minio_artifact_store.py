"""MinIO implementation of the ArtifactStore interface."""

import io
import logging

from minio import Minio
from minio.error import S3Error

from media_transcriber.domain.models import ArtifactKind
from media_transcriber.exceptions import ArtifactNotFoundError, StorageError

from .interfaces.artifact_store import ArtifactStore

logger = logging.getLogger(__name__)

_MISSING_CODES = ("NoSuchKey", "NoSuchObject", "NoSuchBucket")


class MinioArtifactStore(ArtifactStore):
    """Stores artifacts as objects named <kind>/<name> in one MinIO bucket."""

    def __init__(self, client: Minio, bucket_name: str):
        self._client = client
        self._bucket_name = bucket_name

    def put(
        self,
        kind: ArtifactKind,
        name: str,
        data: bytes,
        content_type: str,
    ) -> str:
        object_name = f"{kind.value}/{name}"
        try:
            self._client.put_object(
                bucket_name=self._bucket_name,
                object_name=object_name,
                data=io.BytesIO(data),
                length=len(data),
                content_type=content_type,
            )
        except Exception as e:
            logger.exception(
                "MinIO upload failed",
                extra={"bucket_name": self._bucket_name, "object_name": object_name},
            )
            raise StorageError(object_name, e) from e

        logger.info(
            "Artifact uploaded to MinIO",
            extra={"bucket_name": self._bucket_name, "object_name": object_name},
        )
        return object_name

    def exists(self, location: str) -> bool:
        try:
            self._client.stat_object(self._bucket_name, location)
            return True
        except S3Error as e:
            if e.code in _MISSING_CODES:
                return False
            logger.exception("MinIO stat failed", extra={"object_name": location})
            raise StorageError(location, e) from e

    def read(self, location: str) -> bytes:
        try:
            response = self._client.get_object(self._bucket_name, location)
        except S3Error as e:
            if e.code in _MISSING_CODES:
                raise ArtifactNotFoundError(location) from e
            logger.exception("MinIO download failed", extra={"object_name": location})
            raise StorageError(location, e) from e
        try:
            return response.data
        finally:
            response.close()
            response.release_conn()

    def ensure_bucket_exists(self) -> None:
        if not self._client.bucket_exists(self._bucket_name):
            self._client.make_bucket(self._bucket_name)
            logger.info("Bucket created", extra={"bucket_name": self._bucket_name})
        else:
            logger.info(
                "Bucket already exists", extra={"bucket_name": self._bucket_name}
            )
