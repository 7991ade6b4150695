"""Local filesystem implementation of the ArtifactStore interface."""

import logging
from pathlib import Path

from media_transcriber.domain.models import ArtifactKind
from media_transcriber.exceptions import ArtifactNotFoundError, StorageError

from .interfaces.artifact_store import ArtifactStore

logger = logging.getLogger(__name__)


class LocalArtifactStore(ArtifactStore):
    """Stores artifacts as files under <root>/<kind>/<name>."""

    def __init__(self, root: Path):
        self._root = root.resolve()

    @property
    def root(self) -> Path:
        return self._root

    def put(
        self,
        kind: ArtifactKind,
        name: str,
        data: bytes,
        content_type: str,
    ) -> str:
        location = f"{kind.value}/{name}"
        target = self._resolve(location)
        temp_path = target.parent / f".{target.name}.tmp"
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_bytes(data)
            temp_path.replace(target)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            logger.exception("Artifact write failed", extra={"location": location})
            raise StorageError(location, e) from e

        logger.info(
            "Artifact stored",
            extra={
                "location": location,
                "size": len(data),
                "content_type": content_type,
            },
        )
        return location

    def exists(self, location: str) -> bool:
        try:
            return self._resolve(location).is_file()
        except StorageError:
            return False

    def read(self, location: str) -> bytes:
        path = self._resolve(location)
        if not path.is_file():
            raise ArtifactNotFoundError(location)
        try:
            return path.read_bytes()
        except OSError as e:
            logger.exception("Artifact read failed", extra={"location": location})
            raise StorageError(location, e) from e

    def _resolve(self, location: str) -> Path:
        """Maps a location onto a path, refusing anything outside the root."""
        path = (self._root / location).resolve()
        if path == self._root or self._root not in path.parents:
            raise StorageError(location, ValueError("Location escapes the store root"))
        return path
