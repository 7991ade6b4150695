"""Abstract interface for artifact storage operations."""

from abc import ABC, abstractmethod

from media_transcriber.domain.models import ArtifactKind


class ArtifactStore(ABC):
    """Name-addressed repository of pipeline artifacts."""

    @abstractmethod
    def put(
        self,
        kind: ArtifactKind,
        name: str,
        data: bytes,
        content_type: str,
    ) -> str:
        """
        Stores an artifact, replacing any previous one with the same name.

        Args:
            kind: The artifact group (audio, transcripts).
            name: The file name within the group.
            data: The artifact contents.
            content_type: MIME type of the contents.

        Returns:
            The location of the artifact, relative to the store.

        Raises:
            StorageError: If the write fails.
        """

    @abstractmethod
    def exists(self, location: str) -> bool:
        """Returns whether an artifact is stored at the given location."""

    @abstractmethod
    def read(self, location: str) -> bytes:
        """
        Reads an artifact back.

        Raises:
            ArtifactNotFoundError: If nothing is stored at the location.
            StorageError: If the read fails.
        """
