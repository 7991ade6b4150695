"""Drives an audio source through the transcription engine."""

import logging
from pathlib import Path
from urllib.parse import quote

from media_transcriber.exceptions import TranscriptionFailedError
from media_transcriber.infrastructure.interfaces.artifact_store import ArtifactStore
from media_transcriber.infrastructure.interfaces.transcription_service import (
    TranscriptionService,
)

from .media_acquirer import ensure_non_empty
from .models import ArtifactKind, AudioSource, SourceKind, TranscriptArtifact
from .transcript_builder import TranscriptBuilder

logger = logging.getLogger(__name__)


class TranscriptOrchestrator:
    """Transcribes an AudioSource and persists the transcript pair."""

    def __init__(
        self,
        transcription_service: TranscriptionService,
        store: ArtifactStore,
        builder: TranscriptBuilder | None = None,
        public_prefix: str = "/files",
    ):
        self._transcription_service = transcription_service
        self._store = store
        self._builder = builder or TranscriptBuilder()
        self._public_prefix = public_prefix.rstrip("/")

    def transcribe(self, source: AudioSource, output_name: str) -> TranscriptArtifact:
        """
        Transcribes a source and stores <base>.txt then <base>.json.

        Args:
            source: The audio to transcribe.
            output_name: File name or title the transcript is named after.

        Returns:
            TranscriptArtifact with contents and download URLs.

        Raises:
            EmptyArtifactError: If a local source is missing or empty.
            TranscriptionFailedError: If the engine did not complete.
            EngineError: If the engine could not be reached.
            StorageError: If an artifact cannot be written.
        """
        if source.kind == SourceKind.LOCAL_FILE:
            ensure_non_empty(Path(source.location))

        logger.info(
            "Transcription started",
            extra={"source_kind": source.kind.value, "location": source.location},
        )
        result = self._transcription_service.transcribe(source.location)

        if result.status != "completed":
            logger.warning(
                "Transcription failed",
                extra={"location": source.location, "error": result.error},
            )
            raise TranscriptionFailedError(source.location, result.error)

        base_name, text, structured_json = self._builder.build(result, output_name)

        text_name = f"{base_name}.txt"
        structured_name = f"{base_name}.json"
        text_location = f"{ArtifactKind.TRANSCRIPT.value}/{text_name}"
        if self._store.exists(text_location):
            logger.warning(
                "Overwriting existing transcript", extra={"base_name": base_name}
            )

        # text first: a failed json write leaves the text artifact in place
        text_location = self._store.put(
            ArtifactKind.TRANSCRIPT, text_name, text.encode("utf-8"), "text/plain"
        )
        structured_location = self._store.put(
            ArtifactKind.TRANSCRIPT,
            structured_name,
            structured_json.encode("utf-8"),
            "application/json",
        )

        logger.info(
            "Transcript stored",
            extra={
                "base_name": base_name,
                "text_location": text_location,
                "structured_location": structured_location,
            },
        )
        return TranscriptArtifact(
            base_name=base_name,
            text=text,
            structured=result.structured,
            utterances=result.utterances,
            text_url=self._public_url(text_location),
            structured_url=self._public_url(structured_location),
        )

    def _public_url(self, location: str) -> str:
        return f"{self._public_prefix}/{quote(location)}"
