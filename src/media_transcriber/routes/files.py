"""Serves stored transcript and audio artifacts."""

from pathlib import PurePath
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response

from media_transcriber.config import AppConfig
from media_transcriber.dependencies import get_audio_store, get_config, get_store
from media_transcriber.domain import ArtifactKind
from media_transcriber.exceptions import ArtifactNotFoundError, StorageError
from media_transcriber.infrastructure.interfaces import ArtifactStore

router = APIRouter(prefix="/files", tags=["files"])

StoreDep = Annotated[ArtifactStore, Depends(get_store)]
AudioStoreDep = Annotated[ArtifactStore, Depends(get_audio_store)]
ConfigDep = Annotated[AppConfig, Depends(get_config)]

_CONTENT_TYPES = {
    ".json": "application/json",
    ".txt": "text/plain; charset=utf-8",
    ".mp3": "audio/mpeg",
    ".m4a": "audio/mp4",
}


@router.get("/{kind}/{name}")
def get_file(
    kind: ArtifactKind,
    name: str,
    store: StoreDep,
    audio_store: AudioStoreDep,
    config: ConfigDep,
) -> Response:
    """
    Returns a stored artifact by group and file name.

    Transcripts come from the configured artifact store; audio is staged on
    local disk and always read from there.
    """
    if name in (".", "..") or "/" in name or "\\" in name:
        raise HTTPException(status_code=403, detail="Invalid file path")

    if kind == ArtifactKind.AUDIO:
        source, location = audio_store, f"{config.storage.audio_dir}/{name}"
    else:
        source, location = store, f"{kind.value}/{name}"

    try:
        data = source.read(location)
    except ArtifactNotFoundError:
        raise HTTPException(status_code=404, detail="File not found")
    except StorageError:
        raise HTTPException(status_code=500, detail="File could not be read")

    suffix = PurePath(name).suffix.lower()
    media_type = _CONTENT_TYPES.get(suffix, "text/plain; charset=utf-8")
    return Response(content=data, media_type=media_type)
