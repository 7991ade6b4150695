"""Transcription endpoints for video URLs, uploads and podcasts."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, UploadFile

from media_transcriber.dependencies import get_handler
from media_transcriber.domain import ProcessingTracker, UrlKind
from media_transcriber.exceptions import PipelineError
from media_transcriber.handlers import PipelineHandler
from media_transcriber.response_models import (
    EpisodeListResponse,
    ErrorResponse,
    PodcastRequest,
    TranscriptResponse,
    VideoRequest,
)

from .errors import error_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transcriptions", tags=["transcriptions"])

HandlerDep = Annotated[PipelineHandler, Depends(get_handler)]

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


@router.post(
    "/video", response_model=TranscriptResponse, responses=_ERROR_RESPONSES
)
def transcribe_video(request: VideoRequest, handler: HandlerDep):
    """Downloads the audio of a video page and transcribes it."""
    logger.info("Received video request", extra={"url": request.url})
    tracker = ProcessingTracker()
    try:
        result = handler.process_video_url(request.url, tracker)
    except PipelineError as e:
        return error_response(e, tracker)
    return TranscriptResponse.from_result(result)


@router.post(
    "/upload", response_model=TranscriptResponse, responses=_ERROR_RESPONSES
)
def transcribe_upload(file: UploadFile, handler: HandlerDep):
    """
    Uploads an MP4, MP3 or M4A file and transcribes it.

    Video files have their audio extracted before transcription.
    """
    logger.info(
        "Received upload request",
        extra={"file_name": file.filename, "content_type": file.content_type},
    )
    tracker = ProcessingTracker()
    try:
        result = handler.process_upload(file.filename or "", file.file, tracker)
    except PipelineError as e:
        return error_response(e, tracker)
    return TranscriptResponse.from_result(result)


@router.post(
    "/podcast",
    response_model=TranscriptResponse | EpisodeListResponse,
    responses=_ERROR_RESPONSES,
)
def transcribe_podcast(request: PodcastRequest, handler: HandlerDep):
    """
    Resolves a podcast URL.

    A feed URL returns its episodes; posting again with one of them as
    selected_episode transcribes it. A direct audio URL is transcribed
    immediately.
    """
    logger.info(
        "Received podcast request",
        extra={
            "url": request.url,
            "selected_episode": (
                request.selected_episode.guid if request.selected_episode else None
            ),
        },
    )
    tracker = ProcessingTracker()
    try:
        if request.selected_episode:
            result = handler.process_episode(request.selected_episode, tracker)
            return TranscriptResponse.from_result(result)

        resolution = handler.resolve_podcast(request.url, tracker)
    except PipelineError as e:
        return error_response(e, tracker)

    if resolution.kind == UrlKind.FEED:
        return EpisodeListResponse(episodes=resolution.episodes)
    return TranscriptResponse.from_result(resolution.result)
