"""Request and response models for the transcription API."""

import json
from typing import Literal

from pydantic import BaseModel, Field

from media_transcriber.domain import FeedEpisode, PipelineResult, ProcessingStatus


class VideoRequest(BaseModel):
    """Body of a video URL transcription request."""

    url: str = Field(..., min_length=1)


class PodcastRequest(BaseModel):
    """Body of a podcast request, optionally carrying the chosen episode."""

    url: str = Field(..., min_length=1)
    selected_episode: FeedEpisode | None = None


class TranscriptResponse(BaseModel):
    """Response returned after a successful transcription."""

    type: Literal["transcript"] = "transcript"
    filename: str
    title: str
    txt_content: str
    json_content: str
    txt_download_url: str
    json_download_url: str
    status: ProcessingStatus

    @classmethod
    def from_result(cls, result: PipelineResult) -> "TranscriptResponse":
        artifact = result.artifact
        return cls(
            filename=artifact.text_file_name,
            title=result.source.display_name,
            txt_content=artifact.text,
            json_content=json.dumps(artifact.structured, indent=2, ensure_ascii=False),
            txt_download_url=artifact.text_url,
            json_download_url=artifact.structured_url,
            status=result.status,
        )


class EpisodeListResponse(BaseModel):
    """Response listing the playable episodes of a feed."""

    type: Literal["feed"] = "feed"
    episodes: list[FeedEpisode]


class ErrorResponse(BaseModel):
    """Response body for a failed request."""

    message: str
    detail: str | None = None
    status: ProcessingStatus | None = None
