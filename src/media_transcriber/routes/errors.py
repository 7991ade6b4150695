"""Maps pipeline failures onto HTTP responses."""

from fastapi import status
from fastapi.responses import JSONResponse

from media_transcriber.domain import ProcessingTracker
from media_transcriber.exceptions import (
    AcquisitionFailedError,
    ArtifactNotFoundError,
    ConversionFailedError,
    EngineError,
    PipelineError,
    StorageError,
    TranscriptionFailedError,
)
from media_transcriber.response_models import ErrorResponse

# Anything not listed is a problem with the caller's input or source.
_STATUS_CODES: dict[type[PipelineError], int] = {
    ArtifactNotFoundError: status.HTTP_404_NOT_FOUND,
    AcquisitionFailedError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConversionFailedError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    TranscriptionFailedError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    EngineError: status.HTTP_502_BAD_GATEWAY,
}


def status_code_for(error: PipelineError) -> int:
    for cls in type(error).__mro__:
        if cls in _STATUS_CODES:
            return _STATUS_CODES[cls]
    return status.HTTP_400_BAD_REQUEST


def error_response(
    error: PipelineError, tracker: ProcessingTracker | None = None
) -> JSONResponse:
    body = ErrorResponse(
        message=error.message,
        detail=error.detail,
        status=tracker.snapshot() if tracker else None,
    )
    return JSONResponse(
        status_code=status_code_for(error),
        content=body.model_dump(mode="json"),
    )
