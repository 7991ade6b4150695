"""
Media Transcriber Service.

FastAPI application turning video URLs, uploaded media files and podcast
feeds into speaker-labeled transcripts.
It handles:
- Downloading audio from video-hosting sites.
- Extracting audio from uploaded video files.
- Resolving podcast feeds into playable episodes.
- Transcribing audio with AssemblyAI and storing the transcript pair.
- Distributed tracing with Datadog.
- Structured JSON logging.
"""

from ddtrace import patch_all
from fastapi import FastAPI

from media_transcriber.dependencies import get_config
from media_transcriber.logging import setup_logging
from media_transcriber.routes import files_router, transcriptions_router

patch_all()
setup_logging(get_config().log_level)

app = FastAPI(title="Media Transcriber Service")
app.include_router(transcriptions_router)
app.include_router(files_router)
