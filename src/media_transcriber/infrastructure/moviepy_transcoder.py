"""moviepy implementation of the AudioTranscoder interface."""

import logging
from pathlib import Path

import moviepy

from media_transcriber.config import TranscodeProfile
from media_transcriber.domain.models import TranscodeDiagnostic

from .interfaces.audio_transcoder import AudioTranscoder, TranscodeError

logger = logging.getLogger(__name__)

# ffmpeg wording for a missing or disabled encoder
_CODEC_MARKERS = ("codec", "unknown encoder", "encoder not found", "not available")


def diagnose(message: str) -> TranscodeDiagnostic:
    """Maps ffmpeg failure text onto a transcoder diagnostic code."""
    lowered = message.lower()
    if any(marker in lowered for marker in _CODEC_MARKERS):
        return TranscodeDiagnostic.CODEC_UNAVAILABLE
    return TranscodeDiagnostic.CONVERSION_ERROR


class MoviePyTranscoder(AudioTranscoder):
    """Extracts audio tracks from video containers using moviepy and ffmpeg."""

    def transcode(
        self, input_path: Path, output_path: Path, profile: TranscodeProfile
    ) -> None:
        ffmpeg_params = []
        if profile.quality is not None:
            ffmpeg_params += ["-q:a", str(profile.quality)]
        if profile.channels is not None:
            ffmpeg_params += ["-ac", str(profile.channels)]

        try:
            video = moviepy.VideoFileClip(str(input_path))
        except Exception as e:
            logger.exception(
                "Video could not be opened",
                extra={"file_name": str(input_path), "profile": profile.name},
            )
            raise TranscodeError(
                profile.name, diagnose(str(e)), str(e), e
            ) from e

        try:
            if video.audio is None:
                raise TranscodeError(
                    profile.name,
                    TranscodeDiagnostic.CONVERSION_ERROR,
                    "video has no audio track",
                )
            video.audio.write_audiofile(
                str(output_path),
                fps=profile.sample_rate,
                codec=profile.codec,
                ffmpeg_params=ffmpeg_params or None,
                logger=None,
            )
        except TranscodeError:
            raise
        except Exception as e:
            logger.exception(
                "Audio encode failed",
                extra={"file_name": str(input_path), "profile": profile.name},
            )
            raise TranscodeError(profile.name, diagnose(str(e)), str(e), e) from e
        finally:
            if video.audio is not None:
                video.audio.close()
            video.close()

        logger.info(
            "Audio extracted",
            extra={
                "file_name": str(input_path),
                "audio_file": str(output_path),
                "profile": profile.name,
            },
        )
