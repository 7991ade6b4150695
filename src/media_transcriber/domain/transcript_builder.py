"""Builds the text and structured transcript payloads."""

import json
from typing import Any

from .models import EngineResult, Utterance
from .naming import derive_base_name


class TranscriptBuilder:
    """Renders engine results into the two sibling transcript documents."""

    def __init__(self, text_format: str = "plain"):
        self._text_format = text_format

    def build(
        self, result: EngineResult, output_name: str
    ) -> tuple[str, str, str]:
        """
        Renders a completed engine result.

        Args:
            result: The completed engine result.
            output_name: Caller-provided file name or title.

        Returns:
            Tuple of (base_name, transcript_text, structured_json).
        """
        base_name = derive_base_name(output_name)
        return base_name, self._format_text(result), self._format_structured(result.structured)

    def _format_text(self, result: EngineResult) -> str:
        if self._text_format == "speakers" and result.utterances:
            return self._format_utterances(result.utterances)
        return result.text

    def _format_utterances(self, utterances: list[Utterance]) -> str:
        """Formats utterances into a readable speaker-labeled transcript."""
        return "\n".join(f"Speaker {u.speaker}: {u.text}" for u in utterances)

    def _format_structured(self, structured: dict[str, Any]) -> str:
        return json.dumps(structured, indent=2, ensure_ascii=False)
