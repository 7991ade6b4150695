"""Abstract interface for metadata-only URL probes."""

from abc import ABC, abstractmethod

from media_transcriber.domain.models import ProbeResult


class SourceProbe(ABC):
    """Issues a request against a URL without downloading its body."""

    @abstractmethod
    def probe(self, url: str) -> ProbeResult:
        """
        Fetches status and headers of a remote resource.

        Args:
            url: The URL to probe.

        Returns:
            ProbeResult with status code, reason and declared content type.

        Raises:
            UnreachableSourceError: If no response could be obtained.
        """
        pass
