"""requests implementation of the SourceProbe interface."""

import logging

import requests

from media_transcriber.domain.models import ProbeResult
from media_transcriber.exceptions import UnreachableSourceError

from .interfaces.source_probe import SourceProbe

logger = logging.getLogger(__name__)


class RequestsSourceProbe(SourceProbe):
    """Probes URLs with HEAD requests, following redirects."""

    def __init__(self, session: requests.Session, timeout: float, user_agent: str):
        self._session = session
        self._timeout = timeout
        self._user_agent = user_agent

    def probe(self, url: str) -> ProbeResult:
        try:
            response = self._session.head(
                url,
                allow_redirects=True,
                timeout=self._timeout,
                headers={"User-Agent": self._user_agent},
            )
        except requests.RequestException as e:
            logger.exception("URL probe failed", extra={"url": url})
            raise UnreachableSourceError(url, cause=e) from e

        result = ProbeResult(
            status_code=response.status_code,
            reason=response.reason or "",
            content_type=response.headers.get("Content-Type", ""),
        )
        logger.info(
            "URL probed",
            extra={
                "url": url,
                "status_code": result.status_code,
                "content_type": result.content_type,
            },
        )
        return result
