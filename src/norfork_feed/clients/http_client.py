"""HTTP client for fetching upstream report pages."""

from typing import Optional

import httpx
import structlog

from norfork_feed.configuration.settings import SourcesConfig
from norfork_feed.utils.exceptions import NetworkError

logger = structlog.get_logger()


class DocumentFetcher:
    """Fetches raw report pages. One request per call, no retries."""

    def __init__(
        self,
        config: SourcesConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize fetcher.

        Args:
            config: Upstream source configuration
            transport: Optional httpx transport (used by tests)
        """
        self.config = config
        self._transport = transport
        logger.info(
            "document_fetcher_initialized",
            timeout=config.timeout,
        )

    def fetch(self, url: str) -> str:
        """Fetch a report page.

        Args:
            url: Report URL

        Returns:
            Response body as text

        Raises:
            NetworkError: On transport failure, timeout or non-success status
        """
        headers = {
            "User-Agent": self.config.user_agent,
            "Accept": "text/html,text/plain;q=0.9,*/*;q=0.8",
        }

        logger.debug("document_fetch_started", url=url, timeout=self.config.timeout)

        try:
            with httpx.Client(
                headers=headers,
                timeout=self.config.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = client.get(url)
                response.raise_for_status()

        except httpx.HTTPStatusError as e:
            logger.error(
                "document_fetch_bad_status",
                url=url,
                status_code=e.response.status_code,
            )
            raise NetworkError(
                f"Fetching {url} returned status {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.error(
                "document_fetch_failed",
                url=url,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise NetworkError(f"Failed to fetch {url}: {e}") from e

        logger.debug(
            "document_fetch_completed",
            url=url,
            status_code=response.status_code,
            length=len(response.text),
        )

        return response.text
