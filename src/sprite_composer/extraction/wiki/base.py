import httpx

from sprite_composer.config import get_config
from sprite_composer.extraction.base import PageFetchError
from sprite_composer.utils.logging import get_logger, log_api_call


class WikiClient:
    """Fetches wiki pages over a shared httpx client. The client can be injected for tests
    or to share one connection pool with the image loader."""

    def __init__(self, client: httpx.AsyncClient | None = None):
        config = get_config()
        self.http_client = client or httpx.AsyncClient(  # Allow for dependency injection
            headers={"User-Agent": config.user_agent},
            timeout=config.http_timeout,
            follow_redirects=True,
        )
        self._owns_client = client is None
        self.logger = get_logger(__name__)

    @log_api_call("wiki")
    async def fetch_page(self, url: str) -> str:
        """Fetch a page and return its HTML text."""
        try:
            response = await self.http_client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise PageFetchError(url, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise PageFetchError(url, str(e) or type(e).__name__) from e

        self.logger.debug("Fetched wiki page", url=url, content_length=len(response.text))
        return response.text

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self.http_client.aclose()
