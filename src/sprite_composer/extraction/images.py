# ABOUTME: HTTP image loader that fetches layer images and decodes them with Pillow
# ABOUTME: Every fetch or decode failure surfaces as ImageLoadError carrying the URL

from io import BytesIO

import httpx
from PIL import Image, UnidentifiedImageError

from sprite_composer.config import get_config
from sprite_composer.extraction.base import ImageLoadError
from sprite_composer.utils.logging import get_logger, log_api_call


class HttpImageLoader:
    """Load layer images from the wiki image host as RGBA Pillow images."""

    def __init__(self, client: httpx.AsyncClient | None = None, max_size_mb: float = 10.0):
        """Initialize the loader.

        Args:
            client: HTTP client to use (optional, one is created and owned otherwise)
            max_size_mb: Maximum accepted image size in MB
        """
        config = get_config()
        self.http_client = client or httpx.AsyncClient(
            headers={"User-Agent": config.user_agent},
            timeout=config.http_timeout,
            follow_redirects=True,
        )
        self._owns_client = client is None
        self.max_size_mb = max_size_mb
        self.logger = get_logger(__name__)

    @log_api_call("image_host")
    async def load(self, url: str) -> Image.Image:
        """Fetch and decode the image at ``url``."""
        try:
            response = await self.http_client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ImageLoadError(url, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise ImageLoadError(url, str(e) or type(e).__name__) from e

        data = response.content
        size_mb = len(data) / (1024 * 1024)
        if size_mb > self.max_size_mb:
            raise ImageLoadError(url, f"Image too large: {size_mb:.1f}MB > {self.max_size_mb}MB")

        try:
            with Image.open(BytesIO(data)) as img:
                image = img.convert("RGBA")
        except (UnidentifiedImageError, OSError) as e:
            raise ImageLoadError(url, f"Cannot decode image: {e}") from e

        self.logger.debug("Loaded layer image", url=url, size=image.size, size_kb=round(len(data) / 1024, 1))
        return image

    async def close(self) -> None:
        """Close the underlying HTTP client if this loader created it."""
        if self._owns_client:
            await self.http_client.aclose()
