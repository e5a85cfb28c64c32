# ABOUTME: Protocol interfaces and errors for fetching wiki pages and layer images
# ABOUTME: Keeps the core compositor independent of HTTP and decoding details

from typing import Protocol

from PIL import Image


class PageFetcher(Protocol):
    """Protocol for retrieving the HTML of a wiki page."""

    async def fetch_page(self, url: str) -> str:
        """Fetch the page at the given URL.

        Raises:
            PageFetchError: If the page cannot be retrieved
        """
        ...


class ImageLoader(Protocol):
    """Protocol for loading one layer image as an RGBA Pillow image."""

    async def load(self, url: str) -> Image.Image:
        """Load and decode the image at the given URL.

        Raises:
            ImageLoadError: If the image cannot be fetched or decoded
        """
        ...


class ExtractionError(Exception):
    """Raised when data cannot be extracted from the wiki."""

    pass


class PageFetchError(ExtractionError):
    """Raised when a wiki page is unreachable or answers with an error status."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class MissingTableError(ExtractionError):
    """Raised when a detail page has no attribute table with the expected header."""

    pass


class ImageLoadError(Exception):
    """Raised when a layer image cannot be fetched or decoded."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to load image {url}: {reason}")
        self.url = url
        self.reason = reason
