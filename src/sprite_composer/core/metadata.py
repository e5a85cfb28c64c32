# ABOUTME: Metadata pipeline service: listing → detail pages → attribute records → JSON
# ABOUTME: Fetches detail pages sequentially with a fixed delay and omits characters that fail

import asyncio
from pathlib import Path

from sprite_composer.config import get_config
from sprite_composer.core.models import CharacterRecord
from sprite_composer.extraction.base import ExtractionError, PageFetcher
from sprite_composer.extraction.wiki.base import WikiClient
from sprite_composer.extraction.wiki.details import extract_character_urls, parse_character_detail
from sprite_composer.persistence import write_metadata
from sprite_composer.utils.logging import get_logger, log_pipeline_step

from .pipeline import ProgressCallback


class CharacterMetadataService:
    """Collects attribute-table metadata for every character on the listing page."""

    def __init__(
        self,
        fetcher: PageFetcher | None = None,
        list_url: str | None = None,
        base_url: str | None = None,
        request_delay: float | None = None,
    ):
        config = get_config()
        self.fetcher = fetcher or WikiClient()
        self.list_url = list_url or config.list_url
        self.base_url = base_url or config.wiki_base_url
        self.path_prefix = config.character_path_prefix
        self.request_delay = config.request_delay if request_delay is None else request_delay
        self.logger = get_logger(__name__)

    @log_pipeline_step("fetch_character_urls", pipeline="metadata")
    async def fetch_character_urls(self) -> list[str]:
        """Fetch the listing page and collect detail URLs. Fetch failures propagate."""
        page = await self.fetcher.fetch_page(self.list_url)
        return extract_character_urls(page, self.base_url, self.path_prefix)

    async def fetch_character(self, url: str) -> CharacterRecord:
        page = await self.fetcher.fetch_page(url)
        return parse_character_detail(page, url)

    async def collect(self, progress_callback: ProgressCallback | None = None) -> list[CharacterRecord]:
        """Fetch every detail page in order, skipping characters that cannot be parsed."""
        urls = await self.fetch_character_urls()
        total = len(urls)
        records: list[CharacterRecord] = []

        self.logger.info("Starting metadata collection", character_count=total, request_delay=self.request_delay)

        for index, url in enumerate(urls, start=1):
            if progress_callback:
                progress_callback(url, index, total)
            try:
                record = await self.fetch_character(url)
                records.append(record)
                self.logger.info("Fetched character", name=record.name, url=url, attributes=len(record.info))
            except ExtractionError as e:
                self.logger.error(
                    "Failed to fetch character", url=url, error=str(e), error_type=type(e).__name__
                )

            if index < total and self.request_delay > 0:
                await asyncio.sleep(self.request_delay)

        self.logger.info("Metadata collection completed", total=total, successful=len(records))
        return records

    async def run(
        self, output_path: Path | str | None = None, progress_callback: ProgressCallback | None = None
    ) -> tuple[list[CharacterRecord], str]:
        """Collect records and write them; returns the records and the JSON text."""
        records = await self.collect(progress_callback)
        text = write_metadata(records, output_path or get_config().metadata_path)
        return records, text

    async def close(self) -> None:
        close = getattr(self.fetcher, "close", None)
        if close is not None:
            await close()
