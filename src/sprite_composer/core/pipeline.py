# ABOUTME: Image pipeline object and orchestrating service for composing every listed character
# ABOUTME: The service owns iteration, optional fan-out across characters, and per-character error handling

import asyncio
from collections.abc import Callable
from pathlib import Path

import httpx

from sprite_composer.config import get_config
from sprite_composer.core.compositor import SpriteCompositor
from sprite_composer.core.errors import CompositionError
from sprite_composer.core.models import Character, CharacterFailure, CompositionResult, RunSummary
from sprite_composer.extraction.base import ImageLoader, PageFetcher
from sprite_composer.extraction.images import HttpImageLoader
from sprite_composer.extraction.wiki.base import WikiClient
from sprite_composer.extraction.wiki.layers import extract_characters
from sprite_composer.persistence import SpriteWriter
from sprite_composer.utils.logging import get_logger, log_pipeline_step, with_character_context

ProgressCallback = Callable[[str, int, int], None]


class SpritePipeline:
    """Listing HTML → characters → composed PNGs."""

    def __init__(self, loader: ImageLoader, image_host: str | None = None):
        self.compositor = SpriteCompositor(loader)
        self.image_host = image_host

    def extract(self, page: str) -> list[Character]:
        """Characters with at least one layer, in listing order."""
        return extract_characters(page, self.image_host)

    async def composite(self, character: Character) -> CompositionResult:
        return await self.compositor.composite(character)


class SpriteCompositionService:
    """Runs the image pipeline over the whole character listing."""

    def __init__(
        self,
        fetcher: PageFetcher | None = None,
        loader: ImageLoader | None = None,
        writer: SpriteWriter | None = None,
        list_url: str | None = None,
        output_dir: Path | str | None = None,
        concurrency: int | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        config = get_config()
        self.logger = get_logger(__name__)

        self._owned_client: httpx.AsyncClient | None = None
        if (fetcher is None or loader is None) and http_client is None:
            self._owned_client = httpx.AsyncClient(
                headers={"User-Agent": config.user_agent},
                timeout=config.http_timeout,
                follow_redirects=True,
            )
        shared_client = http_client or self._owned_client

        self.fetcher = fetcher or WikiClient(client=shared_client)
        self.loader = loader or HttpImageLoader(client=shared_client)
        self.writer = writer or SpriteWriter(output_dir or config.output_dir)
        self.list_url = list_url or config.list_url
        self.concurrency = max(1, concurrency or config.concurrency)
        self.pipeline = SpritePipeline(self.loader, config.image_host)

    @log_pipeline_step("fetch_characters")
    async def fetch_characters(self) -> list[Character]:
        """Fetch the listing page and extract its characters. Fetch failures propagate."""
        page = await self.fetcher.fetch_page(self.list_url)
        return self.pipeline.extract(page)

    async def run(self, progress_callback: ProgressCallback | None = None) -> RunSummary:
        """Compose and write every character, continuing past per-character failures."""
        characters = await self.fetch_characters()
        summary = RunSummary(characters_found=len(characters))

        self.writer.ensure_output_dir()

        semaphore = asyncio.Semaphore(self.concurrency)
        total = len(characters)

        self.logger.info("Starting sprite composition", characters=total, concurrency=self.concurrency)

        async def process(index: int, character: Character) -> CompositionResult | CharacterFailure:
            async with semaphore:
                if progress_callback:
                    progress_callback(character.name, index, total)
                return await self._process_character(character)

        outcomes = await asyncio.gather(*(process(i, c) for i, c in enumerate(characters, start=1)))

        for character, outcome in zip(characters, outcomes, strict=True):
            if isinstance(outcome, CharacterFailure):
                summary.failures.append(outcome)
                continue
            summary.characters_composed += 1
            # Characters sharing a name overwrite the same file
            path = self.writer.path_for(character.name)
            if path not in summary.written:
                summary.written.append(path)
            summary.layers_drawn += outcome.layers_drawn
            summary.layers_failed += outcome.layers_failed

        self.logger.info(
            "Sprite composition completed",
            total=total,
            composed=summary.characters_composed,
            failed=summary.characters_failed,
            layers_failed=summary.layers_failed,
        )
        return summary

    async def _process_character(self, character: Character) -> CompositionResult | CharacterFailure:
        with with_character_context(character.name) as logger:
            try:
                result = await self.pipeline.composite(character)
            except CompositionError as e:
                logger.warning("Skipping character", error=str(e))
                return CharacterFailure(name=character.name, error=str(e), error_type=type(e).__name__)

            try:
                self.writer.write(character.name, result.png_bytes)
            except OSError as e:
                logger.error("Failed to write sprite", error=str(e), error_type=type(e).__name__)
                return CharacterFailure(name=character.name, error=str(e), error_type=type(e).__name__)

            return result

    async def close(self) -> None:
        """Close HTTP resources created by this service."""
        if self._owned_client is not None:
            await self._owned_client.aclose()
