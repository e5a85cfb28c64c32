# ABOUTME: File persistence for composed sprites and the character metadata JSON document
# ABOUTME: Directory creation failures are tolerated; write failures are reported to the caller

import json
from collections.abc import Iterable
from pathlib import Path

from sprite_composer.core.models import CharacterRecord
from sprite_composer.utils.logging import get_logger

SPRITE_EXTENSION = ".png"

logger = get_logger(__name__)


def sprite_filename(name: str) -> str:
    """File name for a character sprite; path separators in the name are replaced."""
    safe = name.replace("/", "_").replace("\\", "_")
    return f"{safe}{SPRITE_EXTENSION}"


class SpriteWriter:
    """Writes one PNG per character into an output directory."""

    def __init__(self, output_dir: Path | str):
        self.output_dir = Path(output_dir)

    def ensure_output_dir(self) -> None:
        """Create the output directory; a failure is logged and otherwise ignored."""
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning("Could not create output directory", path=str(self.output_dir), error=str(e))

    def path_for(self, name: str) -> Path:
        return self.output_dir / sprite_filename(name)

    def write(self, name: str, png_bytes: bytes) -> Path:
        """Write the sprite and return its path.

        Raises:
            OSError: If the file cannot be written
        """
        path = self.path_for(name)
        path.write_bytes(png_bytes)
        logger.info("Saved sprite", character=name, path=str(path), size_kb=round(len(png_bytes) / 1024, 1))
        return path


def dump_metadata(records: Iterable[CharacterRecord]) -> str:
    """Serialise records as an indented JSON array, keeping non-ASCII text readable."""
    return json.dumps([record.model_dump() for record in records], ensure_ascii=False, indent=2)


def write_metadata(records: Iterable[CharacterRecord], path: Path | str) -> str:
    """Write the metadata document and return its JSON text.

    A write failure is logged; the text is still returned for echoing.
    """
    text = dump_metadata(records)
    path = Path(path)
    try:
        path.write_text(text, encoding="utf-8")
        logger.info("Saved character metadata", path=str(path))
    except OSError as e:
        logger.error("Error saving character metadata", path=str(path), error=str(e))
    return text
