# ABOUTME: Persistence of pipeline outputs
# ABOUTME: Composed sprite PNGs and the character metadata JSON document

from .writer import SpriteWriter, dump_metadata, sprite_filename, write_metadata

__all__ = [
    "SpriteWriter",
    "dump_metadata",
    "sprite_filename",
    "write_metadata",
]
