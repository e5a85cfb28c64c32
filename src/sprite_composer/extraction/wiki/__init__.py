from .base import WikiClient
from .details import extract_character_urls, parse_character_detail
from .layers import extract_characters

__all__ = [
    "WikiClient",
    "extract_character_urls",
    "extract_characters",
    "parse_character_detail",
]
