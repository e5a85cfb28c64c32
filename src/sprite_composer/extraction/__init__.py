# ABOUTME: Data extraction from the character wiki and its image host
# ABOUTME: Pipeline stage 1: listing/detail HTML → layers and records, layer URLs → images

"""
Extraction Layer: Get raw data from external sources

This layer handles:
- Wiki page fetching
- Layer descriptor extraction from the character listing
- Attribute table extraction from detail pages
- Layer image loading and decoding

Data Flow: Wiki pages → Characters / CharacterRecords → Core layer
"""

from .base import ExtractionError, ImageLoadError, ImageLoader, MissingTableError, PageFetcher, PageFetchError

__all__ = [
    "ExtractionError",
    "ImageLoadError",
    "ImageLoader",
    "MissingTableError",
    "PageFetcher",
    "PageFetchError",
]
