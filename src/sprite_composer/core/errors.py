# ABOUTME: Exceptions raised while turning extracted layers into a composed sprite
# ABOUTME: Scraping failures live in sprite_composer.extraction.base

class CompositionError(Exception):
    """Raised when a character cannot be composed into a raster image."""

    pass


class GeometryError(CompositionError):
    """Raised when canvas geometry is requested for an empty layer sequence."""

    pass
