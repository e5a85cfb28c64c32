# ABOUTME: Business logic and orchestration layer
# ABOUTME: Canvas geometry, compositing and the services driving both pipelines

"""
Core Layer: Business logic and workflow orchestration

This layer handles:
- Canvas geometry and per-layer draw positions
- Compositing layers into PNG sprites
- Pipeline orchestration and per-character error handling
- Domain models shared by every layer

Data Flow: extraction/ characters → Geometry → Compositing → persistence/
"""

from .errors import CompositionError, GeometryError
from .geometry import compute_canvas_geometry, layer_draw_position
from .models import (
    CanvasGeometry,
    Character,
    CharacterRecord,
    CompositionResult,
    DrawPosition,
    LayerDescriptor,
    RunSummary,
)

# Import services on-demand to avoid circular imports
# Use: from sprite_composer.core.pipeline import SpriteCompositionService

__all__ = [
    "CanvasGeometry",
    "Character",
    "CharacterRecord",
    "CompositionError",
    "CompositionResult",
    "DrawPosition",
    "GeometryError",
    "LayerDescriptor",
    "RunSummary",
    "compute_canvas_geometry",
    "layer_draw_position",
]
