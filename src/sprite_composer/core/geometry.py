# ABOUTME: Pure canvas-geometry and draw-position functions for layered sprites
# ABOUTME: Stage 1 sizes the canvas in the bottom-left frame, stage 2 flips each layer to raster coordinates

from collections.abc import Sequence

from sprite_composer.core.errors import GeometryError
from sprite_composer.core.models import CanvasGeometry, DrawPosition, LayerDescriptor


def compute_canvas_geometry(layers: Sequence[LayerDescriptor]) -> CanvasGeometry:
    """Compute the smallest canvas containing every layer.

    The wiki frame is anchored bottom-left, so the canvas height is the highest
    layer top measured from the frame's bottom edge; the frame's bottom edge
    itself is always part of the canvas. Horizontally the canvas spans from the
    leftmost layer edge to the rightmost one, and ``origin_left`` records the
    shift that puts the leftmost edge at x=0.

    Args:
        layers: Layer descriptors of a single character, in any order

    Returns:
        The canvas extent and horizontal origin

    Raises:
        GeometryError: If ``layers`` is empty
    """
    if not layers:
        raise GeometryError("Cannot compute canvas geometry without layers")

    min_left = min(layer.left for layer in layers)
    max_right = max(layer.right for layer in layers)
    max_bottom = max(layer.top for layer in layers)

    return CanvasGeometry(
        width=max(0, max_right - min_left),
        height=max(0, max_bottom),
        origin_left=min_left,
    )


def layer_draw_position(layer: LayerDescriptor, geometry: CanvasGeometry) -> DrawPosition:
    """Translate a layer's bottom-left frame offsets into a top-left raster position."""
    return DrawPosition(
        x=layer.left - geometry.origin_left,
        y=geometry.height - layer.bottom - layer.height,
    )
