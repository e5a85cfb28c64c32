# ABOUTME: Composites a character's layers onto one transparent RGBA canvas and encodes it as PNG
# ABOUTME: Layer loads may run concurrently but drawing always follows source (paint) order

import asyncio
from collections.abc import Sequence
from io import BytesIO

from PIL import Image

from sprite_composer.config import get_config
from sprite_composer.core.errors import CompositionError
from sprite_composer.core.geometry import compute_canvas_geometry, layer_draw_position
from sprite_composer.core.models import CanvasGeometry, Character, CompositionResult, LayerDescriptor
from sprite_composer.extraction.base import ImageLoader
from sprite_composer.utils.logging import get_logger

TRANSPARENT = (0, 0, 0, 0)


def create_canvas(geometry: CanvasGeometry) -> Image.Image:
    return Image.new("RGBA", (geometry.width, geometry.height), TRANSPARENT)


def draw_layer(canvas: Image.Image, image: Image.Image, layer: LayerDescriptor, geometry: CanvasGeometry) -> None:
    """Alpha-composite ``image`` over ``canvas`` at the layer's position.

    The declared layer size wins over the image's intrinsic size.
    """
    x, y = layer_draw_position(layer, geometry)

    if image.mode != "RGBA":
        image = image.convert("RGBA")
    if image.size != (layer.width, layer.height):
        image = image.resize((layer.width, layer.height), Image.Resampling.BICUBIC)

    canvas.alpha_composite(image, dest=(x, y))


def encode_png(canvas: Image.Image) -> bytes:
    buffer = BytesIO()
    canvas.save(buffer, format="PNG")
    return buffer.getvalue()


class SpriteCompositor:
    """Render characters into PNG bytes using an injected image loader."""

    def __init__(self, loader: ImageLoader, max_canvas_dimension: int | None = None):
        self.loader = loader
        self.max_canvas_dimension = (
            get_config().max_canvas_dimension if max_canvas_dimension is None else max_canvas_dimension
        )
        self.logger = get_logger(__name__)

    async def composite(self, character: Character) -> CompositionResult:
        """Compose all layers of ``character`` into one PNG.

        A layer whose image fails to load or draw is logged and left out; the rest
        of the character is still drawn.

        Raises:
            CompositionError: If the character has no layers, the canvas has no area or
                exceeds the size limit, or the canvas cannot be allocated or encoded
        """
        logger = self.logger.bind(character=character.name)

        if not character.layers:
            raise CompositionError(f"Character '{character.name}' has no layers")

        geometry = compute_canvas_geometry(character.layers)
        if geometry.is_empty:
            raise CompositionError(
                f"Character '{character.name}' has a zero-area canvas ({geometry.width}x{geometry.height})"
            )
        if max(geometry.width, geometry.height) > self.max_canvas_dimension:
            raise CompositionError(
                f"Character '{character.name}' canvas {geometry.width}x{geometry.height} exceeds the "
                f"{self.max_canvas_dimension}px limit"
            )

        logger.debug(
            "Computed canvas geometry",
            width=geometry.width,
            height=geometry.height,
            origin_left=geometry.origin_left,
            layer_count=len(character.layers),
        )

        images = await self._load_images(character.layers, character.name)

        try:
            canvas = create_canvas(geometry)
        except Exception as e:
            raise CompositionError(f"Cannot allocate canvas for '{character.name}': {e!r}") from e

        drawn = failed = skipped = 0
        for index, (layer, image) in enumerate(zip(character.layers, images, strict=True)):
            if not layer.has_area:
                skipped += 1
                continue
            if image is None:
                failed += 1
                continue
            try:
                draw_layer(canvas, image, layer, geometry)
            except Exception as e:
                logger.error(
                    "Failed to draw layer image",
                    layer_index=index,
                    url=layer.image_url,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                failed += 1
                continue
            drawn += 1

        try:
            png_bytes = encode_png(canvas)
        except Exception as e:
            raise CompositionError(f"Cannot encode sprite for '{character.name}': {e!r}") from e

        result = CompositionResult(
            character_name=character.name,
            png_bytes=png_bytes,
            width=geometry.width,
            height=geometry.height,
            layers_drawn=drawn,
            layers_failed=failed,
            layers_skipped=skipped,
        )

        logger.info(
            "Composed character sprite",
            width=result.width,
            height=result.height,
            layers_drawn=drawn,
            layers_failed=failed,
            layers_skipped=skipped,
            size_kb=round(result.size_kb, 1),
        )
        return result

    async def _load_images(self, layers: Sequence[LayerDescriptor], character_name: str) -> list[Image.Image | None]:
        """Load every drawable layer concurrently; failures and zero-area layers map to None."""

        async def load(index: int, layer: LayerDescriptor) -> Image.Image | None:
            if not layer.has_area:
                self.logger.debug(
                    "Skipping zero-area layer", character=character_name, layer_index=index, url=layer.image_url
                )
                return None
            try:
                return await self.loader.load(layer.image_url)
            except Exception as e:
                self.logger.error(
                    "Failed to load layer image",
                    character=character_name,
                    layer_index=index,
                    url=layer.image_url,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return None

        return list(await asyncio.gather(*(load(i, layer) for i, layer in enumerate(layers))))
