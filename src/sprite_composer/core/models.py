# ABOUTME: Pydantic models for sprite layers, characters, canvas geometry and run results
# ABOUTME: Shared by the extraction, compositing and persistence layers of both pipelines

from pathlib import Path
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

UNNAMED_CHARACTER = "no_name"


class LayerDescriptor(BaseModel):
    """One positioned image contributing to a character sprite.

    ``bottom`` and ``left`` are pixel offsets from the bottom-left corner of the
    character's own frame, as published by the wiki's absolute positioning.
    """

    model_config = ConfigDict(frozen=True)

    image_url: str = Field(..., description="Absolute, fetchable URL of the layer image")
    bottom: int = Field(default=0, ge=0, description="Distance from the frame's bottom edge in pixels")
    left: int = Field(default=0, description="Distance from the frame's left edge in pixels (may be negative)")
    width: int = Field(default=0, ge=0, description="Declared draw width in pixels")
    height: int = Field(default=0, ge=0, description="Declared draw height in pixels")

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def top(self) -> int:
        """Distance of the layer's upper edge from the frame's bottom edge."""
        return self.bottom + self.height

    @property
    def has_area(self) -> bool:
        return self.width > 0 and self.height > 0


class Character(BaseModel):
    """A character sprite: display name plus its layers in paint order."""

    name: str = Field(default=UNNAMED_CHARACTER, description="Display name, also used as output file stem")
    layers: list[LayerDescriptor] = Field(
        default_factory=list, description="Layers in source order; later layers are painted on top"
    )

    @field_validator("name", mode="before")
    @classmethod
    def _default_blank_name(cls, value: str | None) -> str:
        if value is None:
            return UNNAMED_CHARACTER
        value = str(value).strip()
        return value or UNNAMED_CHARACTER


class CanvasGeometry(BaseModel):
    """Extent of the composed canvas and the horizontal shift re-anchoring it at x=0."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)
    origin_left: int = Field(default=0, description="Smallest layer ``left``; subtracted from every layer's x")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_empty(self) -> bool:
        """Whether the canvas has no drawable area."""
        return self.width == 0 or self.height == 0


class DrawPosition(NamedTuple):
    """Top-left raster offset of a layer on the canvas."""

    x: int
    y: int


class CompositionResult(BaseModel):
    """Outcome of compositing one character."""

    character_name: str
    png_bytes: bytes = Field(..., repr=False)
    width: int
    height: int
    layers_drawn: int = 0
    layers_failed: int = 0
    layers_skipped: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def size_kb(self) -> float:
        return len(self.png_bytes) / 1024


class CharacterRecord(BaseModel):
    """Attribute-table metadata scraped from a character's detail page."""

    name: str
    url: str
    info: dict[str, str] = Field(default_factory=dict)


class CharacterFailure(BaseModel):
    name: str
    error: str
    error_type: str


class RunSummary(BaseModel):
    """Aggregated outcome of an image pipeline run."""

    characters_found: int = 0
    characters_composed: int = Field(default=0, description="Characters composed and written, one per listing entry")
    written: list[Path] = Field(default_factory=list, description="Distinct sprite files on disk")
    failures: list[CharacterFailure] = Field(default_factory=list)
    layers_drawn: int = 0
    layers_failed: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def characters_failed(self) -> int:
        return len(self.failures)
