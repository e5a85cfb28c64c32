# ABOUTME: Pure extraction of sprite layer descriptors from the character listing markup
# ABOUTME: Turns absolutely positioned <div><img></div> stacks into ordered LayerDescriptors

import re

from bs4 import BeautifulSoup, Tag

from sprite_composer.config import get_config
from sprite_composer.core.models import UNNAMED_CHARACTER, Character, LayerDescriptor
from sprite_composer.utils.logging import get_logger

logger = get_logger(__name__)

CHARACTER_SELECTOR = ".divsort"

ABSOLUTE_RE = re.compile(r"position\s*:\s*absolute", re.IGNORECASE)
# Lookbehind keeps margin-bottom / padding-left from matching
BOTTOM_RE = re.compile(r"(?<![\w-])bottom\s*:\s*(\d+)px", re.IGNORECASE)
LEFT_RE = re.compile(r"(?<![\w-])left\s*:\s*(-?\d+)px", re.IGNORECASE)
LEADING_INT_RE = re.compile(r"\s*(-?\d+)")


def parse_position(style: str | None) -> tuple[int, int]:
    """Read ``bottom`` and ``left`` pixel offsets from an inline style.

    Missing or malformed values fall back to 0. Only ``left`` may be negative.

    Returns:
        ``(bottom, left)``
    """
    style = style or ""
    bottom_match = BOTTOM_RE.search(style)
    left_match = LEFT_RE.search(style)
    return (
        int(bottom_match.group(1)) if bottom_match else 0,
        int(left_match.group(1)) if left_match else 0,
    )


def parse_dimension(value: str | list[str] | None) -> int:
    """Leading integer of a width/height attribute; missing, non-numeric or negative gives 0."""
    if isinstance(value, list):
        value = value[0] if value else None
    if not value:
        return 0
    match = LEADING_INT_RE.match(value)
    if not match:
        return 0
    return max(0, int(match.group(1)))


def resolve_image_url(src: str | None, image_host: str | None = None) -> str | None:
    """Make an ``<img src>`` absolute.

    ``//host/a.png`` gains ``https:``, ``/a.png`` is resolved against the image
    host and absolute URLs pass through unchanged.
    """
    if not src or not src.strip():
        return None
    src = src.strip()

    if src.startswith("//"):
        return "https:" + src
    if src.startswith("/"):
        host = (image_host or get_config().image_host).rstrip("/")
        return host + src
    return src


def is_absolutely_positioned(element: Tag) -> bool:
    return bool(ABSOLUTE_RE.search(element.get("style") or ""))


def extract_layers(fragment: Tag, image_host: str | None = None) -> list[LayerDescriptor]:
    """Extract the layers of one character container in document (paint) order.

    Positioned elements without a usable image are skipped silently.
    """
    layers: list[LayerDescriptor] = []

    for layer_el in fragment.find_all("div", style=True):
        if not is_absolutely_positioned(layer_el):
            continue

        img = layer_el.find("img")
        if img is None:
            continue

        image_url = resolve_image_url(img.get("src"), image_host)
        if image_url is None:
            continue

        bottom, left = parse_position(layer_el.get("style"))
        layers.append(
            LayerDescriptor(
                image_url=image_url,
                bottom=bottom,
                left=left,
                width=parse_dimension(img.get("width")),
                height=parse_dimension(img.get("height")),
            )
        )

    return layers


def extract_character_name(fragment: Tag) -> str:
    """Display name from the container's first titled link."""
    link = fragment.find("a", attrs={"title": True})
    if link is None:
        return UNNAMED_CHARACTER
    return str(link.get("title") or "").strip() or UNNAMED_CHARACTER


def extract_character(fragment: Tag, image_host: str | None = None) -> Character | None:
    """Build a Character from one container, or None when it carries no layers."""
    layers = extract_layers(fragment, image_host)
    name = extract_character_name(fragment)
    if not layers:
        logger.debug("Dropping character without layers", character=name)
        return None
    return Character(name=name, layers=layers)


def extract_characters(html: str | BeautifulSoup, image_host: str | None = None) -> list[Character]:
    """Extract every character with at least one layer from the listing page."""
    soup = html if isinstance(html, BeautifulSoup) else BeautifulSoup(html, "html.parser")

    characters: list[Character] = []
    containers = soup.select(CHARACTER_SELECTOR)
    for container in containers:
        character = extract_character(container, image_host)
        if character is not None:
            characters.append(character)

    logger.info(
        "Extracted characters from listing",
        containers=len(containers),
        characters=len(characters),
        layers=sum(len(c.layers) for c in characters),
    )
    return characters
