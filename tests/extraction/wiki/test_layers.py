# ABOUTME: Tests for layer descriptor extraction from the character listing markup
# ABOUTME: Pure parsing tests: positions, image URL resolution, dimensions and character assembly

import pytest
from bs4 import BeautifulSoup

from sprite_composer.core.models import UNNAMED_CHARACTER
from sprite_composer.extraction.wiki.layers import (
    extract_character,
    extract_characters,
    extract_layers,
    parse_dimension,
    parse_position,
    resolve_image_url,
)

IMAGE_HOST = "https://patchwiki.test"


def _fragment(html: str):
    return BeautifulSoup(f'<div class="divsort">{html}</div>', "html.parser").select_one(".divsort")


class TestParsePosition:
    """Inline style parsing never raises and defaults to the origin"""

    @pytest.mark.parametrize(
        "style,expected",
        [
            ("position: absolute; bottom: 12px; left: 34px;", (12, 34)),
            ("position:absolute;left:7px;bottom:3px", (3, 7)),
            ("position: absolute; left: -15px; bottom: 0px", (0, -15)),
            ("position: absolute; bottom: 5px", (5, 0)),
            ("position: absolute; left: 9px", (0, 9)),
            ("position: absolute;", (0, 0)),
            ("bottom: auto; left: 50%", (0, 0)),
            ("bottom: -4px; left: 2px", (0, 2)),
            ("margin-bottom: 8px; padding-left: 6px; bottom: 1px; left: 2px", (1, 2)),
            ("margin-bottom: 8px; padding-left: 6px", (0, 0)),
            ("", (0, 0)),
            (None, (0, 0)),
        ],
    )
    def test_parse_position(self, style, expected):
        assert parse_position(style) == expected


class TestResolveImageUrl:
    @pytest.mark.parametrize(
        "src,expected",
        [
            ("//patchwiki.biligame.com/images/a.png", "https://patchwiki.biligame.com/images/a.png"),
            ("/images/xytx/b.png", "https://patchwiki.test/images/xytx/b.png"),
            ("https://cdn.test/c.png", "https://cdn.test/c.png"),
            ("http://cdn.test/d.png", "http://cdn.test/d.png"),
            ("  //cdn.test/e.png ", "https://cdn.test/e.png"),
            ("", None),
            ("   ", None),
            (None, None),
        ],
    )
    def test_resolve(self, src, expected):
        assert resolve_image_url(src, IMAGE_HOST) == expected

    def test_root_relative_uses_configured_image_host(self):
        assert resolve_image_url("/x.png") == "https://patchwiki.biligame.com/x.png"


class TestParseDimension:
    @pytest.mark.parametrize(
        "value,expected",
        [("120", 120), ("64px", 64), (" 8 ", 8), ("12.5", 12), ("auto", 0), ("", 0), (None, 0), ("-3", 0)],
    )
    def test_parse_dimension(self, value, expected):
        assert parse_dimension(value) == expected


class TestExtractLayers:
    """Positioned elements become layers in document order"""

    def test_layers_in_source_order(self):
        fragment = _fragment(
            """
            <div style="position: absolute; bottom: 0px; left: 0px;"><img src="/body.png" width="100" height="200"></div>
            <div style="position: absolute; bottom: 150px; left: 20px;"><img src="//cdn.test/hair.png" width="60" height="50"></div>
            """
        )

        layers = extract_layers(fragment, IMAGE_HOST)

        assert [layer.image_url for layer in layers] == [
            "https://patchwiki.test/body.png",
            "https://cdn.test/hair.png",
        ]
        assert (layers[1].bottom, layers[1].left, layers[1].width, layers[1].height) == (150, 20, 60, 50)

    def test_skips_elements_without_usable_image(self):
        fragment = _fragment(
            """
            <div style="position: absolute; bottom: 0px; left: 0px;"><span>text only</span></div>
            <div style="position: absolute; bottom: 0px; left: 0px;"><img alt="no src"></div>
            <div style="position: absolute; bottom: 0px; left: 0px;"><img src=""></div>
            <div style="position: relative;"><img src="/not-a-layer.png"></div>
            <div><img src="/unstyled.png"></div>
            <div style="position: absolute; bottom: 1px; left: 1px;"><img src="/kept.png" width="2" height="2"></div>
            """
        )

        layers = extract_layers(fragment, IMAGE_HOST)

        assert [layer.image_url for layer in layers] == ["https://patchwiki.test/kept.png"]

    def test_missing_size_attributes_default_to_zero(self):
        fragment = _fragment('<div style="position: absolute;"><img src="/a.png"></div>')

        (layer,) = extract_layers(fragment, IMAGE_HOST)

        assert (layer.bottom, layer.left, layer.width, layer.height) == (0, 0, 0, 0)

    def test_uses_first_image_of_layer(self):
        fragment = _fragment(
            '<div style="position: absolute;"><img src="/first.png" width="1" height="1"><img src="/second.png"></div>'
        )

        assert [layer.image_url for layer in extract_layers(fragment, IMAGE_HOST)] == [
            "https://patchwiki.test/first.png"
        ]


class TestExtractCharacters:
    def test_name_from_first_titled_link(self):
        fragment = _fragment(
            """
            <a href="/xytx/Mira"><img src="/icon.png"></a>
            <a href="/xytx/Mira" title="  Mira  ">Mira</a>
            <div style="position: absolute;"><img src="/a.png" width="4" height="4"></div>
            """
        )

        character = extract_character(fragment, IMAGE_HOST)

        assert character is not None
        assert character.name == "Mira"

    @pytest.mark.parametrize("link", ["", "<a href='/x'>untitled</a>", "<a title='   '>blank</a>"])
    def test_missing_name_uses_sentinel(self, link):
        fragment = _fragment(f'{link}<div style="position: absolute;"><img src="/a.png"></div>')

        character = extract_character(fragment, IMAGE_HOST)

        assert character is not None
        assert character.name == UNNAMED_CHARACTER

    def test_character_without_layers_is_dropped(self):
        fragment = _fragment('<a title="Empty">Empty</a><div style="position: absolute;"></div>')

        assert extract_character(fragment, IMAGE_HOST) is None

    def test_extract_characters_from_listing(self):
        html = """
        <div class="divsort"><a title="One"></a>
          <div style="position: absolute; bottom: 2px; left: 3px;"><img src="/1.png" width="5" height="6"></div>
        </div>
        <div class="divsort"><a title="None at all"></a></div>
        <div class="divsort"><a title="Two"></a>
          <div style="position: absolute;"><img src="/2a.png" width="1" height="1"></div>
          <div style="position: absolute;"><img src="/2b.png" width="1" height="1"></div>
        </div>
        """

        characters = extract_characters(html, IMAGE_HOST)

        assert [c.name for c in characters] == ["One", "Two"]
        assert [len(c.layers) for c in characters] == [1, 2]
        assert characters[0].layers[0].bottom == 2
