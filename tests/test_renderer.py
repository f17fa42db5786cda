"""Tests for the declarative wallpaper renderer."""

import pytest

from gemini_wallpaper.core.config import WallpaperConfig, load_config
from gemini_wallpaper.core.state import StateSnapshot
from gemini_wallpaper.display.renderer import (
    DEBUG_PREFIX,
    MONOCHROME_FILTER,
    build_filter_string,
    clamp_blur,
    render,
)


class TestClampBlur:

    @pytest.mark.parametrize("value, expected", [
        (-5, 0),
        (15, 10),
        (7, 7),
        (0, 0),
        (10, 10),
    ])
    def test_integer_range(self, value, expected):
        assert clamp_blur(value) == expected

    @pytest.mark.parametrize("value, expected", [
        ("5px", 5),
        ("  3", 3),
        ("abc", 0),
        ("", 0),
        (None, 0),
        (3.9, 3),
        (float("inf"), 0),
        (float("-inf"), 0),
        (float("nan"), 0),
        ("40", 10),
    ])
    def test_lenient_parsing(self, value, expected):
        assert clamp_blur(value) == expected


class TestFilterString:

    def test_monochrome_without_blur(self):
        assert build_filter_string(color=False, blur=0) == "grayscale(100%) brightness(0.6) contrast(1.1)"

    def test_color_with_blur(self):
        assert build_filter_string(color=True, blur=3) == "brightness(0.7) blur(3px)"

    def test_blur_is_capped(self):
        assert build_filter_string(color=False, blur=25) == (
            "grayscale(100%) brightness(0.6) contrast(1.1) blur(10px)"
        )

    def test_negative_blur_is_dropped(self):
        assert build_filter_string(color=True, blur=-4) == "brightness(0.7)"

    def test_non_finite_blur_is_dropped(self):
        assert build_filter_string(color=False, blur=float("inf")) == MONOCHROME_FILTER


class TestRender:

    def test_empty_state_renders_bare_wrapper(self):
        tree = render(StateSnapshot(), WallpaperConfig(opacity=0.3))

        assert tree.tag == "div"
        assert tree.class_name == "gemini-wallpaper-wrapper"
        assert tree.style == {"opacity": "0.3"}
        assert tree.children == []

    def test_image_element(self):
        state = StateSnapshot(image_url="data:image/png;base64,AAA=")
        tree = render(state, WallpaperConfig(color=True, blur=2))

        img = tree.find("img")
        assert img is not None
        assert img.attrs["src"] == "data:image/png;base64,AAA="
        assert img.class_name == "gemini-wallpaper-image fade-in"
        assert img.style["filter"] == "brightness(0.7) blur(2px)"

    def test_debug_overlay(self):
        state = StateSnapshot(debug_text="A noir wallpaper")
        tree = render(state, WallpaperConfig())

        assert len(tree.children) == 1
        overlay = tree.children[0]
        assert overlay.text == DEBUG_PREFIX + "A noir wallpaper"
        assert overlay.style["color"] == "lime"
        assert tree.find("img") is None

    def test_debug_overlay_can_be_hidden(self):
        state = StateSnapshot(image_url="data:image/png;base64,AAA=", debug_text="prompt")
        tree = render(state, WallpaperConfig(show_prompt=False))

        assert [child.tag for child in tree.children] == ["img"]


class TestToHtml:

    def test_markup_and_escaping(self):
        state = StateSnapshot(
            image_url="data:image/png;base64,AAA=",
            debug_text="<b>PSG</b> & friends",
        )
        markup = render(state, WallpaperConfig()).to_html()

        assert markup.startswith('<div class="gemini-wallpaper-wrapper" style="opacity: 0.5">')
        assert '<img src="data:image/png;base64,AAA="' in markup
        assert "</img>" not in markup
        assert "&lt;b&gt;PSG&lt;/b&gt; &amp; friends" in markup
        assert markup.endswith("</div></div>")


def test_infinite_blur_from_json_config_renders(tmp_path, monkeypatch):
    path = tmp_path / "wallpaper.json"
    path.write_text('{"apiKey": "k", "blur": Infinity}')
    monkeypatch.chdir(tmp_path)

    config = load_config(str(path))
    tree = render(StateSnapshot(image_url="data:image/png;base64,AAA="), config)

    assert tree.find("img").style["filter"] == MONOCHROME_FILTER
