"""Tests for widget configuration loading and validation."""

import json

import pytest
from pydantic import ValidationError

from gemini_wallpaper.core.config import (
    DEFAULT_UPDATE_INTERVAL_MS,
    WallpaperConfig,
    load_config,
)
from gemini_wallpaper.llm.provider_config import load_key


class TestWallpaperConfig:

    def test_defaults(self):
        config = WallpaperConfig()
        assert config.api_key == ""
        assert config.model == "gemini-2.5-flash-image"
        assert config.update_interval == DEFAULT_UPDATE_INTERVAL_MS
        assert config.update_interval_seconds == 4 * 60 * 60
        assert config.opacity == 0.5
        assert config.color is False
        assert config.blur == 0
        assert config.aspect_ratio == "16:9"
        assert config.orientation == "landscape"
        assert config.leagues == ()
        assert config.teams == ()
        assert config.prompt_injection == ""
        assert config.show_prompt is True

    def test_host_camel_case_keys(self):
        config = WallpaperConfig.model_validate({
            "apiKey": "k",
            "updateInterval": 60000,
            "aspectRatio": "4:3",
            "promptInjection": "snow",
            "teams": ["PSG"],
        })
        assert config.api_key == "k"
        assert config.update_interval_seconds == 60
        assert config.aspect_ratio == "4:3"
        assert config.prompt_injection == "snow"
        assert config.teams == ("PSG",)

    def test_is_immutable(self):
        config = WallpaperConfig()
        with pytest.raises(ValidationError):
            config.opacity = 0.9

    @pytest.mark.parametrize("field, value", [
        ("orientation", "diagonal"),
        ("opacity", 1.5),
        ("opacity", -0.1),
        ("updateInterval", 0),
    ])
    def test_rejects_invalid_values(self, field, value):
        with pytest.raises(ValueError):
            WallpaperConfig.model_validate({field: value})

    def test_blur_kept_as_supplied(self):
        assert WallpaperConfig(blur="5px").blur == "5px"
        assert WallpaperConfig(blur=15).blur == 15


class TestLoadConfig:

    def test_overrides_without_file(self, clean_env):
        config = load_config(api_key="abc", color=True)
        assert config.api_key == "abc"
        assert config.color is True

    def test_file_then_overrides(self, clean_env):
        path = clean_env / "wallpaper.json"
        path.write_text(json.dumps({"apiKey": "from-file", "leagues": ["NHL"], "blur": 5}))

        config = load_config(str(path), blur=2)

        assert config.api_key == "from-file"
        assert config.leagues == ("NHL",)
        assert config.blur == 2

    def test_path_from_environment(self, clean_env, monkeypatch):
        path = clean_env / "env.json"
        path.write_text(json.dumps({"opacity": 0.8}))
        monkeypatch.setenv("WALLPAPER_CONFIG", str(path))

        assert load_config().opacity == 0.8

    def test_non_object_file(self, clean_env):
        path = clean_env / "bad.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError):
            load_config(str(path))

    def test_key_from_environment(self, clean_env, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        assert load_config().api_key == "env-key"

    def test_key_from_key_file(self, clean_env):
        (clean_env / "config").mkdir()
        (clean_env / "config" / "gemini.key").write_text("file-key\n")
        assert load_config().api_key == "file-key"

    def test_missing_key_stays_empty(self, clean_env):
        assert load_config().api_key == ""


class TestLoadKey:

    def test_none_path(self):
        assert load_key(None) is None

    def test_empty_file(self, clean_env):
        (clean_env / "config").mkdir()
        (clean_env / "config" / "gemini.key").write_text("   ")
        assert load_key() is None
