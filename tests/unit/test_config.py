"""Unit tests for Settings helpers and the YAML config loader."""

from __future__ import annotations

from pathlib import Path

from src.config.loader import load_config
from tests.conftest import make_settings


class TestSettings:
    def test_defaults(self) -> None:
        settings = make_settings()

        assert settings.setlistfm_base_url == "https://api.setlist.fm/rest/1.0"
        assert settings.search_cache_ttl == 300
        assert settings.setlist_cache_ttl == 3600
        assert settings.search_min_query_length == 2

    def test_env_vars_override_defaults(self, monkeypatch) -> None:
        monkeypatch.setenv("SETLISTFM_API_KEY", "from-env")
        monkeypatch.setenv("SEARCH_CACHE_TTL", "60")

        settings = make_settings()

        assert settings.setlistfm_api_key == "from-env"
        assert settings.search_cache_ttl == 60

    def test_cors_origins(self) -> None:
        settings = make_settings(cors_origins=" https://a.example , ,https://b.example")
        assert settings.get_cors_origins() == ["https://a.example", "https://b.example"]

    def test_no_cors_origins(self) -> None:
        assert make_settings(cors_origins="").get_cors_origins() == []

    def test_spotify_always_available(self) -> None:
        assert make_settings().get_available_platforms() == ["spotify"]

    def test_apple_music_needs_full_credentials(self) -> None:
        partial = make_settings(apple_music_team_id="T", apple_music_key_id="K")
        full = make_settings(
            apple_music_team_id="T",
            apple_music_key_id="K",
            apple_music_private_key_path="/keys/AuthKey.p8",
        )

        assert partial.get_available_platforms() == ["spotify"]
        assert full.get_available_platforms() == ["spotify", "apple_music"]


class TestLoadConfig:
    def test_merges_yaml_with_settings(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "app:\n  name: concert-recap\n  port: 9000\n"
            "setlist:\n  average_show_count: 12\n"
        )

        config = load_config(
            str(config_file),
            settings=make_settings(app_port=8080, setlistfm_api_key="k", log_level="DEBUG"),
        )

        assert config["app"]["name"] == "concert-recap"
        assert config["app"]["port"] == 8080
        assert config["setlist"]["average_show_count"] == 12
        assert config["providers"]["setlistfm_configured"] is True
        assert config["logging"]["level"] == "DEBUG"

    def test_missing_file_uses_settings_only(self, tmp_path: Path) -> None:
        config = load_config(str(tmp_path / "absent.yaml"), settings=make_settings())

        assert config["providers"]["available_platforms"] == ["spotify"]
        assert "setlist" not in config

    def test_repository_config(self, project_root: Path) -> None:
        config = load_config(str(project_root / "config" / "config.yaml"), settings=make_settings())

        assert config["setlist"] == {"average_show_count": 20, "max_songs": 20}
        assert config["search"]["debounce_seconds"] == 0.3


class TestTunables:
    def test_yaml_overrides_settings_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "search:\n  debounce_seconds: 0.5\n"
            "cache:\n  search_ttl: 120\n"
            "rate_limits:\n  musicbrainz: 2\n"
        )

        config = load_config(str(config_file), settings=make_settings())

        assert config["search"]["debounce_seconds"] == 0.5
        assert config["cache"]["search_ttl"] == 120
        assert config["rate_limits"]["musicbrainz"] == 2

    def test_missing_keys_filled_from_settings(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("search:\n  debounce_seconds: 0.5\n")

        config = load_config(str(config_file), settings=make_settings())

        assert config["search"]["min_query_length"] == 2
        assert config["cache"] == {"search_ttl": 300, "setlist_ttl": 3600, "max_size": 1000}
        assert config["http"]["timeout"] == 10.0
        assert config["rate_limits"]["musicbrainz"] == 1.0

    def test_env_value_beats_yaml(self, tmp_path: Path, monkeypatch) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("cache:\n  search_ttl: 120\n  setlist_ttl: 600\n")
        monkeypatch.setenv("SEARCH_CACHE_TTL", "45")

        config = load_config(str(config_file), settings=make_settings())

        assert config["cache"]["search_ttl"] == 45
        assert config["cache"]["setlist_ttl"] == 600
