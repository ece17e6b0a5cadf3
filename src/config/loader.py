"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ──────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. config/config.yaml  : Static defaults checked into the repo
#   2. .env file           : Local developer overrides (not committed)
#   3. Environment vars    : Set at deploy time
#
# load_config() reads the YAML file first, then deep-merges the
# Settings-derived values on top:
#   base = {"providers": {"timeout": 10}}
#   overrides = {"providers": {"setlistfm_configured": True}}
#   result = {"providers": {"timeout": 10, "setlistfm_configured": True}}
#
# Tunables (search, cache, http, rate_limits) resolve per key:
#   Settings default < YAML value < Settings field set from the env
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path

import yaml

from src.config.settings import Settings

# (section, key) in config.yaml -> Settings field carrying the same value.
_TUNABLES: dict[tuple[str, str], str] = {
    ("search", "min_query_length"): "search_min_query_length",
    ("search", "local_query_length"): "search_local_query_length",
    ("search", "debounce_seconds"): "search_debounce_seconds",
    ("search", "relevance_threshold"): "search_relevance_threshold",
    ("search", "api_max_results"): "search_api_max_results",
    ("search", "suggestion_max_results"): "search_suggestion_max_results",
    ("cache", "search_ttl"): "search_cache_ttl",
    ("cache", "setlist_ttl"): "setlist_cache_ttl",
    ("cache", "max_size"): "cache_max_size",
    ("http", "timeout"): "http_timeout",
    ("rate_limits", "musicbrainz"): "musicbrainz_requests_per_second",
}


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Environment variables (via Settings) override YAML values where keys overlap.

    Args:
        path: Path to the YAML configuration file.
        settings: Pre-built settings; a fresh ``Settings()`` is read when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path) as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    settings = settings or Settings()
    env_overrides = {
        "app": {
            "host": settings.app_host,
            "port": settings.app_port,
            "env": settings.app_env,
        },
        "providers": {
            "setlistfm_configured": bool(settings.setlistfm_api_key),
            "musicbrainz_app_name": settings.musicbrainz_app_name,
            "musicbrainz_app_version": settings.musicbrainz_app_version,
            "musicbrainz_contact": settings.musicbrainz_contact,
            "available_platforms": settings.get_available_platforms(),
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(env_overrides, _resolve_tunables(yaml_config, settings))
    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def _resolve_tunables(yaml_config: dict, settings: Settings) -> dict:
    """Fill every tunable the YAML leaves out, and apply explicit env values.

    A Settings field counts as explicit when it appears in
    ``model_fields_set``, i.e. it came from the environment, ``.env`` or
    a constructor argument rather than the class default.
    """
    resolved: dict = {}
    for (section, key), field in _TUNABLES.items():
        from_yaml = yaml_config.get(section) or {}
        if key not in from_yaml or field in settings.model_fields_set:
            resolved.setdefault(section, {})[key] = getattr(settings, field)
    return resolved


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
