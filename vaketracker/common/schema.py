"""Minimal strict schemas for YAML config validation."""

from __future__ import annotations

from vaketracker.common.errors import ConfigError


def _assert_mapping(obj, ctx: str) -> dict:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")
    return obj


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def validate_app_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    top_known = {"supabase", "geocoder", "heatmap", "capture"}
    _assert_mapping(cfg, "app config")
    _assert_required_keys(cfg, {"supabase", "geocoder", "heatmap"}, "app config")
    _assert_no_unknown_keys(cfg, top_known, "app config", allow_unknown)

    supabase = _assert_mapping(cfg["supabase"], "supabase")
    _assert_required_keys(supabase, {"url", "api_key_env"}, "supabase")
    _assert_no_unknown_keys(supabase, {"url", "api_key_env", "access_token_env", "tables"}, "supabase", allow_unknown)
    if "tables" in supabase:
        _assert_mapping(supabase["tables"], "supabase.tables")

    geocoder = _assert_mapping(cfg["geocoder"], "geocoder")
    _assert_required_keys(geocoder, {"enabled"}, "geocoder")
    _assert_no_unknown_keys(
        geocoder, {"enabled", "endpoint", "api_key_env", "timeout_seconds"}, "geocoder", allow_unknown
    )
    if geocoder["enabled"]:
        _assert_required_keys(geocoder, {"endpoint", "api_key_env"}, "geocoder")

    heatmap = _assert_mapping(cfg["heatmap"], "heatmap")
    _assert_required_keys(heatmap, {"countries", "default_country"}, "heatmap")
    if not isinstance(heatmap["countries"], list) or not heatmap["countries"]:
        raise ConfigError("heatmap.countries must be a non-empty list")
    if heatmap["default_country"] not in heatmap["countries"]:
        raise ConfigError("heatmap.default_country must be one of heatmap.countries")

    capture = _assert_mapping(cfg.get("capture", {}), "capture")
    _assert_no_unknown_keys(capture, {"notes_max_length", "text_max_length"}, "capture", allow_unknown)
    for key in ("notes_max_length", "text_max_length"):
        if key in capture and (not isinstance(capture[key], int) or capture[key] <= 0):
            raise ConfigError(f"capture.{key} must be a positive integer")

    return cfg
