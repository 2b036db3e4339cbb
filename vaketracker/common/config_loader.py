"""Configuration loading and validation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from vaketracker.common.errors import ConfigError
from vaketracker.common.fs import read_yaml
from vaketracker.common.schema import validate_app_config

CONFIG_FILENAME = "vaketracker.yml"


@dataclass(frozen=True)
class ConfigBundle:
    app: dict

    @property
    def countries(self) -> list[str]:
        return list(self.app["heatmap"]["countries"])

    @property
    def default_country(self) -> str:
        return self.app["heatmap"]["default_country"]


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> dict:
    if not path.exists():
        raise ConfigError(f"Missing config file: {path}")
    base = read_yaml(path)
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    if overlay is None:
        return base
    if not isinstance(overlay, dict):
        raise ConfigError(f"Overlay config must be a mapping: {overlay_path}")
    return _deep_merge(base, overlay)


def load_config(
    config_dir: Path,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
) -> ConfigBundle:
    overlay_path = overlay_config_dir / CONFIG_FILENAME if overlay_config_dir is not None else None
    cfg = _load_yaml_with_overlay(config_dir / CONFIG_FILENAME, overlay_path)
    return ConfigBundle(app=validate_app_config(cfg, allow_unknown=allow_unknown))


def read_secret(env_name: str | None) -> str:
    if not env_name:
        raise ConfigError("No environment variable configured for secret")
    value = os.environ.get(env_name, "").strip()
    if not value:
        raise ConfigError(f"Environment variable {env_name} is not set")
    return value
