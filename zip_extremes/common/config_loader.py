"""Settings loading and validation."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from zip_extremes.common.constants import DEFAULT_SETTINGS, SETTINGS_FILENAME
from zip_extremes.common.errors import ConfigError
from zip_extremes.common.fs import read_yaml
from zip_extremes.common.schema import validate_settings


@dataclass(frozen=True)
class ReportLayout:
    region_width: int
    column_width: int
    code_width: int
    separator_width: int


@dataclass(frozen=True)
class Settings:
    encoding: str
    log_level: str
    report: ReportLayout


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


def _load_layer(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        payload = read_yaml(path)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ConfigError(f"Settings file must contain a mapping: {path}")
    return payload


def load_settings(
    config_dir: Path,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
) -> Settings:
    merged = _deep_merge(copy.deepcopy(DEFAULT_SETTINGS), _load_layer(config_dir / SETTINGS_FILENAME))
    if overlay_config_dir is not None:
        merged = _deep_merge(merged, _load_layer(overlay_config_dir / SETTINGS_FILENAME))

    cfg = validate_settings(merged, allow_unknown=allow_unknown)
    report = cfg["report"]
    return Settings(
        encoding=cfg["reader"]["encoding"],
        log_level=cfg["logging"]["level"].upper(),
        report=ReportLayout(
            region_width=report["region_width"],
            column_width=report["column_width"],
            code_width=report["code_width"],
            separator_width=report["separator_width"],
        ),
    )
