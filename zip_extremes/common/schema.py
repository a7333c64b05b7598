"""Minimal strict schema for YAML settings validation."""

from __future__ import annotations

from zip_extremes.common.constants import LOG_LEVELS
from zip_extremes.common.errors import ConfigError


def _assert_mapping(obj, ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")


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


def _assert_positive_int(value, ctx: str) -> None:
    # bool is an int subclass.
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{ctx} must be a positive integer, got {value!r}")


def validate_settings(cfg: dict, *, allow_unknown: bool = False) -> dict:
    _assert_mapping(cfg, "settings")
    top_known = {"reader", "logging", "report"}
    _assert_required_keys(cfg, top_known, "settings")
    _assert_no_unknown_keys(cfg, top_known, "settings", allow_unknown)

    reader = cfg["reader"]
    _assert_mapping(reader, "reader")
    _assert_required_keys(reader, {"encoding"}, "reader")
    _assert_no_unknown_keys(reader, {"encoding"}, "reader", allow_unknown)
    if not isinstance(reader["encoding"], str) or not reader["encoding"].strip():
        raise ConfigError("reader.encoding must be a non-empty string")

    logging_cfg = cfg["logging"]
    _assert_mapping(logging_cfg, "logging")
    _assert_required_keys(logging_cfg, {"level"}, "logging")
    _assert_no_unknown_keys(logging_cfg, {"level"}, "logging", allow_unknown)
    level = logging_cfg["level"]
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        raise ConfigError(f"logging.level must be one of {', '.join(LOG_LEVELS)}")

    report = cfg["report"]
    report_keys = {"region_width", "column_width", "code_width", "separator_width"}
    _assert_mapping(report, "report")
    _assert_required_keys(report, report_keys, "report")
    _assert_no_unknown_keys(report, report_keys, "report", allow_unknown)
    for key in sorted(report_keys):
        _assert_positive_int(report[key], f"report.{key}")
    if report["code_width"] > report["column_width"]:
        raise ConfigError("report.code_width must not exceed report.column_width")

    return cfg
