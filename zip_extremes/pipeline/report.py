"""Console table rendering and JSON summary export."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from zip_extremes.common.config_loader import ReportLayout
from zip_extremes.common.constants import DEFAULT_SETTINGS, EXTREME_COLUMNS
from zip_extremes.common.fs import write_json
from zip_extremes.common.models import RegionExtremes, Seeded

DEFAULT_LAYOUT = ReportLayout(**DEFAULT_SETTINGS["report"])

_AXIS_BY_EXTREME = {
    "easternmost": "longitude",
    "westernmost": "longitude",
    "northernmost": "latitude",
    "southernmost": "latitude",
}


def _format_code(code: int | None, layout: ReportLayout) -> str:
    if code is None:
        return "-" * layout.code_width
    return f"{code:0{layout.code_width}d}"


def render_extremes_table(
    extremes_by_region: Mapping[str, RegionExtremes],
    layout: ReportLayout = DEFAULT_LAYOUT,
) -> list[str]:
    header = "State".ljust(layout.region_width) + "".join(
        label.ljust(layout.column_width) for _, label in EXTREME_COLUMNS
    )
    lines = [header, "-" * layout.separator_width]

    for region in sorted(extremes_by_region):
        codes = [_format_code(code, layout) for code in extremes_by_region[region].codes()]
        padded = "".join(code.ljust(layout.column_width) for code in codes[:-1])
        lines.append(region.ljust(layout.region_width) + padded + codes[-1])
    return lines


def _extreme_payload(name: str, extreme) -> dict | None:
    if not isinstance(extreme, Seeded):
        return None
    return {"code": extreme.code, _AXIS_BY_EXTREME[name]: extreme.value}


def build_summary(
    extremes_by_region: Mapping[str, RegionExtremes],
    *,
    run_id: str,
    source: str,
    records_read: int,
    lines_skipped: int,
) -> dict:
    regions = {}
    for region in sorted(extremes_by_region):
        extremes = extremes_by_region[region]
        regions[region] = {name: _extreme_payload(name, getattr(extremes, name)) for name, _ in EXTREME_COLUMNS}

    return {
        "run_id": run_id,
        "source": source,
        "records_read": records_read,
        "lines_skipped": lines_skipped,
        "region_count": len(regions),
        "regions": regions,
    }


def write_run_summary(path: Path, summary: dict) -> Path:
    write_json(path, summary)
    return path
