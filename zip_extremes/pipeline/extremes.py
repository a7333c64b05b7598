"""Single-pass per-region extremes aggregation.

Ties on the exact coordinate value go to the smaller code, so the result is
the same for every ordering of the input records.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from zip_extremes.common.models import Empty, Extreme, RegionExtremes, Seeded, ZipRecord


def challenge(current: Extreme, code: int, value: float, *, prefer_lower: bool) -> Extreme:
    """Return the extreme that survives a candidate (code, value)."""
    if isinstance(current, Empty):
        return Seeded(code=code, value=value)

    if value == current.value:
        if code < current.code:
            return Seeded(code=code, value=value)
        return current

    better = value < current.value if prefer_lower else value > current.value
    if better:
        return Seeded(code=code, value=value)
    return current


def fold_record(extremes: RegionExtremes, record: ZipRecord) -> RegionExtremes:
    return replace(
        extremes,
        easternmost=challenge(extremes.easternmost, record.code, record.longitude, prefer_lower=True),
        westernmost=challenge(extremes.westernmost, record.code, record.longitude, prefer_lower=False),
        northernmost=challenge(extremes.northernmost, record.code, record.latitude, prefer_lower=False),
        southernmost=challenge(extremes.southernmost, record.code, record.latitude, prefer_lower=True),
    )


def aggregate_extremes(records: Iterable[ZipRecord]) -> dict[str, RegionExtremes]:
    by_region: dict[str, RegionExtremes] = {}
    for record in records:
        current = by_region.get(record.region)
        if current is None:
            current = RegionExtremes()
        by_region[record.region] = fold_record(current, record)

    return {region: by_region[region] for region in sorted(by_region)}
