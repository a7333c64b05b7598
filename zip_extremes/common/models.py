"""Data models shared by the reader and the aggregator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class ZipRecord:
    code: int
    place: str
    region: str
    subregion: str
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Empty:
    """An extreme that no record has touched yet."""


@dataclass(frozen=True)
class Seeded:
    code: int
    value: float


Extreme = Union[Empty, Seeded]

EMPTY = Empty()


@dataclass(frozen=True)
class RegionExtremes:
    """Running extremes for one region.

    easternmost tracks the minimum longitude and westernmost the maximum,
    following the sign convention of the source data. northernmost and
    southernmost track the maximum and minimum latitude.
    """

    easternmost: Extreme = field(default=EMPTY)
    westernmost: Extreme = field(default=EMPTY)
    northernmost: Extreme = field(default=EMPTY)
    southernmost: Extreme = field(default=EMPTY)

    def codes(self) -> tuple[int | None, int | None, int | None, int | None]:
        return (
            _code_of(self.easternmost),
            _code_of(self.westernmost),
            _code_of(self.northernmost),
            _code_of(self.southernmost),
        )


def _code_of(extreme: Extreme) -> int | None:
    if isinstance(extreme, Seeded):
        return extreme.code
    return None
