"""Sequential, resettable reader of ZIP code records from a CSV source.

The source must start with a header line, which is skipped by position and
never validated. Each following line is expected to carry six fields:

    code,place,region,subregion,latitude,longitude

Splitting treats every double quote as a toggle for the "inside quotes"
state and drops it from the field. Commas inside quotes are kept. An
escaped quote (``""``) is two toggles, so it is not restored to a literal
quote.

Lines are read as bytes and decoded one at a time, so a line that is not
valid in the configured encoding is rejected on its own.
"""

from __future__ import annotations

import codecs
import logging
import re
from pathlib import Path
from types import TracebackType
from typing import IO, Iterator

from zip_extremes.common.constants import FIELD_DELIMITER, QUOTE_CHAR, RECORD_FIELD_COUNT, TRIM_CHARS
from zip_extremes.common.errors import RecordParseError, SourceOpenError, SourceReadError
from zip_extremes.common.logging import log_event
from zip_extremes.common.models import ZipRecord

_CODE_RE = re.compile(r"^\d+$", re.ASCII)
_FLOAT_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$", re.ASCII)


def split_line(line: str) -> list[str]:
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == QUOTE_CHAR:
            in_quotes = not in_quotes
        elif char == FIELD_DELIMITER and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)

    fields.append("".join(current))
    return [value.strip(TRIM_CHARS) for value in fields]


def _parse_code(value: str) -> int:
    if not _CODE_RE.match(value):
        raise RecordParseError(f"code is not a non-negative integer: {value!r}")
    return int(value)


def _parse_coordinate(value: str, name: str) -> float:
    if not _FLOAT_RE.match(value):
        raise RecordParseError(f"{name} is not a decimal number: {value!r}")
    return float(value)


def parse_line(line: str) -> ZipRecord:
    """Parse one data line into a record, or raise RecordParseError."""
    fields = split_line(line)
    if len(fields) != RECORD_FIELD_COUNT:
        raise RecordParseError(f"expected {RECORD_FIELD_COUNT} fields, got {len(fields)}")

    code_raw, place, region, subregion, lat_raw, lon_raw = fields
    return ZipRecord(
        code=_parse_code(code_raw),
        place=place,
        region=region,
        subregion=subregion,
        latitude=_parse_coordinate(lat_raw, "latitude"),
        longitude=_parse_coordinate(lon_raw, "longitude"),
    )


class RecordReader:
    def __init__(
        self,
        path: Path | str | None = None,
        *,
        encoding: str = "utf-8",
        logger: logging.Logger | None = None,
    ) -> None:
        self.encoding = encoding
        self.logger = logger or logging.getLogger(__name__)
        self._handle: IO[bytes] | None = None
        self._source_name = ""
        self._record_count = 0
        self._skipped_count = 0
        self._line_number = 0
        if path is not None:
            self.open(path)

    def __enter__(self) -> "RecordReader":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __iter__(self) -> Iterator[ZipRecord]:
        return iter(self.read_all())

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    @property
    def record_count(self) -> int:
        return self._record_count

    @property
    def skipped_count(self) -> int:
        return self._skipped_count

    @property
    def source_name(self) -> str:
        return self._source_name

    def open(self, path: Path | str) -> None:
        self.close()
        source = Path(path)
        try:
            codecs.lookup(self.encoding)
        except LookupError as exc:
            raise SourceOpenError(f"Unknown encoding {self.encoding!r} for source: {source}") from exc
        try:
            handle = source.open("rb")
        except OSError as exc:
            raise SourceOpenError(f"Cannot open source: {source}") from exc

        # The header is skipped by position, so it is never decoded.
        try:
            header = handle.readline()
        except OSError as exc:
            handle.close()
            raise SourceOpenError(f"Cannot read header from source: {source}") from exc
        if not header:
            handle.close()
            raise SourceOpenError(f"Source is empty, no header line: {source}")

        self._handle = handle
        self._source_name = str(path)
        self._record_count = 0
        self._skipped_count = 0
        self._line_number = 1

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
        self._source_name = ""
        self._record_count = 0
        self._line_number = 0

    def reset(self) -> None:
        if self._handle is None:
            raise SourceOpenError("No source is open")
        try:
            self._handle.seek(0)
            header = self._handle.readline()
        except OSError as exc:
            raise SourceReadError(f"Cannot re-read header from source: {self._source_name}") from exc
        if not header:
            raise SourceReadError(f"Source lost its header line: {self._source_name}")
        self._record_count = 0
        self._line_number = 1

    def _readline(self) -> bytes:
        try:
            return self._handle.readline()
        except OSError as exc:
            raise SourceReadError(f"Cannot read {self._source_name} after line {self._line_number}") from exc

    def read_next(self) -> ZipRecord | None:
        """Return the next record, or None at end of input.

        A malformed or undecodable line is consumed before RecordParseError
        is raised, so calling again continues with the line after it.
        """
        if self._handle is None:
            raise SourceOpenError("No source is open")

        while True:
            raw = self._readline()
            if not raw:
                return None
            self._line_number += 1
            try:
                line = raw.decode(self.encoding)
            except UnicodeDecodeError:
                raise RecordParseError(f"line is not valid {self.encoding}", line_number=self._line_number) from None
            if not line.strip(TRIM_CHARS):
                continue
            try:
                record = parse_line(line)
            except RecordParseError as exc:
                raise RecordParseError(exc.reason, line_number=self._line_number) from None
            self._record_count += 1
            return record

    def read_all(self) -> list[ZipRecord]:
        self.reset()
        records: list[ZipRecord] = []
        skipped = 0
        try:
            while True:
                try:
                    record = self.read_next()
                except RecordParseError as exc:
                    skipped += 1
                    log_event(
                        self.logger,
                        f"skipped malformed line: {exc.reason}",
                        level=logging.WARNING,
                        stage="read",
                        source=self._source_name,
                        event="LINE_SKIPPED",
                        status="warn",
                        line_number=exc.line_number,
                        error_code=exc.error_code,
                    )
                    continue
                if record is None:
                    break
                records.append(record)
        finally:
            self._skipped_count = skipped
            self.reset()

        log_event(
            self.logger,
            "source read complete",
            level=logging.DEBUG,
            stage="read",
            source=self._source_name,
            event="READ_END",
            status="ok",
            rows_out=len(records),
        )
        return records
