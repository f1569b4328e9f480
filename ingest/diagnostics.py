"""Parser options and per-file diagnostics collection."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import tzinfo
from typing import TYPE_CHECKING, List, Optional, Tuple

from contracts import ParseWarning, WarningKind
from exceptions import DateParseError, InvalidConfigError, NumericCoercionError
from ingest.coercion import parse_number, parse_timestamp, resolve_timezone
from ingest.reader import DEFAULT_ENCODING

if TYPE_CHECKING:
    from configs.settings import AppConfig

DEFAULT_HEADER_SCAN_ROWS = 15


@dataclass(frozen=True)
class ParserOptions:
    """Knobs shared by the vendor parsers.

    An unknown ``timezone`` raises InvalidConfigError at construction.
    ``strict`` turns the first coercion problem into an exception instead
    of a warning; the default keeps the permissive behaviour.
    """

    header_scan_rows: int = DEFAULT_HEADER_SCAN_ROWS
    encoding: str = DEFAULT_ENCODING
    timezone: str = "UTC"
    dayfirst: bool = False
    strict: bool = False

    def __post_init__(self):
        try:
            resolve_timezone(self.timezone)
        except ValueError as e:
            raise InvalidConfigError(str(e)) from e

    @classmethod
    def from_config(cls, config: "AppConfig") -> "ParserOptions":
        return cls(
            header_scan_rows=config.ingest.header_scan_rows,
            encoding=config.ingest.encoding,
            timezone=config.dates.timezone,
            dayfirst=config.dates.dayfirst,
            strict=config.ingest.strict,
        )

    def tz(self) -> tzinfo:
        return resolve_timezone(self.timezone)


@dataclass
class ParseDiagnostics:
    """Collects warnings for one parse call."""

    options: ParserOptions
    warnings: List[ParseWarning] = field(default_factory=list)
    _tz: Optional[tzinfo] = None

    def warn(self, row: int, field_name: str, kind: WarningKind, value: str, message: str) -> None:
        self.warnings.append(ParseWarning(row=row, field=field_name, kind=kind, value=value, message=message))

    def number(self, value: str, row: int, field_name: str) -> Optional[float]:
        """Coerce a numeric cell, recording a warning when it is unusable."""
        number = parse_number(value)
        if number is None and value.strip():
            message = f"Row {row}: {field_name} value {value!r} is not numeric"
            if self.options.strict:
                raise NumericCoercionError(message, value=value, row=row)
            self.warn(row, field_name, WarningKind.UNPARSEABLE_NUMBER, value, message)
        return number

    def timestamp(self, date_text: str, row: int) -> Optional[int]:
        """Parse a row date, returning None (with a warning) when it fails."""
        if self._tz is None:
            self._tz = self.options.tz()
        try:
            return parse_timestamp(date_text, self._tz, self.options.dayfirst)
        except DateParseError as e:
            e.row = row
            if self.options.strict:
                raise
            self.warn(row, "Date", WarningKind.UNPARSEABLE_DATE, date_text, f"Row {row}: {e}")
            return None

    def missing_date(self, row: int) -> None:
        message = f"Row {row}: no Date value"
        if self.options.strict:
            raise DateParseError(message, value="", row=row)
        self.warn(row, "Date", WarningKind.MISSING_DATE, "", message)

    def frozen(self) -> Tuple[ParseWarning, ...]:
        return tuple(self.warnings)


__all__ = ["DEFAULT_HEADER_SCAN_ROWS", "ParserOptions", "ParseDiagnostics"]
