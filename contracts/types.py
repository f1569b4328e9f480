"""Core data contracts for parsed swing and batted-ball records."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

FieldValue = Union[str, float, None]

TIMESTAMP_KEY = "timestamp"
DATE_STR_KEY = "dateStr"
SWING_COUNT_KEY = "swingCount"
FIELDS_KEY = "fields"


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"Expected {what} object, got {type(data).__name__}")
    return data


def _require_list(data: Any, what: str) -> List[Any]:
    if not isinstance(data, list):
        raise ValueError(f"Expected {what} list, got {type(data).__name__}")
    return data


class SourceType(str, Enum):
    """Vendor export a file came from."""

    BLAST = "blast"
    HITTRAX = "hittrax"


class FieldType(str, Enum):
    """Declared column type used while parsing."""

    TEXT = "text"
    NUMERIC = "numeric"


class ValueKind(Enum):
    """Tag of a stored record value."""

    TEXT = "text"
    NUMBER = "number"
    ABSENT = "absent"


class WarningKind(str, Enum):
    UNPARSEABLE_NUMBER = "unparseable_number"
    UNPARSEABLE_DATE = "unparseable_date"
    MISSING_DATE = "missing_date"


def value_kind(value: Any) -> ValueKind:
    """Classify a record value, rejecting anything outside the sealed set."""
    if value is None:
        return ValueKind.ABSENT
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, float):
        return ValueKind.NUMBER
    raise TypeError(f"Unsupported record value type: {type(value).__name__}")


def _normalize_value(value: Any) -> FieldValue:
    # ints from JSON round-trips become floats; bools are not numbers here
    if isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    value_kind(value)
    return value


@dataclass(frozen=True)
class FieldSpec:
    """Column name and declared type for one header cell."""

    name: str
    field_type: FieldType

    @classmethod
    def from_header(cls, header: str, field_type: FieldType, strip_parens: bool = False) -> "FieldSpec":
        name = header
        if strip_parens:
            name = name.replace("(", "").replace(")", "")
        return cls(name=name.strip(), field_type=field_type)


class Record(Mapping[str, FieldValue]):
    """Immutable ordered mapping of field name to text, number, or absent.

    Every record also carries an epoch-millisecond ``timestamp`` and the
    source ``date_str`` used for grouping and chart labels.
    """

    __slots__ = ("_fields", "_timestamp", "_date_str")

    def __init__(
        self,
        fields: Mapping[str, Any],
        timestamp: int,
        date_str: Optional[str],
    ):
        self._fields: Dict[str, FieldValue] = {
            str(name): _normalize_value(value) for name, value in fields.items()
        }
        self._timestamp = int(timestamp)
        self._date_str = date_str

    @property
    def timestamp(self) -> int:
        return self._timestamp

    @property
    def date_str(self) -> Optional[str]:
        return self._date_str

    def __getitem__(self, name: str) -> FieldValue:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, "_date_str"):
            raise AttributeError(f"{type(self).__name__} is immutable")
        object.__setattr__(self, name, value)

    def kind(self, name: str) -> ValueKind:
        """Value tag for ``name``; missing fields report ABSENT."""
        return value_kind(self._fields.get(name))

    def number(self, name: str) -> Optional[float]:
        """Return the numeric value of ``name`` or None when not a finite number."""
        value = self._fields.get(name)
        if isinstance(value, float) and not math.isnan(value):
            return value
        return None

    def _extra_items(self) -> Tuple[Tuple[str, Any], ...]:
        return ((TIMESTAMP_KEY, self._timestamp), (DATE_STR_KEY, self._date_str))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return (
            type(self) is type(other)
            and self._extra_items() == other._extra_items()
            and list(self._fields.items()) == list(other._fields.items())
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(date_str={self._date_str!r}, timestamp={self._timestamp}, fields={self._fields!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        Vendor columns live under their own key so a column named like one
        of the record attributes cannot collide with it.
        """
        result: Dict[str, Any] = {FIELDS_KEY: dict(self._fields)}
        result.update(self._extra_items())
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Record":
        data = _require_mapping(data, "record")
        return cls(
            _require_mapping(data[FIELDS_KEY], "record fields"),
            timestamp=data[TIMESTAMP_KEY],
            date_str=data.get(DATE_STR_KEY),
        )


class SessionRecord(Record):
    """One averaged record per session date, with the number of raw swings."""

    __slots__ = ("_swing_count",)

    def __init__(
        self,
        fields: Mapping[str, Any],
        timestamp: int,
        date_str: Optional[str],
        swing_count: int,
    ):
        object.__setattr__(self, "_swing_count", int(swing_count))
        super().__init__(fields, timestamp, date_str)

    @property
    def swing_count(self) -> int:
        return self._swing_count

    def _extra_items(self) -> Tuple[Tuple[str, Any], ...]:
        return super()._extra_items() + ((SWING_COUNT_KEY, self._swing_count),)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SessionRecord":
        data = _require_mapping(data, "session record")
        return cls(
            _require_mapping(data[FIELDS_KEY], "session fields"),
            timestamp=data[TIMESTAMP_KEY],
            date_str=data.get(DATE_STR_KEY),
            swing_count=data[SWING_COUNT_KEY],
        )


@dataclass(frozen=True)
class ParseWarning:
    """Non-fatal problem found while building records from a file."""

    row: int  # 1-based row number in the raw grid
    field: str
    kind: WarningKind
    value: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "row": self.row,
            "field": self.field,
            "kind": self.kind.value,
            "value": self.value,
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ParseWarning":
        data = _require_mapping(data, "warning")
        return cls(
            row=data["row"],
            field=data["field"],
            kind=WarningKind(data["kind"]),
            value=data["value"],
            message=data["message"],
        )


@dataclass(frozen=True)
class ParsedFile:
    player_name: str
    source_type: SourceType
    records: Tuple[Record, ...]
    original_filename: str
    warnings: Tuple[ParseWarning, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "playerName": self.player_name,
            "sourceType": self.source_type.value,
            "records": [record.to_dict() for record in self.records],
            "originalFilename": self.original_filename,
            "warnings": [warning.to_dict() for warning in self.warnings],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ParsedFile":
        """Rebuild a parsed file; malformed data raises ValueError, KeyError or TypeError."""
        data = _require_mapping(data, "parsed file")
        return cls(
            player_name=data["playerName"],
            source_type=SourceType(data["sourceType"]),
            records=tuple(Record.from_dict(r) for r in _require_list(data["records"], "records")),
            original_filename=data["originalFilename"],
            warnings=tuple(ParseWarning.from_dict(w) for w in _require_list(data.get("warnings", []), "warnings")),
        )


@dataclass(frozen=True)
class Dataset:
    """Successfully parsed files grouped by vendor."""

    blast: Tuple[ParsedFile, ...] = ()
    hittrax: Tuple[ParsedFile, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.blast and not self.hittrax

    def files(self) -> List[ParsedFile]:
        return list(self.blast) + list(self.hittrax)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "blast": [f.to_dict() for f in self.blast],
            "hittrax": [f.to_dict() for f in self.hittrax],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Dataset":
        data = _require_mapping(data, "dataset")
        return cls(
            blast=tuple(ParsedFile.from_dict(f) for f in _require_list(data.get("blast", []), "blast files")),
            hittrax=tuple(ParsedFile.from_dict(f) for f in _require_list(data.get("hittrax", []), "hittrax files")),
        )


@dataclass(frozen=True)
class TrendPoint:
    x: float
    y: float


@dataclass(frozen=True)
class TrendLine:
    """Least-squares line evaluated at the smallest and largest x."""

    p0: TrendPoint
    p1: TrendPoint

    @property
    def slope(self) -> float:
        if self.p1.x == self.p0.x:
            return 0.0
        return (self.p1.y - self.p0.y) / (self.p1.x - self.p0.x)

    def points(self) -> List[TrendPoint]:
        return [self.p0, self.p1]
