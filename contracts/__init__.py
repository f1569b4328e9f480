"""Shared data contracts for swing and batted-ball analysis."""

from .types import (
    Dataset,
    FieldSpec,
    FieldType,
    FieldValue,
    ParsedFile,
    ParseWarning,
    Record,
    SessionRecord,
    SourceType,
    TrendLine,
    TrendPoint,
    ValueKind,
    WarningKind,
    value_kind,
)

__all__ = [
    "Dataset",
    "FieldSpec",
    "FieldType",
    "FieldValue",
    "ParsedFile",
    "ParseWarning",
    "Record",
    "SessionRecord",
    "SourceType",
    "TrendLine",
    "TrendPoint",
    "ValueKind",
    "WarningKind",
    "value_kind",
]
