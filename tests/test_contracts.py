import json

import pytest

from contracts import (
    Dataset,
    ParsedFile,
    ParseWarning,
    Record,
    SessionRecord,
    SourceType,
    ValueKind,
    WarningKind,
    value_kind,
)
from contracts.versioning import SCHEMA_VERSION, make_envelope, open_envelope
from ingest import parse_hittrax


def _record() -> Record:
    return Record({"Date": "2024-01-01", "AvgV": 70, "Tag": ""}, timestamp=1704067200000, date_str="2024-01-01")


def test_record_normalizes_ints_and_keeps_order() -> None:
    record = _record()

    assert record["AvgV"] == 70.0
    assert isinstance(record["AvgV"], float)
    assert list(record) == ["Date", "AvgV", "Tag"]
    assert record.kind("Tag") is ValueKind.TEXT
    assert record.kind("Missing") is ValueKind.ABSENT
    assert record.number("Date") is None


def test_record_rejects_unsupported_values() -> None:
    with pytest.raises(TypeError):
        Record({"flag": True}, timestamp=0, date_str=None)
    with pytest.raises(TypeError):
        value_kind([1])


def test_record_is_immutable() -> None:
    record = _record()

    with pytest.raises(AttributeError):
        record.extra = 1
    with pytest.raises(TypeError):
        record["AvgV"] = 1.0


def test_record_equality_includes_timestamp() -> None:
    other = Record(dict(_record()), timestamp=0, date_str="2024-01-01")

    assert _record() == _record()
    assert _record() != other


def test_record_dict_round_trip() -> None:
    record = _record()
    data = record.to_dict()

    assert data["timestamp"] == 1704067200000
    assert data["dateStr"] == "2024-01-01"
    assert data["fields"] == {"Date": "2024-01-01", "AvgV": 70.0, "Tag": ""}
    assert Record.from_dict(data) == record


def test_columns_named_like_record_attributes_survive_round_trip() -> None:
    parsed = parse_hittrax("Date,timestamp,dateStr,swingCount,AvgV\n2024-01-01,5,x,2,70\n", "JohnSmithdata.csv")
    record = parsed.records[0]

    restored = ParsedFile.from_dict(json.loads(json.dumps(parsed.to_dict())))

    assert record["timestamp"] == 5.0
    assert record.timestamp == 1704067200000
    assert restored == parsed
    assert restored.records[0]["swingCount"] == 2.0


@pytest.mark.parametrize(
    "data",
    [
        ["garbage"],
        {"hittrax": "oops"},
        {"hittrax": [{"playerName": "x", "sourceType": "hittrax", "originalFilename": "x.csv",
                      "records": ["oops"]}]},
        {"hittrax": [{"playerName": "x", "sourceType": "hittrax", "originalFilename": "x.csv",
                      "records": [{"fields": [], "timestamp": 0}]}]},
    ],
)
def test_dataset_from_dict_rejects_wrong_shapes(data) -> None:
    with pytest.raises(ValueError):
        Dataset.from_dict(data)


def test_session_record_round_trip() -> None:
    session = SessionRecord({"AvgV": 75.0}, timestamp=5, date_str="2024-01-01", swing_count=2)

    data = session.to_dict()

    assert data["swingCount"] == 2
    assert SessionRecord.from_dict(data) == session


def test_dataset_round_trip() -> None:
    parsed = ParsedFile(
        player_name="John Smith",
        source_type=SourceType.HITTRAX,
        records=(_record(),),
        original_filename="JohnSmithdata.csv",
        warnings=(ParseWarning(3, "AvgV", WarningKind.UNPARSEABLE_NUMBER, "n/a", "Row 3: bad"),),
    )
    dataset = Dataset(hittrax=(parsed,))

    data = dataset.to_dict()

    assert data["hittrax"][0]["playerName"] == "John Smith"
    assert data["hittrax"][0]["sourceType"] == "hittrax"
    assert Dataset.from_dict(data) == dataset
    assert not dataset.is_empty
    assert Dataset().is_empty


def test_envelope() -> None:
    envelope = make_envelope({"a": 1})

    assert envelope["schema_version"] == SCHEMA_VERSION
    assert open_envelope(envelope) == {"a": 1}
    with pytest.raises(ValueError):
        open_envelope({"schema_version": "99.0.0", "payload": {}})
    with pytest.raises(ValueError):
        open_envelope({"a": 1})
