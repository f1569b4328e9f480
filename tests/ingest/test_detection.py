"""Tests for vendor detection and dispatch."""

import pytest

from contracts import SourceType
from exceptions import UnsupportedFormatError
from ingest import PlayerNameStrategy, detect_source_type, parse_file, read_grid


def test_detects_blast(blast_content) -> None:
    assert detect_source_type(read_grid(blast_content)) is SourceType.BLAST


def test_detects_hittrax(hittrax_content) -> None:
    assert detect_source_type(read_grid(hittrax_content)) is SourceType.HITTRAX


def test_unknown_layout_rejected() -> None:
    with pytest.raises(UnsupportedFormatError):
        detect_source_type(read_grid("foo,bar\n1,2\n"))


def test_empty_grid_rejected() -> None:
    with pytest.raises(UnsupportedFormatError):
        detect_source_type([])


def test_parse_file_auto_detects(blast_content, hittrax_content) -> None:
    blast = parse_file(blast_content, "Metrics - Jane Doe - 2024.csv")
    hittrax = parse_file(hittrax_content, "JaneDoedata.csv")

    assert blast.source_type is SourceType.BLAST
    assert hittrax.source_type is SourceType.HITTRAX
    assert blast.player_name == hittrax.player_name == "Jane Doe"


def test_parse_file_explicit_type_skips_detection(hittrax_content) -> None:
    parsed = parse_file(hittrax_content, "JaneDoedata.csv", source_type="hittrax")

    assert parsed.source_type is SourceType.HITTRAX


def test_parse_file_error_carries_filename() -> None:
    with pytest.raises(UnsupportedFormatError) as exc_info:
        parse_file(b"foo,bar\n", "mystery.csv")

    assert exc_info.value.filename == "mystery.csv"


def test_parse_file_name_strategies_override_detected_vendor(hittrax_content) -> None:
    class Fixed(PlayerNameStrategy):
        def player_name(self, filename: str) -> str:
            return "Roster Player"

    parsed = parse_file(hittrax_content, "JaneDoedata.csv", name_strategies={SourceType.HITTRAX: Fixed()})
    untouched = parse_file(hittrax_content, "JaneDoedata.csv", name_strategies={SourceType.BLAST: Fixed()})

    assert parsed.player_name == "Roster Player"
    assert untouched.player_name == "Jane Doe"
