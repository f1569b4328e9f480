"""Tests for batch ingestion."""

import unittest
from pathlib import Path

import pytest

from contracts import SourceType
from exceptions import NoValidFilesError
from ingest.batch import FileStatus, IngestResult, build_dataset, ingest_files, ingest_paths
from ingest.names import HitTraxNameStrategy, PlayerNameStrategy, get_name_strategy

from samples import blast_csv, hittrax_csv

BLAST_BYTES = blast_csv("2024-01-01,Bat,Right,Tee,62.5,8").encode("utf-8")
HITTRAX_BYTES = hittrax_csv("2024-01-01,10:00:00,70,80,250,A").encode("utf-8")


class FixedNameStrategy(PlayerNameStrategy):
    def __init__(self, name):
        self.name = name

    def player_name(self, filename: str) -> str:
        return self.name


class TestIngestFiles(unittest.TestCase):
    """Test per-file isolation in a batch."""

    def test_failures_do_not_stop_batch(self):
        results = ingest_files([
            ("Metrics - Jane Doe - 2024.csv", BLAST_BYTES),
            ("mystery.csv", b"foo,bar\n1,2\n"),
            ("JohnSmithdata.csv", HITTRAX_BYTES),
        ])

        self.assertEqual([r.status for r in results],
                         [FileStatus.SUCCESS, FileStatus.ERROR, FileStatus.SUCCESS])
        self.assertEqual([r.filename for r in results],
                         ["Metrics - Jane Doe - 2024.csv", "mystery.csv", "JohnSmithdata.csv"])
        self.assertEqual(results[0].player_name, "Jane Doe")
        self.assertEqual(results[2].source_type, SourceType.HITTRAX)
        self.assertIsNone(results[1].parsed)
        self.assertIn("neither", results[1].error)

    def test_sequential_matches_threaded(self):
        files = [(f"Player{i}data.csv", HITTRAX_BYTES) for i in range(6)]

        sequential = ingest_files(files, SourceType.HITTRAX, max_workers=1)
        threaded = ingest_files(files, SourceType.HITTRAX, max_workers=4)

        self.assertEqual(sequential, threaded)

    def test_name_strategies_apply_to_one_batch_only(self):
        files = [
            ("Metrics - Jane Doe - 2024.csv", BLAST_BYTES),
            ("JohnSmithdata.csv", HITTRAX_BYTES),
            ("AlexKiddata.csv", HITTRAX_BYTES),
        ]

        overridden = ingest_files(
            files, max_workers=3,
            name_strategies={SourceType.HITTRAX: FixedNameStrategy("Roster Player")},
        )
        default = ingest_files(files, max_workers=3)

        self.assertEqual([r.player_name for r in overridden], ["Jane Doe", "Roster Player", "Roster Player"])
        self.assertEqual([r.player_name for r in default], ["Jane Doe", "John Smith", "Alex Kid"])
        self.assertIsInstance(get_name_strategy(SourceType.HITTRAX), HitTraxNameStrategy)

    def test_decode_error_is_reported(self):
        results = ingest_files([("bad.csv", b"\xff\xfe\x00")], SourceType.HITTRAX)

        self.assertEqual(results[0].status, FileStatus.ERROR)
        self.assertFalse(results[0].ok)

    def test_forced_type_mismatch_is_reported(self):
        results = ingest_files([("JohnSmithdata.csv", HITTRAX_BYTES)], SourceType.BLAST)

        self.assertEqual(results[0].status, FileStatus.ERROR)
        self.assertIn("header", results[0].error)

    def test_empty_batch(self):
        self.assertEqual(ingest_files([]), [])


def test_ingest_paths_reports_unreadable_files(tmp_path: Path) -> None:
    good = tmp_path / "JohnSmithdata.csv"
    good.write_bytes(HITTRAX_BYTES)
    missing = tmp_path / "Missingdata.csv"

    results = ingest_paths([missing, good], SourceType.HITTRAX)

    assert [r.filename for r in results] == ["Missingdata.csv", "JohnSmithdata.csv"]
    assert results[0].status is FileStatus.ERROR
    assert "Could not read file" in results[0].error
    assert results[1].ok


def test_build_dataset_groups_by_source() -> None:
    results = ingest_files([
        ("JohnSmithdata.csv", HITTRAX_BYTES),
        ("Metrics - Jane Doe - 2024.csv", BLAST_BYTES),
        ("mystery.csv", b"foo\n"),
    ])

    dataset = build_dataset(results)

    assert [f.player_name for f in dataset.blast] == ["Jane Doe"]
    assert [f.player_name for f in dataset.hittrax] == ["John Smith"]


def test_build_dataset_requires_a_success() -> None:
    failed = [IngestResult("a.csv", FileStatus.ERROR, error="boom")]

    with pytest.raises(NoValidFilesError, match="at least one valid CSV file"):
        build_dataset(failed)
    with pytest.raises(NoValidFilesError):
        build_dataset([])
