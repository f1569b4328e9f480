"""Batch ingestion with per-file status.

Every file is parsed on its own; a failure is recorded on that file's
result and never stops the rest of the batch.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from contracts import Dataset, ParsedFile, SourceType
from exceptions import NoValidFilesError, SwingTrendsError
from ingest.detection import parse_file
from ingest.diagnostics import ParserOptions
from ingest.names import PlayerNameStrategy
from log_config.logger import get_logger

logger = get_logger(__name__)


class FileStatus(Enum):
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class IngestResult:
    """Outcome of ingesting one file."""

    filename: str
    status: FileStatus
    source_type: Optional[SourceType] = None
    parsed: Optional[ParsedFile] = None
    error: Optional[str] = None

    @property
    def player_name(self) -> Optional[str]:
        return self.parsed.player_name if self.parsed else None

    @property
    def ok(self) -> bool:
        return self.status is FileStatus.SUCCESS


def _ingest_one(
    filename: str,
    content: bytes,
    source_type: Optional[SourceType],
    options: ParserOptions,
    name_strategies: Optional[Mapping[SourceType, PlayerNameStrategy]] = None,
) -> IngestResult:
    try:
        parsed = parse_file(content, filename, source_type, options, name_strategies)
    except SwingTrendsError as e:
        logger.warning(f"Failed to parse {filename}: {e}")
        return IngestResult(filename, FileStatus.ERROR, source_type, error=str(e))
    except Exception as e:
        # keep the rest of the batch alive on unexpected parser bugs
        logger.exception(f"Unexpected error parsing {filename}")
        return IngestResult(filename, FileStatus.ERROR, source_type, error=f"Unexpected error: {e}")
    return IngestResult(filename, FileStatus.SUCCESS, parsed.source_type, parsed=parsed)


def ingest_files(
    files: Iterable[Tuple[str, bytes]],
    source_type: Optional[SourceType] = None,
    options: Optional[ParserOptions] = None,
    max_workers: int = 4,
    name_strategies: Optional[Mapping[SourceType, PlayerNameStrategy]] = None,
) -> List[IngestResult]:
    """Parse a batch of ``(filename, content)`` pairs.

    Args:
        files: Filename and raw bytes for each file
        source_type: Vendor for every file, or None to detect per file
        options: Parser options
        max_workers: Thread pool size; 1 parses sequentially
        name_strategies: Per-vendor name strategies for this batch only

    Returns:
        One IngestResult per input, in input order
    """
    options = options or ParserOptions()
    items = list(files)
    if not items:
        return []

    logger.info(f"Ingesting {len(items)} file(s)")
    if max_workers <= 1 or len(items) == 1:
        results = [
            _ingest_one(name, content, source_type, options, name_strategies)
            for name, content in items
        ]
    else:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(items))) as executor:
            futures = [
                executor.submit(_ingest_one, name, content, source_type, options, name_strategies)
                for name, content in items
            ]
            results = [future.result() for future in futures]

    succeeded = sum(1 for r in results if r.ok)
    logger.info(f"Ingestion finished: {succeeded} succeeded, {len(results) - succeeded} failed")
    return results


def ingest_paths(
    paths: Iterable[Union[str, Path]],
    source_type: Optional[SourceType] = None,
    options: Optional[ParserOptions] = None,
    max_workers: int = 4,
    name_strategies: Optional[Mapping[SourceType, PlayerNameStrategy]] = None,
) -> List[IngestResult]:
    """Read and parse files from disk; unreadable files get an error result."""
    readable: List[Tuple[str, bytes]] = []
    failures = {}
    order: List[str] = []

    for path in map(Path, paths):
        order.append(path.name)
        try:
            readable.append((path.name, path.read_bytes()))
        except OSError as e:
            logger.warning(f"Could not read {path}: {e}")
            failures[len(order) - 1] = IngestResult(
                path.name, FileStatus.ERROR, source_type, error=f"Could not read file: {e}"
            )

    parsed = iter(ingest_files(readable, source_type, options, max_workers, name_strategies))
    return [failures[i] if i in failures else next(parsed) for i in range(len(order))]


def build_dataset(results: Sequence[IngestResult]) -> Dataset:
    """Collect the successful parses of a batch.

    Raises:
        NoValidFilesError: If no file in the batch parsed successfully
    """
    blast = tuple(r.parsed for r in results if r.ok and r.parsed.source_type is SourceType.BLAST)
    hittrax = tuple(r.parsed for r in results if r.ok and r.parsed.source_type is SourceType.HITTRAX)
    if not blast and not hittrax:
        raise NoValidFilesError("Please provide at least one valid CSV file")
    return Dataset(blast=blast, hittrax=hittrax)


__all__ = ["FileStatus", "IngestResult", "ingest_files", "ingest_paths", "build_dataset"]
