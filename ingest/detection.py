"""Vendor format detection and parser dispatch."""

from __future__ import annotations

from typing import Mapping, Optional, Union

from contracts import ParsedFile, SourceType
from exceptions import UnsupportedFormatError
from ingest.blast import find_header_row, parse_blast_grid
from ingest.diagnostics import DEFAULT_HEADER_SCAN_ROWS, ParserOptions
from ingest.hittrax import parse_hittrax_grid
from ingest.names import PlayerNameStrategy
from ingest.reader import RawGrid, read_grid
from log_config.logger import get_logger

logger = get_logger(__name__)


def detect_source_type(grid: RawGrid, header_scan_rows: int = DEFAULT_HEADER_SCAN_ROWS) -> SourceType:
    """Guess which vendor produced ``grid``.

    Blast wins when its header row appears in the scan window; otherwise a
    first row with a ``Date`` column is taken as a HitTrax header.

    Raises:
        UnsupportedFormatError: If neither layout matches
    """
    if find_header_row(grid, header_scan_rows) is not None:
        return SourceType.BLAST
    if grid and "Date" in (c.strip() for c in grid[0]):
        return SourceType.HITTRAX
    raise UnsupportedFormatError("File is neither a Blast nor a HitTrax export")


def parse_file(
    content: Union[bytes, str],
    filename: str,
    source_type: Optional[SourceType] = None,
    options: Optional[ParserOptions] = None,
    name_strategies: Optional[Mapping[SourceType, PlayerNameStrategy]] = None,
) -> ParsedFile:
    """Parse a vendor export, detecting its format when not given.

    ``name_strategies`` maps a vendor to the strategy used for this call
    only; vendors missing from it use the registered default.
    """
    options = options or ParserOptions()
    grid = read_grid(content, options.encoding, filename)

    if source_type is None:
        try:
            source_type = detect_source_type(grid, options.header_scan_rows)
        except UnsupportedFormatError as e:
            e.filename = filename
            raise
        logger.debug(f"Detected {source_type.value} format for {filename}")

    source_type = SourceType(source_type)
    name_strategy = (name_strategies or {}).get(source_type)
    if source_type is SourceType.BLAST:
        return parse_blast_grid(grid, filename, options, name_strategy)
    return parse_hittrax_grid(grid, filename, options, name_strategy)


__all__ = ["detect_source_type", "parse_file"]
