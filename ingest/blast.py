"""Parser for Blast Motion swing-metric exports.

Blast CSVs start with a device/account preamble of arbitrary length. The
real table begins at the first row whose first two cells are ``Date`` and
``Equipment``; header cells carry units in parentheses, e.g.
``Bat Speed (mph)``.
"""

from __future__ import annotations

from typing import List, Optional, Union

from contracts import FieldSpec, FieldType, ParsedFile, Record, SourceType
from exceptions import HeaderNotFoundError
from ingest.diagnostics import ParseDiagnostics, ParserOptions
from ingest.names import PlayerNameStrategy, get_name_strategy
from ingest.reader import RawGrid, cell, first_cell_blank, read_grid
from log_config.logger import get_logger

logger = get_logger(__name__)

HEADER_CELLS = ("Date", "Equipment")
TEXT_COLUMN_COUNT = 4  # Date, Equipment, Handedness, Swing Details


def find_header_row(grid: RawGrid, scan_rows: int) -> Optional[int]:
    """Index of the Blast header row within the first ``scan_rows`` rows."""
    for index, row in enumerate(grid[:scan_rows]):
        if len(row) >= 2 and row[0] == HEADER_CELLS[0] and row[1] == HEADER_CELLS[1]:
            return index
    return None


def blast_field_specs(header: List[str]) -> List[FieldSpec]:
    return [
        FieldSpec.from_header(
            text,
            FieldType.TEXT if index < TEXT_COLUMN_COUNT else FieldType.NUMERIC,
            strip_parens=True,
        )
        for index, text in enumerate(header)
    ]


def parse_blast_grid(
    grid: RawGrid,
    filename: str,
    options: Optional[ParserOptions] = None,
    name_strategy: Optional[PlayerNameStrategy] = None,
) -> ParsedFile:
    """Build a ParsedFile from an already-read Blast grid.

    Raises:
        HeaderNotFoundError: If no header row is found in the scan window
    """
    options = options or ParserOptions()
    diagnostics = ParseDiagnostics(options)

    header_index = find_header_row(grid, options.header_scan_rows)
    if header_index is None:
        raise HeaderNotFoundError(
            f"Could not find Blast data header row in the first {options.header_scan_rows} rows",
            filename=filename,
        )

    specs = blast_field_specs(grid[header_index])
    records: List[Record] = []

    for index in range(header_index + 1, len(grid)):
        row = grid[index]
        if first_cell_blank(row):
            continue
        row_number = index + 1

        fields = {}
        for column, spec in enumerate(specs):
            value = cell(row, column)
            if spec.field_type is FieldType.NUMERIC:
                fields[spec.name] = diagnostics.number(value, row_number, spec.name)
            else:
                fields[spec.name] = value

        date_text = fields.get("Date")
        if not date_text:
            diagnostics.missing_date(row_number)
            continue
        timestamp = diagnostics.timestamp(date_text, row_number)
        if timestamp is None:
            logger.debug(f"{filename}: dropping row {row_number} with unparseable date {date_text!r}")
            continue

        records.append(Record(fields, timestamp=timestamp, date_str=date_text))

    records.sort(key=lambda r: r.timestamp)

    strategy = name_strategy or get_name_strategy(SourceType.BLAST)
    parsed = ParsedFile(
        player_name=strategy.player_name(filename),
        source_type=SourceType.BLAST,
        records=tuple(records),
        original_filename=filename,
        warnings=diagnostics.frozen(),
    )
    logger.info(
        f"Parsed Blast file {filename}: {len(records)} records for {parsed.player_name}"
        f" ({len(parsed.warnings)} warnings)"
    )
    return parsed


def parse_blast(
    content: Union[bytes, str],
    filename: str,
    options: Optional[ParserOptions] = None,
    name_strategy: Optional[PlayerNameStrategy] = None,
) -> ParsedFile:
    """Parse a Blast Motion CSV export.

    Args:
        content: Raw file bytes (or decoded text)
        filename: Original filename, used to derive the player name
        options: Parser options (scan window, timezone, strict mode)
        name_strategy: Override for player name extraction

    Returns:
        ParsedFile with records sorted by timestamp

    Raises:
        DecodeError: If the bytes are not valid text
        HeaderNotFoundError: If the header row is missing
    """
    options = options or ParserOptions()
    grid = read_grid(content, options.encoding, filename)
    return parse_blast_grid(grid, filename, options, name_strategy)


__all__ = ["parse_blast", "parse_blast_grid", "find_header_row", "blast_field_specs"]
