"""Parser for HitTrax batted-ball exports (header always on the first row)."""

from __future__ import annotations

from typing import List, Optional, Union

from contracts import FieldSpec, FieldType, ParsedFile, Record, SourceType
from exceptions import EmptyFileError
from ingest.diagnostics import ParseDiagnostics, ParserOptions
from ingest.names import PlayerNameStrategy, get_name_strategy
from ingest.reader import RawGrid, cell, first_cell_blank, read_grid
from log_config.logger import get_logger

logger = get_logger(__name__)

TEXT_FIELDS = frozenset({"Date", "Time", "Tag"})


def hittrax_field_specs(header: List[str]) -> List[FieldSpec]:
    specs = []
    for text in header:
        name = text.strip()
        specs.append(FieldSpec(name, FieldType.TEXT if name in TEXT_FIELDS else FieldType.NUMERIC))
    return specs


def parse_hittrax_grid(
    grid: RawGrid,
    filename: str,
    options: Optional[ParserOptions] = None,
    name_strategy: Optional[PlayerNameStrategy] = None,
) -> ParsedFile:
    """Build a ParsedFile from an already-read HitTrax grid.

    Raises:
        EmptyFileError: If the grid has no rows after the header
    """
    options = options or ParserOptions()
    diagnostics = ParseDiagnostics(options)

    if len(grid) < 2:
        raise EmptyFileError("HitTrax file appears to be empty", filename=filename)

    specs = hittrax_field_specs(grid[0])
    records: List[Record] = []

    for index in range(1, len(grid)):
        row = grid[index]
        if first_cell_blank(row):
            continue
        row_number = index + 1

        fields = {}
        for column, spec in enumerate(specs):
            value = cell(row, column).strip()
            if spec.field_type is FieldType.NUMERIC:
                fields[spec.name] = diagnostics.number(value, row_number, spec.name)
            else:
                fields[spec.name] = value

        date_text = fields.get("Date")
        if not date_text:
            diagnostics.missing_date(row_number)
            continue
        time_text = fields.get("Time")
        when = f"{date_text} {time_text}" if time_text else date_text
        timestamp = diagnostics.timestamp(when, row_number)
        if timestamp is None:
            logger.debug(f"{filename}: dropping row {row_number} with unparseable date {when!r}")
            continue

        records.append(Record(fields, timestamp=timestamp, date_str=date_text))

    records.sort(key=lambda r: r.timestamp)

    strategy = name_strategy or get_name_strategy(SourceType.HITTRAX)
    parsed = ParsedFile(
        player_name=strategy.player_name(filename),
        source_type=SourceType.HITTRAX,
        records=tuple(records),
        original_filename=filename,
        warnings=diagnostics.frozen(),
    )
    logger.info(
        f"Parsed HitTrax file {filename}: {len(records)} records for {parsed.player_name}"
        f" ({len(parsed.warnings)} warnings)"
    )
    return parsed


def parse_hittrax(
    content: Union[bytes, str],
    filename: str,
    options: Optional[ParserOptions] = None,
    name_strategy: Optional[PlayerNameStrategy] = None,
) -> ParsedFile:
    """Parse a HitTrax CSV export.

    Raises:
        DecodeError: If the bytes are not valid text
        EmptyFileError: If the file has no data rows
    """
    options = options or ParserOptions()
    grid = read_grid(content, options.encoding, filename)
    return parse_hittrax_grid(grid, filename, options, name_strategy)


__all__ = ["parse_hittrax", "parse_hittrax_grid", "hittrax_field_specs", "TEXT_FIELDS"]
