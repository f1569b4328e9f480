"""Tabular reader turning raw CSV content into a grid of string cells."""

from __future__ import annotations

import csv
import io
from typing import List, Optional, Union

from exceptions import DecodeError, MalformedInputError

RawGrid = List[List[str]]

DEFAULT_ENCODING = "utf-8-sig"


def decode_content(content: Union[bytes, str], encoding: str = DEFAULT_ENCODING,
                   filename: Optional[str] = None) -> str:
    """Decode file bytes to text; text input is returned unchanged.

    Raises:
        DecodeError: If the bytes are not valid in ``encoding``
    """
    if isinstance(content, str):
        return content
    try:
        return bytes(content).decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        raise DecodeError(f"File is not valid {encoding} text: {e}", filename=filename) from e


def read_grid(content: Union[bytes, str], encoding: str = DEFAULT_ENCODING,
              filename: Optional[str] = None) -> RawGrid:
    """Read comma-delimited content into rows of cells.

    Rows keep whatever number of cells they have; blank lines become empty
    rows. Quoted fields may contain commas, quotes and newlines.

    Args:
        content: Raw file bytes or already-decoded text
        encoding: Encoding used when ``content`` is bytes
        filename: Original filename, used in error messages

    Returns:
        List of rows, each a list of string cells

    Raises:
        DecodeError: If the bytes cannot be decoded
        MalformedInputError: If the CSV engine rejects the stream
    """
    text = decode_content(content, encoding, filename)
    try:
        return [list(row) for row in csv.reader(io.StringIO(text, newline=""))]
    except csv.Error as e:
        raise MalformedInputError(f"Could not read CSV content: {e}", filename=filename) from e


def cell(row: List[str], index: int) -> str:
    """Cell at ``index`` or the empty string for ragged rows."""
    if index < len(row):
        return row[index]
    return ""


def first_cell_blank(row: List[str]) -> bool:
    return not row or not row[0].strip()


__all__ = ["RawGrid", "DEFAULT_ENCODING", "decode_content", "read_grid", "cell", "first_cell_blank"]
