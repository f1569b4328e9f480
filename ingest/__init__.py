"""Vendor CSV ingestion for Blast and HitTrax exports."""

from .blast import parse_blast
from .detection import detect_source_type, parse_file
from .diagnostics import DEFAULT_HEADER_SCAN_ROWS, ParserOptions
from .hittrax import parse_hittrax
from .names import PlayerNameStrategy, register_name_strategy
from .reader import read_grid

__all__ = [
    "DEFAULT_HEADER_SCAN_ROWS",
    "ParserOptions",
    "PlayerNameStrategy",
    "detect_source_type",
    "parse_blast",
    "parse_file",
    "parse_hittrax",
    "read_grid",
    "register_name_strategy",
]
