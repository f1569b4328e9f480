"""Player name extraction from vendor export filenames."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Dict

from contracts import SourceType


class PlayerNameStrategy(ABC):
    """Derives a player's display name from an export filename."""

    @abstractmethod
    def player_name(self, filename: str) -> str:
        """Return the player name encoded in ``filename``."""


class BlastNameStrategy(PlayerNameStrategy):
    """Blast exports are named like ``Metrics - Jane Doe - 2024.csv``."""

    _pattern = re.compile(r"Metrics - (.+?) -")

    def player_name(self, filename: str) -> str:
        match = self._pattern.search(filename)
        if match:
            return match.group(1)
        if filename.endswith(".csv"):
            return filename[: -len(".csv")]
        return filename


class HitTraxNameStrategy(PlayerNameStrategy):
    """HitTrax exports are named like ``JohnSmithdata.csv``."""

    _suffix = re.compile(r"data\.csv$", re.IGNORECASE)
    _camel_boundary = re.compile(r"([a-z])([A-Z])")

    def player_name(self, filename: str) -> str:
        name = self._suffix.sub("", filename)
        name = self._camel_boundary.sub(r"\1 \2", name)
        return name.strip()


# Process-wide defaults. Register at startup only; per-call overrides go
# through ``name_strategy`` on the parsers and ``name_strategies`` on
# parse_file and the batch functions.
_STRATEGIES: Dict[SourceType, PlayerNameStrategy] = {
    SourceType.BLAST: BlastNameStrategy(),
    SourceType.HITTRAX: HitTraxNameStrategy(),
}


def register_name_strategy(source_type: SourceType, strategy: PlayerNameStrategy) -> None:
    """Replace the name strategy used by default for ``source_type``.

    Not synchronized with running ingestion; call before any batch starts.
    """
    if not isinstance(strategy, PlayerNameStrategy):
        raise TypeError("strategy must be a PlayerNameStrategy")
    _STRATEGIES[SourceType(source_type)] = strategy


def get_name_strategy(source_type: SourceType) -> PlayerNameStrategy:
    return _STRATEGIES[SourceType(source_type)]


__all__ = [
    "PlayerNameStrategy",
    "BlastNameStrategy",
    "HitTraxNameStrategy",
    "register_name_strategy",
    "get_name_strategy",
]
