"""Group parsed files into per-player views."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from analysis.sessions import aggregate_by_session
from contracts import Dataset, ParsedFile, Record, SourceType


@dataclass
class PlayerData:
    """A player's most recent Blast and HitTrax files."""

    player_name: str
    blast: Optional[ParsedFile] = None
    hittrax: Optional[ParsedFile] = None

    def source(self, source_type: SourceType) -> Optional[ParsedFile]:
        if SourceType(source_type) is SourceType.BLAST:
            return self.blast
        return self.hittrax

    @property
    def sources(self) -> List[SourceType]:
        return [s for s in (SourceType.BLAST, SourceType.HITTRAX) if self.source(s) is not None]


def build_roster(dataset: Dataset) -> List[PlayerData]:
    """One PlayerData per player name, in order of first appearance.

    Blast files are visited before HitTrax files; a later file for the same
    player and vendor replaces the earlier one.
    """
    players: Dict[str, PlayerData] = {}
    for parsed in list(dataset.blast) + list(dataset.hittrax):
        player = players.setdefault(parsed.player_name, PlayerData(parsed.player_name))
        if parsed.source_type is SourceType.BLAST:
            player.blast = parsed
        else:
            player.hittrax = parsed
    return list(players.values())


def find_player(roster: Sequence[PlayerData], player_name: str) -> Optional[PlayerData]:
    for player in roster:
        if player.player_name == player_name:
            return player
    return None


def records_for(player: PlayerData, source_type: SourceType, by_session: bool = True) -> List[Record]:
    """Records to chart for one player and vendor, session-averaged by default."""
    parsed = player.source(source_type)
    if parsed is None:
        return []
    if by_session:
        return list(aggregate_by_session(parsed.records))
    return list(parsed.records)


__all__ = ["PlayerData", "build_roster", "find_player", "records_for"]
