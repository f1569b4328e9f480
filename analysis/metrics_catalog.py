"""Known chartable metrics for each vendor export."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from contracts import SourceType


@dataclass(frozen=True)
class MetricDefinition:
    key: str  # record field name
    label: str
    unit: str
    category: str
    source: SourceType


def _blast(key: str, label: str, unit: str, category: str) -> MetricDefinition:
    return MetricDefinition(key, label, unit, category, SourceType.BLAST)


def _hittrax(key: str, label: str, unit: str, category: str) -> MetricDefinition:
    return MetricDefinition(key, label, unit, category, SourceType.HITTRAX)


BLAST_METRICS: List[MetricDefinition] = [
    _blast("Bat Speed mph", "Bat Speed", "mph", "Power"),
    _blast("Power kW", "Power", "kW", "Power"),
    _blast("Peak Hand Speed mph", "Peak Hand Speed", "mph", "Power"),
    _blast("Rotational Acceleration g", "Rotational Acceleration", "g", "Power"),
    _blast("Attack Angle deg", "Attack Angle", "deg", "Mechanics"),
    _blast("Plane Score", "Plane Score", "", "Scores"),
    _blast("Connection Score", "Connection Score", "", "Scores"),
    _blast("Rotation Score", "Rotation Score", "", "Scores"),
    _blast("On Plane Efficiency %", "On Plane Efficiency", "%", "Mechanics"),
    _blast("Early Connection deg", "Early Connection", "deg", "Connection"),
    _blast("Connection at Impact deg", "Connection at Impact", "deg", "Connection"),
    _blast("Vertical Bat Angle deg", "Vertical Bat Angle", "deg", "Mechanics"),
    _blast("Time to Contact sec", "Time to Contact", "sec", "Timing"),
    _blast("Exit Velocity mph", "Exit Velocity (Blast)", "mph", "Results"),
    _blast("Launch Angle deg", "Launch Angle (Blast)", "deg", "Results"),
    _blast("Estimated Distance feet", "Estimated Distance", "ft", "Results"),
]

HITTRAX_METRICS: List[MetricDefinition] = [
    _hittrax("AvgV", "Avg Exit Velocity", "mph", "Velocity"),
    _hittrax("MaxV", "Max Exit Velocity", "mph", "Velocity"),
    _hittrax("Dist", "Distance", "ft", "Results"),
    _hittrax("AVG", "Batting Average", "", "Stats"),
    _hittrax("SLG", "Slugging", "", "Stats"),
    _hittrax("AB", "At Bats", "", "Counting"),
    _hittrax("H", "Hits", "", "Counting"),
    _hittrax("EBH", "Extra Base Hits", "", "Counting"),
    _hittrax("HR", "Home Runs", "", "Counting"),
    _hittrax("HHA", "Hard Hit Average", "", "Stats"),
    _hittrax("LPH", "Line Drive Pull %", "", "Batted Ball"),
    _hittrax("Points", "Points", "", "Results"),
    _hittrax("LD %", "Line Drive %", "%", "Batted Ball"),
    _hittrax("FB %", "Fly Ball %", "%", "Batted Ball"),
    _hittrax("GB %", "Ground Ball %", "%", "Batted Ball"),
]


def metrics_for(source_type: SourceType) -> List[MetricDefinition]:
    if SourceType(source_type) is SourceType.BLAST:
        return list(BLAST_METRICS)
    return list(HITTRAX_METRICS)


def find_metric(key: str, source_type: Optional[SourceType] = None) -> Optional[MetricDefinition]:
    """Look up a metric by record key, optionally within one vendor."""
    catalogs = [metrics_for(source_type)] if source_type is not None else [BLAST_METRICS, HITTRAX_METRICS]
    for catalog in catalogs:
        for metric in catalog:
            if metric.key == key:
                return metric
    return None


__all__ = ["MetricDefinition", "BLAST_METRICS", "HITTRAX_METRICS", "metrics_for", "find_metric"]
