"""Slides for presentation mode: one session-averaged metric chart each."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from analysis.metrics_catalog import MetricDefinition, metrics_for
from analysis.roster import PlayerData, records_for
from analysis.series import SeriesPoint, metric_series
from analysis.trend import fit_trend_line
from contracts import TrendLine


@dataclass(frozen=True)
class Slide:
    player_name: str
    metric: MetricDefinition
    series: List[SeriesPoint]
    trend: Optional[TrendLine]
    session_count: int

    @property
    def has_data(self) -> bool:
        return bool(self.series)


def available_metrics(player: PlayerData) -> List[MetricDefinition]:
    """Catalog metrics for every vendor the player has data from."""
    metrics: List[MetricDefinition] = []
    for source_type in player.sources:
        metrics.extend(metrics_for(source_type))
    return metrics


def build_slides(player: PlayerData, metric_keys: Sequence[str]) -> List[Slide]:
    """Build slides in the order of ``metric_keys``.

    Keys that are not in the player's available metrics are skipped.
    """
    by_key: Dict[str, MetricDefinition] = {}
    for metric in available_metrics(player):
        by_key.setdefault(metric.key, metric)

    sessions_by_source = {}
    slides = []
    for key in metric_keys:
        metric = by_key.get(key)
        if metric is None:
            continue
        if metric.source not in sessions_by_source:
            sessions_by_source[metric.source] = records_for(player, metric.source, by_session=True)
        sessions = sessions_by_source[metric.source]

        series = metric_series(sessions, metric.key)
        trend = fit_trend_line((p.timestamp, p.value) for p in series)
        slides.append(Slide(
            player_name=player.player_name,
            metric=metric,
            series=series,
            trend=trend,
            session_count=len(sessions),
        ))
    return slides


__all__ = ["Slide", "available_metrics", "build_slides"]
