"""Command-line interface for swing-trends."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from analysis.metrics_catalog import MetricDefinition, find_metric
from analysis.presentation import available_metrics, build_slides
from analysis.report_generator import PresentationReportGenerator
from analysis.roster import build_roster, find_player, records_for
from analysis.series import comparison_series, metric_series
from analysis.trend import fit_trend_line
from analysis.utils import compute_statistics
from configs.settings import AppConfig, load_config
from contracts import Dataset, SourceType
from exceptions import SwingTrendsError
from ingest.batch import FileStatus, build_dataset, ingest_paths
from ingest.diagnostics import ParserOptions
from log_config.logger import configure_logging
from storage.dataset_store import DatasetStore


def _store(args, config: AppConfig) -> DatasetStore:
    path = Path(args.store) if args.store else Path(config.storage.path)
    return DatasetStore(path, key=config.storage.key)


def _load_dataset(args, config: AppConfig) -> Optional[Dataset]:
    dataset = _store(args, config).load()
    if dataset is None:
        print("Error: No saved player data. Run the ingest command first.", file=sys.stderr)
    return dataset


def _metric(key: str, source_type: SourceType) -> MetricDefinition:
    # Columns outside the catalog can still be charted by their raw name
    return find_metric(key, source_type) or MetricDefinition(key, key, "", "Other", source_type)


def ingest_command(args, config: AppConfig) -> int:
    """Handle ingest command.

    Args:
        args: Parsed command-line arguments
        config: Loaded application config
    """
    options = ParserOptions.from_config(config)
    workers = config.batch.max_workers

    results = []
    if args.blast:
        results += ingest_paths(args.blast, SourceType.BLAST, options, workers)
    if args.hittrax:
        results += ingest_paths(args.hittrax, SourceType.HITTRAX, options, workers)
    if args.auto:
        results += ingest_paths(args.auto, None, options, workers)

    if not results:
        print("Error: No files given. Use --blast, --hittrax or --auto.", file=sys.stderr)
        return 1

    for result in results:
        if result.status is FileStatus.SUCCESS:
            parsed = result.parsed
            print(f"[OK]    {result.filename}: {parsed.source_type.value}, {parsed.player_name}, "
                  f"{len(parsed.records)} records, {len(parsed.warnings)} warnings")
        else:
            print(f"[ERROR] {result.filename}: {result.error}")

    try:
        dataset = build_dataset(results)
    except SwingTrendsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    store = _store(args, config)
    if args.append:
        existing = store.load()
        if existing is not None:
            dataset = Dataset(
                blast=existing.blast + dataset.blast,
                hittrax=existing.hittrax + dataset.hittrax,
            )

    store.save(dataset)
    print(f"\nSaved {len(dataset.files())} file(s) to {store.path}")
    return 0


def players_command(args, config: AppConfig) -> int:
    dataset = _load_dataset(args, config)
    if dataset is None:
        return 1

    roster = build_roster(dataset)
    print(f"{len(roster)} players loaded")
    for player in roster:
        parts = []
        for source_type in player.sources:
            parsed = player.source(source_type)
            parts.append(f"{source_type.value}: {len(parsed.records)} records")
        print(f"  {player.player_name} ({', '.join(parts)})")
    return 0


def trend_command(args, config: AppConfig) -> int:
    """Handle trend command: print a metric's series and fitted trend."""
    dataset = _load_dataset(args, config)
    if dataset is None:
        return 1

    player = find_player(build_roster(dataset), args.player)
    if player is None:
        print(f"Error: Unknown player: {args.player}", file=sys.stderr)
        return 1

    source_type = SourceType(args.source)
    by_session = config.analysis.view_by_session and not args.raw
    records = records_for(player, source_type, by_session=by_session)
    metric = _metric(args.metric, source_type)
    series = metric_series(records, metric.key)

    if not series:
        print(f"No data available for {metric.label}")
        return 0

    unit = f" {metric.unit}" if metric.unit else ""
    print(f"{player.player_name} - {metric.label} ({'sessions' if by_session else 'swings'})")
    for point in series:
        print(f"  {point.date:<24} {point.value:8.1f}{unit}")

    stats = compute_statistics([p.value for p in series])
    print(f"\n  Mean {stats['mean']:.1f}{unit}, min {stats['min']:.1f}, max {stats['max']:.1f}, "
          f"change {stats['change']:+.1f}")

    trend = fit_trend_line((p.timestamp, p.value) for p in series) if config.analysis.show_trend_lines else None
    if trend is not None:
        print(f"  Trend: {trend.p0.y:.1f} -> {trend.p1.y:.1f}{unit}")
    return 0


def compare_command(args, config: AppConfig) -> int:
    dataset = _load_dataset(args, config)
    if dataset is None:
        return 1

    roster = build_roster(dataset)
    source_type = SourceType(args.source)
    by_session = config.analysis.view_by_session and not args.raw
    metric = _metric(args.metric, source_type)

    selected = []
    for name in args.players:
        player = find_player(roster, name)
        if player is None or player.source(source_type) is None:
            print(f"Warning: {name} has no {source_type.value} data, skipping", file=sys.stderr)
            continue
        selected.append((name, records_for(player, source_type, by_session=by_session)))

    try:
        rows = comparison_series(selected, metric.key, config.analysis.max_comparison_players)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not rows:
        print(f"No data available for {metric.label}")
        return 0

    names = [name for name, _ in selected]
    print(f"{'Date':<24}" + "".join(f"{name:>16}" for name in names))
    for row in rows:
        cells = "".join(
            f"{'-':>16}" if row.values[name] is None else f"{row.values[name]:16.1f}"
            for name in names
        )
        print(f"{row.date:<24}{cells}")

    if args.output:
        PresentationReportGenerator(config.report.dpi).generate_comparison_report(rows, metric, Path(args.output))
        print(f"\nChart: {args.output}")
    return 0


def present_command(args, config: AppConfig) -> int:
    """Handle present command: render the slideshow for one player."""
    dataset = _load_dataset(args, config)
    if dataset is None:
        return 1

    player = find_player(build_roster(dataset), args.player)
    if player is None:
        print(f"Error: Unknown player: {args.player}", file=sys.stderr)
        return 1

    keys: List[str] = args.metrics or [m.key for m in available_metrics(player)]
    slides = build_slides(player, keys)
    if not slides:
        print("Error: None of the requested metrics are available for this player", file=sys.stderr)
        return 1

    output = Path(args.output)
    PresentationReportGenerator(config.report.dpi).generate_html_report(slides, output)
    print(f"Presentation with {len(slides)} slide(s): {output}")
    return 0


def reset_command(args, config: AppConfig) -> int:
    store = _store(args, config)
    store.clear()
    print(f"Cleared saved player data in {store.path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="swing-trends",
        description="Blast Motion and HitTrax player analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Load exports for the team
  swing-trends ingest --blast "Metrics - Jane Doe - 2024.csv" --hittrax JaneDoedata.csv

  # Session trend for one metric
  swing-trends trend --player "Jane Doe" --source blast --metric "Bat Speed mph"

  # Compare up to three players
  swing-trends compare --players "Jane Doe" "John Smith" --source hittrax --metric AvgV

  # Build a slideshow
  swing-trends present --player "Jane Doe" --output jane.html
        """
    )
    parser.add_argument('--config', help='Path to YAML config (default: configs/default.yaml)')
    parser.add_argument('--store', help='Path to saved data file (overrides config)')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    ingest_parser = subparsers.add_parser('ingest', help='Parse vendor CSV exports and save them')
    ingest_parser.add_argument('--blast', nargs='+', default=[], help='Blast Motion CSV files')
    ingest_parser.add_argument('--hittrax', nargs='+', default=[], help='HitTrax CSV files')
    ingest_parser.add_argument('--auto', nargs='+', default=[], help='CSV files of either format')
    ingest_parser.add_argument('--append', action='store_true', help='Add to saved data instead of replacing it')

    subparsers.add_parser('players', help='List loaded players')

    trend_parser = subparsers.add_parser('trend', help='Show a metric over time for one player')
    trend_parser.add_argument('--player', required=True, help='Player name')

    compare_parser = subparsers.add_parser('compare', help='Compare a metric across players')
    compare_parser.add_argument('--players', nargs='+', required=True, help='Player names')
    compare_parser.add_argument('--output', help='Write an HTML chart to this path')

    for sub in (trend_parser, compare_parser):
        sub.add_argument('--source', required=True, choices=[s.value for s in SourceType], help='Data source')
        sub.add_argument('--metric', required=True, help='Metric key, e.g. "Bat Speed mph" or AvgV')
        sub.add_argument('--raw', action='store_true', help='Use individual swings instead of sessions')

    present_parser = subparsers.add_parser('present', help='Render a presentation for one player')
    present_parser.add_argument('--player', required=True, help='Player name')
    present_parser.add_argument('--metrics', nargs='+', help='Metric keys in slide order (default: all)')
    present_parser.add_argument('--output', required=True, help='Output HTML file')

    subparsers.add_parser('reset', help='Clear saved player data')

    return parser


COMMANDS = {
    'ingest': ingest_command,
    'players': players_command,
    'trend': trend_command,
    'compare': compare_command,
    'present': present_command,
    'reset': reset_command,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(Path(args.config) if args.config else None)
    except SwingTrendsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    configure_logging(config.logging.level, config.logging.log_dir)

    try:
        return COMMANDS[args.command](args, config)
    except SwingTrendsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
