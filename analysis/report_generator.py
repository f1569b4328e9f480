"""HTML slideshow reports with embedded matplotlib trend charts."""

from __future__ import annotations

import base64
import html
from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import List, Optional, Sequence

import matplotlib
import matplotlib.pyplot as plt
import numpy as np

# Use non-interactive backend for file generation
matplotlib.use('Agg')

from analysis.metrics_catalog import MetricDefinition
from analysis.presentation import Slide
from analysis.series import ComparisonRow, SeriesPoint
from contracts import TrendLine
from contracts.versioning import APP_VERSION
from log_config.logger import get_logger

logger = get_logger(__name__)

PLAYER_COLORS = [
    '#cb6b1e',  # Primary orange
    '#22c55e',
    '#3b82f6',
    '#a855f7',
    '#ec4899',
]


class PresentationReportGenerator:
    """Render presentation slides and comparison charts."""

    def __init__(self, dpi: int = 100):
        self.dpi = dpi

    def generate_html_report(
        self,
        slides: Sequence[Slide],
        output_path: Path,
        title: Optional[str] = None,
    ) -> None:
        """Write one HTML page with a section per slide.

        Args:
            slides: Slides to render, in presentation order
            output_path: Path to output HTML file
            title: Page title (defaults to the first slide's player)
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        if title is None:
            title = f"{slides[0].player_name} Progress" if slides else "Player Progress"

        sections = []
        for number, slide in enumerate(slides, start=1):
            chart = self.render_metric_chart(slide.series, slide.metric, slide.trend) if slide.has_data else None
            sections.append(self._slide_html(number, len(slides), slide, chart))

        output_path.write_text(self._build_html(title, sections), encoding="utf-8")
        logger.info(f"Wrote presentation with {len(slides)} slide(s) to {output_path}")

    def generate_comparison_report(
        self,
        rows: Sequence[ComparisonRow],
        metric: MetricDefinition,
        output_path: Path,
    ) -> None:
        """Write an HTML page with one multi-player comparison chart."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        if rows:
            body = f'<div class="chart"><img src="{self.render_comparison_chart(rows, metric)}" alt="{html.escape(metric.label)}"></div>'
        else:
            body = '<div class="empty">No data available for this metric</div>'
        players = ", ".join(rows[0].values) if rows else ""
        section = f"""
        <section class="slide">
            <p class="counter">{html.escape(players)}</p>
            <h2>{html.escape(metric.label)}</h2>
            {body}
        </section>
        """

        output_path.write_text(self._build_html(f"{metric.label} Comparison", [section]), encoding="utf-8")
        logger.info(f"Wrote comparison chart to {output_path}")

    def render_metric_chart(
        self,
        series: Sequence[SeriesPoint],
        metric: MetricDefinition,
        trend: Optional[TrendLine] = None,
    ) -> str:
        """Line chart of one series with an optional dashed trend line.

        Returns:
            Base64-encoded PNG data URI
        """
        fig, ax = plt.subplots(figsize=(10, 5))

        x = [p.timestamp for p in series]
        y = [p.value for p in series]
        ax.plot(x, y, 'o-', color=PLAYER_COLORS[0], linewidth=2, markersize=6, label=metric.label)

        if trend is not None:
            ax.plot([trend.p0.x, trend.p1.x], [trend.p0.y, trend.p1.y], '--',
                    color='#a3a3a3', linewidth=2, label='Trend')

        self._label_dates(ax, series)
        ax.set_ylabel(self._axis_label(metric), fontsize=12)
        ax.set_title(metric.label, fontsize=14, fontweight='bold')
        ax.grid(True, alpha=0.3)
        ax.legend()

        return self._fig_to_base64(fig)

    def render_comparison_chart(
        self,
        rows: Sequence[ComparisonRow],
        metric: MetricDefinition,
    ) -> str:
        """One line per player over the merged comparison rows."""
        fig, ax = plt.subplots(figsize=(10, 5))

        player_names: List[str] = list(rows[0].values) if rows else []
        x = np.arange(len(rows))
        for index, name in enumerate(player_names):
            values = [r.values.get(name) for r in rows]
            y = np.array([np.nan if v is None else v for v in values], dtype=np.float64)
            mask = ~np.isnan(y)
            ax.plot(x[mask], y[mask], 'o-', color=PLAYER_COLORS[index % len(PLAYER_COLORS)],
                    linewidth=2, markersize=6, label=name)

        ax.set_xticks(x)
        ax.set_xticklabels([r.date for r in rows], rotation=45, ha='right', fontsize=9)
        ax.set_ylabel(self._axis_label(metric), fontsize=12)
        ax.set_title(f"{metric.label} Comparison", fontsize=14, fontweight='bold')
        ax.grid(True, alpha=0.3)
        if player_names:
            ax.legend()

        return self._fig_to_base64(fig)

    def _label_dates(self, ax, series: Sequence[SeriesPoint]) -> None:
        ax.set_xticks([p.timestamp for p in series])
        ax.set_xticklabels([p.date for p in series], rotation=45, ha='right', fontsize=9)

    def _axis_label(self, metric: MetricDefinition) -> str:
        return f"{metric.label} ({metric.unit})" if metric.unit else metric.label

    def _fig_to_base64(self, fig) -> str:
        """Convert matplotlib figure to base64-encoded PNG.

        Args:
            fig: Matplotlib figure

        Returns:
            Base64-encoded data URI
        """
        buffer = BytesIO()
        fig.savefig(buffer, format='png', dpi=self.dpi, bbox_inches='tight')
        buffer.seek(0)
        img_base64 = base64.b64encode(buffer.read()).decode('utf-8')
        plt.close(fig)

        return f"data:image/png;base64,{img_base64}"

    def _slide_html(self, number: int, total: int, slide: Slide, chart: Optional[str]) -> str:
        metric = slide.metric
        if chart is None:
            body = '<div class="empty">No data available for this metric</div>'
        else:
            body = f'<div class="chart"><img src="{chart}" alt="{html.escape(metric.label)}"></div>'

        trend_text = ""
        if slide.trend is not None and len(slide.series) >= 2:
            change = slide.trend.p1.y - slide.trend.p0.y
            unit = f" {metric.unit}" if metric.unit else ""
            trend_text = f"<p><strong>Trend:</strong> {change:+.1f}{html.escape(unit)} over {slide.session_count} sessions</p>"

        return f"""
        <section class="slide" id="slide-{number}">
            <p class="counter">{number} / {total} &middot; {html.escape(metric.category)}</p>
            <h2>{html.escape(metric.label)}</h2>
            {trend_text}
            {body}
        </section>
        """

    def _build_html(self, title: str, sections: List[str]) -> str:
        generated = datetime.now().strftime("%Y-%m-%d %H:%M")
        slides_html = "".join(sections) if sections else '<div class="empty">No metrics selected</div>'

        return f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{html.escape(title)}</title>
    <style>
        body {{
            font-family: Arial, sans-serif;
            margin: 0;
            background-color: #0a0a0a;
            color: #f5f0e6;
        }}
        .container {{
            max-width: 1100px;
            margin: 0 auto;
            padding: 30px;
        }}
        h1 {{
            color: #cb6b1e;
            border-bottom: 3px solid #cb6b1e;
            padding-bottom: 10px;
        }}
        .slide {{
            min-height: 90vh;
            padding: 30px 0;
            border-bottom: 1px solid #262626;
        }}
        .counter {{
            color: #a3a3a3;
            font-size: 13px;
        }}
        .chart {{
            margin: 20px 0;
            text-align: center;
            background-color: white;
        }}
        .chart img {{
            max-width: 100%;
            height: auto;
        }}
        .empty {{
            padding: 80px 0;
            text-align: center;
            color: #a3a3a3;
        }}
        .footer {{
            margin-top: 40px;
            text-align: center;
            color: #737373;
            font-size: 12px;
        }}
    </style>
</head>
<body>
    <div class="container">
        <h1>{html.escape(title)}</h1>
        {slides_html}
        <div class="footer">
            <p>Generated {generated} by swing-trends {APP_VERSION}</p>
        </div>
    </div>
</body>
</html>
        """


__all__ = ["PresentationReportGenerator", "PLAYER_COLORS"]
