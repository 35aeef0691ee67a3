"""
Charts Module - Plotly figures for the gallery and the commit dashboard
Each builder returns a small view object holding a JSON-ready plotly figure
plus whatever the page binds around it (legend entries, tooltips, markers).
The browser draws the figure with plotly.js as-is.
"""

import json
from dataclasses import dataclass
from datetime import timedelta, timezone
from typing import Dict, List, Optional

import numpy as np
import plotly.graph_objects as go
from plotly.colors import qualitative
from plotly.utils import PlotlyJSONEncoder

from .aggregate import cumulative_lines, language_breakdown
from .selection import state_to_args, toggle_selection

COLORWAY = qualitative.T10

PIE_SIZE = 300

SCATTER_WIDTH = 1000
SCATTER_HEIGHT = 600
SCATTER_MARGIN = dict(t=10, r=10, b=30, l=20)
RADIUS_RANGE = (2, 30)
DAY_HOURS = (6, 18)

LINE_WIDTH = 800
LINE_HEIGHT = 400
LINE_MARGIN = dict(t=20, r=30, b=30, l=40)
MARKER_COLOR = '#ff6b6b'
LINE_TITLE = 'Cumulative Lines of Code Over Time'

TOOLTIP_OFFSET = 10


def figure_dict(fig):
    """JSON-safe plotly figure (no numpy arrays or datetimes left inside)"""
    return json.loads(json.dumps(fig.to_plotly_json(), cls=PlotlyJSONEncoder))


def ordinal_color(domain):
    """Assign Tableau10 colours to keys in first-seen order, cycling"""
    colors = {}
    for key in domain:
        if key not in colors:
            colors[key] = COLORWAY[len(colors) % len(COLORWAY)]
    return colors


def wall_clock(moment):
    """The committer's local time, which is what the axes show"""
    return moment.replace(tzinfo=None)


def wall_seconds(moment):
    """Axis position of a timestamp in seconds, matching the date axis"""
    return moment.replace(tzinfo=timezone.utc).timestamp()


# ========== PIE ========== #

@dataclass
class ArcView:
    index: int
    key: object
    count: int
    color: str
    label: str
    selected: bool
    toggle_args: dict


@dataclass
class PieView:
    arcs: List[ArcView]
    figure: dict


def pie_chart(buckets, state):
    """One wedge per bucket in bucket order, with a paired legend entry"""
    colors = ordinal_color(b.key for b in buckets)
    arcs = [ArcView(index=index,
                    key=bucket.key,
                    count=bucket.count,
                    color=colors[bucket.key],
                    label=f"{bucket.key} ({bucket.count})",
                    selected=state.selected_index == index,
                    toggle_args=state_to_args(toggle_selection(state, index)))
            for index, bucket in enumerate(buckets)]

    fig = go.Figure(go.Pie(
        labels=[arc.label for arc in arcs],
        values=[arc.count for arc in arcs],
        customdata=[arc.index for arc in arcs],
        marker=dict(colors=[arc.color for arc in arcs], line=dict(color='white', width=1)),
        pull=[0.08 if arc.selected else 0 for arc in arcs],
        sort=False,
        direction='clockwise',
        textinfo='none',
        hovertemplate='%{label}<extra></extra>',
    ))
    fig.update_layout(
        width=PIE_SIZE,
        height=PIE_SIZE,
        showlegend=False,
        margin=dict(t=0, r=0, b=0, l=0),
        paper_bgcolor='rgba(0,0,0,0)',
    )
    return PieView(arcs=arcs, figure=figure_dict(fig))


# ========== TOOLTIP ========== #

@dataclass
class TooltipView:
    visible: bool
    id: str = ''
    url: str = ''
    date: str = ''
    time: str = ''
    author: str = ''
    lines: Optional[int] = None


def format_full_date(moment):
    return f"{moment:%A, %B} {moment.day}, {moment.year}"


def format_short_time(moment):
    hour = moment.hour % 12 or 12
    return f"{hour}:{moment.minute:02d} {'AM' if moment.hour < 12 else 'PM'}"


def tooltip_view(commit):
    """Tooltip content for a hovered commit; hidden when there is nothing to show"""
    if not commit:
        return TooltipView(visible=False)
    return TooltipView(
        visible=True,
        id=commit.id,
        url=commit.url,
        date=format_full_date(commit.datetime),
        time=format_short_time(commit.datetime),
        author=commit.author,
        lines=commit.total_lines,
    )


# ========== SCATTER ========== #

@dataclass
class ScatterView:
    figure: dict
    ids: List[str]
    tooltips: Dict[str, TooltipView]


def sqrt_radius(values, range_=RADIUS_RANGE):
    """
    Radii on a square-root scale over [min, max] of values, so circle area
    tracks the value. A collapsed domain maps to the middle of the range.
    """
    roots = np.sqrt(np.clip(np.asarray(values, dtype=float), 0, None))
    if roots.size == 0:
        return []
    lo, hi = roots.min(), roots.max()
    if hi == lo:
        return [(range_[0] + range_[1]) / 2] * int(roots.size)
    return np.interp(roots, [lo, hi], range_).tolist()


def day_range(moments):
    """Whole days around the given wall-clock times"""
    if not moments:
        return None
    start = min(moments).replace(hour=0, minute=0, second=0, microsecond=0)
    latest = max(moments)
    stop = latest.replace(hour=0, minute=0, second=0, microsecond=0)
    if stop < latest or stop == start:
        stop += timedelta(days=1)
    return [start, stop]


def gridline_color(hour):
    return 'orange' if DAY_HOURS[0] <= hour < DAY_HOURS[1] else 'steelblue'


def scatter_plot(commits):
    """Commits by date and time of day, sized by lines edited"""
    # largest first so smaller dots stay on top and hoverable
    ordered = sorted(commits, key=lambda c: -c.total_lines)
    radii = sqrt_radius([c.total_lines for c in ordered])
    hours = list(range(0, 25, 2))
    span = day_range([wall_clock(c.datetime) for c in ordered])

    fig = go.Figure(go.Scatter(
        x=[wall_clock(c.datetime).isoformat() for c in ordered],
        y=[c.hour_frac for c in ordered],
        customdata=[c.id for c in ordered],
        mode='markers',
        marker=dict(size=[2 * r for r in radii], sizemode='diameter',
                    color='steelblue', opacity=0.7),
        selected=dict(marker=dict(color=MARKER_COLOR, opacity=1)),
        hoverinfo='none',
    ))
    fig.update_layout(
        width=SCATTER_WIDTH,
        height=SCATTER_HEIGHT,
        margin=SCATTER_MARGIN,
        dragmode='select',
        showlegend=False,
        plot_bgcolor='white',
        xaxis=dict(type='date', range=[d.isoformat() for d in span] if span else None,
                   showgrid=False),
        yaxis=dict(range=[0, 24], tickvals=hours, ticktext=[f"{h % 24:02d}:00" for h in hours],
                   showgrid=False, automargin=True),
        shapes=[dict(type='line', layer='below', xref='paper', x0=0, x1=1, yref='y', y0=h, y1=h,
                     line=dict(color=gridline_color(h), width=1), opacity=0.5)
                for h in hours],
    )
    return ScatterView(
        figure=figure_dict(fig),
        ids=[c.id for c in ordered],
        tooltips={c.id: tooltip_view(c) for c in ordered},
    )


# ========== BRUSH ========== #

@dataclass(frozen=True)
class Brush:
    """Selection rectangle in axis units: x in seconds, y in hours"""
    x0: float
    y0: float
    x1: float
    y1: float

    @classmethod
    def from_corners(cls, x0, y0, x1, y1):
        return cls(min(x0, x1), min(y0, y1), max(x0, x1), max(y0, y1))

    @property
    def empty(self):
        return self.x0 == self.x1 or self.y0 == self.y1


def is_commit_selected(brush, commit):
    """Closed-rectangle containment of the commit's plotted position"""
    if brush is None or brush.empty:
        return False
    x = wall_seconds(commit.datetime)
    return brush.x0 <= x <= brush.x1 and brush.y0 <= commit.hour_frac <= brush.y1


@dataclass
class BrushSummary:
    selected_ids: List[str]
    count_text: str
    breakdown: List[dict]


def brush_summary(commits, brush):
    """Selected commits, their count line and their language breakdown"""
    selected = [c for c in commits if is_commit_selected(brush, c)]
    return BrushSummary(
        selected_ids=[c.id for c in selected],
        count_text=f"{len(selected) or 'No'} commits selected",
        breakdown=language_breakdown(selected),
    )


# ========== CUMULATIVE LINES ========== #

@dataclass
class PointView:
    x: str
    cumulative: float


@dataclass
class LineChartView:
    figure: dict
    points: List[PointView]
    marker: Optional[PointView] = None
    title: str = LINE_TITLE


def cumulative_chart(commits, current_file=None):
    """Cumulative lines over time, marking the commit closest to current_file"""
    series = cumulative_lines(commits)
    points = [PointView(x=wall_clock(p.order).isoformat(), cumulative=p.cumulative) for p in series]

    marker = None
    if current_file is not None and series:
        target = current_file.last_commit.timestamp()
        closest = min(range(len(series)), key=lambda i: abs(series[i].order.timestamp() - target))
        marker = points[closest]

    fig = go.Figure(go.Scatter(
        x=[p.x for p in points],
        y=[p.cumulative for p in points],
        mode='lines+markers',
        line=dict(color='steelblue', width=2),
        marker=dict(size=8, color='steelblue', line=dict(color='white', width=1.5)),
        hovertemplate='%{x}<br>%{y} lines<extra></extra>',
    ))
    shapes = []
    if marker is not None:
        fig.add_trace(go.Scatter(
            x=[marker.x], y=[marker.cumulative], mode='markers', hoverinfo='skip',
            marker=dict(size=16, color=MARKER_COLOR, line=dict(color='white', width=2)),
        ))
        shapes.append(dict(type='line', name='time-marker', xref='x', x0=marker.x, x1=marker.x,
                           yref='paper', y0=0, y1=1,
                           line=dict(color=MARKER_COLOR, width=2, dash='dash')))
    fig.update_layout(
        title=dict(text=LINE_TITLE, x=0.5, automargin=True),
        width=LINE_WIDTH,
        height=LINE_HEIGHT,
        margin=LINE_MARGIN,
        showlegend=False,
        plot_bgcolor='white',
        xaxis=dict(type='date', showgrid=False),
        yaxis=dict(rangemode='tozero', gridcolor='#eee', automargin=True),
        shapes=shapes,
    )
    return LineChartView(figure=figure_dict(fig), points=points, marker=marker)
