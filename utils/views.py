"""
Views Module - List rendering and the shared filter/aggregate/chart/list component

FilterView is instantiated once per page with its own key function, chart
builder and card template. render() is a pure function of
(records, selection state, scroll window) returning a PageView that the
templates or the JSON endpoints bind.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Callable, List, Optional
from .aggregate import AggregateBucket, group
from .charts import format_full_date, format_short_time, ordinal_color
from .selection import (SelectionState, ViewWindow, filter_records, state_to_args,
                        toggle_selection, window_from_scroll)

PLACEHOLDER_TITLE = 'Untitled project'
PLACEHOLDER_IMAGE = 'https://vis-society.github.io/labs/2/images/empty.svg'
PLACEHOLDER_DESCRIPTION = 'No description yet.'


@dataclass
class CardView:
    heading: str
    heading_level: str = 'h2'
    lead: Optional[str] = None
    image: Optional[str] = None
    description: Optional[str] = None
    meta: Optional[str] = None
    url: Optional[str] = None
    top: Optional[int] = None


@dataclass
class ListView:
    title: str
    count: int
    items: List[CardView]

    @property
    def heading(self):
        return f"{self.title} ({self.count})"


@dataclass
class LegendItem:
    index: int
    key: Any
    count: int
    color: str
    selected: bool
    toggle_args: dict


@dataclass
class PageView:
    state: SelectionState
    buckets: List[AggregateBucket]
    legend: List[LegendItem]
    chart: Any
    list: ListView
    window: Optional[ViewWindow] = None
    visible: list = field(default_factory=list, repr=False)


# ========== CARDS ========== #

def project_card(project, index=0, position=0, heading_level='h2'):
    """Gallery card, falling back to placeholders for absent fields"""
    return CardView(
        heading=project.title or PLACEHOLDER_TITLE,
        heading_level=heading_level,
        image=project.image or PLACEHOLDER_IMAGE,
        description=project.description or PLACEHOLDER_DESCRIPTION,
        meta=str(project.year) if project.year is not None else None,
    )


def commit_item(commit, index, position=0, item_height=120):
    """Narrative paragraph for one commit in the scrolling story"""
    when = f"{format_full_date(commit.datetime)} at {format_short_time(commit.datetime)}"
    link = 'another glorious commit' if index > 0 else 'my first commit, and it was glorious'
    file_count = len(group(commit.lines, lambda d: d.file))
    return CardView(
        heading=link,
        heading_level='p',
        url=commit.url,
        lead=f"On {when}, I made",
        description=(f". I edited {commit.total_lines} lines across "
                     f"{file_count} files. Then I looked over all I had made, "
                     f"and I saw that it was very good."),
        top=position * item_height,
    )


def file_item(summary, index, position=0, item_height=120):
    """Narrative paragraph for one file in the scrolling story"""
    moment = summary.last_commit
    when = f"{format_full_date(moment)} at {format_short_time(moment)}"
    tech_count = len(group(summary.lines, lambda d: d.type))
    return CardView(
        heading=summary.name,
        heading_level='code',
        lead=f"On {when}, I worked on",
        description=(f". I edited {summary.line_count} lines across "
                     f"{tech_count} different technologies. The file was growing steadily, "
                     f"and I was proud of my progress."),
        top=position * item_height,
    )


@dataclass
class FileUnitView:
    name: str
    line_count: int
    colors: List[str]


def files_view(files):
    """Unit chart: one dot per line, coloured by line type, largest files first"""
    ordered = sorted(files, key=lambda f: -f.line_count)
    palette = ordinal_color(line.type for f in ordered for line in f.lines)
    return [FileUnitView(name=f.name, line_count=f.line_count,
                         colors=[palette[line.type] for line in f.lines])
            for f in ordered]


# ========== COMPONENT ========== #

class FilterView:
    """Filter + aggregate + chart + list, parameterized per page"""

    def __init__(self, title: str, key_fn: Callable, chart_fn: Callable, card_fn: Callable,
                 visible_count: Optional[int] = None, item_height: int = 120):
        self.title = title
        self.key_fn = key_fn
        self.chart_fn = chart_fn
        self.card_fn = card_fn
        # scrollytelling pages window the filtered set, galleries show it all
        self.visible_count = visible_count
        self.item_height = item_height

    def legend(self, buckets, state):
        colors = ordinal_color(b.key for b in buckets)
        return [LegendItem(index=i, key=b.key, count=b.count, color=colors[b.key],
                           selected=state.selected_index == i,
                           toggle_args=state_to_args(toggle_selection(state, i)))
                for i, b in enumerate(buckets)]

    def render(self, records, state=None, offset=0) -> PageView:
        state = state or SelectionState()
        filtered, buckets = filter_records(records, state, self.key_fn)
        window = None
        if self.visible_count is not None:
            window = window_from_scroll(offset, self.item_height, self.visible_count, len(filtered))
            visible = window.slice(filtered)
            start = window.start_index
        else:
            visible = filtered
            start = 0

        items = [self.card_fn(record, start + i, i) for i, record in enumerate(visible)]
        return PageView(
            state=state,
            buckets=buckets,
            legend=self.legend(buckets, state),
            chart=self.chart_fn(visible, buckets, state),
            list=ListView(title=self.title, count=len(filtered), items=items),
            window=window,
            visible=visible,
        )


def serialize_page(view):
    """JSON-ready form of a PageView, without the underlying records"""
    return {
        'state': asdict(view.state),
        'buckets': [asdict(b) for b in view.buckets],
        'legend': [asdict(item) for item in view.legend],
        'chart': asdict(view.chart) if view.chart is not None else None,
        'list': {
            'heading': view.list.heading,
            'count': view.list.count,
            'items': [asdict(item) for item in view.list.items],
        },
        'window': ({'start_index': view.window.start_index,
                    'stop': view.window.stop,
                    'total': view.window.total} if view.window else None),
    }
