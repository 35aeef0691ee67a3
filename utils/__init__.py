"""
Utils Package - Centralized utility modules initialization
"""

from .data import FetchError, load_data, load_projects, load_lines
from .aggregate import (
    AggregateBucket,
    aggregate,
    aggregate_sum,
    process_commits,
    commit_stats,
    files_by_last_commit,
    group_files,
    language_breakdown
)
from .selection import (
    SelectionState,
    ViewWindow,
    set_query,
    toggle_selection,
    filter_records,
    state_from_args,
    window_from_scroll
)
from .charts import (
    Brush,
    pie_chart,
    scatter_plot,
    cumulative_chart,
    brush_summary,
    tooltip_view
)
from .views import (
    FilterView,
    project_card,
    commit_item,
    file_item,
    files_view,
    serialize_page
)

__all__ = [
    # Data
    'FetchError',
    'load_data',
    'load_projects',
    'load_lines',

    # Aggregate
    'AggregateBucket',
    'aggregate',
    'aggregate_sum',
    'process_commits',
    'commit_stats',
    'files_by_last_commit',
    'group_files',
    'language_breakdown',

    # Selection
    'SelectionState',
    'ViewWindow',
    'set_query',
    'toggle_selection',
    'filter_records',
    'state_from_args',
    'window_from_scroll',

    # Charts
    'Brush',
    'pie_chart',
    'scatter_plot',
    'cumulative_chart',
    'brush_summary',
    'tooltip_view',

    # Views
    'FilterView',
    'project_card',
    'commit_item',
    'file_item',
    'files_view',
    'serialize_page'
]
