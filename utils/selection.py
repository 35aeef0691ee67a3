"""
Selection Module - Filter state for the gallery and dashboard views
State is an immutable value; every user event maps to a reducer returning a
new state, and the filtered set is always recomputed from scratch.
"""

from dataclasses import dataclass, replace
from typing import Optional
from .aggregate import aggregate


@dataclass(frozen=True)
class SelectionState:
    query: str = ''
    selected_index: Optional[int] = None


def set_query(state, query):
    """New text query; always clears the category selection"""
    return replace(state, query=query or '', selected_index=None)


def toggle_selection(state, index):
    """none -> index -> none; picking another index replaces the selection"""
    if index is None or index < 0 or state.selected_index == index:
        return replace(state, selected_index=None)
    return replace(state, selected_index=index)


def record_text(record):
    if hasattr(record, 'field_values'):
        values = record.field_values()
    elif isinstance(record, dict):
        values = record.values()
    else:
        values = [record]
    return '\n'.join('' if v is None else str(v) for v in values)


def matches_query(record, query):
    """Case-insensitive substring match over all of a record's field values"""
    if not query:
        return True
    return query.lower() in record_text(record).lower()


def filter_records(records, state, key_fn):
    """
    Apply the text filter, aggregate what is left, then the category filter

    Returns:
        tuple: (filtered records, buckets of the text-filtered set)
    """
    searched = [r for r in records if matches_query(r, state.query)]
    buckets = aggregate(searched, key_fn)
    index = state.selected_index
    if index is None or not 0 <= index < len(buckets):
        return searched, buckets
    key = buckets[index].key
    return [r for r in searched if key_fn(r) == key], buckets


def parse_int(value, default=None):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def state_from_args(args):
    """Read ?query=&selected= from request arguments"""
    index = parse_int(args.get('selected'))
    if index is not None and index < 0:
        index = None
    return SelectionState(query=args.get('query', '') or '', selected_index=index)


def state_to_args(state):
    args = {}
    if state.query:
        args['query'] = state.query
    if state.selected_index is not None:
        args['selected'] = state.selected_index
    return args


# ========== SCROLL WINDOW ========== #

@dataclass(frozen=True)
class ViewWindow:
    start_index: int
    visible_count: int
    total: int

    @property
    def stop(self):
        return min(self.start_index + self.visible_count, self.total)

    def slice(self, records):
        return records[self.start_index:self.stop]


def window_from_scroll(offset, item_height, visible_count, total):
    """Map a scroll offset in pixels to the window of visible items"""
    start = int(max(offset or 0, 0) // item_height)
    start = max(0, min(start, total - visible_count))
    return ViewWindow(start_index=start, visible_count=visible_count, total=total)
