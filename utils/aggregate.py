"""
Aggregate Module - Grouping and summary statistics over loaded records
All functions are pure: inputs are never mutated and results are rebuilt on
every call.
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List
from models import Commit, FileSummary


@dataclass(frozen=True)
class AggregateBucket:
    key: Any
    count: int


@dataclass(frozen=True)
class CumulativePoint:
    key: Any
    order: Any
    total: float
    cumulative: float


def group(records: Iterable, key_fn: Callable) -> dict:
    """Group records by key, preserving first-seen key order"""
    groups = {}
    for record in records:
        groups.setdefault(key_fn(record), []).append(record)
    return groups


def aggregate(records: Iterable, key_fn: Callable) -> List[AggregateBucket]:
    """
    Count records per key

    Example:
        >>> aggregate(projects, lambda p: p.year)
        [AggregateBucket(key=2020, count=2), AggregateBucket(key=2021, count=1)]
    """
    return [AggregateBucket(key, len(items)) for key, items in group(records, key_fn).items()]


def as_number(value):
    """Treat None and NaN as a zero contribution"""
    if value is None:
        return 0
    try:
        if math.isnan(value):
            return 0
    except TypeError:
        return 0
    return value


def aggregate_sum(records, key_fn, value_fn, order_fn) -> List[CumulativePoint]:
    """
    Sum value_fn per key, order groups ascending by order_fn of each group's
    first record, and attach a running total across the ordered groups.
    """
    groups = group(records, key_fn)
    totals = []
    for key, items in groups.items():
        totals.append((order_fn(items[0]), key, sum(as_number(value_fn(r)) for r in items)))
    totals.sort(key=lambda t: t[0])

    points = []
    running = 0
    for order, key, total in totals:
        running += total
        points.append(CumulativePoint(key=key, order=order, total=total, cumulative=running))
    return points


# ========== COMMITS ========== #

def process_commits(lines, url_base=''):
    """Group line records into commits, first-seen order"""
    return [Commit.from_lines(commit_id, items, url_base)
            for commit_id, items in group(lines, lambda d: d.commit).items()]


def cumulative_lines(commits):
    """Cumulative total lines per distinct commit timestamp"""
    return aggregate_sum(
        commits,
        key_fn=lambda c: c.datetime.timestamp(),
        value_fn=lambda c: c.total_lines,
        order_fn=lambda c: c.datetime,
    )


def day_period(moment):
    """English short day period for a timestamp, as browsers format it"""
    minutes = moment.hour * 60 + moment.minute
    if minutes == 12 * 60:
        return 'noon'
    if 6 * 60 <= minutes < 12 * 60:
        return 'in the morning'
    if 12 * 60 < minutes < 18 * 60:
        return 'in the afternoon'
    if 18 * 60 <= minutes < 21 * 60:
        return 'in the evening'
    return 'at night'


def commit_stats(lines, commits):
    """Summary figures shown above the commit dashboard"""
    line_numbers = [d.line for d in lines if d.line is not None]
    lengths = [d.length for d in lines if d.length is not None]
    periods = aggregate(lines, lambda d: day_period(d.datetime))
    busiest = None
    for bucket in periods:
        # first-seen bucket wins ties
        if busiest is None or bucket.count > busiest.count:
            busiest = bucket

    return {
        'total_loc': len(lines),
        'total_commits': len(commits),
        'max_file_length': max(line_numbers) if line_numbers else None,
        'avg_line_length': f"{sum(lengths) / len(lengths):.2f}" if lengths else None,
        'most_work_period': busiest.key if busiest else None,
    }


# ========== FILES ========== #

def group_files(lines):
    """One FileSummary per file, first-seen order"""
    return [FileSummary(name=name, lines=tuple(items), last_commit=max(d.datetime for d in items))
            for name, items in group(lines, lambda d: d.file).items()]


def files_by_last_commit(lines):
    """Files in order of the last commit that touched them"""
    return sorted(group_files(lines), key=lambda f: f.last_commit)


def format_percent(proportion):
    """Percentage with at most one decimal, trailing zeros trimmed"""
    text = f"{proportion * 100:.1f}"
    if text.endswith('.0'):
        text = text[:-2]
    return f"{text}%"


def language_breakdown(commits):
    """Line counts per language across the given commits"""
    lines = [line for commit in commits for line in commit.lines]
    if not lines:
        return []
    return [{'language': bucket.key,
             'count': bucket.count,
             'percent': format_percent(bucket.count / len(lines))}
            for bucket in aggregate(lines, lambda d: d.type)]
