"""Tests for grouping, cumulative sums and commit summaries."""

from dataclasses import asdict

from utils.aggregate import (
    AggregateBucket, aggregate, aggregate_sum, commit_stats, cumulative_lines,
    day_period, files_by_last_commit, format_percent, group_files, language_breakdown,
)


class TestAggregate:
    def test_counts_in_first_seen_order(self):
        years = [2020, 2020, 2021, 2022, 2022]
        assert aggregate(years, lambda y: y) == [
            AggregateBucket(2020, 2), AggregateBucket(2021, 1), AggregateBucket(2022, 2),
        ]

    def test_first_seen_order_not_sorted(self):
        buckets = aggregate([2022, 2020, 2022], lambda y: y)
        assert [b.key for b in buckets] == [2022, 2020]

    def test_counts_sum_to_input_length(self, projects):
        buckets = aggregate(projects, lambda p: p.year)
        assert sum(b.count for b in buckets) == len(projects)

    def test_does_not_mutate_input(self, projects):
        before = list(projects)
        aggregate(projects, lambda p: p.year)
        assert projects == before

    def test_empty_input(self):
        assert aggregate([], lambda r: r) == []


class TestAggregateSum:
    def test_running_total_ordered_by_order_key(self):
        rows = [('b', 2, 5), ('a', 1, 3), ('b', 2, 1), ('c', 3, 4)]
        points = aggregate_sum(rows, key_fn=lambda r: r[0], value_fn=lambda r: r[2],
                               order_fn=lambda r: r[1])
        assert [(p.key, p.total, p.cumulative) for p in points] == [
            ('a', 3, 3), ('b', 6, 9), ('c', 4, 13),
        ]

    def test_missing_and_nan_values_count_as_zero(self):
        rows = [('a', 1, None), ('b', 2, float('nan')), ('c', 3, 2)]
        points = aggregate_sum(rows, key_fn=lambda r: r[0], value_fn=lambda r: r[2],
                               order_fn=lambda r: r[1])
        assert [p.key for p in points] == ['a', 'b', 'c']
        assert [p.cumulative for p in points] == [0, 0, 2]

    def test_cumulative_series_is_non_decreasing(self, commits):
        series = cumulative_lines(commits)
        values = [p.cumulative for p in series]
        assert values == sorted(values)
        assert values[-1] == sum(c.total_lines for c in commits)


class TestCommits:
    def test_groups_lines_by_commit(self, commits):
        assert [c.id for c in commits] == ['c1', 'c2', 'c3']
        assert [c.total_lines for c in commits] == [3, 1, 2]
        assert commits[0].url == 'https://example.com/commit/c1'

    def test_hour_fraction(self, commits):
        assert commits[0].hour_frac == 9.5
        assert commits[2].hour_frac == 21.25

    def test_lines_are_attached_but_not_a_field(self, commits):
        assert len(commits[0].lines) == 3
        assert 'lines' not in asdict(commits[0])

    def test_stats(self, lines, commits):
        stats = commit_stats(lines, commits)
        assert stats['total_loc'] == 6
        assert stats['total_commits'] == 3
        assert stats['max_file_length'] == 3
        assert stats['avg_line_length'] == '30.00'
        assert stats['most_work_period'] == 'in the morning'

    def test_stats_without_lines(self):
        stats = commit_stats([], [])
        assert stats['total_loc'] == 0
        assert stats['max_file_length'] is None
        assert stats['most_work_period'] is None


class TestDayPeriod:
    def test_periods(self, make_line):
        def at(hhmm):
            return make_line(when=f'2024-01-01T{hhmm}:00-05:00').datetime
        assert day_period(at('07:00')) == 'in the morning'
        assert day_period(at('12:00')) == 'noon'
        assert day_period(at('15:30')) == 'in the afternoon'
        assert day_period(at('19:00')) == 'in the evening'
        assert day_period(at('23:00')) == 'at night'
        assert day_period(at('02:00')) == 'at night'


class TestFiles:
    def test_group_files_first_seen(self, lines):
        files = group_files(lines)
        assert [(f.name, f.line_count) for f in files] == [('a.js', 3), ('b.css', 1), ('c.html', 2)]

    def test_files_by_last_commit(self, lines):
        files = files_by_last_commit(lines)
        assert [f.name for f in files] == ['b.css', 'a.js', 'c.html']
        assert files[1].primary_type == 'js'

    def test_language_breakdown(self, commits):
        assert language_breakdown(commits[:1]) == [
            {'language': 'js', 'count': 2, 'percent': '66.7%'},
            {'language': 'css', 'count': 1, 'percent': '33.3%'},
        ]

    def test_language_breakdown_empty(self):
        assert language_breakdown([]) == []

    def test_format_percent_trims_zeros(self):
        assert format_percent(0.5) == '50%'
        assert format_percent(1) == '100%'
        assert format_percent(0.125) == '12.5%'
