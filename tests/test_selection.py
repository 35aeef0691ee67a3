"""Tests for selection state reducers, filtering and scroll windows."""

import pytest
from werkzeug.datastructures import MultiDict

from utils.selection import (
    SelectionState, filter_records, set_query, state_from_args, state_to_args,
    toggle_selection, window_from_scroll,
)


def by_year(project):
    return project.year


class TestFiltering:
    def test_empty_state_is_identity(self, projects):
        filtered, _ = filter_records(projects, SelectionState(query='', selected_index=None), by_year)
        assert filtered == projects

    def test_query_is_case_insensitive(self, projects):
        filtered, _ = filter_records(projects, SelectionState(query='WEATHER'), by_year)
        assert [p.title for p in filtered] == ['Weather Stories']

    def test_query_matches_any_field_value(self, projects):
        filtered, _ = filter_records(projects, SelectionState(query='kitchen'), by_year)
        assert [p.title for p in filtered] == ['Recipe Finder']
        filtered, _ = filter_records(projects, SelectionState(query='2022'), by_year)
        assert len(filtered) == 2

    def test_category_selects_bucket_key(self, projects):
        filtered, buckets = filter_records(projects, SelectionState(selected_index=2), by_year)
        assert buckets[2].key == 2022
        assert [p.year for p in filtered] == [2022, 2022]

    def test_filters_compose(self, projects):
        state = SelectionState(query='e', selected_index=0)
        filtered, buckets = filter_records(projects, state, by_year)
        assert buckets[0].key == 2020
        assert all(p.year == 2020 and 'e' in p.title.lower() + (p.description or '').lower()
                   for p in filtered)

    def test_out_of_range_selection_is_ignored(self, projects):
        filtered, _ = filter_records(projects, SelectionState(selected_index=9), by_year)
        assert filtered == projects

    @pytest.mark.parametrize('state', [
        SelectionState(),
        SelectionState(query='a'),
        SelectionState(selected_index=1),
        SelectionState(query='zzz', selected_index=0),
    ])
    def test_result_is_deterministic_subset(self, projects, state):
        first, _ = filter_records(projects, state, by_year)
        second, _ = filter_records(projects, state, by_year)
        assert first == second
        assert all(p in projects for p in first)


class TestReducers:
    def test_double_toggle_restores_filtered_set(self, projects):
        state = SelectionState()
        before, _ = filter_records(projects, state, by_year)
        once = toggle_selection(state, 1)
        twice = toggle_selection(once, 1)
        after, _ = filter_records(projects, twice, by_year)
        assert once.selected_index == 1
        assert twice == state
        assert after == before

    def test_toggle_other_index_replaces(self):
        assert toggle_selection(SelectionState(selected_index=0), 2).selected_index == 2

    def test_query_change_clears_selection(self):
        state = set_query(SelectionState(selected_index=1), 'bike')
        assert state == SelectionState(query='bike', selected_index=None)


class TestArgs:
    def test_parses_request_args(self):
        state = state_from_args(MultiDict({'query': 'bike', 'selected': '2'}))
        assert state == SelectionState(query='bike', selected_index=2)

    @pytest.mark.parametrize('raw', ['-1', 'abc', ''])
    def test_bad_selection_means_none(self, raw):
        assert state_from_args(MultiDict({'selected': raw})).selected_index is None

    def test_round_trip_drops_defaults(self):
        assert state_to_args(SelectionState()) == {}
        assert state_to_args(SelectionState(query='x', selected_index=0)) == {'query': 'x', 'selected': 0}


class TestScrollWindow:
    def test_top_of_scroll(self):
        window = window_from_scroll(0, 120, 10, 30)
        assert (window.start_index, window.stop) == (0, 10)

    def test_one_page_down(self):
        window = window_from_scroll(1200, 120, 10, 30)
        assert (window.start_index, window.stop) == (10, 20)

    def test_partial_item_rounds_down(self):
        assert window_from_scroll(239, 120, 10, 30).start_index == 1

    def test_clamped_at_max_scroll(self):
        window = window_from_scroll(100000, 120, 10, 30)
        assert (window.start_index, window.stop) == (20, 30)

    def test_fewer_items_than_window(self):
        window = window_from_scroll(600, 120, 10, 4)
        assert (window.start_index, window.stop) == (0, 4)

    def test_empty(self):
        window = window_from_scroll(0, 120, 10, 0)
        assert window.slice([]) == []
