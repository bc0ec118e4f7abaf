from __future__ import annotations

import pytest

from reddit_search.options import (
    SORT_SETTERS,
    TIME_FILTER_SETTERS,
    SearchOptions,
    _set_query,
    _set_restrict,
    _set_type,
    from_all_time,
    from_the_past_day,
    from_the_past_week,
    new_search_options,
    set_after,
    set_before,
    set_limit,
    sort_by_hot,
    sort_by_new,
    sort_by_number_of_comments,
    sort_by_top,
)


def test_new_search_options_without_setters_is_empty():
    assert new_search_options() == {}


def test_cursors_and_limit_are_passed_through_verbatim():
    params = new_search_options(set_after("t3_abc"), set_before("t3_xyz"), set_limit(1))

    assert params == {"after": "t3_abc", "before": "t3_xyz", "limit": "1"}


@pytest.mark.parametrize(
    ("setters", "expected"),
    [
        ((sort_by_hot, sort_by_new), "new"),
        ((sort_by_new, sort_by_hot), "hot"),
        ((sort_by_top, sort_by_top), "top"),
        ((sort_by_top, sort_by_number_of_comments), "comments"),
    ],
)
def test_last_sort_setter_wins(setters, expected):
    assert new_search_options(*setters)["sort"] == expected


def test_last_time_filter_and_cursor_win():
    params = new_search_options(
        from_the_past_day,
        set_after("t3_first"),
        from_all_time,
        set_after("t3_second"),
    )

    assert params == {"after": "t3_second", "t": "all"}


def test_sort_and_time_catalogues_cover_every_value():
    assert sorted(SORT_SETTERS) == sorted(
        ["hot", "best", "new", "rising", "controversial", "top", "relevance", "comments"]
    )
    assert list(TIME_FILTER_SETTERS) == ["hour", "day", "week", "month", "year", "all"]

    for value, setter in SORT_SETTERS.items():
        assert new_search_options(setter) == {"sort": value}
    for value, setter in TIME_FILTER_SETTERS.items():
        assert new_search_options(setter) == {"t": value}


def test_internal_setters_fill_type_query_and_restriction():
    params = new_search_options(_set_type("sr"), _set_query("cats & dogs"), _set_restrict)

    assert params == {"q": "cats & dogs", "restrict_sr": "true", "type": "sr"}


def test_params_are_sorted_by_key():
    params = new_search_options(_set_type("link"), from_the_past_week, sort_by_new, set_limit(10), set_after("t3_a"))

    assert list(params) == ["after", "limit", "sort", "t", "type"]


def test_setters_do_not_mutate_their_input():
    original = SearchOptions(sort="hot")

    updated = sort_by_new(original)

    assert original.sort == "hot"
    assert updated.sort == "new"
    assert updated is not original


def test_setters_are_reusable_across_folds():
    limit_ten = set_limit(10)

    first = new_search_options(limit_ten, sort_by_new)
    second = new_search_options(limit_ten)

    assert first == {"limit": "10", "sort": "new"}
    assert second == {"limit": "10"}


@pytest.mark.parametrize("value", [2.5, 25.0, "25", True, None])
def test_set_limit_rejects_non_integers(value):
    with pytest.raises(TypeError):
        set_limit(value)
