"""Composable search options.

Every option is a setter: a plain function that takes a ``SearchOptions``
and returns a new one with a single field replaced. Setters are folded in
order, so when two of them touch the same field the later one wins::

    params = new_search_options(set_limit(25), sort_by_top, sort_by_new)
    # {"limit": "25", "sort": "new"}

Note: Reddit's handling of ``limit`` is inconsistent; ``limit=1`` sometimes
returns no results at all. The value is passed through unchanged.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable


@dataclass(frozen=True, slots=True)
class SearchOptions:
    """Query parameters accepted by the search endpoint."""

    after: str | None = None
    before: str | None = None
    limit: int | None = None
    sort: str | None = None
    time_filter: str | None = None
    search_type: str | None = None
    query: str | None = None
    restrict_subreddit: bool = False

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.after is not None:
            params["after"] = self.after
        if self.before is not None:
            params["before"] = self.before
        if self.limit is not None:
            params["limit"] = str(self.limit)
        if self.query is not None:
            params["q"] = self.query
        if self.restrict_subreddit:
            params["restrict_sr"] = "true"
        if self.sort is not None:
            params["sort"] = self.sort
        if self.time_filter is not None:
            params["t"] = self.time_filter
        if self.search_type is not None:
            params["type"] = self.search_type
        return dict(sorted(params.items()))


SearchOptionSetter = Callable[[SearchOptions], SearchOptions]


def new_search_options(*setters: SearchOptionSetter) -> dict[str, str]:
    """Apply ``setters`` in order to empty options and return the query parameters."""
    options = SearchOptions()
    for setter in setters:
        options = setter(options)
    return options.to_params()


def set_after(cursor: str) -> SearchOptionSetter:
    """Return results after the given fullname cursor (e.g. ``t3_abc``)."""

    def setter(options: SearchOptions) -> SearchOptions:
        return replace(options, after=cursor)

    return setter


def set_before(cursor: str) -> SearchOptionSetter:
    """Return results before the given fullname cursor."""

    def setter(options: SearchOptions) -> SearchOptions:
        return replace(options, before=cursor)

    return setter


def set_limit(limit: int) -> SearchOptionSetter:
    """Request ``limit`` results per page.

    Warning: a limit of 1 sometimes yields zero results from Reddit.
    """
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise TypeError(f"limit must be an integer, got {limit!r}")

    def setter(options: SearchOptions) -> SearchOptions:
        return replace(options, limit=limit)

    return setter


def sort_by_hot(options: SearchOptions) -> SearchOptions:
    return replace(options, sort="hot")


def sort_by_best(options: SearchOptions) -> SearchOptions:
    return replace(options, sort="best")


def sort_by_new(options: SearchOptions) -> SearchOptions:
    return replace(options, sort="new")


def sort_by_rising(options: SearchOptions) -> SearchOptions:
    return replace(options, sort="rising")


def sort_by_controversial(options: SearchOptions) -> SearchOptions:
    return replace(options, sort="controversial")


def sort_by_top(options: SearchOptions) -> SearchOptions:
    return replace(options, sort="top")


def sort_by_relevance(options: SearchOptions) -> SearchOptions:
    return replace(options, sort="relevance")


def sort_by_number_of_comments(options: SearchOptions) -> SearchOptions:
    """Sort by comment count, highest first."""
    return replace(options, sort="comments")


def from_the_past_hour(options: SearchOptions) -> SearchOptions:
    return replace(options, time_filter="hour")


def from_the_past_day(options: SearchOptions) -> SearchOptions:
    return replace(options, time_filter="day")


def from_the_past_week(options: SearchOptions) -> SearchOptions:
    return replace(options, time_filter="week")


def from_the_past_month(options: SearchOptions) -> SearchOptions:
    return replace(options, time_filter="month")


def from_the_past_year(options: SearchOptions) -> SearchOptions:
    return replace(options, time_filter="year")


def from_all_time(options: SearchOptions) -> SearchOptions:
    return replace(options, time_filter="all")


def _set_type(search_type: str) -> SearchOptionSetter:
    # link, sr or user
    def setter(options: SearchOptions) -> SearchOptions:
        return replace(options, search_type=search_type)

    return setter


def _set_query(query: str) -> SearchOptionSetter:
    def setter(options: SearchOptions) -> SearchOptions:
        return replace(options, query=query)

    return setter


def _set_restrict(options: SearchOptions) -> SearchOptions:
    return replace(options, restrict_subreddit=True)


SORT_SETTERS: dict[str, SearchOptionSetter] = {
    "hot": sort_by_hot,
    "best": sort_by_best,
    "new": sort_by_new,
    "rising": sort_by_rising,
    "controversial": sort_by_controversial,
    "top": sort_by_top,
    "relevance": sort_by_relevance,
    "comments": sort_by_number_of_comments,
}

TIME_FILTER_SETTERS: dict[str, SearchOptionSetter] = {
    "hour": from_the_past_hour,
    "day": from_the_past_day,
    "week": from_the_past_week,
    "month": from_the_past_month,
    "year": from_the_past_year,
    "all": from_all_time,
}

__all__ = [
    "SORT_SETTERS",
    "TIME_FILTER_SETTERS",
    "SearchOptionSetter",
    "SearchOptions",
    "from_all_time",
    "from_the_past_day",
    "from_the_past_hour",
    "from_the_past_month",
    "from_the_past_week",
    "from_the_past_year",
    "new_search_options",
    "set_after",
    "set_before",
    "set_limit",
    "sort_by_best",
    "sort_by_controversial",
    "sort_by_hot",
    "sort_by_new",
    "sort_by_number_of_comments",
    "sort_by_relevance",
    "sort_by_rising",
    "sort_by_top",
]
