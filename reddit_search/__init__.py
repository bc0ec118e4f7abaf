"""Public package surface for reddit-search."""
from .client import BASE_URL, DEFAULT_USER_AGENT, Client, ClientConfig, Rate, Response, build_session
from .errors import (
    DecodeError,
    HTTPStatusError,
    ListingDecodeError,
    ListingKindError,
    RateLimitError,
    RedditSearchError,
    RequestBuildError,
    TransportError,
)
from .listing import (
    EmptyListing,
    Post,
    PostListing,
    Posts,
    Subreddit,
    SubredditListing,
    Subreddits,
    User,
    UserListing,
    Users,
    decode_listing,
)
from .options import (
    SearchOptions,
    SearchOptionSetter,
    from_all_time,
    from_the_past_day,
    from_the_past_hour,
    from_the_past_month,
    from_the_past_week,
    from_the_past_year,
    new_search_options,
    set_after,
    set_before,
    set_limit,
    sort_by_best,
    sort_by_controversial,
    sort_by_hot,
    sort_by_new,
    sort_by_number_of_comments,
    sort_by_relevance,
    sort_by_rising,
    sort_by_top,
)
from .search import SearchService, add_query

__version__ = "0.1.0"

__all__ = [
    "BASE_URL",
    "DEFAULT_USER_AGENT",
    "Client",
    "ClientConfig",
    "DecodeError",
    "EmptyListing",
    "HTTPStatusError",
    "ListingDecodeError",
    "ListingKindError",
    "Post",
    "PostListing",
    "Posts",
    "Rate",
    "RateLimitError",
    "RedditSearchError",
    "RequestBuildError",
    "Response",
    "SearchOptionSetter",
    "SearchOptions",
    "SearchService",
    "Subreddit",
    "SubredditListing",
    "Subreddits",
    "TransportError",
    "User",
    "UserListing",
    "Users",
    "add_query",
    "build_session",
    "decode_listing",
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
    "__version__",
]
