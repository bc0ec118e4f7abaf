"""Search operations for posts, subreddits and users.

For searches to include NSFW results, the authenticated account must enable
"include not safe for work (NSFW) search results in searches" in its
preferences.

Reddit API docs: https://www.reddit.com/dev/api/#section_search
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Mapping, Sequence, TypeVar
from urllib.parse import urlencode

from .errors import ListingKindError
from .listing import Listing, Posts, Subreddits, Users, decode_listing
from .options import SearchOptionSetter, _set_query, _set_restrict, _set_type, new_search_options

if TYPE_CHECKING:  # pragma: no cover
    from .client import Client, Response

logger = logging.getLogger(__name__)

C = TypeVar("C")


def _project(projection: Callable[[], C], response: Response) -> C:
    try:
        return projection()
    except ListingKindError as exc:
        exc.response = response
        raise


def add_query(path: str, params: Mapping[str, str]) -> str:
    """Append ``params`` to ``path`` as a form-encoded query string with sorted keys."""
    if not params:
        return path
    separator = "&" if "?" in path else "?"
    return f"{path}{separator}{urlencode(sorted(params.items()))}"


class SearchService:
    """Search-related methods of the Reddit API.

    Note: the ``limit`` parameter is prone to inconsistent behaviour, e.g.
    ``limit=1`` sometimes returns nothing when it should.
    """

    def __init__(self, client: Client) -> None:
        self.client = client

    def posts(
        self,
        query: str,
        subreddits: Sequence[str],
        *setters: SearchOptionSetter,
    ) -> tuple[Posts, Response]:
        """Search for posts.

        If ``subreddits`` is empty the search runs against all of Reddit,
        otherwise it is restricted to those subreddits.
        """
        setters = (*setters, _set_type("link"), _set_query(query))

        path = "search"
        if subreddits:
            path = f"r/{'+'.join(subreddits)}/search"
            setters = (*setters, _set_restrict)

        listing, response = self._search(path, setters)
        return _project(listing.posts, response), response

    def subreddits(self, query: str, *setters: SearchOptionSetter) -> tuple[Subreddits, Response]:
        """Search for subreddits.

        The sort and timespan options don't affect the results for this search.
        """
        setters = (*setters, _set_type("sr"), _set_query(query))
        listing, response = self._search("search", setters)
        return _project(listing.subreddits, response), response

    def users(self, query: str, *setters: SearchOptionSetter) -> tuple[Users, Response]:
        """Search for users.

        The sort and timespan options don't affect the results for this search.
        """
        setters = (*setters, _set_type("user"), _set_query(query))
        listing, response = self._search("search", setters)
        return _project(listing.users, response), response

    def _search(self, path: str, setters: Sequence[SearchOptionSetter]) -> tuple[Listing, Response]:
        params = new_search_options(*setters)
        path = add_query(path, params)
        logger.debug("Searching %s", path)

        request = self.client.new_request("GET", path)
        return self.client.do(request, decode_listing)


__all__ = ["SearchService", "add_query"]
