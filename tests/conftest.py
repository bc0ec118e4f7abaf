from __future__ import annotations

from typing import Any

import pytest


def _listing(children: list[dict[str, Any]], *, after: str | None = None, before: str | None = None) -> dict[str, Any]:
    return {
        "kind": "Listing",
        "data": {
            "after": after,
            "before": before,
            "dist": len(children),
            "children": children,
        },
    }


@pytest.fixture
def post_listing_payload() -> dict[str, Any]:
    return _listing(
        [
            {
                "kind": "t3",
                "data": {
                    "id": "abc123",
                    "name": "t3_abc123",
                    "title": "Hello World",
                    "author": "gopher",
                    "author_fullname": "t2_gopher",
                    "subreddit": "golang",
                    "subreddit_name_prefixed": "r/golang",
                    "subreddit_id": "t5_2rc7j",
                    "created_utc": 1700000000.0,
                    "edited": False,
                    "permalink": "/r/golang/comments/abc123/hello_world/",
                    "url": "https://www.reddit.com/r/golang/comments/abc123/hello_world/",
                    "selftext": "Body text",
                    "score": 42,
                    "upvote_ratio": 0.97,
                    "num_comments": 7,
                    "is_self": True,
                    "over_18": False,
                    "spoiler": False,
                    "locked": False,
                    "stickied": False,
                },
            },
            {
                "kind": "t3",
                "data": {
                    "id": "def456",
                    "name": "t3_def456",
                    "title": "Second",
                    "author": "rustacean",
                    "subreddit": "rust",
                    "created_utc": 1700000100,
                    "edited": 1700000200.5,
                    "permalink": "/r/rust/comments/def456/second/",
                    "url_overridden_by_dest": "https://example.com/article",
                    "url": "https://www.reddit.com/r/rust/comments/def456/second/",
                    "score": 3,
                    "num_comments": 0,
                    "over_18": True,
                },
            },
        ],
        after="t3_def456",
    )


@pytest.fixture
def subreddit_listing_payload() -> dict[str, Any]:
    return _listing(
        [
            {
                "kind": "t5",
                "data": {
                    "id": "2rc7j",
                    "name": "t5_2rc7j",
                    "display_name": "golang",
                    "display_name_prefixed": "r/golang",
                    "title": "The Go Programming Language",
                    "public_description": "Ask questions and post articles about Go.",
                    "url": "/r/golang/",
                    "subreddit_type": "public",
                    "created_utc": 1258320093.0,
                    "subscribers": 250000,
                    "active_user_count": None,
                    "suggested_comment_sort": None,
                    "over18": False,
                },
            }
        ],
        after="t5_2rc7j",
    )


@pytest.fixture
def user_listing_payload() -> dict[str, Any]:
    return _listing(
        [
            {
                "kind": "t2",
                "data": {
                    "id": "179965",
                    "name": "spez",
                    "created_utc": 1118030400.0,
                    "link_karma": 180000,
                    "comment_karma": 760000,
                    "is_employee": True,
                    "is_friend": False,
                    "has_verified_email": True,
                    "subreddit": {"display_name": "u_spez", "over_18": False},
                },
            }
        ]
    )


@pytest.fixture
def empty_listing_payload() -> dict[str, Any]:
    return _listing([])
