from __future__ import annotations

import pytest

from reddit_search.errors import ListingDecodeError, ListingKindError
from reddit_search.listing import (
    EmptyListing,
    PostListing,
    Posts,
    SubredditListing,
    Subreddits,
    UserListing,
    Users,
    decode_listing,
)


def test_decode_post_listing(post_listing_payload):
    listing = decode_listing(post_listing_payload)

    assert isinstance(listing, PostListing)
    posts = listing.posts()
    assert isinstance(posts, Posts)
    assert len(posts) == 2
    assert posts.after == "t3_def456"
    assert posts.before is None

    first, second = posts
    assert first.id == "abc123"
    assert first.full_id == "t3_abc123"
    assert first.subreddit == "golang"
    assert first.body == "Body text"
    assert first.edited_utc is None
    assert first.is_self is True
    assert second.url == "https://example.com/article"
    assert second.edited_utc == 1700000200.5
    assert second.nsfw is True
    assert second.created_utc == 1700000100.0


def test_decode_subreddit_listing(subreddit_listing_payload):
    listing = decode_listing(subreddit_listing_payload)

    assert isinstance(listing, SubredditListing)
    subreddits = listing.subreddits()
    assert isinstance(subreddits, Subreddits)
    (golang,) = subreddits
    assert golang.name == "golang"
    assert golang.full_id == "t5_2rc7j"
    assert golang.subscribers == 250000
    assert golang.active_user_count is None
    assert subreddits.after == "t5_2rc7j"


def test_decode_user_listing(user_listing_payload):
    listing = decode_listing(user_listing_payload)

    assert isinstance(listing, UserListing)
    users = listing.users()
    assert isinstance(users, Users)
    (spez,) = users
    assert spez.name == "spez"
    assert spez.full_id == "t2_179965"
    assert spez.post_karma == 180000
    assert spez.comment_karma == 760000
    assert spez.is_employee is True
    assert spez.nsfw is False


def test_empty_listing_projects_to_every_collection(empty_listing_payload):
    listing = decode_listing(empty_listing_payload)

    assert isinstance(listing, EmptyListing)
    for collection in (listing.posts(), listing.subreddits(), listing.users()):
        assert collection is not None
        assert len(collection) == 0
        assert list(collection) == []


def test_empty_listing_keeps_cursors():
    listing = decode_listing({"kind": "Listing", "data": {"children": [], "before": "t3_zzz"}})

    posts = listing.posts()

    assert posts.before == "t3_zzz"
    assert posts.after is None


@pytest.mark.parametrize(
    ("fixture_name", "projection", "expected", "actual"),
    [
        ("post_listing_payload", "users", "user", "post"),
        ("post_listing_payload", "subreddits", "subreddit", "post"),
        ("subreddit_listing_payload", "posts", "post", "subreddit"),
        ("user_listing_payload", "posts", "post", "user"),
    ],
)
def test_mismatched_projection_raises(request, fixture_name, projection, expected, actual):
    listing = decode_listing(request.getfixturevalue(fixture_name))

    with pytest.raises(ListingKindError) as excinfo:
        getattr(listing, projection)()

    assert excinfo.value.expected == expected
    assert excinfo.value.actual == actual


@pytest.mark.parametrize(
    "payload",
    [
        [],
        "Listing",
        {"kind": "t3", "data": {}},
        {"kind": "Listing"},
        {"kind": "Listing", "data": {"children": {"kind": "t3"}}},
        {"kind": "Listing", "data": {"children": [{"kind": "t1", "data": {}}]}},
        {"kind": "Listing", "data": {"children": [{"kind": "t3", "data": None}]}},
    ],
)
def test_decode_rejects_malformed_payloads(payload):
    with pytest.raises(ListingDecodeError):
        decode_listing(payload)


def test_decode_rejects_mixed_thing_kinds(post_listing_payload, user_listing_payload):
    payload = post_listing_payload
    payload["data"]["children"].extend(user_listing_payload["data"]["children"])

    with pytest.raises(ListingDecodeError, match="mixes"):
        decode_listing(payload)


def test_listing_decode_error_is_value_error():
    assert issubclass(ListingDecodeError, ValueError)


def test_decode_treats_non_string_kind_as_unsupported():
    payload = {"kind": "Listing", "data": {"children": [{"kind": ["t3"], "data": {}}]}}

    with pytest.raises(ListingDecodeError, match="Unsupported thing kind"):
        decode_listing(payload)


@pytest.mark.parametrize(
    "thing",
    [
        {"kind": "t3", "data": {"id": "a", "score": {"x": 1}}},
        {"kind": "t5", "data": {"id": "b", "subscribers": "many"}},
        {"kind": "t2", "data": {"id": "c", "link_karma": [1, 2]}},
    ],
)
def test_decode_rejects_fields_of_the_wrong_type(thing):
    payload = {"kind": "Listing", "data": {"children": [thing]}}

    with pytest.raises(ListingDecodeError, match="Malformed thing"):
        decode_listing(payload)
