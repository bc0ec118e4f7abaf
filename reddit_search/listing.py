"""Listing envelopes returned by the search endpoint.

Reddit wraps every search response in the same ``Listing`` envelope whose
children are "things" tagged with a kind prefix: ``t3`` for posts, ``t5``
for subreddits and ``t2`` for users. ``decode_listing`` turns the envelope
into one of four variants (post, subreddit, user or empty) and each variant
knows how to project itself into a typed collection. Projecting a listing
into the wrong collection raises ``ListingKindError`` instead of returning
an empty or mistyped result.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Iterator, Union

from .errors import ListingDecodeError, ListingKindError

POST_KIND = "t3"
SUBREDDIT_KIND = "t5"
USER_KIND = "t2"


def _optional_float(value: Any) -> float | None:
    # Reddit reports "edited" as false or as an epoch timestamp.
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(slots=True)
class Post:
    id: str
    full_id: str
    title: str
    author: str | None = None
    author_id: str | None = None
    subreddit: str | None = None
    subreddit_name_prefixed: str | None = None
    subreddit_id: str | None = None
    created_utc: float | None = None
    edited_utc: float | None = None
    permalink: str | None = None
    url: str | None = None
    body: str = ""
    score: int = 0
    upvote_ratio: float | None = None
    num_comments: int = 0
    is_self: bool = False
    nsfw: bool = False
    spoiler: bool = False
    locked: bool = False
    stickied: bool = False

    @classmethod
    def from_data(cls, data: dict[str, Any]) -> "Post":
        post_id = str(data.get("id") or "")
        return cls(
            id=post_id,
            full_id=str(data.get("name") or (f"{POST_KIND}_{post_id}" if post_id else "")),
            title=str(data.get("title") or ""),
            author=data.get("author"),
            author_id=data.get("author_fullname"),
            subreddit=data.get("subreddit"),
            subreddit_name_prefixed=data.get("subreddit_name_prefixed"),
            subreddit_id=data.get("subreddit_id"),
            created_utc=_optional_float(data.get("created_utc")),
            edited_utc=_optional_float(data.get("edited")),
            permalink=data.get("permalink"),
            url=data.get("url_overridden_by_dest") or data.get("url"),
            body=data.get("selftext") or "",
            score=int(data.get("score") or 0),
            upvote_ratio=_optional_float(data.get("upvote_ratio")),
            num_comments=int(data.get("num_comments") or 0),
            is_self=bool(data.get("is_self")),
            nsfw=bool(data.get("over_18")),
            spoiler=bool(data.get("spoiler")),
            locked=bool(data.get("locked")),
            stickied=bool(data.get("stickied")),
        )


@dataclass(slots=True)
class Subreddit:
    id: str
    full_id: str
    name: str
    name_prefixed: str | None = None
    title: str | None = None
    description: str = ""
    url: str | None = None
    subreddit_type: str | None = None
    created_utc: float | None = None
    subscribers: int = 0
    active_user_count: int | None = None
    suggested_comment_sort: str | None = None
    nsfw: bool = False

    @classmethod
    def from_data(cls, data: dict[str, Any]) -> "Subreddit":
        subreddit_id = str(data.get("id") or "")
        active = data.get("active_user_count")
        return cls(
            id=subreddit_id,
            full_id=str(data.get("name") or (f"{SUBREDDIT_KIND}_{subreddit_id}" if subreddit_id else "")),
            name=str(data.get("display_name") or ""),
            name_prefixed=data.get("display_name_prefixed"),
            title=data.get("title"),
            description=data.get("public_description") or "",
            url=data.get("url"),
            subreddit_type=data.get("subreddit_type"),
            created_utc=_optional_float(data.get("created_utc")),
            subscribers=int(data.get("subscribers") or 0),
            active_user_count=int(active) if active is not None else None,
            suggested_comment_sort=data.get("suggested_comment_sort"),
            nsfw=bool(data.get("over18")),
        )


@dataclass(slots=True)
class User:
    id: str
    full_id: str
    name: str
    created_utc: float | None = None
    post_karma: int = 0
    comment_karma: int = 0
    is_employee: bool = False
    is_friend: bool = False
    has_verified_email: bool = False
    is_suspended: bool = False
    nsfw: bool = False

    @classmethod
    def from_data(cls, data: dict[str, Any]) -> "User":
        user_id = str(data.get("id") or "")
        profile = data.get("subreddit") if isinstance(data.get("subreddit"), dict) else {}
        return cls(
            id=user_id,
            full_id=f"{USER_KIND}_{user_id}" if user_id else "",
            name=str(data.get("name") or ""),
            created_utc=_optional_float(data.get("created_utc")),
            post_karma=int(data.get("link_karma") or 0),
            comment_karma=int(data.get("comment_karma") or 0),
            is_employee=bool(data.get("is_employee")),
            is_friend=bool(data.get("is_friend")),
            has_verified_email=bool(data.get("has_verified_email")),
            is_suspended=bool(data.get("is_suspended")),
            nsfw=bool(profile.get("over_18")),
        )


@dataclass(slots=True)
class Posts:
    posts: list[Post] = field(default_factory=list)
    after: str | None = None
    before: str | None = None

    def __iter__(self) -> Iterator[Post]:
        return iter(self.posts)

    def __len__(self) -> int:
        return len(self.posts)


@dataclass(slots=True)
class Subreddits:
    subreddits: list[Subreddit] = field(default_factory=list)
    after: str | None = None
    before: str | None = None

    def __iter__(self) -> Iterator[Subreddit]:
        return iter(self.subreddits)

    def __len__(self) -> int:
        return len(self.subreddits)


@dataclass(slots=True)
class Users:
    users: list[User] = field(default_factory=list)
    after: str | None = None
    before: str | None = None

    def __iter__(self) -> Iterator[User]:
        return iter(self.users)

    def __len__(self) -> int:
        return len(self.users)


@dataclass(slots=True)
class _BaseListing:
    kind: ClassVar[str] = "unknown"

    after: str | None = None
    before: str | None = None

    def posts(self) -> Posts:
        raise ListingKindError("post", self.kind)

    def subreddits(self) -> Subreddits:
        raise ListingKindError("subreddit", self.kind)

    def users(self) -> Users:
        raise ListingKindError("user", self.kind)


@dataclass(slots=True)
class EmptyListing(_BaseListing):
    """A listing with no children; compatible with every projection."""

    kind: ClassVar[str] = "empty"

    def posts(self) -> Posts:
        return Posts(after=self.after, before=self.before)

    def subreddits(self) -> Subreddits:
        return Subreddits(after=self.after, before=self.before)

    def users(self) -> Users:
        return Users(after=self.after, before=self.before)


@dataclass(slots=True)
class PostListing(_BaseListing):
    kind: ClassVar[str] = "post"

    items: list[Post] = field(default_factory=list)

    def posts(self) -> Posts:
        return Posts(posts=list(self.items), after=self.after, before=self.before)


@dataclass(slots=True)
class SubredditListing(_BaseListing):
    kind: ClassVar[str] = "subreddit"

    items: list[Subreddit] = field(default_factory=list)

    def subreddits(self) -> Subreddits:
        return Subreddits(subreddits=list(self.items), after=self.after, before=self.before)


@dataclass(slots=True)
class UserListing(_BaseListing):
    kind: ClassVar[str] = "user"

    items: list[User] = field(default_factory=list)

    def users(self) -> Users:
        return Users(users=list(self.items), after=self.after, before=self.before)


Listing = Union[PostListing, SubredditListing, UserListing, EmptyListing]

_THING_DECODERS: dict[str, tuple[type[_BaseListing], Callable[[dict[str, Any]], Any]]] = {
    POST_KIND: (PostListing, Post.from_data),
    SUBREDDIT_KIND: (SubredditListing, Subreddit.from_data),
    USER_KIND: (UserListing, User.from_data),
}


def _thing_kind(child: Any) -> str | None:
    if not isinstance(child, dict):
        return None
    kind = child.get("kind")
    return kind if isinstance(kind, str) else None


def decode_listing(payload: Any) -> Listing:
    """Decode a raw ``Listing`` JSON payload into a typed listing variant."""
    if not isinstance(payload, dict):
        raise ListingDecodeError(f"Expected a JSON object, got {type(payload).__name__}")
    envelope_kind = payload.get("kind")
    if envelope_kind != "Listing":
        raise ListingDecodeError(f"Expected a Listing envelope, got kind {envelope_kind!r}")
    data = payload.get("data")
    if not isinstance(data, dict):
        raise ListingDecodeError("Listing envelope has no data object")

    children = data.get("children") or []
    if not isinstance(children, list):
        raise ListingDecodeError("Listing children must be a list")
    after = data.get("after") or None
    before = data.get("before") or None

    if not children:
        return EmptyListing(after=after, before=before)

    kinds = {_thing_kind(child) for child in children}
    if len(kinds) > 1:
        raise ListingDecodeError(f"Listing mixes thing kinds: {sorted(map(str, kinds))}")
    thing_kind = kinds.pop()
    try:
        listing_cls, decode_item = _THING_DECODERS[thing_kind]
    except KeyError:
        raise ListingDecodeError(f"Unsupported thing kind in listing: {thing_kind!r}") from None

    items = []
    for child in children:
        child_data = child.get("data")
        if not isinstance(child_data, dict):
            raise ListingDecodeError(f"Thing of kind {thing_kind!r} has no data object")
        try:
            items.append(decode_item(child_data))
        except (TypeError, ValueError) as exc:
            raise ListingDecodeError(f"Malformed thing of kind {thing_kind!r}: {exc}") from exc
    return listing_cls(after=after, before=before, items=items)


__all__ = [
    "EmptyListing",
    "Listing",
    "Post",
    "PostListing",
    "Posts",
    "Subreddit",
    "SubredditListing",
    "Subreddits",
    "User",
    "UserListing",
    "Users",
    "decode_listing",
]
