"""Flatten search results into rows and persist them as JSON or CSV."""
from __future__ import annotations

import csv
import json
import logging
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List

from .client import BASE_URL
from .listing import Post, Posts, Subreddit, Subreddits, User, Users

logger = logging.getLogger(__name__)

POST_FIELDS = [
    "rank",
    "post_id",
    "full_id",
    "title",
    "author",
    "subreddit",
    "created_utc",
    "created_iso",
    "score",
    "upvote_ratio",
    "num_comments",
    "permalink",
    "url",
    "selftext",
    "over_18",
]

SUBREDDIT_FIELDS = [
    "rank",
    "subreddit_id",
    "full_id",
    "name",
    "title",
    "subscribers",
    "active_user_count",
    "subreddit_type",
    "created_utc",
    "created_iso",
    "url",
    "description",
    "over_18",
]

USER_FIELDS = [
    "rank",
    "user_id",
    "full_id",
    "name",
    "created_utc",
    "created_iso",
    "post_karma",
    "comment_karma",
    "is_employee",
    "has_verified_email",
    "is_suspended",
]


def format_timestamp(epoch: Any) -> str:
    try:
        return datetime.fromtimestamp(float(epoch), tz=timezone.utc).replace(tzinfo=None).isoformat()
    except (TypeError, ValueError, OverflowError, OSError):
        return ""


def flatten_post_record(post: Post, *, rank: int) -> dict[str, Any]:
    permalink = post.permalink or ""
    if permalink and not permalink.startswith("http"):
        permalink = f"{BASE_URL}{permalink}"

    return {
        "rank": rank,
        "post_id": post.id,
        "full_id": post.full_id,
        "title": post.title,
        "author": post.author or post.author_id,
        "subreddit": post.subreddit,
        "created_utc": post.created_utc,
        "created_iso": format_timestamp(post.created_utc),
        "score": post.score,
        "upvote_ratio": post.upvote_ratio,
        "num_comments": post.num_comments,
        "permalink": permalink,
        "url": post.url or permalink,
        "selftext": post.body,
        "over_18": post.nsfw,
    }


def flatten_subreddit_record(subreddit: Subreddit, *, rank: int) -> dict[str, Any]:
    url = subreddit.url or ""
    if url and not url.startswith("http"):
        url = f"{BASE_URL}{url}"

    return {
        "rank": rank,
        "subreddit_id": subreddit.id,
        "full_id": subreddit.full_id,
        "name": subreddit.name,
        "title": subreddit.title,
        "subscribers": subreddit.subscribers,
        "active_user_count": subreddit.active_user_count,
        "subreddit_type": subreddit.subreddit_type,
        "created_utc": subreddit.created_utc,
        "created_iso": format_timestamp(subreddit.created_utc),
        "url": url,
        "description": subreddit.description,
        "over_18": subreddit.nsfw,
    }


def flatten_user_record(user: User, *, rank: int) -> dict[str, Any]:
    return {
        "rank": rank,
        "user_id": user.id,
        "full_id": user.full_id,
        "name": user.name,
        "created_utc": user.created_utc,
        "created_iso": format_timestamp(user.created_utc),
        "post_karma": user.post_karma,
        "comment_karma": user.comment_karma,
        "is_employee": user.is_employee,
        "has_verified_email": user.has_verified_email,
        "is_suspended": user.is_suspended,
    }


def collection_records(collection: Posts | Subreddits | Users) -> tuple[List[dict[str, Any]], List[str]]:
    """Return the flattened rows of ``collection`` and the matching CSV header."""
    if isinstance(collection, Posts):
        flatten, fieldnames = flatten_post_record, POST_FIELDS
    elif isinstance(collection, Subreddits):
        flatten, fieldnames = flatten_subreddit_record, SUBREDDIT_FIELDS
    elif isinstance(collection, Users):
        flatten, fieldnames = flatten_user_record, USER_FIELDS
    else:
        raise TypeError(f"Unsupported collection type: {type(collection).__name__}")
    rows = [flatten(item, rank=rank) for rank, item in enumerate(collection, start=1)]
    return rows, fieldnames


def collection_payload(collection: Posts | Subreddits | Users) -> dict[str, Any]:
    """JSON-ready representation of a collection, cursors included."""
    return asdict(collection)


def save_json(data: Any, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info("Saved JSON to %s", path)


def write_csv(rows: List[dict[str, Any]], fieldnames: List[str], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as fp:
        writer = csv.DictWriter(fp, fieldnames=fieldnames)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
    logger.info("Wrote %d row(s) to %s", len(rows), path)


__all__ = [
    "collection_payload",
    "collection_records",
    "flatten_post_record",
    "flatten_subreddit_record",
    "flatten_user_record",
    "format_timestamp",
    "save_json",
    "write_csv",
]
