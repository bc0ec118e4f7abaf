from __future__ import annotations

from reddit_search import (
    Client,
    ClientConfig,
    from_the_past_week,
    set_limit,
    sort_by_new,
)


def main() -> None:
    """Demonstrate the Python API by running a small post search and paging once."""
    client = Client(ClientConfig(user_agent="reddit-search-example/0.1"))

    posts, response = client.search.posts(
        "python asyncio",
        ["python", "learnpython"],
        sort_by_new,
        from_the_past_week,
        set_limit(25),
    )
    print(f"{len(posts)} posts (rate limit remaining: {response.rate.remaining})")
    for post in posts:
        print(f"  [{post.subreddit}] {post.title}")

    subreddits, _ = client.search.subreddits("asyncio", set_limit(5))
    for subreddit in subreddits:
        print(f"  r/{subreddit.name} ({subreddit.subscribers} subscribers)")


if __name__ == "__main__":
    main()
