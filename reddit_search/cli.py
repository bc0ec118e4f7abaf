"""Command line entry point for reddit-search."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Sequence

from .client import Client, ClientConfig
from .errors import RedditSearchError
from .export import collection_payload, collection_records, save_json, write_csv
from .options import (
    SORT_SETTERS,
    TIME_FILTER_SETTERS,
    SearchOptionSetter,
    set_after,
    set_before,
    set_limit,
)


def _resolve_subreddits(values: Sequence[str]) -> List[str]:
    names: List[str] = []
    for value in values:
        for name in value.split(","):
            name = name.strip()
            if name.lower().startswith("r/"):
                name = name[2:]
            if name:
                names.append(name)
    return names


def _build_setters(args: argparse.Namespace) -> List[SearchOptionSetter]:
    setters: List[SearchOptionSetter] = []
    if args.sort:
        setters.append(SORT_SETTERS[args.sort])
    if args.time_filter:
        setters.append(TIME_FILTER_SETTERS[args.time_filter])
    if args.limit is not None:
        setters.append(set_limit(args.limit))
    if args.after:
        setters.append(set_after(args.after))
    if args.before:
        setters.append(set_before(args.before))
    return setters


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Search Reddit for posts, subreddits or users through the public JSON API. "
            "Sort and time options only affect post searches."
        )
    )
    parser.add_argument(
        "kind",
        choices=["posts", "subreddits", "users"],
        help="Which kind of result to search for.",
    )
    parser.add_argument("query", help="Search query.")
    parser.add_argument(
        "--subreddit",
        dest="subreddits",
        action="append",
        default=[],
        help=(
            "Restrict a post search to this subreddit (without the r/ prefix). "
            "Provide multiple times or comma-separate for several subreddits."
        ),
    )
    parser.add_argument(
        "--sort",
        choices=sorted(SORT_SETTERS),
        default=None,
        help="Result ordering.",
    )
    parser.add_argument(
        "--time",
        dest="time_filter",
        choices=list(TIME_FILTER_SETTERS),
        default=None,
        help="Only return results from this time window.",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Results per page. Note that Reddit sometimes returns nothing for --limit 1.",
    )
    parser.add_argument("--after", default=None, help="Pagination cursor to continue after (e.g. t3_abc).")
    parser.add_argument("--before", default=None, help="Pagination cursor to page backwards from.")
    parser.add_argument(
        "--output-format",
        choices=["json", "csv"],
        default="json",
        help="Format of the written results (default: json).",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="File to write results to. JSON is printed to stdout when omitted.",
    )
    parser.add_argument(
        "--user-agent",
        default=None,
        help="Custom User-Agent header (overrides REDDIT_SEARCH_USER_AGENT).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Request timeout in seconds (overrides REDDIT_SEARCH_TIMEOUT).",
    )
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="Disable TLS certificate verification (only if you trust the network).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging verbosity (default: WARNING).",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)

    log_level = getattr(logging, args.log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        force=True,
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    subreddits = _resolve_subreddits(args.subreddits)
    if subreddits and args.kind != "posts":
        raise SystemExit("--subreddit only applies to post searches")
    if args.output_format == "csv" and args.output is None:
        raise SystemExit("--output is required with --output-format csv")

    try:
        config = ClientConfig.from_env(
            user_agent=args.user_agent,
            timeout=args.timeout,
            verify=False if args.insecure else None,
        )
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    client = Client(config)
    setters = _build_setters(args)

    try:
        if args.kind == "posts":
            results, response = client.search.posts(args.query, subreddits, *setters)
        elif args.kind == "subreddits":
            results, response = client.search.subreddits(args.query, *setters)
        else:
            results, response = client.search.users(args.query, *setters)
    except RedditSearchError as exc:
        print(f"Search failed: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    logging.getLogger(__name__).info(
        "Found %d %s (status=%d, rate-limit remaining=%s)",
        len(results),
        args.kind,
        response.status_code,
        response.rate.remaining,
    )

    if args.output is None:
        print(json.dumps(collection_payload(results), indent=2, ensure_ascii=False))
        return

    output = Path(args.output).expanduser().resolve()
    if args.output_format == "csv":
        rows, fieldnames = collection_records(results)
        write_csv(rows, fieldnames, output)
    else:
        save_json(collection_payload(results), output)


if __name__ == "__main__":
    main()
