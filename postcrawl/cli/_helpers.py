"""Shared CLI utilities."""

import asyncio
import json
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import rich_click as click
from rich.markup import escape
from rich.table import Table

from ..client import PostCrawlClient
from ..exceptions import PostCrawlError, RateLimitError, ValidationError
from ..models import (
    ExtractedPost,
    RateLimitInfo,
    RedditPost,
    SearchResult,
    TiktokPost,
    is_reddit_post,
    is_tiktok_post,
)
from ._console import console, err_console

T = TypeVar("T")

PLATFORM_CHOICES = ["reddit", "tiktok"]


def make_client() -> PostCrawlClient:
    """Build a client from the environment and config file."""
    return PostCrawlClient()


def run_with_client(call: Callable[[PostCrawlClient], Awaitable[T]]) -> tuple[T, RateLimitInfo]:
    """Run one async client call, turning PostCrawl errors into a clean CLI exit."""
    try:
        client = make_client()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    async def _run() -> T:
        async with client:
            return await call(client)

    try:
        result = asyncio.run(_run())
    except PostCrawlError as e:
        report_error(e)
        raise SystemExit(1) from e
    return result, client.rate_limit_info


def report_error(error: PostCrawlError) -> None:
    err_console.print(f"[red]Error ({error.kind.value}):[/red] {escape(str(error))}")
    if isinstance(error, ValidationError):
        for detail in error.details:
            err_console.print(f"  {detail.field}: {escape(detail.message)} [dim]({detail.code})[/dim]")
    if isinstance(error, RateLimitError) and error.retry_after is not None:
        err_console.print(f"  Retry after {error.retry_after}s")


def parse_filter(value: str | None) -> dict[str, Any] | None:
    """Parse the --filter option as a JSON object."""
    if not value:
        return None
    try:
        decoded = json.loads(value)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="--filter") from e
    if not isinstance(decoded, dict):
        raise click.BadParameter("must be a JSON object", param_hint="--filter")
    return decoded


def echo_json(items: list[Any]) -> None:
    click.echo(json.dumps([item.model_dump(mode="json") for item in items], indent=2))


def print_rate_limit(info: RateLimitInfo) -> None:
    if info.remaining is None and info.limit is None:
        return
    console.print(f"[dim]Rate limit: {info.remaining}/{info.limit} remaining, resets at {info.reset}[/dim]")


def print_search_results(results: list[SearchResult]) -> None:
    if not results:
        console.print("No results found.")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("Date")
    table.add_column("URL", overflow="fold")

    for i, result in enumerate(results, 1):
        table.add_row(str(i), escape(result.title), escape(result.date), result.url)

    console.print(table)


def _truncate(text: str | None, limit: int) -> str:
    if not text:
        return ""
    text = text.replace("\n", " ")
    return text if len(text) <= limit else text[:limit] + "..."


def print_posts(posts: list[ExtractedPost], comment_count: int = 3) -> None:
    if not posts:
        console.print("No posts extracted.")
        return

    for post in posts:
        console.rule(f"[bold]{post.source}[/bold]")
        console.print(post.url)

        if post.error:
            console.print(f"[red]Error:[/red] {escape(post.error)}")
            continue

        raw = post.raw
        if isinstance(raw, RedditPost) and is_reddit_post(raw):
            console.print(f"r/{raw.subreddit_name} [bold]{escape(raw.title or '')}[/bold]")
            console.print(f"u/{raw.name}  score {raw.score} (+{raw.upvotes} / -{raw.downvotes})  {raw.created_at}")
            if raw.description:
                console.print(escape(_truncate(raw.description, 200)))
        elif isinstance(raw, TiktokPost) and is_tiktok_post(raw):
            console.print(f"@{raw.username}  {raw.likes} likes  {raw.total_comments} comments  {raw.created_at}")
            if raw.description:
                console.print(escape(_truncate(raw.description, 200)))
            if raw.hashtags:
                console.print(" ".join(f"#{tag}" for tag in raw.hashtags))

        if raw is not None and raw.comments:
            console.print(f"[dim]Top comments ({len(raw.comments)} total):[/dim]")
            for comment in raw.comments[:comment_count]:
                score = getattr(comment, "score", None)
                if score is None:
                    score = getattr(comment, "likes", None)
                console.print(f"  - {escape(_truncate(comment.text, 100))} [dim]({score})[/dim]")

        if post.markdown:
            console.print(escape(_truncate(post.markdown, 500)))
