"""Search commands."""

import rich_click as click

from ._helpers import (
    PLATFORM_CHOICES,
    echo_json,
    parse_filter,
    print_posts,
    print_rate_limit,
    print_search_results,
    run_with_client,
)


@click.command()
@click.argument("query")
@click.option(
    "--platform",
    "-p",
    "platforms",
    multiple=True,
    type=click.Choice(PLATFORM_CHOICES),
    default=PLATFORM_CHOICES,
    show_default=True,
    help="Platform to search (repeatable)",
)
@click.option("--results", "-n", type=int, default=10, help="Results per page, 1-100 (default: 10)")
@click.option("--page", type=int, default=1, help="Page number (default: 1)")
@click.option("--format", "-f", "fmt", type=click.Choice(["table", "json"]), default="table", help="Output format")
def search(query: str, platforms: tuple[str, ...], results: int, page: int, fmt: str):
    """
    Search Reddit and TikTok.

    \b
    EXAMPLES:
      postcrawl search "machine learning"
      postcrawl search "sourdough" -p tiktok -n 25
      postcrawl search "rust async" --page 2 -f json
    """
    hits, rate_limit = run_with_client(
        lambda client: client.search(social_platforms=list(platforms), query=query, results=results, page=page)
    )

    if fmt == "json":
        echo_json(hits)
        return

    print_search_results(hits)
    print_rate_limit(rate_limit)


@click.command("search-extract")
@click.argument("query")
@click.option(
    "--platform",
    "-p",
    "platforms",
    multiple=True,
    type=click.Choice(PLATFORM_CHOICES),
    default=PLATFORM_CHOICES,
    show_default=True,
    help="Platform to search (repeatable)",
)
@click.option("--results", "-n", type=int, default=10, help="Results per page, 1-100 (default: 10)")
@click.option("--page", type=int, default=1, help="Page number (default: 1)")
@click.option("--comments", "-c", "include_comments", is_flag=True, help="Include comments")
@click.option("--mode", "-m", type=click.Choice(["raw", "markdown"]), default="raw", help="Response mode")
@click.option("--filter", "filter_json", help="Comment filter config as a JSON object")
@click.option("--format", "-f", "fmt", type=click.Choice(["brief", "json"]), default="brief", help="Output format")
def search_extract(
    query: str,
    platforms: tuple[str, ...],
    results: int,
    page: int,
    include_comments: bool,
    mode: str,
    filter_json: str | None,
    fmt: str,
):
    """
    Search, then extract every result in one request.

    \b
    EXAMPLES:
      postcrawl search-extract "python tutorial" -p reddit -n 5 --comments
      postcrawl search-extract "recipes" -m markdown -f json
    """
    comment_filter = parse_filter(filter_json)
    posts, rate_limit = run_with_client(
        lambda client: client.search_and_extract(
            social_platforms=list(platforms),
            query=query,
            results=results,
            page=page,
            include_comments=include_comments,
            response_mode=mode,
            comment_filter_config=comment_filter,
        )
    )

    if fmt == "json":
        echo_json(posts)
        return

    print_posts(posts)
    print_rate_limit(rate_limit)
