"""Extract command."""

import rich_click as click

from ._helpers import echo_json, parse_filter, print_posts, print_rate_limit, run_with_client


@click.command()
@click.argument("urls", nargs=-1, required=True)
@click.option("--comments", "-c", "include_comments", is_flag=True, help="Include comments")
@click.option("--mode", "-m", type=click.Choice(["raw", "markdown"]), default="raw", help="Response mode")
@click.option("--filter", "filter_json", help="Comment filter config as a JSON object")
@click.option("--format", "-f", "fmt", type=click.Choice(["brief", "json"]), default="brief", help="Output format")
def extract(urls: tuple[str, ...], include_comments: bool, mode: str, filter_json: str | None, fmt: str):
    """
    Extract posts from Reddit or TikTok URLs.

    \b
    EXAMPLES:
      postcrawl extract https://www.reddit.com/r/Python/comments/1ab2c3d/
      postcrawl extract URL1 URL2 --comments --filter '{"max_depth": 2}'
    """
    comment_filter = parse_filter(filter_json)
    posts, rate_limit = run_with_client(
        lambda client: client.extract(
            urls=list(urls),
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
