"""CLI entry point for postcrawl."""

import logging

import rich_click as click

from .. import __version__

# Import command modules under private names; the command objects must not shadow
# the modules, so `import postcrawl.cli.<module>` keeps working.
from . import config_cmd as _config_mod
from . import extract as _extract_mod
from . import search as _search_mod


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log requests and retries to stderr")
def cli(verbose: bool):
    """Search and extract social media content with the PostCrawl API."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Register commands
cli.add_command(_search_mod.search)
cli.add_command(_search_mod.search_extract)
cli.add_command(_extract_mod.extract)
cli.add_command(_config_mod.config)


if __name__ == "__main__":
    cli()
