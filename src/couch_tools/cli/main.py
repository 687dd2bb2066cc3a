"""Main CLI entry point."""

import logging
from pathlib import Path

import click
from dotenv import load_dotenv
from pydantic import ValidationError

from couch_tools import __version__
from couch_tools.client.config import CouchConfig

# Load .env from cwd
_env_file = Path.cwd() / ".env"
if _env_file.exists():
    load_dotenv(_env_file)


@click.group()
@click.version_option(version=__version__, prog_name="couch")
def cli():
    """Couch CLI - Work with databases and documents on a CouchDB server."""
    try:
        config = CouchConfig()
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration: {e}")

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def setup_cli():
    """Register all commands."""
    from .databases import db
    from .documents import doc

    cli.add_command(db)
    cli.add_command(doc)


setup_cli()


def main():
    """Entry point for couch CLI."""
    cli()


if __name__ == "__main__":
    main()
