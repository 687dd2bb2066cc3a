"""Database management commands."""

import click
from rich.console import Console

from ..client import CouchAPI
from ..client.exceptions import CouchError

console = Console()


@click.group()
def db():
    """Manage databases."""
    pass


@db.command("create")
@click.argument("name")
def create_database(name: str):
    """Create a database."""
    with CouchAPI() as api:
        try:
            api.create_database(name)
        except CouchError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise click.Abort()

    console.print(f"[green]Created database '{name}'[/green]")


@db.command("delete")
@click.argument("name")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def delete_database(name: str, yes: bool):
    """Delete a database and all its documents."""
    if not yes:
        click.confirm(f"Delete database '{name}' and all its documents?", abort=True)

    with CouchAPI() as api:
        try:
            api.delete_database(name)
        except CouchError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise click.Abort()

    console.print(f"[green]Deleted database '{name}'[/green]")
