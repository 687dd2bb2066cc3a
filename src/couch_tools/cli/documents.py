"""Document management commands."""

import json

import click
from rich.console import Console
from rich.panel import Panel

from ..client import CouchAPI
from ..client.actions import AttachmentContent
from ..client.exceptions import CouchError

console = Console()


@click.group()
def doc():
    """Manage documents."""
    pass


@doc.command("get")
@click.argument("path")
@click.option("--rev", "revision", help="Read this revision instead of the latest")
@click.option("--attachments", is_flag=True, help="Include attachment content")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def get_document(path: str, revision: str | None, attachments: bool, as_json: bool):
    """Get a document by PATH (/db/docid)."""
    with CouchAPI() as api:
        try:
            document = api.read_document(
                path,
                revision=revision,
                attachment_content=AttachmentContent.ALL if attachments else None,
            )
        except CouchError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise click.Abort()

    if as_json:
        console.print_json(json.dumps(document.to_json_body()))
        return

    info = (
        f"[bold]Database:[/bold] {document.database}\n"
        f"[bold]ID:[/bold] {document.id}\n"
        f"[bold]Revision:[/bold] {document.revision}\n"
        f"[bold]Attachments:[/bold] {', '.join(document.attachments) or '-'}"
    )
    console.print(Panel(info, title=f"[cyan]{document.path}[/cyan]"))

    if document.content:
        console.print("\n[bold]Content:[/bold]")
        console.print_json(json.dumps(document.content))


@doc.command("create")
@click.argument("database")
@click.argument("content")
@click.option("--id", "document_id", help="Document id (server assigns one if omitted)")
def create_document(database: str, content: str, document_id: str | None):
    """Create a document in DATABASE from a JSON object CONTENT."""
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Invalid JSON: {e}", param_hint="CONTENT")
    if not isinstance(data, dict):
        raise click.BadParameter("Content must be a JSON object", param_hint="CONTENT")

    with CouchAPI() as api:
        try:
            doc_id, rev = api.create_document(database, data, document_id=document_id)
        except CouchError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise click.Abort()

    console.print(f"[green]Created document[/green] {doc_id} [dim](rev {rev})[/dim]")


@doc.command("delete")
@click.argument("path")
@click.option("--rev", "revision", required=True, help="Current revision of the document")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def delete_document(path: str, revision: str, yes: bool):
    """Delete the document at PATH (/db/docid)."""
    if not yes:
        click.confirm(f"Delete document '{path}'?", abort=True)

    with CouchAPI() as api:
        try:
            rev = api.delete_document(path, revision)
        except CouchError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise click.Abort()

    console.print(f"[green]Deleted document[/green] {path} [dim](rev {rev})[/dim]")
