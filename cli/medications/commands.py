# cli/medications/commands.py
import typer
from cli.core.api import (
    ApiError,
    api_list_medications,
    api_search_medications,
    api_create_medication,
    api_delete_medication,
)
from cli.core.utils import SLUG_REGEX, require_token

app = typer.Typer(help="Medication catalog commands.")


def _print_medications(medications: list) -> None:
    if not medications:
        typer.echo("No medications found.")
        return

    typer.echo(f"{'ID':36}  {'Slug':20}  {'Name':24}  {'Status':8}")
    typer.echo("-" * 94)
    for med in medications:
        status = "deleted" if med.get("deletedAt") else "active"
        typer.echo(f"{med['id']:36}  {med['slug'][:20]:20}  {med['name'][:24]:24}  {status:8}")


@app.command("list")
def list_medications(
    include_deleted: bool = typer.Option(False, "--include-deleted", help="Also show deleted medications (Admin only)"),
):
    """
    List medications.
    """
    token = require_token()

    try:
        medications = api_list_medications(token, include_deleted)
    except ApiError as e:
        typer.echo(f"Failed to get medications: {e.detail}")
        raise typer.Exit(code=1)

    _print_medications(medications)


@app.command("search")
def search_medications(query: str = typer.Argument(..., help="Part of the medication name")):
    """
    Search medications by name.
    """
    token = require_token()

    try:
        medications = api_search_medications(token, query)
    except ApiError as e:
        typer.echo(f"Search failed: {e.detail}")
        raise typer.Exit(code=1)

    _print_medications(medications)


@app.command("create")
def create_medication(
    name: str = typer.Argument(..., help="Medication name"),
    slug: str = typer.Argument(..., help="Unique slug, e.g. paracetamol"),
):
    """
    Add a medication to the catalog.
    """
    token = require_token()

    if not SLUG_REGEX.match(slug):
        typer.echo("Invalid slug. Use lowercase letters, digits and single dashes.")
        raise typer.Exit(code=1)

    try:
        api_create_medication(token, name, slug)
    except ApiError as e:
        typer.echo(f"Failed to create medication: {e.detail}")
        raise typer.Exit(code=1)

    typer.echo(f"Medication '{name}' ({slug}) created.")


@app.command("delete")
def delete_medication(
    medication_id: str = typer.Argument(..., help="Medication ID"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
):
    """
    Delete a medication (soft delete). Existing treatments keep referencing it.
    """
    token = require_token()

    if not force:
        confirm = typer.confirm(f"Are you sure you want to delete medication {medication_id}?")
        if not confirm:
            typer.echo("Operation cancelled.")
            raise typer.Exit(code=0)

    try:
        api_delete_medication(token, medication_id)
    except ApiError as e:
        typer.echo(f"Failed to delete medication: {e.detail}")
        raise typer.Exit(code=1)

    typer.echo(f"Medication {medication_id} deleted.")
