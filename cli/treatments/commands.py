# cli/treatments/commands.py
from datetime import datetime, timezone
from typing import List, Optional

import typer
from cli.core.api import ApiError, api_list_treatments, api_create_treatment
from cli.core.utils import require_token

app = typer.Typer(help="Treatment commands.")


@app.command("list")
def list_treatments(
    patient_id: Optional[str] = typer.Option(None, "--patient", "-p", help="Only treatments of this patient record ID"),
):
    """
    List treatments.
    """
    token = require_token()

    try:
        treatments = api_list_treatments(token, patient_id)
    except ApiError as e:
        typer.echo(f"Failed to get treatments: {e.detail}")
        raise typer.Exit(code=1)

    if not treatments:
        typer.echo("No treatments found.")
        return

    for t in treatments:
        typer.echo(f"{t['id']}  {t['date'][:10]}  patient={t['patientId']}  cost={t['costOfTreatment']:.2f}")
        typer.echo(f"    options: {', '.join(t['treatmentOptions']) or '-'}")
        typer.echo(f"    medications: {', '.join(t['medications']) or '-'}")


@app.command("create")
def create_treatment(
    patient_id: str = typer.Option(..., "--patient", "-p", help="Patient record ID"),
    options: List[str] = typer.Option([], "--option", "-o", help="Treatment option slug (repeatable)"),
    medications: List[str] = typer.Option([], "--medication", "-m", help="Medication slug (repeatable)"),
    cost: float = typer.Option(..., "--cost", "-c", help="Cost of treatment"),
    date: Optional[datetime] = typer.Option(None, "--date", "-d", help="Date of treatment (default: now)"),
):
    """
    Record a treatment. All slugs must exist in the catalogs.
    """
    token = require_token()

    if cost < 0:
        typer.echo("Cost cannot be negative.")
        raise typer.Exit(code=1)

    treatment_data = {
        "date": (date or datetime.now(timezone.utc)).isoformat(),
        "treatmentOptions": list(options),
        "medications": list(medications),
        "costOfTreatment": cost,
        "patientId": patient_id,
    }

    try:
        treatment = api_create_treatment(token, treatment_data)
    except ApiError as e:
        typer.echo(f"Failed to create treatment: {e.detail}")
        raise typer.Exit(code=1)

    typer.echo(f"Treatment {treatment['id']} created.")
