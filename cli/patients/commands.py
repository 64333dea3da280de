# cli/patients/commands.py
import typer
from cli.core.api import ApiError, api_list_patients, api_create_patient, api_delete_patient
from cli.core.utils import require_token

app = typer.Typer(help="Patient commands.")


@app.command("list")
def list_patients():
    """
    List all patients.
    """
    token = require_token()

    try:
        patients = api_list_patients(token)
    except ApiError as e:
        typer.echo(f"Failed to get patients: {e.detail}")
        raise typer.Exit(code=1)

    if not patients:
        typer.echo("No patients found.")
        return

    typer.echo(f"{'ID':36}  {'Patient ID':10}  {'Name':30}")
    typer.echo("-" * 80)
    for patient in patients:
        typer.echo(f"{patient['id']:36}  {patient['patientId']:10}  {patient['name'][:30]:30}")


@app.command("create")
def create_patient(
    name: str = typer.Argument(..., help="Patient name"),
    patient_code: str = typer.Argument(..., help="Clinic patient ID, e.g. P123456"),
):
    """
    Create a new patient.
    """
    token = require_token()

    try:
        patient = api_create_patient(token, name, patient_code)
    except ApiError as e:
        typer.echo(f"Failed to create patient: {e.detail}")
        raise typer.Exit(code=1)

    typer.echo(f"Patient '{patient['name']}' created with ID {patient['id']}.")


@app.command("delete")
def delete_patient(
    patient_id: str = typer.Argument(..., help="Patient record ID"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
):
    """
    Delete a patient (soft delete).
    """
    token = require_token()

    if not force:
        confirm = typer.confirm(f"Are you sure you want to delete patient {patient_id}?")
        if not confirm:
            typer.echo("Operation cancelled.")
            raise typer.Exit(code=0)

    try:
        api_delete_patient(token, patient_id)
    except ApiError as e:
        typer.echo(f"Failed to delete patient: {e.detail}")
        raise typer.Exit(code=1)

    typer.echo(f"Patient {patient_id} deleted.")
