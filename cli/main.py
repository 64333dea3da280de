# cli/main.py


import typer
from cli.auth.commands import app as auth_app
from cli.patients.commands import app as patients_app
from cli.medications.commands import app as medications_app
from cli.treatments.commands import app as treatments_app

app = typer.Typer(help="Command line client for the clinic records API.")
app.add_typer(auth_app, name="auth")
app.add_typer(patients_app, name="patients")
app.add_typer(medications_app, name="medications")
app.add_typer(treatments_app, name="treatments")

if __name__ == "__main__":
    app()
