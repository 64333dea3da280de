import re
import typer

from .session import load_token

EMAIL_REGEX = re.compile(r"^[\w\.+-]+@[\w\.-]+\.\w+$")
SLUG_REGEX = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def validate_password(password: str) -> bool:
    """
    Same rule as the API: at least 6 characters.
    """
    if len(password) < 6:
        typer.echo("Password must be at least 6 characters long.")
        return False
    return True


def require_token() -> str:
    """
    Returns the session token or exits if nobody is logged in.
    """
    token = load_token()
    if not token:
        typer.echo("No active session. Please login first.")
        raise typer.Exit(code=1)
    return token
