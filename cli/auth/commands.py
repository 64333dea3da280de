import typer

from cli.core.session import save_session, load_session, clear_token, is_logged_in
from cli.core.api import ApiError, api_login, api_register, api_get_me
from cli.core.utils import EMAIL_REGEX, require_token, validate_password


app = typer.Typer(help="Authentication commands (register, login, logout)")

ROLES = ["ADMIN", "DOCTOR", "NURSE", "STAFF"]


@app.command("register")
def register(
    name: str = typer.Option(..., "--name", "-n", prompt=True, help="Full name"),
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Email"),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True, confirmation_prompt=True),
    role: str = typer.Option(None, "--role", "-r", help="ADMIN, DOCTOR, NURSE or STAFF (default STAFF)"),
):
    """
    Create an account and start a session with it.
    """
    if is_logged_in():
        typer.echo("Session already active. Logout first.")
        raise typer.Exit(code=1)

    if not EMAIL_REGEX.match(email):
        typer.echo("Invalid email.")
        raise typer.Exit(code=1)

    if not validate_password(password):
        raise typer.Exit(code=1)

    if role is not None:
        role = role.upper()
        if role not in ROLES:
            typer.echo(f"Invalid role. Must be one of: {', '.join(ROLES)}")
            raise typer.Exit(code=1)

    try:
        result = api_register(name, email, password, role)
    except ApiError as e:
        typer.echo(f"Registration failed: {e.detail}")
        raise typer.Exit(code=1)

    save_session(result["token"], result["email"], result["role"])
    typer.echo(f"Registered '{result['email']}' as {result['role']}.")


@app.command("login")
def login(
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Email"),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True),
):
    """
    Login to the system. Only allowed if no session is active.
    """
    if is_logged_in():
        typer.echo("Session already active. Logout first to remove current session token.")
        raise typer.Exit(code=1)

    try:
        result = api_login(email, password)
    except ApiError as e:
        typer.echo(f"Login failed: {e.detail}")
        raise typer.Exit(code=1)

    save_session(result["token"], result["email"], result["role"])
    typer.echo(f"Login successful as '{result['email']}' ({result['role']}).")


@app.command("logout")
def logout():
    """
    End session and delete local token. Tokens are stateless, so nothing is sent to the server.
    """
    clear_token()
    typer.echo("Session ended.")


@app.command("whoami")
def whoami():
    """
    Show the account behind the current session.
    """
    token = require_token()
    try:
        me = api_get_me(token)
    except ApiError as e:
        session = load_session() or {}
        typer.echo(f"Could not verify session ({e.detail}). Stored email: {session.get('email')}")
        raise typer.Exit(code=1)

    typer.echo(f"{me['name']} <{me['email']}> - {me['role']}")
