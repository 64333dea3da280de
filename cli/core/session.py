# cli/core/session.py
import json
from typing import Optional

from .config import APP_DIR, SESSION_FILE


def save_session(access_token: str, email: str, role: str) -> None:
    """
    Stores the token (and who it belongs to) in SESSION_FILE.
    """
    APP_DIR.mkdir(parents=True, exist_ok=True)
    data = {"access_token": access_token, "email": email, "role": role}
    with open(SESSION_FILE, "w", encoding="utf-8") as f:
        json.dump(data, f)


def load_session() -> Optional[dict]:
    """
    Reads the session file. Returns None if it is missing or unreadable.
    """
    if not SESSION_FILE.exists():
        return None

    try:
        with open(SESSION_FILE, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError):
        return None


def load_token() -> Optional[str]:
    session = load_session()
    if not session:
        return None
    return session.get("access_token")


def clear_token() -> None:
    """
    Deletes the session file, ending the local session.
    """
    if SESSION_FILE.exists():
        SESSION_FILE.unlink()


def is_logged_in() -> bool:
    return load_token() is not None
