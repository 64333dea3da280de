# cli/core/config.py
from pathlib import Path
import os

# Base URL of the clinic API
BASE_URL = os.environ.get("CLINIC_URL", "http://localhost:8000").rstrip("/")

# Request timeout in seconds
TIMEOUT = float(os.environ.get("CLINIC_TIMEOUT", "10"))

# Folder where the CLI keeps local data (token, etc.)
APP_DIR = Path(os.environ.get("CLINIC_HOME", str(Path.home() / ".clinic")))

# File holding the session token
SESSION_FILE = APP_DIR / "session.json"
