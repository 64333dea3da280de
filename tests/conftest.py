import os
import tempfile

# Settings are read at import time; these must be in place first.
os.environ.setdefault("JWT_SECRET", "test-secret-do-not-use-in-production")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CLINIC_HOME", tempfile.mkdtemp(prefix="clinic-cli-"))
