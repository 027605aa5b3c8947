"""
Pytest configuration shared by backend and frontend tests.

The backend refuses to import without DATABASE_URL, so a throwaway SQLite
file is configured before any test module is collected.
"""
import os
import tempfile

_db_dir = tempfile.mkdtemp(prefix="health-assistant-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_db_dir, 'backend.db')}")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.pop("HF_TOKEN", None)
