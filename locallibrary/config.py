import os
from pathlib import Path

DB_PATH = os.environ.get("LOCALLIBRARY_DB_PATH", str(Path.cwd() / "locallibrary.db"))
DATABASE_URL = f"sqlite+aiosqlite:///{DB_PATH}"
DB_ECHO = os.environ.get("LOCALLIBRARY_DB_ECHO", "").lower() in ("1", "true", "yes")

# Genre name bounds, measured after sanitization
GENRE_NAME_MIN = 3
GENRE_NAME_MAX = 100
