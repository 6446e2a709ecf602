import os
from pathlib import Path

DB_PATH = os.environ.get("BOOKCATALOG_DB_PATH", str(Path.cwd() / "bookcatalog.db"))
DATABASE_URL = os.environ.get("BOOKCATALOG_DATABASE_URL", f"sqlite+aiosqlite:///{DB_PATH}")


def _port(default: int = 4000) -> int:
    raw = os.environ.get("PORT") or os.environ.get("Port")
    try:
        return int(raw) or default
    except (TypeError, ValueError):
        return default


# Server settings
HOST = os.environ.get("BOOKCATALOG_HOST", "0.0.0.0")
PORT = _port()
LOG_LEVEL = os.environ.get("BOOKCATALOG_LOG_LEVEL", "INFO").upper()
GRAPHIQL = os.environ.get("BOOKCATALOG_GRAPHIQL", "true").lower() == "true"
