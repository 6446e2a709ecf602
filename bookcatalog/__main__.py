import logging
import subprocess
import sys
from pathlib import Path

import uvicorn

from bookcatalog import config


def run_migrations():
    """Run Alembic migrations before starting the server."""
    if config.DATABASE_URL.startswith("sqlite"):
        Path(config.DB_PATH).parent.mkdir(parents=True, exist_ok=True)

    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        capture_output=False,
    )
    if result.returncode != 0:
        sys.exit(1)


def main():
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run_migrations()

    from bookcatalog.app import app

    logging.getLogger(__name__).info("Server is ready at http://%s:%d/graphql", config.HOST, config.PORT)
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
