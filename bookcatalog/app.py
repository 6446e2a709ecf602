import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from bookcatalog import config
from bookcatalog.database import Database
from bookcatalog.graphql.schema import create_graphql_router
from bookcatalog.routers import books

logger = logging.getLogger(__name__)


def create_app(database: Database | None = None) -> FastAPI:
    """Build the app around ``database``, or a new one on ``config.DATABASE_URL``.

    The lifespan only disposes a database this function created itself.
    """
    owned = database is None
    if database is None:
        database = Database(config.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Book catalog started on %s", database.engine.url.render_as_string(hide_password=True))
        yield
        if owned:
            await database.dispose()

    app = FastAPI(title="Book Catalog", version="0.1.0", lifespan=lifespan)
    app.state.database = database
    app.include_router(books.router)
    app.include_router(create_graphql_router(), prefix="/graphql", tags=["graphql"])

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
