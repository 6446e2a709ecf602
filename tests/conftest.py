import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from bookcatalog.app import create_app
from bookcatalog.database import Database
from bookcatalog.repository import BookRepository

TEST_DB_URL = "sqlite+aiosqlite://"  # in-memory


@pytest.fixture
async def database():
    db = Database(TEST_DB_URL, poolclass=StaticPool)
    await db.create_all()
    yield db
    await db.drop_all()
    await db.dispose()


@pytest.fixture
async def session(database):
    async with database.session() as s:
        yield s


@pytest.fixture
def repository(session):
    return BookRepository(session)


@pytest.fixture
async def client(database):
    app = create_app(database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def gql(client):
    async def execute(query: str, variables: dict | None = None) -> dict:
        resp = await client.post("/graphql", json={"query": query, "variables": variables or {}})
        assert resp.status_code == 200
        return resp.json()

    return execute
