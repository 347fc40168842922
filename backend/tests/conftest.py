"""
Shared fixtures for the InvoiceDesk test suite.

Every test gets its own SQLite database file, so nothing needs a running
PostgreSQL server.
"""
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from invoicedesk.db.seed import seed_placeholder_data
from invoicedesk.db.session import Database
from invoicedesk.main import create_app


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def database(tmp_path):
    """Empty schema, no rows."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'invoicedesk.db'}")
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def seeded_database(database):
    """Placeholder customers, invoices, revenue and one user."""
    async with database.session() as session:
        await seed_placeholder_data(session)
    return database


@pytest_asyncio.fixture
async def session(seeded_database):
    async with seeded_database.session() as s:
        yield s


@pytest_asyncio.fixture
async def empty_session(database):
    async with database.session() as s:
        yield s


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def client(seeded_database):
    app = create_app(seeded_database)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
