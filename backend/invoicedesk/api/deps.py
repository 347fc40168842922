"""FastAPI dependencies: the injected store handle and a scoped session."""
from typing import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from invoicedesk.db.session import Database


def get_database(request: Request) -> Database:
    """The process-wide handle created by the app factory."""
    return request.app.state.database


async def get_db(database: Database = Depends(get_database)) -> AsyncIterator[AsyncSession]:
    """Get database session."""
    async with database.session() as session:
        yield session
