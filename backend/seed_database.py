#!/usr/bin/env python
"""Create tables and load placeholder dashboard data into an empty database."""
import asyncio

from invoicedesk.core.config import settings
from invoicedesk.db.init_db import init_db
from invoicedesk.db.session import Database
from invoicedesk.main import configure_logging


async def main():
    database = Database.from_settings(settings)
    try:
        await init_db(database, seed=True)
    finally:
        await database.dispose()


if __name__ == "__main__":
    configure_logging()
    asyncio.run(main())
