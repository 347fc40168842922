"""Create all tables. Run on app startup."""
import logging

from sqlalchemy import func, select

from invoicedesk.db.seed import USERS, seed_placeholder_data
from invoicedesk.db.session import Database
from invoicedesk.models import User

logger = logging.getLogger(__name__)


async def init_db(database: Database, seed: bool = False) -> None:
    await database.create_all()

    if not seed:
        return

    async with database.session() as session:
        user_count = await session.scalar(select(func.count()).select_from(User))
        if user_count == 0:
            await seed_placeholder_data(session)
            logger.warning(
                "Seeded placeholder dashboard data. Sign in as %s and change the password.",
                USERS[0]["email"],
            )
