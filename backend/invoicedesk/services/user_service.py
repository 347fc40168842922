"""Basic credential lookup for dashboard sign-in."""
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from invoicedesk.core.audit import AuditLog
from invoicedesk.core.exceptions import NotFoundError, wrap_store_errors
from invoicedesk.core.security import verify_password
from invoicedesk.models import User

logger = logging.getLogger(__name__)


@wrap_store_errors("get_user", "Failed to fetch user.")
async def get_user(db: AsyncSession, email: str) -> User:
    user = (await db.execute(select(User).where(User.email == email))).scalar_one_or_none()
    if user is None:
        raise NotFoundError("User", email)
    return user


async def authenticate(db: AsyncSession, email: str, password: str) -> Optional[User]:
    """
    Return the user when the password matches, otherwise None.

    Unknown email and wrong password look the same to the caller.
    """
    try:
        user = await get_user(db, email)
    except NotFoundError:
        logger.info("Sign-in for unknown email")
        AuditLog.log_authentication(email, False, reason="Unknown email")
        return None

    if not verify_password(password, user.password):
        AuditLog.log_authentication(email, False, reason="Invalid password")
        return None

    AuditLog.log_authentication(email, True)
    return user
