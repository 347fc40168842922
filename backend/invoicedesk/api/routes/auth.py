"""Auth: basic credential lookup. No tokens or sessions are issued."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from invoicedesk.api.deps import get_db
from invoicedesk.core.exceptions import BusinessError
from invoicedesk.schemas.user import UserLogin, UserResponse
from invoicedesk.services.user_service import authenticate

router = APIRouter()


@router.post("/login", response_model=UserResponse)
async def login(data: UserLogin, db: AsyncSession = Depends(get_db)):
    """
    Check an email/password pair.

    Generic error message so callers cannot tell which field was wrong.
    """
    user = await authenticate(db, data.email, data.password)
    if user is None:
        raise BusinessError.unauthorized("Invalid email or password")
    return user
