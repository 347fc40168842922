"""Customers: select-box options and the customers table."""
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from invoicedesk.api.deps import get_db
from invoicedesk.schemas.customer import CustomerField, CustomerTableRow
from invoicedesk.services.customer_service import fetch_customers, fetch_filtered_customers

router = APIRouter()


@router.get("", response_model=List[CustomerField])
async def list_customers(db: AsyncSession = Depends(get_db)):
    return await fetch_customers(db)


@router.get("/table", response_model=List[CustomerTableRow])
async def customers_table(query: str = Query(""), db: AsyncSession = Depends(get_db)):
    return await fetch_filtered_customers(db, query)
