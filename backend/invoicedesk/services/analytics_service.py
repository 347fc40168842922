"""Dashboard aggregates: revenue chart and summary cards."""
from typing import List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from invoicedesk.core.exceptions import wrap_store_errors
from invoicedesk.models import Customer, Invoice, RevenueSnapshot
from invoicedesk.schemas.dashboard import CardData, Revenue


@wrap_store_errors("fetch_revenue", "Failed to fetch revenue data.")
async def fetch_revenue(db: AsyncSession) -> List[Revenue]:
    result = await db.execute(select(RevenueSnapshot.month, RevenueSnapshot.revenue))
    return [Revenue(**row) for row in result.mappings()]


def _invoice_total(status: str):
    return (
        select(func.coalesce(func.sum(Invoice.amount), 0))
        .where(Invoice.status == status)
        .scalar_subquery()
    )


@wrap_store_errors("fetch_card_data", "Failed to fetch card data.")
async def fetch_card_data(db: AsyncSession) -> CardData:
    """All four card aggregates in a single round trip.

    Returns zeros rather than failing when the tables are empty.
    """
    stmt = select(
        select(func.count()).select_from(Customer).scalar_subquery().label("customer_count"),
        select(func.count()).select_from(Invoice).scalar_subquery().label("invoice_count"),
        _invoice_total("paid").label("paid_total"),
        _invoice_total("pending").label("pending_total"),
    )
    row = (await db.execute(stmt)).mappings().first()
    if row is None:
        return CardData(
            number_of_customers=0,
            number_of_invoices=0,
            total_paid_invoices=0,
            total_pending_invoices=0,
        )
    return CardData(
        number_of_customers=row["customer_count"] or 0,
        number_of_invoices=row["invoice_count"] or 0,
        total_paid_invoices=row["paid_total"] or 0,
        total_pending_invoices=row["pending_total"] or 0,
    )
