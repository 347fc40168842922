"""Customer listings. Customers are read-only here."""
from typing import List

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from invoicedesk.core.exceptions import wrap_store_errors
from invoicedesk.models import Customer, Invoice
from invoicedesk.schemas.customer import CustomerField, CustomerTableRow
from invoicedesk.services.filters import customer_matches
from invoicedesk.utils.formatting import format_currency


@wrap_store_errors("fetch_customers", "Failed to fetch all customers.")
async def fetch_customers(db: AsyncSession) -> List[CustomerField]:
    stmt = select(Customer.id, Customer.name).order_by(Customer.name.asc())
    rows = (await db.execute(stmt)).mappings()
    return [CustomerField(**row) for row in rows]


def _total_for_status(status: str):
    return func.coalesce(
        func.sum(case((Invoice.status == status, Invoice.amount), else_=0)),
        0,
    )


@wrap_store_errors("fetch_filtered_customers", "Failed to fetch customer table.")
async def fetch_filtered_customers(db: AsyncSession, query: str) -> List[CustomerTableRow]:
    """Matching customers with their invoice count and per-status totals.

    Customers without invoices are included with zero totals.
    """
    stmt = (
        select(
            Customer.id,
            Customer.name,
            Customer.email,
            Customer.image_url,
            func.count(Invoice.id).label("total_invoices"),
            _total_for_status("pending").label("total_pending"),
            _total_for_status("paid").label("total_paid"),
        )
        .select_from(Customer)
        .outerjoin(Invoice, Customer.id == Invoice.customer_id)
        .where(customer_matches(query))
        .group_by(Customer.id, Customer.name, Customer.email, Customer.image_url)
        .order_by(Customer.name.asc())
    )
    rows = (await db.execute(stmt)).mappings()
    return [
        CustomerTableRow(
            **{
                **row,
                "total_pending": format_currency(row["total_pending"]),
                "total_paid": format_currency(row["total_paid"]),
            }
        )
        for row in rows
    ]
