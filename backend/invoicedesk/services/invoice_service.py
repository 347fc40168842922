"""Invoice reads and writes for the dashboard.

Amounts are stored in cents. Listings format them for display; the edit
form lookup converts them back to dollars.
"""
import math
import uuid
from datetime import datetime, timezone
from typing import Any, List, Mapping, Union

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from invoicedesk.core.audit import AuditLog
from invoicedesk.core.exceptions import NotFoundError, wrap_store_errors
from invoicedesk.models import Customer, Invoice
from invoicedesk.schemas.invoice import (
    InvoiceCreationForm,
    InvoiceDeletionForm,
    InvoiceForm,
    InvoiceTableRow,
    InvoiceUpdateForm,
    LatestInvoice,
    ValidationFailure,
    validate_invoice_creation,
    validate_invoice_deletion,
    validate_invoice_update,
)
from invoicedesk.services.filters import invoice_matches
from invoicedesk.utils.formatting import format_currency, format_date_to_local

ITEMS_PER_PAGE = 6
LATEST_INVOICES_LIMIT = 5


@wrap_store_errors("fetch_latest_invoices", "Failed to fetch the latest invoices.")
async def fetch_latest_invoices(db: AsyncSession) -> List[LatestInvoice]:
    stmt = (
        select(
            Invoice.id,
            Invoice.amount,
            Customer.name,
            Customer.email,
            Customer.image_url,
        )
        .join(Customer, Invoice.customer_id == Customer.id)
        .order_by(Invoice.date.desc())
        .limit(LATEST_INVOICES_LIMIT)
    )
    rows = (await db.execute(stmt)).mappings()
    return [
        LatestInvoice(**{**row, "amount": format_currency(row["amount"])})
        for row in rows
    ]


@wrap_store_errors("fetch_filtered_invoices", "Failed to fetch invoices.")
async def fetch_filtered_invoices(db: AsyncSession, query: str, current_page: int) -> List[InvoiceTableRow]:
    offset = (max(current_page, 1) - 1) * ITEMS_PER_PAGE
    stmt = (
        select(
            Invoice.id,
            Invoice.amount,
            Invoice.date,
            Invoice.status,
            Customer.name,
            Customer.email,
            Customer.image_url,
        )
        .join(Customer, Invoice.customer_id == Customer.id)
        .where(invoice_matches(query))
        # Newest first; id breaks ties so pages never overlap
        .order_by(Invoice.date.desc(), Invoice.id)
        .limit(ITEMS_PER_PAGE)
        .offset(offset)
    )
    rows = (await db.execute(stmt)).mappings()
    return [
        InvoiceTableRow(**row, formatted_date=format_date_to_local(row["date"]))
        for row in rows
    ]


@wrap_store_errors("fetch_invoices_pages", "Failed to fetch total number of invoices.")
async def fetch_invoices_pages(db: AsyncSession, query: str) -> int:
    stmt = (
        select(func.count(Invoice.id))
        .select_from(Invoice)
        .join(Customer, Invoice.customer_id == Customer.id)
        .where(invoice_matches(query))
    )
    count = (await db.execute(stmt)).scalar_one() or 0
    return math.ceil(count / ITEMS_PER_PAGE)


@wrap_store_errors("fetch_invoice_by_id", "Failed to fetch invoice.")
async def fetch_invoice_by_id(db: AsyncSession, invoice_id: uuid.UUID) -> InvoiceForm:
    stmt = select(
        Invoice.id,
        Invoice.customer_id,
        Invoice.amount,
        Invoice.status,
    ).where(Invoice.id == invoice_id)
    row = (await db.execute(stmt)).mappings().first()
    if row is None:
        raise NotFoundError("Invoice", invoice_id)
    # Convert amount from cents to dollars
    return InvoiceForm(**{**row, "amount": row["amount"] / 100})


@wrap_store_errors("save_new_invoice_to_db", "Failed to create invoice.")
async def save_new_invoice_to_db(db: AsyncSession, record: InvoiceCreationForm) -> uuid.UUID:
    invoice_id = uuid.uuid4()
    await db.execute(
        insert(Invoice).values(
            id=invoice_id,
            customer_id=record.customer_id,
            amount=record.amount,
            status=record.status,
            date=datetime.now(timezone.utc),
        )
    )
    await db.commit()
    AuditLog.log_action(
        "create",
        "invoice",
        invoice_id,
        changes={"customer_id": record.customer_id, "amount": record.amount, "status": record.status},
    )
    return invoice_id


@wrap_store_errors("update_invoice_in_db", "Failed to update invoice.")
async def update_invoice_in_db(db: AsyncSession, record: InvoiceUpdateForm) -> uuid.UUID:
    """Overwrite amount, customer and status. Raises NotFoundError if no row has the id."""
    result = await db.execute(
        update(Invoice)
        .where(Invoice.id == record.id)
        .values(customer_id=record.customer_id, amount=record.amount, status=record.status)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        await db.rollback()
        raise NotFoundError("Invoice", record.id)
    await db.commit()
    AuditLog.log_action(
        "update",
        "invoice",
        record.id,
        changes={"customer_id": record.customer_id, "amount": record.amount, "status": record.status},
    )
    return record.id


@wrap_store_errors("delete_invoice_in_db", "Failed to delete invoice.")
async def delete_invoice_in_db(db: AsyncSession, record: InvoiceDeletionForm) -> uuid.UUID:
    """Raises NotFoundError if no row has the id."""
    result = await db.execute(
        delete(Invoice)
        .where(Invoice.id == record.id)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        await db.rollback()
        raise NotFoundError("Invoice", record.id)
    await db.commit()
    AuditLog.log_action("delete", "invoice", record.id)
    return record.id


# Form actions: validate, then persist. A ValidationFailure comes back
# untouched so the form can show field errors; nothing is written.

async def create_invoice(db: AsyncSession, form: Mapping[str, Any]) -> Union[uuid.UUID, ValidationFailure]:
    outcome = validate_invoice_creation(form)
    if isinstance(outcome, ValidationFailure):
        return outcome
    return await save_new_invoice_to_db(db, outcome.record)


async def update_invoice(
    db: AsyncSession, invoice_id: str, form: Mapping[str, Any]
) -> Union[uuid.UUID, ValidationFailure]:
    outcome = validate_invoice_update({**form, "id": invoice_id})
    if isinstance(outcome, ValidationFailure):
        return outcome
    return await update_invoice_in_db(db, outcome.record)


async def delete_invoice(db: AsyncSession, invoice_id: str) -> Union[uuid.UUID, ValidationFailure]:
    outcome = validate_invoice_deletion({"id": invoice_id})
    if isinstance(outcome, ValidationFailure):
        return outcome
    return await delete_invoice_in_db(db, outcome.record)
