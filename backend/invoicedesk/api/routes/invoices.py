"""Invoices: filtered listing, edit-form lookup and form-driven writes.

Writes take form-encoded bodies. On success the client is redirected back
to the invoice list; on bad input it gets 422 with per-field messages.
"""
import uuid
from typing import Union

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from invoicedesk.api.deps import get_db
from invoicedesk.core.config import settings
from invoicedesk.schemas.invoice import InvoiceForm, InvoicePage, ValidationFailure
from invoicedesk.services.invoice_service import (
    create_invoice,
    delete_invoice,
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
    update_invoice,
)
from invoicedesk.utils.formatting import generate_pagination

router = APIRouter()


def _after_write(result: Union[uuid.UUID, ValidationFailure]) -> RedirectResponse:
    if isinstance(result, ValidationFailure):
        raise result.to_exception()
    return RedirectResponse(settings.INVOICES_REDIRECT_PATH, status_code=status.HTTP_303_SEE_OTHER)


@router.get("", response_model=InvoicePage)
async def list_invoices(
    query: str = Query("", description="Matches customer name or email, or an exact status"),
    page: int = Query(1, ge=1),
    db: AsyncSession = Depends(get_db),
):
    items = await fetch_filtered_invoices(db, query, page)
    total_pages = await fetch_invoices_pages(db, query)
    return InvoicePage(
        items=items,
        page=page,
        total_pages=total_pages,
        pagination=generate_pagination(page, total_pages),
        query=query or None,
    )


@router.get("/pages")
async def get_invoice_pages(query: str = Query(""), db: AsyncSession = Depends(get_db)):
    return {"total_pages": await fetch_invoices_pages(db, query)}


@router.get("/{invoice_id}", response_model=InvoiceForm)
async def get_invoice(invoice_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    return await fetch_invoice_by_id(db, invoice_id)


@router.post("")
async def create_invoice_from_form(request: Request, db: AsyncSession = Depends(get_db)):
    form = await request.form()
    return _after_write(await create_invoice(db, dict(form)))


@router.put("/{invoice_id}")
async def update_invoice_from_form(invoice_id: str, request: Request, db: AsyncSession = Depends(get_db)):
    form = await request.form()
    return _after_write(await update_invoice(db, invoice_id, dict(form)))


@router.delete("/{invoice_id}")
async def delete_invoice_by_id(invoice_id: str, db: AsyncSession = Depends(get_db)):
    return _after_write(await delete_invoice(db, invoice_id))
