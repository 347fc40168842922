"""
Dashboard API: revenue chart, latest invoices and summary cards.
"""
import asyncio
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from invoicedesk.api.deps import get_database, get_db
from invoicedesk.db.session import Database
from invoicedesk.schemas.dashboard import CardData, Cards, Overview, Revenue, RevenueChart
from invoicedesk.schemas.invoice import LatestInvoice
from invoicedesk.services.analytics_service import fetch_card_data, fetch_revenue
from invoicedesk.services.invoice_service import fetch_latest_invoices
from invoicedesk.utils.formatting import format_currency, generate_y_axis

router = APIRouter()


def _chart(revenue: List[Revenue]) -> RevenueChart:
    labels, top_label = generate_y_axis([r.revenue for r in revenue])
    return RevenueChart(revenue=revenue, y_axis_labels=labels, top_label=top_label)


def _cards(data: CardData) -> Cards:
    return Cards(
        number_of_customers=data.number_of_customers,
        number_of_invoices=data.number_of_invoices,
        total_paid_invoices=format_currency(data.total_paid_invoices),
        total_pending_invoices=format_currency(data.total_pending_invoices),
    )


@router.get("/revenue", response_model=RevenueChart)
async def get_revenue(db: AsyncSession = Depends(get_db)):
    return _chart(await fetch_revenue(db))


@router.get("/latest-invoices", response_model=List[LatestInvoice])
async def get_latest_invoices(db: AsyncSession = Depends(get_db)):
    return await fetch_latest_invoices(db)


@router.get("/cards", response_model=Cards)
async def get_cards(db: AsyncSession = Depends(get_db)):
    return _cards(await fetch_card_data(db))


@router.get("/overview", response_model=Overview)
async def get_overview(database: Database = Depends(get_database)):
    """Everything the overview page needs, queried concurrently.

    Each query holds its own pooled connection.
    """

    async def run(query):
        async with database.session() as session:
            return await query(session)

    revenue, latest_invoices, card_data = await asyncio.gather(
        run(fetch_revenue),
        run(fetch_latest_invoices),
        run(fetch_card_data),
    )
    return Overview(
        revenue=_chart(revenue),
        latest_invoices=latest_invoices,
        cards=_cards(card_data),
    )
