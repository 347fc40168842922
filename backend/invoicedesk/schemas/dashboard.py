from typing import List

from pydantic import BaseModel

from invoicedesk.schemas.invoice import LatestInvoice


class Revenue(BaseModel):
    month: str
    revenue: int

    class Config:
        from_attributes = True


class RevenueChart(BaseModel):
    """Schema for the revenue bar chart"""
    revenue: List[Revenue]
    y_axis_labels: List[str]
    top_label: int


class CardData(BaseModel):
    """Raw aggregates; invoice totals are in cents."""
    number_of_customers: int
    number_of_invoices: int
    total_paid_invoices: int
    total_pending_invoices: int


class Cards(BaseModel):
    number_of_customers: int
    number_of_invoices: int
    total_paid_invoices: str
    total_pending_invoices: str


class Overview(BaseModel):
    revenue: RevenueChart
    latest_invoices: List[LatestInvoice]
    cards: Cards
