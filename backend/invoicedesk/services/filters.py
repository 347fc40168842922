"""Search predicates shared by the invoice and customer listings."""
from sqlalchemy import or_
from sqlalchemy.sql.elements import ColumnElement

from invoicedesk.models import Customer, Invoice, INVOICE_STATUSES

LIKE_ESCAPE = "!"


def like_pattern(query: str) -> str:
    """Case-insensitive substring pattern with LIKE wildcards in ``query`` escaped."""
    escaped = (
        query.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def customer_matches(query: str) -> ColumnElement:
    pattern = like_pattern(query)
    return or_(
        Customer.name.ilike(pattern, escape=LIKE_ESCAPE),
        Customer.email.ilike(pattern, escape=LIKE_ESCAPE),
    )


def invoice_matches(query: str) -> ColumnElement:
    """Customer name/email substring, or an exact status when the query is one."""
    status = query.strip().lower()
    if status in INVOICE_STATUSES:
        return or_(customer_matches(query), Invoice.status == status)
    return customer_matches(query)
