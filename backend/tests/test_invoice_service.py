"""Invoice query layer against a seeded SQLite database."""
import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select

from invoicedesk.core.exceptions import NotFoundError
from invoicedesk.db.seed import CUSTOMERS
from invoicedesk.models import Customer, Invoice
from invoicedesk.schemas.invoice import (
    InvoiceDeletionForm,
    InvoiceUpdateForm,
    ValidationFailure,
)
from invoicedesk.services.invoice_service import (
    ITEMS_PER_PAGE,
    create_invoice,
    delete_invoice,
    delete_invoice_in_db,
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
    fetch_latest_invoices,
    update_invoice,
    update_invoice_in_db,
)

pytestmark = pytest.mark.asyncio

EVIL_RABBIT = str(CUSTOMERS[0]["id"])
DELBA = str(CUSTOMERS[1]["id"])


async def _stored_amount(session, invoice_id):
    return (await session.execute(select(Invoice.amount).where(Invoice.id == invoice_id))).scalar_one()


# ===================================================================
# Listings
# ===================================================================


class TestLatestInvoices:
    async def test_five_newest_with_customer_and_formatted_amount(self, session):
        latest = await fetch_latest_invoices(session)
        assert len(latest) == 5
        assert [i.name for i in latest] == [
            "Michael Novotny",
            "Delba de Oliveira",
            "Balazs Orban",
            "Lee Robinson",
            "Evil Rabbit",
        ]
        assert latest[0].amount == "$448.00"
        assert latest[0].email == "michael@novotny.com"
        assert latest[0].image_url == "/customers/michael-novotny.png"


class TestFilteredInvoices:
    async def test_empty_query_pages_through_everything(self, session):
        first = await fetch_filtered_invoices(session, "", 1)
        second = await fetch_filtered_invoices(session, "", 2)
        third = await fetch_filtered_invoices(session, "", 3)
        assert [len(first), len(second), len(third)] == [6, 6, 1]
        ids = [i.id for i in first + second + third]
        assert len(set(ids)) == 13

    async def test_name_match_is_case_insensitive(self, session):
        rows = await fetch_filtered_invoices(session, "LEE", 1)
        assert {r.name for r in rows} == {"Lee Robinson"}
        assert sorted(r.amount for r in rows) == [1000, 54246]

    async def test_email_substring_matches(self, session):
        rows = await fetch_filtered_invoices(session, "oliveira.com", 1)
        assert len(rows) == 2
        assert {r.email for r in rows} == {"delba@oliveira.com"}

    async def test_status_query_matches_exact_status(self, session):
        pending = await fetch_filtered_invoices(session, "pending", 1)
        assert len(pending) == 5
        assert {r.status for r in pending} == {"pending"}

        paid = await fetch_filtered_invoices(session, "Paid", 2)
        assert len(paid) == 2
        assert {r.status for r in paid} == {"paid"}

    async def test_like_wildcards_are_literal(self, session):
        assert await fetch_filtered_invoices(session, "%", 1) == []
        assert await fetch_filtered_invoices(session, "_", 1) == []

    async def test_no_match(self, session):
        assert await fetch_filtered_invoices(session, "nobody", 1) == []

    async def test_ten_rows_split_six_and_four(self, empty_session):
        customer = Customer(name="Ten Invoices", email="ten@example.com", image_url="/customers/ten.png")
        empty_session.add(customer)
        await empty_session.flush()
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        empty_session.add_all(
            Invoice(customer_id=customer.id, amount=100 * (n + 1), status="paid", date=start + timedelta(days=n))
            for n in range(10)
        )
        await empty_session.commit()

        page_one = await fetch_filtered_invoices(empty_session, "ten", 1)
        page_two = await fetch_filtered_invoices(empty_session, "ten", 2)
        page_three = await fetch_filtered_invoices(empty_session, "ten", 3)

        assert len(page_one) == ITEMS_PER_PAGE
        assert len(page_two) == 4
        assert page_three == []
        assert not {r.id for r in page_one} & {r.id for r in page_two}
        # Newest first
        assert [r.amount for r in page_one] == [1000, 900, 800, 700, 600, 500]
        assert [r.amount for r in page_two] == [400, 300, 200, 100]
        assert page_one[0].formatted_date == "Jan 10, 2024"
        assert page_two[-1].formatted_date == "Jan 1, 2024"
        assert await fetch_invoices_pages(empty_session, "ten") == 2


class TestInvoicesPages:
    async def test_thirteen_rows_make_three_pages(self, session):
        # ceil(13 / 6), dividing the count rather than only the fallback
        assert await fetch_invoices_pages(session, "") == 3

    async def test_pages_follow_the_filter(self, session):
        assert await fetch_invoices_pages(session, "paid") == 2
        assert await fetch_invoices_pages(session, "rabbit") == 1

    async def test_no_matches_means_no_pages(self, session):
        assert await fetch_invoices_pages(session, "nobody") == 0


# ===================================================================
# Writes
# ===================================================================


class TestCreateInvoice:
    async def test_end_to_end_amount_round_trip(self, session):
        invoice_id = await create_invoice(
            session, {"customerId": EVIL_RABBIT, "amount": "49.99", "status": "pending"}
        )
        assert isinstance(invoice_id, uuid.UUID)
        assert await _stored_amount(session, invoice_id) == 4999

        invoice = await fetch_invoice_by_id(session, invoice_id)
        assert invoice.amount == 49.99
        assert invoice.status == "pending"
        assert invoice.customer_id == uuid.UUID(EVIL_RABBIT)

    @pytest.mark.parametrize("amount", ["0.1", "12.50", "999.99", "3"])
    async def test_stored_amount_is_rounded_cents(self, session, amount):
        invoice_id = await create_invoice(session, {"customerId": DELBA, "amount": amount, "status": "paid"})
        stored = await _stored_amount(session, invoice_id)
        assert stored == round(float(amount) * 100)
        assert (await fetch_invoice_by_id(session, invoice_id)).amount == float(amount)

    async def test_new_invoice_is_dated_now(self, session):
        before = datetime.now(timezone.utc).replace(tzinfo=None) - timedelta(seconds=5)
        invoice_id = await create_invoice(session, {"customerId": DELBA, "amount": "5", "status": "paid"})
        stored = (await session.execute(select(Invoice.date).where(Invoice.id == invoice_id))).scalar_one()
        assert stored.replace(tzinfo=None) >= before
        latest = await fetch_latest_invoices(session)
        assert latest[0].id == invoice_id

    async def test_invalid_form_writes_nothing(self, session):
        result = await create_invoice(session, {"customerId": DELBA, "amount": "0", "status": "paid"})
        assert isinstance(result, ValidationFailure)
        assert list(result.errors) == ["amount"]
        assert await fetch_invoices_pages(session, "") == 3


class TestUpdateInvoice:
    async def test_update_changes_amount_customer_and_status(self, session):
        invoice_id = await create_invoice(session, {"customerId": EVIL_RABBIT, "amount": "10", "status": "pending"})

        result = await update_invoice(
            session, str(invoice_id), {"customerId": DELBA, "amount": "20.5", "status": "paid"}
        )
        assert result == invoice_id

        invoice = await fetch_invoice_by_id(session, invoice_id)
        assert invoice.amount == 20.5
        assert invoice.status == "paid"
        assert invoice.customer_id == uuid.UUID(DELBA)

    async def test_update_missing_invoice_fails(self, session):
        record = InvoiceUpdateForm.model_validate(
            {"id": str(uuid.uuid4()), "customerId": DELBA, "amount": "1", "status": "paid"}
        )
        with pytest.raises(NotFoundError):
            await update_invoice_in_db(session, record)

    async def test_update_with_bad_form_returns_failure(self, session):
        result = await update_invoice(session, "not-a-uuid", {"customerId": DELBA, "amount": "-3", "status": "paid"})
        assert set(result.errors) == {"id", "amount"}


class TestDeleteInvoice:
    async def test_delete_removes_row(self, session):
        invoice_id = await create_invoice(session, {"customerId": DELBA, "amount": "7", "status": "paid"})
        assert await delete_invoice(session, str(invoice_id)) == invoice_id
        with pytest.raises(NotFoundError):
            await fetch_invoice_by_id(session, invoice_id)

    async def test_delete_missing_invoice_fails(self, session):
        with pytest.raises(NotFoundError):
            await delete_invoice_in_db(session, InvoiceDeletionForm(id=uuid.uuid4()))
        assert await fetch_invoices_pages(session, "") == 3

    async def test_delete_twice_fails_the_second_time(self, session):
        invoice_id = await create_invoice(session, {"customerId": DELBA, "amount": "7", "status": "paid"})
        await delete_invoice(session, str(invoice_id))
        with pytest.raises(NotFoundError):
            await delete_invoice(session, str(invoice_id))


class TestFetchInvoiceById:
    async def test_unknown_id_raises_not_found(self, session):
        missing = uuid.uuid4()
        with pytest.raises(NotFoundError) as excinfo:
            await fetch_invoice_by_id(session, missing)
        assert excinfo.value.resource == "Invoice"
        assert excinfo.value.key == missing
