import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.sql import func
from invoicedesk.db.base import Base

INVOICE_STATUSES = ("pending", "paid")


class Invoice(Base):
    __tablename__ = "invoices"
    __table_args__ = (
        CheckConstraint("status IN ('pending', 'paid')", name="ck_invoices_status"),
        CheckConstraint("amount > 0", name="ck_invoices_amount_positive"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    customer_id = Column(Uuid, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Integer, nullable=False)  # Minor units (cents)
    status = Column(String(16), nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
