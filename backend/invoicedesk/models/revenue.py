from sqlalchemy import Column, Integer, String
from invoicedesk.db.base import Base


class RevenueSnapshot(Base):
    """Monthly revenue for the dashboard chart. Populated outside this app."""

    __tablename__ = "revenue"

    month = Column(String(4), primary_key=True)
    revenue = Column(Integer, nullable=False)
