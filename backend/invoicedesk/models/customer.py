import uuid

from sqlalchemy import Column, String, Uuid
from invoicedesk.db.base import Base


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False, index=True)
    email = Column(String(255), nullable=False)
    image_url = Column(String(255), nullable=False)
