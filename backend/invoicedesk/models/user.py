import uuid

from sqlalchemy import Column, String, Text, Uuid
from invoicedesk.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    email = Column(Text, nullable=False, unique=True)
    password = Column(Text, nullable=False)  # bcrypt hash
