import uuid

from pydantic import BaseModel


class CustomerField(BaseModel):
    id: uuid.UUID
    name: str

    class Config:
        from_attributes = True


class CustomerTableRow(BaseModel):
    id: uuid.UUID
    name: str
    email: str
    image_url: str
    total_invoices: int
    total_pending: str  # formatted currency
    total_paid: str  # formatted currency
