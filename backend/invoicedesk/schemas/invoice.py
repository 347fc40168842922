"""Invoice form validation and invoice read models.

Form posts arrive as a flat mapping of field name to string. Validation
returns a tagged outcome instead of raising, so the caller can either
re-render the form with field errors or go on to persist the typed record.

The amount is entered in dollars and leaves the validator in cents; this is
the only place that conversion happens on the write path.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Annotated, Any, Dict, Generic, List, Literal, Mapping, Optional, Type, TypeVar, Union

from pydantic import AfterValidator, BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from invoicedesk.core.exceptions import ValidationError

InvoiceStatus = Literal["pending", "paid"]

FIELD_MESSAGES = {
    "id": "Invalid invoice id.",
    "customerId": "Please select a customer.",
    "amount": "Please enter an amount greater than $0.",
    "status": "Please select an invoice status.",
}

AMOUNT_TOO_LARGE = "Please enter an amount no greater than $21,474,836.47."

CONSTRAINT_MESSAGES = {
    ("amount", "less_than_equal"): AMOUNT_TOO_LARGE,
}


def to_minor_units(value: Decimal) -> int:
    try:
        cents = int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except InvalidOperation as exc:
        raise ValueError("Amount is out of range") from exc
    if cents <= 0:
        raise ValueError("Invoices must have a value greater than 0")
    return cents


# Largest amount the int4 amount column holds, in dollars
MAX_AMOUNT = Decimal("21474836.47")

# Dollars in, cents out
MinorUnits = Annotated[Decimal, Field(gt=0, le=MAX_AMOUNT), AfterValidator(to_minor_units)]


class InvoiceCreationForm(BaseModel):
    customer_id: uuid.UUID = Field(alias="customerId")
    amount: MinorUnits
    status: InvoiceStatus

    class Config:
        extra = "forbid"


class InvoiceUpdateForm(InvoiceCreationForm):
    id: uuid.UUID


class InvoiceDeletionForm(BaseModel):
    id: uuid.UUID

    class Config:
        extra = "forbid"


T = TypeVar("T", bound=BaseModel)


@dataclass(frozen=True)
class ValidationSuccess(Generic[T]):
    record: T
    ok: Literal[True] = True


@dataclass(frozen=True)
class ValidationFailure:
    errors: Dict[str, List[str]]
    ok: Literal[False] = False

    def to_exception(self) -> ValidationError:
        return ValidationError(self.errors)


ValidationOutcome = Union[ValidationSuccess[T], ValidationFailure]


def _field_errors(exc: PydanticValidationError) -> Dict[str, List[str]]:
    errors: Dict[str, List[str]] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "form"
        if err["type"] == "extra_forbidden":
            message = "Unknown field."
        else:
            message = CONSTRAINT_MESSAGES.get((field, err["type"])) or FIELD_MESSAGES.get(field, err["msg"])
        messages = errors.setdefault(field, [])
        if message not in messages:
            messages.append(message)
    return errors


def _validate(model: Type[T], raw: Mapping[str, Any]) -> "ValidationOutcome[T]":
    try:
        return ValidationSuccess(model.model_validate(dict(raw)))
    except PydanticValidationError as exc:
        return ValidationFailure(_field_errors(exc))


def validate_invoice_creation(raw: Mapping[str, Any]) -> "ValidationOutcome[InvoiceCreationForm]":
    return _validate(InvoiceCreationForm, raw)


def validate_invoice_update(raw: Mapping[str, Any]) -> "ValidationOutcome[InvoiceUpdateForm]":
    return _validate(InvoiceUpdateForm, raw)


def validate_invoice_deletion(raw: Mapping[str, Any]) -> "ValidationOutcome[InvoiceDeletionForm]":
    return _validate(InvoiceDeletionForm, raw)


class InvoiceTableRow(BaseModel):
    id: uuid.UUID
    amount: int
    date: datetime
    formatted_date: str  # e.g. "Dec 6, 2022"
    status: str
    name: str
    email: str
    image_url: str

    class Config:
        from_attributes = True


class LatestInvoice(BaseModel):
    id: uuid.UUID
    amount: str  # formatted currency
    name: str
    email: str
    image_url: str


class InvoiceForm(BaseModel):
    """An invoice as the edit form shows it: amount back in dollars."""

    id: uuid.UUID
    customer_id: uuid.UUID
    amount: float
    status: str


class InvoicePage(BaseModel):
    items: List[InvoiceTableRow]
    page: int
    total_pages: int
    pagination: List[Union[int, str]]
    query: Optional[str] = None
