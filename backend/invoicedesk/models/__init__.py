from invoicedesk.models.user import User
from invoicedesk.models.customer import Customer
from invoicedesk.models.invoice import Invoice, INVOICE_STATUSES
from invoicedesk.models.revenue import RevenueSnapshot

__all__ = ["User", "Customer", "Invoice", "INVOICE_STATUSES", "RevenueSnapshot"]
