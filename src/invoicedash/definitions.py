"""
Row shapes returned by the repositories and the dashboard service.

Rows are plain dicts (psycopg ``dict_row``); these TypedDicts document the
keys each query produces.
"""

from datetime import date
from decimal import Decimal
from typing import Literal, TypedDict

InvoiceStatus = Literal["pending", "paid"]


class Revenue(TypedDict):
    month: str
    revenue: int


class LatestInvoice(TypedDict):
    id: str
    name: str
    email: str
    image_url: str
    amount: str


class InvoicesTable(TypedDict):
    id: str
    customer_id: str
    name: str
    email: str
    image_url: str
    date: date
    amount: int
    status: InvoiceStatus


class InvoiceForm(TypedDict):
    id: str
    customer_id: str
    amount: float
    status: InvoiceStatus


class CustomerField(TypedDict):
    id: str
    name: str


class CustomersTableRow(TypedDict):
    """Customer aggregate as returned by the store, totals in minor units."""

    id: str
    name: str
    email: str
    image_url: str
    total_invoices: int
    total_pending: Decimal | int | None
    total_paid: Decimal | int | None


class CustomersTable(TypedDict):
    id: str
    name: str
    email: str
    image_url: str
    total_invoices: int
    total_pending: str
    total_paid: str


class CardData(TypedDict):
    numberOfInvoices: int
    numberOfCustomers: int
    totalPaidInvoices: str
    totalPendingInvoices: str
