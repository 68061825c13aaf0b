import math

import structlog

from invoicedash import db
from invoicedash.comment.repository import CommentRepository
from invoicedash.customer.repository import CustomerRepository
from invoicedash.db import QueryResult
from invoicedash.definitions import (
    CardData,
    CustomerField,
    CustomersTable,
    InvoiceForm,
    InvoicesTable,
    LatestInvoice,
    Revenue,
)
from invoicedash.invoice.repository import ITEMS_PER_PAGE, InvoiceRepository
from invoicedash.money import format_currency, to_major_units
from invoicedash.revenue.repository import RevenueRepository

logger = structlog.get_logger(__name__)


def _log_failure(operation: str, result: QueryResult) -> None:
    logger.error(
        "Database error",
        operation=operation,
        error_type=type(result.error).__name__,
        error=str(result.error),
    )


def _count(result: QueryResult) -> int:
    row = result.first or {}
    return int(row.get("count") or 0)


def empty_card_data() -> CardData:
    """Card values shown when the metrics cannot be read."""
    return {
        "numberOfInvoices": 0,
        "numberOfCustomers": 0,
        "totalPaidInvoices": format_currency(0),
        "totalPendingInvoices": format_currency(0),
    }


class DashboardService:
    """
    Read operations behind the dashboard, plus the comment write path.

    Every operation contains store failures: the failure is logged and a
    safe value is returned instead (empty list, zeroed cards, None), so
    callers cannot tell "no data" from "store unavailable".
    """

    def __init__(self):
        self.revenue = RevenueRepository()
        self.invoices = InvoiceRepository()
        self.customers = CustomerRepository()
        self.comments = CommentRepository()

    async def fetch_revenue(self) -> list[Revenue]:
        result = await self.revenue.list()
        if not result.ok:
            _log_failure("fetch_revenue", result)
            return []
        return result.rows

    async def fetch_latest_invoices(self) -> list[LatestInvoice]:
        """The five newest invoices with display-formatted amounts."""
        result = await self.invoices.get_latest()
        if not result.ok:
            _log_failure("fetch_latest_invoices", result)
            return []
        return [{**row, "amount": format_currency(row["amount"])} for row in result.rows]

    async def fetch_card_data(self) -> CardData:
        """
        Summary metrics for the dashboard cards.

        The three queries run concurrently. If any of them fails the whole
        card set falls back to zeros; partial results are never shown.
        """
        invoice_count, customer_count, totals = await db.gather(
            self.invoices.count(),
            self.customers.count(),
            self.invoices.get_status_totals(),
        )

        for result in (invoice_count, customer_count, totals):
            if not result.ok:
                _log_failure("fetch_card_data", result)
                return empty_card_data()

        status = totals.first or {}
        return {
            "numberOfInvoices": _count(invoice_count),
            "numberOfCustomers": _count(customer_count),
            "totalPaidInvoices": format_currency(status.get("paid")),
            "totalPendingInvoices": format_currency(status.get("pending")),
        }

    async def fetch_filtered_invoices(self, query: str, current_page: int) -> list[InvoicesTable]:
        """
        One page (six rows) of invoices matching ``query``, newest first.
        Amounts stay in minor units.
        """
        result = await self.invoices.find(query, current_page)
        if not result.ok:
            _log_failure("fetch_filtered_invoices", result)
            return []
        return result.rows

    async def fetch_invoices_pages(self, query: str) -> int:
        """Number of pages ``fetch_filtered_invoices`` has for ``query``."""
        result = await self.invoices.count_matching(query)
        if not result.ok:
            _log_failure("fetch_invoices_pages", result)
            return 0
        return math.ceil(_count(result) / ITEMS_PER_PAGE)

    async def fetch_invoice_by_id(self, invoice_id: str) -> InvoiceForm | None:
        """Invoice fields for editing, amount in major units; None if unavailable."""
        result = await self.invoices.get_by_id(invoice_id)
        if not result.ok:
            _log_failure("fetch_invoice_by_id", result)
            return None

        invoice = result.first
        if invoice is None:
            logger.info("Invoice not found", invoice_id=invoice_id)
            return None

        return {**invoice, "amount": to_major_units(invoice["amount"])}

    async def fetch_customers(self) -> list[CustomerField]:
        result = await self.customers.list_fields()
        if not result.ok:
            _log_failure("fetch_customers", result)
            return []
        return result.rows

    async def fetch_filtered_customers(self, query: str) -> list[CustomersTable]:
        """Customers matching ``query`` with invoice count and formatted totals."""
        result = await self.customers.find_with_totals(query)
        if not result.ok:
            _log_failure("fetch_filtered_customers", result)
            return []
        return [
            {
                **row,
                "total_invoices": int(row["total_invoices"] or 0),
                "total_pending": format_currency(row["total_pending"]),
                "total_paid": format_currency(row["total_paid"]),
            }
            for row in result.rows
        ]

    async def create_comment(self, comment: str | None) -> None:
        """Append a comment. Empty or missing text is ignored."""
        if not comment:
            logger.debug("Empty comment dropped")
            return

        result = await self.comments.create(comment)
        if not result.ok:
            _log_failure("create_comment", result)
