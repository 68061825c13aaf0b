from invoicedash import db
from invoicedash.db import QueryResult

ITEMS_PER_PAGE = 6
LATEST_INVOICES_LIMIT = 5

# Matches an invoice when the search text occurs in any of these columns.
_SEARCH_PREDICATE = """
    customers.name ILIKE %(pattern)s OR
    customers.email ILIKE %(pattern)s OR
    invoices.amount::text ILIKE %(pattern)s OR
    invoices.status ILIKE %(pattern)s
"""


def page_offset(page: int) -> int:
    """Row offset of a 1-indexed page. Pages below 1 read as page 1."""
    return (max(page, 1) - 1) * ITEMS_PER_PAGE


class InvoiceRepository:
    """
    Repository for invoice-related data access.
    Encapsulates all SQL and queries for the invoices table and its
    joins with customers.
    """

    async def get_latest(self, limit: int = LATEST_INVOICES_LIMIT) -> QueryResult:
        """
        Get the most recent invoices with their customer's identity fields.
        Invoices sharing a date are ordered by id.
        """
        return await db.fetch_all(
            """
            SELECT
                invoices.id,
                invoices.amount,
                customers.name,
                customers.email,
                customers.image_url
            FROM invoices
            JOIN customers ON invoices.customer_id = customers.id
            ORDER BY invoices.date DESC, invoices.id
            LIMIT %s
            """,
            (limit,),
        )

    async def count(self) -> QueryResult:
        """Count all invoices."""
        return await db.fetch_one("SELECT COUNT(*) AS count FROM invoices")

    async def get_status_totals(self) -> QueryResult:
        """Sum invoice amounts (minor units) per status: paid and pending."""
        return await db.fetch_one(
            """
            SELECT
                COALESCE(SUM(CASE WHEN status = 'paid' THEN amount ELSE 0 END), 0) AS paid,
                COALESCE(SUM(CASE WHEN status = 'pending' THEN amount ELSE 0 END), 0) AS pending
            FROM invoices
            """
        )

    async def find(self, query: str, page: int = 1) -> QueryResult:
        """
        Get one page of invoices whose customer name, customer email,
        amount or status contains ``query`` (case-insensitive), newest first.
        """
        return await db.fetch_all(
            f"""
            SELECT
                invoices.id,
                invoices.customer_id,
                invoices.amount,
                invoices.date,
                invoices.status,
                customers.name,
                customers.email,
                customers.image_url
            FROM invoices
            JOIN customers ON invoices.customer_id = customers.id
            WHERE {_SEARCH_PREDICATE}
            ORDER BY invoices.date DESC, invoices.id
            LIMIT %(limit)s OFFSET %(offset)s
            """,
            {
                "pattern": db.contains_pattern(query),
                "limit": ITEMS_PER_PAGE,
                "offset": page_offset(page),
            },
        )

    async def count_matching(self, query: str) -> QueryResult:
        """Count the invoices ``find`` would page through for ``query``."""
        return await db.fetch_one(
            f"""
            SELECT COUNT(*) AS count
            FROM invoices
            JOIN customers ON invoices.customer_id = customers.id
            WHERE {_SEARCH_PREDICATE}
            """,
            {"pattern": db.contains_pattern(query)},
        )

    async def get_by_id(self, invoice_id: str) -> QueryResult:
        """Get the editable fields of one invoice, amount in minor units."""
        return await db.fetch_one(
            """
            SELECT id, customer_id, amount, status
            FROM invoices
            WHERE id = %s
            """,
            (invoice_id,),
        )
