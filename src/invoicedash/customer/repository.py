from invoicedash import db
from invoicedash.db import QueryResult


class CustomerRepository:
    """
    Repository for customer-related data access.
    Encapsulates all SQL and queries for the customers table.
    """

    async def count(self) -> QueryResult:
        """Count all customers."""
        return await db.fetch_one("SELECT COUNT(*) AS count FROM customers")

    async def list_fields(self) -> QueryResult:
        """Get every customer's id and name, ordered by name."""
        return await db.fetch_all(
            """
            SELECT id, name
            FROM customers
            ORDER BY name ASC
            """
        )

    async def find_with_totals(self, query: str) -> QueryResult:
        """
        Get customers whose name or email contains ``query`` (case-insensitive),
        each with its invoice count and pending/paid amount totals in minor
        units. Customers without invoices are included with zero totals.
        """
        return await db.fetch_all(
            """
            SELECT
                customers.id,
                customers.name,
                customers.email,
                customers.image_url,
                COUNT(invoices.id) AS total_invoices,
                COALESCE(SUM(CASE WHEN invoices.status = 'pending' THEN invoices.amount ELSE 0 END), 0) AS total_pending,
                COALESCE(SUM(CASE WHEN invoices.status = 'paid' THEN invoices.amount ELSE 0 END), 0) AS total_paid
            FROM customers
            LEFT JOIN invoices ON customers.id = invoices.customer_id
            WHERE
                customers.name ILIKE %(pattern)s OR
                customers.email ILIKE %(pattern)s
            GROUP BY
                customers.id,
                customers.name,
                customers.email,
                customers.image_url
            ORDER BY customers.name ASC
            """,
            {"pattern": db.contains_pattern(query)},
        )
