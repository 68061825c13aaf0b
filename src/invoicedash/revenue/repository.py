from invoicedash import db
from invoicedash.db import QueryResult


class RevenueRepository:
    """
    Repository for the monthly revenue series.
    Encapsulates all SQL and queries for the revenue table.
    """

    async def list(self) -> QueryResult:
        """Get every revenue row, in the store's natural order."""
        return await db.fetch_all("SELECT month, revenue FROM revenue")
