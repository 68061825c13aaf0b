from invoicedash import db
from invoicedash.db import QueryResult


class CommentRepository:
    """
    Repository for free-text comments.
    The comments table is append-only; nothing here reads or updates it.
    """

    async def create(self, comment: str) -> QueryResult:
        """Insert one comment row with the text exactly as given."""
        return await db.execute(
            "INSERT INTO comments (comment) VALUES (%s)",
            (comment,),
        )
