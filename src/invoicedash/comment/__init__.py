"""
Comment

This module provides the append-only comment store.
"""

from invoicedash.comment.repository import CommentRepository

__all__ = ["CommentRepository"]
