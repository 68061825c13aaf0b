"""
Invoice

This module provides data access for invoices, their listings and totals.
"""

from invoicedash.invoice.repository import (
    ITEMS_PER_PAGE,
    LATEST_INVOICES_LIMIT,
    InvoiceRepository,
    page_offset,
)

__all__ = ["ITEMS_PER_PAGE", "LATEST_INVOICES_LIMIT", "InvoiceRepository", "page_offset"]
